from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import UserRole
from app.services.decorators import bad_request_on_failure


@bad_request_on_failure
async def list_user_roles(db: AsyncSession) -> list[UserRole]:
    result = await db.execute(select(UserRole).order_by(UserRole.name))
    return list(result.scalars().all())


@bad_request_on_failure
async def get_user_role(db: AsyncSession, name: str) -> UserRole | None:
    return await db.get(UserRole, name)
