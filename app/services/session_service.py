"""
Session service — login sessions attached to a User.

Only the pieces the user lifecycle needs live here: issuing a session,
listing a user's sessions, and the bulk delete used when a user is
removed.  ``delete_all_sessions`` deliberately does not commit; it runs
inside the caller's transaction so the user row and its sessions go
together.
"""
import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import transaction
from app.models import Session
from app.services.decorators import bad_request_on_failure


async def create_session(db: AsyncSession, user_id: int) -> Session:
    """Issue a new session with a random token for *user_id*."""
    session = Session(
        user_id=user_id,
        token=secrets.token_urlsafe(48),
        expires_at=datetime.now(timezone.utc) + timedelta(hours=settings.SESSION_TTL_HOURS),
    )
    async with transaction(db):
        db.add(session)
        await db.flush()
    return session


@bad_request_on_failure
async def list_user_sessions(db: AsyncSession, user_id: int) -> list[Session]:
    result = await db.execute(
        select(Session).where(Session.user_id == user_id).order_by(Session.id)
    )
    return list(result.scalars().all())


async def delete_all_sessions(db: AsyncSession, user_id: int) -> int:
    """Delete every session of *user_id* within the current transaction."""
    result = await db.execute(
        delete(Session)
        .where(Session.user_id == user_id)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount
