"""Social status service — reference list of customer social statuses."""
import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import transaction
from app.errors import BadRequestError, MessageCodeError
from app.models import SocialStatus
from app.pagination import Pagination, word_prefix_filter
from app.schemas import SocialStatusCreate, SocialStatusDelete, SocialStatusUpdate
from app.services.decorators import bad_request_on_failure, check_value_unique, optimistic_locking
from app.services.versioning import delete_versioned, fetch_version, update_versioned

logger = logging.getLogger(__name__)

NOT_UNIQUE_SOCIAL_STATUS_NAME = "socialStatus:validate:notUniqueSocialStatusName"


@bad_request_on_failure
async def check_version(db: AsyncSession, social_status_id: int) -> int | None:
    return await fetch_version(db, SocialStatus, social_status_id)


@bad_request_on_failure
async def find_social_status_name(db: AsyncSession, social_status_name: str):
    result = await db.execute(
        select(SocialStatus.id, SocialStatus.social_status_name).where(
            SocialStatus.social_status_name == social_status_name
        )
    )
    return result.first()


@bad_request_on_failure
async def get_social_status(db: AsyncSession, social_status_id: int) -> SocialStatus | None:
    result = await db.execute(
        select(SocialStatus)
        .where(SocialStatus.id == social_status_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


@bad_request_on_failure
async def list_social_statuses(
    db: AsyncSession,
    text_filter: str = "",
    page: int = 1,
    paging: int | None = None,
) -> list[SocialStatus]:
    pagination = Pagination(page, paging)
    q = (
        select(SocialStatus)
        .order_by(SocialStatus.social_status_name.asc(), SocialStatus.id.asc())
        .offset(pagination.offset)
        .limit(pagination.paging)
    )
    condition = word_prefix_filter(SocialStatus.social_status_name, text_filter)
    if condition is not None:
        q = q.where(condition)
    result = await db.execute(q)
    return list(result.scalars().all())


@check_value_unique(find_social_status_name, "social_status_name", NOT_UNIQUE_SOCIAL_STATUS_NAME)
async def create_social_status(db: AsyncSession, data: SocialStatusCreate) -> SocialStatus:
    social_status = SocialStatus(social_status_name=data.social_status_name)
    try:
        async with transaction(db):
            db.add(social_status)
            await db.flush()
    except SQLAlchemyError as exc:
        logger.warning("Unable to create social status: %s", exc)
        raise MessageCodeError("socialStatus:create:unableToCreateSocialStatus") from exc
    return social_status


@optimistic_locking(SocialStatus)
@check_value_unique(find_social_status_name, "social_status_name", NOT_UNIQUE_SOCIAL_STATUS_NAME)
async def update_social_status(db: AsyncSession, data: SocialStatusUpdate) -> SocialStatus:
    try:
        async with transaction(db):
            await update_versioned(
                db,
                SocialStatus,
                data.id,
                data.version,
                {"social_status_name": data.social_status_name},
            )
    except SQLAlchemyError as exc:
        logger.warning("Unable to update social status id=%s: %s", data.id, exc)
        raise MessageCodeError("socialStatus:update:unableToUpdateSocialStatus") from exc
    return await get_social_status(db, data.id)


@optimistic_locking(SocialStatus)
async def delete_social_status(db: AsyncSession, data: SocialStatusDelete) -> int:
    try:
        async with transaction(db):
            return await delete_versioned(db, SocialStatus, data.id, data.version)
    except SQLAlchemyError as exc:
        logger.warning("Unable to delete social status id=%s: %s", data.id, exc)
        raise BadRequestError() from exc
