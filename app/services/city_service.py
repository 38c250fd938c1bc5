"""
City service — reference list of cities used by customers.

City names are unique; the check happens before the write so callers get
``city:validate:notUniqueCityName`` instead of a constraint violation.
"""
import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import transaction
from app.errors import BadRequestError, MessageCodeError
from app.models import City
from app.pagination import Pagination, word_prefix_filter
from app.schemas import CityCreate, CityDelete, CityUpdate
from app.services.decorators import bad_request_on_failure, check_value_unique, optimistic_locking
from app.services.versioning import delete_versioned, fetch_version, update_versioned

logger = logging.getLogger(__name__)

NOT_UNIQUE_CITY_NAME = "city:validate:notUniqueCityName"


@bad_request_on_failure
async def check_version(db: AsyncSession, city_id: int) -> int | None:
    return await fetch_version(db, City, city_id)


@bad_request_on_failure
async def find_city_name(db: AsyncSession, city_name: str):
    result = await db.execute(select(City.id, City.city_name).where(City.city_name == city_name))
    return result.first()


@bad_request_on_failure
async def get_city(db: AsyncSession, city_id: int) -> City | None:
    result = await db.execute(
        select(City).where(City.id == city_id).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


@bad_request_on_failure
async def list_cities(
    db: AsyncSession,
    text_filter: str = "",
    page: int = 1,
    paging: int | None = None,
) -> list[City]:
    pagination = Pagination(page, paging)
    q = (
        select(City)
        .order_by(City.city_name.asc(), City.id.asc())
        .offset(pagination.offset)
        .limit(pagination.paging)
    )
    condition = word_prefix_filter(City.city_name, text_filter)
    if condition is not None:
        q = q.where(condition)
    result = await db.execute(q)
    return list(result.scalars().all())


@check_value_unique(find_city_name, "city_name", NOT_UNIQUE_CITY_NAME)
async def create_city(db: AsyncSession, data: CityCreate) -> City:
    city = City(city_name=data.city_name)
    try:
        async with transaction(db):
            db.add(city)
            await db.flush()
    except SQLAlchemyError as exc:
        logger.warning("Unable to create city: %s", exc)
        raise MessageCodeError("city:create:unableToCreateCity") from exc
    return city


@optimistic_locking(City)
@check_value_unique(find_city_name, "city_name", NOT_UNIQUE_CITY_NAME)
async def update_city(db: AsyncSession, data: CityUpdate) -> City:
    try:
        async with transaction(db):
            await update_versioned(db, City, data.id, data.version, {"city_name": data.city_name})
    except SQLAlchemyError as exc:
        logger.warning("Unable to update city id=%s: %s", data.id, exc)
        raise MessageCodeError("city:update:unableToUpdateCity") from exc
    return await get_city(db, data.id)


@optimistic_locking(City)
async def delete_city(db: AsyncSession, data: CityDelete) -> int:
    try:
        async with transaction(db):
            return await delete_versioned(db, City, data.id, data.version)
    except SQLAlchemyError as exc:
        # Most likely still referenced by a customer.
        logger.warning("Unable to delete city id=%s: %s", data.id, exc)
        raise BadRequestError() from exc
