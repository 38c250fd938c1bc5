"""
Customer service — CRUD for the Customer aggregate.

A customer optionally references a City and a SocialStatus; both are
eager-loaded with ``selectinload`` on every read so the GraphQL layer
never triggers a lazy load.
"""
import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.database import transaction
from app.errors import BadRequestError, MessageCodeError
from app.models import Customer
from app.pagination import Pagination, word_prefix_filter
from app.schemas import CustomerCreate, CustomerDelete, CustomerUpdate, compose_display_name
from app.services.decorators import bad_request_on_failure, optimistic_locking
from app.services.versioning import delete_versioned, fetch_version, update_versioned

logger = logging.getLogger(__name__)

_RELATIONS = (selectinload(Customer.city), selectinload(Customer.social_status))


def _customer_values(data: CustomerCreate | CustomerUpdate) -> dict:
    return {
        "first_name": data.first_name,
        "second_name": data.second_name,
        "middle_name": data.middle_name,
        "display_name": compose_display_name(data.second_name, data.first_name, data.middle_name),
        "phone": data.phone,
        "email": data.email,
        "note": data.note,
        "city_id": data.city_id,
        "social_status_id": data.social_status_id,
    }


@bad_request_on_failure
async def check_version(db: AsyncSession, customer_id: int) -> int | None:
    return await fetch_version(db, Customer, customer_id)


@bad_request_on_failure
async def get_customer(db: AsyncSession, customer_id: int) -> Customer | None:
    result = await db.execute(
        select(Customer)
        .where(Customer.id == customer_id)
        .options(*_RELATIONS)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


@bad_request_on_failure
async def list_customers(
    db: AsyncSession,
    text_filter: str = "",
    page: int = 1,
    paging: int | None = None,
) -> list[Customer]:
    pagination = Pagination(page, paging)
    q = (
        select(Customer)
        .options(*_RELATIONS)
        .order_by(Customer.display_name.asc(), Customer.id.asc())
        .offset(pagination.offset)
        .limit(pagination.paging)
    )
    condition = word_prefix_filter(Customer.display_name, text_filter)
    if condition is not None:
        q = q.where(condition)
    result = await db.execute(q)
    return list(result.scalars().all())


async def create_customer(db: AsyncSession, data: CustomerCreate) -> Customer:
    customer = Customer(**_customer_values(data))
    try:
        async with transaction(db):
            db.add(customer)
            await db.flush()
    except SQLAlchemyError as exc:
        logger.warning("Unable to create customer: %s", exc)
        raise MessageCodeError("customer:create:unableToCreateCustomer") from exc

    logger.info("Created customer id=%s", customer.id)
    return await get_customer(db, customer.id)


@optimistic_locking(Customer)
async def update_customer(db: AsyncSession, data: CustomerUpdate) -> Customer:
    try:
        async with transaction(db):
            await update_versioned(db, Customer, data.id, data.version, _customer_values(data))
    except SQLAlchemyError as exc:
        logger.warning("Unable to update customer id=%s: %s", data.id, exc)
        raise MessageCodeError("customer:update:unableToUpdateCustomer") from exc
    return await get_customer(db, data.id)


@optimistic_locking(Customer)
async def delete_customer(db: AsyncSession, data: CustomerDelete) -> int:
    try:
        async with transaction(db):
            return await delete_versioned(db, Customer, data.id, data.version)
    except SQLAlchemyError as exc:
        logger.warning("Unable to delete customer id=%s: %s", data.id, exc)
        raise BadRequestError() from exc
