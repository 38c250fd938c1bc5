"""
User service — CRUD and lookups for the User aggregate.

Reads are wrapped by ``bad_request_on_failure`` so any database error
reaches the caller as a generic bad request.  Writes are guarded by the
uniqueness and optimistic-locking decorators and run in their own
transaction; the user delete removes the user's sessions in that same
transaction.
"""
import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import load_only, selectinload

from app.config import settings
from app.database import transaction
from app.errors import BadRequestError, MessageCodeError
from app.models import User
from app.pagination import Pagination, word_prefix_filter
from app.schemas import (
    UserCreate,
    UserDelete,
    UserFindArgs,
    UserUpdate,
    compose_display_name,
)
from app.services import session_service
from app.services.decorators import bad_request_on_failure, check_value_unique, optimistic_locking
from app.services.passwords import hash_password, verify_password
from app.services.versioning import delete_versioned, fetch_version, update_versioned

logger = logging.getLogger(__name__)

NOT_UNIQUE_USER_NAME = "user:validate:notUniqueUserName"

__all__ = [
    "authenticate_user",
    "check_version",
    "create_user",
    "delete_user",
    "find_user",
    "find_user_name",
    "find_user_role",
    "find_users",
    "get_user",
    "hash_password",
    "list_users",
    "update_user",
]


# ---------------------------------------------------------------------------
# Lookups used by authentication and the cross-cutting decorators
# ---------------------------------------------------------------------------

@bad_request_on_failure
async def find_user(db: AsyncSession, username: str) -> User | None:
    """Return the credentials-bearing columns of the user named *username*."""
    result = await db.execute(
        select(User)
        .where(User.username == username)
        .options(load_only(User.id, User.user_role_name, User.username, User.password_hash))
    )
    return result.scalar_one_or_none()


@bad_request_on_failure
async def find_user_role(db: AsyncSession, user_id: int) -> str | None:
    result = await db.execute(select(User.user_role_name).where(User.id == user_id))
    return result.scalar_one_or_none()


@bad_request_on_failure
async def check_version(db: AsyncSession, user_id: int) -> int | None:
    return await fetch_version(db, User, user_id)


@bad_request_on_failure
async def find_user_name(db: AsyncSession, username: str):
    """Return ``(id, username)`` of the user holding *username*, if any."""
    result = await db.execute(select(User.id, User.username).where(User.username == username))
    return result.first()


async def authenticate_user(db: AsyncSession, username: str, password: str) -> User | None:
    """Return the user when *password* matches, otherwise None."""
    user = await find_user(db, username)
    if user is None:
        return None
    if not await verify_password(password, user.password_hash):
        logger.info("Rejected credentials for user id=%s", user.id)
        return None
    return user


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

@bad_request_on_failure
async def get_user(db: AsyncSession, user_id: int) -> User | None:
    """Return the user with its role loaded, or None when it does not exist."""
    q = (
        select(User)
        .where(User.id == user_id)
        .options(selectinload(User.user_role))
        .execution_options(populate_existing=True)
    )
    result = await db.execute(q)
    return result.scalar_one_or_none()


@bad_request_on_failure
async def list_users(
    db: AsyncSession,
    text_filter: str = "",
    page: int = 1,
    paging: int | None = None,
) -> list[User]:
    """
    Return one page of users ordered by display name.

    *text_filter* matches the start of any word of the display name,
    case-insensitively.
    """
    pagination = Pagination(page, paging)
    q = (
        select(User)
        .options(selectinload(User.user_role))
        .order_by(User.display_name.asc(), User.id.asc())
        .offset(pagination.offset)
        .limit(pagination.paging)
    )
    condition = word_prefix_filter(User.display_name, text_filter)
    if condition is not None:
        q = q.where(condition)
    result = await db.execute(q)
    return list(result.scalars().all())


@bad_request_on_failure
async def find_users(db: AsyncSession, data: UserFindArgs) -> list[User]:
    """Return users whose id is in ``data.ids`` or whose username is in ``data.usernames``."""
    conditions = []
    if data.ids:
        conditions.append(User.id.in_(data.ids))
    if data.usernames:
        conditions.append(User.username.in_(data.usernames))
    if not conditions:
        return []

    q = (
        select(User)
        .where(or_(*conditions))
        .options(selectinload(User.user_role))
        .order_by(User.id)
    )
    result = await db.execute(q)
    return list(result.scalars().all())


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

@check_value_unique(find_user_name, "username", NOT_UNIQUE_USER_NAME)
async def create_user(db: AsyncSession, data: UserCreate) -> User:
    password_hash = await hash_password(data.password, settings.BCRYPT_ROUNDS)
    user = User(
        username=data.username,
        password_hash=password_hash,
        first_name=data.first_name,
        second_name=data.second_name,
        middle_name=data.middle_name,
        display_name=compose_display_name(data.second_name, data.first_name, data.middle_name),
        user_role_name=data.user_role_name or settings.DEFAULT_USER_ROLE,
    )
    try:
        async with transaction(db):
            db.add(user)
            await db.flush()
    except SQLAlchemyError as exc:
        logger.warning("Unable to create user: %s", exc)
        raise MessageCodeError("user:create:unableToCreateUser") from exc

    logger.info("Created user id=%s", user.id)
    return await get_user(db, user.id)


@optimistic_locking(User)
@check_value_unique(find_user_name, "username", NOT_UNIQUE_USER_NAME)
async def update_user(db: AsyncSession, data: UserUpdate) -> User:
    """
    Replace the user's profile fields.

    The password is re-hashed only when a new one is supplied and the
    role is kept when ``user_role_name`` is omitted.
    """
    values = {
        "username": data.username,
        "first_name": data.first_name,
        "second_name": data.second_name,
        "middle_name": data.middle_name,
        "display_name": compose_display_name(data.second_name, data.first_name, data.middle_name),
    }
    if data.user_role_name is not None:
        values["user_role_name"] = data.user_role_name
    if data.password is not None:
        values["password_hash"] = await hash_password(data.password, settings.BCRYPT_ROUNDS)

    try:
        async with transaction(db):
            await update_versioned(db, User, data.id, data.version, values)
    except SQLAlchemyError as exc:
        logger.warning("Unable to update user id=%s: %s", data.id, exc)
        raise MessageCodeError("user:update:unableToUpdateUser") from exc

    logger.info("Updated user id=%s", data.id)
    return await get_user(db, data.id)


@optimistic_locking(User)
async def delete_user(db: AsyncSession, data: UserDelete) -> int:
    """
    Delete the user and all of its sessions atomically.

    Sessions go first so the foreign key never points at a missing user;
    if either step fails both are rolled back.
    """
    try:
        async with transaction(db):
            sessions = await session_service.delete_all_sessions(db, data.id)
            deleted = await delete_versioned(db, User, data.id, data.version)
    except SQLAlchemyError as exc:
        logger.warning("Unable to delete user id=%s: %s", data.id, exc)
        raise BadRequestError() from exc

    logger.info("Deleted user id=%s with %d session(s)", data.id, sessions)
    return deleted
