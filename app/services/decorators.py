"""
Cross-cutting checks applied to service functions.

All decorated functions follow the service convention
``async def op(db: AsyncSession, data, ...)`` where *data* is one of the
pydantic input models from ``app.schemas``.
"""
import functools
import logging
from typing import Awaitable, Callable

from sqlalchemy.exc import SQLAlchemyError

from app.errors import BadRequestError, EntityNotFoundError, NotUniqueError, VersionConflictError
from app.services.versioning import fetch_version

logger = logging.getLogger(__name__)


def optimistic_locking(model):
    """
    Reject the call unless ``data.version`` matches the stored row.

    The row's version is re-read by ``data.id`` before the wrapped
    function runs.  A missing row raises ``EntityNotFoundError``; a
    different version raises ``VersionConflictError``.
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(db, data, *args, **kwargs):
            try:
                current = await fetch_version(db, model, data.id)
            except SQLAlchemyError as exc:
                logger.warning("Version lookup failed for %s id=%s: %s", model.__name__, data.id, exc)
                raise BadRequestError() from exc
            if current is None:
                raise EntityNotFoundError(model.__name__, data.id)
            if current != data.version:
                logger.info(
                    "Version mismatch on %s id=%s: stored=%s supplied=%s",
                    model.__name__, data.id, current, data.version,
                )
                raise VersionConflictError(model.__name__, data.id)
            return await func(db, data, *args, **kwargs)

        return wrapper

    return decorator


def check_value_unique(
    finder: Callable[..., Awaitable[object | None]],
    field: str,
    message_code: str,
):
    """
    Reject the call when another row already holds ``data.<field>``.

    *finder* is called as ``finder(db, value)`` and returns a row exposing
    ``id`` or None.  When *data* has an ``id`` (update) a match on that
    same id is not a conflict.  A None value is not checked.
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(db, data, *args, **kwargs):
            value = getattr(data, field)
            if value is not None:
                existing = await finder(db, value)
                if existing is not None and existing.id != getattr(data, "id", None):
                    raise NotUniqueError(message_code)
            return await func(db, data, *args, **kwargs)

        return wrapper

    return decorator


def bad_request_on_failure(func):
    """Turn database errors raised by a read into ``BadRequestError``."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as exc:
            logger.exception("Query %s failed", func.__name__)
            raise BadRequestError() from exc

    return wrapper
