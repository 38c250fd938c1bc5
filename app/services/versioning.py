"""
Optimistic concurrency primitives.

Every versioned table carries an integer ``version`` column.  Writers
pass the version they read; the statements below only touch the row when
that version is still current, in a single UPDATE/DELETE so that two
concurrent writers cannot both succeed against the same version.
"""
import logging

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import VersionConflictError

logger = logging.getLogger(__name__)


async def fetch_version(db: AsyncSession, model, entity_id: int) -> int | None:
    """Return the stored version of ``model`` row *entity_id*, or None if absent."""
    result = await db.execute(select(model.version).where(model.id == entity_id))
    return result.scalar_one_or_none()


async def update_versioned(
    db: AsyncSession, model, entity_id: int, version: int, values: dict
) -> None:
    """
    Apply *values* to the row only if its version still equals *version*.

    The version is bumped by one in the same statement.  Raises
    ``VersionConflictError`` when no row matched.
    """
    stmt = (
        update(model)
        .where(model.id == entity_id, model.version == version)
        .values(**values, version=model.version + 1)
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    if result.rowcount == 0:
        logger.info("Stale update of %s id=%s at version %s", model.__name__, entity_id, version)
        raise VersionConflictError(model.__name__, entity_id)


async def delete_versioned(db: AsyncSession, model, entity_id: int, version: int) -> int:
    """Delete the row only if its version still equals *version*; return rows deleted."""
    stmt = (
        delete(model)
        .where(model.id == entity_id, model.version == version)
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    if result.rowcount == 0:
        logger.info("Stale delete of %s id=%s at version %s", model.__name__, entity_id, version)
        raise VersionConflictError(model.__name__, entity_id)
    return result.rowcount
