from sqlalchemy import ColumnElement, func, or_

from app.config import settings


class Pagination:
    """
    Page/size pair shared by every ``*List`` query.

    Attributes
    ----------
    page:
        1-based page number; values below 1 are treated as 1.
    paging:
        Rows per page.  Defaults to ``settings.DEFAULT_PAGE_SIZE`` and is
        clamped to ``[1, settings.MAX_PAGE_SIZE]`` regardless of what the
        caller asked for.
    offset:
        SQL OFFSET derived from *page* and *paging*.
    """

    def __init__(self, page: int = 1, paging: int | None = None) -> None:
        self.page = max(page, 1)
        size = settings.DEFAULT_PAGE_SIZE if paging is None else paging
        self.paging = min(max(size, 1), settings.MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        """SQL OFFSET value computed from the current page and page size."""
        return (self.page - 1) * self.paging


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def word_prefix_filter(column, text: str | None) -> ColumnElement[bool] | None:
    """
    Case-insensitive "starts a word" match of *text* against *column*.

    A row matches when the value begins with *text* or contains it right
    after a space, so ``"iv"`` finds ``"Ivanov Ivan"`` and
    ``"Petrov Ivan"`` but not ``"Ostrovsky"``.  Returns None for an empty
    filter so callers can skip the WHERE clause entirely.
    """
    if not text:
        return None
    needle = _escape_like(text.lower())
    lowered = func.lower(column)
    return or_(
        lowered.like(f"{needle}%", escape="\\"),
        lowered.like(f"% {needle}%", escape="\\"),
    )
