"""
Input normalization and validation helpers.

Pagination and sort parameters are never rejected: out-of-range values are
silently replaced with defaults. File metadata checks raise
``ValidationError`` so callers can map them to a 400 response.
"""

from pathlib import Path
from typing import NamedTuple

DEFAULT_PAGE = 1
DEFAULT_ITEMS_PER_PAGE = 10
MAX_ITEMS_PER_PAGE = 100

MAX_SEARCH_LENGTH = 100
MAX_TITLE_LENGTH = 255
MAX_FILE_SIZE = 100 * 1024 * 1024  # 100MB

ALLOWED_EXTENSIONS = frozenset({".pdf"})
SORT_ORDERS = ("asc", "desc")

_SEARCH_STRIP = ("'", '"', ";", "--")


class ValidationError(ValueError):
    """Raised when user supplied input cannot be accepted."""


class PageQuery(NamedTuple):
    """Normalized pagination and sort parameters for a list query."""

    offset: int
    limit: int
    field: str
    order: str
    page: int
    items_per_page: int


def parse_int(value: str | int | None, default: int) -> int:
    """Parse a query parameter as an integer, falling back to ``default``."""
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def normalize_pagination(page: int, items_per_page: int) -> tuple[int, int]:
    if page < 1:
        page = DEFAULT_PAGE
    if items_per_page < 1 or items_per_page > MAX_ITEMS_PER_PAGE:
        items_per_page = DEFAULT_ITEMS_PER_PAGE
    return page, items_per_page


def normalize_sort(
    sort_by: str | None,
    order: str | None,
    allowed: frozenset[str] | set[str],
    default: str,
) -> tuple[str, str]:
    """
    Validate a sort field against an allow-list and the sort direction.

    Args:
        sort_by: Requested column name.
        order: Requested direction, ``asc`` or ``desc``.
        allowed: Column names that may be sorted on.
        default: Column used when ``sort_by`` is not allowed.

    Returns:
        Tuple of (field, order).
    """
    if sort_by not in allowed:
        sort_by = default
    if order not in SORT_ORDERS:
        order = "desc"
    return sort_by, order


def build_page_query(
    page: int,
    items_per_page: int,
    sort_by: str | None,
    order: str | None,
    allowed: frozenset[str] | set[str],
    default: str,
) -> PageQuery:
    """Combine pagination and sort normalization into a single query spec."""
    page, items_per_page = normalize_pagination(page, items_per_page)
    field, order = normalize_sort(sort_by, order, allowed, default)
    return PageQuery(
        offset=(page - 1) * items_per_page,
        limit=items_per_page,
        field=field,
        order=order,
        page=page,
        items_per_page=items_per_page,
    )


def total_pages(total_items: int, items_per_page: int) -> int:
    return (total_items + items_per_page - 1) // items_per_page


def sanitize_search(query: str | None) -> str:
    """
    Strip quotes, semicolons and comment sequences from a search string.

    The result is still bound as a query parameter; this only keeps
    obviously hostile input out of the filter.
    """
    if not query:
        return ""
    for token in _SEARCH_STRIP:
        query = query.replace(token, "")
    return query.strip()[:MAX_SEARCH_LENGTH]


def validate_file_size(size: int, max_size: int = MAX_FILE_SIZE) -> None:
    if size <= 0:
        raise ValidationError("File size must be greater than 0")
    if size > max_size:
        raise ValidationError(
            f"File size exceeds maximum limit of {max_size} bytes"
        )


def validate_file_extension(filename: str) -> None:
    ext = Path(filename).suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise ValidationError(
            f"File extension {ext or '(none)'} is not allowed; only PDF files are accepted"
        )


def validate_title(title: str) -> str:
    """Return the trimmed title, or raise if it is empty or too long."""
    title = title.strip()
    if not title:
        raise ValidationError("Title cannot be empty")
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(
            f"Title cannot exceed {MAX_TITLE_LENGTH} characters"
        )
    return title


def default_title(filename: str) -> str:
    """Title derived from an uploaded filename: the name minus its extension."""
    return Path(filename).stem
