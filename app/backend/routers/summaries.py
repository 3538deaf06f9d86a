"""
Router for summary endpoints.

Handles:
- Listing summaries across all PDFs
- Summary retrieval and deletion
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

# Handle both package imports and standalone imports
try:
    from ..converters import summary_page_to_response, summary_to_response
    from ..models import MessageResponse, SummaryListResponse, SummaryResponse
    from ..repository import (
        DEFAULT_SORT_FIELD,
        SUMMARY_SORT_FIELDS,
        PDFRepository,
        get_repository,
    )
    from ..validation import (
        DEFAULT_ITEMS_PER_PAGE,
        DEFAULT_PAGE,
        build_page_query,
        parse_int,
        sanitize_search,
    )
except ImportError:
    from converters import summary_page_to_response, summary_to_response
    from models import MessageResponse, SummaryListResponse, SummaryResponse
    from repository import (
        DEFAULT_SORT_FIELD,
        SUMMARY_SORT_FIELDS,
        PDFRepository,
        get_repository,
    )
    from validation import (
        DEFAULT_ITEMS_PER_PAGE,
        DEFAULT_PAGE,
        build_page_query,
        parse_int,
        sanitize_search,
    )

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/summaries", tags=["summaries"])


def _parse_summary_id(summary_id: str) -> int:
    try:
        return int(summary_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid summary ID format",
        )


@router.get("", response_model=SummaryListResponse)
async def list_summaries(
    page: str | None = None,
    itemsperpage: str | None = None,
    sort: str | None = None,
    order: str | None = None,
    search: str | None = None,
    repo: PDFRepository = Depends(get_repository),
) -> SummaryListResponse:
    """
    List summaries one page at a time.

    Args:
        page: 1-based page number.
        itemsperpage: Page size (1-100).
        sort: Column to sort by.
        order: ``asc`` or ``desc``.
        search: Case-insensitive substring of the summary text.
        repo: PDF repository.
    """
    query = build_page_query(
        parse_int(page, DEFAULT_PAGE),
        parse_int(itemsperpage, DEFAULT_ITEMS_PER_PAGE),
        sort,
        order,
        SUMMARY_SORT_FIELDS,
        DEFAULT_SORT_FIELD,
    )
    summaries, total = repo.list_summaries(query, sanitize_search(search))
    return summary_page_to_response(summaries, query, total)


@router.get("/{summary_id}", response_model=SummaryResponse)
async def get_summary(
    summary_id: str,
    repo: PDFRepository = Depends(get_repository),
) -> SummaryResponse:
    summary = repo.get_summary(_parse_summary_id(summary_id))
    if not summary:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Summary not found",
        )
    return summary_to_response(summary)


@router.delete("/{summary_id}", response_model=MessageResponse)
async def delete_summary(
    summary_id: str,
    repo: PDFRepository = Depends(get_repository),
) -> MessageResponse:
    summary = repo.get_summary(_parse_summary_id(summary_id))
    if not summary:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Summary not found",
        )

    repo.delete_summary(summary)
    return MessageResponse(message="Summary deleted successfully")
