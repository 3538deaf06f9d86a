"""
Conversion of ORM records into API response models.
"""

from collections.abc import Iterable

try:
    from .models import (
        PDFDetailResponse,
        PDFListResponse,
        PDFResponse,
        SummaryListResponse,
        SummaryResponse,
    )
    from .models_db import PDF, Summary
    from .validation import PageQuery, total_pages
except ImportError:
    from models import (
        PDFDetailResponse,
        PDFListResponse,
        PDFResponse,
        SummaryListResponse,
        SummaryResponse,
    )
    from models_db import PDF, Summary
    from validation import PageQuery, total_pages


def pdf_to_response(pdf: PDF) -> PDFResponse:
    return PDFResponse(
        id=pdf.id,
        filename=pdf.filename,
        file_size=pdf.file_size,
        title=pdf.title,
        page_count=pdf.page_count,
        created_at=pdf.created_at,
        updated_at=pdf.updated_at,
    )


def pdfs_to_response(pdfs: Iterable[PDF]) -> list[PDFResponse]:
    return [pdf_to_response(pdf) for pdf in pdfs]


def summary_to_response(summary: Summary) -> SummaryResponse:
    return SummaryResponse(
        id=summary.id,
        style=summary.style,
        content=summary.content,
        pdf_id=summary.pdf_id,
        language=summary.language,
        summary_time=summary.summary_time,
        created_at=summary.created_at,
        updated_at=summary.updated_at,
    )


def summaries_to_response(summaries: Iterable[Summary]) -> list[SummaryResponse]:
    return [summary_to_response(summary) for summary in summaries]


def pdf_to_detail_response(pdf: PDF) -> PDFDetailResponse:
    """Convert a PDF and its loaded summaries to the detail response."""
    return PDFDetailResponse(
        **pdf_to_response(pdf).model_dump(),
        summaries=summaries_to_response(pdf.summaries),
    )


def pdf_page_to_response(
    pdfs: Iterable[PDF], query: PageQuery, total_items: int
) -> PDFListResponse:
    return PDFListResponse(
        data=pdfs_to_response(pdfs),
        page=query.page,
        items_per_page=query.items_per_page,
        total_pages=total_pages(total_items, query.items_per_page),
        total_items=total_items,
    )


def summary_page_to_response(
    summaries: Iterable[Summary], query: PageQuery, total_items: int
) -> SummaryListResponse:
    return SummaryListResponse(
        data=summaries_to_response(summaries),
        page=query.page,
        items_per_page=query.items_per_page,
        total_pages=total_pages(total_items, query.items_per_page),
        total_items=total_items,
    )
