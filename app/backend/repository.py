"""
Persistence interface used by the route handlers.

``PDFRepository`` wraps a SQLAlchemy session so handlers never build
queries themselves. Tests substitute the session (see ``get_db``) to run
the same code against an in-memory database.
"""

import logging

from fastapi import Depends
from sqlalchemy.orm import Query, Session, selectinload

try:
    from .database import get_db
    from .models_db import PDF, Summary, SummaryLanguage, SummaryStyle
    from .validation import PageQuery
except ImportError:
    from database import get_db
    from models_db import PDF, Summary, SummaryLanguage, SummaryStyle
    from validation import PageQuery

logger = logging.getLogger(__name__)

DEFAULT_SORT_FIELD = "created_at"

PDF_SORT_FIELDS = frozenset(
    {"id", "filename", "title", "file_size", "page_count", "created_at", "updated_at"}
)
SUMMARY_SORT_FIELDS = frozenset(
    {"id", "pdf_id", "style", "language", "summary_time", "created_at", "updated_at"}
)


def _apply_page(query: Query, model: type, page: PageQuery) -> Query:
    column = getattr(model, page.field)
    ordering = column.asc() if page.order == "asc" else column.desc()
    # Secondary key keeps page boundaries stable when the sort column ties
    tiebreak = model.id.asc() if page.order == "asc" else model.id.desc()
    return query.order_by(ordering, tiebreak).offset(page.offset).limit(page.limit)


class PDFRepository:
    """Data access for PDF and Summary records."""

    def __init__(self, db: Session):
        self.db = db

    # -------------------------------------------------------------------------
    # PDFs
    # -------------------------------------------------------------------------

    def list_pdfs(self, page: PageQuery, search: str = "") -> tuple[list[PDF], int]:
        """
        Return one page of PDFs and the total number matching ``search``.

        Args:
            page: Normalized pagination and sort parameters.
            search: Sanitized substring matched case-insensitively against titles.
        """
        query = self.db.query(PDF)
        if search:
            query = query.filter(PDF.title.ilike(f"%{search}%"))
        total = query.count()
        items = _apply_page(query, PDF, page).all()
        return items, total

    def get_pdf(self, pdf_id: int, with_summaries: bool = False) -> PDF | None:
        query = self.db.query(PDF)
        if with_summaries:
            query = query.options(selectinload(PDF.summaries))
        return query.filter(PDF.id == pdf_id).first()

    def create_pdf(
        self, filename: str, title: str, file_size: int, page_count: int
    ) -> PDF:
        pdf = PDF(
            filename=filename,
            title=title,
            file_size=file_size,
            page_count=page_count,
        )
        self.db.add(pdf)
        self.db.commit()
        self.db.refresh(pdf)
        logger.info("Created PDF record id=%s (%s)", pdf.id, pdf.filename)
        return pdf

    def delete_pdf(self, pdf: PDF) -> None:
        """Delete a PDF; its summaries go with it."""
        pdf_id = pdf.id
        self.db.delete(pdf)
        self.db.commit()
        logger.info("Deleted PDF record id=%s", pdf_id)

    # -------------------------------------------------------------------------
    # Summaries
    # -------------------------------------------------------------------------

    def list_summaries(
        self, page: PageQuery, search: str = ""
    ) -> tuple[list[Summary], int]:
        query = self.db.query(Summary)
        if search:
            query = query.filter(Summary.content.ilike(f"%{search}%"))
        total = query.count()
        items = _apply_page(query, Summary, page).all()
        return items, total

    def get_summary(self, summary_id: int) -> Summary | None:
        return self.db.query(Summary).filter(Summary.id == summary_id).first()

    def create_summary(
        self,
        pdf_id: int,
        style: SummaryStyle,
        language: SummaryLanguage,
        content: str,
        summary_time: float,
    ) -> Summary:
        summary = Summary(
            pdf_id=pdf_id,
            style=style,
            language=language,
            content=content,
            summary_time=summary_time,
        )
        self.db.add(summary)
        self.db.commit()
        self.db.refresh(summary)
        logger.info("Created summary id=%s for PDF id=%s", summary.id, pdf_id)
        return summary

    def delete_summary(self, summary: Summary) -> None:
        summary_id = summary.id
        self.db.delete(summary)
        self.db.commit()
        logger.info("Deleted summary id=%s", summary_id)

    def rollback(self) -> None:
        self.db.rollback()


def get_repository(db: Session = Depends(get_db)) -> PDFRepository:
    """FastAPI dependency providing a repository bound to the request session."""
    return PDFRepository(db)
