"""
SQLAlchemy database models for the PDF summary application.

This module defines the ORM models for persisting uploaded PDFs and the
AI-generated summaries of them to PostgreSQL.
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    BigInteger,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

# Handle both package imports (FastAPI) and standalone imports (migrations)
try:
    from .database import Base
except ImportError:
    from database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SummaryStyle(str, enum.Enum):
    """Level of detail requested from the summarization service."""

    SHORT = "short"
    GENERAL = "general"
    DETAILED = "detailed"


class SummaryLanguage(str, enum.Enum):
    """Languages the summarization service can write in."""

    ENGLISH = "english"
    INDONESIAN = "indonesian"


class PDF(Base):
    """
    An uploaded PDF document.

    The file itself lives on disk under the upload directory, keyed by
    the generated ``filename``.
    """

    __tablename__ = "pdfs"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    filename: Mapped[str] = mapped_column(
        String(512),
        nullable=False,
        comment="Generated on-disk filename",
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    file_size: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        comment="File size in bytes",
    )
    page_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    # Relationships
    summaries: Mapped[list["Summary"]] = relationship(
        "Summary",
        back_populates="pdf",
        cascade="all, delete-orphan",
        order_by="Summary.created_at",
    )

    def __repr__(self) -> str:
        return f"<PDF(id={self.id}, title='{self.title}', filename='{self.filename}')>"


class Summary(Base):
    """
    A summary of a PDF produced by the external summarization service.
    """

    __tablename__ = "summaries"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    pdf_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(
            "pdfs.id",
            name="fk_summaries_pdf",
            onupdate="CASCADE",
            ondelete="CASCADE",
        ),
        nullable=False,
        index=True,
    )
    style: Mapped[SummaryStyle] = mapped_column(
        Enum(
            SummaryStyle,
            name="summary_style",
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    language: Mapped[SummaryLanguage] = mapped_column(
        Enum(
            SummaryLanguage,
            name="summary_language",
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
    )
    summary_time: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
        comment="Processing time reported by the summarization service, in seconds",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    # Relationships
    pdf: Mapped[PDF] = relationship(
        "PDF",
        back_populates="summaries",
    )

    def __repr__(self) -> str:
        return f"<Summary(id={self.id}, pdf_id={self.pdf_id}, style={self.style.value})>"
