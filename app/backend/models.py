"""
Pydantic models for the PDF summary API.

Defines request bodies, response envelopes, and the shape of the
summarization service's reply.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

try:
    from .models_db import SummaryLanguage, SummaryStyle
    from .validation import MAX_TITLE_LENGTH
except ImportError:
    from models_db import SummaryLanguage, SummaryStyle
    from validation import MAX_TITLE_LENGTH


class MessageResponse(BaseModel):
    """Plain acknowledgement, e.g. for ping and deletes."""

    message: str


class PDFCreateRequest(BaseModel):
    """
    Body of ``POST /pdf`` registering a PDF record directly.

    Attributes:
        filename: On-disk filename of an already stored file.
        file_size: Size of the file in bytes.
        title: Display title.
        page_count: Number of pages, 0 when unknown.
    """

    filename: str = Field(..., min_length=1, max_length=512)
    file_size: int = Field(..., gt=0, description="File size in bytes")
    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    page_count: int = Field(..., ge=0)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title cannot be empty")
        return v


class SummarizeRequest(BaseModel):
    """Body of ``POST /pdf/{id}/summarize``."""

    style: SummaryStyle
    language: SummaryLanguage

    @field_validator("style", "language", mode="before")
    @classmethod
    def lowercase_choice(cls, v: Any) -> Any:
        """Accept enum values regardless of case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


class SummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    style: SummaryStyle
    content: str
    pdf_id: int
    language: SummaryLanguage
    summary_time: float
    created_at: datetime
    updated_at: datetime


class PDFResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    filename: str
    file_size: int
    title: str
    page_count: int
    created_at: datetime
    updated_at: datetime


class PDFDetailResponse(PDFResponse):
    """A PDF together with every summary generated for it."""

    summaries: list[SummaryResponse] = Field(default_factory=list)


class PaginatedResponse(BaseModel):
    """
    Envelope shared by list endpoints.

    Serialized with camelCase pagination keys (``itemsPerPage``,
    ``totalPages``, ``totalItems``).
    """

    model_config = ConfigDict(populate_by_name=True)

    page: int
    items_per_page: int = Field(..., alias="itemsPerPage")
    total_pages: int = Field(..., alias="totalPages")
    total_items: int = Field(..., alias="totalItems")


class PDFListResponse(PaginatedResponse):
    data: list[PDFResponse]


class SummaryListResponse(PaginatedResponse):
    data: list[SummaryResponse]


class SummaryContent(BaseModel):
    model_config = ConfigDict(extra="allow")

    main_summary: str


class ProcessInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    processing_time_seconds: float = 0.0


class SummarizeServiceResponse(BaseModel):
    """
    The parts of the summarization service's reply that get persisted.

    Unknown keys are kept so the reply can be relayed to the client as-is.
    """

    model_config = ConfigDict(extra="allow")

    style: str | None = None
    language: str | None = None
    summary: SummaryContent
    process_info: ProcessInfo = Field(default_factory=ProcessInfo)
