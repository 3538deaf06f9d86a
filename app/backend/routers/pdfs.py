"""
Router for PDF endpoints.

Handles:
- Listing, creating, retrieving and deleting PDF records
- File upload
- Summarization through the external summarization service
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError

# Handle both package imports and standalone imports
try:
    from ..config import get_settings
    from ..converters import pdf_page_to_response, pdf_to_detail_response, pdf_to_response
    from ..models import (
        MessageResponse,
        PDFCreateRequest,
        PDFDetailResponse,
        PDFListResponse,
        PDFResponse,
        SummarizeRequest,
    )
    from ..models_db import SummaryLanguage, SummaryStyle
    from ..repository import DEFAULT_SORT_FIELD, PDF_SORT_FIELDS, PDFRepository, get_repository
    from ..services.pdf_service import PDFService, get_pdf_service
    from ..services.storage_service import StorageError, UploadStorage, get_storage
    from ..services.summarizer import SummarizerClient, get_summarizer_client
    from ..validation import (
        DEFAULT_ITEMS_PER_PAGE,
        DEFAULT_PAGE,
        ValidationError,
        build_page_query,
        default_title,
        parse_int,
        sanitize_search,
        validate_file_extension,
        validate_file_size,
        validate_title,
    )
except ImportError:
    from config import get_settings
    from converters import pdf_page_to_response, pdf_to_detail_response, pdf_to_response
    from models import (
        MessageResponse,
        PDFCreateRequest,
        PDFDetailResponse,
        PDFListResponse,
        PDFResponse,
        SummarizeRequest,
    )
    from models_db import SummaryLanguage, SummaryStyle
    from repository import DEFAULT_SORT_FIELD, PDF_SORT_FIELDS, PDFRepository, get_repository
    from services.pdf_service import PDFService, get_pdf_service
    from services.storage_service import StorageError, UploadStorage, get_storage
    from services.summarizer import SummarizerClient, get_summarizer_client
    from validation import (
        DEFAULT_ITEMS_PER_PAGE,
        DEFAULT_PAGE,
        ValidationError,
        build_page_query,
        default_title,
        parse_int,
        sanitize_search,
        validate_file_extension,
        validate_file_size,
        validate_title,
    )

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pdf", tags=["pdf"])


def _parse_pdf_id(pdf_id: str) -> int:
    try:
        return int(pdf_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid PDF ID format",
        )


@router.get("", response_model=PDFListResponse)
async def list_pdfs(
    page: str | None = None,
    itemsperpage: str | None = None,
    sort: str | None = None,
    order: str | None = None,
    search: str | None = None,
    repo: PDFRepository = Depends(get_repository),
) -> PDFListResponse:
    """
    List PDFs one page at a time.

    Out-of-range pagination values and unknown sort fields fall back to
    defaults instead of failing the request.

    Args:
        page: 1-based page number.
        itemsperpage: Page size (1-100).
        sort: Column to sort by.
        order: ``asc`` or ``desc``.
        search: Case-insensitive substring of the title.
        repo: PDF repository.

    Returns:
        A page of PDFs with pagination metadata.
    """
    query = build_page_query(
        parse_int(page, DEFAULT_PAGE),
        parse_int(itemsperpage, DEFAULT_ITEMS_PER_PAGE),
        sort,
        order,
        PDF_SORT_FIELDS,
        DEFAULT_SORT_FIELD,
    )
    pdfs, total = repo.list_pdfs(query, sanitize_search(search))
    return pdf_page_to_response(pdfs, query, total)


@router.post("", response_model=PDFResponse, status_code=status.HTTP_201_CREATED)
async def create_pdf(
    request: PDFCreateRequest,
    repo: PDFRepository = Depends(get_repository),
) -> PDFResponse:
    """Register a PDF record for a file that is already stored."""
    try:
        pdf = repo.create_pdf(
            filename=request.filename,
            title=request.title,
            file_size=request.file_size,
            page_count=request.page_count,
        )
    except SQLAlchemyError as e:
        repo.rollback()
        logger.error("Failed to create PDF record: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create PDF record: {e}",
        )
    return pdf_to_response(pdf)


@router.post("/upload", response_model=PDFResponse, status_code=status.HTTP_201_CREATED)
async def upload_pdf(
    file: UploadFile | None = File(None, description="PDF file to store"),
    title: str = Form(""),
    repo: PDFRepository = Depends(get_repository),
    storage: UploadStorage = Depends(get_storage),
    pdf_service: PDFService = Depends(get_pdf_service),
) -> PDFResponse:
    """
    Upload a PDF file and create its record.

    The file is stored under a generated name. When no title is given the
    original filename without its extension is used.
    """
    if file is None or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File is required",
        )

    try:
        validate_file_extension(file.filename)
        file_bytes = await file.read()
        validate_file_size(len(file_bytes), get_settings().max_upload_bytes)
        pdf_title = validate_title(title or default_title(file.filename))
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    finally:
        await file.close()

    logger.info("Processing upload: %s (%d bytes)", file.filename, len(file_bytes))

    try:
        filename = storage.save(file.filename, file_bytes)
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )

    page_count = pdf_service.count_pages_or_zero(file_bytes)

    try:
        pdf = repo.create_pdf(
            filename=filename,
            title=pdf_title,
            file_size=len(file_bytes),
            page_count=page_count,
        )
    except SQLAlchemyError as e:
        repo.rollback()
        logger.error("Failed to create PDF record for %s: %s", filename, e)
        storage.delete(filename)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create PDF",
        )

    return pdf_to_response(pdf)


@router.get("/{pdf_id}", response_model=PDFDetailResponse)
async def get_pdf(
    pdf_id: str,
    repo: PDFRepository = Depends(get_repository),
) -> PDFDetailResponse:
    """Get a PDF together with its summaries."""
    pdf = repo.get_pdf(_parse_pdf_id(pdf_id), with_summaries=True)
    if not pdf:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="PDF not found",
        )
    return pdf_to_detail_response(pdf)


@router.delete("/{pdf_id}", response_model=MessageResponse)
async def delete_pdf(
    pdf_id: str,
    repo: PDFRepository = Depends(get_repository),
    storage: UploadStorage = Depends(get_storage),
) -> MessageResponse:
    """
    Delete a PDF, its summaries, and its stored file.

    A stored file that is already missing does not block the delete.
    """
    pdf = repo.get_pdf(_parse_pdf_id(pdf_id))
    if not pdf:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="PDF not found",
        )

    try:
        storage.delete(pdf.filename)
    except StorageError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete file",
        )

    repo.delete_pdf(pdf)
    return MessageResponse(message="PDF deleted successfully")


@router.post("/{pdf_id}/summarize")
async def summarize_pdf(
    pdf_id: str,
    request: SummarizeRequest,
    repo: PDFRepository = Depends(get_repository),
    storage: UploadStorage = Depends(get_storage),
    summarizer: SummarizerClient = Depends(get_summarizer_client),
) -> dict:
    """
    Summarize a stored PDF with the external summarization service.

    The service's JSON reply is returned unchanged. A summary row is saved
    from it; if saving fails the error is only logged.

    Raises:
        SummarizerError: Relayed by the application's exception handler.
    """
    pdf = repo.get_pdf(_parse_pdf_id(pdf_id))
    if not pdf:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="PDF not found",
        )

    try:
        content = storage.read(pdf.filename)
    except OSError as e:
        logger.error("Stored file for PDF %s unavailable: %s", pdf.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to open file: {e}",
        )

    payload, result = await summarizer.summarize(
        content,
        pdf.filename,
        request.style.value,
        request.language.value,
    )

    try:
        repo.create_summary(
            pdf_id=pdf.id,
            style=SummaryStyle((result.style or request.style.value).lower()),
            language=SummaryLanguage((result.language or request.language.value).lower()),
            content=result.summary.main_summary,
            summary_time=result.process_info.processing_time_seconds,
        )
    except (SQLAlchemyError, ValueError):
        repo.rollback()
        logger.exception("Failed to save summary for PDF %s", pdf.id)

    return payload
