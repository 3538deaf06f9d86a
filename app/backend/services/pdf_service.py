"""
PDF inspection using pdf2image (poppler).

Only used to read document metadata such as the page count at upload time.
"""

import logging
from typing import BinaryIO

logger = logging.getLogger(__name__)


class PDFConversionError(Exception):
    """Raised when a PDF cannot be inspected."""

    pass


class PDFService:
    """
    Service for PDF inspection.

    Uses pdf2image's ``pdfinfo`` wrapper (backed by poppler).
    """

    def __init__(self, poppler_path: str | None = None):
        """
        Initialize the PDF service.

        Args:
            poppler_path: Directory containing poppler binaries, if not on PATH.
        """
        self.poppler_path = poppler_path

    def get_page_count(self, file_bytes: bytes | BinaryIO) -> int:
        """
        Get the total number of pages in a PDF.

        Args:
            file_bytes: PDF file as bytes or file-like object.

        Returns:
            Number of pages in the PDF.

        Raises:
            PDFConversionError: If page count cannot be determined.
        """
        # Ensure we have bytes
        if hasattr(file_bytes, "read"):
            pdf_bytes = file_bytes.read()
        else:
            pdf_bytes = file_bytes

        if not pdf_bytes:
            raise PDFConversionError("Empty PDF file provided")

        # Validate PDF magic bytes
        if pdf_bytes[:4] != b"%PDF":
            raise PDFConversionError(
                "Invalid PDF file: does not start with PDF header"
            )

        try:
            # Import here to provide clear error if pdf2image not installed
            from pdf2image import pdfinfo_from_bytes
        except ImportError as e:
            raise PDFConversionError(
                "pdf2image library not installed"
            ) from e

        try:
            info = pdfinfo_from_bytes(pdf_bytes, poppler_path=self.poppler_path)
            return int(info.get("Pages", 0))
        except Exception as e:
            logger.error("Could not get page count: %s", e)
            raise PDFConversionError(f"Could not get page count: {e}") from e

    def count_pages_or_zero(self, file_bytes: bytes) -> int:
        """Page count, or 0 when the document cannot be inspected."""
        try:
            return self.get_page_count(file_bytes)
        except PDFConversionError as e:
            logger.warning("Page count unavailable, storing 0: %s", e)
            return 0


# Singleton instance for convenience
_pdf_service: PDFService | None = None


def get_pdf_service() -> PDFService:
    """Get or create the PDF service singleton."""
    global _pdf_service
    if _pdf_service is None:
        _pdf_service = PDFService()
    return _pdf_service
