"""
Services package for the PDF summary application.

Contains:
- pdf_service: PDF metadata inspection (page count)
- storage_service: Local disk storage for uploaded files
- summarizer: Client for the external summarization service
"""

from .pdf_service import PDFService
from .storage_service import UploadStorage
from .summarizer import SummarizerClient

__all__ = ["PDFService", "UploadStorage", "SummarizerClient"]
