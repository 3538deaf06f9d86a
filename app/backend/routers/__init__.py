"""
Routers package for FastAPI endpoints.

Organized by domain:
- pdfs: PDF records, uploads and summarization
- summaries: Summary listing and management
"""

from . import pdfs, summaries

__all__ = ["pdfs", "summaries"]
