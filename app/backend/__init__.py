"""
PDF Summary Backend Application.

A FastAPI service for storing PDF documents and the AI-generated
summaries produced for them by a separate summarization service.
"""

__version__ = "1.0.0"
