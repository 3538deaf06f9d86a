"""
FastAPI application for the PDF summary service.

Provides endpoints for:
- Uploading and managing PDF documents
- Requesting AI summaries from the external summarization service
- Browsing and deleting stored summaries
"""

import logging

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

# Handle both package imports (when running as module) and standalone imports (uvicorn main:app)
try:
    from .config import get_settings
    from .middleware import (
        RateLimiter,
        configure_middleware,
        error_response,
        register_exception_handlers,
    )
    from .models import MessageResponse
    from .routers import pdfs, summaries
    from .services.summarizer import SummarizerError
except ImportError:
    import sys
    from pathlib import Path
    # Add parent directory to path for standalone imports
    backend_dir = Path(__file__).parent
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))
    from config import get_settings
    from middleware import (
        RateLimiter,
        configure_middleware,
        error_response,
        register_exception_handlers,
    )
    from models import MessageResponse
    from routers import pdfs, summaries
    from services.summarizer import SummarizerError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting PDF Summary Service...")
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    # Tables are created by the migration tool (python -m app.backend.migrate)
    logger.info("Storing uploads in %s", settings.upload_dir.resolve())
    yield
    logger.info("Shutting down PDF Summary Service...")


# Create FastAPI application
app = FastAPI(
    title="PDF Summary API",
    description="Manage uploaded PDFs and their AI-generated summaries",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan,
)

rate_limiter = RateLimiter(
    max_requests=settings.rate_limit_requests,
    window_seconds=settings.rate_limit_window_seconds,
)

configure_middleware(app, rate_limiter, settings.cors_origins)
register_exception_handlers(app)


# =============================================================================
# Health Endpoints
# =============================================================================


@app.get("/ping", response_model=MessageResponse)
async def ping() -> MessageResponse:
    """Liveness check."""
    return MessageResponse(message="pong")


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(pdfs.router)
app.include_router(summaries.router)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(SummarizerError)
async def summarizer_error_handler(request: Request, exc: SummarizerError):
    """Relay summarization service failures with their status code."""
    return error_response(exc.status_code, exc.message)
