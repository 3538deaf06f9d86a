"""Pytest configuration and fixtures."""

import os
import tempfile
from typing import Callable, Generator

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Keep the app's default upload directory out of the working tree
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="pdf-summary-uploads-"))
os.environ.setdefault("DATABASE_URL", "sqlite://")

from app.backend.database import Base, get_db  # noqa: E402
from app.backend.main import app, rate_limiter  # noqa: E402
from app.backend.models_db import PDF, Summary, SummaryLanguage, SummaryStyle  # noqa: E402
from app.backend.services.storage_service import UploadStorage, get_storage  # noqa: E402
from app.backend.services.summarizer import (  # noqa: E402
    SummarizerClient,
    get_summarizer_client,
)

SUMMARIZER_URL = "http://summarizer.test/summarize"


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine shared by every session of a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", _enable_foreign_keys)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """Session for seeding and inspecting the test database."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage(tmp_path) -> UploadStorage:
    return UploadStorage(tmp_path / "uploads")


@pytest.fixture
def client(
    session_factory: sessionmaker, storage: UploadStorage
) -> Generator[TestClient, None, None]:
    """Create a test client wired to the in-memory database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    rate_limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    rate_limiter.reset()


@pytest.fixture
def mock_summarizer() -> Callable[[Callable[[httpx.Request], httpx.Response]], list]:
    """
    Route summarization calls to a handler function.

    Returns a function taking the handler; it returns the list that
    collects every request the handler receives.
    """

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> list:
        seen: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        client = SummarizerClient(
            SUMMARIZER_URL, transport=httpx.MockTransport(recording_handler)
        )
        app.dependency_overrides[get_summarizer_client] = lambda: client
        return seen

    return install


@pytest.fixture
def make_pdf(db_session: Session, storage: UploadStorage) -> Callable[..., PDF]:
    """Insert a PDF row, optionally with a stored file."""

    def create(
        title: str = "Annual Report",
        content: bytes | None = b"%PDF-1.4 test",
        file_size: int = 13,
        page_count: int = 1,
    ) -> PDF:
        if content is not None:
            filename = storage.save(f"{title}.pdf", content)
        else:
            filename = "missing.pdf"
        pdf = PDF(
            filename=filename,
            title=title,
            file_size=file_size,
            page_count=page_count,
        )
        db_session.add(pdf)
        db_session.commit()
        db_session.refresh(pdf)
        return pdf

    return create


@pytest.fixture
def make_summary(db_session: Session) -> Callable[..., Summary]:
    def create(
        pdf: PDF,
        content: str = "A short digest.",
        style: SummaryStyle = SummaryStyle.SHORT,
        language: SummaryLanguage = SummaryLanguage.ENGLISH,
        summary_time: float = 1.5,
    ) -> Summary:
        summary = Summary(
            pdf_id=pdf.id,
            content=content,
            style=style,
            language=language,
            summary_time=summary_time,
        )
        db_session.add(summary)
        db_session.commit()
        db_session.refresh(summary)
        return summary

    return create


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """
    Create a minimal valid PDF for testing.

    This is a minimal PDF structure that should be recognized as a valid PDF.
    """
    return b"""%PDF-1.4
1 0 obj
<< /Type /Catalog /Pages 2 0 R >>
endobj
2 0 obj
<< /Type /Pages /Kids [3 0 R] /Count 1 >>
endobj
3 0 obj
<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] >>
endobj
trailer
<< /Size 4 /Root 1 0 R >>
%%EOF"""


@pytest.fixture
def summary_payload() -> dict:
    """A successful reply from the summarization service."""
    return {
        "style": "short",
        "language": "english",
        "summary": {
            "main_summary": "The report covers quarterly revenue.",
            "key_points": ["Revenue grew", "Costs fell"],
        },
        "process_info": {
            "processing_time_seconds": 2.75,
            "pages_processed": 3,
        },
    }
