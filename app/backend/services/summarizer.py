"""
Client for the external summarization service.

The service receives the PDF as multipart form data together with the
requested style and language, and answers with a JSON document. This
module relays that document; it does not interpret the summary beyond
what is needed to persist it.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

try:
    from ..config import get_settings
    from ..models import SummarizeServiceResponse
except ImportError:
    from config import get_settings
    from models import SummarizeServiceResponse

logger = logging.getLogger(__name__)

# Responses with these statuses must not have a body
BODYLESS_STATUSES = frozenset({httpx.codes.NO_CONTENT, httpx.codes.NOT_MODIFIED})


class SummarizerError(Exception):
    """Raised when the summarization service call fails.

    ``status_code`` is the HTTP status to answer the client with; for
    upstream error replies it is the upstream status, unless that status
    cannot carry a response body.
    """

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def relayable_status(status_code: int) -> int:
    """Map upstream statuses that cannot carry an error body to 500."""
    if status_code < 200 or status_code in BODYLESS_STATUSES:
        return 500
    return status_code


class SummarizerClient:
    """Forwards PDFs to the summarization service."""

    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            url: Full URL of the service's summarize endpoint.
            timeout: Seconds to wait for a reply; None waits indefinitely.
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``.
        """
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def summarize(
        self,
        content: bytes,
        filename: str,
        style: str,
        language: str,
    ) -> tuple[dict[str, Any], SummarizeServiceResponse]:
        """
        Request a summary of a PDF.

        Args:
            content: PDF file bytes.
            filename: Name sent with the file part.
            style: Summary style value.
            language: Summary language value.

        Returns:
            Tuple of (raw JSON reply, parsed reply).

        Raises:
            SummarizerError: On connection failure, non-200 reply, or a reply
                that cannot be parsed.
        """
        files = {"file": (filename, content, "application/pdf")}
        data = {"style": style, "language": language}

        logger.info(
            "Requesting %s summary in %s for %s from %s",
            style,
            language,
            filename,
            self.url,
        )

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(self.url, files=files, data=data)
        except httpx.HTTPError as e:
            logger.error("Summarization service unreachable: %s", e)
            raise SummarizerError(
                500, f"Failed to connect to summarization service: {e}"
            ) from e

        if response.status_code != httpx.codes.OK:
            logger.warning(
                "Summarization service returned %d for %s",
                response.status_code,
                filename,
            )
            raise SummarizerError(
                relayable_status(response.status_code),
                f"Summarization service error: {response.text}",
            )

        try:
            payload = response.json()
            parsed = SummarizeServiceResponse.model_validate(payload)
        except (ValueError, ValidationError) as e:
            logger.error("Unparseable summarization response: %s", e)
            raise SummarizerError(
                500, f"Failed to parse summarization response: {e}"
            ) from e

        return payload, parsed


def get_summarizer_client() -> SummarizerClient:
    """FastAPI dependency returning a client for the configured service."""
    settings = get_settings()
    return SummarizerClient(settings.summarizer_url, timeout=settings.summarizer_timeout)
