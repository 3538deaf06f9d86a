"""Tests for the summarization service client."""

import httpx
import pytest

from app.backend.services.summarizer import SummarizerClient, SummarizerError

URL = "http://summarizer.test/summarize"


def _client(handler) -> SummarizerClient:
    return SummarizerClient(URL, transport=httpx.MockTransport(handler))


class TestSummarizerClient:
    """Tests for SummarizerClient."""

    @pytest.mark.asyncio
    async def test_sends_multipart_form(self, summary_payload: dict):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["request"] = request
            return httpx.Response(200, json=summary_payload)

        payload, parsed = await _client(handler).summarize(
            b"%PDF-1.4 content", "abc.pdf", "detailed", "indonesian"
        )

        request = captured["request"]
        assert str(request.url) == URL
        assert request.headers["content-type"].startswith("multipart/form-data")
        body = request.content
        assert b'name="file"; filename="abc.pdf"' in body
        assert b"%PDF-1.4 content" in body
        assert b"detailed" in body and b"indonesian" in body

        assert payload == summary_payload
        assert parsed.summary.main_summary == "The report covers quarterly revenue."
        assert parsed.process_info.processing_time_seconds == 2.75

    @pytest.mark.asyncio
    async def test_non_200_relays_status_and_body(self):
        client = _client(lambda request: httpx.Response(503, text="model loading"))

        with pytest.raises(SummarizerError) as exc_info:
            await client.summarize(b"%PDF", "a.pdf", "short", "english")

        assert exc_info.value.status_code == 503
        assert exc_info.value.message == "Summarization service error: model loading"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("upstream_status", [204, 304])
    async def test_bodyless_status_becomes_500(self, upstream_status: int):
        client = _client(lambda request: httpx.Response(upstream_status))

        with pytest.raises(SummarizerError) as exc_info:
            await client.summarize(b"%PDF", "a.pdf", "short", "english")

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SummarizerError) as exc_info:
            await _client(handler).summarize(b"%PDF", "a.pdf", "short", "english")

        assert exc_info.value.status_code == 500
        assert "Failed to connect" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(SummarizerError) as exc_info:
            await client.summarize(b"%PDF", "a.pdf", "short", "english")

        assert exc_info.value.status_code == 500
        assert "Failed to parse" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_missing_main_summary(self):
        client = _client(lambda request: httpx.Response(200, json={"summary": {}}))

        with pytest.raises(SummarizerError) as exc_info:
            await client.summarize(b"%PDF", "a.pdf", "short", "english")

        assert exc_info.value.status_code == 500
