"""Tests for newsdesk/summary_client.py"""

from __future__ import annotations

import json

import httpx
import pytest

from newsdesk.errors import SummarizationPayloadError, SummarizationRequestError
from newsdesk.summary_client import SummaryClient

URL = "http://testserver/api/summarize"


def client_for(handler) -> SummaryClient:
    return SummaryClient(URL, transport=httpx.MockTransport(handler))


class TestSummaryClient:
    async def test_posts_title_and_content(self):
        captured: list[httpx.Request] = []

        def handler(request):
            captured.append(request)
            return httpx.Response(200, json={"summary": "Short summary."})

        result = await client_for(handler).summarize("Title", "Description text")

        assert result == "Short summary."
        assert captured[0].method == "POST"
        assert json.loads(captured[0].content) == {
            "title": "Title",
            "content": "Description text",
        }

    async def test_error_field_is_payload_error(self):
        client = client_for(lambda r: httpx.Response(500, json={"error": "quota exceeded"}))
        with pytest.raises(SummarizationPayloadError, match="quota exceeded"):
            await client.summarize("Title", "Text")

    async def test_error_field_with_200_is_payload_error(self):
        client = client_for(lambda r: httpx.Response(200, json={"error": "nope"}))
        with pytest.raises(SummarizationPayloadError, match="nope"):
            await client.summarize("Title", "Text")

    async def test_invalid_json_is_payload_error(self):
        client = client_for(lambda r: httpx.Response(200, text="<html></html>"))
        with pytest.raises(SummarizationPayloadError, match="Invalid JSON"):
            await client.summarize("Title", "Text")

    async def test_missing_summary_is_payload_error(self):
        client = client_for(lambda r: httpx.Response(200, json={}))
        with pytest.raises(SummarizationPayloadError, match="no summary"):
            await client.summarize("Title", "Text")

    async def test_non_success_without_body_is_request_error(self):
        client = client_for(lambda r: httpx.Response(502, text="Bad Gateway"))
        with pytest.raises(SummarizationRequestError, match="HTTP 502"):
            await client.summarize("Title", "Text")

    async def test_transport_failure_is_request_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SummarizationRequestError, match="connection refused"):
            await client_for(handler).summarize("Title", "Text")
