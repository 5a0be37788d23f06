"""HTTP client for the summarisation endpoint.

Posts ``{title, content}`` to ``/api/summarize`` and returns the summary
text, translating every failure into a ``SummarizationError`` subclass.
"""

from __future__ import annotations

import json
import logging

import httpx
from pydantic import ValidationError

from newsdesk.errors import SummarizationPayloadError, SummarizationRequestError
from newsdesk.models import SummaryRequest, SummaryResponse

logger = logging.getLogger(__name__)


class SummaryClient:
    """Async client for ``POST /api/summarize``.

    Args:
        url: Full endpoint URL.
        timeout: Transport timeout in seconds.
        transport: Optional ``httpx`` transport (tests use ``MockTransport``).
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def summarize(self, title: str, content: str) -> str:
        """Request a summary for one article.

        Raises:
            SummarizationRequestError: Transport failure, or a non-2xx status
                whose body carries no error message.
            SummarizationPayloadError: Body is not JSON, carries an ``error``
                field, or lacks ``summary``.
        """
        body = SummaryRequest(title=title, content=content).model_dump()
        logger.debug("Sending article for summarisation title=%r", title)
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self._url, json=body, headers={"Accept": "application/json"}
                )
        except httpx.HTTPError as exc:
            raise SummarizationRequestError(str(exc) or type(exc).__name__) from exc

        try:
            data = SummaryResponse.model_validate(json.loads(response.text))
        except (ValueError, ValidationError) as exc:
            if not response.is_success:
                raise SummarizationRequestError(
                    f"Summary endpoint returned HTTP {response.status_code}"
                ) from exc
            raise SummarizationPayloadError(
                "Invalid JSON response from summary endpoint"
            ) from exc

        if data.error:
            raise SummarizationPayloadError(data.error)
        if not response.is_success:
            raise SummarizationRequestError(
                f"Summary endpoint returned HTTP {response.status_code}"
            )
        if data.summary is None:
            raise SummarizationPayloadError("Summary endpoint response has no summary")
        return data.summary
