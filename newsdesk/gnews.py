"""GNews search API client.

One call fetches the articles for one topic, newest first, published no
earlier than a cutoff instant. Failures are mapped onto the core error
taxonomy so that the aggregator never sees raw ``httpx`` exceptions.
"""

from __future__ import annotations

import logging
from datetime import datetime

import httpx
from pydantic import ValidationError

from newsdesk.errors import UpstreamDecodeError, UpstreamFetchError
from newsdesk.models import RawArticle
from newsdesk.timeframe import format_cutoff

logger = logging.getLogger(__name__)

GNEWS_API_URL = "https://gnews.io/api/v4/search"


class GNewsClient:
    """Search for news articles using the GNews API.

    Args:
        api_key: GNews API key.
        lang: Language code for results (fixed to English by the app).
        base_url: Search endpoint, overridable for tests.
    """

    def __init__(
        self,
        api_key: str,
        *,
        lang: str = "en",
        base_url: str = GNEWS_API_URL,
    ) -> None:
        if not api_key:
            raise ValueError("GNews API key required. Set GNEWS_API_KEY.")
        self._api_key = api_key
        self._lang = lang
        self._base_url = base_url

    def build_params(self, topic: str, cutoff: datetime) -> dict[str, str]:
        """Query parameters for one topic search."""
        return {
            "q": topic,
            "lang": self._lang,
            "sortby": "publishedAt",
            "from": format_cutoff(cutoff),
            "apikey": self._api_key,
        }

    async def fetch_topic(
        self,
        client: httpx.AsyncClient,
        topic: str,
        cutoff: datetime,
    ) -> list[RawArticle]:
        """Fetch the raw articles for a single topic.

        Args:
            client: Shared async HTTP client.
            topic: Search term.
            cutoff: Lower bound on publish time.

        Returns:
            Articles in upstream order.

        Raises:
            UpstreamFetchError: On transport failure or a non-2xx status.
            UpstreamDecodeError: If the body is not the expected JSON shape.
        """
        params = self.build_params(topic, cutoff)
        try:
            response = await client.get(self._base_url, params=params)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Search failed for topic=%r: %s", topic, exc)
            raise UpstreamFetchError(topic, exc) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamDecodeError(
                f'Invalid JSON in search response for "{topic}"'
            ) from exc

        items = data.get("articles") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise UpstreamDecodeError(
                f'Search response for "{topic}" has no articles list'
            )

        try:
            articles = [RawArticle.from_payload(item) for item in items]
        except (ValidationError, TypeError) as exc:
            raise UpstreamDecodeError(
                f'Malformed article in search response for "{topic}"'
            ) from exc

        logger.info("Fetched %d article(s) for topic=%r", len(articles), topic)
        return articles
