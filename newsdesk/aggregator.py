"""Multi-topic article aggregation.

Responsibilities:
- Reject searches without topics before any network call
- Fan out one GNews request per topic, concurrently
- Fail fast: the first failing topic aborts the search and cancels its siblings
- Tag each article with its topic and derived identity
- Deduplicate by title, keeping the first occurrence

Merge order is deterministic: per-topic results are flattened in topic-list
order (not completion order), so for two topics returning the same headline
the article from the earlier topic survives.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

import httpx

from newsdesk.errors import EmptyTopicSetError
from newsdesk.gnews import GNewsClient
from newsdesk.models import Article, RawArticle
from newsdesk.timeframe import Timeframe

logger = logging.getLogger(__name__)


# ── Deduplication ──────────────────────────────────────────────────────────────


def deduplicate(articles: Iterable[Article]) -> list[Article]:
    """Remove articles whose title was already seen, keeping the first.

    The derived identity (``topic-title``) labels an article; the dedup key
    is the bare title, so one headline surfaced by two topics appears once.

    Examples:
        >>> [a.topic for a in deduplicate([a_spacex, a_nasa_same_title])]
        ['spacex']
    """
    seen: set[str] = set()
    unique: list[Article] = []
    for article in articles:
        if article.title not in seen:
            seen.add(article.title)
            unique.append(article)
    return unique


def merge(per_topic: Sequence[tuple[str, list[RawArticle]]]) -> list[Article]:
    """Flatten ``(topic, raw articles)`` pairs in order and deduplicate."""
    tagged = (
        Article.from_raw(raw, topic)
        for topic, raw_articles in per_topic
        for raw in raw_articles
    )
    return deduplicate(tagged)


# ── Join-all with cancellation ─────────────────────────────────────────────────


async def gather_or_cancel(*coros):
    """Await all *coros* concurrently; on the first failure cancel the rest.

    Results are returned in argument order. The first exception raised by
    any task propagates after every still-running sibling has been cancelled
    and has finished unwinding.
    """
    tasks = [asyncio.ensure_future(coro) for coro in coros]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


# ── Aggregator ─────────────────────────────────────────────────────────────────


class ArticleAggregator:
    """Searches GNews for every tracked topic and merges the results.

    Args:
        gnews: Configured GNews client.
        timeout: Transport timeout in seconds for the shared HTTP client.
        transport: Optional ``httpx`` transport (tests use ``MockTransport``).
    """

    def __init__(
        self,
        gnews: GNewsClient,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._gnews = gnews
        self._timeout = timeout
        self._transport = transport

    async def search(
        self,
        topics: Sequence[str],
        timeframe: Timeframe | str,
        *,
        now: datetime | None = None,
    ) -> list[Article]:
        """Fetch, merge and deduplicate articles for all *topics*.

        Args:
            topics: Ordered, non-empty topic list.
            timeframe: Recency window; its cutoff is sent upstream.
            now: Reference instant for the cutoff (defaults to current UTC).

        Returns:
            The new article collection, titles unique.

        Raises:
            EmptyTopicSetError: If *topics* is empty. No request is issued.
            UpstreamFetchError: If any topic's request fails.
            UpstreamDecodeError: If any topic's response is malformed.
        """
        if not topics:
            raise EmptyTopicSetError()

        timeframe = Timeframe.parse(timeframe)
        cutoff = timeframe.cutoff(now)
        logger.info(
            "Searching %d topic(s) timeframe=%s cutoff=%s",
            len(topics), timeframe.value, cutoff.isoformat(),
        )

        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            results = await gather_or_cancel(
                *(self._gnews.fetch_topic(client, topic, cutoff) for topic in topics)
            )

        articles = merge(list(zip(topics, results)))
        logger.info("Search complete: %d unique article(s)", len(articles))
        return articles
