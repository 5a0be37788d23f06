"""Per-article summarisation orchestration.

Each article moves through::

    IDLE ──summarize()──▶ PENDING ──ok──▶ DONE      (terminal, cached)
      ▲                      │
      └──── summarize() ◀── FAILED ◀──error

At most one request is in flight per article id. The pending mark is taken
before the first ``await``, so on a single event loop no lock is needed.
Different articles are fully independent: any number may be pending, and
each completes in response-arrival order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Protocol

from newsdesk.errors import SummarizationError
from newsdesk.models import Article

logger = logging.getLogger(__name__)


class SummaryState(str, Enum):
    """Summarisation lifecycle of one article."""

    IDLE = "idle"
    PENDING = "pending"
    DONE = "done"
    FAILED = "failed"


class SummarySource(Protocol):
    async def summarize(self, title: str, content: str) -> str: ...


class SummarizationOrchestrator:
    """Drives on-demand summaries for the articles of the current collection.

    Args:
        client: Anything with an async ``summarize(title, content)``.
        lookup: Returns the current article for an id, or ``None``. Resolved
            again on completion so the summary lands on the article of the
            collection that is current at that moment.
        report_error: Receives the user-facing message of a failed request.
    """

    def __init__(
        self,
        client: SummarySource,
        lookup: Callable[[str], Article | None],
        report_error: Callable[[str], None] | None = None,
    ) -> None:
        self._client = client
        self._lookup = lookup
        self._report_error = report_error or (lambda message: None)
        self._pending: set[str] = set()
        self._failed: set[str] = set()

    def state(self, article_id: str) -> SummaryState:
        article = self._lookup(article_id)
        if article is not None and article.ai_summary is not None:
            return SummaryState.DONE
        if article_id in self._pending:
            return SummaryState.PENDING
        if article_id in self._failed:
            return SummaryState.FAILED
        return SummaryState.IDLE

    def is_pending(self, article_id: str) -> bool:
        return article_id in self._pending

    async def summarize(self, article_id: str) -> SummaryState:
        """Request a summary for *article_id* unless one exists or is pending.

        Returns:
            The article's state once this call is done. A no-op call returns
            the current state without issuing a request.
        """
        article = self._lookup(article_id)
        if article is None:
            logger.debug("Summarise ignored, unknown article id=%r", article_id)
            return SummaryState.IDLE
        if article.ai_summary is not None or article_id in self._pending:
            return self.state(article_id)

        self._pending.add(article_id)
        self._failed.discard(article_id)
        article.summarizing = True
        try:
            summary = await self._client.summarize(article.title, article.description)
        except SummarizationError as exc:
            self._failed.add(article_id)
            logger.warning("Summary failed for id=%r: %s", article_id, exc)
            self._report_error(f"Failed to generate AI summary: {exc}")
        else:
            current = self._lookup(article_id) or article
            if current.ai_summary is None:
                current.ai_summary = summary
            logger.info("Summary stored for id=%r", article_id)
        finally:
            self._pending.discard(article_id)
            article.summarizing = False
            current = self._lookup(article_id)
            if current is not None:
                current.summarizing = False

        return self.state(article_id)

    def reset(self) -> None:
        """Forget failure marks; called when the collection is replaced."""
        self._failed.clear()
