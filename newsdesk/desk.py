"""Session state and intent handling.

``NewsDesk`` is the only writer of the state a presentation layer renders:
tracked topics, active timeframe, current article collection, the shared
error slot and the loading flag. Presentation code reads these attributes
and calls the intent methods; it never mutates them directly.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from newsdesk.aggregator import ArticleAggregator
from newsdesk.errors import NewsDeskError
from newsdesk.gnews import GNewsClient
from newsdesk.models import Article
from newsdesk.orchestrator import SummarizationOrchestrator, SummarySource, SummaryState
from newsdesk.summary_client import SummaryClient
from newsdesk.timeframe import Timeframe
from newsdesk.topics import TopicStore

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)


class NewsDesk:
    """Topic-driven news search with on-demand article summaries.

    Args:
        store: Topic store; loaded once here.
        aggregator: Multi-topic article aggregator.
        summaries: Client used for per-article summaries.
        timeframe: Initial recency window.
    """

    def __init__(
        self,
        store: TopicStore,
        aggregator: ArticleAggregator,
        summaries: SummarySource,
        timeframe: Timeframe | str = Timeframe.LAST_HOUR,
    ) -> None:
        self._store = store
        self._aggregator = aggregator
        self.timeframe = Timeframe.parse(timeframe)
        self.articles: list[Article] = []
        self.error: str | None = None
        self.loading = False
        self._orchestrator = SummarizationOrchestrator(
            summaries, self.get_article, self._set_error
        )
        self._store.load()

    @classmethod
    def from_settings(cls, settings: Settings) -> NewsDesk:
        """Wire a desk against the real GNews API and summary endpoint."""
        return cls(
            store=TopicStore(settings.db_path or None),
            aggregator=ArticleAggregator(
                GNewsClient(settings.gnews_api_key), timeout=settings.http_timeout
            ),
            summaries=SummaryClient(
                settings.summary_api_url, timeout=settings.http_timeout
            ),
        )

    # ── Topics ─────────────────────────────────────────────────────────────

    @property
    def topics(self) -> list[str]:
        return self._store.topics

    def add_topic(self, topic: str) -> bool:
        return self._store.add(topic)

    def remove_topic(self, topic: str) -> bool:
        return self._store.remove(topic)

    def set_timeframe(self, timeframe: Timeframe | str) -> Timeframe:
        """Change the window used by the next search; current articles stay."""
        self.timeframe = Timeframe.parse(timeframe)
        return self.timeframe

    # ── Search ─────────────────────────────────────────────────────────────

    async def search(self) -> list[Article]:
        """Replace the article collection with a fresh search over all topics.

        Errors are recorded in ``error`` rather than raised; the collection
        is left empty on failure, never partially filled.

        Returns:
            The new collection (empty on failure or if a search is running).
        """
        if self.loading:
            logger.info("Search already in progress, ignoring request")
            return self.articles

        self.loading = True
        self.error = None
        self.articles = []
        self._orchestrator.reset()
        try:
            self.articles = await self._aggregator.search(self.topics, self.timeframe)
        except NewsDeskError as exc:
            logger.warning("Search failed: %s", exc)
            self._set_error(str(exc))
        finally:
            self.loading = False
        return self.articles

    # ── Summaries ──────────────────────────────────────────────────────────

    def get_article(self, article_id: str) -> Article | None:
        return next((a for a in self.articles if a.id == article_id), None)

    async def summarize(self, article_id: str) -> SummaryState:
        return await self._orchestrator.summarize(article_id)

    def summary_state(self, article_id: str) -> SummaryState:
        return self._orchestrator.state(article_id)

    # ── Error slot ─────────────────────────────────────────────────────────

    def _set_error(self, message: str) -> None:
        # Last error wins
        self.error = message

    def clear_error(self) -> None:
        self.error = None
