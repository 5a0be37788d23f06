"""Tests for newsdesk/desk.py — session state across search and summaries."""

from __future__ import annotations

import httpx
import pytest

from newsdesk.aggregator import ArticleAggregator
from newsdesk.desk import NewsDesk
from newsdesk.errors import SummarizationRequestError
from newsdesk.gnews import GNewsClient
from newsdesk.orchestrator import SummaryState
from newsdesk.timeframe import Timeframe
from newsdesk.topics import TopicStore


class StubSummaries:
    def __init__(self, result="Summary.") -> None:
        self.result = result
        self.calls = 0

    async def summarize(self, title: str, content: str) -> str:
        self.calls += 1
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.fixture
def store(tmp_path) -> TopicStore:
    return TopicStore(tmp_path / "desk.db")


def make_desk(store, stub, summaries=None) -> NewsDesk:
    aggregator = ArticleAggregator(GNewsClient("test-key"), transport=stub.transport)
    return NewsDesk(store, aggregator, summaries or StubSummaries())


class TestTopics:
    def test_loads_persisted_topics_on_start(self, store, make_gnews):
        store.load()
        store.add("ai")
        desk = make_desk(TopicStore(store._path), make_gnews({}))
        assert desk.topics == ["ai"]

    def test_add_and_remove(self, store, make_gnews):
        desk = make_desk(store, make_gnews({}))
        desk.add_topic("ai")
        desk.add_topic("ai ")
        desk.add_topic("spacex")
        desk.remove_topic("missing")
        desk.remove_topic("spacex")
        assert desk.topics == ["ai"]


class TestSearch:
    async def test_empty_topics_sets_validation_error(self, store, make_gnews):
        stub = make_gnews({})
        desk = make_desk(store, stub)

        assert await desk.search() == []

        assert desk.error == "Please add at least one topic"
        assert stub.requests == []
        assert desk.loading is False

    async def test_success_replaces_collection(self, store, make_gnews, article_payload):
        stub = make_gnews({"ai": [article_payload("Fresh story")]})
        desk = make_desk(store, stub)
        desk.add_topic("ai")
        desk.articles = [object()]  # stale collection from an earlier search
        desk.error = "old error"

        articles = await desk.search()

        assert [a.title for a in articles] == ["Fresh story"]
        assert desk.articles is articles
        assert desk.error is None

    async def test_failure_leaves_collection_empty(self, store, make_gnews, article_payload):
        stub = make_gnews({
            "ai": [article_payload("Would be kept")],
            "spacex": httpx.Response(503),
        })
        desk = make_desk(store, stub)
        desk.add_topic("ai")
        desk.add_topic("spacex")

        await desk.search()

        assert desk.articles == []
        assert desk.error == 'Failed to fetch articles for "spacex"'

    async def test_timeframe_change_applies_to_next_search(self, store, make_gnews, article_payload):
        stub = make_gnews({"ai": [article_payload("Story")]})
        desk = make_desk(store, stub)
        desk.add_topic("ai")
        await desk.search()
        before = list(desk.articles)

        assert desk.set_timeframe("7d") == Timeframe.LAST_7_DAYS
        assert desk.articles == before

        await desk.search()
        assert len(stub.requests) == 2


class TestSummaries:
    async def test_summary_lands_on_article(self, store, make_gnews, article_payload):
        stub = make_gnews({"ai": [article_payload("Story")]})
        summaries = StubSummaries()
        desk = make_desk(store, stub, summaries)
        desk.add_topic("ai")
        await desk.search()

        state = await desk.summarize("ai-Story")

        assert state == SummaryState.DONE
        assert desk.get_article("ai-Story").ai_summary == "Summary."
        assert desk.summary_state("ai-Story") == SummaryState.DONE

    async def test_failed_summary_goes_to_error_slot(self, store, make_gnews, article_payload):
        stub = make_gnews({"ai": [article_payload("Story")]})
        desk = make_desk(store, stub, StubSummaries(SummarizationRequestError("timeout")))
        desk.add_topic("ai")
        await desk.search()

        assert await desk.summarize("ai-Story") == SummaryState.FAILED
        assert desk.error == "Failed to generate AI summary: timeout"
        assert desk.articles[0].ai_summary is None

        desk.clear_error()
        assert desk.error is None

    async def test_new_search_drops_summaries(self, store, make_gnews, article_payload):
        stub = make_gnews({"ai": [article_payload("Story")]})
        desk = make_desk(store, stub)
        desk.add_topic("ai")
        await desk.search()
        await desk.summarize("ai-Story")

        await desk.search()

        assert desk.get_article("ai-Story").ai_summary is None
