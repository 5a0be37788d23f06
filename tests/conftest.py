"""Shared fixtures: fake GNews payloads and HTTP transports."""

from __future__ import annotations

import httpx
import pytest


def gnews_article(title: str, description: str = "Description", **overrides) -> dict:
    item = {
        "title": title,
        "description": description,
        "content": "Truncated body...",
        "url": f"https://example.com/{title.lower().replace(' ', '-')}",
        "image": None,
        "publishedAt": "2026-02-01T10:00:00Z",
        "source": {"name": "Example News", "url": "https://example.com"},
    }
    item.update(overrides)
    return item


class GNewsStub:
    """Serves canned GNews responses per ``q`` parameter and records requests."""

    def __init__(self, responses: dict[str, httpx.Response | list[dict]]) -> None:
        self.responses = responses
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        canned = self.responses[request.url.params["q"]]
        if isinstance(canned, httpx.Response):
            return canned
        return httpx.Response(200, json={"totalArticles": len(canned), "articles": canned})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def queried_topics(self) -> list[str]:
        return [r.url.params["q"] for r in self.requests]


@pytest.fixture
def make_gnews():
    return GNewsStub


@pytest.fixture
def article_payload():
    return gnews_article
