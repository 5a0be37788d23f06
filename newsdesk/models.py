"""
Pydantic models shared across the news desk core.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field


class RawArticle(BaseModel):
    """One entry of the GNews ``articles`` array, as returned upstream."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str | None = None
    published_at: datetime = Field(alias="publishedAt")
    url: str
    source_name: str = ""

    @classmethod
    def from_payload(cls, item: dict) -> RawArticle:
        """Build from a raw JSON object, flattening ``source.name``."""
        source = item.get("source") if isinstance(item, dict) else None
        name = source.get("name", "") if isinstance(source, dict) else ""
        return cls.model_validate({**item, "source_name": name or ""})


class Article(BaseModel):
    """A news item tagged with the topic whose search returned it."""

    title: str
    description: str = ""
    published_at: datetime
    url: str
    source: str = ""
    topic: str
    ai_summary: str | None = None
    #: Transient UI flag; never serialised.
    summarizing: bool = Field(default=False, exclude=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def id(self) -> str:
        """Derived identity: the same headline under two topics is two entries."""
        return f"{self.topic}-{self.title}"

    @classmethod
    def from_raw(cls, raw: RawArticle, topic: str) -> Article:
        return cls(
            title=raw.title,
            description=raw.description or "",
            published_at=raw.published_at,
            url=raw.url,
            source=raw.source_name,
            topic=topic,
        )


class SummaryRequest(BaseModel):
    """Body of ``POST /api/summarize``."""

    title: str
    content: str


class SummaryResponse(BaseModel):
    """Body returned by ``POST /api/summarize``: exactly one field is set."""

    summary: str | None = None
    error: str | None = None
