"""AI summarisation using the Claude API.

Backs ``POST /api/summarize``: given an article title and its description
text, asks Claude for a 4–5 sentence analyst-style summary.

The Anthropic client is lazy-initialised so that the class can be
instantiated in tests without requiring a live API key.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)


#: System prompt for the per-article summary call.
_SUMMARY_SYSTEM = (
    "You are a professional news analyst. Write detailed, informative summaries "
    "of news articles that capture the key points, context, and implications. "
    "Include relevant details while keeping the summary clear."
)

_SUMMARY_TEMPLATE = (
    "Summarise this news article in 4-5 sentences. Cover the main event, key "
    "details, context, and any significant implications or developments:\n\n"
    "Title: {title}\n\n"
    "Content: {content}"
)


class Summarizer:
    """Generates per-article summaries with the Claude API."""

    def __init__(self, settings: Settings) -> None:
        """Initialise the summariser.

        Args:
            settings: Application configuration.
        """
        self.settings = settings
        self._client: object = None  # Lazy-initialised anthropic.Anthropic

    @property
    def client(self) -> object:
        """Lazy-initialise and return the Anthropic SDK client."""
        if self._client is None:
            import anthropic
            # Single attempt per request
            self._client = anthropic.Anthropic(
                api_key=self.settings.anthropic_api_key,
                max_retries=0,
            )
        return self._client

    def summarize(self, title: str, content: str) -> str:
        """Summarise one article.

        Args:
            title: The article headline.
            content: The source description text of the article.

        Returns:
            The summary text.

        Raises:
            ValueError: If title or content is blank.
            anthropic.APIError: On API failures.
        """
        if not title or not content:
            raise ValueError("Missing title or content")

        logger.info("Summarising article title=%r", title)
        response = self.client.messages.create(
            model=self.settings.summary_model,
            max_tokens=self.settings.summary_max_tokens,
            temperature=0.7,
            system=_SUMMARY_SYSTEM,
            messages=[
                {
                    "role": "user",
                    "content": _SUMMARY_TEMPLATE.format(title=title, content=content),
                }
            ],
        )
        summary = "".join(
            getattr(block, "text", "") for block in response.content
        ).strip()
        logger.info("Summary received (%d chars)", len(summary))
        return summary
