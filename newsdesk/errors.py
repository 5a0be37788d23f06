"""Exception hierarchy for the news desk core.

NewsDeskError
├── InputValidationError
│   └── EmptyTopicSetError
├── UpstreamFetchError        — a topic's search request failed
├── UpstreamDecodeError       — an external API returned an unusable body
└── SummarizationError
    ├── SummarizationRequestError  — transport failure or non-2xx status
    └── SummarizationPayloadError  — body lacked ``summary`` or carried ``error``
"""

from __future__ import annotations


class NewsDeskError(Exception):
    """Base class for every error raised by the news desk core."""


class InputValidationError(NewsDeskError):
    """Raised when a user intent is rejected before any I/O happens."""


class EmptyTopicSetError(InputValidationError):
    """Raised when a search is requested without any tracked topic."""

    def __init__(self) -> None:
        super().__init__("Please add at least one topic")


class UpstreamFetchError(NewsDeskError):
    """Raised when the search request for a single topic fails."""

    def __init__(self, topic: str, cause: BaseException | None = None) -> None:
        super().__init__(f'Failed to fetch articles for "{topic}"')
        self.topic = topic
        self.cause = cause


class UpstreamDecodeError(NewsDeskError):
    """Raised when a response body is not the JSON structure we expect."""


class SummarizationError(NewsDeskError):
    """Base class for failures of a single article summary request."""


class SummarizationRequestError(SummarizationError):
    """Raised on transport failure or a non-success HTTP status."""


class SummarizationPayloadError(SummarizationError):
    """Raised when the summary response is malformed or reports an error."""
