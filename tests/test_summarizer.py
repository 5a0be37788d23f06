"""Tests for newsdesk/summarizer.py — Claude-backed article summaries."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from newsdesk.summarizer import Summarizer


# ── Fixtures ───────────────────────────────────────────────────────────────────


def make_settings(**overrides):
    """Return a minimal Settings-like object for testing."""
    settings = MagicMock()
    settings.anthropic_api_key = "test-key"
    settings.summary_model = "claude-haiku-4-5"
    settings.summary_max_tokens = 250
    for k, v in overrides.items():
        setattr(settings, k, v)
    return settings


def fake_response(text: str) -> MagicMock:
    block = MagicMock()
    block.text = text
    response = MagicMock()
    response.content = [block]
    return response


# ── Summarizer.summarize ───────────────────────────────────────────────────────


class TestSummarize:
    def test_returns_model_text(self):
        s = Summarizer(make_settings())
        s._client = MagicMock()
        s._client.messages.create.return_value = fake_response("  Four sentences.  ")

        assert s.summarize("Title", "Content") == "Four sentences."

    def test_prompt_includes_title_and_content(self):
        s = Summarizer(make_settings())
        s._client = MagicMock()
        s._client.messages.create.return_value = fake_response("ok")

        s.summarize("Rocket launch", "SpaceX launched Starship today.")

        kwargs = s._client.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-haiku-4-5"
        assert kwargs["max_tokens"] == 250
        user = kwargs["messages"][0]["content"]
        assert "Title: Rocket launch" in user
        assert "Content: SpaceX launched Starship today." in user

    @pytest.mark.parametrize("title, content", [("", "text"), ("Title", ""), (None, "x")])
    def test_missing_input_raises(self, title, content):
        s = Summarizer(make_settings())
        with pytest.raises(ValueError, match="Missing title or content"):
            s.summarize(title, content)

    def test_api_errors_propagate(self):
        s = Summarizer(make_settings())
        s._client = MagicMock()
        s._client.messages.create.side_effect = RuntimeError("rate limited")

        with pytest.raises(RuntimeError, match="rate limited"):
            s.summarize("Title", "Content")


class TestClient:
    @patch("anthropic.Anthropic")
    def test_client_is_lazy_and_cached(self, mock_cls):
        s = Summarizer(make_settings())
        mock_cls.assert_not_called()

        assert s.client is s.client
        mock_cls.assert_called_once_with(api_key="test-key", max_retries=0)
