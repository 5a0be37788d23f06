"""Application settings — all configuration loaded from environment variables.

Usage:
    from config.settings import Settings
    settings = Settings()
    settings.validate()   # raises ValueError if an API key is missing
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class Settings:
    """Centralised application configuration.

    All values are read from environment variables at instantiation time
    so that tests can override them by patching ``os.environ``.
    """

    # ── API Keys ────────────────────────────────────────────────────────────
    anthropic_api_key: str = field(
        default_factory=lambda: os.environ.get("ANTHROPIC_API_KEY", "")
    )
    gnews_api_key: str = field(
        default_factory=lambda: os.environ.get("GNEWS_API_KEY", "")
    )

    # ── Flask ───────────────────────────────────────────────────────────────
    debug: bool = field(
        default_factory=lambda: os.environ.get("FLASK_DEBUG", "0") == "1"
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("PORT", "3001"))
    )

    # ── HTTP ────────────────────────────────────────────────────────────────
    #: Where the client-side orchestrator posts summarisation requests.
    summary_api_url: str = field(
        default_factory=lambda: os.environ.get(
            "SUMMARY_API_URL", "http://localhost:3001/api/summarize"
        )
    )
    #: Transport-level timeout in seconds; no other timeout is applied.
    http_timeout: float = field(
        default_factory=lambda: float(os.environ.get("HTTP_TIMEOUT", "30"))
    )

    # ── Storage ─────────────────────────────────────────────────────────────
    db_path: str = field(default_factory=lambda: os.environ.get("DB_PATH", ""))

    # ── AI Models ───────────────────────────────────────────────────────────
    #: Model used for the per-article summary.
    summary_model: str = "claude-haiku-4-5"
    summary_max_tokens: int = 250

    def validate(self) -> None:
        """Raise ``ValueError`` if any key needed by the CLI is missing."""
        missing = [
            name
            for name, value in (("GNEWS_API_KEY", self.gnews_api_key),)
            if not value
        ]
        if missing:
            raise ValueError(
                f"{', '.join(missing)} environment variable is not set. "
                "Copy .env.example to .env and add your key."
            )

    def validate_server(self) -> None:
        """Raise ``ValueError`` if the summarisation server cannot start."""
        if not self.anthropic_api_key:
            raise ValueError(
                "ANTHROPIC_API_KEY environment variable is not set. "
                "Copy .env.example to .env and add your key."
            )
