"""
news desk core package.

Modules
───────
models        — Pydantic data models (Article, RawArticle, summary payloads)
errors        — exception hierarchy
timeframe     — recency windows and relative-age formatting
topics        — SQLite-backed tracked topic store
gnews         — GNews search API client
aggregator    — concurrent per-topic fetch, merge and title dedup
summarizer    — Claude-backed summary generation for POST /api/summarize
summary_client — async client for POST /api/summarize
orchestrator  — per-article summary state machine
desk          — session state and intent handling
cli           — command-line front end
"""
