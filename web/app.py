"""
Flask web server for the news desk summariser.

Routes
──────
POST /api/summarize    {title, content} → {summary} | {error}
"""

from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

# Allow running as `python web/app.py` from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

load_dotenv()

from config.settings import Settings
from newsdesk.summarizer import Summarizer

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

settings = Settings()
summarizer = Summarizer(settings)

app = Flask(__name__)


# ── Request logging ────────────────────────────────────────────────────────

@app.before_request
def log_request():
    logger.info("%s %s", request.method, request.path)


@app.errorhandler(Exception)
def handle_error(exc: Exception):
    """Return unexpected errors as JSON instead of an HTML error page."""
    if isinstance(exc, HTTPException):
        return jsonify({"error": exc.description}), exc.code
    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return jsonify({"error": str(exc)}), 500


# ── Summarisation API ──────────────────────────────────────────────────────

@app.route("/api/summarize", methods=["POST"])
def summarize():
    """Summarise one article.

    Body: ``{"title": str, "content": str}``, both required and non-empty.

    Responses:
      200 {"summary": "..."}
      400 {"error": "Missing title or content"}
      500 {"error": "<provider error message>"}
    """
    body = request.get_json(silent=True) or {}
    title = body.get("title") if isinstance(body, dict) else None
    content = body.get("content") if isinstance(body, dict) else None

    if not title or not content:
        logger.info("Rejected summarise request: missing title or content")
        return jsonify({"error": "Missing title or content"}), 400

    try:
        summary = summarizer.summarize(str(title), str(content))
    except Exception as exc:
        logger.exception("Summarisation failed for title=%r", title)
        return jsonify({"error": str(exc)}), 500

    return jsonify({"summary": summary})


# ── Entry point ────────────────────────────────────────────────────────────

if __name__ == "__main__":
    settings.validate_server()
    app.run(debug=settings.debug, host="0.0.0.0", port=settings.port)
