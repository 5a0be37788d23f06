"""Command-line front end for the news desk.

    newsdesk topics                      list tracked topics
    newsdesk add "space exploration"     track a topic
    newsdesk remove spacex               stop tracking a topic
    newsdesk search -t 12h --summarize   search all topics, optionally summarise
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

from config.settings import Settings
from newsdesk.desk import NewsDesk
from newsdesk.timeframe import Timeframe, format_time_ago
from newsdesk.topics import TopicStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="newsdesk",
        description="Track topics, search recent news and summarise articles.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("topics", help="List tracked topics")

    add = sub.add_parser("add", help="Track a topic")
    add.add_argument("topic")

    remove = sub.add_parser("remove", help="Stop tracking a topic")
    remove.add_argument("topic")

    search = sub.add_parser("search", help="Search recent articles for all topics")
    search.add_argument(
        "-t", "--timeframe",
        choices=[tf.value for tf in Timeframe],
        default=Timeframe.LAST_HOUR.value,
        help="Recency window (default: 1h)",
    )
    search.add_argument(
        "--summarize", action="store_true",
        help="Request an AI summary for every article found",
    )
    return parser


def print_articles(desk: NewsDesk) -> None:
    if not desk.articles:
        print("No articles found.")
        return
    print(f"\nFound {len(desk.articles)} article(s):\n")
    for i, article in enumerate(desk.articles, 1):
        print(f"{i}. {article.title}  [{article.topic}]")
        print(f"   {article.source or 'Unknown'} · {format_time_ago(article.published_at)}")
        if article.ai_summary:
            print(f"   Summary: {article.ai_summary}")
        print(f"   {article.url}")


async def run_search(desk: NewsDesk, timeframe: str, summarize: bool) -> int:
    desk.set_timeframe(timeframe)
    await desk.search()
    if desk.error:
        print(desk.error, file=sys.stderr)
        return 1

    if summarize and desk.articles:
        logger.info("Summarising %d article(s)", len(desk.articles))
        await asyncio.gather(*(desk.summarize(a.id) for a in desk.articles))

    print_articles(desk)
    if desk.error:
        print(desk.error, file=sys.stderr)
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    settings = Settings()
    if args.command == "search":
        try:
            settings.validate()
        except ValueError as exc:
            print(exc, file=sys.stderr)
            return 2
        desk = NewsDesk.from_settings(settings)
        return asyncio.run(run_search(desk, args.timeframe, args.summarize))

    store = TopicStore(settings.db_path or None)
    store.load()
    if args.command == "add":
        if not store.add(args.topic):
            print(f"Topic not added: {args.topic.strip()!r} is blank or already tracked.")
    elif args.command == "remove":
        if not store.remove(args.topic):
            print(f"Topic not tracked: {args.topic!r}")

    for topic in store.topics:
        print(topic)
    return 0


if __name__ == "__main__":
    sys.exit(main())
