"""Application entry point for sosfeed."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import re
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from rich.console import Console

from sosfeed import settings
from sosfeed.adapters.posts_api import HttpPostsApi
from sosfeed.core.feed import FeedStore
from sosfeed.core.feed_filter import filter_posts
from sosfeed.frontend.render import render_post
from sosfeed.frontend.state import build_session

NAME = "S.O.S"
FONT = "tarty-1"

# Masked or bare Brazilian phone numbers: contact data stays out of log files.
PHONE_PATTERN = re.compile(r"\(?\b\d{2}\)?\s?\d{4,5}-?\d{4}\b")


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, redact: bool, fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._redact = redact

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self._redact:
            return message
        return PHONE_PATTERN.sub("***", message)


def _configure_logging(config: dict, console: bool) -> None:
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    redact = bool(config.get("redact", {}).get("enabled", True))
    formatter = _RedactingFormatter(redact, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    # The TUI owns the terminal, so console logging is only for one-shot commands.
    if console and config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/sosfeed.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _run_ui() -> None:
    _print_banner()
    _configure_logging(settings.LOGGING, console=False)
    logger = logging.getLogger(__name__)
    logger.info("Starting sosfeed UI against %s", settings.SERVICES.posts_api_url)

    from sosfeed.frontend.app import SosFeedApp

    session = build_session(settings.SERVICES, settings.GEOLOCATION)
    SosFeedApp(session).run()


async def _print_feed(page: int, search: str) -> int:
    services = settings.SERVICES
    posts_api = HttpPostsApi(services.posts_api_url, timeout=services.timeout_seconds)
    feed = FeedStore(posts_api, services.media_base_url)
    try:
        result = await feed.load_page(page)
    finally:
        await posts_api.aclose()

    console = Console()
    if result is None:
        console.print(f"[bold red]{feed.error}[/]")
        return 1
    posts = filter_posts(result.posts, search)
    for post in posts:
        console.print(render_post(post))
    console.print(f"[dim]page {page}: {len(posts)} of {len(result.posts)} posts[/]")
    return 0


def _run_feed(page: int, search: str) -> int:
    _configure_logging(settings.LOGGING, console=True)
    return asyncio.run(_print_feed(page, search))


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="sosfeed")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("ui", help="Launch the feed and compose TUI")
    feed_parser = subparsers.add_parser("feed", help="Print one page of the feed")
    feed_parser.add_argument("--page", type=int, default=1)
    feed_parser.add_argument("--search", default="", help="Free-text filter")

    args = parser.parse_args(argv)
    if args.command == "feed":
        raise SystemExit(_run_feed(args.page, args.search))
    _run_ui()


if __name__ == "__main__":
    main()
