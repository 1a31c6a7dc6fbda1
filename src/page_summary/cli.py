from __future__ import annotations

import argparse
import json
import logging
import sys

import uvicorn

from page_summary.api import create_app
from page_summary.config import Settings, load_settings
from page_summary.errors import SummaryError
from page_summary.service import summarize

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="page-summary", description="Open Graph page summaries")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("serve", help="Serve GET /v1/summary on ADDR")

    summarize_parser = subparsers.add_parser("summarize", help="Print the summary of one page as JSON")
    summarize_parser.add_argument("url", help="Page to summarize")

    return parser


def _serve(settings: Settings) -> int:
    host, port = settings.listen_host(), settings.listen_port()
    logger.info("Server is listening on %s:%d (tls=%s)", host, port, settings.tls_enabled())
    uvicorn.run(
        create_app(settings),
        host=host,
        port=port,
        ssl_keyfile=settings.tls_key if settings.tls_enabled() else None,
        ssl_certfile=settings.tls_cert if settings.tls_enabled() else None,
        log_level=settings.log_level.lower(),
    )
    return 0


def _summarize(url: str, settings: Settings) -> int:
    try:
        summary = summarize(url, settings=settings)
    except SummaryError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(json.dumps(summary.to_dict(), indent=2, ensure_ascii=False))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    if args.command == "serve":
        return _serve(settings)
    return _summarize(args.url, settings)
