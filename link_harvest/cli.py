from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Sequence

from .config import ParserSettings, ResolverSettings
from .config.loader import load_raw_config
from .display import card_hints
from .parser import LogParser
from .resolver import MetadataResolver, ResolutionScheduler

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_LIMIT = 20


def _positive_int(value: str) -> int:
    ivalue = int(value)
    if ivalue <= 0:
        raise argparse.ArgumentTypeError("value must be a positive integer")
    return ivalue


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m link_harvest",
        description="Extract links from a chat export and resolve their previews.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config TOML (defaults to ./config.toml when present).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log skipped lines and strategy selection.",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="<command>", required=True)

    links_cmd = subparsers.add_parser("links", help="Print every extracted link as JSON.")
    links_cmd.add_argument("export", type=Path, help="Chat export text file.")
    links_cmd.add_argument(
        "--author",
        "-a",
        action="append",
        default=None,
        help="Only keep links posted by this author (repeatable).",
    )

    previews_cmd = subparsers.add_parser(
        "previews", help="Resolve previews for the first links and print them as JSON."
    )
    previews_cmd.add_argument("export", type=Path, help="Chat export text file.")
    previews_cmd.add_argument(
        "--limit",
        "-n",
        type=_positive_int,
        default=DEFAULT_PREVIEW_LIMIT,
        help=f"How many links to resolve (default {DEFAULT_PREVIEW_LIMIT}).",
    )
    previews_cmd.add_argument(
        "--concurrency",
        type=_positive_int,
        default=None,
        help="Maximum in-flight resolutions (overrides config).",
    )
    previews_cmd.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Page fetch timeout in seconds (overrides config).",
    )
    return parser


def _read_export(path: Path, parser: argparse.ArgumentParser) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        parser.error(f"cannot read {path}: {exc}")
        raise


async def _resolve_previews(
    links: Sequence[Any], settings: ResolverSettings, limit: int, concurrency: int | None
) -> List[dict]:
    async with MetadataResolver(settings) as resolver:
        scheduler = ResolutionScheduler(resolver, max_concurrency=concurrency)
        records = await scheduler.resolve_visible(links, limit=limit)

    rows = []
    for link, metadata in zip(links, records):
        hints = card_hints(link, metadata)
        rows.append(
            {
                "link": link.to_dict(),
                "metadata": metadata.to_dict(),
                "kind": hints.kind,
                "avatar_color": hints.avatar_color,
            }
        )
    return rows


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger("link_harvest").setLevel(logging.DEBUG)

    raw_config = load_raw_config(args.config)
    try:
        parser_settings = ParserSettings(raw_config)
        resolver_settings = ResolverSettings(raw_config)
    except ValueError as exc:
        parser.error(str(exc))

    if getattr(args, "timeout", None) is not None:
        if args.timeout <= 0:
            parser.error("--timeout must be positive")
        resolver_settings.WEB_TIMEOUT = args.timeout

    result = LogParser(parser_settings).parse(_read_export(args.export, parser))

    if args.command == "links":
        links = result.links
        if args.author:
            wanted = set(args.author)
            links = [link for link in links if link.author in wanted]
        payload: Any = {
            "links": [link.to_dict() for link in links],
            "total_links": len(links),
            "authors": result.authors,
        }
    else:
        payload = asyncio.run(
            _resolve_previews(result.links, resolver_settings, args.limit, args.concurrency)
        )

    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
