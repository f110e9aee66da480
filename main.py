"""CLI entrypoint: fetch one random dog that avoids a ban list."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from rich.table import Table

from models import ATTRIBUTE_KEYS, BanList, CanonicalRecord
from retrieval import DogFetcher
from utils.exceptions import DogFetchError, ErrorKind
from utils.logger import configure_logging, console


EXHAUSTED_HINT = "No available result found after multiple attempts. Try removing some bans and try again."

EXIT_OK = 0
EXIT_NETWORK = 1
EXIT_EXHAUSTED = 2


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return value


def _json(text: str):
    raw = str(text or "").strip()
    if not raw:
        return {}
    return json.loads(raw)


def _parse_bans(pairs: List[str], ban_json: str) -> BanList:
    ban_list = BanList.from_mapping(_json(ban_json))
    for pair in pairs:
        key, sep, value = str(pair).partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(f"--ban expects key=value, got {pair!r}")
        ban_list = ban_list.with_value(key, value)
    return ban_list


def _render(record: CanonicalRecord) -> None:
    table = Table(title=record.attributes["breed"] or "Unknown breed", show_header=False)
    table.add_row("id", record.id or "-")
    table.add_row("image", record.image_url)
    for key in ATTRIBUTE_KEYS:
        table.add_row(key, record.attributes[key] or "-")
    console.print(table)


async def _fetch(args: argparse.Namespace, ban_list: BanList) -> int:
    async with DogFetcher() as fetcher:
        try:
            record = await fetcher.fetch(
                ban_list,
                max_attempts=args.max_attempts,
                timeout_ms=args.timeout_ms,
                batch_size=args.batch_size,
                strict=False if args.lenient else None,
            )
        except DogFetchError as e:
            if e.kind == ErrorKind.EXHAUSTED:
                console.print(f"[yellow]{EXHAUSTED_HINT}[/yellow]")
                return EXIT_EXHAUSTED
            console.print(f"[red]Error:[/red] {e}")
            return EXIT_NETWORK

    if args.json:
        print(json.dumps(record.model_dump(mode="json"), ensure_ascii=False))
    else:
        _render(record)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fetch a random dog from TheDogAPI, honoring a ban list")
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    fetch = sub.add_parser("fetch")
    fetch.add_argument("--ban", action="append", default=[], metavar="KEY=VALUE")
    fetch.add_argument("--ban-json", default="{}")
    fetch.add_argument("--max-attempts", type=_positive_int, default=None)
    fetch.add_argument("--timeout-ms", type=_positive_int, default=None)
    fetch.add_argument("--batch-size", type=_positive_int, default=None)
    fetch.add_argument("--lenient", action="store_true", help="accept dogs without breed data as a fallback")
    fetch.add_argument("--json", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)

    if args.command == "fetch":
        try:
            ban_list = _parse_bans(args.ban, args.ban_json)
        except (argparse.ArgumentTypeError, ValueError) as e:
            parser.error(str(e))
        return asyncio.run(_fetch(args, ban_list))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
