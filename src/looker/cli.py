"""Command line entry point: ``looker index`` and ``looker search``."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
from pathlib import Path
import sys

from pydantic import ValidationError
from rich.console import Console

from looker.config import Settings
from looker.formatting import print_results
from looker.observability import configure_logging, set_run_context
from looker.search.indexer import build_index
from looker.search.query_engine import search
from looker.search.storage import StorageError, load_index, save_index


logger = logging.getLogger(__name__)


def _shared_arguments() -> argparse.ArgumentParser:
    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument(
        "--config-dir",
        type=Path,
        help="Directory containing settings.toml (default: ~/.config/looker)",
    )
    shared.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        type=str.lower,
        help="Logging level (default: warning)",
    )
    shared.add_argument(
        "--log-json",
        action="store_true",
        default=None,
        help="Emit structured JSON logs on stderr",
    )
    shared.add_argument(
        "--index",
        dest="index_path",
        type=Path,
        help="Path of the index file (default: index.json)",
    )
    return shared


def build_argument_parser() -> argparse.ArgumentParser:
    shared = _shared_arguments()
    parser = argparse.ArgumentParser(
        prog="looker",
        description="Index local text documents and search them by relevance",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    index_parser = subparsers.add_parser("index", parents=[shared], help="Build an index from a directory")
    index_parser.add_argument(
        "--data",
        dest="data_path",
        type=Path,
        help="Root directory of the documents to index (default: current directory)",
    )
    index_parser.add_argument(
        "--recompute-norms",
        action="store_true",
        default=None,
        help="Recompute document norms against the final idf table",
    )

    search_parser = subparsers.add_parser("search", parents=[shared], help="Search an existing index")
    search_parser.add_argument("query", nargs="+", metavar="QUERY", help="Query terms")
    search_parser.add_argument(
        "--limit",
        dest="result_limit",
        type=int,
        help="Maximum number of results to show (default: 10)",
    )
    search_parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print one JSON object per result",
    )
    search_parser.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        default=None,
        help="Disable ANSI colours",
    )
    return parser


def _load_settings(args: argparse.Namespace) -> Settings:
    overrides = {
        "index_path": args.index_path,
        "log_level": args.log_level,
        "log_json": args.log_json,
    }
    if args.command == "index":
        overrides.update(data_path=args.data_path, recompute_norms=args.recompute_norms)
    else:
        overrides.update(result_limit=args.result_limit, color=args.color)
    return Settings.load(config_dir=args.config_dir, **overrides)


def run_index(settings: Settings) -> int:
    result = build_index(settings.data_path, recompute_norms=settings.recompute_norms)
    destination = save_index(result.index, settings.index_path)
    sys.stdout.write(
        f"Indexed {result.documents_indexed} documents ({result.documents_skipped} skipped) into {destination}\n"
    )
    return 0


def run_search(settings: Settings, query: str, *, json_output: bool = False, console: Console | None = None) -> int:
    index = load_index(settings.index_path)
    results = search(query, index, limit=settings.result_limit)
    print_results(
        results,
        console or Console(highlight=False),
        limit=settings.result_limit,
        color=settings.color,
        json_output=json_output,
    )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    try:
        settings = _load_settings(args)
    except ValidationError as exc:
        sys.stderr.write(f"looker: invalid configuration\n{exc}\n")
        return 1

    configure_logging(settings.log_level, settings.log_json)
    set_run_context(args.command)
    logger.debug("Loaded settings from %s", settings.settings_file)

    try:
        if args.command == "index":
            return run_index(settings)
        return run_search(settings, " ".join(args.query), json_output=args.json_output)
    except NotADirectoryError as exc:
        sys.stderr.write(f"looker: {exc}\n")
        return 1
    except StorageError as exc:
        sys.stderr.write(f"looker: {exc}\n")
        return 1


if __name__ == "__main__":
    sys.exit(main())
