# seo_links/cli.py
# Defines the command-line interface using argparse.

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import IO, Sequence

from seo_links import __version__
from seo_links.api import analyze_html, fetch_and_analyze
from seo_links.cache import OS_DEFAULT, CacheConfig, FileCache
from seo_links.config import load_config
from seo_links.fetcher import FetchError
from seo_links.models import LinkReport
from seo_links.serializer import report_to_dict
from seo_links.ui import (
    render_diagnostics_section,
    render_external_section,
    render_header,
    render_position_section,
    render_summary_section,
)

log = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _human_bytes(n: int) -> str:
    units = ["B", "KB", "MB", "GB", "TB"]
    i = 0
    v = float(n)
    while v >= 1024 and i < len(units) - 1:
        v /= 1024.0
        i += 1
    s = f"{v:.2f}".rstrip("0").rstrip(".")
    return f"{s} {units[i]}"


def _init_file_cache(cache_dir: str | None, os_default: bool) -> FileCache:
    cfg = CacheConfig.from_mapping(load_config()["cache"])
    cfg.enabled = True
    if os_default:
        cfg.directory = OS_DEFAULT
    if cache_dir:
        cfg.directory = cache_dir
    return FileCache(cfg)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract, classify and summarize the links of a single page.",
        prog="seo_links",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging output to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- analyze ---
    analyze_parser = subparsers.add_parser(
        "analyze", help="Analyze the links of one page and print a summary."
    )
    analyze_parser.add_argument("url", help="The page URL; also defines the origin.")
    analyze_parser.add_argument(
        "--html-file",
        metavar="FILEPATH",
        help="Read the page source from this file instead of fetching it.",
    )
    analyze_parser.add_argument(
        "--json",
        dest="json_output",
        metavar="FILEPATH",
        help="Also write the full report as JSON to this path.",
    )
    analyze_parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Do not read or write the page cache when fetching.",
    )

    # --- cache ---
    cache_parser = subparsers.add_parser("cache", help="Manage the on-disk page cache.")
    cache_parser.add_argument(
        "--dir",
        dest="cache_dir",
        metavar="PATH",
        default=None,
        help="Cache directory to operate on (defaults to the configured one).",
    )
    cache_parser.add_argument(
        "--os-default",
        dest="cache_os_default",
        action="store_true",
        help="Use the OS-specific default cache directory.",
    )
    cache_sub = cache_parser.add_subparsers(dest="cache_cmd", required=True)
    cache_sub.add_parser("clear", help="Wipe the entire cache directory.")
    cache_sub.add_parser("stats", help="Show total items and size on disk.")
    cache_inspect = cache_sub.add_parser(
        "inspect", help="Dump the cached record for a specific URL."
    )
    cache_inspect.add_argument("url", help="The exact URL key to inspect in cache.")
    return parser


def _run_cache_command(args: argparse.Namespace, stdout: IO[str]) -> int:
    with _init_file_cache(args.cache_dir, args.cache_os_default) as fc:
        if args.cache_cmd == "clear":
            fc.clear_all()
            print(f"Cache cleared at: {fc.directory or '(disabled)'}", file=stdout)
            return 0

        if args.cache_cmd == "stats":
            st = fc.stats()
            bytes_on_disk = int(st.get("bytes", 0))
            out = {
                "directory": st.get("directory", ""),
                "items": int(st.get("items", 0)),
                "bytes": bytes_on_disk,
                "human_bytes": _human_bytes(bytes_on_disk),
            }
            print(json.dumps(out, indent=2), file=stdout)
            return 0

        data = fc.get(args.url)
        if data is None:
            print("Cache miss", file=stdout)
            return 2
        print(json.dumps(data, indent=2), file=stdout)
        return 0


async def _load_report(args: argparse.Namespace) -> LinkReport:
    config = load_config()
    if args.html_file:
        html = Path(args.html_file).read_text(encoding="utf-8", errors="replace")
        log.info("Loaded %d characters of page source from %s", len(html), args.html_file)
        return analyze_html(html, args.url, skip_schemes=config["skip_schemes"])
    return await fetch_and_analyze(
        args.url, config=config, use_cache=False if args.no_cache else None
    )


async def async_main(
    argv: Sequence[str] | None = None, stdout: IO[str] | None = None
) -> int:
    """Async entry point for the command-line interface."""
    stdout = stdout or sys.stdout
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "cache":
        return _run_cache_command(args, stdout)

    render_header(args.url, file=stdout)
    try:
        report = await _load_report(args)
    except (FetchError, OSError, ValueError) as e:
        log.error("Could not analyze %s: %s", args.url, e)
        print(f"Error: {e}", file=stdout)
        return 1

    render_summary_section(report, file=stdout)
    render_position_section(report, file=stdout)
    render_external_section(report, file=stdout)
    render_diagnostics_section(report, file=stdout)

    if args.json_output:
        out_path = Path(args.json_output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with out_path.open("w", encoding="utf-8") as f:
            json.dump(report_to_dict(report), f, indent=2, ensure_ascii=False)
        print(f"\nFull link report written to {args.json_output}", file=stdout)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Synchronous wrapper for the CLI entry point."""
    return asyncio.run(async_main(argv))


if __name__ == "__main__":
    sys.exit(main())
