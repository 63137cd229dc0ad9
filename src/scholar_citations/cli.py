"""
Scholar Citations command line
==============================

Prints total, average-per-year and organic (non-self) citation counts
for one or more paper titles, and optionally exports them as CSV.

    scholar-citations -p "Attention Is All You Need"
    scholar-citations -f papers.txt -o citations.csv
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .config import Settings
from .core import CitationService, ScholarCitationsError
from .resources import CitationReport, format_counts, format_progress, read_paper_titles

logger = logging.getLogger("scholar-citations")


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="scholar-citations",
        description="Obtain Google Scholar citation counts for paper titles",
    )
    parser.add_argument(
        "-p",
        "--paper",
        default="",
        help="Paper title for obtaining citation counts",
    )
    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        default=None,
        help="Text file with a list of paper titles for obtaining citation counts",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="CSV file to output citation counts",
    )
    parser.add_argument(
        "--baseline-year",
        type=int,
        default=None,
        help="Average citations over the years since this year instead of the publication year",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Look up every title again even if it was already fetched in this run",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Concurrent lookups when scanning citing works (default: sequential)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-vv for debug output)",
    )
    return parser


def configure_logging(verbosity: int, default_level: str = "WARNING") -> None:
    """Configure logging to stderr; stdout is reserved for the report."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.getLevelName(default_level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


async def collect_titles(args: argparse.Namespace) -> list[str]:
    """The -p title first, then every title from the -f file."""
    titles = []
    if args.paper:
        titles.append(args.paper)
    if args.file is not None:
        titles.extend(await read_paper_titles(args.file))
    return titles


async def run(args: argparse.Namespace, settings: Settings) -> None:
    """
    Process every requested title in order, then write the CSV.

    Raises:
        ScholarCitationsError: On configuration or upstream failure; the
            run stops at the first failing paper and no CSV is written.
    """
    api_key = settings.resolve_api_key()
    titles = await collect_titles(args)

    service = CitationService(
        api_key=api_key,
        timeout=settings.REQUEST_TIMEOUT,
        language=settings.LANGUAGE,
        cache=settings.CACHE_LOOKUPS and not args.no_cache,
        citing_concurrency=args.concurrency or settings.CITING_CONCURRENCY,
        base_url=settings.BASE_URL,
    )
    report = CitationReport()

    try:
        for title in titles:
            print(format_progress(title))
            counts = await service.citation_counts(title, baseline_year=args.baseline_year)
            print(format_counts(counts))
            print()
            report.add(counts)
    finally:
        await service.close()

    if args.output is not None:
        await report.write_csv(args.output)


def main(argv: Optional[list[str]] = None) -> int:
    """Run the command line (synchronous entry point). Returns the exit code."""
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()

    if not argv:
        print("Error: using at least one flag is mandatory")
        parser.print_help(sys.stdout)
        return 1

    args = parser.parse_args(argv)
    try:
        settings = Settings()
    except ValidationError as e:
        configure_logging(args.verbose)
        logger.error(f"Invalid configuration: {e}")
        return 1
    configure_logging(args.verbose, settings.LOG_LEVEL)
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    try:
        asyncio.run(run(args, settings))
    except ScholarCitationsError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"File error: {e}")
        return 1
    return 0
