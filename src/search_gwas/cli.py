"""
Command-line interface module for search-gwas.
Handles argument parsing, logging setup and exit codes.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from search_gwas import __version__
from search_gwas.config import SIGNIFICANCE_THRESHOLD, Settings
from search_gwas.exceptions import ConfigurationError, SearchGwasError
from search_gwas.models import Query
from search_gwas.query import parse_genes
from search_gwas.workflow import build_context, run_trait_query, run_update

log = logging.getLogger("search-gwas")
console = Console()
err_console = Console(stderr=True)


def parse_args(argv: Optional[List[str]] = None):
    """
    Parse command-line arguments for search-gwas.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="search-gwas",
        description="Search the GWAS Catalog by trait and gene",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log progress (-v) or debug details (-vv)")
    parser.add_argument("--data-dir", type=Path,
                        help="Directory holding the cached catalog")
    parser.add_argument("--timeout", type=float,
                        help="Network timeout in seconds")

    subparsers = parser.add_subparsers(dest="command", required=True)

    update = subparsers.add_parser("update", help="Download the latest GWAS data if available")
    update.add_argument("-f", "--force", action="count", default=0,
                        help="Check for updates even if checked recently, "
                             "specify twice to forcibly redownload the data")

    trait = subparsers.add_parser("trait", help="Query the GWAS catalog for a trait")
    trait.add_argument("trait", help="Trait name or part of it (empty string matches all)")
    trait.add_argument("-g", "--gene", action="append", default=[],
                       help="Gene(s) to query; repeat or separate with commas")
    trait.add_argument("-a", "--with-associations", action="store_true",
                       help="Show full association data")
    trait.add_argument("-l", "--with-pubmed-links", action="store_true",
                       help="Show PubMed links instead of IDs")
    trait.add_argument("-c", "--csv", action="store_true",
                       help="Replace tables with CSV output")
    trait.add_argument("-s", "--summary", action="store_true",
                       help="List associated genes instead of associations")
    significance = trait.add_mutually_exclusive_group()
    significance.add_argument("--significant", action="store_const", const=SIGNIFICANCE_THRESHOLD,
                              dest="max_p_value",
                              help=f"Only keep genome-wide significant hits (p < {SIGNIFICANCE_THRESHOLD:g})")
    significance.add_argument("--max-p-value", type=float, dest="max_p_value",
                              help="Only keep associations with a p-value below this")
    trait.add_argument("-f", "--force", action="count", default=0,
                       help="Check for catalog updates before querying")

    return parser.parse_args(argv)


def build_query(args) -> Query:
    """Turn parsed trait arguments into a Query."""
    return Query(
        trait_substring=args.trait.strip(),
        genes=parse_genes(args.gene),
        show_full=args.with_associations,
        show_links=args.with_pubmed_links,
        as_csv=args.csv,
        summarize=args.summary,
        max_p_value=args.max_p_value,
    )


def configure_logging(verbose: int, default_level: str):
    """
    Configure rich logging on stderr.

    Args:
        verbose: Count of -v flags
        default_level: Level name used without -v

    Raises:
        ConfigurationError: If the level name is unknown
    """
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.getLevelName(default_level)
        if not isinstance(level, int):
            raise ConfigurationError("Unknown log level", details=default_level)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, console=err_console)],
        force=True,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run search-gwas.

    Returns:
        Process exit code: 0 on success (including no matches), 1 on error
    """
    args = parse_args(argv)

    try:
        settings = Settings.from_env().with_overrides(data_dir=args.data_dir, timeout=args.timeout)
        configure_logging(args.verbose, settings.log_level)
        ctx = build_context(settings, width=console.width)

        if args.command == "update":
            fetched = run_update(ctx, force=args.force)
            if fetched.stale:
                console.print(f"Remote unavailable, using catalog from {fetched.fetched_at:%Y-%m-%d %H:%M}")
            else:
                console.print("Up to date!")
        else:
            output = run_trait_query(ctx, build_query(args), force=args.force)
            sys.stdout.write(output)
            sys.stdout.flush()

    except SearchGwasError as e:
        err_console.print(f"{e.stage} error: {e}", style="bold red", markup=False, highlight=False)
        return 1

    return 0
