"""
Workflow module for search-gwas.
Wires the fetch, parse, query and format stages together for one invocation.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

from search_gwas.catalog import CatalogCache, CatalogDownloader, CatalogFetcher, CatalogParser, CatalogStore
from search_gwas.config import Settings
from search_gwas.exceptions import ParseError
from search_gwas.formatting import ResultFormatter
from search_gwas.models import CachePolicy, Catalog, FetchResult, MatchResult, Query
from search_gwas.query import QueryEngine

# Configure logging
log = logging.getLogger("search-gwas")


@dataclass
class SearchContext:
    """Everything one invocation needs, built once and passed down explicitly."""

    settings: Settings
    fetcher: CatalogFetcher
    parser: CatalogParser = field(default_factory=CatalogParser)
    store: CatalogStore = field(default_factory=CatalogStore)
    engine: QueryEngine = field(default_factory=QueryEngine)
    formatter: ResultFormatter = field(default_factory=ResultFormatter)

    def cache_policy(self, force: int = 0) -> CachePolicy:
        return CachePolicy(max_age=timedelta(hours=self.settings.max_age_hours), force=force)

    def catalog(self, force: int = 0) -> Catalog:
        """Return the catalog, fetching and parsing it on first use."""
        return self.store.get_or_build(
            lambda: self.fetcher.fetch(self.cache_policy(force)),
            self._parse,
        )

    def _parse(self, raw: bytes) -> Catalog:
        try:
            return self.parser.parse(raw)
        except ParseError:
            # An unparseable copy must not satisfy the next run
            self.fetcher.cache.clear()
            raise


def build_context(settings: Settings, width: Optional[int] = None) -> SearchContext:
    """
    Set up the components for one invocation.

    Args:
        settings: Resolved settings
        width: Console width for table output

    Returns:
        SearchContext
    """
    downloader = CatalogDownloader(url=settings.catalog_url, timeout=settings.timeout)
    cache = CatalogCache(settings.data_dir)
    return SearchContext(
        settings=settings,
        fetcher=CatalogFetcher(downloader, cache),
        formatter=ResultFormatter(width=width),
    )


def run_update(ctx: SearchContext, force: int = 0) -> FetchResult:
    """
    Refresh the cached catalog and check that it parses.

    Args:
        ctx: Invocation context
        force: 1 ignores the freshness window, 2 always downloads

    Returns:
        FetchResult describing the copy now in use
    """
    catalog = ctx.catalog(force)
    fetched = ctx.store.fetch_result
    log.info(
        f"Catalog from {fetched.source} ({fetched.fetched_at:%Y-%m-%d %H:%M}): "
        f"{len(catalog)} associations, {catalog.skipped_rows} rows skipped"
    )
    return fetched


def run_query(ctx: SearchContext, query: Query, force: int = 0) -> MatchResult:
    """Evaluate a query against the invocation's catalog."""
    catalog = ctx.catalog(force)
    if ctx.store.fetch_result.stale:
        log.warning(
            f"Catalog may be out of date (fetched {ctx.store.fetch_result.fetched_at:%Y-%m-%d %H:%M})"
        )
    return ctx.engine.run(catalog, query)


def run_trait_query(ctx: SearchContext, query: Query, force: int = 0) -> str:
    """
    Run a trait query end to end.

    Args:
        ctx: Invocation context
        query: Trait/gene query with display flags
        force: Cache force level

    Returns:
        Rendered output text
    """
    results = run_query(ctx, query, force)
    if query.summarize:
        return ctx.formatter.render_summary(results, query)
    return ctx.formatter.render(results, query)
