"""
Catalog Store Module for search-gwas.

This module holds the parsed catalog for the lifetime of one invocation.
"""

import logging
from typing import Callable, Optional

from search_gwas.models import Catalog, FetchResult

# Configure logging
log = logging.getLogger("search-gwas")


class CatalogStore:
    """Lazily-built, read-only holder of the parsed catalog."""

    def __init__(self):
        self._catalog: Optional[Catalog] = None
        self._fetch_result: Optional[FetchResult] = None

    @property
    def is_built(self) -> bool:
        return self._catalog is not None

    @property
    def fetch_result(self) -> Optional[FetchResult]:
        """The fetch that fed the catalog, or None before the first build."""
        return self._fetch_result

    def get_or_build(
        self,
        fetch_fn: Callable[[], FetchResult],
        parse_fn: Callable[[bytes], Catalog],
    ) -> Catalog:
        """
        Return the catalog, fetching and parsing it on first use.

        Args:
            fetch_fn: Returns the raw catalog as a FetchResult
            parse_fn: Parses raw bytes into a Catalog

        Returns:
            The same Catalog instance on every call
        """
        if self._catalog is None:
            fetched = fetch_fn()
            catalog = parse_fn(fetched.data)
            self._fetch_result = fetched
            self._catalog = catalog
            log.debug(f"Catalog built from {fetched.source} ({len(catalog)} associations)")
        return self._catalog
