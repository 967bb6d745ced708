"""
Catalog Fetcher Module for search-gwas.

This module decides whether the cached catalog can be served or a fresh
copy has to be downloaded, and falls back to a stale cache when the
remote is unreachable.
"""

import logging
from datetime import datetime
from typing import Optional

from search_gwas.catalog.cache_manager import CachedCatalog, CatalogCache
from search_gwas.catalog.downloader import CatalogDownloader
from search_gwas.exceptions import FetchError, FetchErrorKind
from search_gwas.models import CachePolicy, FetchResult

# Configure logging
log = logging.getLogger("search-gwas")


class CatalogFetcher:
    """Obtains the raw catalog from the local cache or the remote source."""

    def __init__(self, downloader: CatalogDownloader, cache: CatalogCache):
        """
        Initialize the catalog fetcher.

        Args:
            downloader: CatalogDownloader instance
            cache: CatalogCache instance
        """
        self.downloader = downloader
        self.cache = cache

    def fetch(self, cache_policy: Optional[CachePolicy] = None) -> FetchResult:
        """
        Return the raw catalog, downloading it only when the cache will not do.

        Args:
            cache_policy: Freshness rules (defaults to CachePolicy())

        Returns:
            FetchResult holding the raw bytes

        Raises:
            FetchError: If neither the remote nor the cache yields usable data
        """
        policy = cache_policy or CachePolicy()

        cached = None
        corrupt = None
        try:
            cached = self.cache.load()
        except FetchError as e:
            log.warning(f"Ignoring cached catalog: {e}")
            corrupt = e

        if cached is not None and policy.force == 0 and cached.age() < policy.max_age:
            log.info(f"Using cached catalog (age: {cached.age()})")
            return FetchResult(data=cached.data, fetched_at=cached.fetched_at, source="cache")

        try:
            if cached is not None and policy.force < 2 and self._cache_is_current(cached):
                log.info("Cached catalog matches the latest release")
                return FetchResult(data=cached.data, fetched_at=self._touch(cached), source="cache")

            data = self.downloader.download()
        except FetchError as e:
            if cached is not None:
                log.warning(f"{e}; using cached catalog from {cached.fetched_at:%Y-%m-%d %H:%M}")
                return FetchResult(data=cached.data, fetched_at=cached.fetched_at, source="cache", stale=True)
            if corrupt is not None:
                raise FetchError(FetchErrorKind.CACHE_CORRUPT, corrupt.message, details=str(e)) from e
            raise

        try:
            fetched_at = self.cache.store(data)
        except OSError as e:
            log.warning(f"Could not cache the catalog, continuing without it: {e}")
            fetched_at = None
        return FetchResult(data=data, fetched_at=fetched_at or datetime.now(), source="remote")

    def _touch(self, cached: CachedCatalog) -> datetime:
        try:
            return self.cache.touch() or datetime.now()
        except OSError as e:
            log.warning(f"Could not update cache timestamp: {e}")
            return cached.fetched_at

    def _cache_is_current(self, cached: CachedCatalog) -> bool:
        release = self.downloader.latest_release_date()
        if release is None:
            return False
        log.debug(f"Remote release {release}, cached copy from {cached.fetched_at:%Y-%m-%d}")
        return release <= cached.fetched_at.date()
