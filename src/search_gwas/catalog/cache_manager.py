"""
Catalog Cache Manager Module for search-gwas.

This module manages the on-disk copy of the raw catalog: a single
gzip-compressed file whose modification time is the fetch timestamp.
The file is only ever replaced wholesale, by writing a temporary file
next to it and renaming it into place.
"""

import gzip
import logging
import os
import tempfile
import zlib
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from search_gwas.exceptions import FetchError, FetchErrorKind

# Configure logging
log = logging.getLogger("search-gwas")

CACHE_FILENAME = "associations.tsv.gz"


@dataclass(frozen=True)
class CachedCatalog:
    """Raw catalog bytes read back from the cache."""

    data: bytes
    fetched_at: datetime

    def age(self, now: Optional[datetime] = None) -> timedelta:
        return (now or datetime.now()) - self.fetched_at


class CatalogCache:
    """Single-file cache for the raw catalog."""

    def __init__(self, cache_dir: Path):
        """
        Initialize the catalog cache.

        Args:
            cache_dir: Directory holding the cache file
        """
        self.cache_dir = Path(cache_dir)
        self.cache_path = self.cache_dir / CACHE_FILENAME

    def exists(self) -> bool:
        return self.cache_path.is_file()

    def fetched_at(self) -> Optional[datetime]:
        """Return the fetch timestamp of the cached copy, or None if absent or unreachable."""
        try:
            return datetime.fromtimestamp(self.cache_path.stat().st_mtime)
        except FileNotFoundError:
            return None
        except OSError as e:
            log.warning(f"Cannot read cache directory {self.cache_dir}: {e}")
            return None

    def load(self) -> Optional[CachedCatalog]:
        """
        Read the cached catalog.

        Returns:
            CachedCatalog, or None if no cache file exists

        Raises:
            FetchError: CACHE_CORRUPT if the file is truncated or unreadable
        """
        fetched_at = self.fetched_at()
        if fetched_at is None:
            return None

        try:
            with gzip.open(self.cache_path, "rb") as f:
                data = f.read()
        except (OSError, EOFError, zlib.error) as e:
            raise FetchError(
                FetchErrorKind.CACHE_CORRUPT,
                f"Cached catalog at {self.cache_path} is unreadable",
                details=str(e),
            ) from e

        if not data:
            raise FetchError(
                FetchErrorKind.CACHE_CORRUPT,
                f"Cached catalog at {self.cache_path} is empty",
            )

        log.debug(f"Read {len(data)} bytes from {self.cache_path}")
        return CachedCatalog(data=data, fetched_at=fetched_at)

    def store(self, data: bytes) -> datetime:
        """
        Atomically replace the cached catalog.

        Args:
            data: Raw catalog bytes

        Returns:
            The new fetch timestamp

        Raises:
            OSError: If the cache directory cannot be created or written
        """
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".associations-", suffix=".tmp", dir=self.cache_dir)
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as raw:
                with gzip.GzipFile(fileobj=raw, mode="wb", compresslevel=6) as f:
                    f.write(data)
                raw.flush()
                os.fsync(raw.fileno())
            os.replace(tmp_path, self.cache_path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

        log.info(f"Cached catalog at {self.cache_path}")
        return self.fetched_at()

    def touch(self) -> datetime:
        """Mark the cached copy as freshly checked without rewriting it."""
        os.utime(self.cache_path)
        return self.fetched_at()

    def clear(self) -> bool:
        """
        Remove the cached catalog.

        Returns:
            True if a file was removed
        """
        if not self.exists():
            return False
        try:
            self.cache_path.unlink()
        except OSError as e:
            log.warning(f"Could not clear cached catalog at {self.cache_path}: {e}")
            return False
        log.info(f"Cleared cached catalog at {self.cache_path}")
        return True
