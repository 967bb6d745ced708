"""
Catalog Downloader Module for search-gwas.

This module is responsible for retrieving the GWAS Catalog associations
file from the EBI download endpoint.
"""

import logging
import re
from datetime import date, datetime
from typing import Optional

import requests

from search_gwas.config import CATALOG_URL, DEFAULT_TIMEOUT
from search_gwas.exceptions import FetchError, FetchErrorKind

# Configure logging
log = logging.getLogger("search-gwas")

# e.g. gwas-catalog-v1.0.2-associations_e111_r2024-03-11.tsv
_RELEASE_DATE = re.compile(r"_r(\d{4}-\d{2}-\d{2})")


def _fetch_error(url: str, exc: requests.RequestException) -> FetchError:
    if isinstance(exc, requests.Timeout):
        return FetchError(FetchErrorKind.TIMEOUT, f"Timed out contacting {url}", details=str(exc))
    return FetchError(FetchErrorKind.NETWORK, f"Could not download {url}", details=str(exc))


def parse_release_date(content_disposition: Optional[str]) -> Optional[date]:
    """
    Extract the release date from the download's Content-Disposition header.

    Args:
        content_disposition: Raw header value

    Returns:
        Release date, or None when the header carries none
    """
    if not content_disposition:
        return None
    match = _RELEASE_DATE.search(content_disposition)
    if not match:
        return None
    try:
        return datetime.strptime(match.group(1), "%Y-%m-%d").date()
    except ValueError:
        return None


class CatalogDownloader:
    """Handles the single bulk retrieval of the catalog."""

    def __init__(self, url: str = CATALOG_URL, timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize the catalog downloader.

        Args:
            url: Download endpoint for the associations file
            timeout: Socket timeout in seconds for each request
        """
        self.url = url
        self.timeout = timeout

    def download(self) -> bytes:
        """
        Download the full catalog.

        Returns:
            Raw payload bytes

        Raises:
            FetchError: NETWORK on connection or HTTP errors, TIMEOUT on timeouts
        """
        log.info(f"Downloading GWAS catalog from {self.url}")
        chunks = []
        try:
            response = requests.get(self.url, stream=True, timeout=self.timeout)
            response.raise_for_status()
            for chunk in response.iter_content(chunk_size=1024 * 1024):
                if chunk:
                    chunks.append(chunk)
        except requests.RequestException as e:
            raise _fetch_error(self.url, e) from e

        data = b"".join(chunks)
        log.info(f"Downloaded {len(data) / (1024 * 1024):.1f} MB")
        return data

    def latest_release_date(self) -> Optional[date]:
        """
        Ask the endpoint which catalog release it currently serves.

        Returns:
            Release date, or None if the response does not say

        Raises:
            FetchError: NETWORK or TIMEOUT when the endpoint is unreachable
        """
        try:
            response = requests.head(self.url, timeout=self.timeout, allow_redirects=True)
            response.raise_for_status()
        except requests.RequestException as e:
            raise _fetch_error(self.url, e) from e

        release = parse_release_date(response.headers.get("Content-Disposition"))
        log.debug(f"Latest catalog release: {release or 'unknown'}")
        return release
