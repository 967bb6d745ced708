"""
Catalog Package for search-gwas.

This package is responsible for downloading, caching and parsing the
GWAS Catalog associations file.
"""

from search_gwas.catalog.downloader import CatalogDownloader
from search_gwas.catalog.cache_manager import CatalogCache, CachedCatalog
from search_gwas.catalog.fetcher import CatalogFetcher
from search_gwas.catalog.parser import CatalogParser, split_genes
from search_gwas.catalog.store import CatalogStore

__all__ = [
    'CatalogDownloader',
    'CatalogCache',
    'CachedCatalog',
    'CatalogFetcher',
    'CatalogParser',
    'CatalogStore',
    'split_genes',
]
