"""
Exceptions module for search-gwas.
Defines the error taxonomy raised by the fetch and parse stages.
"""

from enum import Enum


class SearchGwasError(Exception):
    """Base exception class for all search-gwas errors."""

    stage = "search-gwas"

    def __init__(self, message="An error occurred in search-gwas", details=None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class FetchErrorKind(Enum):
    """Reasons the catalog could not be obtained."""

    NETWORK = "network"
    TIMEOUT = "timeout"
    CACHE_CORRUPT = "cache_corrupt"


class ParseErrorKind(Enum):
    """Reasons the catalog could not be parsed."""

    MALFORMED_HEADER = "malformed_header"
    EMPTY_INPUT = "empty_input"


class FetchError(SearchGwasError):
    """Exception raised when the catalog can be neither downloaded nor read from cache."""

    stage = "fetch"

    def __init__(self, kind: FetchErrorKind, message="Error fetching the GWAS catalog", details=None):
        self.kind = kind
        super().__init__(message, details)


class ParseError(SearchGwasError):
    """Exception raised when the catalog payload is unusable as a whole."""

    stage = "parse"

    def __init__(self, kind: ParseErrorKind, message="Error parsing the GWAS catalog", details=None):
        self.kind = kind
        super().__init__(message, details)


class ConfigurationError(SearchGwasError):
    """Exception raised for errors related to configuration."""

    stage = "config"

    def __init__(self, message="Error with configuration", details=None):
        super().__init__(message, details)
