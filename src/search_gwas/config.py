"""
Configuration module for search-gwas.
Resolves the data directory, remote URL, freshness window and timeouts
from the environment.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from search_gwas.exceptions import ConfigurationError

CATALOG_URL = "https://www.ebi.ac.uk/gwas/api/search/downloads/alternative"
PUBMED_URL = "https://pubmed.ncbi.nlm.nih.gov/{pubmed_id}"

# Genome-wide significance threshold
SIGNIFICANCE_THRESHOLD = 5e-8

DEFAULT_MAX_AGE_HOURS = 24.0
DEFAULT_TIMEOUT = 60.0
DEFAULT_LOG_LEVEL = "WARNING"

APP_NAME = "search-gwas"


def default_data_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Return the per-user data directory used for the catalog cache.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        $XDG_DATA_HOME/search-gwas, or ~/.local/share/search-gwas
    """
    environ = os.environ if environ is None else environ
    base = environ.get("XDG_DATA_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".local" / "share" / APP_NAME


def _positive_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number", details=repr(raw))
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive", details=repr(raw))
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime settings for one invocation."""

    data_dir: Path
    catalog_url: str = CATALOG_URL
    max_age_hours: float = DEFAULT_MAX_AGE_HOURS
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        for name in ("max_age_hours", "timeout"):
            value = getattr(self, name)
            if not value > 0:
                raise ConfigurationError(f"{name} must be positive", details=repr(value))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from SEARCH_GWAS_* environment variables.

        Args:
            environ: Environment mapping (defaults to os.environ)

        Returns:
            Settings instance

        Raises:
            ConfigurationError: If a numeric variable is malformed
        """
        environ = os.environ if environ is None else environ

        data_dir = environ.get("SEARCH_GWAS_DATA_DIR")
        log_level = environ.get("SEARCH_GWAS_LOG", DEFAULT_LOG_LEVEL).strip().upper()

        return cls(
            data_dir=Path(data_dir).expanduser() if data_dir else default_data_dir(environ),
            catalog_url=environ.get("SEARCH_GWAS_URL") or CATALOG_URL,
            max_age_hours=_positive_float(environ, "SEARCH_GWAS_MAX_AGE_HOURS", DEFAULT_MAX_AGE_HOURS),
            timeout=_positive_float(environ, "SEARCH_GWAS_TIMEOUT", DEFAULT_TIMEOUT),
            log_level=log_level or DEFAULT_LOG_LEVEL,
        )

    def with_overrides(self, **overrides) -> "Settings":
        """
        Return a copy with every non-None override applied.

        Raises:
            ConfigurationError: If an override is out of range
        """
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
