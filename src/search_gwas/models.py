"""
Data model for search-gwas.

Associations are parsed once per invocation and never mutated; queries and
match results are plain frozen values passed between the pipeline stages.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, FrozenSet, Iterator, Optional, Tuple

from search_gwas.config import DEFAULT_MAX_AGE_HOURS

# Catalog column names
TRAIT_COLUMN = "DISEASE/TRAIT"
MAPPED_TRAIT_COLUMN = "MAPPED_TRAIT"
REPORTED_GENES_COLUMN = "REPORTED GENE(S)"
MAPPED_GENE_COLUMN = "MAPPED_GENE"
PUBMED_COLUMN = "PUBMEDID"
P_VALUE_COLUMN = "P-VALUE"
STUDY_ACCESSION_COLUMN = "STUDY ACCESSION"
RISK_ALLELE_COLUMN = "STRONGEST SNP-RISK ALLELE"
EFFECT_SIZE_COLUMN = "OR or BETA"

REQUIRED_COLUMNS = (
    TRAIT_COLUMN,
    MAPPED_TRAIT_COLUMN,
    REPORTED_GENES_COLUMN,
    MAPPED_GENE_COLUMN,
    PUBMED_COLUMN,
    P_VALUE_COLUMN,
    STUDY_ACCESSION_COLUMN,
)


@dataclass(frozen=True)
class Association:
    """One row of the GWAS catalog."""

    trait_name: str
    reported_genes: FrozenSet[str]
    pubmed_id: str
    full_details: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    def detail(self, column: str) -> str:
        return self.full_details.get(column, "")

    @property
    def p_value(self) -> Optional[float]:
        """The association p-value, or None when blank or unparseable."""
        raw = self.detail(P_VALUE_COLUMN).strip()
        if not raw:
            return None
        try:
            return float(raw)
        except ValueError:
            return None

    @property
    def study_accession(self) -> str:
        return self.detail(STUDY_ACCESSION_COLUMN)

    def is_significant(self, threshold: float) -> bool:
        p_value = self.p_value
        return p_value is not None and p_value < threshold


@dataclass(frozen=True)
class Catalog:
    """The ordered, immutable set of associations for the current run."""

    associations: Tuple[Association, ...]
    skipped_rows: int = 0

    def __len__(self) -> int:
        return len(self.associations)

    def __iter__(self) -> Iterator[Association]:
        return iter(self.associations)


@dataclass(frozen=True)
class Query:
    """
    A single trait search.

    `genes` is an ordered tuple of unique symbols; empty means no gene filter.
    """

    trait_substring: str
    genes: Tuple[str, ...] = ()
    show_full: bool = False
    show_links: bool = False
    as_csv: bool = False
    summarize: bool = False
    max_p_value: Optional[float] = None


@dataclass(frozen=True)
class MatchResult:
    """Associations matching a query, in catalog order."""

    query: Query
    associations: Tuple[Association, ...]

    def __len__(self) -> int:
        return len(self.associations)

    def __iter__(self) -> Iterator[Association]:
        return iter(self.associations)

    def __bool__(self) -> bool:
        return bool(self.associations)


@dataclass(frozen=True)
class FetchResult:
    """Raw catalog bytes plus where they came from and how old they are."""

    data: bytes
    fetched_at: datetime
    source: str
    stale: bool = False


@dataclass(frozen=True)
class CachePolicy:
    """
    Freshness rules for the catalog cache.

    force levels: 0 honours max_age, 1 ignores it and checks the remote
    release date, 2 always downloads.
    """

    max_age: timedelta = timedelta(hours=DEFAULT_MAX_AGE_HOURS)
    force: int = 0
