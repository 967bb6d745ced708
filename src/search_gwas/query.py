"""
Query module for search-gwas.
Filters the catalog by trait substring, gene list and significance.

Case folding is ASCII-only: A-Z map to a-z and every other character,
accented letters included, compares exactly.
"""

import logging
import string
from typing import FrozenSet, Iterable, List, Tuple

from search_gwas.models import Association, Catalog, MatchResult, Query

# Configure logging
log = logging.getLogger("search-gwas")

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def ascii_fold(text: str) -> str:
    """Lower-case ASCII letters only."""
    return text.translate(_ASCII_LOWER)


def parse_genes(values: Iterable[str]) -> Tuple[str, ...]:
    """
    Normalise gene arguments from the command line.

    Each value may hold several comma-separated symbols. Symbols are
    trimmed and upper-cased; empties and repeats are dropped.

    Args:
        values: Raw option values, e.g. ["TSHR", "COL5A2, brca1"]

    Returns:
        Symbols in first-seen order
    """
    genes: List[str] = []
    for value in values:
        for symbol in value.split(","):
            symbol = symbol.strip().upper()
            if symbol and symbol not in genes:
                genes.append(symbol)
    return tuple(genes)


class QueryEngine:
    """Evaluates a Query against a Catalog."""

    def run(self, catalog: Catalog, query: Query) -> MatchResult:
        """
        Select the associations matching a query.

        Args:
            catalog: Parsed catalog
            query: Trait/gene query

        Returns:
            MatchResult in catalog order, without deduplication
        """
        needle = ascii_fold(query.trait_substring.strip())
        wanted = frozenset(ascii_fold(gene) for gene in query.genes)

        matches = tuple(
            association
            for association in catalog
            if self._matches(association, needle, wanted, query.max_p_value)
        )
        log.info(f"{len(matches)} of {len(catalog)} associations match \"{query.trait_substring}\"")
        return MatchResult(query=query, associations=matches)

    @staticmethod
    def _matches(association: Association, needle: str, wanted: FrozenSet[str], max_p_value) -> bool:
        if needle and needle not in ascii_fold(association.trait_name):
            return False
        if wanted and wanted.isdisjoint(ascii_fold(gene) for gene in association.reported_genes):
            return False
        if max_p_value is not None and not association.is_significant(max_p_value):
            return False
        return True


def associated_genes(results: MatchResult) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    """
    Split the query's genes by whether any result mentions them.

    Returns:
        (associated, not_associated), each in query order
    """
    seen = {ascii_fold(gene) for association in results for gene in association.reported_genes}
    associated = tuple(gene for gene in results.query.genes if ascii_fold(gene) in seen)
    missing = tuple(gene for gene in results.query.genes if ascii_fold(gene) not in seen)
    return associated, missing
