"""
Formatting module for search-gwas.
Renders match results as a rich table, as CSV, or as a gene summary.
"""

import io
import logging
from typing import List, Optional, Sequence

import pandas as pd
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from search_gwas.config import PUBMED_URL
from search_gwas.models import (
    EFFECT_SIZE_COLUMN,
    P_VALUE_COLUMN,
    RISK_ALLELE_COLUMN,
    STUDY_ACCESSION_COLUMN,
    Association,
    MatchResult,
    Query,
)
from search_gwas.query import associated_genes

# Configure logging
log = logging.getLogger("search-gwas")

BASE_COLUMNS = ["Trait", "Genes"]

# Display name -> catalog column, shown with show_full
FULL_DETAIL_COLUMNS = [
    ("P-value", P_VALUE_COLUMN),
    ("Risk allele", RISK_ALLELE_COLUMN),
    ("OR or beta", EFFECT_SIZE_COLUMN),
    ("Study accession", STUDY_ACCESSION_COLUMN),
]

DEFAULT_WIDTH = 160


def pubmed_link(pubmed_id: str) -> str:
    """Build the PubMed article URL for an ID; blank IDs stay blank."""
    pubmed_id = pubmed_id.strip()
    return PUBMED_URL.format(pubmed_id=pubmed_id) if pubmed_id else ""


def no_results_message(query: Query) -> str:
    message = f'No associations found for trait "{query.trait_substring}"'
    if query.genes:
        message += f" and genes {', '.join(query.genes)}"
    return message + "\n"


class ResultFormatter:
    """Renders a MatchResult according to the query's display flags."""

    def __init__(self, width: Optional[int] = None):
        """
        Initialize the formatter.

        Args:
            width: Console width for table output
        """
        self.width = width or DEFAULT_WIDTH

    def columns(self, query: Query) -> List[str]:
        columns = BASE_COLUMNS + ["PubMed link" if query.show_links else "PubMed ID"]
        if query.show_full:
            columns += [name for name, _ in FULL_DETAIL_COLUMNS]
        return columns

    def row(self, association: Association, query: Query) -> List[str]:
        pubmed = pubmed_link(association.pubmed_id) if query.show_links else association.pubmed_id
        row = [association.trait_name, ", ".join(sorted(association.reported_genes)), pubmed]
        if query.show_full:
            row += [association.detail(column) for _, column in FULL_DETAIL_COLUMNS]
        return row

    def render(self, results: MatchResult, query: Optional[Query] = None) -> str:
        """
        Render matched associations.

        Args:
            results: Output of QueryEngine.run
            query: Display flags (defaults to the query behind the results)

        Returns:
            Table text, a no-results message, or CSV with a header line
        """
        query = query or results.query
        columns = self.columns(query)
        rows = [self.row(association, query) for association in results]

        if query.as_csv:
            return self._to_csv(columns, rows)
        if not rows:
            return no_results_message(query)
        return self._to_table(columns, rows, query)

    def render_summary(self, results: MatchResult, query: Optional[Query] = None) -> str:
        """
        Render which genes the matched associations mention.

        With a gene list the genes are split into associated and not
        associated; without one every distinct gene is listed. CSV mode
        puts each list on a single comma-joined line.
        """
        query = query or results.query

        if query.genes:
            associated, missing = associated_genes(results)
            lines = []
            for label, genes in (("ASSOCIATED:", associated), ("NOT ASSOCIATED:", missing)):
                if not genes:
                    continue
                lines.append(label)
                if query.as_csv:
                    lines.append(",".join(genes))
                else:
                    lines += [f"  {gene}" for gene in genes]
            return "\n".join(lines) + "\n"

        genes = sorted({gene for association in results for gene in association.reported_genes})
        if query.as_csv:
            return ",".join(genes) + "\n"
        if not genes:
            return no_results_message(query)
        return "\n".join(genes) + "\n"

    @staticmethod
    def _to_csv(columns: Sequence[str], rows: List[List[str]]) -> str:
        frame = pd.DataFrame(rows, columns=list(columns), dtype=object)
        return frame.to_csv(index=False, lineterminator="\n")

    def _to_table(self, columns: Sequence[str], rows: List[List[str]], query: Query) -> str:
        title = f'Associations for "{query.trait_substring}"'
        if query.genes:
            title += f" ({', '.join(query.genes)})"
        table = Table(
            title=Text(title),
            caption=f"{len(rows)} association{'s' if len(rows) != 1 else ''}",
            box=box.SIMPLE_HEAD,
        )
        for column in columns:
            table.add_column(column, overflow="fold")
        for row in rows:
            table.add_row(*(Text(value) for value in row))

        buffer = io.StringIO()
        console = Console(file=buffer, width=self.width, color_system=None, highlight=False)
        console.print(table)
        return buffer.getvalue()
