"""
Catalog Parser Module for search-gwas.

This module turns the raw associations file into an ordered Catalog.
The header must carry the expected columns; individual rows with the
wrong number of fields are skipped and counted.
"""

import gzip
import io
import logging
import re
import zipfile
import zlib
from typing import FrozenSet, List, Optional

from search_gwas.exceptions import ParseError, ParseErrorKind
from search_gwas.models import (
    MAPPED_GENE_COLUMN,
    MAPPED_TRAIT_COLUMN,
    PUBMED_COLUMN,
    REPORTED_GENES_COLUMN,
    REQUIRED_COLUMNS,
    TRAIT_COLUMN,
    Association,
    Catalog,
)

# Configure logging
log = logging.getLogger("search-gwas")

FIELD_DELIMITER = "\t"

# Separators inside a gene column: "A, B", "A; B", "A - B" (up/downstream
# pair) and "A x B" (interaction). Hyphens inside a symbol are not split.
GENE_DELIMITERS = re.compile(r"[,;]| - | x ")

# Values meaning "no gene" rather than a symbol
GENE_PLACEHOLDERS = frozenset({"nr", "intergenic"})


def split_genes(value: Optional[str]) -> FrozenSet[str]:
    """
    Split a multi-valued gene column into a set of symbols.

    Entries are separated by ',' ';' ' - ' or ' x ', whitespace-trimmed,
    and empty entries or the placeholders NR / intergenic are dropped.

    Args:
        value: Raw column text

    Returns:
        Frozen set of gene symbols, possibly empty
    """
    if not value:
        return frozenset()
    genes = set()
    for entry in GENE_DELIMITERS.split(value):
        symbol = entry.strip()
        if symbol and symbol.lower() not in GENE_PLACEHOLDERS:
            genes.add(symbol)
    return frozenset(genes)


def unwrap_payload(raw: bytes) -> bytes:
    """
    Return the tabular bytes inside a zip or gzip payload.

    Plain text is returned unchanged.
    """
    if raw[:4] == b"PK\x03\x04":
        with zipfile.ZipFile(io.BytesIO(raw)) as archive:
            members = [name for name in archive.namelist() if not name.endswith("/")]
            tables = [name for name in members if name.lower().endswith((".tsv", ".txt"))]
            if not tables and not members:
                return b""
            name = (tables or members)[0]
            log.debug(f"Reading {name} from zip payload")
            return archive.read(name)
    if raw[:2] == b"\x1f\x8b":
        return gzip.decompress(raw)
    return raw


class CatalogParser:
    """Parses the raw GWAS catalog associations file."""

    def __init__(self, delimiter: str = FIELD_DELIMITER):
        """
        Initialize the catalog parser.

        Args:
            delimiter: Field delimiter of the associations file
        """
        self.delimiter = delimiter

    def parse(self, raw: bytes) -> Catalog:
        """
        Parse raw catalog bytes.

        Args:
            raw: Payload as fetched (plain, zip or gzip)

        Returns:
            Catalog in file row order

        Raises:
            ParseError: MALFORMED_HEADER if required columns are missing,
                EMPTY_INPUT if there is no usable data row
        """
        try:
            text = unwrap_payload(raw).decode("utf-8", errors="replace")
        except (zipfile.BadZipFile, zlib.error, OSError, EOFError) as e:
            raise ParseError(ParseErrorKind.EMPTY_INPUT, "Catalog archive is unreadable", details=str(e)) from e

        lines = [line.rstrip("\r") for line in text.lstrip("\ufeff").split("\n")]
        header_index = next((i for i, line in enumerate(lines) if line.strip()), None)
        if header_index is None:
            raise ParseError(ParseErrorKind.EMPTY_INPUT, "Catalog file is empty")

        header = [name.strip() for name in lines[header_index].split(self.delimiter)]
        self._validate_header(header)

        associations: List[Association] = []
        skipped = 0
        for line in lines[header_index + 1:]:
            if not line.strip():
                continue
            fields = line.split(self.delimiter)
            if len(fields) != len(header):
                skipped += 1
                continue
            association = self._to_association(dict(zip(header, fields)))
            if association is None:
                skipped += 1
                continue
            associations.append(association)

        if skipped:
            log.warning(f"Skipped {skipped} malformed catalog rows")
        if not associations:
            raise ParseError(
                ParseErrorKind.EMPTY_INPUT,
                "Catalog contains no usable association rows",
                details=f"{skipped} rows skipped" if skipped else None,
            )

        log.info(f"Parsed {len(associations)} associations")
        return Catalog(associations=tuple(associations), skipped_rows=skipped)

    @staticmethod
    def _validate_header(header: List[str]):
        missing = [column for column in REQUIRED_COLUMNS if column not in header]
        if missing:
            raise ParseError(
                ParseErrorKind.MALFORMED_HEADER,
                "Catalog header does not match the expected schema",
                details=f"missing columns: {', '.join(missing)}",
            )

    @staticmethod
    def _to_association(record: dict) -> Optional[Association]:
        trait = record[MAPPED_TRAIT_COLUMN].strip() or record[TRAIT_COLUMN].strip()
        if not trait:
            return None

        genes = split_genes(record[REPORTED_GENES_COLUMN]) | split_genes(record[MAPPED_GENE_COLUMN])
        details = {
            column: value
            for column, value in record.items()
            if column not in (MAPPED_TRAIT_COLUMN, PUBMED_COLUMN)
        }
        return Association(
            trait_name=trait,
            reported_genes=genes,
            pubmed_id=record[PUBMED_COLUMN].strip(),
            full_details=details,
        )
