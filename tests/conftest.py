"""
Test configuration for search-gwas.
"""

import sys
import pytest
from pathlib import Path

# Add src/ to Python path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

# Column layout of the GWAS Catalog "alternative" associations download
CATALOG_HEADER = [
    "DATE ADDED TO CATALOG", "PUBMEDID", "FIRST AUTHOR", "DATE", "JOURNAL", "LINK",
    "STUDY", "DISEASE/TRAIT", "INITIAL SAMPLE SIZE", "REPLICATION SAMPLE SIZE",
    "REGION", "CHR_ID", "CHR_POS", "REPORTED GENE(S)", "MAPPED_GENE",
    "UPSTREAM_GENE_ID", "DOWNSTREAM_GENE_ID", "SNP_GENE_IDS",
    "UPSTREAM_GENE_DISTANCE", "DOWNSTREAM_GENE_DISTANCE",
    "STRONGEST SNP-RISK ALLELE", "SNPS", "MERGED", "SNP_ID_CURRENT", "CONTEXT",
    "INTERGENIC", "RISK ALLELE FREQUENCY", "P-VALUE", "PVALUE_MLOG",
    "P-VALUE (TEXT)", "OR or BETA", "95% CI (TEXT)",
    "PLATFORM [SNPS PASSING QC]", "CNV", "MAPPED_TRAIT", "MAPPED_TRAIT_URI",
    "STUDY ACCESSION", "GENOTYPING TECHNOLOGY",
]

# (pubmed, disease/trait, reported genes, mapped gene, risk allele, p-value, OR, mapped trait, accession)
SAMPLE_ROWS = [
    ("30367059", "Hypothyroidism", "TSHR, PDE8B", "TSHR", "rs1111-A", "2E-20", "1.21",
     "Primary hypothyroidism", "GCST006898"),
    ("28928442", "Body mass index", "FTO", "FTO", "rs9939609-A", "1E-100", "0.08",
     "body mass index", "GCST004904"),
    ("31217584", "Ehlers-Danlos syndrome", "COL5A2", "COL5A2 - COL3A1", "rs2222-G", "3E-7", "1.5",
     "Ehlers-Danlos syndrome", "GCST008222"),
    ("30367059", "Hypothyroidism", "NR", "FOXE1", "rs3333-T", "4E-15", "1.3",
     "Primary hypothyroidism", "GCST006898"),
    ("24000001", "Breast cancer", "BRCA1; BRCA2", "BRCA1", "rs4444-C", "5E-9", "1.1",
     "breast carcinoma", "GCST002222"),
    ("33000002", "Thyroid function, \"TSH\" levels", "TSHR", "intergenic", "rs5555-A", "6E-5", "",
     "", "GCST010001"),
]


def make_row(pubmed, trait, reported, mapped, risk, p_value, effect, mapped_trait, accession):
    values = dict.fromkeys(CATALOG_HEADER, "")
    values.update({
        "PUBMEDID": pubmed,
        "LINK": f"www.ncbi.nlm.nih.gov/pubmed/{pubmed}",
        "DISEASE/TRAIT": trait,
        "REPORTED GENE(S)": reported,
        "MAPPED_GENE": mapped,
        "STRONGEST SNP-RISK ALLELE": risk,
        "P-VALUE": p_value,
        "OR or BETA": effect,
        "MAPPED_TRAIT": mapped_trait,
        "STUDY ACCESSION": accession,
    })
    return "\t".join(values[column] for column in CATALOG_HEADER)


def make_catalog_bytes(rows=SAMPLE_ROWS, header=CATALOG_HEADER, extra_lines=()):
    """Build a raw associations file from row tuples."""
    lines = ["\t".join(header)]
    lines += [make_row(*row) for row in rows]
    lines += list(extra_lines)
    return ("\n".join(lines) + "\n").encode("utf-8")


@pytest.fixture
def catalog_bytes():
    """Raw bytes of a small well-formed catalog."""
    return make_catalog_bytes()


@pytest.fixture
def catalog(catalog_bytes):
    """The sample catalog, parsed."""
    from search_gwas.catalog.parser import CatalogParser
    return CatalogParser().parse(catalog_bytes)


@pytest.fixture
def data_dir(tmp_path):
    """Return a temporary data directory for the catalog cache."""
    data_dir = tmp_path / "search-gwas"
    data_dir.mkdir()
    return data_dir
