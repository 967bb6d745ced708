"""
search-gwas: search the GWAS Catalog locally by trait and gene.
"""

__version__ = "0.1.0"
