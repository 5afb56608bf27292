"""
Claim catalogs.

Provides the JSON catalog provider and the constants shared by catalog
tooling and the CLI.
"""

from claimcheck.catalog.constants import AI_ERROR_PATTERNS, ALL_SUBJECTS, DIFFICULTY_CONFIG
from claimcheck.catalog.loader import CatalogReport, ClaimCatalog, load_contributed

__all__ = [
    "AI_ERROR_PATTERNS",
    "ALL_SUBJECTS",
    "CatalogReport",
    "ClaimCatalog",
    "DIFFICULTY_CONFIG",
    "load_contributed",
]
