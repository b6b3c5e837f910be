"""
Product extraction modules.
"""
from .catalog_extractor import CatalogExtractor, FieldLookup

__all__ = [
    "CatalogExtractor",
    "FieldLookup",
]
