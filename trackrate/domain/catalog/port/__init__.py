from .reader import CatalogReader

__all__ = ["CatalogReader"]
