"""Package loaders feeding batches into a reconciliation session.

This module exports the loader classes and their errors.
"""

from pkgmerge.loaders.base import Loader
from pkgmerge.loaders.toml_catalog import (
    CatalogError,
    CatalogNotFoundError,
    CatalogParseError,
    CatalogValidationError,
    TomlCatalogLoader,
    load_catalog,
)

__all__ = [
    "CatalogError",
    "CatalogNotFoundError",
    "CatalogParseError",
    "CatalogValidationError",
    "Loader",
    "TomlCatalogLoader",
    "load_catalog",
]
