"""Data models for pkgmerge.

This module exports the core data structures used throughout the application.
"""

from pkgmerge.models.catalog import CatalogEntry, CatalogFile
from pkgmerge.models.category import (
    EXTRAS_TIER,
    TOOLS_TIER,
    ApiTier,
    Category,
    CategoryKey,
    SortMode,
    TierKind,
)
from pkgmerge.models.config import AppConfig, SourceConfig
from pkgmerge.models.item import ItemState, MergedItem
from pkgmerge.models.package import LogicalIdentity, PackageRecord, PackageType, Source

__all__ = [
    "EXTRAS_TIER",
    "TOOLS_TIER",
    "ApiTier",
    "AppConfig",
    "CatalogEntry",
    "CatalogFile",
    "Category",
    "CategoryKey",
    "ItemState",
    "LogicalIdentity",
    "MergedItem",
    "PackageRecord",
    "PackageType",
    "SortMode",
    "Source",
    "SourceConfig",
    "TierKind",
]
