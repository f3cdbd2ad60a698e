"""Categorizers that partition merged items for display.

Two strategies are provided: grouping by API tier and grouping by the
source that offers each package. Both produce categories and items in
a deterministic order and reuse unchanged Category objects from the
previous pass.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, cast

from pkgmerge.models.category import (
    EXTRAS_TIER,
    LOCAL_PACKAGES_LABEL,
    TOOLS_TIER,
    ApiTier,
    Category,
    CategoryKey,
    SortMode,
    TierKind,
)
from pkgmerge.models.item import MergedItem
from pkgmerge.models.package import PackageRecord, PackageType, Source

_TYPE_RANK = {ptype: rank for rank, ptype in enumerate(PackageType)}


def tier_for(record: PackageRecord) -> ApiTier:
    """Get the API tier a package record belongs to.

    Tools and platform-tools go to the tools tier, API-keyed packages
    (platforms, addons, samples, docs) to their API level, anything else
    to extras. Addons are therefore grouped with their platform.

    Args:
        record: The package record.

    Returns:
        ApiTier for the record.
    """
    if record.package_type.is_tool:
        return TOOLS_TIER
    if record.package_type.is_api_keyed:
        return ApiTier(TierKind.API, record.api_level)
    return EXTRAS_TIER


def item_sort_key(item: MergedItem) -> tuple[Any, ...]:
    """Sort key placing items in display order.

    Orders by tier (tools, API descending, extras), then by package type
    (platforms before addons), then addons by name and extras by vendor.

    Args:
        item: The merged item.

    Returns:
        Tuple usable as a sort key.
    """
    record = item.display
    ptype = record.package_type
    if ptype == PackageType.ADDON:
        names = (record.name.casefold(), record.vendor.casefold())
    else:
        names = (record.vendor.casefold(), record.name.casefold())
    return (*tier_for(record).sort_key, _TYPE_RANK[ptype], *names)


class Categorizer(ABC):
    """Abstract base class for categorization strategies.

    Subclasses decide which category an item belongs to and how
    categories are labelled and ordered; the partitioning itself is
    shared.

    Example:
        >>> categorizer = ApiCategorizer()
        >>> categories = categorizer.categorize(ledger.items())
        >>> [c.label for c in categories]
        ['Tools', 'API 3', 'Extras']
    """

    @property
    @abstractmethod
    def mode(self) -> SortMode:
        """Return the SortMode this categorizer implements."""

    @abstractmethod
    def key_for(self, item: MergedItem) -> CategoryKey:
        """Return the category key of an item."""

    @abstractmethod
    def label_for(self, key: CategoryKey) -> str:
        """Return the display label of a category key."""

    @abstractmethod
    def key_order(self, key: CategoryKey) -> tuple[Any, ...]:
        """Return a sort key ordering category keys."""

    def permanent_keys(self) -> tuple[CategoryKey, ...]:
        """Category keys that are published even when empty."""
        return ()

    def categorize(
        self,
        items: Iterable[MergedItem],
        previous: Iterable[Category] = (),
    ) -> tuple[Category, ...]:
        """Partition items into ordered categories.

        A category equal to the one with the same key in ``previous`` is
        returned as that same object, so consumers can skip redrawing it.
        Empty categories are dropped unless their key is permanent.

        Args:
            items: Merged items to partition.
            previous: Categories published by the previous pass.

        Returns:
            Tuple of categories in display order.
        """
        groups: dict[CategoryKey, list[MergedItem]] = {key: [] for key in self.permanent_keys()}
        for item in items:
            groups.setdefault(self.key_for(item), []).append(item)

        reusable = {category.key: category for category in previous}
        categories: list[Category] = []
        for key in sorted(groups, key=self.key_order):
            category = Category(
                key=key,
                label=self.label_for(key),
                items=tuple(sorted(groups[key], key=item_sort_key)),
            )
            old = reusable.get(key)
            if old is not None and old == category:
                category = old
            categories.append(category)
        return tuple(categories)


class ApiCategorizer(Categorizer):
    """Group items by API tier: tools, API levels descending, extras."""

    @property
    def mode(self) -> SortMode:
        return SortMode.API

    def key_for(self, item: MergedItem) -> CategoryKey:
        return tier_for(item.display)

    def label_for(self, key: CategoryKey) -> str:
        return cast(ApiTier, key).label

    def key_order(self, key: CategoryKey) -> tuple[Any, ...]:
        return cast(ApiTier, key).sort_key

    def permanent_keys(self) -> tuple[CategoryKey, ...]:
        return (TOOLS_TIER, EXTRAS_TIER)


class SourceCategorizer(Categorizer):
    """Group items by the source that offers them.

    Installed items whose source is unknown are collected under a
    synthetic "Local Packages" category, listed first.
    """

    @property
    def mode(self) -> SortMode:
        return SortMode.SOURCE

    def key_for(self, item: MergedItem) -> CategoryKey:
        return item.source

    def label_for(self, key: CategoryKey) -> str:
        if key is None:
            return LOCAL_PACKAGES_LABEL
        return cast(Source, key).short_label

    def key_order(self, key: CategoryKey) -> tuple[Any, ...]:
        if key is None:
            return (0, "", "", "")
        source = cast(Source, key)
        return (1, *source.sort_key, source.url)


def get_categorizer(mode: SortMode) -> Categorizer:
    """Get the categorizer implementing a sort mode.

    Args:
        mode: The requested sort mode.

    Returns:
        Categorizer instance.
    """
    if mode == SortMode.API:
        return ApiCategorizer()
    return SourceCategorizer()
