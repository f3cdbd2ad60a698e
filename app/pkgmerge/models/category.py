"""Category models for grouping merged items.

Categories are either API tiers (tools, one per API level, extras) or
catalog sources, depending on the active SortMode.
"""

from dataclasses import dataclass
from enum import Enum

from pkgmerge.models.item import MergedItem
from pkgmerge.models.package import Source


class SortMode(Enum):
    """Grouping strategy for the display projection."""

    API = "api"
    SOURCE = "source"


class TierKind(Enum):
    """Kind of API tier, in display order."""

    TOOLS = 0
    API = 1
    EXTRAS = 2


@dataclass(frozen=True, slots=True)
class ApiTier:
    """Category key in API mode.

    Attributes:
        kind: Tools, a numeric API level, or extras.
        api_level: API level when kind is API.
    """

    kind: TierKind
    api_level: int | None = None

    @property
    def label(self) -> str:
        if self.kind == TierKind.TOOLS:
            return "Tools"
        if self.kind == TierKind.EXTRAS:
            return "Extras"
        return f"API {self.api_level}"

    @property
    def sort_key(self) -> tuple[int, int]:
        """Tools first, API levels descending, extras last."""
        return (self.kind.value, -(self.api_level or 0))


TOOLS_TIER = ApiTier(TierKind.TOOLS)
EXTRAS_TIER = ApiTier(TierKind.EXTRAS)

# None stands for installed packages whose source is unknown
CategoryKey = ApiTier | Source | None

LOCAL_PACKAGES_LABEL = "Local Packages"


@dataclass(frozen=True, slots=True)
class Category:
    """A named, ordered group of merged items.

    Attributes:
        key: ApiTier in API mode; Source or None in source mode.
        label: Display label.
        items: Items in display order.
    """

    key: CategoryKey
    label: str
    items: tuple[MergedItem, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Check if the category holds no items."""
        return not self.items

    def __str__(self) -> str:
        return f"{self.label} (#items={len(self.items)})"
