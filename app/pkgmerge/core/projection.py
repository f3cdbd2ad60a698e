"""Read-only display projection of the merged package view.

This module provides the Projection snapshot handed to rendering code
after each reconciliation transaction.
"""

from dataclasses import dataclass
from typing import Any

from pkgmerge.models.category import Category, CategoryKey, SortMode
from pkgmerge.models.item import ItemState, MergedItem
from pkgmerge.models.package import LogicalIdentity


@dataclass(frozen=True, slots=True)
class Projection:
    """Ordered categories of merged items.

    Attributes:
        mode: Grouping strategy that produced the categories.
        categories: Categories in display order.
        version: Session counter, bumped each time a different
            projection is published. Equal versions mean equal content.
    """

    mode: SortMode
    categories: tuple[Category, ...] = ()
    version: int = 0

    @property
    def item_count(self) -> int:
        """Total number of items across all categories."""
        return sum(len(category.items) for category in self.categories)

    def items(self) -> list[MergedItem]:
        """All items, in display order."""
        return [item for category in self.categories for item in category.items]

    def find(self, identity: LogicalIdentity) -> MergedItem | None:
        """Find the item for a logical identity.

        Args:
            identity: Identity to look up.

        Returns:
            The merged item, or None if it is not displayed.
        """
        for item in self.items():
            if item.identity == identity:
                return item
        return None

    def category(self, key: CategoryKey) -> Category | None:
        """Find the category with the given key."""
        for category in self.categories:
            if type(category.key) is type(key) and category.key == key:
                return category
        return None

    def same_content(self, other: "Projection") -> bool:
        """Compare what a display would show, ignoring the version counter."""
        return self.mode == other.mode and _visible(self.categories) == _visible(other.categories)

    def count_by_state(self) -> dict[ItemState, int]:
        """Count items per display state."""
        counts = dict.fromkeys(ItemState, 0)
        for item in self.items():
            counts[item.state] += 1
        return counts

    def render(self) -> str:
        """Render the projection as a plain text tree.

        Each category is a line followed by one ``-- `` line per item.

        Returns:
            Text with one trailing newline per line, empty when there
            are no categories.
        """
        lines: list[str] = []
        for category in self.categories:
            lines.append(str(category))
            lines.extend(f"-- {item}" for item in category.items)
        return "".join(f"{line}\n" for line in lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        counts = self.count_by_state()
        return {
            "mode": self.mode.value,
            "version": self.version,
            "summary": {
                "installed": counts[ItemState.INSTALLED],
                "updates": counts[ItemState.UPDATE],
                "new": counts[ItemState.NEW],
                "total": self.item_count,
            },
            "categories": [
                {
                    "label": category.label,
                    "items": [_item_to_dict(item) for item in category.items],
                }
                for category in self.categories
            ],
        }


def _visible(categories: tuple[Category, ...]) -> list[tuple[object, ...]]:
    return [
        (type(c.key), c.key, c.label, [item.visible_state for item in c.items]) for c in categories
    ]


def _item_to_dict(item: MergedItem) -> dict[str, Any]:
    """Convert a MergedItem to a dictionary.

    Args:
        item: The item to convert.

    Returns:
        Dictionary with non-None fields.
    """
    result: dict[str, Any] = {
        "title": item.display.title,
        "type": item.identity.package_type.value,
        "state": item.state.value,
    }
    if item.installed_revision is not None:
        result["installed_revision"] = item.installed_revision
    if item.remote_revision is not None:
        result["remote_revision"] = item.remote_revision
    if item.source is not None:
        result["source"] = item.source.url
    return result
