"""Shared Rich display functions for the merged package view.

Provides the tree builder and summary printer used by the show command.
"""

from rich.markup import escape
from rich.tree import Tree

from pkgmerge.core.projection import Projection
from pkgmerge.core.refresh import RefreshResult
from pkgmerge.models.category import SortMode
from pkgmerge.models.item import ItemState, MergedItem
from pkgmerge.utils.formatting import console, print_warning


def format_item(item: MergedItem) -> str:
    """Format a merged item as a tree line with Rich markup.

    Installed items show a filled circle, items with an update an arrow
    and the offered revision, new items a plus sign.

    Args:
        item: The merged item to format.

    Returns:
        Rich markup string.
    """
    title = escape(item.display.title)
    state = item.state

    if state == ItemState.NEW:
        return f"[new]+[/] [new]{title}[/] [muted]rev {item.remote_revision}[/]"
    if state == ItemState.UPDATE:
        return (
            f"[update]↑[/] {title} [muted]rev {item.installed_revision}[/]"
            f" → [update]rev {item.remote_revision}[/]"
        )
    return f"[installed]●[/] {title} [muted]rev {item.installed_revision}[/]"


def create_projection_tree(projection: Projection, updates_only: bool = False) -> Tree:
    """Create a Rich tree displaying categories and their items.

    Args:
        projection: The projection to display.
        updates_only: Only show items with an available update or new items.

    Returns:
        Rich Tree with one branch per category.
    """
    title = "Packages by API level" if projection.mode == SortMode.API else "Packages by source"
    tree = Tree(f"[bold_header]{title}[/]", guide_style="border")

    for category in projection.categories:
        items = [item for item in category.items if item.has_update or not updates_only]
        if updates_only and not items:
            continue
        branch = tree.add(f"[category]{escape(category.label)}[/] [muted]({len(items)})[/]")
        for item in items:
            branch.add(format_item(item))

    return tree


def print_projection_summary(projection: Projection) -> None:
    """Print counts of installed, updatable and new packages.

    Args:
        projection: The projection to summarize.
    """
    counts = projection.count_by_state()
    parts: list[str] = [f"[installed]{counts[ItemState.INSTALLED]} installed[/]"]
    if counts[ItemState.UPDATE]:
        parts.append(f"[update]{counts[ItemState.UPDATE]} with updates[/]")
    if counts[ItemState.NEW]:
        parts.append(f"[new]{counts[ItemState.NEW]} new[/]")

    console.print(f"\nSummary: {', '.join(parts)} ({projection.item_count} total)")


def print_skipped(result: RefreshResult) -> None:
    """Print a warning for each source that did not deliver a batch.

    Args:
        result: The refresh result.
    """
    for skipped in result.skipped:
        print_warning(f"Skipped {skipped.label}: {skipped.reason}")
