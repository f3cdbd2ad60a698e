"""Merged item model.

A MergedItem is the reconciled state of one logical package: what is
installed locally and the best revision offered by any remote source.
"""

from dataclasses import dataclass
from enum import Enum
from typing import cast

from pkgmerge.models.package import LogicalIdentity, PackageRecord, Source


class ItemState(Enum):
    """Display state of a merged item.

    Attributes:
        INSTALLED: Installed, no newer remote revision.
        UPDATE: Installed, a newer remote revision is available.
        NEW: Offered by a remote source, not installed.
    """

    INSTALLED = "installed"
    UPDATE = "update"
    NEW = "new"

    @property
    def tag(self) -> str:
        """Short uppercase tag used in text renderings."""
        if self == ItemState.NEW:
            return "NEW"
        return "INSTALLED"


@dataclass(frozen=True, slots=True)
class MergedItem:
    """Reconciled installed and remote state for one logical identity.

    Attributes:
        identity: Logical identity shared by both records.
        installed: Installed record, if any.
        remote: Highest-revision record offered by a remote source, if any.
        remote_source: Source whose batch offered the remote record.
    """

    identity: LogicalIdentity
    installed: PackageRecord | None = None
    remote: PackageRecord | None = None
    remote_source: Source | None = None

    def __post_init__(self) -> None:
        """Validate item data after initialization."""
        if self.installed is None and self.remote is None:
            msg = "Merged item needs an installed or a remote record"
            raise ValueError(msg)

    @property
    def state(self) -> ItemState:
        """Derive the display state from both revisions."""
        if self.installed is None:
            return ItemState.NEW
        if self.remote is not None and self.remote.revision > self.installed.revision:
            return ItemState.UPDATE
        return ItemState.INSTALLED

    @property
    def has_update(self) -> bool:
        """Check if the remote revision is worth installing."""
        return self.state != ItemState.INSTALLED

    @property
    def update(self) -> PackageRecord | None:
        """Remote record when it is newer than the install, else None."""
        return self.remote if self.has_update else None

    @property
    def installed_revision(self) -> int | None:
        """Installed revision, if installed."""
        return self.installed.revision if self.installed is not None else None

    @property
    def remote_revision(self) -> int | None:
        """Best remote revision, if any source offers one."""
        return self.remote.revision if self.remote is not None else None

    @property
    def display(self) -> PackageRecord:
        """Record that describes the item: the install, else the remote."""
        return cast(PackageRecord, self.installed or self.remote)

    @property
    def source(self) -> Source | None:
        """Source the item is attributed to, None when unknown."""
        if self.remote is not None:
            return self.remote_source or self.remote.source
        if self.installed is not None:
            return self.installed.source
        return None

    @property
    def display_state(self) -> tuple[object, ...]:
        """What a display shows for this item, wherever it is grouped.

        A remote record that does not exceed the install is not part of
        it.
        """
        return (self.state, self.display, self.update)

    @property
    def visible_state(self) -> tuple[object, ...]:
        """Display state plus the attributed source, which picks the source category."""
        return (*self.display_state, self.source)

    def __str__(self) -> str:
        text = f"<{self.state.tag}, pkg:{self.display.label}"
        if self.state == ItemState.UPDATE and self.remote is not None:
            text += f", updated by:{self.remote.label}"
        return text + ">"
