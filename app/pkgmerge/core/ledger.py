"""Merge ledger for installed and remote package records.

This module provides the MergeLedger class that keeps, per logical
identity, the installed record and the best record offered by each
remote source, and derives MergedItem values from them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pkgmerge.models.item import MergedItem
from pkgmerge.models.package import LogicalIdentity, PackageRecord, Source

logger = logging.getLogger(__name__)


def _source_order(source: Source) -> tuple[str, str, str]:
    return (*source.sort_key, source.url)


def reduce_batch(records: Iterable[PackageRecord]) -> dict[LogicalIdentity, PackageRecord]:
    """Keep the highest revision of each logical identity in a batch.

    The result does not depend on the order of the records. A record
    with the same identity and revision as one already kept is treated
    as a duplicate and ignored.

    Args:
        records: Package records of one batch.

    Returns:
        Dictionary of identity to its highest-revision record.
    """
    best: dict[LogicalIdentity, PackageRecord] = {}
    for record in records:
        identity = record.identity
        current = best.get(identity)
        if current is None or record.revision > current.revision:
            best[identity] = record
    return best


class MergeLedger:
    """Per-identity store of installed and remote package records.

    Each batch key (None for the local inventory, or a Source) owns an
    attribution: the records it reported in its most recent batch. A new
    batch for a key fully replaces that key's attribution and never
    touches the attribution of other keys.

    Example:
        >>> ledger = MergeLedger()
        >>> ledger.apply_batch(None, [PackageRecord(PackageType.TOOL, 10)])
        True
        >>> ledger.apply_batch(repo, [PackageRecord(PackageType.TOOL, 11, repo)])
        True
        >>> ledger.item(LogicalIdentity(PackageType.TOOL)).has_update
        True
    """

    def __init__(self) -> None:
        self._installed: dict[LogicalIdentity, PackageRecord] = {}
        self._remote: dict[Source, dict[LogicalIdentity, PackageRecord]] = {}

    def __len__(self) -> int:
        return len(self.identities())

    def __contains__(self, identity: object) -> bool:
        return identity in self._installed or any(
            identity in records for records in self._remote.values()
        )

    @property
    def sources(self) -> tuple[Source, ...]:
        """Sources that currently offer at least one package."""
        return tuple(sorted(self._remote, key=_source_order))

    def attributed_keys(self) -> set[Source | None]:
        """Batch keys that currently own records.

        Returns:
            Set of sources, plus None when local records exist.
        """
        keys: set[Source | None] = set(self._remote)
        if self._installed:
            keys.add(None)
        return keys

    def attribution(self, source: Source | None) -> dict[LogicalIdentity, PackageRecord]:
        """Records currently attributed to a batch key.

        Args:
            source: Source, or None for the local inventory.

        Returns:
            Copy of the identity-to-record mapping for that key.
        """
        if source is None:
            return dict(self._installed)
        return dict(self._remote.get(source, {}))

    def identities(self) -> set[LogicalIdentity]:
        """All identities that have an installed or remote record."""
        identities = set(self._installed)
        for records in self._remote.values():
            identities.update(records)
        return identities

    def apply_batch(
        self,
        source: Source | None,
        records: Iterable[PackageRecord],
        *,
        track_source: bool = True,
    ) -> bool:
        """Replace a key's attribution with a full batch snapshot.

        Args:
            source: Source of the batch, or None for the local inventory.
            records: Complete current package list for that key.
            track_source: Count a change of attributed source as a change.
                Only source grouping displays it.

        Returns:
            True if a merged item was added or removed, or the visible
            state of an existing item changed.
        """
        batch = reduce_batch(records)
        affected = set(self.attribution(source)) | set(batch)

        before = self._visible_states(affected, track_source)
        self._set_attribution(source, batch)
        after = self._visible_states(affected, track_source)

        changed = before != after
        logger.debug(
            "Merged batch from %s: %d record(s), %d affected, changed=%s",
            source.short_label if source is not None else "local",
            len(batch),
            len(affected),
            changed,
        )
        return changed

    def drop(self, source: Source | None) -> bool:
        """Remove every record attributed to a batch key.

        Args:
            source: Source to drop, or None for the local inventory.

        Returns:
            True if anything was removed.
        """
        return self.apply_batch(source, ())

    def item(self, identity: LogicalIdentity) -> MergedItem | None:
        """Derive the merged item for an identity.

        Across sources the highest remote revision wins; ties go to the
        source that sorts first.

        Args:
            identity: Logical identity to look up.

        Returns:
            MergedItem, or None if no record exists for the identity.
        """
        return self._merge(identity, self.sources)

    def items(self) -> list[MergedItem]:
        """Derive all merged items, in no particular order."""
        sources = self.sources
        merged = (self._merge(identity, sources) for identity in self.identities())
        return [item for item in merged if item is not None]

    def _visible_states(
        self, identities: set[LogicalIdentity], track_source: bool
    ) -> dict[LogicalIdentity, object]:
        sources = self.sources
        states: dict[LogicalIdentity, object] = {}
        for identity in identities:
            item = self._merge(identity, sources)
            if item is None:
                states[identity] = None
            elif track_source:
                states[identity] = item.visible_state
            else:
                states[identity] = item.display_state
        return states

    def _merge(self, identity: LogicalIdentity, sources: tuple[Source, ...]) -> MergedItem | None:
        installed = self._installed.get(identity)
        best: PackageRecord | None = None
        best_source: Source | None = None
        for source in sources:
            record = self._remote[source].get(identity)
            if record is not None and (best is None or record.revision > best.revision):
                best = record
                best_source = source

        if installed is None and best is None:
            return None
        return MergedItem(identity, installed=installed, remote=best, remote_source=best_source)

    def _set_attribution(
        self, source: Source | None, batch: dict[LogicalIdentity, PackageRecord]
    ) -> None:
        if source is None:
            self._installed = batch
            return
        # Re-insert so the stored key carries the latest source name
        self._remote.pop(source, None)
        if batch:
            self._remote[source] = batch
