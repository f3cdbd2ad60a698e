"""Reconciliation session and transaction protocol.

This module provides the PackagesSession class. A caller opens a
transaction with update_start(), submits one full snapshot per batch key
(the local inventory, then each remote source) with
update_source_packages(), and closes it with update_end(), which
publishes a new Projection.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from pkgmerge.core.categorizer import get_categorizer
from pkgmerge.core.ledger import MergeLedger
from pkgmerge.core.projection import Projection
from pkgmerge.models.category import Category, SortMode
from pkgmerge.models.item import MergedItem
from pkgmerge.models.package import PackageRecord, Source

logger = logging.getLogger(__name__)

_session_ids = itertools.count(1)


class TransactionError(Exception):
    """Raised when the transaction protocol is used incorrectly."""


@dataclass(eq=False)
class UpdateOp:
    """Handle for one update_start ... update_end transaction.

    Attributes:
        mode: Sort mode selected for this transaction.
        serial: Transaction number within its session.
        baseline: Projection published before the transaction started.
        submitted: Batch keys submitted so far (None for local).
        finished: Whether update_end has been called.
        abandoned: Whether a newer transaction replaced this one.
    """

    mode: SortMode
    serial: int
    baseline: Projection
    session_id: int = field(repr=False)
    submitted: set[Source | None] = field(default_factory=set)
    finished: bool = False
    abandoned: bool = False


class PackagesSession:
    """Merged, categorized view of installed and remote packages.

    The session owns the merge ledger, one category partition per sort
    mode (only the active one is populated) and the last published
    projection. It is not thread-safe: calls must be serialized.

    Example:
        >>> session = PackagesSession()
        >>> op = session.update_start(SortMode.API)
        >>> session.update_source_packages(op, None, installed)
        True
        >>> session.update_source_packages(op, repo, offered)
        True
        >>> session.update_end(op)
        True
        >>> print(session.projection.render())
    """

    def __init__(self) -> None:
        self._id = next(_session_ids)
        self._ledger = MergeLedger()
        self._mode = SortMode.API
        self._partitions: dict[SortMode, tuple[Category, ...]] = {mode: () for mode in SortMode}
        self._serial = 0
        self._active: UpdateOp | None = None
        self._partitions[self._mode] = get_categorizer(self._mode).categorize(())
        self._published = Projection(self._mode, self._partitions[self._mode], version=0)

    @property
    def mode(self) -> SortMode:
        """Sort mode of the most recent transaction."""
        return self._mode

    @property
    def version(self) -> int:
        """Counter bumped each time a different projection is published."""
        return self._published.version

    @property
    def projection(self) -> Projection:
        """Projection published by the last update_end."""
        return self._published

    @property
    def ledger(self) -> MergeLedger:
        """Underlying merge ledger."""
        return self._ledger

    def partition(self, mode: SortMode) -> tuple[Category, ...]:
        """Current categories of a sort mode, empty if the mode is inactive."""
        return self._partitions[mode]

    def live_projection(self) -> Projection:
        """Projection of the current, possibly unfinished, state."""
        return Projection(self._mode, self._partitions[self._mode], self._published.version)

    def items(self) -> list[MergedItem]:
        """Merged items in display order of the active partition."""
        return [item for category in self._partitions[self._mode] for item in category.items]

    def update_start(self, mode: SortMode) -> UpdateOp:
        """Open a reconciliation transaction.

        Switching mode discards the partition of the previous mode but
        keeps the merged items. An open transaction is abandoned.

        Args:
            mode: Grouping strategy for this transaction.

        Returns:
            Handle to pass to the other update calls.
        """
        if self._active is not None:
            logger.debug("Abandoning unfinished transaction #%d", self._active.serial)
            self._active.abandoned = True
            self._active = None

        if mode != self._mode:
            logger.debug("Switching sort mode %s -> %s", self._mode.value, mode.value)
            self._partitions[self._mode] = ()
            self._mode = mode
        self._refresh_partition()

        self._serial += 1
        op = UpdateOp(
            mode=mode,
            serial=self._serial,
            baseline=self._published,
            session_id=self._id,
        )
        self._active = op
        logger.debug("Started transaction #%d (%s)", op.serial, mode.value)
        return op

    def update_source_packages(
        self,
        op: UpdateOp,
        source: Source | None,
        packages: Iterable[PackageRecord],
    ) -> bool:
        """Merge one batch snapshot into the session.

        Args:
            op: Handle returned by update_start().
            source: Source of the batch, or None for the local inventory.
            packages: Complete current package list for that key.

        Returns:
            True if the batch changed the merged items.

        Raises:
            TransactionError: If the handle is not the open transaction.
        """
        self._check(op)
        changed = self._ledger.apply_batch(
            source, packages, track_source=self._mode == SortMode.SOURCE
        )
        op.submitted.add(source)
        self._refresh_partition()
        return changed

    def update_end(self, op: UpdateOp) -> bool:
        """Close a transaction and publish the new projection.

        Batch keys that were not submitted during the transaction lose
        their records. Empty source categories are pruned; the tools and
        extras tiers are kept in API mode.

        Args:
            op: Handle returned by update_start().

        Returns:
            True if the published projection differs from the one
            published before the transaction started.

        Raises:
            TransactionError: If the handle is not the open transaction.
        """
        self._check(op)

        for key in self._ledger.attributed_keys() - op.submitted:
            logger.debug(
                "Sweeping records of %s, not submitted in transaction #%d",
                key.short_label if key is not None else "local",
                op.serial,
            )
            self._ledger.drop(key)
        self._refresh_partition()

        candidate = Projection(self._mode, self._partitions[self._mode], op.baseline.version)
        changed = not candidate.same_content(op.baseline)
        version = op.baseline.version + 1 if changed else op.baseline.version
        self._published = Projection(self._mode, self._partitions[self._mode], version)

        op.finished = True
        self._active = None
        logger.debug(
            "Finished transaction #%d: %d item(s), changed=%s",
            op.serial,
            self._published.item_count,
            changed,
        )
        return changed

    def _check(self, op: UpdateOp) -> None:
        if op.session_id != self._id:
            msg = f"Transaction #{op.serial} belongs to another session"
            raise TransactionError(msg)
        if op.finished:
            msg = f"Transaction #{op.serial} is already finished"
            raise TransactionError(msg)
        if op.abandoned or op is not self._active:
            msg = f"Transaction #{op.serial} was replaced by a newer transaction"
            raise TransactionError(msg)

    def _refresh_partition(self) -> None:
        categorizer = get_categorizer(self._mode)
        self._partitions[self._mode] = categorizer.categorize(
            self._ledger.items(), previous=self._partitions[self._mode]
        )
