"""Refresh driver running loaders through a reconciliation transaction.

This module wires loaders to a PackagesSession: the local inventory is
submitted first, then each remote source. A loader that is unavailable
or fails is skipped, which the session treats as a batch that never
arrived.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from pkgmerge.core.projection import Projection
from pkgmerge.core.reconciler import PackagesSession
from pkgmerge.loaders.base import Loader
from pkgmerge.loaders.toml_catalog import CatalogError, TomlCatalogLoader
from pkgmerge.models.category import SortMode
from pkgmerge.models.config import AppConfig
from pkgmerge.models.package import Source

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BatchOutcome:
    """Result of submitting one batch.

    Attributes:
        source: Batch key, None for the local inventory.
        count: Number of records submitted.
        changed: Whether the batch changed the merged items.
    """

    source: Source | None
    count: int
    changed: bool


@dataclass(frozen=True, slots=True)
class SkippedBatch:
    """A loader whose batch was not submitted.

    Attributes:
        label: Human-readable batch name.
        reason: Why the batch was skipped.
    """

    label: str
    reason: str


@dataclass(frozen=True, slots=True)
class RefreshResult:
    """Outcome of a full refresh.

    Attributes:
        batches: Submitted batches, in submission order.
        skipped: Loaders that did not deliver a batch.
        changed: Value returned by update_end().
        projection: Projection published by the transaction.
    """

    batches: tuple[BatchOutcome, ...]
    skipped: tuple[SkippedBatch, ...]
    changed: bool
    projection: Projection

    @property
    def any_batch_changed(self) -> bool:
        """Check if at least one batch changed the merged items."""
        return any(batch.changed for batch in self.batches)


def refresh(
    session: PackagesSession,
    mode: SortMode,
    local: Loader | None,
    remotes: Sequence[Loader] = (),
) -> RefreshResult:
    """Run one reconciliation transaction over a set of loaders.

    Args:
        session: Session to update.
        mode: Sort mode for the transaction.
        local: Loader for the local inventory. If None, an empty local
            batch is submitted (nothing installed).
        remotes: Loaders for the remote sources.

    Returns:
        RefreshResult describing what was submitted and published.
    """
    op = session.update_start(mode)
    batches: list[BatchOutcome] = []
    skipped: list[SkippedBatch] = []

    if local is None:
        changed = session.update_source_packages(op, None, [])
        batches.append(BatchOutcome(source=None, count=0, changed=changed))

    for loader in ([local] if local is not None else []) + list(remotes):
        if not loader.is_available():
            logger.warning("Skipping %s: snapshot not available", loader.label)
            skipped.append(SkippedBatch(loader.label, "not available"))
            continue

        try:
            records = loader.load()
        except CatalogError as e:
            logger.warning("Skipping %s: %s", loader.label, e)
            skipped.append(SkippedBatch(loader.label, str(e)))
            continue

        changed = session.update_source_packages(op, loader.source, records)
        batches.append(BatchOutcome(source=loader.source, count=len(records), changed=changed))

    changed = session.update_end(op)
    return RefreshResult(
        batches=tuple(batches),
        skipped=tuple(skipped),
        changed=changed,
        projection=session.projection,
    )


def build_loaders(config: AppConfig, base_dir: Path) -> tuple[Loader | None, list[Loader]]:
    """Create loaders for the inventory and sources of a configuration.

    Relative paths are resolved against ``base_dir`` (the directory of
    the configuration file).

    Args:
        config: Loaded configuration.
        base_dir: Directory relative paths are resolved against.

    Returns:
        Tuple of (local loader or None, remote loaders).
    """
    known = config.known_sources()

    local: Loader | None = None
    if config.inventory is not None:
        local = TomlCatalogLoader(base_dir / config.inventory, known_sources=known)

    remotes: list[Loader] = [
        TomlCatalogLoader(base_dir / entry.catalog, source=known[entry.url])
        for entry in config.sources
    ]
    return local, remotes
