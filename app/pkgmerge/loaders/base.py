"""Abstract base class for package loaders.

This module defines the Loader interface that supplies one batch of
package records (the local inventory or a remote catalog snapshot) to
the reconciliation session.
"""

from abc import ABC, abstractmethod

from pkgmerge.models.package import PackageRecord, Source


class Loader(ABC):
    """Abstract base class for all package loaders.

    A loader returns the complete current package list for one batch
    key: the local inventory (source is None) or a remote source.

    Example:
        >>> loader = TomlCatalogLoader(Path("repo.toml"), source=repo)
        >>> if loader.is_available():
        ...     records = loader.load()
    """

    @property
    @abstractmethod
    def source(self) -> Source | None:
        """Return the batch key this loader feeds.

        Returns:
            Source of a remote catalog, or None for the local inventory.
        """

    @abstractmethod
    def load(self) -> list[PackageRecord]:
        """Load the full package snapshot.

        Returns:
            Package records of this batch.

        Raises:
            CatalogError: If the snapshot cannot be read or is invalid.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the snapshot can be loaded.

        Returns:
            True if load() is expected to succeed, False otherwise.
        """

    @property
    def is_local(self) -> bool:
        """Check if this loader feeds the local inventory."""
        return self.source is None

    @property
    def label(self) -> str:
        """Human-readable name of the batch key."""
        if self.source is None:
            return "local inventory"
        return self.source.short_label
