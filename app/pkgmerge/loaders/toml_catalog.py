"""TOML catalog snapshot loader.

Reads package lists that were fetched ahead of time and stored as TOML
files, validates them with Pydantic and converts them to PackageRecord
values.
"""

import logging
import tomllib
from pathlib import Path

from pydantic import ValidationError

from pkgmerge.loaders.base import Loader
from pkgmerge.models.catalog import CatalogEntry, CatalogFile
from pkgmerge.models.package import PackageRecord, Source

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base exception for catalog-related errors."""


class CatalogNotFoundError(CatalogError):
    """Raised when a catalog file is not found."""


class CatalogParseError(CatalogError):
    """Raised when a catalog file cannot be parsed."""


class CatalogValidationError(CatalogError):
    """Raised when catalog content is invalid."""


def load_catalog(path: Path) -> CatalogFile:
    """Load and validate a catalog snapshot from a TOML file.

    Args:
        path: Path to the catalog file.

    Returns:
        Validated CatalogFile object.

    Raises:
        CatalogNotFoundError: If the file doesn't exist.
        CatalogParseError: If the TOML syntax is invalid.
        CatalogValidationError: If the content doesn't match the schema.
    """
    if not path.exists():
        raise CatalogNotFoundError(f"Catalog not found: {path}")

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise CatalogParseError(f"Invalid TOML syntax in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise CatalogParseError(f"Catalog {path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise CatalogError(f"Failed to read catalog {path}: {e}") from e

    try:
        return CatalogFile.model_validate(data)
    except ValidationError as e:
        raise CatalogValidationError(f"Invalid catalog content in {path}: {e}") from e


class TomlCatalogLoader(Loader):
    """Loader for a catalog snapshot stored as TOML.

    With ``source=None`` the file is the local inventory; each entry may
    then name the URL of the source it was installed from, which is
    resolved against ``known_sources``. For a remote catalog every entry
    is attributed to the loader's source.
    """

    def __init__(
        self,
        path: Path,
        source: Source | None = None,
        known_sources: dict[str, Source] | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            path: Path to the TOML snapshot.
            source: Source of the catalog, None for the local inventory.
            known_sources: Configured sources by URL, used to resolve the
                origin of installed packages.
        """
        self._path = path
        self._source = source
        self._known_sources = known_sources or {}

    @property
    def source(self) -> Source | None:
        """Return the source this snapshot belongs to."""
        return self._source

    @property
    def path(self) -> Path:
        """Path of the snapshot file."""
        return self._path

    def is_available(self) -> bool:
        """Check if the snapshot file exists."""
        return self._path.is_file()

    def load(self) -> list[PackageRecord]:
        """Load all package records from the snapshot.

        Returns:
            Package records in file order.

        Raises:
            CatalogError: If the snapshot cannot be loaded.
        """
        catalog = load_catalog(self._path)
        records = [self._to_record(entry) for entry in catalog.package]
        logger.debug("Loaded %d package(s) for %s from %s", len(records), self.label, self._path)
        return records

    def _to_record(self, entry: CatalogEntry) -> PackageRecord:
        if self._source is not None:
            if entry.source is not None and entry.source != self._source.url:
                logger.debug(
                    "Ignoring source %r on %s entry in remote catalog %s",
                    entry.source,
                    entry.type,
                    self._path,
                )
            return entry.to_record(self._source)
        return entry.to_record(self._resolve(entry.source))

    def _resolve(self, url: str | None) -> Source | None:
        if url is None:
            return None
        return self._known_sources.get(url) or Source(url=url)
