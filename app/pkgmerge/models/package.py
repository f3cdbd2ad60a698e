"""Package models for catalog reconciliation.

This module defines the core data structures describing a concrete
package revision (PackageRecord), the catalog it comes from (Source)
and the revision-independent key that ties revisions together
(LogicalIdentity).
"""

from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import urlparse


class PackageType(Enum):
    """Enumeration of supported package types."""

    TOOL = "tool"
    PLATFORM_TOOL = "platform-tool"
    PLATFORM = "platform"
    ADDON = "addon"
    SAMPLE = "sample"
    DOC = "doc"
    EXTRA = "extra"

    @property
    def is_api_keyed(self) -> bool:
        """Check if packages of this type belong to an API level."""
        return self in _API_KEYED_TYPES

    @property
    def is_tool(self) -> bool:
        """Check if this is one of the tools package types."""
        return self in (PackageType.TOOL, PackageType.PLATFORM_TOOL)


_API_KEYED_TYPES = frozenset(
    {PackageType.PLATFORM, PackageType.ADDON, PackageType.SAMPLE, PackageType.DOC}
)
_NAMED_TYPES = frozenset({PackageType.ADDON, PackageType.EXTRA})


@dataclass(frozen=True, slots=True)
class Source:
    """A remote catalog that offers packages.

    Two sources are equal when they point to the same URL; the name is
    descriptive only and does not take part in equality or hashing.

    Attributes:
        url: Catalog URL, used as the identity of the source.
        name: Optional human-readable name (e.g., 'Google Repository').
    """

    url: str
    name: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate source data after initialization."""
        if not self.url:
            msg = "Source url cannot be empty"
            raise ValueError(msg)

    @property
    def host(self) -> str:
        """Host part of the URL, or the raw URL when it has none."""
        return urlparse(self.url).hostname or self.url

    @property
    def display_name(self) -> str:
        """Return the name, falling back to the host."""
        return self.name or self.host

    @property
    def short_label(self) -> str:
        """Return a label such as 'repo1 (repo.com)'."""
        return f"{self.display_name} ({self.host})"

    @property
    def sort_key(self) -> tuple[str, str]:
        """Key ordering sources by display name, then host."""
        return (self.display_name.casefold(), self.host)


@dataclass(frozen=True, slots=True)
class LogicalIdentity:
    """Revision-independent key of a package.

    Only the discriminators relevant to the package type are set; the
    others are normalized to None or an empty string so that equality
    is well defined.

    Attributes:
        package_type: Type of the package.
        api_level: API level for platform, addon, sample and doc packages.
        vendor: Vendor for addon and extra packages.
        name: Name for addon and extra packages.
    """

    package_type: PackageType
    api_level: int | None = None
    vendor: str = ""
    name: str = ""


@dataclass(frozen=True, slots=True)
class PackageRecord:
    """One concrete revision of a package as reported by a loader.

    This is an immutable value: two records built from the same fields
    compare equal regardless of which batch created them.

    Attributes:
        package_type: Type of the package.
        revision: Positive revision number, higher means newer.
        source: Catalog offering this package, or None when the package
            is installed locally and its origin is unknown.
        api_level: API level (required for API-keyed types).
        vendor: Vendor name (addons and extras).
        name: Package name (required for addons and extras).
    """

    package_type: PackageType
    revision: int
    source: Source | None = None
    api_level: int | None = None
    vendor: str = ""
    name: str = ""

    def __post_init__(self) -> None:
        """Validate package data after initialization."""
        if self.revision < 1:
            msg = f"Revision must be a positive integer, got {self.revision}"
            raise ValueError(msg)
        if self.package_type.is_api_keyed and self.api_level is None:
            msg = f"{self.package_type.value} package requires an API level"
            raise ValueError(msg)
        if self.package_type in _NAMED_TYPES and not self.name:
            msg = f"{self.package_type.value} package requires a name"
            raise ValueError(msg)

    @property
    def identity(self) -> LogicalIdentity:
        """Return the revision-independent identity of this package."""
        ptype = self.package_type
        if ptype in _NAMED_TYPES:
            return LogicalIdentity(ptype, vendor=self.vendor, name=self.name)
        if ptype.is_api_keyed:
            return LogicalIdentity(ptype, api_level=self.api_level)
        return LogicalIdentity(ptype)

    @property
    def title(self) -> str:
        """Human-readable description without the revision."""
        ptype = self.package_type
        if ptype == PackageType.TOOL:
            return "SDK Tools"
        if ptype == PackageType.PLATFORM_TOOL:
            return "SDK Platform-tools"
        if ptype == PackageType.PLATFORM:
            return f"SDK Platform API {self.api_level}"
        if ptype == PackageType.ADDON:
            vendor = f" by {self.vendor}" if self.vendor else ""
            return f"{self.name}{vendor}, API {self.api_level}"
        if ptype == PackageType.SAMPLE:
            return f"Samples for API {self.api_level}"
        if ptype == PackageType.DOC:
            return f"Documentation for API {self.api_level}"
        if self.vendor:
            return f"{self.vendor} {self.name}"
        return self.name

    @property
    def label(self) -> str:
        """Human-readable description including the revision."""
        return f"{self.title}, revision {self.revision}"
