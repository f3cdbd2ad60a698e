"""Catalog file models.

This module defines the Pydantic models representing a catalog snapshot
file: a list of [[package]] tables, each describing one package revision.
The same format is used for the local inventory.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pkgmerge.models.package import PackageRecord, PackageType, Source

# Type alias for package types as spelled in catalog files
PackageTypeName = Literal["tool", "platform-tool", "platform", "addon", "sample", "doc", "extra"]


class CatalogEntry(BaseModel):
    """Entry for a single package revision in a catalog file.

    Attributes:
        type: Package type name.
        revision: Positive revision number.
        api_level: API level for platform, addon, sample and doc packages.
        vendor: Vendor for addons and extras.
        name: Name for addons and extras.
        source: Source URL of an installed package (inventory only).
    """

    model_config = ConfigDict(extra="forbid")

    type: Annotated[PackageTypeName, Field(description="Package type")]
    revision: Annotated[int, Field(ge=1, description="Package revision")]
    api_level: Annotated[int | None, Field(ge=1, description="API level")] = None
    vendor: Annotated[str, Field(description="Vendor name")] = ""
    name: Annotated[str, Field(description="Package name")] = ""
    source: Annotated[str | None, Field(description="Source URL of an install")] = None

    @model_validator(mode="after")
    def validate_discriminators(self) -> "CatalogEntry":
        """Validate that the fields required by the package type are set."""
        if PackageType(self.type).is_api_keyed and self.api_level is None:
            msg = f"{self.type} package requires api_level"
            raise ValueError(msg)
        if self.type in ("addon", "extra") and not self.name:
            msg = f"{self.type} package requires name"
            raise ValueError(msg)
        return self

    def to_record(self, source: Source | None) -> PackageRecord:
        """Build the PackageRecord for this entry.

        Args:
            source: Source to attribute the record to.

        Returns:
            Immutable package record.
        """
        return PackageRecord(
            package_type=PackageType(self.type),
            revision=self.revision,
            source=source,
            api_level=self.api_level,
            vendor=self.vendor,
            name=self.name,
        )


class CatalogFile(BaseModel):
    """Complete catalog snapshot.

    Attributes:
        package: Package entries, in file order.
    """

    model_config = ConfigDict(extra="forbid")

    package: Annotated[
        list[CatalogEntry],
        Field(default_factory=list, description="Package entries"),
    ]
