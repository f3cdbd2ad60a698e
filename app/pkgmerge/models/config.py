"""Configuration models.

This module defines the Pydantic models representing config.toml, which
lists the local inventory snapshot and the remote catalog sources.
"""

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pkgmerge.models.package import Source

# Type alias for the default grouping in config files
SortByType = Literal["api", "source"]


class SourceConfig(BaseModel):
    """One remote catalog source.

    Attributes:
        url: Catalog URL, identifies the source.
        name: Optional display name.
        catalog: Path to the fetched catalog snapshot (TOML).
    """

    model_config = ConfigDict(extra="forbid")

    url: Annotated[str, Field(min_length=1, description="Catalog URL")]
    name: Annotated[str | None, Field(description="Display name")] = None
    catalog: Annotated[Path, Field(description="Path to the catalog snapshot")]

    def to_source(self) -> Source:
        """Build the Source value for this entry."""
        return Source(url=self.url, name=self.name)


class AppConfig(BaseModel):
    """Complete pkgmerge configuration.

    Attributes:
        inventory: Path to the local inventory snapshot, if any.
        sort_by: Default grouping for 'pkgmerge show'.
        sources: Remote catalog sources.
    """

    model_config = ConfigDict(extra="forbid")

    inventory: Annotated[Path | None, Field(description="Local inventory snapshot")] = None
    sort_by: Annotated[SortByType, Field(description="Default grouping")] = "api"
    sources: Annotated[
        list[SourceConfig],
        Field(default_factory=list, description="Remote catalog sources"),
    ]

    @model_validator(mode="after")
    def validate_unique_urls(self) -> "AppConfig":
        """Validate that no source URL is listed twice."""
        seen: set[str] = set()
        duplicates: set[str] = set()
        for entry in self.sources:
            if entry.url in seen:
                duplicates.add(entry.url)
            seen.add(entry.url)
        if duplicates:
            msg = f"Source URLs must be unique: {sorted(duplicates)}"
            raise ValueError(msg)
        return self

    def known_sources(self) -> dict[str, Source]:
        """Map each configured URL to its Source."""
        return {entry.url: entry.to_source() for entry in self.sources}
