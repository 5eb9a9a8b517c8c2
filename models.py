"""Unified data models for repository catalogs."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Operation(str, Enum):
    """Operation a Package record was created for."""

    GET = "get"
    REMOVE = "remove"


class Package(BaseModel):
    """Canonical package representation for all repository formats."""

    model_config = ConfigDict(validate_assignment=True)

    pkg_name: str = Field(min_length=1, description="Unique slug within the repository")
    title: Optional[str] = Field(
        default=None, description="Display name, defaults to pkg_name"
    )
    author: str = ""
    category: str = ""
    short_desc: str = ""
    long_desc: str = ""
    version: str = Field(default="", description="Opaque version string")

    # Release time (both set or both unset)
    updated: Optional[str] = Field(
        default=None, description="Local time rendered as YYYY-MM-DD HH:MM:SS"
    )
    updated_timestamp: Optional[int] = Field(
        default=None, description="Seconds since the Unix epoch"
    )

    # Sizes in bytes, accumulated by add_sizes()
    download_size: int = Field(default=0, ge=0)
    extracted_size: int = Field(default=0, ge=0)

    # Locations, meaning depends on the repository format
    url: str = ""
    icon_url: str = ""

    operation: Operation = Operation.GET
    repo_name: Optional[str] = Field(
        default=None, description="Name of the repository that listed this package"
    )

    @model_validator(mode="after")
    def _default_title(self) -> "Package":
        if self.title is None:
            # Bypass validate_assignment to avoid re-entering this validator
            self.__dict__["title"] = self.pkg_name
        return self

    def add_sizes(self, compressed: int = 0, uncompressed: int = 0) -> None:
        """Add to the download and extracted sizes."""
        self.download_size += compressed
        self.extracted_size += uncompressed


class LoadResult(BaseModel):
    """Result of loading one repository."""

    repo_name: str
    repo_type: str
    url: str = Field(description="Repository URL after any scheme fallback")
    loaded: bool
    packages: list[Package] = Field(default_factory=list)
    total_count: int = Field(description="Number of packages returned")
    errors: list[str] = Field(default_factory=list, description="Diagnostics emitted")
    loaded_at: datetime = Field(default_factory=datetime.now)
