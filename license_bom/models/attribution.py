"""Project attribution models."""
from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field


class LicenseEntry(BaseModel):
    """A license attributed to a project."""

    model_config = {"extra": "forbid"}

    name: str = Field(description="License title")
    confidence: float = Field(ge=0.0, le=1.0, description="Match confidence")


class ProjectAttribution(BaseModel):
    """Licenses, or the reason for their absence, for one project.

    The project name may be a prefix shorter than any package import path
    once packages sharing a license file have been grouped.
    """

    model_config = {"extra": "forbid"}

    project: str = Field(description="Project name")
    licenses: list[LicenseEntry] = Field(default_factory=list)
    error: Optional[str] = Field(default=None, description="Unresolved reason")
    files: list[str] = Field(
        default_factory=list, description="License files the licenses came from"
    )
    overridden: bool = Field(
        default=False, description="Whether licenses were set by an override"
    )


class IgnoredPackagesSummary(BaseModel):
    """Summary of packages skipped by the ignored_packages configuration."""

    model_config = {"extra": "forbid"}

    ignored_count: int = Field(default=0)
    ignored_names: Optional[list[str]] = Field(default=None)


class AttributionReport(BaseModel):
    """Result of one attribution run."""

    model_config = {"extra": "forbid"}

    attributions: list[ProjectAttribution] = Field(
        default_factory=list, description="Confidently attributed projects"
    )
    errors: list[ProjectAttribution] = Field(
        default_factory=list, description="Projects that need attention"
    )
    total_packages: int = Field(default=0, description="Packages examined")
    ignored_packages_summary: Optional[IgnoredPackagesSummary] = None

    @property
    def has_issues(self) -> bool:
        """Whether any project remains unresolved."""
        return len(self.errors) > 0

    @property
    def overrides_applied(self) -> int:
        """Number of projects whose licenses come from overrides."""
        return sum(1 for item in self.attributions if item.overridden)


class Verbosity(Enum):
    """Output verbosity levels."""

    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"


class ScanOptions(BaseModel):
    """Options for a license attribution run."""

    model_config = {"extra": "forbid"}

    format: Literal["terminal", "markdown", "json"] = Field(
        default="terminal",
        description="Output format for attribution results",
    )
    verbosity: Verbosity = Field(
        default=Verbosity.NORMAL,
        description="Output verbosity level (quiet, normal, verbose)",
    )
