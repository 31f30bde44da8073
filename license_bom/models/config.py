"""Configuration Pydantic models for license-bom."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class OverrideLicense(BaseModel):
    """A license name forced by an override."""

    model_config = {"extra": "ignore"}

    name: str = Field(description="License name to report")
    confidence: Optional[float] = Field(
        default=None,
        description="Accepted for compatibility with JSON reports; ignored",
    )


class ProjectOverride(BaseModel):
    """Manual license attribution for a project.

    Used for vendored code whose license file cannot be located, or to
    settle an ambiguous match. Unknown keys are ignored so that project
    entries of a JSON report can be reused as overrides.
    """

    model_config = {"extra": "ignore"}

    project: str = Field(description="Project name as reported")
    licenses: List[OverrideLicense] = Field(default_factory=list)


class BomConfig(BaseModel):
    """Configuration for license-bom.

    All fields are optional with None defaults to allow partial configuration.
    """

    model_config = {"extra": "forbid"}

    overrides: Optional[List[ProjectOverride]] = Field(
        default=None,
        description="Licenses forced per project, replacing detected ones.",
    )
    ignored_packages: Optional[List[str]] = Field(
        default=None,
        description="Import paths to leave out of attribution.",
    )
