"""Package graph models.

These records are produced by a package graph collaborator and consumed,
never mutated, by the attribution engine.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Package(BaseModel):
    """A package of the dependency closure."""

    model_config = {"extra": "forbid", "frozen": True}

    import_path: str = Field(description="Slash separated import path")
    root_dir: str = Field(description="Root of the source tree holding the package")
    error: Optional[str] = Field(
        default=None, description="Build or listing error, if any"
    )


class GraphStatus(Enum):
    """Outcome tag of a package graph query."""

    OK = "ok"
    MISSING = "missing"  # A requested package does not exist or cannot build
    FAILED = "failed"


class GraphResult(BaseModel):
    """Tagged result of resolving a dependency closure."""

    model_config = {"extra": "forbid"}

    status: GraphStatus = Field(default=GraphStatus.OK)
    packages: list[Package] = Field(
        default_factory=list,
        description="Every package of the closure, sorted by import path",
    )
    standard: list[str] = Field(
        default_factory=list,
        description="Import paths belonging to the standard library",
    )
    message: Optional[str] = Field(
        default=None, description="Failure description when status is not ok"
    )

    @property
    def ok(self) -> bool:
        """Whether the closure was resolved."""
        return self.status == GraphStatus.OK

    @classmethod
    def missing(cls, message: str) -> GraphResult:
        """Build a result for a missing or unbuildable requested package."""
        return cls(status=GraphStatus.MISSING, message=message)

    @classmethod
    def failed(cls, message: str) -> GraphResult:
        """Build a result for any other graph failure."""
        return cls(status=GraphStatus.FAILED, message=message)
