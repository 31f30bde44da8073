"""Template matching and per-package license models."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from license_bom.models.template import LicenseTemplate


class MatchResult(BaseModel):
    """Best template found for one license text.

    Score is in [0, 1], or -1 when the corpus held no template at all.
    Extra and missing words are ordered by their position in the sample
    and template text respectively.
    """

    model_config = {"extra": "forbid"}

    template: Optional[LicenseTemplate] = None
    score: float = 0.0
    extra_words: list[str] = Field(default_factory=list)
    missing_words: list[str] = Field(default_factory=list)

    @property
    def matched(self) -> bool:
        """Whether a template was selected."""
        return self.template is not None


class LicenseInfo(MatchResult):
    """Match result for one candidate license file.

    An empty path means no license file was located for the package.
    """

    path: str = Field(default="", description="Root relative license file path")

    @classmethod
    def from_match(cls, path: str, match: MatchResult) -> LicenseInfo:
        """Attach a license file path to a match result."""
        return cls(
            path=path,
            template=match.template,
            score=match.score,
            extra_words=list(match.extra_words),
            missing_words=list(match.missing_words),
        )


class PackageLicense(BaseModel):
    """License information collected for a single package."""

    model_config = {"extra": "forbid"}

    package: str = Field(description="Import path, or project prefix once grouped")
    license_infos: list[LicenseInfo] = Field(default_factory=list)
    error: Optional[str] = Field(default=None, description="Build or listing error")

    @property
    def has_template(self) -> bool:
        """Whether at least one license file matched a template."""
        return any(info.template is not None for info in self.license_infos)
