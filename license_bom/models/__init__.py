"""Pydantic data models for license-bom."""

from license_bom.models.attribution import (
    AttributionReport,
    IgnoredPackagesSummary,
    LicenseEntry,
    ProjectAttribution,
    ScanOptions,
    Verbosity,
)
from license_bom.models.config import BomConfig, OverrideLicense, ProjectOverride
from license_bom.models.match import LicenseInfo, MatchResult, PackageLicense
from license_bom.models.package import GraphResult, GraphStatus, Package
from license_bom.models.template import LicenseTemplate, WordSet

__all__ = [
    "AttributionReport",
    "BomConfig",
    "GraphResult",
    "GraphStatus",
    "IgnoredPackagesSummary",
    "LicenseEntry",
    "LicenseInfo",
    "LicenseTemplate",
    "MatchResult",
    "OverrideLicense",
    "Package",
    "PackageLicense",
    "ProjectAttribution",
    "ProjectOverride",
    "ScanOptions",
    "Verbosity",
    "WordSet",
]
