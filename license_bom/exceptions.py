"""Custom exceptions for license-bom."""
from __future__ import annotations

from typing import Optional


class LicenseBomError(Exception):
    """Base exception for all license-bom errors."""

    pass


class CorpusError(LicenseBomError):
    """Exception raised when the embedded template corpus cannot be parsed."""

    pass


class LocatorError(LicenseBomError):
    """Exception raised when a package directory or license file is unreadable."""

    pass


class GroupingError(LicenseBomError):
    """Exception raised when packages share a license file without a common prefix."""

    pass


class ConfigurationError(LicenseBomError):
    """Exception raised when configuration is invalid."""

    pass


class GraphError(LicenseBomError):
    """Exception raised when the package graph cannot be resolved.

    Attributes:
        status: Status tag of the failed graph result ("missing" or "failed").
    """

    def __init__(self, message: str, status: Optional[str] = None) -> None:
        super().__init__(message)
        self.status = status

    @property
    def is_missing(self) -> bool:
        """Whether a requested package was missing or not buildable."""
        return self.status == "missing"
