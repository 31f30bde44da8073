"""Base package graph interface."""

from abc import ABC, abstractmethod

from license_bom.models.package import GraphResult


class BasePackageGraph(ABC):
    """Abstract base class for package graph collaborators.

    A package graph expands requested package patterns into the full
    dependency closure and tells which of its packages belong to the
    standard library.
    """

    @abstractmethod
    def resolve(self, patterns: list[str]) -> GraphResult:
        """Resolve the dependency closure of the requested packages.

        Args:
            patterns: Requested packages or package patterns.

        Returns:
            GraphResult tagged ok with the sorted closure, or tagged
            missing/failed with a message. Per-package problems are carried
            by each Package's error field instead.
        """
