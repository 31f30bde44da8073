"""Package filtering for ignored packages configuration."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple, Optional

from license_bom.models.package import Package


class FilterResult(NamedTuple):
    """Result of filtering packages.

    Attributes:
        packages: List of packages after filtering.
        ignored_count: Number of packages that were ignored.
        ignored_names: Import paths of packages that were ignored.
    """

    packages: list[Package]
    ignored_count: int
    ignored_names: list[str]


def filter_ignored_packages(
    packages: Iterable[Package],
    ignored: Optional[Iterable[str]],
) -> FilterResult:
    """Filter out ignored packages from the list.

    Import path matching is exact and case-sensitive.

    Args:
        packages: Packages to filter.
        ignored: Import paths to leave out, None or empty to keep all.

    Returns:
        FilterResult with remaining packages and a summary of ignored ones.
    """
    packages = list(packages)
    ignored_set = set(ignored or ())
    if not ignored_set:
        return FilterResult(packages=packages, ignored_count=0, ignored_names=[])

    kept: list[Package] = []
    ignored_names: list[str] = []
    for package in packages:
        if package.import_path in ignored_set:
            ignored_names.append(package.import_path)
        else:
            kept.append(package)

    return FilterResult(
        packages=kept,
        ignored_count=len(ignored_names),
        ignored_names=ignored_names,
    )
