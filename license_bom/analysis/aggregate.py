"""Per-package license listing and per-project grouping.

Packages are matched one license file at a time, then packages sharing
the same license file are collapsed into a single project named after
their longest common import path prefix.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from decimal import ROUND_DOWN, Decimal
from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple, Optional

from license_bom.analysis.matcher import match_templates
from license_bom.constants import CONFIDENCE_DIGITS, NO_LICENSE_DETECTED, VENDOR_MARKERS
from license_bom.exceptions import GroupingError, LocatorError
from license_bom.models.attribution import LicenseEntry, ProjectAttribution
from license_bom.models.match import LicenseInfo, MatchResult, PackageLicense
from license_bom.models.package import Package
from license_bom.resolvers.locator import NO_LICENSE_PATH, find_license_files

if TYPE_CHECKING:
    from license_bom.corpus.loader import TemplateCorpus

logger = logging.getLogger(__name__)


class MatchCache:
    """Match results keyed by absolute license file path.

    Many packages of a monorepo point at the same license file, which is
    then read and scored once per run. Not safe for concurrent use.
    """

    def __init__(self, corpus: TemplateCorpus) -> None:
        """Initialize an empty cache.

        Args:
            corpus: Templates to match license files against.
        """
        self._corpus = corpus
        self._results: dict[Path, MatchResult] = {}

    def __len__(self) -> int:
        return len(self._results)

    def __contains__(self, path: object) -> bool:
        return path in self._results

    def match_file(self, path: Path) -> MatchResult:
        """Return the match result of a license file, scoring it once.

        Args:
            path: Absolute license file path.

        Returns:
            Cached or freshly computed MatchResult.

        Raises:
            LocatorError: If the file cannot be read.
        """
        cached = self._results.get(path)
        if cached is not None:
            return cached

        try:
            data = path.read_bytes()
        except OSError as e:
            raise LocatorError(f"Cannot read license file '{path}': {e}") from e

        result = match_templates(data, self._corpus)
        logger.debug(
            "Matched %s: %s (%.3f)",
            path,
            result.template.title if result.template else None,
            result.score,
        )
        self._results[path] = result
        return result


def list_licenses(
    packages: Iterable[Package],
    standard: Iterable[str],
    cache: MatchCache,
    on_package: Optional[Callable[[Package], None]] = None,
) -> list[PackageLicense]:
    """Collect license information for every non-standard package.

    Args:
        packages: Packages of the dependency closure.
        standard: Import paths of standard library packages, left out.
        cache: Per-run match cache.
        on_package: Optional callback invoked after each package.

    Returns:
        One PackageLicense per non-standard package, in input order.
        Packages with a build error carry it and a single empty-path info.

    Raises:
        LocatorError: If a package directory or license file is unreadable.
    """
    standard_set = set(standard)
    licenses: list[PackageLicense] = []

    for package in packages:
        if package.import_path in standard_set:
            continue

        if package.error is not None:
            licenses.append(
                PackageLicense(
                    package=package.import_path,
                    error=package.error,
                    license_infos=[LicenseInfo(path=NO_LICENSE_PATH)],
                )
            )
        else:
            infos: list[LicenseInfo] = []
            for path in find_license_files(package):
                if path == NO_LICENSE_PATH:
                    infos.append(LicenseInfo(path=path))
                    continue
                match = cache.match_file((Path(package.root_dir) / path).resolve())
                infos.append(LicenseInfo.from_match(path, match))
            licenses.append(
                PackageLicense(package=package.import_path, license_infos=infos)
            )

        if on_package is not None:
            on_package(package)

    return licenses


def longest_common_prefix(import_paths: Sequence[str]) -> str:
    """Longest common prefix of import paths, by whole path segments.

    A prefix tree is built over the ``/`` separated segments, each node
    counting the paths going through it. The walk follows single children
    shared by every path.

    Args:
        import_paths: Import paths to compare.

    Returns:
        The common prefix, empty when the paths share no first segment.
    """
    total = len(import_paths)
    # Node arena: node 0 is the root
    names: list[str] = [""]
    children: list[dict[str, int]] = [{}]
    shared: list[int] = [total]

    for import_path in import_paths:
        node = 0
        for part in import_path.split("/"):
            child = children[node].get(part)
            if child is None:
                child = len(names)
                names.append(part)
                children.append({})
                shared.append(0)
                children[node][part] = child
            shared[child] += 1
            node = child

    prefix: list[str] = []
    node = 0
    while len(children[node]) == 1:
        (child,) = children[node].values()
        if shared[child] != total:
            break
        prefix.append(names[child])
        node = child
    return "/".join(prefix)


def group_licenses(licenses: Sequence[PackageLicense]) -> list[PackageLicense]:
    """Collapse packages sharing a license file into one project.

    The merged entry is named after the packages' longest common import
    prefix and keeps the first package's license data. Packages without a
    license file are left unchanged.

    Args:
        licenses: Per-package license information, in output order.

    Returns:
        License information with at most one entry per merged project.

    Raises:
        GroupingError: If packages share a license file but no common
            import prefix.
    """
    by_path: dict[str, list[PackageLicense]] = {}
    for entry in licenses:
        for info in entry.license_infos:
            if info.path == NO_LICENSE_PATH:
                continue
            by_path.setdefault(info.path, []).append(entry)

    representatives: dict[str, PackageLicense] = {}
    for path, sharing in by_path.items():
        if len(sharing) <= 1:
            representatives[path] = sharing[0]
            continue
        prefix = longest_common_prefix([entry.package for entry in sharing])
        if not prefix:
            names = ", ".join(entry.package for entry in sharing)
            raise GroupingError(
                f"Packages share license file '{path}' but no common "
                f"import prefix: {names}"
            )
        logger.debug("Grouped %d packages under %s", len(sharing), prefix)
        representatives[path] = sharing[0].model_copy(update={"package": prefix})

    kept: list[PackageLicense] = []
    seen: set[str] = set()
    for entry in licenses:
        if not entry.license_infos:
            kept.append(entry)
            continue
        for info in entry.license_infos:
            if info.path == NO_LICENSE_PATH:
                kept.append(entry)
                continue
            representative = representatives.pop(info.path, None)
            if representative is not None and representative.package not in seen:
                kept.append(representative)
                seen.add(representative.package)
    return kept


def remove_vendor(import_path: str) -> str:
    """Strip everything up to a vendoring directory from an import path."""
    for marker in VENDOR_MARKERS:
        index = import_path.find(marker)
        if index != -1:
            return import_path[index + len(marker) :]
    return import_path


def truncate_confidence(score: float, digits: int = CONFIDENCE_DIGITS) -> float:
    """Truncate a score to a fixed number of decimal digits."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(score)).quantize(quantum, rounding=ROUND_DOWN))


class AttributionSplit(NamedTuple):
    """Projects split by whether a license could be attributed.

    Attributes:
        attributions: Projects with at least one matched template.
        errors: Projects with a build error or no detected license.
    """

    attributions: list[ProjectAttribution]
    errors: list[ProjectAttribution]


def to_project_attributions(licenses: Iterable[PackageLicense]) -> AttributionSplit:
    """Turn grouped license information into project attributions.

    Args:
        licenses: Grouped per-project license information.

    Returns:
        AttributionSplit of confident attributions and error entries.
    """
    attributions: list[ProjectAttribution] = []
    errors: list[ProjectAttribution] = []

    for entry in licenses:
        project = remove_vendor(entry.package)
        if entry.error:
            errors.append(ProjectAttribution(project=project, error=entry.error))
            continue
        if not entry.has_template:
            errors.append(ProjectAttribution(project=project, error=NO_LICENSE_DETECTED))
            continue

        entries: list[LicenseEntry] = []
        files: list[str] = []
        for info in entry.license_infos:
            if info.template is None or not info.template.title:
                continue
            entries.append(
                LicenseEntry(
                    name=info.template.title,
                    confidence=truncate_confidence(info.score),
                )
            )
            files.append(info.path)
        attributions.append(
            ProjectAttribution(project=project, licenses=entries, files=files)
        )

    return AttributionSplit(attributions=attributions, errors=errors)
