"""Scanner module: one attribution run over a dependency closure."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from license_bom.analysis.aggregate import (
    MatchCache,
    group_licenses,
    list_licenses,
    to_project_attributions,
)
from license_bom.analysis.filtering import filter_ignored_packages
from license_bom.analysis.overrides import merge_overrides
from license_bom.corpus.loader import TemplateCorpus, load_corpus
from license_bom.exceptions import GraphError
from license_bom.models.attribution import AttributionReport, IgnoredPackagesSummary
from license_bom.models.config import BomConfig, ProjectOverride
from license_bom.models.match import PackageLicense
from license_bom.models.package import GraphResult, Package
from license_bom.resolvers.base import BasePackageGraph

logger = logging.getLogger(__name__)


def resolve_graph(graph: BasePackageGraph, patterns: list[str]) -> GraphResult:
    """Resolve the dependency closure, raising on a failed graph query.

    Args:
        graph: Package graph collaborator.
        patterns: Requested packages.

    Returns:
        GraphResult tagged ok.

    Raises:
        GraphError: If the graph result is tagged missing or failed.
    """
    result = graph.resolve(patterns)
    if not result.ok:
        raise GraphError(
            result.message or f"could not list {' '.join(patterns)} dependencies",
            status=result.status.value,
        )
    return result


def collect_licenses(
    packages: list[Package],
    standard: Iterable[str],
    corpus: TemplateCorpus,
    console: Optional[Console] = None,
    show_progress: bool = True,
) -> list[PackageLicense]:
    """Locate and match license files for every package.

    Args:
        packages: Packages to examine.
        standard: Standard library import paths, skipped.
        corpus: Templates to match against.
        console: Optional Rich Console for progress display.
        show_progress: Whether to show a progress bar (default: True).

    Returns:
        Per-package license information, in package order.
    """
    cache = MatchCache(corpus)
    standard_set = set(standard)
    total = sum(1 for package in packages if package.import_path not in standard_set)

    if console is not None and show_progress and total > 0:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            console=console,
            transient=True,
        ) as progress:
            task_id = progress.add_task(
                f"Matching licenses for {total} packages...",
                total=total,
            )
            licenses = list_licenses(
                packages,
                standard_set,
                cache,
                on_package=lambda _: progress.advance(task_id),
            )
    else:
        licenses = list_licenses(packages, standard_set, cache)

    logger.debug("Scored %d distinct license files", len(cache))
    return licenses


def scan_packages(
    graph: BasePackageGraph,
    patterns: list[str],
    corpus: Optional[TemplateCorpus] = None,
    config: Optional[BomConfig] = None,
    overrides: Optional[list[ProjectOverride]] = None,
    console: Optional[Console] = None,
    show_progress: bool = True,
) -> AttributionReport:
    """Attribute licenses to the dependency closure of the requested packages.

    Args:
        graph: Package graph collaborator.
        patterns: Requested packages.
        corpus: Template corpus, loaded from the package when omitted.
        config: Configuration (ignored packages, overrides).
        overrides: Extra overrides applied after those of the configuration.
        console: Optional Rich Console for progress display.
        show_progress: Whether to show a progress bar (default: True).

    Returns:
        AttributionReport with confident attributions and errors.

    Raises:
        CorpusError: If the template corpus cannot be loaded.
        GraphError: If the package graph cannot be resolved.
        LocatorError: If a package directory or license file is unreadable.
        GroupingError: If packages share a license file without common prefix.
    """
    config = config or BomConfig()
    if corpus is None:
        corpus = load_corpus()

    graph_result = resolve_graph(graph, patterns)

    filter_result = filter_ignored_packages(
        graph_result.packages, config.ignored_packages
    )
    ignored_summary = None
    if filter_result.ignored_count > 0:
        ignored_summary = IgnoredPackagesSummary(
            ignored_count=filter_result.ignored_count,
            ignored_names=filter_result.ignored_names,
        )

    licenses = collect_licenses(
        filter_result.packages,
        graph_result.standard,
        corpus,
        console=console,
        show_progress=show_progress,
    )
    grouped = group_licenses(licenses)
    split = to_project_attributions(grouped)

    all_overrides = list(config.overrides or []) + list(overrides or [])
    merged = merge_overrides(split.attributions, split.errors, all_overrides)

    logger.info(
        "Attributed %d projects, %d need attention",
        len(merged.attributions),
        len(merged.errors),
    )
    return AttributionReport(
        attributions=merged.attributions,
        errors=merged.errors,
        total_packages=len(licenses),
        ignored_packages_summary=ignored_summary,
    )
