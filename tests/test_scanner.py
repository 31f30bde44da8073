"""Tests for scanner module."""
from __future__ import annotations

from collections.abc import Callable
from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from license_bom.constants import NO_LICENSE_DETECTED
from license_bom.corpus.loader import TemplateCorpus
from license_bom.exceptions import GraphError
from license_bom.models.config import BomConfig, OverrideLicense, ProjectOverride
from license_bom.models.package import GraphResult, Package
from license_bom.resolvers.base import BasePackageGraph
from license_bom.resolvers.source_tree import SourceTreeGraph
from license_bom.scanner import collect_licenses, resolve_graph, scan_packages

MakeTree = Callable[[dict[str, str]], Path]

ALPHA_49 = " ".join(f"term{i}" for i in range(49))
BETA = "beta gamma delta epsilon"


class StaticGraph(BasePackageGraph):
    """Package graph returning a fixed result."""

    def __init__(self, result: GraphResult) -> None:
        self.result = result
        self.calls: list[list[str]] = []

    def resolve(self, patterns: list[str]) -> GraphResult:
        self.calls.append(patterns)
        return self.result


def _scan(root: Path, patterns: list[str], corpus: TemplateCorpus, **kwargs):
    return scan_packages(SourceTreeGraph(root), patterns, corpus=corpus, **kwargs)


class TestResolveGraph:
    """Tests for resolve_graph function."""

    def test_returns_ok_result(self) -> None:
        """Test that an ok result is passed through."""
        result = GraphResult(packages=[Package(import_path="a", root_dir="/src")])
        graph = StaticGraph(result)

        assert resolve_graph(graph, ["a"]) is result
        assert graph.calls == [["a"]]

    def test_missing_raises(self) -> None:
        """Test that a missing package is raised as GraphError."""
        graph = StaticGraph(GraphResult.missing('cannot find package "a"'))

        with pytest.raises(GraphError, match="cannot find package") as exc_info:
            resolve_graph(graph, ["a"])

        assert exc_info.value.is_missing
        assert exc_info.value.status == "missing"

    def test_failed_raises(self) -> None:
        """Test that a generic failure is raised as GraphError."""
        graph = StaticGraph(GraphResult.failed("boom"))

        with pytest.raises(GraphError) as exc_info:
            resolve_graph(graph, ["a"])

        assert not exc_info.value.is_missing
        assert exc_info.value.status == "failed"


class TestCollectLicenses:
    """Tests for collect_licenses function."""

    def test_with_progress_console(
        self, make_tree: MakeTree, small_corpus: TemplateCorpus
    ) -> None:
        """Test that progress display does not change the result."""
        root = make_tree({"a/__init__.py": "", "a/LICENSE": BETA})
        packages = [
            Package(import_path="a", root_dir=str(root)),
            Package(import_path="os", root_dir="/usr/lib/python3"),
        ]
        console = Console(file=StringIO(), force_terminal=True)

        result = collect_licenses(packages, ["os"], small_corpus, console=console)

        assert [entry.package for entry in result] == ["a"]
        assert result[0].license_infos[0].score == 1.0


class TestScanPackages:
    """Tests for scan_packages function."""

    def test_single_license(
        self, make_tree: MakeTree, small_corpus: TemplateCorpus
    ) -> None:
        """Test a package whose license misses two template words."""
        root = make_tree({"colors/red/__init__.py": "", "colors/red/LICENSE": ALPHA_49})

        report = _scan(root, ["colors/red"], small_corpus)

        assert report.errors == []
        assert len(report.attributions) == 1
        item = report.attributions[0]
        assert item.project == "colors/red"
        assert [(e.name, e.confidence) for e in item.licenses] == [
            ("Alpha License", 0.98)
        ]
        assert not report.has_issues

    def test_two_license_files(
        self, make_tree: MakeTree, small_corpus: TemplateCorpus
    ) -> None:
        """Test that a dual licensed package gets two entries."""
        root = make_tree(
            {
                "colors/blue/__init__.py": "",
                "colors/blue/LICENSE": ALPHA_49,
                "colors/blue/COPYING": BETA,
            }
        )

        report = _scan(root, ["colors/blue"], small_corpus)

        assert len(report.attributions) == 1
        assert [(e.name, e.confidence) for e in report.attributions[0].licenses] == [
            ("Beta License", 1.0),
            ("Alpha License", 0.98),
        ]
        assert report.attributions[0].files == [
            "colors/blue/COPYING",
            "colors/blue/LICENSE",
        ]

    def test_unrecognized_license(
        self, make_tree: MakeTree, small_corpus: TemplateCorpus
    ) -> None:
        """Test that a license sharing no template word needs attention."""
        root = make_tree(
            {"colors/green/__init__.py": "", "colors/green/LICENSE": "zulu yankee"}
        )

        report = _scan(root, ["colors/green"], small_corpus)

        assert report.attributions == []
        assert [(e.project, e.error) for e in report.errors] == [
            ("colors/green", NO_LICENSE_DETECTED)
        ]
        assert report.has_issues

    def test_missing_license_file(
        self, make_tree: MakeTree, small_corpus: TemplateCorpus
    ) -> None:
        """Test that a package without license file needs attention."""
        root = make_tree({"colors/green/__init__.py": ""})

        report = _scan(root, ["colors/green"], small_corpus)

        assert report.errors[0].error == NO_LICENSE_DETECTED

    def test_packages_sharing_license_are_grouped(
        self, make_tree: MakeTree, small_corpus: TemplateCorpus
    ) -> None:
        """Test that a package and its subpackage form one project."""
        root = make_tree(
            {
                "x/y/__init__.py": "import x.y.sub\n",
                "x/y/LICENSE": BETA,
                "x/y/sub/__init__.py": "",
            }
        )

        report = _scan(root, ["x/y"], small_corpus)

        assert report.total_packages == 2
        assert [a.project for a in report.attributions] == ["x/y"]
        assert report.attributions[0].files == ["x/y/LICENSE"]

    def test_siblings_share_parent_license(
        self, make_tree: MakeTree, small_corpus: TemplateCorpus
    ) -> None:
        """Test that sibling packages are named after their common parent."""
        root = make_tree(
            {
                "lib/LICENSE": BETA,
                "lib/a/__init__.py": "",
                "lib/b/__init__.py": "",
            }
        )

        report = _scan(root, ["lib/..."], small_corpus)

        assert [a.project for a in report.attributions] == ["lib"]

    def test_dependencies_and_standard_packages(
        self, make_tree: MakeTree, small_corpus: TemplateCorpus
    ) -> None:
        """Test that dependencies are attributed and standard ones skipped."""
        root = make_tree(
            {
                "app/__init__.py": "import os\nimport json\nimport vendor_lib\n",
                "app/LICENSE": BETA,
                "vendor_lib/__init__.py": "",
                "vendor_lib/LICENSE.txt": ALPHA_49,
            }
        )

        report = _scan(root, ["app"], small_corpus)

        assert [a.project for a in report.attributions] == ["app", "vendor_lib"]
        assert report.total_packages == 2
        assert report.errors == []

    def test_package_error_needs_attention(
        self, make_tree: MakeTree, small_corpus: TemplateCorpus
    ) -> None:
        """Test that an unresolved import is reported with its error."""
        root = make_tree({"app/__init__.py": "import requests\n", "app/LICENSE": BETA})

        report = _scan(root, ["app"], small_corpus)

        assert [a.project for a in report.attributions] == ["app"]
        assert report.errors[0].project == "requests"
        assert report.errors[0].error is not None
        assert report.errors[0].error.startswith('cannot find package "requests"')

    def test_vendored_project_name(
        self, make_tree: MakeTree, small_corpus: TemplateCorpus
    ) -> None:
        """Test that vendored projects are reported under their own name."""
        root = make_tree(
            {
                "app/__init__.py": "from app._vendor import six\n",
                "app/LICENSE": BETA,
                "app/_vendor/six/__init__.py": "",
                "app/_vendor/six/LICENSE": ALPHA_49,
            }
        )

        report = _scan(root, ["app"], small_corpus)

        assert [a.project for a in report.attributions] == ["app", "six"]

    def test_ignored_packages(
        self, make_tree: MakeTree, small_corpus: TemplateCorpus
    ) -> None:
        """Test that ignored packages are left out and counted."""
        root = make_tree(
            {
                "app/__init__.py": "import internal\n",
                "app/LICENSE": BETA,
                "internal/__init__.py": "",
            }
        )
        config = BomConfig(ignored_packages=["internal"])

        report = _scan(root, ["app"], small_corpus, config=config)

        assert report.errors == []
        assert report.total_packages == 1
        assert report.ignored_packages_summary is not None
        assert report.ignored_packages_summary.ignored_count == 1
        assert report.ignored_packages_summary.ignored_names == ["internal"]

    def test_overrides_from_config_and_file(
        self, make_tree: MakeTree, small_corpus: TemplateCorpus
    ) -> None:
        """Test that config overrides apply before extra overrides."""
        root = make_tree(
            {
                "colors/red/__init__.py": "",
                "colors/red/LICENSE": ALPHA_49,
                "colors/green/__init__.py": "",
            }
        )
        config = BomConfig(
            overrides=[
                ProjectOverride(
                    project="colors/red", licenses=[OverrideLicense(name="From Config")]
                )
            ]
        )
        extra = [
            ProjectOverride(
                project="colors/red", licenses=[OverrideLicense(name="From File")]
            ),
            ProjectOverride(
                project="colors/green", licenses=[OverrideLicense(name="Green License")]
            ),
        ]

        report = _scan(
            root, ["colors/..."], small_corpus, config=config, overrides=extra
        )

        assert report.errors == []
        by_project = {a.project: a for a in report.attributions}
        assert [e.name for e in by_project["colors/red"].licenses] == [
            "From Config",
            "From File",
        ]
        assert by_project["colors/green"].overridden
        assert report.overrides_applied == 2

    def test_missing_requested_package_raises(
        self, make_tree: MakeTree, small_corpus: TemplateCorpus
    ) -> None:
        """Test that a missing requested package aborts the run."""
        root = make_tree({})

        with pytest.raises(GraphError) as exc_info:
            _scan(root, ["nope"], small_corpus)

        assert exc_info.value.is_missing

    def test_loads_embedded_corpus_by_default(self, make_tree: MakeTree) -> None:
        """Test that the embedded corpus is used when none is given."""
        root = make_tree({"app/__init__.py": "", "app/COPYING": "zulu"})

        report = scan_packages(SourceTreeGraph(root), ["app"])

        assert report.errors[0].project == "app"
