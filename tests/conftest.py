"""Shared fixtures for license-bom tests."""
from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from license_bom.corpus.loader import TemplateCorpus, load_corpus
from license_bom.models.attribution import (
    AttributionReport,
    IgnoredPackagesSummary,
    LicenseEntry,
    ProjectAttribution,
)

# 51 distinct words: dropping the last two from a sample scores 98/100
ALPHA_DOCUMENT = (
    "---\n"
    "title: Alpha License\n"
    "spdx-id: Alpha-1.0\n"
    "nickname: Alpha\n"
    "---\n"
    + " ".join(f"term{i}" for i in range(51))
    + "\n"
)

BETA_DOCUMENT = (
    "---\n"
    "title: Beta License\n"
    "spdx-id: Beta-1.0\n"
    "---\n"
    "beta gamma delta epsilon\n"
)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def small_corpus() -> TemplateCorpus:
    """Two synthetic templates whose scores are easy to compute by hand."""
    return TemplateCorpus.from_documents([ALPHA_DOCUMENT, BETA_DOCUMENT])


@pytest.fixture(scope="session")
def corpus() -> TemplateCorpus:
    """The corpus embedded in the package."""
    return load_corpus()


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Build a source tree below tmp_path/src from relative path -> content."""

    def _make_tree(files: dict[str, str]) -> Path:
        root = tmp_path / "src"
        root.mkdir(exist_ok=True)
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make_tree


@pytest.fixture
def clean_report() -> AttributionReport:
    """A report where every project is attributed."""
    return AttributionReport(
        attributions=[
            ProjectAttribution(
                project="colors/red",
                licenses=[LicenseEntry(name="MIT License", confidence=0.98)],
                files=["colors/red/LICENSE"],
            ),
            ProjectAttribution(
                project="colors/blue",
                licenses=[
                    LicenseEntry(name="Apache License 2.0", confidence=1.0),
                    LicenseEntry(name="MIT License", confidence=0.75),
                ],
                files=["colors/blue/COPYING", "colors/blue/LICENSE"],
            ),
        ],
        total_packages=3,
    )


@pytest.fixture
def issues_report() -> AttributionReport:
    """A report with an override, an error and ignored packages."""
    return AttributionReport(
        attributions=[
            ProjectAttribution(
                project="colors/red",
                licenses=[LicenseEntry(name="override existing", confidence=1.0)],
                overridden=True,
            ),
        ],
        errors=[
            ProjectAttribution(project="colors/green", error="No license detected"),
            ProjectAttribution(
                project="colors/broken",
                error="first line of a failure\nsecond line",
            ),
        ],
        total_packages=5,
        ignored_packages_summary=IgnoredPackagesSummary(
            ignored_count=1, ignored_names=["internal/tool"]
        ),
    )
