"""Tests for Markdown report formatter."""

from license_bom.constants import LEGAL_DISCLAIMER
from license_bom.models.attribution import (
    AttributionReport,
    LicenseEntry,
    ProjectAttribution,
)
from license_bom.output.report_markdown import ReportMarkdownFormatter


class TestReportMarkdownFormatter:
    """Tests for ReportMarkdownFormatter class."""

    def test_empty_report(self) -> None:
        """Test that an empty report says no packages were found."""
        output = ReportMarkdownFormatter().format_report(AttributionReport())

        assert output.startswith("# License Bill of Materials")
        assert "*No packages found.*" in output
        assert "## Projects" not in output

    def test_includes_disclaimer(self, clean_report: AttributionReport) -> None:
        """Test that the legal disclaimer is included."""
        output = ReportMarkdownFormatter().format_report(clean_report)

        assert LEGAL_DISCLAIMER in output

    def test_summary_pass(self, clean_report: AttributionReport) -> None:
        """Test summary table of a clean report."""
        output = ReportMarkdownFormatter().format_report(clean_report)

        assert "## Summary" in output
        assert "| Total Packages | 3 |" in output
        assert "| Projects | 2 |" in output
        assert "| Needs Attention | 0 |" in output
        assert "PASS" in output
        assert "Overrides Applied" not in output
        assert "## Needs Attention" not in output

    def test_project_rows(self, clean_report: AttributionReport) -> None:
        """Test that each license of a project gets a row."""
        output = ReportMarkdownFormatter().format_report(clean_report)

        assert "| colors/red | MIT License | 98.0% |" in output
        assert "| colors/blue | Apache License 2.0 | 100.0% |" in output
        assert "| colors/blue | MIT License | 75.0% |" in output

    def test_issues_section_precedes_projects(
        self, issues_report: AttributionReport
    ) -> None:
        """Test that unresolved projects are listed before attributions."""
        output = ReportMarkdownFormatter().format_report(issues_report)

        assert "NEEDS ATTENTION" in output
        assert "| colors/green | No license detected |" in output
        assert output.index("## Needs Attention") < output.index("## Projects")

    def test_multiline_error_kept_on_one_row(
        self, issues_report: AttributionReport
    ) -> None:
        """Test that error line breaks do not break the table."""
        output = ReportMarkdownFormatter().format_report(issues_report)

        assert "| colors/broken | first line of a failure second line |" in output

    def test_override_marker_and_counts(
        self, issues_report: AttributionReport
    ) -> None:
        """Test that overrides and ignored packages are shown."""
        output = ReportMarkdownFormatter().format_report(issues_report)

        assert "| colors/red | override existing *(override)* | 100.0% |" in output
        assert "| Overrides Applied | 1 |" in output
        assert "| Packages Ignored | 1 |" in output

    def test_escapes_pipes(self) -> None:
        """Test that pipe characters do not split table cells."""
        report = AttributionReport(
            attributions=[
                ProjectAttribution(
                    project="odd",
                    licenses=[LicenseEntry(name="A | B", confidence=1.0)],
                )
            ]
        )

        output = ReportMarkdownFormatter().format_report(report)

        assert "| odd | A \\| B | 100.0% |" in output
