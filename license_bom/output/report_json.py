"""JSON output formatter for attribution reports."""
import json
from datetime import datetime, timezone
from typing import Any

from license_bom import __version__
from license_bom.constants import LEGAL_DISCLAIMER
from license_bom.models.attribution import AttributionReport, ProjectAttribution


class ReportJsonFormatter:
    """Format attribution reports as JSON output.

    The ``projects`` array has the same shape as an override file, so a
    reviewed report can be fed back with ``--override-file``.
    """

    def format_report(self, report: AttributionReport) -> str:
        """Format an attribution report as JSON string.

        Args:
            report: The report to format.

        Returns:
            JSON string representation of the report.
        """
        output = {
            "scan_metadata": self._build_scan_metadata(),
            "summary": self._build_summary(report),
            "projects": [self._build_project(item) for item in report.attributions],
            "errors": [self._build_error(item) for item in report.errors],
        }
        return json.dumps(output, indent=2)

    def _build_scan_metadata(self) -> dict[str, Any]:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        return {
            "generated_at": timestamp,
            "tool_version": __version__,
            "disclaimer": LEGAL_DISCLAIMER,
            "disclaimer_type": "informational",
        }

    def _build_summary(self, report: AttributionReport) -> dict[str, Any]:
        ignored_packages = None
        ignored = report.ignored_packages_summary
        if ignored and ignored.ignored_count > 0:
            ignored_packages = {
                "count": ignored.ignored_count,
                "names": ignored.ignored_names or [],
            }

        return {
            "total_packages": report.total_packages,
            "projects": len(report.attributions),
            "errors": len(report.errors),
            "overrides_applied": report.overrides_applied,
            "ignored_packages": ignored_packages,
            "has_issues": report.has_issues,
            "status": "issues_found" if report.has_issues else "pass",
        }

    def _build_project(self, item: ProjectAttribution) -> dict[str, Any]:
        """Build one project entry.

        Args:
            item: A confident attribution.

        Returns:
            Dictionary with project name, licenses and provenance.
        """
        return {
            "project": item.project,
            "licenses": [
                {"name": entry.name, "confidence": entry.confidence}
                for entry in item.licenses
            ],
            "files": list(item.files),
            "overridden": item.overridden,
        }

    def _build_error(self, item: ProjectAttribution) -> dict[str, Any]:
        return {"project": item.project, "error": item.error}
