"""Markdown output formatter for attribution reports."""

from datetime import datetime, timezone

from license_bom.constants import LEGAL_DISCLAIMER
from license_bom.models.attribution import AttributionReport


def _escape(text: str) -> str:
    return text.replace("|", "\\|")


class ReportMarkdownFormatter:
    """Format attribution reports as Markdown output.

    Suitable for committing next to a release as a bill of materials.
    """

    def format_report(self, report: AttributionReport) -> str:
        """Format an attribution report as Markdown string.

        Args:
            report: The report to format.

        Returns:
            Markdown string representation of the report.
        """
        lines: list[str] = []

        lines.append("# License Bill of Materials")
        lines.append("")

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        lines.append(f"*Generated: {timestamp}*")
        lines.append("")

        lines.extend(self._format_summary(report))
        lines.append("")

        lines.append(f"> **Disclaimer:** {LEGAL_DISCLAIMER}")
        lines.append("")

        if not report.attributions and not report.errors:
            lines.append("*No packages found.*")
            return "\n".join(lines)

        # Unresolved projects come first, they are what a reviewer acts on
        if report.errors:
            lines.extend(self._format_errors(report))
            lines.append("")

        if report.attributions:
            lines.extend(self._format_projects(report))
            lines.append("")

        return "\n".join(lines)

    def _format_summary(self, report: AttributionReport) -> list[str]:
        if report.has_issues:
            status = "⚠️ NEEDS ATTENTION"
        else:
            status = "✅ PASS"

        lines = [
            "## Summary",
            "",
            "| Metric | Value |",
            "|--------|-------|",
            f"| Total Packages | {report.total_packages} |",
            f"| Projects | {len(report.attributions)} |",
            f"| Needs Attention | {len(report.errors)} |",
        ]
        if report.overrides_applied:
            lines.append(f"| Overrides Applied | {report.overrides_applied} |")
        ignored = report.ignored_packages_summary
        if ignored and ignored.ignored_count > 0:
            lines.append(f"| Packages Ignored | {ignored.ignored_count} |")
        lines.append(f"| Status | {status} |")
        return lines

    def _format_errors(self, report: AttributionReport) -> list[str]:
        lines = [
            "## Needs Attention",
            "",
            "| Project | Reason |",
            "|---------|--------|",
        ]
        for item in report.errors:
            reason = _escape((item.error or "").replace("\n", " "))
            lines.append(f"| {_escape(item.project)} | {reason} |")
        return lines

    def _format_projects(self, report: AttributionReport) -> list[str]:
        lines = [
            "## Projects",
            "",
            "| Project | License | Confidence |",
            "|---------|---------|------------|",
        ]
        for item in report.attributions:
            for entry in item.licenses:
                name = _escape(entry.name)
                if item.overridden:
                    name += " *(override)*"
                lines.append(
                    f"| {_escape(item.project)} | {name} | {entry.confidence:.1%} |"
                )
        return lines
