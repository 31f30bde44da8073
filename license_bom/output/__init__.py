"""Output formatters for license-bom."""

from license_bom.output.report_json import ReportJsonFormatter
from license_bom.output.report_markdown import ReportMarkdownFormatter
from license_bom.output.terminal import TerminalFormatter

__all__ = [
    "ReportJsonFormatter",
    "ReportMarkdownFormatter",
    "TerminalFormatter",
]
