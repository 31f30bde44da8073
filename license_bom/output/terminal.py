"""Terminal output formatter using Rich."""
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from license_bom.constants import LEGAL_DISCLAIMER_SHORT
from license_bom.models.attribution import AttributionReport, Verbosity
from license_bom.models.match import MatchResult

# Confidence below which a license is highlighted as a weak match
LOW_CONFIDENCE = 0.9


def _confidence_style(confidence: float) -> str:
    return "green" if confidence >= LOW_CONFIDENCE else "yellow"


class TerminalFormatter:
    """Format attribution reports for terminal display using Rich."""

    def __init__(
        self,
        console: Optional[Console] = None,
        verbosity: Verbosity = Verbosity.NORMAL,
    ) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
            verbosity: Output verbosity level.
        """
        self._console = console if console is not None else Console()
        self._verbosity = verbosity

    def format_report(self, report: AttributionReport) -> None:
        """Display an attribution report as a Rich table.

        Args:
            report: The report to display.
        """
        if self._verbosity == Verbosity.QUIET:
            self._print_quiet_output(report)
            return

        self._print_disclaimer()

        if not report.attributions and not report.errors:
            self._console.print("[yellow]No packages found[/yellow]")
            return

        if report.attributions:
            table = Table(title="License Attribution")
            table.add_column("Project", style="cyan", no_wrap=True)
            table.add_column("License")
            table.add_column("Confidence", justify="right")
            if self._verbosity == Verbosity.VERBOSE:
                table.add_column("File", style="dim")

            for item in report.attributions:
                for index, entry in enumerate(item.licenses):
                    style = _confidence_style(entry.confidence)
                    name = escape(entry.name)
                    if item.overridden:
                        name += " [blue]\\[override][/blue]"
                    row = [
                        escape(item.project),
                        name,
                        f"[{style}]{entry.confidence:.1%}[/{style}]",
                    ]
                    if self._verbosity == Verbosity.VERBOSE:
                        row.append(
                            escape(item.files[index]) if index < len(item.files) else ""
                        )
                    table.add_row(*row)

            self._console.print(table)

        if report.errors:
            self._print_errors(report)

        self._console.print(f"\n[bold]Total packages:[/bold] {report.total_packages}")
        self._console.print(f"[bold]Projects:[/bold] {len(report.attributions)}")
        self._console.print(f"[bold]Needs attention:[/bold] {len(report.errors)}")
        if report.overrides_applied:
            self._console.print(
                f"[bold]Overrides applied:[/bold] {report.overrides_applied}"
            )
        ignored = report.ignored_packages_summary
        if ignored and ignored.ignored_count > 0:
            self._console.print(f"[bold]Packages ignored:[/bold] {ignored.ignored_count}")

    def format_match(self, path: str, match: MatchResult, words: int = 10) -> None:
        """Display the best template match of a single license file.

        Args:
            path: Matched file, for the heading.
            match: The match result.
            words: Number of extra and missing words to show.
        """
        self._console.print(f"[bold]{escape(path)}[/bold]")
        if match.template is None:
            self._console.print("[yellow]No license template matched[/yellow]")
        else:
            style = _confidence_style(match.score)
            title = escape(match.template.display_name)
            self._console.print(f"License: [cyan]{title}[/cyan]")
            self._console.print(f"Score: [{style}]{match.score:.1%}[/{style}]")

        if match.extra_words:
            shown = " ".join(match.extra_words[:words])
            self._console.print(
                f"Extra words ({len(match.extra_words)}): {escape(shown)}"
            )
        if match.missing_words:
            shown = " ".join(match.missing_words[:words])
            self._console.print(
                f"Missing words ({len(match.missing_words)}): {escape(shown)}"
            )

    def _print_quiet_output(self, report: AttributionReport) -> None:
        if report.has_issues:
            self._console.print(
                f"[red]NEEDS ATTENTION[/red] - "
                f"{len(report.errors)} project(s) without attributed license"
            )
            for item in report.errors:
                reason = (item.error or "").splitlines()[0] if item.error else ""
                self._console.print(
                    f"  - {escape(item.project)}: [yellow]{escape(reason)}[/yellow]"
                )
        else:
            self._console.print(
                f"[green]PASS[/green] - {len(report.attributions)} projects attributed"
            )

    def _print_disclaimer(self) -> None:
        panel = Panel(
            LEGAL_DISCLAIMER_SHORT,
            title="[bold yellow]NOT LEGAL ADVICE[/bold yellow]",
            border_style="yellow",
        )
        self._console.print(panel)
        self._console.print("")

    def _print_errors(self, report: AttributionReport) -> None:
        self._console.print("")
        self._console.print(
            f"[bold red]Needs Attention ({len(report.errors)})[/bold red]"
        )
        for item in report.errors:
            self._console.print(
                f"  [red]![/red] {escape(item.project)}: {escape(item.error or '')}"
            )
