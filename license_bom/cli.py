"""CLI entry point for license-bom."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Literal, cast

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from license_bom import __version__
from license_bom.analysis.matcher import match_templates
from license_bom.config import load_config, load_override_file
from license_bom.constants import EXIT_ERROR, EXIT_ISSUES, EXIT_SUCCESS
from license_bom.corpus import load_corpus
from license_bom.exceptions import ConfigurationError, LicenseBomError
from license_bom.log import configure_logging
from license_bom.models.attribution import AttributionReport, ScanOptions, Verbosity
from license_bom.models.config import ProjectOverride
from license_bom.output.report_json import ReportJsonFormatter
from license_bom.output.report_markdown import ReportMarkdownFormatter
from license_bom.output.terminal import TerminalFormatter
from license_bom.resolvers.source_tree import SourceTreeGraph
from license_bom.scanner import scan_packages

# Module-level console for consistent output
_console = Console()
# Separate console for error output (writes to stderr)
_error_console = Console(stderr=True)


def _verbosity(verbose_flag: bool, quiet_flag: bool) -> Verbosity:
    if verbose_flag and quiet_flag:
        raise click.UsageError("--verbose and --quiet are mutually exclusive.")
    if quiet_flag:
        return Verbosity.QUIET
    if verbose_flag:
        return Verbosity.VERBOSE
    return Verbosity.NORMAL


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Log debugging information to stderr.",
)
def main(debug: bool) -> None:
    """License Bill of Materials - Attribute licenses to dependencies.

    Finds the license files of every package in a dependency closure,
    matches them against known license templates, and groups packages
    sharing a license file into projects.

    \b
    Examples:
        license-bom scan myapp
        license-bom scan myapp/... --format json
        license-bom match vendor/foo/LICENSE
        license-bom templates
    """
    if debug:
        configure_logging(logging.DEBUG)


@main.command()
@click.argument("packages", nargs=-1, required=True)
@click.option(
    "--root",
    "root_dir",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Source tree root holding the packages (default: current directory).",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["terminal", "markdown", "json"], case_sensitive=False),
    default="terminal",
    help="Output format for attribution results (default: terminal).",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write report to file instead of stdout.",
)
@click.option(
    "--override-file",
    "override_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON file of licenses forced per project.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to configuration file.",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_flag",
    is_flag=True,
    default=False,
    help="Show the license file behind each attribution.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_flag",
    is_flag=True,
    default=False,
    help="Show only the status line and unresolved projects.",
)
def scan(
    packages: tuple[str, ...],
    root_dir: str,
    output_format: str,
    output_path: str | None,
    override_path: str | None,
    config_path: str | None,
    verbose_flag: bool,
    quiet_flag: bool,
) -> None:
    """Attribute licenses to packages and their dependencies.

    PACKAGES are import paths below the source tree root, such as
    ``myapp/core`` or ``myapp.core``; ``myapp/...`` selects every package
    below ``myapp``. Standard library packages are left out.

    \b
    Examples:
        license-bom scan myapp
        license-bom scan --root src myapp/...
        license-bom scan myapp --format json --output bom.json
        license-bom scan myapp --override-file overrides.json
    """
    verbosity = _verbosity(verbose_flag, quiet_flag)
    format_value = cast(Literal["terminal", "markdown", "json"], output_format.lower())
    options = ScanOptions(format=format_value, verbosity=verbosity)

    try:
        config = load_config(config_path)
        overrides: list[ProjectOverride] = []
        if override_path is not None:
            overrides = load_override_file(Path(override_path))

        show_progress = (
            options.format == "terminal" and options.verbosity != Verbosity.QUIET
        )
        report = scan_packages(
            SourceTreeGraph(root_dir),
            list(packages),
            config=config,
            overrides=overrides,
            console=_console if show_progress else None,
            show_progress=show_progress,
        )
        _display_report(report, options, output_path)

        if report.has_issues:
            sys.exit(EXIT_ISSUES)
        sys.exit(EXIT_SUCCESS)

    except LicenseBomError as e:
        _display_error(e, options.format)
        sys.exit(EXIT_ERROR)


@main.command()
@click.argument("license_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--words",
    type=click.IntRange(min=0),
    default=10,
    show_default=True,
    help="Number of extra and missing words to show.",
)
def match(license_file: str, words: int) -> None:
    """Match a single license file against the known templates.

    Prints the closest template, its score, and the words that differ.

    \b
    Examples:
        license-bom match LICENSE
        license-bom match vendor/foo/COPYING --words 30
    """
    try:
        corpus = load_corpus()
        try:
            data = Path(license_file).read_bytes()
        except OSError as e:
            raise ConfigurationError(f"Cannot read '{license_file}': {e}") from e
        result = match_templates(data, corpus)
    except LicenseBomError as e:
        _display_error(e, "terminal")
        sys.exit(EXIT_ERROR)

    TerminalFormatter(console=_console).format_match(license_file, result, words=words)
    sys.exit(EXIT_SUCCESS if result.matched else EXIT_ISSUES)


@main.command()
@click.argument("name", required=False)
def templates(name: str | None) -> None:
    """List the embedded license templates, in matching order.

    With NAME (title or SPDX identifier), print that template instead.

    \b
    Examples:
        license-bom templates
        license-bom templates MIT
    """
    try:
        corpus = load_corpus()
    except LicenseBomError as e:
        _display_error(e, "terminal")
        sys.exit(EXIT_ERROR)

    if name is not None:
        template = corpus.find(name)
        if template is None:
            raise click.BadParameter(
                f"unknown license template '{name}'", param_hint="NAME"
            )
        _console.print(f"[bold cyan]{escape(template.display_name)}[/bold cyan]")
        if template.nickname:
            _console.print(f"Nickname: {escape(template.nickname)}")
        _console.print("")
        _console.print(template.text, markup=False, highlight=False)
        return

    table = Table(title=f"License Templates ({len(corpus)})")
    table.add_column("SPDX", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Nickname", style="magenta")
    table.add_column("Words", justify="right")
    for template in corpus:
        table.add_row(
            template.spdx_id,
            template.title,
            template.nickname,
            str(len(template.words)),
        )
    _console.print(table)


def _write_output_to_file(content: str, path: str) -> None:
    """Write report content to file.

    Args:
        content: The report content to write.
        path: The file path to write to.

    Raises:
        ConfigurationError: If file cannot be written.
    """
    file_path = Path(path)

    try:
        if file_path.exists():
            _console.print(
                f"[yellow]Warning: Overwriting existing file: {path}[/yellow]"
            )
        file_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot write to file '{path}': {e}") from e

    _console.print(f"[green]Report written to {path}[/green]")


def _display_report(
    report: AttributionReport, options: ScanOptions, output_path: str | None = None
) -> None:
    """Display an attribution report in the requested format.

    Args:
        report: The report to display.
        options: Scan options including format and verbosity.
        output_path: Optional file path to write output to.
    """
    if options.format == "json":
        content = ReportJsonFormatter().format_report(report)
    elif options.format == "markdown":
        content = ReportMarkdownFormatter().format_report(report)
    else:  # terminal
        if output_path:
            # Terminal format to file uses markdown instead
            content = ReportMarkdownFormatter().format_report(report)
        else:
            TerminalFormatter(
                console=_console, verbosity=options.verbosity
            ).format_report(report)
            return

    if output_path:
        _write_output_to_file(content, output_path)
    else:
        click.echo(content)


def _display_error(error: LicenseBomError, format_type: str) -> None:
    """Display error message to user on stderr.

    Args:
        error: The exception that occurred.
        format_type: Output format type for styling.
    """
    error_type = type(error).__name__
    message = f"Error: {error_type}: {error}"

    if format_type == "terminal":
        _error_console.print(f"[red bold]{escape(message)}[/red bold]")
    else:
        click.echo(message, err=True)


if __name__ == "__main__":
    main()
