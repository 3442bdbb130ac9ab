"""CLI application for outdated-report."""

import logging
from enum import Enum
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from outdated_report.config import OutputFormat, Settings, get_settings
from outdated_report.decode import decode_report, read_input
from outdated_report.dotnet import OutdatedOptions, PreRelease, VersionLock, run_outdated
from outdated_report.errors import DecodeError, InputError
from outdated_report.models import Report
from outdated_report.query import (
    Predicate,
    all_of,
    filter_report,
    has_upgrade,
    is_deprecated,
    name_in,
    name_not_in,
    severity_at_least,
)
from outdated_report.report import ExitStatus, exit_status, render_json, render_table
from outdated_report.versions import Severity

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


class MinSeverity(str, Enum):
    """Severity thresholds accepted by --min-severity."""

    major = "major"
    minor = "minor"
    patch = "patch"

    def to_severity(self) -> Severity:
        return Severity[self.name.upper()]


def load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as e:
        raise fail(f"invalid configuration: {e}")


def configure_logging(verbose: bool, settings: Settings) -> None:
    """Send log records to stderr through rich."""
    level = logging.DEBUG if verbose else settings.log_level.value
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def build_predicate(
    upgradable: bool,
    deprecated: bool,
    min_severity: MinSeverity | None,
    include: list[str] | None,
    exclude: list[str] | None,
) -> Predicate:
    """Combine the selected filter options into one predicate."""
    predicates: list[Predicate] = []
    if upgradable:
        predicates.append(has_upgrade)
    if deprecated:
        predicates.append(is_deprecated)
    if min_severity is not None:
        predicates.append(severity_at_least(min_severity.to_severity()))
    if include:
        predicates.append(name_in(include))
    if exclude:
        predicates.append(name_not_in(exclude))
    return all_of(*predicates)


def emit(report: Report, format_type: OutputFormat | None, settings: Settings) -> ExitStatus:
    """Print the report and return its exit status."""
    format_type = format_type or settings.output_format
    if format_type == OutputFormat.JSON:
        typer.echo(render_json(report))
    else:
        console.print(render_table(report))

    status = exit_status(report)
    logger.info("Report status: %s", status.label)
    return status


def fail(message: str) -> typer.Exit:
    err_console.print(f"Error: {message}", style="red", markup=False, highlight=False, soft_wrap=True)
    return typer.Exit(ExitStatus.DECODE_FAILURE.value)


app = typer.Typer(
    name="outdated-report",
    help="outdated-report - Filter and summarize dotnet-outdated JSON reports",
    add_completion=False,
)

FORMAT_OPTION = typer.Option(None, "--format", "-f", help="Output format: table or json")
UPGRADABLE_OPTION = typer.Option(
    False, "--upgradable", help="Only packages whose resolved version is not the latest"
)
DEPRECATED_OPTION = typer.Option(False, "--deprecated", help="Only deprecated packages")
MIN_SEVERITY_OPTION = typer.Option(
    None, "--min-severity", help="Only upgrades of at least this size"
)
INCLUDE_OPTION = typer.Option(None, "--include", help="Only these packages (repeatable)")
EXCLUDE_OPTION = typer.Option(None, "--exclude", help="Skip these packages (repeatable)")
KEEP_EMPTY_OPTION = typer.Option(
    False, "--keep-empty", help="Keep projects and frameworks without matching packages"
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr")


@app.command()
def check(
    source: str = typer.Argument(help="Path to a dotnet-outdated JSON report (use '-' for stdin)"),
    format_type: OutputFormat | None = FORMAT_OPTION,
    upgradable: bool = UPGRADABLE_OPTION,
    deprecated: bool = DEPRECATED_OPTION,
    min_severity: MinSeverity | None = MIN_SEVERITY_OPTION,
    include: list[str] | None = INCLUDE_OPTION,
    exclude: list[str] | None = EXCLUDE_OPTION,
    keep_empty: bool = KEEP_EMPTY_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Decode a report, filter it and exit 1 if upgrades are available."""
    settings = load_settings()
    configure_logging(verbose, settings)

    try:
        report = decode_report(read_input(source))
    except (InputError, DecodeError) as e:
        raise fail(str(e))

    predicate = build_predicate(upgradable, deprecated, min_severity, include, exclude)
    filtered = filter_report(report, predicate, keep_empty=keep_empty)
    raise typer.Exit(emit(filtered, format_type, settings).value)


@app.command()
def run(
    input_dir: Path | None = typer.Argument(None, help="Directory passed to dotnet outdated"),
    include_auto_references: bool = typer.Option(
        False, "--include-auto-references", "-i", help="Include auto-referenced packages"
    ),
    pre_release: PreRelease = typer.Option(
        PreRelease.AUTO, "--pre-release", case_sensitive=False,
        help="Should dotnet-outdated look for pre-release versions of packages",
    ),
    transitive: bool = typer.Option(
        False, "--transitive", "-t", help="Consider transitive dependencies"
    ),
    transitive_depth: int | None = typer.Option(
        None, "--transitive-depth", help="Depth in the dependency tree, requires --transitive"
    ),
    version_lock: VersionLock = typer.Option(
        VersionLock.NONE, "--version-lock", case_sensitive=False,
        help="Consider all updates or only minor versions and/or patch levels",
    ),
    format_type: OutputFormat | None = FORMAT_OPTION,
    upgradable: bool = UPGRADABLE_OPTION,
    deprecated: bool = DEPRECATED_OPTION,
    min_severity: MinSeverity | None = MIN_SEVERITY_OPTION,
    include: list[str] | None = INCLUDE_OPTION,
    exclude: list[str] | None = EXCLUDE_OPTION,
    keep_empty: bool = KEEP_EMPTY_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Run dotnet outdated and report on its output."""
    settings = load_settings()
    configure_logging(verbose, settings)

    try:
        options = OutdatedOptions(
            include_auto_references=include_auto_references,
            pre_release=pre_release,
            include=include or [],
            exclude=exclude or [],
            transitive=transitive,
            transitive_depth=transitive_depth,
            version_lock=version_lock,
            input_dir=input_dir,
        )
    except ValueError as e:
        raise fail(str(e))

    try:
        requirement, report = run_outdated(options, dotnet=settings.dotnet_binary)
    except (InputError, DecodeError) as e:
        raise fail(str(e))

    logger.info("dotnet outdated indicated: %s", requirement)
    predicate = build_predicate(upgradable, deprecated, min_severity, None, None)
    filtered = filter_report(report, predicate, keep_empty=keep_empty)
    raise typer.Exit(emit(filtered, format_type, settings).value)


if __name__ == "__main__":
    app()
