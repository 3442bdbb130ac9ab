"""Rendering of reports and CI exit status."""

import json
from enum import IntEnum
from typing import Any

from rich.markup import escape
from rich.table import Table

from .models import Report
from .query import iter_packages


class ExitStatus(IntEnum):
    """Process exit codes consumed by CI callers."""

    CLEAN = 0
    OUTDATED_FOUND = 1
    DECODE_FAILURE = 2

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")


def exit_status(report: Report) -> ExitStatus:
    """OUTDATED_FOUND if any package has an upgrade available, else CLEAN."""
    for _, _, package in iter_packages(report):
        if package.has_upgrade:
            return ExitStatus.OUTDATED_FOUND
    return ExitStatus.CLEAN


def to_dict(report: Report) -> dict[str, Any]:
    """Serialize a report back into the dotnet-outdated JSON layout."""
    projects = []
    for project in report.projects:
        frameworks = []
        for framework in project.frameworks:
            dependencies = []
            for package in framework.packages:
                entry: dict[str, Any] = {
                    "Name": package.name,
                    "CurrentVersion": package.current_version,
                    "ResolvedVersion": package.resolved_version,
                    "LatestVersion": package.latest_version,
                    "IsDeprecated": package.deprecated,
                }
                if package.requested_version is not None:
                    entry["RequestedVersion"] = package.requested_version
                if package.reported_severity is not None:
                    entry["UpgradeSeverity"] = package.reported_severity.value
                dependencies.append(entry)
            frameworks.append({"Name": framework.name, "Dependencies": dependencies})
        projects.append({
            "Name": project.name,
            "FilePath": project.file_path,
            "TargetFrameworks": frameworks,
        })
    return {"Projects": projects}


def render_json(report: Report) -> str:
    """Format JSON output."""
    return json.dumps(to_dict(report), indent=2)


def render_table(report: Report) -> Table:
    """Format a table with one row per package."""
    counts = summarize(report)
    table = Table(
        title="Outdated packages",
        caption=f"{counts['packages']} package(s), {counts['upgradable']} upgradable",
    )
    for column in ("Project", "Framework", "Package", "Current", "Resolved", "Latest", "Severity"):
        table.add_column(column)
    table.add_column("Deprecated", justify="center")

    for project, framework, package in iter_packages(report):
        table.add_row(
            escape(project.name),
            escape(framework.name),
            escape(package.name),
            escape(package.current_version),
            escape(package.resolved_version),
            escape(package.latest_version),
            str(package.severity),
            "yes" if package.deprecated else "",
        )
    return table


def summarize(report: Report) -> dict[str, int]:
    """Count the entries of a report."""
    packages = [package for _, _, package in iter_packages(report)]
    return {
        "projects": len(report.projects),
        "frameworks": sum(len(p.frameworks) for p in report.projects),
        "packages": len(packages),
        "upgradable": sum(1 for p in packages if p.has_upgrade),
    }
