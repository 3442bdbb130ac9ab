"""Core data models for outdated-report."""

from dataclasses import dataclass
from enum import Enum

from .versions import Severity, classify


class IndicatedUpdateRequirement(Enum):
    """What the dotnet-outdated exit code said about required updates."""

    UP_TO_DATE = "up-to-date"
    UPDATE_REQUIRED = "update-required"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PackageUpdate:
    """A single outdated dependency of one target framework."""

    name: str
    current_version: str
    resolved_version: str
    latest_version: str
    deprecated: bool = False
    requested_version: str | None = None  # the requested version range
    reported_severity: Severity | None = None  # as written by dotnet-outdated

    @property
    def severity(self) -> Severity:
        """Size of the jump from the current to the latest version."""
        return classify(self.current_version, self.latest_version)

    @property
    def has_upgrade(self) -> bool:
        return self.resolved_version != self.latest_version


@dataclass(frozen=True)
class Framework:
    """Dependencies of a project for one target framework moniker."""

    name: str
    packages: tuple[PackageUpdate, ...] = ()


@dataclass(frozen=True)
class Project:
    """A single .csproj entry of the report."""

    name: str
    file_path: str
    frameworks: tuple[Framework, ...] = ()


@dataclass(frozen=True)
class Report:
    """A parsed dotnet-outdated report, projects in build order."""

    projects: tuple[Project, ...] = ()
