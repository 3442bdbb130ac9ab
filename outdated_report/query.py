"""Filtering of decoded reports."""

from collections.abc import Callable, Iterable, Iterator
from dataclasses import replace

from .models import Framework, PackageUpdate, Project, Report
from .versions import Severity

Predicate = Callable[[PackageUpdate], bool]


def has_upgrade(package: PackageUpdate) -> bool:
    """True when the resolved version is not the latest one."""
    return package.has_upgrade


def is_deprecated(package: PackageUpdate) -> bool:
    return package.deprecated


def severity_at_least(level: Severity) -> Predicate:
    """Match packages whose upgrade is at least as large as ``level``.

    Packages with an UNKNOWN severity never match.
    """

    def predicate(package: PackageUpdate) -> bool:
        return package.severity.at_least(level)

    return predicate


def name_in(names: Iterable[str]) -> Predicate:
    wanted = frozenset(names)
    return lambda package: package.name in wanted


def name_not_in(names: Iterable[str]) -> Predicate:
    unwanted = frozenset(names)
    return lambda package: package.name not in unwanted


def all_of(*predicates: Predicate) -> Predicate:
    """Combine predicates; no predicates at all matches everything."""
    return lambda package: all(predicate(package) for predicate in predicates)


def filter_report(report: Report, predicate: Predicate, keep_empty: bool = False) -> Report:
    """Return a pruned copy of ``report`` holding only matching packages.

    Args:
        report: Decoded report, left untouched
        predicate: Test applied to every PackageUpdate
        keep_empty: Keep projects and frameworks left without packages

    Returns:
        A new Report; by default frameworks without matching packages and
        projects without remaining frameworks are dropped
    """
    projects: list[Project] = []
    for project in report.projects:
        frameworks: list[Framework] = []
        for framework in project.frameworks:
            packages = tuple(p for p in framework.packages if predicate(p))
            if packages or keep_empty:
                frameworks.append(replace(framework, packages=packages))
        if frameworks or keep_empty:
            projects.append(replace(project, frameworks=tuple(frameworks)))
    return Report(projects=tuple(projects))


def iter_packages(report: Report) -> Iterator[tuple[Project, Framework, PackageUpdate]]:
    """Yield every package with its owners, in document order."""
    for project in report.projects:
        for framework in project.frameworks:
            for package in framework.packages:
                yield project, framework, package
