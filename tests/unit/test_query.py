"""Tests for report filtering."""

import json

import pytest

from outdated_report.decode import decode_report
from outdated_report.query import (
    all_of,
    filter_report,
    has_upgrade,
    is_deprecated,
    iter_packages,
    name_in,
    name_not_in,
    severity_at_least,
)
from outdated_report.versions import Severity


@pytest.fixture
def report(sample_json):
    return decode_report(sample_json)


def _names(report):
    return [package.name for _, _, package in iter_packages(report)]


class TestPredicates:
    """Test filtering by single predicates."""

    def test_has_upgrade(self, up_to_date_json, report):
        assert filter_report(decode_report(up_to_date_json), has_upgrade).projects == ()
        assert _names(filter_report(report, has_upgrade)) == ["Newtonsoft.Json", "Serilog", "xunit"]

    def test_is_deprecated(self, report):
        filtered = filter_report(report, is_deprecated)

        assert [p.name for p in filtered.projects] == ["Api.Tests"]
        assert _names(filtered) == ["xunit"]

    def test_severity_at_least_minor(self, report):
        filtered = filter_report(report, severity_at_least(Severity.MINOR))

        assert _names(filtered) == ["Newtonsoft.Json", "xunit"]

    def test_severity_at_least_major(self, report):
        assert _names(filter_report(report, severity_at_least(Severity.MAJOR))) == ["Newtonsoft.Json"]

    def test_unknown_severity_is_excluded(self):
        report = decode_report(json.dumps({"Projects": [{
            "Name": "App", "FilePath": "App.csproj", "TargetFrameworks": [{
                "Name": "net8.0", "Dependencies": [
                    {"Name": "Beta", "ResolvedVersion": "1.0.0-rc.1", "LatestVersion": "2.0.0"},
                ],
            }],
        }]}))

        assert filter_report(report, severity_at_least(Severity.PATCH)).projects == ()

    def test_name_filters(self, report):
        assert _names(filter_report(report, name_in(["Serilog"]))) == ["Serilog"]
        assert _names(filter_report(report, name_not_in(["Serilog"]))) == ["Newtonsoft.Json", "xunit"]

    def test_all_of(self, report):
        predicate = all_of(has_upgrade, severity_at_least(Severity.MINOR), name_not_in(["xunit"]))
        assert _names(filter_report(report, predicate)) == ["Newtonsoft.Json"]

    def test_all_of_without_predicates_matches_everything(self, report):
        assert filter_report(report, all_of()) == report


class TestFilterReport:
    """Test pruning behaviour of filter_report."""

    def test_does_not_mutate_input(self, report, sample_json):
        filter_report(report, is_deprecated)
        assert report == decode_report(sample_json)

    def test_idempotent(self, report):
        for predicate in (has_upgrade, is_deprecated, severity_at_least(Severity.MINOR)):
            once = filter_report(report, predicate)
            assert filter_report(once, predicate) == once

    def test_drops_empty_parents(self, report):
        filtered = filter_report(report, name_in(["Serilog"]))

        assert len(filtered.projects) == 1
        assert len(filtered.projects[0].frameworks) == 1

    def test_keep_empty(self, report):
        filtered = filter_report(report, is_deprecated, keep_empty=True)

        assert [p.name for p in filtered.projects] == ["Api", "Api.Tests"]
        assert filtered.projects[0].frameworks[0].packages == ()
        assert _names(filtered) == ["xunit"]

    def test_project_without_frameworks(self):
        """Should decode fine and be dropped from default filtered output."""
        report = decode_report(json.dumps({"Projects": [
            {"Name": "Empty", "FilePath": "Empty.csproj", "TargetFrameworks": []},
        ]}))

        assert len(report.projects) == 1
        assert filter_report(report, has_upgrade).projects == ()
        assert len(filter_report(report, has_upgrade, keep_empty=True).projects) == 1


class TestIterPackages:
    """Test flattening reports."""

    def test_yields_owners_in_order(self, report):
        triples = list(iter_packages(report))

        assert [(p.name, f.name, pkg.name) for p, f, pkg in triples] == [
            ("Api", "net8.0", "Newtonsoft.Json"),
            ("Api", "net8.0", "Serilog"),
            ("Api.Tests", "net8.0", "xunit"),
        ]
