"""Pytest configuration and fixtures."""

import copy
import json

import pytest

SAMPLE_REPORT = {
    "Projects": [
        {
            "Name": "Api",
            "FilePath": "/src/Api/Api.csproj",
            "TargetFrameworks": [
                {
                    "Name": "net8.0",
                    "Dependencies": [
                        {
                            "Name": "Newtonsoft.Json",
                            "ResolvedVersion": "12.0.3",
                            "LatestVersion": "13.0.3",
                            "UpgradeSeverity": "Major",
                        },
                        {
                            "Name": "Serilog",
                            "ResolvedVersion": "3.1.0",
                            "LatestVersion": "3.1.1",
                            "UpgradeSeverity": "Patch",
                        },
                    ],
                }
            ],
        },
        {
            "Name": "Api.Tests",
            "FilePath": "/src/Api.Tests/Api.Tests.csproj",
            "TargetFrameworks": [
                {
                    "Name": "net8.0",
                    "Dependencies": [
                        {
                            "Name": "xunit",
                            "CurrentVersion": "2.4.0",
                            "ResolvedVersion": "2.4.2",
                            "LatestVersion": "2.9.0",
                            "RequestedVersion": "[2.4.0, )",
                            "IsDeprecated": True,
                            "UpgradeSeverity": "Minor",
                        },
                    ],
                }
            ],
        },
    ]
}

MINIMAL_REPORT = {
    "Projects": [
        {
            "Name": "App",
            "FilePath": "App.csproj",
            "TargetFrameworks": [
                {
                    "Name": "net6.0",
                    "Dependencies": [
                        {
                            "Name": "Dapper",
                            "ResolvedVersion": "2.0.0",
                            "LatestVersion": "2.1.0",
                        }
                    ],
                }
            ],
        }
    ]
}


@pytest.fixture
def sample_document():
    """Parsed dotnet-outdated output with two projects."""
    return copy.deepcopy(SAMPLE_REPORT)


@pytest.fixture
def sample_json(sample_document):
    """dotnet-outdated output as JSON text."""
    return json.dumps(sample_document)


@pytest.fixture
def minimal_document():
    """Smallest report containing every required field once."""
    return copy.deepcopy(MINIMAL_REPORT)


@pytest.fixture
def up_to_date_json():
    """Report where every package already is at its latest version."""
    return json.dumps({
        "Projects": [
            {
                "Name": "App",
                "FilePath": "App.csproj",
                "TargetFrameworks": [
                    {
                        "Name": "net8.0",
                        "Dependencies": [
                            {"Name": "Dapper", "ResolvedVersion": "2.1.0", "LatestVersion": "2.1.0"}
                        ],
                    }
                ],
            }
        ]
    })


@pytest.fixture
def report_file(tmp_path, sample_json):
    """Write the sample report to a temporary file."""
    path = tmp_path / "outdated.json"
    path.write_text(sample_json)
    return path
