"""Decoding of dotnet-outdated JSON output into the report model."""

import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import InputError, ReportSyntaxError, SchemaError
from .models import Framework, PackageUpdate, Project, Report
from .versions import Severity

logger = logging.getLogger(__name__)

# Values dotnet-outdated writes into "UpgradeSeverity"
REPORTED_SEVERITIES = {s.value: s for s in (Severity.MAJOR, Severity.MINOR, Severity.PATCH)}


@dataclass(frozen=True)
class JsonPath:
    """Location inside the JSON document, extended one step per nesting level."""

    parts: tuple[str | int, ...] = ()

    def key(self, name: str) -> "JsonPath":
        return JsonPath(self.parts + (name,))

    def index(self, position: int) -> "JsonPath":
        return JsonPath(self.parts + (position,))

    def __str__(self) -> str:
        if not self.parts:
            return "$"
        rendered = ""
        for part in self.parts:
            if isinstance(part, int):
                rendered += f"[{part}]"
            elif rendered:
                rendered += f".{part}"
            else:
                rendered = part
        return rendered


ROOT = JsonPath()


def _kind(value: Any) -> str:
    """Name of the JSON kind of a decoded value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _expect_object(value: Any, path: JsonPath) -> dict:
    if not isinstance(value, dict):
        raise SchemaError(path, "object", _kind(value))
    return value


def _required(obj: dict, name: str, path: JsonPath, expected: str) -> Any:
    if name not in obj:
        raise SchemaError(path.key(name), expected, "nothing")
    return obj[name]


def _string(obj: dict, name: str, path: JsonPath, *, non_empty: bool = True) -> str:
    value = _required(obj, name, path, "string")
    if not isinstance(value, str):
        raise SchemaError(path.key(name), "string", _kind(value))
    if non_empty and not value.strip():
        raise SchemaError(path.key(name), "non-empty string", "empty string")
    return value


def _optional_string(obj: dict, name: str, path: JsonPath) -> str | None:
    if obj.get(name) is None:
        return None
    return _string(obj, name, path)


def _optional_bool(obj: dict, name: str, path: JsonPath, default: bool) -> bool:
    value = obj.get(name)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise SchemaError(path.key(name), "boolean", _kind(value))
    return value


def _array(obj: dict, name: str, path: JsonPath) -> list:
    value = _required(obj, name, path, "array")
    if not isinstance(value, list):
        raise SchemaError(path.key(name), "array", _kind(value))
    return value


def _decode_package(value: Any, path: JsonPath) -> PackageUpdate:
    obj = _expect_object(value, path)
    name = _string(obj, "Name", path)
    resolved = _string(obj, "ResolvedVersion", path)
    latest = _string(obj, "LatestVersion", path)

    reported = None
    raw_severity = obj.get("UpgradeSeverity")
    if raw_severity is not None:
        if not isinstance(raw_severity, str):
            raise SchemaError(path.key("UpgradeSeverity"), "string", _kind(raw_severity))
        if raw_severity not in REPORTED_SEVERITIES:
            raise SchemaError(
                path.key("UpgradeSeverity"),
                "one of " + ", ".join(REPORTED_SEVERITIES),
                f"unrecognized enum value {raw_severity!r}",
            )
        reported = REPORTED_SEVERITIES[raw_severity]

    return PackageUpdate(
        name=name,
        current_version=_optional_string(obj, "CurrentVersion", path) or resolved,
        resolved_version=resolved,
        latest_version=latest,
        deprecated=_optional_bool(obj, "IsDeprecated", path, default=False),
        requested_version=_optional_string(obj, "RequestedVersion", path),
        reported_severity=reported,
    )


def _decode_framework(value: Any, path: JsonPath) -> Framework:
    obj = _expect_object(value, path)
    name = _string(obj, "Name", path)
    deps_path = path.key("Dependencies")

    packages: list[PackageUpdate] = []
    seen: set[str] = set()
    for position, item in enumerate(_array(obj, "Dependencies", path)):
        item_path = deps_path.index(position)
        package = _decode_package(item, item_path)
        if package.name in seen:
            raise SchemaError(
                item_path.key("Name"),
                "package name unique within its framework",
                f"duplicate {package.name!r}",
            )
        seen.add(package.name)
        packages.append(package)

    return Framework(name=name, packages=tuple(packages))


def _decode_project(value: Any, path: JsonPath) -> Project:
    obj = _expect_object(value, path)
    name = _string(obj, "Name", path)
    file_path = _string(obj, "FilePath", path, non_empty=False)
    frameworks_path = path.key("TargetFrameworks")
    frameworks = tuple(
        _decode_framework(item, frameworks_path.index(position))
        for position, item in enumerate(_array(obj, "TargetFrameworks", path))
    )
    return Project(
        name=name,
        file_path=file_path,
        frameworks=frameworks,
    )


def decode_document(document: Any) -> Report:
    """Decode an already parsed JSON value into a Report.

    Args:
        document: Result of ``json.loads`` on dotnet-outdated output

    Returns:
        The fully populated Report

    Raises:
        SchemaError: On the first structural mismatch, with its path
    """
    obj = _expect_object(document, ROOT)
    projects_path = ROOT.key("Projects")
    projects = tuple(
        _decode_project(item, projects_path.index(position))
        for position, item in enumerate(_array(obj, "Projects", ROOT))
    )
    return Report(projects=projects)


def _reject_constant(name: str):
    raise ReportSyntaxError(f"{name} is not a valid JSON value")


def decode_report(data: bytes | str) -> Report:
    """Decode raw dotnet-outdated JSON output into a Report.

    Args:
        data: JSON text, bytes are read as UTF-8

    Returns:
        The fully populated Report

    Raises:
        ReportSyntaxError: If the input is not valid UTF-8 or not valid JSON
        SchemaError: If the JSON does not have the shape of a report
    """
    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ReportSyntaxError(e.reason, offset=e.start) from e
    else:
        text = data.lstrip("\ufeff")

    if not text.strip():
        raise SchemaError(ROOT, "object", "nothing")

    try:
        document = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ReportSyntaxError(e.msg, line=e.lineno, column=e.colno, offset=e.pos) from e
    except (RecursionError, ValueError) as e:
        # nesting too deep or an integer literal over the int digit limit
        raise ReportSyntaxError(str(e)) from e

    report = decode_document(document)
    logger.debug("Decoded report with %d project(s)", len(report.projects))
    return report


def read_input(source: str) -> bytes:
    """Read raw report bytes from a file path, or stdin for ``-``.

    Raises:
        InputError: If the input cannot be read
    """
    try:
        if source == "-":
            return sys.stdin.buffer.read()
        return Path(source).read_bytes()
    except OSError as e:
        raise InputError(f"cannot read {source}: {e.strerror or e}") from e
