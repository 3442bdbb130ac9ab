"""Invocation of the dotnet-outdated tool."""

import logging
import subprocess
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .decode import decode_report
from .errors import InputError
from .models import IndicatedUpdateRequirement, Report

logger = logging.getLogger(__name__)


class VersionLock(Enum):
    """Restrict the upgrades dotnet-outdated considers."""

    NONE = "None"  # consider every upgrade
    MAJOR = "Major"  # stay on the current major version
    MINOR = "Minor"  # stay on the current minor version


class PreRelease(Enum):
    """Whether dotnet-outdated looks for pre-release versions."""

    NEVER = "Never"
    AUTO = "Auto"
    ALWAYS = "Always"


@dataclass
class OutdatedOptions:
    """Options passed through to dotnet-outdated."""

    include_auto_references: bool = False
    pre_release: PreRelease = PreRelease.AUTO
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    transitive: bool = False
    transitive_depth: int | None = None
    version_lock: VersionLock = VersionLock.NONE
    input_dir: Path | None = None

    def __post_init__(self):
        if self.transitive_depth is not None and not self.transitive:
            raise ValueError("transitive_depth requires transitive")
        if self.transitive_depth is not None and self.transitive_depth < 1:
            raise ValueError("transitive_depth must be at least 1")


def build_command(options: OutdatedOptions, output_file: Path, dotnet: str = "dotnet") -> list[str]:
    """Build the dotnet-outdated command line.

    Args:
        options: Options to pass through
        output_file: Where dotnet-outdated writes its JSON report
        dotnet: dotnet executable

    Returns:
        Argument list suitable for subprocess.run
    """
    cmd = [
        dotnet,
        "outdated",
        "--fail-on-updates",
        "--output",
        str(output_file),
        "--output-format",
        "json",
    ]

    if options.include_auto_references:
        cmd.append("--include-auto-references")

    cmd += ["--pre-release", options.pre_release.value]

    for name in options.include:
        cmd += ["--include", name]
    for name in options.exclude:
        cmd += ["--exclude", name]

    if options.transitive:
        cmd += ["--transitive", "--transitive-depth", str(options.transitive_depth or 1)]

    cmd += ["--version-lock", options.version_lock.value]

    if options.input_dir is not None:
        cmd.append(str(options.input_dir))

    return cmd


def run_outdated(
    options: OutdatedOptions, dotnet: str = "dotnet"
) -> tuple[IndicatedUpdateRequirement, Report]:
    """Run dotnet-outdated and decode the report it writes.

    Args:
        options: Options to pass through
        dotnet: dotnet executable

    Returns:
        What the tool's exit code indicated, and the decoded report

    Raises:
        InputError: If the tool cannot be started or wrote no report
        DecodeError: If the report cannot be decoded
    """
    with tempfile.TemporaryDirectory() as output_dir:
        output_file = Path(output_dir) / "outdated.json"
        cmd = build_command(options, output_file, dotnet=dotnet)
        logger.debug("Running %s", " ".join(cmd))

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise InputError(f"cannot run {dotnet} outdated: {e}") from e

        if result.returncode == 0:
            requirement = IndicatedUpdateRequirement.UP_TO_DATE
        else:
            logger.warning(
                "dotnet outdated did not return with a successful exit code: %d",
                result.returncode,
            )
            logger.debug("stdout:\n%s", result.stdout)
            if result.stderr:
                logger.warning("stderr:\n%s", result.stderr)
            requirement = IndicatedUpdateRequirement.UPDATE_REQUIRED

        try:
            content = output_file.read_bytes()
        except OSError as e:
            raise InputError(f"dotnet outdated wrote no report to {output_file}") from e

    logger.debug("Read output file content:\n%s", content.decode("utf-8", "replace"))
    return requirement, decode_report(content)
