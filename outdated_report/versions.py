"""Upgrade severity classification for version pairs."""

import re
from enum import Enum

from packaging.version import Version

_TRIPLET = re.compile(r"^[0-9]+\.[0-9]+\.[0-9]+$")


class Severity(Enum):
    """How large a version jump an available upgrade represents."""

    MAJOR = "Major"
    MINOR = "Minor"
    PATCH = "Patch"
    NONE = "None"
    UNKNOWN = "Unknown"

    @property
    def rank(self) -> int | None:
        """Ordering for threshold checks; UNKNOWN has no rank."""
        return _RANKS.get(self)

    def at_least(self, other: "Severity") -> bool:
        if self.rank is None or other.rank is None:
            return False
        return self.rank >= other.rank

    def __str__(self) -> str:
        return self.value


_RANKS = {
    Severity.NONE: 0,
    Severity.PATCH: 1,
    Severity.MINOR: 2,
    Severity.MAJOR: 3,
}


def _parse_triplet(value: str) -> Version | None:
    if not _TRIPLET.match(value.strip()):
        return None
    return Version(value.strip())


def classify(current: str, latest: str) -> Severity:
    """Classify the upgrade from ``current`` to ``latest``.

    Both sides must be plain ``major.minor.patch`` versions, anything else
    (pre-release tags, build metadata, four components) is UNKNOWN.

    Args:
        current: Version currently in use
        latest: Latest available version

    Returns:
        MAJOR, MINOR or PATCH for an upgrade, NONE when ``latest`` is not
        newer than ``current``, UNKNOWN when either side does not parse
    """
    old_ver = _parse_triplet(current)
    new_ver = _parse_triplet(latest)
    if old_ver is None or new_ver is None:
        return Severity.UNKNOWN

    if new_ver <= old_ver:
        return Severity.NONE
    if new_ver.major != old_ver.major:
        return Severity.MAJOR
    if new_ver.minor != old_ver.minor:
        return Severity.MINOR
    return Severity.PATCH
