"""
Semantic version computation for the next release.

The previous version usually comes from the latest git tag (``v1.2.3``).
The bump level is chosen on the command line; major wins over minor,
which wins over patch, and patch is the default.
"""

import re
from typing import Optional, Tuple


INITIAL_VERSION = "1.0.0"

_VERSION = re.compile(r"^[vV]?(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def parse_version(version: Optional[str]) -> Optional[Tuple[int, int, int]]:
    """Parse ``major.minor.patch`` from a tag name, or return None.

    Missing minor/patch parts count as 0 and any pre-release or build
    suffix is ignored.
    """
    if not version:
        return None
    match = _VERSION.match(version.strip())
    if not match:
        return None
    return tuple(int(part) if part else 0 for part in match.groups())  # type: ignore[return-value]


def bump_version(
    previous: Optional[str],
    major: bool = False,
    minor: bool = False,
    patch: bool = False,
) -> str:
    """Return the version following ``previous``.

    >>> bump_version("1.2.3", major=True)
    '2.0.0'
    >>> bump_version("v1.2.3", minor=True)
    '1.3.0'
    >>> bump_version(None)
    '1.0.0'
    """
    parsed = parse_version(previous)
    if parsed is None:
        return INITIAL_VERSION
    cur_major, cur_minor, cur_patch = parsed
    if major:
        return f"{cur_major + 1}.0.0"
    if minor:
        return f"{cur_major}.{cur_minor + 1}.0"
    return f"{cur_major}.{cur_minor}.{cur_patch + 1}"


def resolve_version(
    previous: Optional[str],
    major: bool = False,
    minor: bool = False,
    patch: bool = False,
    override: Optional[str] = None,
) -> str:
    """Return the version of the release being generated.

    An explicit ``override`` always wins over the computed bump. A
    leading ``v`` is dropped because tags add it back.
    """
    version = override.strip() if override and override.strip() else bump_version(previous, major, minor, patch)
    version = re.sub(r"^v", "", version, flags=re.IGNORECASE)
    return version or INITIAL_VERSION
