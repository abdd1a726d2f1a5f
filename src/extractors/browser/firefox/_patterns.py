"""
Firefox profile root paths on a live system.

Firefox keeps its profiles under a per-user data directory whose location
depends on the platform:

- Windows: %APPDATA%/Mozilla/Firefox/Profiles
- macOS:   ~/Library/Application Support/Firefox/Profiles
- Linux:   ~/.mozilla/firefox (and the snap sandbox copy)

Profile directories have randomized names (e.g. abc123.default-release);
cookies.sqlite lives directly inside each profile.

The first candidate for every platform is derived from the platform data
directory so the search mirrors where Firefox itself writes.  Home-relative
dot-directory roots follow as fallbacks.

Usage:
    from extractors.browser.firefox._patterns import (
        COOKIE_DB_FILENAME,
        candidate_profile_roots,
    )

    for root in candidate_profile_roots():
        ...
"""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple


COOKIE_DB_FILENAME = "cookies.sqlite"

# Profile root relative to the platform data directory
# Keys are platform families as returned by platform_family()
DATA_DIR_PROFILE_ROOTS: Dict[str, Tuple[str, ...]] = {
    "windows": ("Mozilla", "Firefox", "Profiles"),
    "macos": ("Firefox", "Profiles"),
    "linux": ("Mozilla", "Firefox", "Profiles"),
}

# Dot-directory roots relative to the user's home, tried after the data dir
HOME_PROFILE_ROOTS: Dict[str, List[Tuple[str, ...]]] = {
    "windows": [],
    "macos": [],
    "linux": [
        (".mozilla", "firefox"),
        ("snap", "firefox", "common", ".mozilla", "firefox"),
    ],
}


def platform_family(platform: Optional[str] = None) -> str:
    """Map ``sys.platform`` values to windows, macos or linux."""
    value = platform if platform is not None else sys.platform
    if value.startswith("win") or value == "cygwin":
        return "windows"
    if value == "darwin":
        return "macos"
    return "linux"


def get_data_dir(
    platform: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> Optional[Path]:
    """
    Return the per-user application data directory.

    Args:
        platform: ``sys.platform`` style identifier (default: current)
        environ: Environment mapping (default: os.environ)
        home: Home directory (default: Path.home(), None if unresolvable)

    Returns:
        Data directory, or None when the environment does not define one
    """
    env = os.environ if environ is None else environ
    family = platform_family(platform)

    if family == "windows":
        appdata = env.get("APPDATA")
        return Path(appdata) if appdata else None

    if home is None:
        home = _resolve_home()

    if family == "macos":
        return home / "Library" / "Application Support" if home else None

    xdg_data = env.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return home / ".local" / "share" if home else None


def _resolve_home() -> Optional[Path]:
    try:
        return Path.home()
    except RuntimeError:
        return None


def candidate_profile_roots(
    platform: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> List[Path]:
    """
    Build the ordered list of directories to search for cookies.sqlite.

    Example:
        >>> candidate_profile_roots("linux", {}, Path("/home/alice"))
        [PosixPath('/home/alice/.local/share/Mozilla/Firefox/Profiles'),
         PosixPath('/home/alice/.mozilla/firefox'),
         PosixPath('/home/alice/snap/firefox/common/.mozilla/firefox')]

    Returns:
        Candidate roots in search order (may be empty)
    """
    family = platform_family(platform)
    if home is None:
        home = _resolve_home()

    roots: List[Path] = []
    data_dir = get_data_dir(platform, environ, home)
    if data_dir is not None:
        roots.append(data_dir.joinpath(*DATA_DIR_PROFILE_ROOTS[family]))

    if home is not None:
        for parts in HOME_PROFILE_ROOTS[family]:
            roots.append(home.joinpath(*parts))

    # Deduplicate (preserves order)
    return list(dict.fromkeys(roots))


def extract_profile_from_path(path: str) -> str:
    """
    Extract Firefox profile name from a path.

    Firefox profiles have randomized names like:
    - abc123def.default-release
    - xyz789.default

    Args:
        path: Full path containing Firefox profile

    Returns:
        Profile name or "Default" if not found

    Example:
        >>> extract_profile_from_path(
        ...     "C:/Users/John/AppData/Roaming/Mozilla/Firefox/Profiles/abc123.default-release/cookies.sqlite"
        ... )
        'abc123.default-release'
    """
    # Normalise separators for cross-platform matching
    norm = str(path).replace("\\", "/")

    patterns = [
        r"Profiles/([^/]+)/",
        r"\.mozilla/firefox/([^/]+)/",
    ]

    for pattern in patterns:
        match = re.search(pattern, norm)
        if match:
            return match.group(1)

    return "Default"
