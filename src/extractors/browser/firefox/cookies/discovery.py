"""
Firefox cookie store discovery.

Walks the candidate profile roots depth-first, reporting a directory's files
before descending into (and finally reporting) its subdirectories, and
returns the first file named cookies.sqlite.

Traversal order:
- Entries within a directory are visited in sorted name order, so results
  are stable across filesystems that enumerate in different orders.
- Files come before the directory that contains them (contents first).
- Roots are tried in the order given; a missing root is skipped.

When several profiles hold a cookies.sqlite the first one found wins unless
``prefer_newest`` is set, in which case every match is collected and the most
recently modified file is returned.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from core.logging import get_logger

from .._patterns import (
    COOKIE_DB_FILENAME,
    candidate_profile_roots,
    extract_profile_from_path,
)

LOGGER = get_logger("extractors.browser.firefox.cookies.discovery")


def walk_contents_first(root: Path) -> Iterator[Path]:
    """
    Yield every path below ``root`` depth-first, files before directories.

    Each directory is yielded after all of its contents.  ``root`` itself is
    yielded last.  Unreadable directories are skipped; symlinked directories
    are not followed.
    """
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        LOGGER.debug("Skipping unreadable directory %s: %s", root, exc)
        entries = []

    subdirs = []
    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            is_dir = False
        if is_dir:
            subdirs.append(entry)
        else:
            yield Path(entry.path)

    for entry in subdirs:
        yield from walk_contents_first(Path(entry.path))

    yield root


def _iter_matches(root: Path, filename: str) -> Iterator[Path]:
    for path in walk_contents_first(root):
        if path.name == filename and path.is_file():
            yield path


def find_cookie_stores(
    roots: Iterable[Path],
    filename: str = COOKIE_DB_FILENAME,
) -> List[Path]:
    """Return every ``filename`` under ``roots`` in traversal order."""
    matches: List[Path] = []
    for root in roots:
        if not root.is_dir():
            LOGGER.debug("Profile root not present: %s", root)
            continue
        matches.extend(_iter_matches(root, filename))
    return matches


def find_cookie_store(
    roots: Optional[Sequence[Path]] = None,
    prefer_newest: bool = False,
    filename: str = COOKIE_DB_FILENAME,
) -> Optional[Path]:
    """
    Locate a Firefox cookies.sqlite.

    Args:
        roots: Directories to search (default: candidate_profile_roots())
        prefer_newest: Pick the most recently modified match instead of the
            first one in traversal order
        filename: Name of the store file

    Returns:
        Path to the cookie store, or None if no candidate root contains one
    """
    if roots is None:
        roots = candidate_profile_roots()

    if prefer_newest:
        matches = find_cookie_stores(roots, filename)
        if not matches:
            return None
        if len(matches) > 1:
            LOGGER.info("Found %d cookie stores, choosing the newest", len(matches))
        chosen = max(matches, key=lambda p: p.stat().st_mtime)
    else:
        chosen = None
        for root in roots:
            if not root.is_dir():
                LOGGER.debug("Profile root not present: %s", root)
                continue
            chosen = next(_iter_matches(root, filename), None)
            if chosen is not None:
                break
        if chosen is None:
            return None

    LOGGER.info("Using cookie store %s (profile %s)", chosen, extract_profile_from_path(str(chosen)))
    return chosen
