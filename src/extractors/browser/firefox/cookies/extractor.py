"""
Firefox Cookies Extractor

Exports cookies for a set of hostnames from a Firefox cookies.sqlite into a
Netscape cookie file (stdout or a named file).

Workflow:
    1. Short-circuit when no hostnames were requested
    2. Locate cookies.sqlite (or use an explicitly supplied file)
    3. Query moz_cookies for the requested hosts (read-only)
    4. Render the Netscape cookie file and write it out

Every step raises a subclass of ``ExtractorError``; nothing is retried and
nothing is written until all rows have been decoded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, TextIO

from core.logging import get_logger
from core.netscape import export_cookies
from extractors.exceptions import CookieStoreNotFoundError

from .._parsers import CookieRecord, query_cookies
from .._patterns import candidate_profile_roots
from .discovery import find_cookie_store

LOGGER = get_logger("extractors.browser.firefox.cookies")


@dataclass
class CookieExportRequest:
    """Resolved inputs for one export run."""

    hosts: List[str]
    output: Optional[Path] = None  # None -> stdout
    cookie_file: Optional[Path] = None  # Skip discovery when set
    profile_roots: List[Path] = field(default_factory=list)  # Searched before built-in roots
    prefer_newest: bool = False
    real_flags: bool = False


class FirefoxCookiesExtractor:
    """
    Extract cookies for selected hosts from a Firefox profile.

    Example:
        extractor = FirefoxCookiesExtractor()
        extractor.run(CookieExportRequest(hosts=["example.com"]))
    """

    def __init__(self, stdout: Optional[TextIO] = None) -> None:
        self._stdout = stdout

    def search_roots(self, request: CookieExportRequest) -> List[Path]:
        """Configured roots first, then the platform defaults."""
        return list(dict.fromkeys([*request.profile_roots, *candidate_profile_roots()]))

    def locate(self, request: CookieExportRequest) -> Path:
        """Return the cookie store to read, raising if none can be found."""
        if request.cookie_file is not None:
            LOGGER.debug("Using explicit cookie file %s", request.cookie_file)
            return request.cookie_file

        roots = self.search_roots(request)
        db_path = find_cookie_store(roots, prefer_newest=request.prefer_newest)
        if db_path is None:
            raise CookieStoreNotFoundError(tuple(roots))
        return db_path

    def extract(self, request: CookieExportRequest) -> List[CookieRecord]:
        """Locate the store and read cookies for the requested hosts."""
        if not request.hosts:
            return []
        db_path = self.locate(request)
        return query_cookies(db_path, request.hosts, include_secure=request.real_flags)

    def run(self, request: CookieExportRequest) -> int:
        """
        Run the full export.

        Returns:
            Number of cookie lines written (0 when no hosts were given and
            nothing was written at all)
        """
        if not request.hosts:
            LOGGER.debug("No hosts requested, nothing to do")
            return 0

        records = self.extract(request)
        LOGGER.info("Extracted %d cookies for %s", len(records), ", ".join(request.hosts))
        return export_cookies(
            records,
            request.output,
            real_flags=request.real_flags,
            stdout=self._stdout,
        )
