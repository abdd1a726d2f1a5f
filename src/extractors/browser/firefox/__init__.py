"""
Firefox browser family extractors.

Firefox uses the Gecko engine with SQLite-based artifact storage:
- cookies.sqlite: Cookies (moz_cookies, plaintext)

Exports:
    FirefoxCookiesExtractor: Export cookies for selected hosts as a Netscape cookie file
"""

from __future__ import annotations

from .cookies.extractor import CookieExportRequest, FirefoxCookiesExtractor

__all__ = [
    "CookieExportRequest",
    "FirefoxCookiesExtractor",
]
