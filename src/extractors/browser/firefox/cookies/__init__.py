"""Firefox cookie export: discovery, extraction and Netscape output."""

from .discovery import find_cookie_store, find_cookie_stores, walk_contents_first
from .extractor import CookieExportRequest, FirefoxCookiesExtractor

__all__ = [
    "CookieExportRequest",
    "FirefoxCookiesExtractor",
    "find_cookie_store",
    "find_cookie_stores",
    "walk_contents_first",
]
