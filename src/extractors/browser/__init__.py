"""
Browser extractors organized by browser family.

Structure:
    browser/
    └── firefox/     # Firefox (Gecko engine)

Usage:
    from extractors.browser.firefox import FirefoxCookiesExtractor
"""

from . import firefox

__all__ = ['firefox']
