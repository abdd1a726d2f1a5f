"""
Firefox cookies.sqlite schema definitions.

Schema Documentation:
- moz_cookies table: Primary cookie storage (Firefox 3+)

Column Evolution:
- Firefox 3+: host, name, value, path, expiry, isSecure, isHttpOnly, sameSite
- Firefox 60+: originAttributes (container tabs, private browsing, FPI)
- Firefox 86+: schemeMap (for SameSite cookie fixes)

Only the columns needed for a Netscape cookie line are read.  ``expiry`` is a
Unix timestamp in seconds (unlike creationTime/lastAccessed, which are PRTime
microseconds).
"""

from __future__ import annotations

from typing import Dict, Tuple, Type


COOKIES_TABLE = "moz_cookies"

# Columns selected for every extraction, in SELECT order
BASE_COLUMNS: Tuple[str, ...] = ("name", "value", "host", "path", "expiry")

# Extra column selected when the real secure flag is rendered
SECURE_COLUMN = "isSecure"

# Python type each selected column must decode to
COLUMN_TYPES: Dict[str, Type] = {
    "name": str,
    "value": str,
    "host": str,
    "path": str,
    "expiry": int,
    SECURE_COLUMN: int,
}
