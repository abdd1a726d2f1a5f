"""
Firefox cookie database parsing utilities.

Pure functions for reading cookies.sqlite (moz_cookies):
- build_placeholders: ``?`` parameter list for a variable-length IN clause
- build_cookie_query: SELECT statement filtered by host
- open_cookie_db: read-only connection with storage errors normalised
- query_cookies: materialized CookieRecord list for a set of hosts

Firefox stores cookies in plaintext (no decryption needed).  ``expiry`` is a
Unix timestamp in seconds.

Usage:
    from extractors.browser.firefox._parsers import query_cookies

    records = query_cookies(Path("cookies.sqlite"), ["example.com"])
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Union

from core.logging import get_logger
from extractors.exceptions import QueryError, RowDecodeError, StorageAccessError

from .cookies._schemas import BASE_COLUMNS, COLUMN_TYPES, COOKIES_TABLE, SECURE_COLUMN

LOGGER = get_logger("extractors.browser.firefox.parsers")


# =============================================================================
# Cookie Dataclasses
# =============================================================================


@dataclass(frozen=True)
class CookieRecord:
    """Single cookie row from moz_cookies."""

    host: str
    path: str
    expiry: int  # Unix seconds
    name: str
    value: str

    # Only populated when the secure column was selected
    is_secure: Optional[bool] = None


# =============================================================================
# Query Construction
# =============================================================================


def build_placeholders(count: int) -> str:
    """
    Build a comma-joined ``?`` placeholder list for an ``IN (...)`` clause.

    Example:
        >>> build_placeholders(0)
        ''
        >>> build_placeholders(3)
        '?,?,?'
    """
    if count < 0:
        raise ValueError(f"placeholder count must be >= 0, got {count}")
    return ",".join("?" * count)


def build_cookie_query(host_count: int, include_secure: bool = False) -> str:
    """Return the moz_cookies SELECT for ``host_count`` bound hostnames."""
    columns = list(BASE_COLUMNS)
    if include_secure:
        columns.append(SECURE_COLUMN)
    return (
        f"SELECT {', '.join(columns)}\n"
        f"FROM {COOKIES_TABLE}\n"
        f"WHERE host IN ({build_placeholders(host_count)})"
    )


# =============================================================================
# Database Access
# =============================================================================


@contextmanager
def open_cookie_db(db_path: Union[str, Path]) -> Iterator[sqlite3.Connection]:
    """
    Open cookies.sqlite read-only and close it on exit.

    The database header is read immediately so that a missing, locked,
    corrupt or non-SQLite file fails here rather than at query time.

    Raises:
        StorageAccessError: If the store cannot be opened or read
    """
    path = Path(db_path)
    uri = f"{path.resolve().as_uri()}?mode=ro"
    try:
        conn = sqlite3.connect(uri, uri=True)
    except sqlite3.Error as exc:
        raise StorageAccessError(f"cannot open cookie db {path}: {exc}") from exc

    try:
        try:
            conn.execute("PRAGMA schema_version").fetchone()
        except sqlite3.Error as exc:
            raise StorageAccessError(f"cannot read cookie db {path}: {exc}") from exc
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()


def _decode_row(row: sqlite3.Row, include_secure: bool) -> CookieRecord:
    values = {}
    for column in BASE_COLUMNS + ((SECURE_COLUMN,) if include_secure else ()):
        try:
            value = row[column]
        except (IndexError, KeyError) as exc:
            raise RowDecodeError(f"cookie row has no column '{column}'") from exc

        if column == SECURE_COLUMN and value is None:
            value = 0

        expected = COLUMN_TYPES[column]
        if not isinstance(value, expected):
            raise RowDecodeError(
                f"cookie column '{column}' has type {type(value).__name__}, "
                f"expected {expected.__name__}"
            )
        values[column] = value

    return CookieRecord(
        host=values["host"],
        path=values["path"],
        expiry=values["expiry"],
        name=values["name"],
        value=values["value"],
        is_secure=bool(values[SECURE_COLUMN]) if include_secure else None,
    )


_LOCK_ERROR_CODES = frozenset({sqlite3.SQLITE_BUSY, sqlite3.SQLITE_LOCKED})


def _query_error(exc: sqlite3.Error, db_path: Union[str, Path]) -> Exception:
    """Map a sqlite3 error raised while running the SELECT to our taxonomy."""
    # Extended result codes carry the primary code in the low byte
    code = getattr(exc, "sqlite_errorcode", None)
    if code is not None and code & 0xFF in _LOCK_ERROR_CODES:
        # The browser may take an exclusive lock between open and query
        return StorageAccessError(f"cookie db {db_path} is locked: {exc}")
    # Raised by the sqlite3 module itself for TEXT cells that are not UTF-8
    if isinstance(exc, sqlite3.OperationalError) and str(exc).startswith("Could not decode"):
        return RowDecodeError(f"cookie row in {db_path} is not valid UTF-8: {exc}")
    return QueryError(f"cookie query failed on {db_path}: {exc}")


def query_cookies(
    db_path: Union[str, Path],
    hosts: Sequence[str],
    include_secure: bool = False,
) -> List[CookieRecord]:
    """
    Return every cookie whose host is in ``hosts``.

    Rows come back in storage-engine order.  The full result is
    materialized before returning, so a decode failure on any row yields
    no records at all.

    Args:
        db_path: Path to cookies.sqlite
        hosts: Hostnames to match exactly against moz_cookies.host
        include_secure: Also read the isSecure flag

    Returns:
        List of CookieRecord (empty when ``hosts`` is empty)

    Raises:
        StorageAccessError: Store cannot be opened or read
        QueryError: Query failed (e.g. no moz_cookies table)
        RowDecodeError: A row had an unexpected shape
    """
    if not hosts:
        return []

    query = build_cookie_query(len(hosts), include_secure)

    with open_cookie_db(db_path) as conn:
        try:
            cursor = conn.execute(query, tuple(hosts))
            rows = cursor.fetchall()
        except sqlite3.Error as exc:
            raise _query_error(exc, db_path) from exc

        records = [_decode_row(row, include_secure) for row in rows]

    LOGGER.debug("Read %d cookies for %d hosts from %s", len(records), len(hosts), db_path)
    return records
