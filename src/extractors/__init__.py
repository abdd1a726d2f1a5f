"""
Cookie extractors.

Folder Structure:
- browser/         Browser family extractors (firefox/)
- exceptions.py    Error taxonomy shared by every pipeline stage
"""

from .exceptions import (
    ExtractorError,
    CookieStoreNotFoundError,
    StorageAccessError,
    QueryError,
    RowDecodeError,
    OutputWriteError,
    ConfigurationError,
)
