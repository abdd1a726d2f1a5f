"""
Exceptions for the cookie extraction pipeline.

Every failure in the locate → open → query → format chain is raised as a
subclass of ``ExtractorError`` so the CLI can report it with one handler.
"""


class ExtractorError(Exception):
    """Base exception for extractor errors."""
    pass


class CookieStoreNotFoundError(ExtractorError):
    """Raised when no cookies.sqlite exists under any searched profile root."""

    def __init__(self, searched: tuple = ()):
        self.searched = tuple(searched)
        message = "cookie db not found"
        if self.searched:
            message += " (searched: " + ", ".join(str(p) for p in self.searched) + ")"
        super().__init__(message)


class StorageAccessError(ExtractorError):
    """Raised when the cookie store exists but cannot be opened or read."""
    pass


class QueryError(ExtractorError):
    """Raised when the cookie query fails (schema mismatch, bad SQL)."""
    pass


class RowDecodeError(ExtractorError):
    """Raised when a result row does not have the expected shape."""
    pass


class OutputWriteError(ExtractorError):
    """Raised when the cookie file cannot be created or written."""
    pass


class ConfigurationError(ExtractorError):
    """Raised when the configuration file is invalid."""
    pass
