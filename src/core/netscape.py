"""
Netscape HTTP cookie file writer.

Renders extracted cookie records into the tab-separated text format read by
curl (``-b``), wget (``--load-cookies``), yt-dlp and Python's
``http.cookiejar.MozillaCookieJar``.

Line layout (tabs between every field)::

    host  TRUE  path  FALSE  expiry  name  value

- Field 2 (include subdomains) is always ``TRUE``.
- Field 4 (secure only) is ``FALSE`` unless real flags are requested and the
  record carries ``is_secure=True``.
- ``expiry`` is the Unix timestamp in seconds.

Output to a file and output to stdout are byte-identical.
"""
from __future__ import annotations

import io
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Iterator, Optional, TextIO, Union

from extractors.exceptions import OutputWriteError

from .logging import get_logger

if TYPE_CHECKING:
    from extractors.browser.firefox._parsers import CookieRecord

LOGGER = get_logger("core.netscape")

# Consumers reject files whose separators are spaces, hence the last line.
NETSCAPE_HEADER = (
    "# Netscape HTTP Cookie File\n"
    "# http://curl.haxx.se/rfc/cookie_spec.html\n"
    "# This is a generated file!  Do not edit.\n"
    "# ALL SPACES MUST BE TABS! - IT WILL THROW AN ERROR!"
)

FIELD_SEPARATOR = "\t"


def format_cookie_line(record: "CookieRecord", real_flags: bool = False) -> str:
    """Render one record as a Netscape cookie line (no trailing newline)."""
    secure = "TRUE" if real_flags and record.is_secure else "FALSE"
    return FIELD_SEPARATOR.join(
        (
            record.host,
            "TRUE",
            record.path,
            secure,
            str(int(record.expiry)),
            record.name,
            record.value,
        )
    )


def render_cookie_file(records: Iterable["CookieRecord"], real_flags: bool = False) -> str:
    """Return the complete cookie file text: header, blank line, one line per record."""
    lines = [NETSCAPE_HEADER, ""]
    lines.extend(format_cookie_line(record, real_flags) for record in records)
    return "\n".join(lines) + "\n"


def write_cookie_file(
    records: Iterable["CookieRecord"],
    stream: TextIO,
    real_flags: bool = False,
) -> int:
    """
    Write the cookie file to an open text stream.

    Each line is flushed as soon as it is written, so an interrupted run
    leaves every completed line intact and in order.

    Returns:
        Number of cookie lines written
    """
    count = 0
    stream.write(NETSCAPE_HEADER + "\n\n")
    stream.flush()
    for record in records:
        stream.write(format_cookie_line(record, real_flags) + "\n")
        stream.flush()
        count += 1
    return count


@contextmanager
def _utf8_stdout() -> Iterator[TextIO]:
    """
    Yield a UTF-8, LF-only text layer over the process stdout.

    The wrapper is detached on exit so sys.stdout stays open.
    """
    sys.stdout.flush()
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        # Already a pure text stream (e.g. io.StringIO); nothing to encode
        yield sys.stdout
        return

    stream = io.TextIOWrapper(buffer, encoding="utf-8", newline="\n", write_through=True)
    try:
        yield stream
    finally:
        stream.flush()
        stream.detach()


def export_cookies(
    records: Iterable["CookieRecord"],
    output: Optional[Union[str, Path]] = None,
    real_flags: bool = False,
    stdout: Optional[TextIO] = None,
) -> int:
    """
    Write cookies to ``output`` (created or truncated) or to standard output.

    Args:
        records: Cookie records in the order they should appear
        output: Destination file path, or None for standard output
        real_flags: Render the secure flag from the record
        stdout: Stream used when ``output`` is None (defaults to sys.stdout)

    Returns:
        Number of cookie lines written

    Raises:
        OutputWriteError: If the destination cannot be created or written
    """
    if output is None:
        try:
            if stdout is not None:
                return write_cookie_file(records, stdout, real_flags)
            with _utf8_stdout() as stream:
                return write_cookie_file(records, stream, real_flags)
        except (OSError, UnicodeError) as exc:
            raise OutputWriteError(f"failed to write cookies to stdout: {exc}") from exc

    output_path = Path(output)
    try:
        with output_path.open("w", encoding="utf-8", newline="\n") as handle:
            count = write_cookie_file(records, handle, real_flags)
    except (OSError, UnicodeError) as exc:
        raise OutputWriteError(f"failed to write cookies to {output_path}: {exc}") from exc

    LOGGER.info("Wrote %d cookies to %s", count, output_path)
    return count
