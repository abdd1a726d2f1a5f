from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from core.app_version import get_app_version
from core.config import AppConfig, load_app_config
from core.logging import configure_logging, get_logger
from extractors.browser.firefox import CookieExportRequest, FirefoxCookiesExtractor
from extractors.exceptions import ExtractorError

LOGGER = get_logger("app.main")

PROG = "ffcookies"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Export Firefox cookies for the given hosts as a Netscape cookie file.",
        epilog="Exit status is 0 on success (including when no hosts are given) and 1 on any error.",
    )
    parser.add_argument("hosts", nargs="*", help="grab cookies for these hosts")
    parser.add_argument("-o", "--output", type=Path, help="save output to file")
    parser.add_argument(
        "-f", "--cookie-file", type=Path,
        help="use a specific cookies.sqlite (default is to autodetect)",
    )
    parser.add_argument(
        "--newest", action="store_true", default=None,
        help="when several profiles have cookies, use the most recently modified store",
    )
    parser.add_argument(
        "--real-flags", action="store_true", default=None,
        help="write the cookie's real secure flag instead of FALSE",
    )
    parser.add_argument("-c", "--config", type=Path, help="YAML configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    parser.add_argument("-V", "--version", action="version", version=f"{PROG} {get_app_version()}")
    return parser


def build_request(args: argparse.Namespace, config: AppConfig) -> CookieExportRequest:
    """Merge command line arguments over configuration values."""
    return CookieExportRequest(
        hosts=list(args.hosts),
        output=args.output,
        cookie_file=args.cookie_file,
        profile_roots=list(config.discovery.profile_roots),
        prefer_newest=config.discovery.prefer_newest if args.newest is None else args.newest,
        real_flags=config.output.real_flags if args.real_flags is None else args.real_flags,
    )


def _report(message: str) -> None:
    print(f"{PROG}: error: {message}", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # No hosts: no config, no logging setup, no discovery, no output
    if not args.hosts:
        return 0

    try:
        config = load_app_config(args.config)
        level = logging.DEBUG if args.verbose else config.logging.level_number
        configure_logging(
            level=level,
            log_dir=config.logging.log_dir,
            max_bytes=config.logging.max_mb * 1024 * 1024,
            backup_count=config.logging.backup_count,
        )
        if config.source is not None:
            LOGGER.debug("Loaded configuration from %s", config.source)

        request = build_request(args, config)
        FirefoxCookiesExtractor().run(request)
    except ExtractorError as exc:
        LOGGER.debug("Export failed", exc_info=True)
        _report(str(exc))
        return 1
    except OSError as exc:
        # e.g. the log directory cannot be created
        _report(str(exc))
        return 1

    return 0


def cli() -> None:
    """Console script entry point."""
    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
