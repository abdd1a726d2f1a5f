import logging
from pathlib import Path

import pytest

from core.logging import LOGGER_NAMESPACE
from tests.fixtures.cookies_db import create_cookies_db


@pytest.fixture()
def cookies_db(tmp_path: Path) -> Path:
    """Provide a populated cookies.sqlite inside a fake profile directory."""
    return create_cookies_db(tmp_path / "Profiles" / "abc123.default-release" / "cookies.sqlite")


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers installed by configure_logging between tests."""
    yield
    logger = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
