"""Core services: configuration, logging and cookie file output."""

from .config import AppConfig, load_app_config  # noqa: F401
from .logging import configure_logging, get_logger  # noqa: F401
