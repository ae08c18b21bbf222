"""Pipeline utilities package: logging."""

from movie_success.etl.utils.logger import PACKAGE_LOGGER, setup_from_settings, setup_logger

__all__ = ["PACKAGE_LOGGER", "setup_from_settings", "setup_logger"]
