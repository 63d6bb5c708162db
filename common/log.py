"""Shared logging utilities for the advisor service."""

import logging

import common.settings


class HealthCheckFilter(logging.Filter):
    """Filter out health check requests from uvicorn access logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Return False to suppress health check log entries."""
        return '/health' not in record.getMessage()


def configure_logging() -> None:
    """Set the root log level and suppress health check access entries."""
    logging.basicConfig(level=common.settings.LOG_LEVEL)
    logging.getLogger().setLevel(common.settings.LOG_LEVEL)
    access_logger = logging.getLogger('uvicorn.access')
    if not any(isinstance(f, HealthCheckFilter) for f in access_logger.filters):
        access_logger.addFilter(HealthCheckFilter())
