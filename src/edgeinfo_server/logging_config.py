"""Logging for the edgeinfo server: plain stdout lines, structured fields via ``extra``."""
from __future__ import annotations

import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Apply the configured level (EDGEINFO_LOG_LEVEL) to the root logger."""
    logging.getLogger().setLevel(level.upper())


def log_request(logger: logging.Logger, endpoint: str, ip: str, metadata_available: bool) -> None:
    """Log one served request.

    Args:
        logger: Logger instance
        endpoint: Which rendering was served (ip, api or html)
        ip: Resolved client IP
        metadata_available: Whether the edge runtime attached connection metadata
    """
    message = "Request info served"
    if not metadata_available:
        message += " without connection metadata"
    logger.info(
        message,
        extra={
            "endpoint": endpoint,
            "client_ip": ip,
            "metadata_available": metadata_available,
        },
    )
