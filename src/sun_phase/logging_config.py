"""Centralized logging configuration."""

import logging
from typing import Dict, Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers routed through our own handler. A level of None follows
# the service level; httpx logs every upstream request at INFO, which duplicates
# the astronomy client's own fetch log.
THIRD_PARTY_LEVELS: Dict[str, Optional[int]] = {
    "uvicorn": None,
    "uvicorn.access": None,
    "uvicorn.error": None,
    "fastapi": None,
    "redis": None,
    "httpx": logging.WARNING,
}


def resolve_level(level: Union[int, str]) -> int:
    """Turn ``"debug"``/``"INFO"``/``20`` into a logging level number.

    Raises:
        ValueError: If the name is not a standard logging level
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def _console_handler(formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    return handler


def configure_logging(level: Union[int, str] = logging.INFO):
    """
    Configure one console format for the service and the libraries it runs on.

    Safe to call more than once: startup configures INFO before settings are
    loaded, then reconfigures with ``LOG_LEVEL``.
    """
    service_level = resolve_level(level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(service_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.addHandler(_console_handler(formatter))

    for logger_name, logger_level in THIRD_PARTY_LEVELS.items():
        logger = logging.getLogger(logger_name)
        logger.setLevel(logger_level if logger_level is not None else service_level)

        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        # Don't propagate to avoid duplicate messages
        logger.propagate = False
        logger.addHandler(_console_handler(formatter))
