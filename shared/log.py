"""
Logging

structlog on top of the standard library logger. Calculators call
get_logger(__name__); scripts call setup_logging() once at startup.

Importing this module leaves structlog unconfigured. Until an application
calls setup_logging(), structlog uses its own defaults.
"""

import logging
import sys

import structlog
from structlog.processors import JSONRenderer, TimeStamper, add_log_level


# Keys whose values are replaced before rendering
SECRET_KEYS = {"password", "api_key", "api_secret", "token", "secret"}
MASK = "***MASKED***"


class SecretMaskingProcessor:
    """Mask credential values in log events (config dicts included)."""

    def __call__(self, logger, method_name, event_dict):
        return self._mask(event_dict)

    def _mask(self, data):
        if isinstance(data, dict):
            return {
                key: MASK if key in SECRET_KEYS and value else self._mask(value)
                for key, value in data.items()
            }
        if isinstance(data, list):
            return [self._mask(item) for item in data]
        return data


def _processors(log_format: str) -> list:
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        add_log_level,
        TimeStamper(fmt="iso"),
        SecretMaskingProcessor(),
    ]
    if log_format == "json":
        processors.append(JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def _configure(log_format: str) -> None:
    structlog.configure(
        processors=_processors(log_format),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def setup_logging(log_level: str = "INFO", log_format: str = "console") -> None:
    """
    Configure structlog and the root stdlib logger to write to stdout.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR
        log_format: "console" for key=value lines, "json" for JSON lines

    Raises:
        ValueError: If log_level or log_format is unknown
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    if log_format not in ("console", "json"):
        raise ValueError(f"Unknown log format: {log_format}")

    _configure(log_format)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


__all__ = [
    "setup_logging",
    "get_logger",
    "SecretMaskingProcessor",
]
