"""
structlog-based logging configuration for dsa-cli.

Log records are routed through the standard library logging module and
written to stderr, so stdout stays reserved for command output (rolls,
dumps, gauges) that users may pipe into other tools.
"""

# pylint: disable=too-few-public-methods

import logging
import re
import sys
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.stdlib import BoundLogger, LoggerFactory

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_FORMATS = ("json", "human", "colored")

_ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")

logger = structlog.get_logger(__name__)


class _LoggingState:
    """State container for logging initialization to avoid global statements."""

    initialized: bool = False
    signature: str | None = None


_logging_state = _LoggingState()


def _strip_ansi_renderer(bound_logger: Any, name: str, event_dict: dict[str, Any]) -> str:
    """Render key/value pairs and strip ANSI escape sequences."""
    formatted = structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "logger", "event"])(
        bound_logger, name, event_dict
    )
    return _ANSI_ESCAPE.sub("", formatted)


def _select_renderer(log_format: str) -> Any:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    if log_format == "colored":
        return structlog.dev.ConsoleRenderer(colors=True)
    return _strip_ansi_renderer


def configure_structlog(log_level: str = "WARNING", log_format: str = "human", disable_logging: bool = False) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Renderer to use ("json", "human" or "colored")
        disable_logging: Silence every record below CRITICAL+1
    """
    level_name = log_level.upper()
    if level_name not in VALID_LEVELS:
        raise ValueError(f"Log level must be one of {list(VALID_LEVELS)}, got '{log_level}'")
    if log_format not in VALID_FORMATS:
        raise ValueError(f"Log format must be one of {list(VALID_FORMATS)}, got '{log_format}'")

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, "_dsa_cli_handler", False):
            root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler._dsa_cli_handler = True  # type: ignore[attr-defined]  # pylint: disable=protected-access
    root_logger.addHandler(handler)

    numeric_level = logging.CRITICAL + 1 if disable_logging else getattr(logging, level_name)
    root_logger.setLevel(numeric_level)

    structlog.configure(
        processors=[
            merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _select_renderer(log_format),
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=False,
    )


def setup_logging(logging_config: Any, *, force_reconfigure: bool = False) -> None:
    """
    Set up logging from a LoggingConfig instance.

    Repeated calls with the same configuration are ignored unless
    force_reconfigure is set.

    Args:
        logging_config: dsa_cli.config.models.LoggingConfig
        force_reconfigure: When True, reconfigure even if already initialized
    """
    signature = f"{logging_config.level}:{logging_config.format}:{logging_config.disable_logging}"
    if _logging_state.initialized and not force_reconfigure and _logging_state.signature == signature:
        return

    configure_structlog(logging_config.level, logging_config.format, logging_config.disable_logging)

    get_logger("dsa_cli.structured_logging").debug(
        "Logging system initialized",
        log_level=logging_config.level,
        log_format=logging_config.format,
    )

    _logging_state.initialized = True
    _logging_state.signature = signature


def get_logger(name: str) -> Any:  # Returns BoundLogger but typed as Any for flexibility
    """
    Get a structlog logger with the specified name.

    This is the public API for obtaining loggers. All application code
    should use this function rather than calling structlog.get_logger()
    directly.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)

