"""Structured logging for devfolio-stats.

Every line carries the service name and, while a profile aggregation is
running, its correlation id. Output is JSON by default; ``console`` renders
the same events for a terminal.
"""

import logging
from contextvars import ContextVar

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

SERVICE_NAME = "devfolio-stats"

# Correlation ID for tracing one profile aggregation across its fetches
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

# (level, format) of the active configuration, None until configured
_active_config: tuple[str, str] | None = None


def add_service_name(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def add_correlation_id(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add correlation ID to log event if set."""
    correlation_id = correlation_id_var.get()
    if correlation_id:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Configure structlog and the standard library root logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "json" for one JSON object per line, "console" for
            human-readable output
    """
    global _active_config

    level_name = log_level.upper()
    level = getattr(logging, level_name)

    # aiohttp logs through the standard library
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)

    renderer: Processor
    if log_format == "console":
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_service_name,
            add_correlation_id,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    _active_config = (level_name, log_format)


def ensure_logging(log_level: str = "INFO", log_format: str = "json") -> bool:
    """Configure logging unless the same level and format are already active.

    Returns:
        True if logging was (re)configured
    """
    if _active_config == (log_level.upper(), log_format):
        return False
    setup_logging(log_level, log_format)
    return True


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]


def set_correlation_id(correlation_id: str) -> None:
    """Set correlation ID for the current async context."""
    correlation_id_var.set(correlation_id)


def get_correlation_id() -> str:
    """Get correlation ID from the current async context (empty if unset)."""
    return correlation_id_var.get()
