"""
Centralized logging configuration for the price trigger app.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the app should go through this
configuration so that console and JSON output stay consistent.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    # Intent payloads go to stdout, so logs go to stderr
    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(message)s"
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_trigger_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger specifically configured for trigger decisions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger bound to the trigger subsystem
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="trigger",
        audit_trail=True
    )


def log_trigger_decision(
    logger: FilteringBoundLogger,
    side: str,
    price: float,
    trigger_price: float,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a fired trigger with standardized format.

    Args:
        logger: Structlog logger instance
        side: Side that fired ("buy" or "sell")
        price: Market price that satisfied the condition
        trigger_price: Configured trigger level
        context: Additional context data
    """
    bound_logger = logger.bind(
        side=side,
        price=price,
        trigger_price=trigger_price,
        event_type="trigger_fired"
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Trigger fired")
