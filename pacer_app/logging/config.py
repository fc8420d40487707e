"""
Centralized logging configuration for the execution pacer.

This module provides standardized logging configuration using structlog
for all components. Planning and pacing decisions are logged as structured
events so a session can be reconstructed from the log stream.
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

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
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


def get_pacing_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for plan and pacing decisions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger with pacing context
    """
    return get_logger(name).bind(
        subsystem="pacing",
        audit_trail=True
    )


def log_plan_built(
    logger: FilteringBoundLogger,
    order_id: str,
    exec_mode: str,
    continuous_planned: int,
    auction_planned: int,
    order_qty: int,
    diagnostics: Optional[list[str]] = None
) -> None:
    """
    Log a freshly built plan with standardized fields.

    Plans that needed local mitigation (degenerate window or volume,
    over-allocation trim) are logged at warning level.
    """
    bound_logger = logger.bind(
        order_id=order_id,
        exec_mode=exec_mode,
        continuous_planned=continuous_planned,
        auction_planned=auction_planned,
        order_qty=order_qty,
    )

    if diagnostics:
        bound_logger.warning("Plan built with diagnostics", diagnostics=diagnostics)
    else:
        bound_logger.info("Plan built")


def log_pacing_decision(
    logger: FilteringBoundLogger,
    order_id: str,
    pace: str,
    action: str,
    accumulated_suggested: int,
    executed_qty: int,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a pacing classification and the recommended next action.

    Args:
        logger: Structlog logger instance
        order_id: ID of the order being paced
        pace: Pacing class (AHEAD / ON_TRACK / BEHIND)
        action: Recommended next action
        accumulated_suggested: Plan quantity due by now
        executed_qty: Quantity actually executed
        context: Additional context data
    """
    bound_logger = logger.bind(
        order_id=order_id,
        pace=pace,
        action=action,
        accumulated_suggested=accumulated_suggested,
        executed_qty=executed_qty,
        delta=executed_qty - accumulated_suggested,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if pace == "ON_TRACK":
        bound_logger.info("Pacing decision")
    else:
        bound_logger.warning("Pacing deviation")
