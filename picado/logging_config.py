"""
Logging configuration for the Picado client.

Provides centralized structured logging setup with JSON output for production
and human-readable output for development. Supports correlation IDs for
tracing one logical operation across its fallback attempts.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from structlog.types import EventDict


# Context variable for correlation ID
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def add_correlation_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add correlation ID to log events if present in context.

    Args:
        logger: Logger instance
        method_name: Name of the logging method
        event_dict: Event dictionary to modify

    Returns:
        Modified event dictionary with correlation_id if available
    """
    correlation_id = correlation_id_var.get()
    if correlation_id:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """
    Set correlation ID for the current context.

    Args:
        correlation_id: Optional correlation ID. If None, generates a new UUID.

    Returns:
        The correlation ID that was set
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())
    correlation_id_var.set(correlation_id)
    return correlation_id


def clear_correlation_id() -> None:
    """Clear correlation ID from the current context."""
    correlation_id_var.set(None)


def get_correlation_id() -> Optional[str]:
    """
    Get the current correlation ID from context.

    Returns:
        Current correlation ID or None if not set
    """
    return correlation_id_var.get()


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    json_format: bool = True,
) -> None:
    """
    Configure structured logging for the Picado client.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to log file. If None, logs only to stderr.
        json_format: If True, use JSON format. If False, use human-readable format.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(file_handler)
    else:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(numeric_level)
        stderr_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(stderr_handler)

    processors: list = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_correlation_id,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.extend([
            structlog.dev.ConsoleRenderer(colors=False),
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance for a specific module.

    Args:
        name: Logger name (typically __name__ of the module).

    Returns:
        Structured logger instance.
    """
    if not name.startswith("picado"):
        name = f"picado.{name}"
    return structlog.get_logger(name)


# Convenience functions for common logging patterns

def log_request_failure(
    logger: structlog.stdlib.BoundLogger,
    method: str,
    path: str,
    status: int,
    message: str,
    **kwargs: Any,
) -> None:
    """
    Log a classified request failure.

    404s are logged at debug level since fallback chains expect them.

    Args:
        logger: Logger instance
        method: HTTP method
        path: Relative request path
        status: Status code (0 for transport failures)
        message: Classified error message
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "request_failure",
        "method": method,
        "path": path,
        "status": status,
        "message": message,
    }

    log_data.update(kwargs)

    if status == 404:
        logger.debug("request_failure", **log_data)
    else:
        logger.warning("request_failure", **log_data)


def log_session_invalidated(
    logger: structlog.stdlib.BoundLogger,
    path: str,
    location: Optional[str],
    redirected: bool,
    **kwargs: Any,
) -> None:
    """
    Log a session invalidation triggered by an authorization failure.

    Args:
        logger: Logger instance
        path: Request path that returned 401
        location: Caller's current location when the 401 arrived
        redirected: Whether navigation to the entry point was issued
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "session_invalidated",
        "path": path,
        "location": location,
        "redirected": redirected,
    }

    log_data.update(kwargs)

    logger.warning("session_invalidated", **log_data)


def log_fallback_step(
    logger: structlog.stdlib.BoundLogger,
    attempt: int,
    label: str,
    outcome: str,
    status: Optional[int] = None,
    **kwargs: Any,
) -> None:
    """
    Log the outcome of one attempt within a fallback chain.

    Args:
        logger: Logger instance
        attempt: 1-based attempt index
        label: Endpoint variant the attempt targeted
        outcome: "success", "continue" or "abort"
        status: Status code of the failure, if any
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "fallback_step",
        "attempt": attempt,
        "label": label,
        "outcome": outcome,
    }

    if status is not None:
        log_data["status"] = status

    log_data.update(kwargs)

    if outcome == "abort":
        logger.info("fallback_step", **log_data)
    else:
        logger.debug("fallback_step", **log_data)
