"""
Structured logging configuration using structlog.

Every log line emitted by the gateway goes through the same processor chain,
so request context (trace id, principal id) bound by middleware shows up on
provider-call logs without being passed around explicitly.

Usage:
    from apps.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("magic_link_sent", email_domain="example.com")

Field naming follows the Datadog standard attributes:
    - trace_id: Request correlation ID
    - usr.id: Principal (user or member) identifier
    - organization.id: Organization identifier in tenant mode
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

# Keys whose values are credentials and must never reach a log sink
SENSITIVE_KEYS = frozenset({"token", "session_token", "session_jwt", "credential", "secret"})


def _add_trace_id(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename correlation_id to trace_id for Datadog APM compatibility."""
    if "correlation_id" in event_dict:
        event_dict["trace_id"] = str(event_dict.pop("correlation_id"))
    return event_dict


def _redact_credentials(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Mask credential values, keeping a short prefix for debugging.

    A prefix such as ``sess_`` is enough to tell which flow a token took.
    """
    for key in SENSITIVE_KEYS.intersection(event_dict):
        value = event_dict[key]
        if isinstance(value, str) and value:
            event_dict[key] = f"{value[:5]}***"
    return event_dict


def configure_logging(json_format: bool = True, log_level: str = "INFO") -> None:
    """
    Configure structlog for the application.

    Uses stdlib integration so Django and the Stytch SDK log through the
    same handler.

    Args:
        json_format: If True, output JSON (production). If False, pretty console output.
        log_level: Minimum log level to output.
    """
    log_level_int = getattr(logging, log_level.upper(), logging.INFO)

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_trace_id,
        _redact_credentials,
    ]

    if json_format:
        renderer: Processor = structlog.processors.JSONRenderer()
        pre_chain.append(structlog.processors.format_exc_info)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level_int)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name, typically __name__ of the calling module.
    """
    return structlog.get_logger(name)


def bind_contextvars(**kwargs: Any) -> None:
    """
    Bind key-value pairs to the current request context.

    Usage:
        bind_contextvars(**{"usr.id": session.user_id})
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_contextvars() -> None:
    """
    Clear all bound context variables.

    Called at the end of each request so context never leaks between requests.
    """
    structlog.contextvars.clear_contextvars()
