"""
Structured logging for the Magic Admin SDK.

The SDK only ever calls ``get_logger``. Applications that want the SDK's
JSON output call ``configure_logging`` once at startup.
"""

import sys
import structlog
import logging
from typing import Any, Dict, Optional
from contextvars import ContextVar

from magic_admin.version import VERSION

# Correlation id of the Magic API request currently in flight
request_id_var: ContextVar[Optional[str]] = ContextVar('magic_request_id', default=None)

# Library logging stays silent until the application adds handlers
logging.getLogger("magic_admin").addHandler(logging.NullHandler())


def configure_logging(log_level: str = "info", json_output: bool = True) -> None:
    """Configure structured logging for applications embedding the SDK."""

    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            add_sdk_context,
            add_correlation_context,
            renderer
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )


def add_sdk_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Tag log events with the SDK name and version."""
    event_dict["sdk"] = "magic-admin"
    event_dict["sdk_version"] = VERSION
    return event_dict


def add_correlation_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add the in-flight request id to log events."""
    request_id = request_id_var.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger backed by the standard library logger ``name``.

    Output follows the application's ``logging`` setup, so nothing is
    emitted unless the application configures logging.
    """
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger)
