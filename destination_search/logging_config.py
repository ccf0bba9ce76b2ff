"""
Logging configuration module for destination search.

Provides centralized logging setup with consistent formatting across the
package. Library modules log through the standard library; the HTTP layer
logs through structlog, which is routed into the same handlers here.
"""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Any, Dict, Optional

import structlog

# Sequence number of the search invocation currently being processed
invocation_context: ContextVar[Optional[int]] = ContextVar("invocation", default=None)


class StructuredFormatter(logging.Formatter):
    """
    Log formatter that outputs structured JSON logs.

    Includes the invocation sequence number from context so log lines
    of overlapping searches can be told apart.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON with structured fields.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        invocation = get_invocation()

        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if invocation is not None:
            log_data["invocation"] = invocation

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class HumanReadableFormatter(logging.Formatter):
    """Colored log formatter for development environments."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        invocation = get_invocation()
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        reset = self.COLORS["RESET"]

        log_parts = [
            f"{color}{record.levelname:8}{reset}",
            f"[{record.name}]",
        ]

        if invocation is not None:
            log_parts.append(f"[seq:{invocation}]")

        log_parts.extend(
            [
                f"[{record.filename}:{record.lineno}]",
                record.getMessage(),
            ]
        )

        message = " ".join(log_parts)

        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"

        return message


def setup_logging(
    log_level: str = "INFO",
    service_name: str = "destination-search",
    use_json: bool = False,
) -> logging.Logger:
    """
    Configure application logging.

    Sets up a stdout handler on the root logger and routes structlog
    through the standard library so both end up in the same stream.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        service_name: Name of the service for log identification
        use_json: Use JSON structured logging instead of human-readable format

    Returns:
        Configured logger instance
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    formatter: logging.Formatter
    if use_json:
        formatter = StructuredFormatter(datefmt="%Y-%m-%d %H:%M:%S")
    else:
        formatter = HumanReadableFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
            if use_json
            else structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logger = logging.getLogger(service_name)
    logger.setLevel(numeric_level)

    return logger


def set_invocation(sequence: Optional[int]) -> None:
    """Attach a search invocation sequence number to the current context."""
    invocation_context.set(sequence)


def get_invocation() -> Optional[int]:
    """Get the invocation sequence number of the current context."""
    return invocation_context.get()
