"""
Logging setup for the MRZ engine and the mrz-parse command.

The library itself only creates module loggers. Applications (and the CLI)
call ``setup_logging`` once to attach a stderr handler that stamps every
record with the service name and, when a span is active, the OpenTelemetry
trace context.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from opentelemetry import trace

if TYPE_CHECKING:
    from mrz_engine.config import MRZEngineSettings

TEXT_LOG_FORMAT = (
    "%(asctime)s - %(levelname)s - [%(service_name)s] - [%(name)s] - "
    "[%(module)s.%(funcName)s:%(lineno)d] - %(message)s"
)

DEFAULT_LOG_LEVEL = "INFO"
LOG_OFF_LEVEL = "OFF"

# Parse context attached with ``extra=`` by the engine
MRZ_CONTEXT_FIELDS = ("mrz_format", "error_code", "failed_checks")


class ServiceNameFilter(logging.Filter):
    """Stamps records with the configured service name."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = self.service_name
        return True


class TraceContextFilter(logging.Filter):
    """Adds ``trace_id``/``span_id`` of the current OpenTelemetry span, or None."""

    def filter(self, record: logging.LogRecord) -> bool:
        span = trace.get_current_span()
        context = span.get_span_context() if span.is_recording() else None
        record.trace_id = format(context.trace_id, "032x") if context else None
        record.span_id = format(context.span_id, "016x") if context else None
        return True


class MRZJSONFormatter(logging.Formatter):
    """One JSON object per record, including any MRZ parse context."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "service": getattr(record, "service_name", "unknown"),
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        for field in (*MRZ_CONTEXT_FIELDS, "trace_id", "span_id"):
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry)


def build_formatter(log_format: str) -> logging.Formatter:
    """
    Formatter for a log format setting.

    Args:
        log_format: "json", "text", or a literal logging format string
    """
    if log_format.lower() == "json":
        return MRZJSONFormatter()
    if log_format.lower() == "text":
        return logging.Formatter(TEXT_LOG_FORMAT)
    return logging.Formatter(log_format)


def setup_logging(
    service_name: str = "mrz-engine",
    log_level: str | None = None,
    log_format: str | None = None,
    log_level_env_var: str = "LOG_LEVEL",
    log_format_env_var: str = "LOG_FORMAT",
) -> None:
    """
    Configure the root logger.

    Explicit arguments win over the environment variables. Existing root
    handlers are replaced, so calling this twice does not duplicate output.

    Args:
        service_name: Name stamped on every record
        log_level: Level name, or OFF to silence logging entirely
        log_format: "json", "text", or a logging format string
        log_level_env_var: Environment variable consulted when log_level is None
        log_format_env_var: Environment variable consulted when log_format is None
    """
    level_name = (log_level or os.environ.get(log_level_env_var, DEFAULT_LOG_LEVEL)).upper()
    format_name = log_format or os.environ.get(log_format_env_var, "text")

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if level_name == LOG_OFF_LEVEL:
        root_logger.setLevel(logging.CRITICAL + 1)
        return

    level = logging.getLevelName(level_name)
    root_logger.setLevel(level if isinstance(level, int) else logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(build_formatter(format_name))
    handler.addFilter(ServiceNameFilter(service_name))
    handler.addFilter(TraceContextFilter())
    root_logger.addHandler(handler)

    logging.getLogger(__name__).debug("Logging configured for %s at %s", service_name, level_name)


def setup_logging_from_settings(settings: MRZEngineSettings) -> None:
    """Configure logging from engine settings."""
    setup_logging(settings.service_name, settings.log_level, settings.log_format)
