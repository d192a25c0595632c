"""Logging for the Codehooks MCP server.

Provides:
- Correlation ID generation
- JSON structured logging
- Token redaction on every log record
"""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
import uuid

from codehooks_mcp.config import McpObservabilityConfig
from codehooks_mcp.context import CredentialStore
from codehooks_mcp.executor import redact

EXTRA_FIELDS = ("tool", "latency_ms", "status", "error")


def generate_correlation_id() -> str:
    """Generate a unique correlation ID for request tracing."""
    return str(uuid.uuid4())[:8]


class RedactionFilter(logging.Filter):
    """Strips the current admin token from log records before they are emitted."""

    def __init__(self, store: CredentialStore):
        super().__init__()
        self.store = store

    def filter(self, record: logging.LogRecord) -> bool:
        secret = self.store.secret
        if not secret:
            return True
        message = record.getMessage()
        if secret in message:
            record.msg = redact(message, secret)
            record.args = None
        for name in EXTRA_FIELDS:
            value = getattr(record, name, None)
            if isinstance(value, str) and secret in value:
                setattr(record, name, redact(value, secret))
        if record.exc_info and not record.exc_text:
            record.exc_text = logging.Formatter().formatException(record.exc_info)
        if record.exc_text and secret in record.exc_text:
            record.exc_text = redact(record.exc_text, secret)
        return True


class JsonLogFormatter(logging.Formatter):
    """JSON structured log formatter with correlation ID support."""

    def __init__(self, include_correlation_id: bool = True):
        super().__init__()
        self.include_correlation_id = include_correlation_id

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }

        if self.include_correlation_id and hasattr(record, "correlation_id"):
            log_data["cid"] = record.correlation_id

        for name in EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_text:
            log_data["exc"] = record.exc_text
        elif record.exc_info:
            log_data["exc"] = self.formatException(record.exc_info)

        return json.dumps(log_data, separators=(",", ":"))


def setup_logging(
    config: McpObservabilityConfig,
    store: CredentialStore,
    logger_name: str = "codehooks-mcp",
) -> logging.Logger:
    """Configure logging to stderr (stdout carries the MCP stream).

    Args:
        config: Observability configuration
        store: Credential store whose token is redacted from every record
        logger_name: Name of logger to configure

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)
    logger.handlers.clear()
    logger.propagate = False

    level = getattr(logging, config.log_level.upper(), logging.INFO)
    logger.setLevel(level)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.addFilter(RedactionFilter(store))

    if config.log_format == "json":
        handler.setFormatter(
            JsonLogFormatter(include_correlation_id=config.include_correlation_id)
        )
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))

    logger.addHandler(handler)

    return logger
