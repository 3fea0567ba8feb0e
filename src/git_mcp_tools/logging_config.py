"""Logging setup for the Git MCP Tools server.

All output goes to stderr; under the stdio transport stdout carries the
JSON-RPC stream. Records emitted while a tool call runs are tagged with
that call's ``tool_call_id``.
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import UTC, datetime

# Correlation ID of the tool call being handled
tool_call_id_var: ContextVar[str] = ContextVar("tool_call_id", default="")

TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Libraries that are chatty at INFO/DEBUG
QUIET_LOGGERS = ("httpx", "git.cmd")


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        tool_call_id = tool_call_id_var.get()
        if tool_call_id:
            entry["tool_call_id"] = tool_call_id

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def configure_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Send all logging to a single stderr handler.

    Args:
        log_level: Level name, e.g. "DEBUG". Unknown names mean INFO.
        log_format: 'json' for JSONFormatter, anything else for plain text
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        JSONFormatter() if log_format == "json" else logging.Formatter(TEXT_FORMAT)
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def new_tool_call_id() -> str:
    """Generate a tool call ID and make it current for this context."""
    tool_call_id = uuid.uuid4().hex[:8]
    tool_call_id_var.set(tool_call_id)
    return tool_call_id
