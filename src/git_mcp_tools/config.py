"""Runtime configuration for the Git MCP Tools server.

This module provides:
1. ServerConfig - Configuration dataclass for the MCP server process

Values left empty at construction time are filled from environment
variables, so the server can be configured entirely from the MCP client's
launch configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

TRANSPORTS = ("stdio", "sse", "streamable-http")
LOG_FORMATS = ("json", "text")

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class ServerConfig:
    """Git MCP server configuration.

    Attributes:
        name: Server name advertised to MCP clients
            (env: GIT_MCP_SERVER_NAME, default: "Git MCP Tools")
        transport: MCP transport to run on
            (env: GIT_MCP_TRANSPORT, default: "stdio")
        cache_repositories: Reuse opened repositories across tool calls
            (env: GIT_MCP_CACHE_REPOSITORIES, default: False)
        log_level: Logging level name (env: LOG_LEVEL, default: INFO)
        log_format: Log output format, 'json' or 'text'
            (env: LOG_FORMAT, default: json)
    """

    name: str = ""
    transport: str = ""
    cache_repositories: bool | None = None
    log_level: str = ""
    log_format: str = ""

    def __post_init__(self) -> None:
        """Initialize values from environment if not provided."""
        if not self.name:
            self.name = os.getenv("GIT_MCP_SERVER_NAME", "Git MCP Tools")
        if not self.transport:
            self.transport = os.getenv("GIT_MCP_TRANSPORT", "stdio")
        if self.cache_repositories is None:
            flag = os.getenv("GIT_MCP_CACHE_REPOSITORIES", "")
            self.cache_repositories = flag.strip().lower() in _TRUTHY
        if not self.log_level:
            self.log_level = os.getenv("LOG_LEVEL", "INFO")
        if not self.log_format:
            self.log_format = os.getenv("LOG_FORMAT", "json")

        self.log_level = self.log_level.upper()
        self.log_format = self.log_format.lower()

        if self.transport not in TRANSPORTS:
            raise ValueError(
                f"Unsupported transport '{self.transport}'. "
                f"Expected one of: {', '.join(TRANSPORTS)}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ValueError(
                f"Unsupported log format '{self.log_format}'. "
                f"Expected one of: {', '.join(LOG_FORMATS)}"
            )
