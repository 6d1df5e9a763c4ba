"""
Environment-driven settings for the HTTP client MCP server.

Values are read once, after loading an optional ``.env`` file:

  HTTP_MCP_TRANSPORT           (default: stdio)
  HTTP_MCP_HOST                (default: 127.0.0.1)  -- HTTP transports only
  HTTP_MCP_PORT                (default: 9200)       -- HTTP transports only
  HTTP_MCP_USER_AGENT          (default: MCP-HTTP-Client/1.0)
  HTTP_MCP_DEFAULT_TIMEOUT_MS  (default: 30000)
  HTTP_MCP_LOG_DIR             (default: logs)
  LOG_LEVEL                    (default: INFO)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger("http_client_mcp.config")

SERVER_NAME = "http-client-server"
DEFAULT_USER_AGENT = "MCP-HTTP-Client/1.0"
DEFAULT_TIMEOUT_MS = 30000


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %s", name, raw, default)
        return default


@dataclass(frozen=True)
class Settings:
    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 9200
    user_agent: str = DEFAULT_USER_AGENT
    default_timeout_ms: int = DEFAULT_TIMEOUT_MS
    log_level: str = "INFO"
    log_dir: Path = Path("logs")

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            transport=os.getenv("HTTP_MCP_TRANSPORT", "stdio"),
            host=os.getenv("HTTP_MCP_HOST", "127.0.0.1"),
            port=_env_int("HTTP_MCP_PORT", 9200),
            user_agent=os.getenv("HTTP_MCP_USER_AGENT", DEFAULT_USER_AGENT),
            default_timeout_ms=_env_int("HTTP_MCP_DEFAULT_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_dir=Path(os.getenv("HTTP_MCP_LOG_DIR", "logs")),
        )
