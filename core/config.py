# =============================================================================
# core/config.py - Runtime Settings (read from the environment)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Collects every knob the adapter exposes into one small dataclass.
#
# WHERE VALUES COME FROM:
#   Environment variables.  tools/mcp_server.py calls load_dotenv() first,
#   so a local .env file works too.
#
#     INKLINK_BASE_URL   → remote origin (default https://app.inklink.dev)
#     INKLINK_LOG_LEVEL  → stderr log level for the MCP server (default INFO;
#                          an unknown level name falls back to INFO)
#
# WHY A FUNCTION AND NOT A MODULE-LEVEL CONSTANT?
#   get_settings() reads the environment on every call, so a changed
#   INKLINK_BASE_URL applies to the next tool call without a restart.
#   Tests rely on this: monkeypatch.setenv() is enough.
# =============================================================================

import logging
import os
from dataclasses import dataclass

DEFAULT_BASE_URL = "https://app.inklink.dev"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """Adapter settings resolved from the environment."""

    base_url: str = DEFAULT_BASE_URL
    log_level: str = DEFAULT_LOG_LEVEL


def _log_level(name: str) -> str:
    # getLevelName() maps known names to ints and unknown ones to "Level X"
    level = name.strip().upper()
    if isinstance(logging.getLevelName(level), int):
        return level
    return DEFAULT_LOG_LEVEL


def get_settings() -> Settings:
    """Build a Settings object from the current environment."""
    base_url = os.environ.get("INKLINK_BASE_URL", "").strip() or DEFAULT_BASE_URL
    return Settings(
        base_url=base_url.rstrip("/"),
        log_level=_log_level(os.environ.get("INKLINK_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
    )
