"""Granola meetings MCP server (FastMCP v2)."""

from contextlib import asynccontextmanager

from fastmcp import FastMCP

from .cache import get_cache_mtime, load_cache
from .config import Config
from .logging_config import setup_logging
from .timezone import resolve_timezone

# ---------------------------------------------------------------------------
# Lifespan: load the cache and resolve the display timezone
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(server: FastMCP):
    config = Config()
    setup_logging(config.log_level)

    cache = load_cache(config.cache_path, config.parse_panels)
    mtime = get_cache_mtime(config.cache_path)
    tz = resolve_timezone(config.timezone)
    yield {
        "cache": cache,
        "tz": tz,
        "config": config,
        "cache_mtime": mtime,
    }


# ---------------------------------------------------------------------------
# Server instance
# ---------------------------------------------------------------------------

mcp = FastMCP("granola-meetings", lifespan=lifespan)

# Importing tool modules triggers @mcp.tool() registration
from granola_meetings.tools import meeting_ops  # noqa: E402, F401

# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main():
    mcp.run()
