"""MCP tools for Granola meeting data."""

import zoneinfo
from typing import Annotated, Any, Literal

from fastmcp import Context
from pydantic import Field

from granola_meetings import query as meeting_query
from granola_meetings.cache import get_cache_mtime, load_cache
from granola_meetings.render import render_text
from granola_meetings.server import mcp
from granola_meetings.types import CacheData

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_state(ctx: Context) -> tuple[CacheData, zoneinfo.ZoneInfo]:
    """Extract cache and timezone from lifespan context.

    Reloads the cache from disk when the file has been modified since the
    last load, so new meetings and updated notes appear without restarting
    the server.
    """
    lc: dict[str, Any] = ctx.request_context.lifespan_context
    config = lc["config"]
    current_mtime = get_cache_mtime(config.cache_path)
    if current_mtime != lc["cache_mtime"]:
        lc["cache"] = load_cache(config.cache_path, config.parse_panels)
        lc["cache_mtime"] = current_mtime
    return lc["cache"], lc["tz"]


_TOOL_ANNOTATIONS = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "idempotentHint": True,
    "openWorldHint": False,
}


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@mcp.tool(annotations=_TOOL_ANNOTATIONS)
def search_meetings(
    query: Annotated[str, Field(description="Search query for meetings")],
    ctx: Context,
    limit: Annotated[
        int, Field(description="Maximum number of results", ge=1, le=50)
    ] = 10,
) -> str:
    """Search meetings by title, participants, or transcript text."""
    cache, tz = _get_state(ctx)
    return render_text(meeting_query.search_meetings(cache, query, limit), tz)


@mcp.tool(annotations=_TOOL_ANNOTATIONS)
def get_meeting(
    meeting_id: Annotated[str, Field(description="Meeting ID to retrieve")],
    ctx: Context,
) -> str:
    """Get detailed information about a specific meeting."""
    cache, tz = _get_state(ctx)
    return render_text(meeting_query.get_meeting_details(cache, meeting_id), tz)


@mcp.tool(annotations=_TOOL_ANNOTATIONS)
def get_transcript(
    meeting_id: Annotated[str, Field(description="Meeting ID to get transcript for")],
    ctx: Context,
) -> str:
    """Get the full transcript for a specific meeting."""
    cache, tz = _get_state(ctx)
    return render_text(meeting_query.get_transcript(cache, meeting_id), tz)


@mcp.tool(annotations=_TOOL_ANNOTATIONS)
def get_notes(
    meeting_id: Annotated[str, Field(description="Meeting ID to get notes for")],
    ctx: Context,
) -> str:
    """Get notes and documents associated with a meeting."""
    cache, tz = _get_state(ctx)
    return render_text(meeting_query.get_documents(cache, meeting_id), tz)


@mcp.tool(annotations=_TOOL_ANNOTATIONS)
def analyze_patterns(
    pattern_type: Annotated[
        Literal["topics", "participants", "frequency"],
        Field(description="Type of pattern to analyze"),
    ],
    ctx: Context,
    start_date: Annotated[
        str | None, Field(description="Start date (ISO format, e.g. 2024-01-01)")
    ] = None,
    end_date: Annotated[
        str | None, Field(description="End date (ISO format, e.g. 2024-12-31)")
    ] = None,
) -> str:
    """Analyze participant, frequency or topic patterns across meetings."""
    cache, tz = _get_state(ctx)
    result = meeting_query.analyze_patterns(cache, pattern_type, start_date, end_date)
    return render_text(result, tz)
