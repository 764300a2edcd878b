"""Command-line access to the Granola meeting cache."""

import os
from collections.abc import Callable
from typing import Annotated

import typer

from . import query
from .cache import load_cache
from .config import Config
from .errors import GranolaError
from .logging_config import setup_logging
from .render import Result, render_json, render_text
from .timezone import resolve_timezone
from .types import CacheData

app = typer.Typer(
    help="Search and analyze meetings in Granola's local cache.",
    no_args_is_help=True,
    add_completion=False,
)

CachePathOpt = Annotated[
    str | None,
    typer.Option("--cache-path", help="Cache file (default: $GRANOLA_CACHE_PATH or Granola's)."),
]
TimezoneOpt = Annotated[
    str | None, typer.Option("--timezone", help="IANA timezone for displayed dates.")
]
NoPanelsOpt = Annotated[
    bool, typer.Option("--no-panels", help="Do not fall back to documentPanels notes.")
]
JsonOpt = Annotated[bool, typer.Option("--json", help="Emit JSON instead of text.")]
VerboseOpt = Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging.")]
MeetingIdOpt = Annotated[str, typer.Option("--meeting-id", help="Meeting ID.")]


def _run(
    produce: Callable[[CacheData], Result],
    cache_path: str | None,
    timezone: str | None,
    no_panels: bool,
    as_json: bool,
    verbose: bool,
) -> None:
    config = Config()
    setup_logging("debug" if verbose else config.log_level)

    path = os.path.expanduser(cache_path) if cache_path else config.cache_path
    try:
        tz = None if as_json else resolve_timezone(timezone or config.timezone)
        cache = load_cache(path, parse_panels=config.parse_panels and not no_panels)
        result = produce(cache)
    except GranolaError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1) from e

    if as_json:
        typer.echo(render_json(result))
    else:
        typer.echo(render_text(result, tz))


@app.command("search-meetings")
def search_meetings(
    query_text: Annotated[str, typer.Option("--query", help="Text to search for.")],
    limit: Annotated[int, typer.Option("--limit", help="Maximum results.")] = 10,
    cache_path: CachePathOpt = None,
    timezone: TimezoneOpt = None,
    no_panels: NoPanelsOpt = False,
    as_json: JsonOpt = False,
    verbose: VerboseOpt = False,
) -> None:
    """Search meetings by title, participants, or transcript text."""
    _run(
        lambda cache: query.search_meetings(cache, query_text, limit),
        cache_path, timezone, no_panels, as_json, verbose,
    )


@app.command("get-meeting-details")
def get_meeting_details(
    meeting_id: MeetingIdOpt,
    cache_path: CachePathOpt = None,
    timezone: TimezoneOpt = None,
    no_panels: NoPanelsOpt = False,
    as_json: JsonOpt = False,
    verbose: VerboseOpt = False,
) -> None:
    """Show metadata for one meeting."""
    _run(
        lambda cache: query.get_meeting_details(cache, meeting_id),
        cache_path, timezone, no_panels, as_json, verbose,
    )


@app.command("get-meeting-transcript")
def get_meeting_transcript(
    meeting_id: MeetingIdOpt,
    cache_path: CachePathOpt = None,
    timezone: TimezoneOpt = None,
    no_panels: NoPanelsOpt = False,
    as_json: JsonOpt = False,
    verbose: VerboseOpt = False,
) -> None:
    """Print a meeting's transcript."""
    _run(
        lambda cache: query.get_transcript(cache, meeting_id),
        cache_path, timezone, no_panels, as_json, verbose,
    )


@app.command("get-meeting-documents")
def get_meeting_documents(
    meeting_id: MeetingIdOpt,
    cache_path: CachePathOpt = None,
    timezone: TimezoneOpt = None,
    no_panels: NoPanelsOpt = False,
    as_json: JsonOpt = False,
    verbose: VerboseOpt = False,
) -> None:
    """Print the notes attached to a meeting."""
    _run(
        lambda cache: query.get_documents(cache, meeting_id),
        cache_path, timezone, no_panels, as_json, verbose,
    )


@app.command("analyze-meeting-patterns")
def analyze_meeting_patterns(
    pattern_type: Annotated[
        str, typer.Option("--pattern-type", help="topics, participants or frequency.")
    ],
    start_date: Annotated[
        str | None, typer.Option("--start-date", help="YYYY-MM-DD, inclusive.")
    ] = None,
    end_date: Annotated[
        str | None, typer.Option("--end-date", help="YYYY-MM-DD, inclusive.")
    ] = None,
    cache_path: CachePathOpt = None,
    timezone: TimezoneOpt = None,
    no_panels: NoPanelsOpt = False,
    as_json: JsonOpt = False,
    verbose: VerboseOpt = False,
) -> None:
    """Summarize participants, monthly frequency, or title topics."""
    _run(
        lambda cache: query.analyze_patterns(cache, pattern_type, start_date, end_date),
        cache_path, timezone, no_panels, as_json, verbose,
    )


# Underscore spellings of every command
for _command in (
    search_meetings,
    get_meeting_details,
    get_meeting_transcript,
    get_meeting_documents,
    analyze_meeting_patterns,
):
    app.command(_command.__name__, hidden=True)(_command)


def main() -> None:
    app()
