"""Cache loading and Granola JSON parsing."""

import json
import logging
import os
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .errors import CacheParseError, CacheReadError
from .richtext import NoteSource, select_note_content
from .types import CacheData, MeetingDocument, MeetingMetadata, MeetingTranscript

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _section(raw_data: dict[str, Any], key: str) -> dict[str, Any]:
    value = raw_data.get(key)
    return value if isinstance(value, dict) else {}


def _parse_timestamp(value: Any, fallback: datetime) -> datetime:
    """Parse an ISO timestamp, treating a trailing ``Z`` and naive values as UTC."""
    if not isinstance(value, str) or not value.strip():
        return fallback
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug("Unparsable created_at %r, using load time", value)
        return fallback
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_meetings(
    documents: dict[str, Any],
    now: datetime,
) -> dict[str, MeetingMetadata]:
    """Parse Granola documents into MeetingMetadata objects."""
    meetings: dict[str, MeetingMetadata] = {}

    for meeting_id, data in documents.items():
        if not isinstance(data, dict):
            logger.debug("Skipping non-object document %s", meeting_id)
            continue

        participants: list[str] = []
        if isinstance(data.get("people"), list):
            for person in data["people"]:
                name = person.get("name") if isinstance(person, dict) else None
                if isinstance(name, str) and name.strip():
                    participants.append(name)

        title = data.get("title")
        meeting_type = data.get("type")
        meetings[meeting_id] = MeetingMetadata(
            id=meeting_id,
            title=title if isinstance(title, str) and title.strip() else "Untitled Meeting",
            date=_parse_timestamp(data.get("created_at"), now),
            duration=None,
            participants=participants,
            meeting_type=meeting_type if isinstance(meeting_type, str) else "meeting",
            platform=None,
        )

    return meetings


def _parse_transcripts(
    transcripts_raw: dict[str, Any],
) -> dict[str, MeetingTranscript]:
    """Parse Granola transcripts (list-of-segments or legacy dict format)."""
    transcripts: dict[str, MeetingTranscript] = {}

    for transcript_id, data in transcripts_raw.items():
        content_parts: list[str] = []
        # dict keys keep first-seen order
        speakers: dict[str, None] = {}

        if isinstance(data, list):
            for segment in data:
                if not isinstance(segment, dict):
                    continue
                text = segment.get("text")
                if isinstance(text, str) and text.strip():
                    content_parts.append(text.strip())
                source = segment.get("source")
                if isinstance(source, str) and source.strip():
                    speakers.setdefault(source.strip(), None)

        elif isinstance(data, dict):
            for key in ("content", "text", "transcript"):
                value = data.get(key)
                if isinstance(value, str) and value.strip():
                    content_parts.append(value)
                    break
            if isinstance(data.get("speakers"), list):
                for speaker in data["speakers"]:
                    if isinstance(speaker, str) and speaker.strip():
                        speakers.setdefault(speaker.strip(), None)

        if not content_parts:
            logger.debug("Transcript %s has no text, skipping", transcript_id)
            continue

        transcripts[transcript_id] = MeetingTranscript(
            meeting_id=transcript_id,
            content=" ".join(content_parts).strip(),
            speakers=list(speakers),
        )

    return transcripts


def _parse_documents(
    documents_raw: dict[str, Any],
    meetings: dict[str, MeetingMetadata],
    panels_raw: dict[str, Any],
    parse_panels: bool = True,
) -> dict[str, MeetingDocument]:
    """Extract document/notes content from Granola documents.

    Granola stores notes in two places:
    - ``documents[id].notes_plain`` / ``notes_markdown`` / ``notes``
    - ``documentPanels[id][panel_id].content`` (AI-generated summaries)

    Inline fields win; panels are only consulted when all of them are empty
    and *parse_panels* is set.  Documents without a parsed meeting are dropped.
    """
    docs: dict[str, MeetingDocument] = {}

    for doc_id, data in documents_raw.items():
        if not isinstance(data, dict):
            continue
        meeting = meetings.get(doc_id)
        if meeting is None:
            continue

        source, body = select_note_content(data, panels_raw.get(doc_id), parse_panels)
        content_parts = [body] if source is not NoteSource.NONE else []

        overview = data.get("overview")
        if isinstance(overview, str) and overview.strip():
            content_parts.append(f"Overview: {overview}")
        summary = data.get("summary")
        if isinstance(summary, str) and summary.strip():
            content_parts.append(f"Summary: {summary}")

        docs[doc_id] = MeetingDocument(
            id=doc_id,
            meeting_id=doc_id,
            title=meeting.title,
            content="\n\n".join(content_parts).strip(),
            document_type="meeting_notes",
            created_at=meeting.date,
            tags=[],
        )

    return docs


def _decode(data: str | bytes, path: str) -> Any:
    try:
        return json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise CacheParseError(path, str(e)) from e


def load_raw_cache(cache_path: str | os.PathLike[str]) -> dict[str, Any]:
    """Read the cache file and unwrap Granola's JSON-string-inside-JSON format.

    Args:
        cache_path: Path to the Granola cache JSON file.

    Returns:
        The raw record map (``documents``, ``transcripts``, ``documentPanels``).
        Empty if the file does not exist.

    Raises:
        CacheReadError: The path exists but cannot be read as a file.
        CacheParseError: The file, or its inner ``cache`` string, is not JSON.
    """
    path = Path(cache_path)
    if not path.exists():
        logger.info("Cache file %s not found, using empty cache", path)
        return {}

    logger.debug("Loading cache from %s", path)
    try:
        with open(path, "rb") as f:
            raw_bytes = f.read()
    except OSError as e:
        raise CacheReadError(str(path), e.strerror or str(e)) from e
    raw_data = _decode(raw_bytes, str(path))

    if isinstance(raw_data, dict) and isinstance(raw_data.get("cache"), str):
        logger.debug("Unwrapping string-encoded cache")
        actual = _decode(raw_data["cache"], str(path))
        if isinstance(actual, dict) and isinstance(actual.get("state"), dict):
            raw_data = actual["state"]
        else:
            raw_data = actual

    if not isinstance(raw_data, dict):
        logger.warning("Cache root in %s is not an object, ignoring it", path)
        return {}
    return raw_data


def build_cache(
    raw_data: dict[str, Any],
    parse_panels: bool = True,
    clock: Clock = utc_now,
) -> CacheData:
    """Normalize a raw record map into meetings, documents and transcripts.

    *clock* is read once; its value stands in for missing meeting dates and
    becomes ``last_updated``.
    """
    now = clock()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    documents_raw = _section(raw_data, "documents")

    meetings = _parse_meetings(documents_raw, now)
    transcripts = _parse_transcripts(_section(raw_data, "transcripts"))
    documents = _parse_documents(
        documents_raw, meetings, _section(raw_data, "documentPanels"), parse_panels
    )
    logger.debug(
        "Built cache: %d meetings, %d documents, %d transcripts",
        len(meetings),
        len(documents),
        len(transcripts),
    )

    return CacheData(
        meetings=meetings,
        documents=documents,
        transcripts=transcripts,
        last_updated=now,
    )


def load_cache(
    cache_path: str | os.PathLike[str],
    parse_panels: bool = True,
    clock: Clock = utc_now,
) -> CacheData:
    """Load and parse Granola cache data.

    A missing file yields an empty cache; malformed JSON raises
    :class:`CacheParseError`.
    """
    return build_cache(load_raw_cache(cache_path), parse_panels, clock)


def get_cache_mtime(cache_path: str | os.PathLike[str]) -> float:
    """Return the modification time of the cache file, or 0.0 if missing."""
    try:
        return os.path.getmtime(cache_path)
    except OSError:
        return 0.0
