"""Read-only queries over a loaded CacheData."""

import enum
import re
from datetime import datetime, timezone

from .errors import QueryValidationError
from .types import (
    CacheData,
    DocumentList,
    FrequencyAnalysis,
    MeetingDetails,
    MeetingMetadata,
    NotFound,
    ParticipantAnalysis,
    ParticipantCount,
    PatternAnalysis,
    SearchHit,
    SearchResults,
    TopicAnalysis,
    TopicCount,
    TranscriptRecord,
)

TOPIC_STOP_WORDS = frozenset({"meeting", "call", "sync", "with"})

_WINDOW_START = datetime(1900, 1, 1, tzinfo=timezone.utc)
_WINDOW_END = datetime(2100, 1, 1, tzinfo=timezone.utc)

_NON_TOPIC_CHARS = re.compile(r"[^a-z0-9_-]")


class PatternKind(str, enum.Enum):
    TOPICS = "topics"
    PARTICIPANTS = "participants"
    FREQUENCY = "frequency"


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _validate_limit(limit: int) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise QueryValidationError(f"limit must be a positive integer, got {limit!r}")
    return limit


def _validate_kind(kind: str) -> PatternKind:
    try:
        return PatternKind(kind)
    except ValueError:
        choices = ", ".join(k.value for k in PatternKind)
        raise QueryValidationError(
            f"pattern type must be one of: {choices} (got {kind!r})"
        ) from None


def parse_range_date(value: str) -> datetime:
    """Parse a window bound such as ``2024-01-31``; naive values are UTC."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise QueryValidationError(f"Invalid date value: {value}") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def search_meetings(cache: CacheData, query: str, limit: int = 10) -> SearchResults:
    """Rank meetings by title, participant and transcript matches.

    Title matches score 2, each matching participant 1, and a transcript
    match 1.  Ties keep cache order.  Note content is not searched.
    """
    _validate_limit(limit)
    if not query or not query.strip():
        raise QueryValidationError("query must not be empty")

    query_lower = query.lower()
    scored: list[SearchHit] = []

    for meeting_id, meeting in cache.meetings.items():
        score = 0
        if query_lower in meeting.title.lower():
            score += 2
        for participant in meeting.participants:
            if query_lower in participant.lower():
                score += 1
        transcript = cache.transcripts.get(meeting_id)
        if transcript and query_lower in transcript.content.lower():
            score += 1
        if score > 0:
            scored.append(SearchHit(score=score, meeting=meeting))

    scored.sort(key=lambda hit: hit.score, reverse=True)
    return SearchResults(query=query, results=scored[:limit])


def get_meeting_details(cache: CacheData, meeting_id: str) -> MeetingDetails | NotFound:
    meeting = cache.meetings.get(meeting_id)
    if meeting is None:
        return NotFound(error=f"Meeting '{meeting_id}' not found")

    doc_count = sum(1 for d in cache.documents.values() if d.meeting_id == meeting_id)
    return MeetingDetails(
        meeting=meeting,
        documents=doc_count,
        transcript_available=meeting_id in cache.transcripts,
    )


def get_transcript(cache: CacheData, meeting_id: str) -> TranscriptRecord | NotFound:
    transcript = cache.transcripts.get(meeting_id)
    if transcript is None:
        return NotFound(error=f"No transcript available for meeting '{meeting_id}'")

    meeting = cache.meetings.get(meeting_id)
    return TranscriptRecord(
        meeting_id=meeting_id,
        title=meeting.title if meeting else meeting_id,
        transcript=transcript,
    )


def get_documents(cache: CacheData, meeting_id: str) -> DocumentList | NotFound:
    documents = [d for d in cache.documents.values() if d.meeting_id == meeting_id]
    if not documents:
        return NotFound(error=f"No documents found for meeting '{meeting_id}'")

    meeting = cache.meetings.get(meeting_id)
    return DocumentList(
        meeting_id=meeting_id,
        title=meeting.title if meeting else meeting_id,
        documents=documents,
    )


# ---------------------------------------------------------------------------
# Pattern analysis
# ---------------------------------------------------------------------------


def analyze_patterns(
    cache: CacheData,
    pattern_type: str,
    start_date: str | None = None,
    end_date: str | None = None,
) -> PatternAnalysis:
    """Aggregate participants, monthly frequency or title topics.

    Meetings are first limited to the inclusive window between *start_date*
    and *end_date*; an omitted bound falls back to 1900-01-01 / 2100-01-01.
    """
    kind = _validate_kind(pattern_type)
    start = parse_range_date(start_date) if start_date else _WINDOW_START
    end = parse_range_date(end_date) if end_date else _WINDOW_END

    meetings = [m for m in cache.meetings.values() if start <= m.date <= end]

    if kind is PatternKind.PARTICIPANTS:
        return analyze_participants(meetings)
    elif kind is PatternKind.FREQUENCY:
        return analyze_frequency(meetings)
    else:
        return analyze_topics(meetings)


def _ranked(counts: dict[str, int]) -> list[tuple[str, int]]:
    return sorted(counts.items(), key=lambda x: x[1], reverse=True)


def analyze_participants(meetings: list[MeetingMetadata]) -> ParticipantAnalysis:
    counts: dict[str, int] = {}
    for m in meetings:
        for p in m.participants:
            counts[p] = counts.get(p, 0) + 1

    return ParticipantAnalysis(
        meeting_count=len(meetings),
        top_participants=[
            ParticipantCount(name=name, count=count) for name, count in _ranked(counts)
        ],
    )


def analyze_frequency(meetings: list[MeetingMetadata]) -> FrequencyAnalysis:
    """Count meetings per UTC month.

    The average divides by the number of months that have meetings, not by
    the months spanned, so sparse calendars read high.
    """
    monthly: dict[str, int] = {}
    for m in meetings:
        key = m.date.astimezone(timezone.utc).strftime("%Y-%m")
        monthly[key] = monthly.get(key, 0) + 1

    avg = len(meetings) / len(monthly) if monthly else 0.0
    return FrequencyAnalysis(
        meeting_count=len(meetings),
        by_month=monthly,
        average_per_month=avg,
    )


def topic_words(title: str) -> list[str]:
    """Significant words of a meeting title, lowercased and stripped."""
    words = []
    for raw in title.lower().split():
        word = _NON_TOPIC_CHARS.sub("", raw)
        if len(word) > 3 and word not in TOPIC_STOP_WORDS:
            words.append(word)
    return words


def analyze_topics(meetings: list[MeetingMetadata]) -> TopicAnalysis:
    counts: dict[str, int] = {}
    for m in meetings:
        for word in topic_words(m.title):
            counts[word] = counts.get(word, 0) + 1

    return TopicAnalysis(
        meeting_count=len(meetings),
        topics=[TopicCount(topic=topic, count=count) for topic, count in _ranked(counts)],
    )
