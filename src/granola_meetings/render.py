"""Text and JSON rendering of query results."""

import json
import zoneinfo
from datetime import datetime, timezone
from typing import Any

from .timezone import format_local_time
from .types import (
    DocumentList,
    FrequencyAnalysis,
    MeetingDetails,
    NotFound,
    ParticipantAnalysis,
    SearchResults,
    TopicAnalysis,
    TranscriptRecord,
)

Result = (
    SearchResults
    | MeetingDetails
    | TranscriptRecord
    | DocumentList
    | ParticipantAnalysis
    | FrequencyAnalysis
    | TopicAnalysis
    | NotFound
)

TOP_PARTICIPANTS = 10
TOP_TOPICS = 15


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


def _search_text(results: SearchResults, tz: zoneinfo.ZoneInfo) -> str:
    if not results.results:
        return f"No meetings found matching '{results.query}'"

    lines = [f"Found {results.count} meeting(s) matching '{results.query}':\n"]
    for hit in results.results:
        meeting = hit.meeting
        lines.append(f"• **{meeting.title}** ({meeting.id})")
        lines.append(f"  Date: {format_local_time(meeting.date, tz)}")
        if meeting.participants:
            lines.append(f"  Participants: {', '.join(meeting.participants)}")
        lines.append("")
    return "\n".join(lines)


def _details_text(details: MeetingDetails, tz: zoneinfo.ZoneInfo) -> str:
    meeting = details.meeting
    lines = [
        f"# Meeting Details: {meeting.title}\n",
        f"**ID:** {meeting.id}",
        f"**Date:** {format_local_time(meeting.date, tz)}",
    ]
    if meeting.duration:
        lines.append(f"**Duration:** {meeting.duration} minutes")
    if meeting.participants:
        lines.append(f"**Participants:** {', '.join(meeting.participants)}")
    if meeting.meeting_type:
        lines.append(f"**Type:** {meeting.meeting_type}")
    if meeting.platform:
        lines.append(f"**Platform:** {meeting.platform}")
    if details.documents > 0:
        lines.append(f"**Documents:** {details.documents}")
    if details.transcript_available:
        lines.append("**Transcript:** Available")
    return "\n".join(lines)


def _transcript_text(record: TranscriptRecord) -> str:
    transcript = record.transcript
    lines = [f"# Transcript: {record.title}\n"]
    if transcript.speakers:
        lines.append(f"**Speakers:** {', '.join(transcript.speakers)}")
    if transcript.language:
        lines.append(f"**Language:** {transcript.language}")
    if transcript.confidence is not None:
        lines.append(f"**Confidence:** {transcript.confidence:.2%}")
    lines.append("\n## Transcript Content\n")
    lines.append(transcript.content)
    return "\n".join(lines)


def _documents_text(doc_list: DocumentList, tz: zoneinfo.ZoneInfo) -> str:
    lines = [f"# Documents: {doc_list.title}\n"]
    lines.append(f"Found {len(doc_list.documents)} document(s):\n")
    for doc in doc_list.documents:
        lines.append(f"## {doc.title}")
        lines.append(f"**Type:** {doc.document_type}")
        lines.append(f"**Created:** {format_local_time(doc.created_at, tz)}")
        if doc.tags:
            lines.append(f"**Tags:** {', '.join(doc.tags)}")
        lines.append(f"\n{doc.content}\n")
        lines.append("---\n")
    return "\n".join(lines)


def _participants_text(analysis: ParticipantAnalysis) -> str:
    if not analysis.top_participants:
        return "No participant data found"

    lines = [
        f"# Participant Analysis ({analysis.meeting_count} meetings)\n",
        "## Most Active Participants\n",
    ]
    for p in analysis.top_participants[:TOP_PARTICIPANTS]:
        lines.append(f"• **{p.name}:** {p.count} meetings")
    return "\n".join(lines)


def _frequency_text(analysis: FrequencyAnalysis) -> str:
    if analysis.meeting_count == 0:
        return "No meetings found for analysis"

    lines = [
        f"# Meeting Frequency Analysis ({analysis.meeting_count} meetings)\n",
        "## Meetings by Month\n",
    ]
    for month, count in sorted(analysis.by_month.items()):
        lines.append(f"• **{month}:** {count} meetings")
    lines.append(f"\n**Average per month:** {analysis.average_per_month:.1f}")
    return "\n".join(lines)


def _topics_text(analysis: TopicAnalysis) -> str:
    if not analysis.topics:
        return "No significant topics found in meeting titles"

    lines = [
        f"# Topic Analysis ({analysis.meeting_count} meetings)\n",
        "## Most Common Topics (from titles)\n",
    ]
    for t in analysis.topics[:TOP_TOPICS]:
        lines.append(f"• **{t.topic}:** {t.count} mentions")
    return "\n".join(lines)


def render_text(result: Result, tz: zoneinfo.ZoneInfo) -> str:
    """Render a query result as markdown-flavoured text."""
    if isinstance(result, NotFound):
        return result.error
    if isinstance(result, SearchResults):
        return _search_text(result, tz)
    if isinstance(result, MeetingDetails):
        return _details_text(result, tz)
    if isinstance(result, TranscriptRecord):
        return _transcript_text(result)
    if isinstance(result, DocumentList):
        return _documents_text(result, tz)
    if isinstance(result, ParticipantAnalysis):
        return _participants_text(result)
    if isinstance(result, FrequencyAnalysis):
        return _frequency_text(result)
    if isinstance(result, TopicAnalysis):
        return _topics_text(result)
    raise TypeError(f"Cannot render {type(result).__name__}")


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


def _iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def to_payload(result: Result) -> dict[str, Any]:
    """Flatten a query result into the JSON shape emitted by ``--json``."""
    if isinstance(result, SearchResults):
        return {
            "query": result.query,
            "count": result.count,
            "results": [
                {
                    "score": hit.score,
                    "id": hit.meeting.id,
                    "title": hit.meeting.title,
                    "date": _iso(hit.meeting.date),
                    "participants": hit.meeting.participants,
                }
                for hit in result.results
            ],
        }
    if isinstance(result, MeetingDetails):
        meeting = result.meeting
        return {
            "id": meeting.id,
            "title": meeting.title,
            "date": _iso(meeting.date),
            "participants": meeting.participants,
            "meetingType": meeting.meeting_type,
            "platform": meeting.platform,
            "duration": meeting.duration,
            "documents": result.documents,
            "transcriptAvailable": result.transcript_available,
        }
    if isinstance(result, TranscriptRecord):
        transcript = result.transcript
        return {
            "meetingId": result.meeting_id,
            "title": result.title,
            "speakers": transcript.speakers,
            "language": transcript.language,
            "confidence": transcript.confidence,
            "content": transcript.content,
        }
    if isinstance(result, DocumentList):
        return {
            "meetingId": result.meeting_id,
            "title": result.title,
            "count": len(result.documents),
            "documents": [
                {
                    "id": doc.id,
                    "meetingId": doc.meeting_id,
                    "title": doc.title,
                    "type": doc.document_type,
                    "createdAt": _iso(doc.created_at),
                    "tags": doc.tags,
                    "content": doc.content,
                }
                for doc in result.documents
            ],
        }
    # NotFound and the pattern analyses already have the wire shape
    return result.model_dump(mode="json", by_alias=True)


def render_json(result: Result) -> str:
    return json.dumps(to_payload(result), ensure_ascii=False)
