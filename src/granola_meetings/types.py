"""Data models for Granola meeting information."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class MeetingMetadata(BaseModel):
    """Meeting metadata information."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    date: datetime
    duration: int | None = None
    participants: list[str] = []
    meeting_type: str = "meeting"
    platform: str | None = None


class MeetingDocument(BaseModel):
    """Meeting document / notes information."""

    model_config = ConfigDict(frozen=True)

    id: str
    meeting_id: str
    title: str
    content: str
    document_type: str = "meeting_notes"
    created_at: datetime
    tags: list[str] = []


class MeetingTranscript(BaseModel):
    """Meeting transcript information."""

    model_config = ConfigDict(frozen=True)

    meeting_id: str
    content: str
    speakers: list[str] = []
    language: str | None = None
    confidence: float | None = None


class CacheData(BaseModel):
    """Complete cache data structure."""

    model_config = ConfigDict(frozen=True)

    meetings: dict[str, MeetingMetadata] = {}
    documents: dict[str, MeetingDocument] = {}
    transcripts: dict[str, MeetingTranscript] = {}
    last_updated: datetime | None = None


# ---------------------------------------------------------------------------
# Query results
# ---------------------------------------------------------------------------


class _Result(BaseModel):
    """Base for query results; serializes with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class NotFound(_Result):
    """Absence indicator for lookups that matched nothing."""

    error: str


class SearchHit(_Result):
    score: int
    meeting: MeetingMetadata


class SearchResults(_Result):
    query: str
    results: list[SearchHit] = []

    @property
    def count(self) -> int:
        return len(self.results)


class MeetingDetails(_Result):
    meeting: MeetingMetadata
    documents: int = 0
    transcript_available: bool = False


class TranscriptRecord(_Result):
    meeting_id: str
    title: str
    transcript: MeetingTranscript


class DocumentList(_Result):
    meeting_id: str
    title: str
    documents: list[MeetingDocument] = []


class ParticipantCount(_Result):
    name: str
    count: int


class ParticipantAnalysis(_Result):
    meeting_count: int
    top_participants: list[ParticipantCount] = []


class FrequencyAnalysis(_Result):
    meeting_count: int
    by_month: dict[str, int] = {}
    average_per_month: float = 0.0


class TopicCount(_Result):
    topic: str
    count: int


class TopicAnalysis(_Result):
    meeting_count: int
    topics: list[TopicCount] = []


PatternAnalysis = ParticipantAnalysis | FrequencyAnalysis | TopicAnalysis
