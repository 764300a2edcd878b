"""Tests for text and JSON rendering."""

import json
import zoneinfo

import pytest

from granola_meetings import query
from granola_meetings.cache import build_cache
from granola_meetings.render import render_json, render_text
from granola_meetings.types import CacheData, NotFound

from conftest import SAMPLE_CACHE_GRANOLA_FORMAT

UTC = zoneinfo.ZoneInfo("UTC")


@pytest.fixture
def cache(fixed_clock) -> CacheData:
    return build_cache(SAMPLE_CACHE_GRANOLA_FORMAT, clock=fixed_clock)


class TestRenderText:
    def test_search(self, cache: CacheData):
        text = render_text(query.search_meetings(cache, "standup"), UTC)
        assert "Found 1 meeting(s) matching 'standup'" in text
        assert "• **Weekly Team Standup** (meeting_1)" in text
        assert "Date: 2024-01-15 10:00" in text
        assert "Participants: Alice, Bob, Charlie" in text

    def test_search_empty(self, cache: CacheData):
        text = render_text(query.search_meetings(cache, "zzz"), UTC)
        assert text == "No meetings found matching 'zzz'"

    def test_details_in_other_timezone(self, cache: CacheData):
        tz = zoneinfo.ZoneInfo("America/New_York")
        text = render_text(query.get_meeting_details(cache, "meeting_1"), tz)
        assert "# Meeting Details: Weekly Team Standup" in text
        assert "**Date:** 2024-01-15 05:00" in text
        assert "**Type:** standup" in text
        assert "**Documents:** 1" in text
        assert "**Transcript:** Available" in text

    def test_transcript(self, cache: CacheData):
        text = render_text(query.get_transcript(cache, "meeting_1"), UTC)
        assert text.startswith("# Transcript: Weekly Team Standup")
        assert "**Speakers:** Alice, Bob, Charlie" in text
        assert "## Transcript Content" in text

    def test_documents(self, cache: CacheData):
        text = render_text(query.get_documents(cache, "meeting_1"), UTC)
        assert "Found 1 document(s):" in text
        assert "**Type:** meeting_notes" in text
        assert "Overview: Sprint planning discussion" in text

    def test_not_found(self):
        assert render_text(NotFound(error="Meeting 'x' not found"), UTC) == "Meeting 'x' not found"

    def test_frequency(self, cache: CacheData):
        text = render_text(query.analyze_patterns(cache, "frequency"), UTC)
        assert "# Meeting Frequency Analysis (3 meetings)" in text
        assert text.index("2024-01") < text.index("2024-02")
        assert "**Average per month:** 1.5" in text

    def test_empty_analyses(self, fixed_clock):
        empty = build_cache({}, clock=fixed_clock)
        assert render_text(query.analyze_patterns(empty, "participants"), UTC) == (
            "No participant data found"
        )
        assert render_text(query.analyze_patterns(empty, "frequency"), UTC) == (
            "No meetings found for analysis"
        )
        assert render_text(query.analyze_patterns(empty, "topics"), UTC) == (
            "No significant topics found in meeting titles"
        )


class TestRenderJson:
    def test_search(self, cache: CacheData):
        payload = json.loads(render_json(query.search_meetings(cache, "Q1")))
        assert payload["query"] == "Q1"
        assert payload["count"] == 1
        assert payload["results"][0] == {
            "score": 3,
            "id": "meeting_2",
            "title": "Q1 Planning Session",
            "date": "2024-01-20T14:00:00Z",
            "participants": ["Alice", "David", "Eve"],
        }

    def test_details(self, cache: CacheData):
        payload = json.loads(render_json(query.get_meeting_details(cache, "meeting_3")))
        assert payload["meetingType"] == "review"
        assert payload["documents"] == 1
        assert payload["transcriptAvailable"] is False
        assert payload["platform"] is None

    def test_documents(self, cache: CacheData):
        payload = json.loads(render_json(query.get_documents(cache, "meeting_3")))
        assert payload["count"] == 1
        assert payload["documents"][0]["type"] == "meeting_notes"
        assert payload["documents"][0]["createdAt"] == "2024-02-05T09:00:00Z"

    def test_analysis_uses_camel_case(self, cache: CacheData):
        payload = json.loads(render_json(query.analyze_patterns(cache, "frequency")))
        assert payload == {
            "meetingCount": 3,
            "byMonth": {"2024-01": 2, "2024-02": 1},
            "averagePerMonth": 1.5,
        }

    def test_participants_payload(self, cache: CacheData):
        payload = json.loads(render_json(query.analyze_patterns(cache, "participants")))
        assert payload["topParticipants"][0] == {"name": "Alice", "count": 2}

    def test_not_found(self):
        assert json.loads(render_json(NotFound(error="nope"))) == {"error": "nope"}
