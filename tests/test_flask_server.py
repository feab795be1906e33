import json
from unittest.mock import Mock

import pytest

from summary_chief.ai_agent.mock_llm_client import MockLLMClient
from summary_chief.api.flask_server import ChiefCalendarAPI, create_app
from summary_chief.calendar.mock_calendar_manager import MockCalendarManager
from summary_chief.errors import InvalidSchedulingRequest
from summary_chief.scheduler.meeting_scheduler import MeetingScheduler
from tests.conftest import FIXED_NOW, UtcConfig, utc

AUTH = {"Authorization": "Bearer token-123", "X-Refresh-Token": "refresh-456"}


class Harness:
    def __init__(self):
        self.calendar = MockCalendarManager()
        self.llm = MockLLMClient()
        self.contexts = []

    def factory(self, auth):
        self.contexts.append(auth)
        return MeetingScheduler(self.calendar, self.llm, UtcConfig(), clock=lambda: FIXED_NOW)


@pytest.fixture
def harness():
    return Harness()


@pytest.fixture
def client(harness):
    app = create_app(UtcConfig(), scheduler_factory=harness.factory)
    app.config["TESTING"] = True
    return app.test_client()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json()["status"] == "healthy"


def test_missing_token_is_unauthorized(client, harness):
    response = client.get("/api/calendar/available-slots?participants=a@x.com&dateRange=tomorrow")

    assert response.status_code == 401
    assert response.get_json() == {"success": False, "message": "Google authentication required"}
    assert harness.contexts == []


def test_each_request_gets_its_own_credentials(client, harness):
    client.get("/api/calendar/test-auth", headers=AUTH)
    client.get("/api/calendar/test-auth", headers={"Authorization": "Bearer other"})

    assert [(c.access_token, c.refresh_token) for c in harness.contexts] == [
        ("token-123", "refresh-456"),
        ("other", None),
    ]


def test_available_slots(client, harness):
    harness.calendar.add_busy("a@x.com", utc(4, 9), utc(4, 9, 30))

    response = client.get(
        "/api/calendar/available-slots?participants=a@x.com,b@x.com&dateRange=tomorrow&durationMinutes=30",
        headers=AUTH)

    body = response.get_json()
    assert response.status_code == 200
    assert body["success"] is True
    assert body["data"]["slots"][0] == {
        "startTime": "2024-01-04T09:30:00+00:00",
        "endTime": "2024-01-04T10:00:00+00:00",
        "date": "Thu Jan 04 2024",
    }
    assert harness.calendar.free_busy_queries[0]["participants"] == ["a@x.com", "b@x.com"]


@pytest.mark.parametrize("query", [
    "dateRange=tomorrow",
    "participants=a@x.com",
    "participants=a@x.com&dateRange=tomorrow&durationMinutes=abc",
    "participants=a@x.com&dateRange=tomorrow&durationMinutes=0",
])
def test_available_slots_validation(client, query):
    response = client.get(f"/api/calendar/available-slots?{query}", headers=AUTH)

    assert response.status_code == 400
    assert response.get_json()["success"] is False


def test_available_slots_provider_failure(client, harness):
    harness.calendar.fail_with = RuntimeError("backend error")

    response = client.get("/api/calendar/available-slots?participants=a@x.com&dateRange=tomorrow",
                          headers=AUTH)

    assert response.status_code == 502
    assert response.get_json()["message"] == "Failed to get available slots: backend error"


def test_schedule_meeting(client, harness):
    harness.llm.responses.append(json.dumps({
        "meetingType": "sync",
        "participants": ["a@x.com"],
        "preferredDateRange": "tomorrow",
        "description": "Weekly sync",
    }))

    response = client.post("/api/calendar/schedule-meeting", json={"command": "sync tomorrow"},
                           headers=AUTH)

    body = response.get_json()
    assert response.status_code == 200
    assert body["message"] == "Meeting scheduled successfully"
    event = body["data"]["event"]
    assert event["id"] == "mock_event_1"
    assert event["summary"] == "sync"
    assert event["description"] == "Weekly sync"
    assert event["start"]["dateTime"] == "2024-01-04T09:00:00+00:00"
    assert event["attendees"] == [{"email": "a@x.com"}]


def test_schedule_meeting_without_slots(client, harness):
    harness.llm.responses.append(
        '{"meetingType": "sync", "participants": ["a@x.com"], "preferredDateRange": "tomorrow"}')
    harness.calendar.add_busy("a@x.com", utc(4, 0), utc(5, 0))

    response = client.post("/api/calendar/schedule-meeting", json={"command": "sync tomorrow"},
                           headers=AUTH)

    assert response.status_code == 409
    assert response.get_json()["message"] == "No available time slots found"
    assert harness.calendar.inserted_events == []


def test_schedule_meeting_with_unparseable_command(client, harness):
    harness.llm.responses.append("I am not sure what you mean")

    response = client.post("/api/calendar/schedule-meeting", json={"command": "???"}, headers=AUTH)

    assert response.status_code == 502
    assert response.get_json()["message"] == "Failed to parse meeting command"


def test_schedule_meeting_requires_command(client):
    response = client.post("/api/calendar/schedule-meeting", json={}, headers=AUTH)

    assert response.status_code == 400
    assert response.get_json()["message"] == "Meeting command is required"


def test_create_event(client, harness):
    response = client.post("/api/calendar/create-event", headers=AUTH, json={
        "title": "Planning",
        "description": "Roadmap",
        "startTime": "2024-01-04T10:00:00Z",
        "endTime": "2024-01-04T11:00:00Z",
        "attendees": "a@x.com, b@x.com,",
    })

    assert response.status_code == 200
    assert response.get_json()["data"]["event"]["summary"] == "Planning"
    assert harness.calendar.inserted_events[0]["attendees"] == [{"email": "a@x.com"}, {"email": "b@x.com"}]


def test_create_event_requires_fields(client):
    response = client.post("/api/calendar/create-event", headers=AUTH, json={"title": "Planning"})

    assert response.status_code == 400
    assert response.get_json()["message"] == "Title, start time, and end time are required"


def test_create_event_write_failure(client, harness):
    harness.calendar.fail_with = RuntimeError("Calendar usage limits exceeded")

    response = client.post("/api/calendar/create-event", headers=AUTH, json={
        "title": "Planning",
        "startTime": "2024-01-04T10:00:00Z",
        "endTime": "2024-01-04T11:00:00Z",
    })

    assert response.status_code == 502
    assert response.get_json()["message"] == \
        "Failed to create calendar event: Calendar usage limits exceeded"


def test_book_interview(client, harness):
    response = client.post("/api/calendar/book-interview", headers=AUTH, json={
        "candidateName": "Jane Doe",
        "interviewerEmail": "boss@x.com",
        "dateRange": "tomorrow",
    })

    assert response.status_code == 200
    event = response.get_json()["data"]["event"]
    assert event["summary"] == "Interview: Jane Doe"
    assert event["end"]["dateTime"] == "2024-01-04T10:30:00+00:00"


def test_book_interview_requires_fields(client):
    response = client.post("/api/calendar/book-interview", headers=AUTH, json={"candidateName": "Jane"})

    assert response.status_code == 400


def test_summarize_meeting(client, harness):
    created = harness.calendar.insert_event({"summary": "Retro", "start": {"dateTime": "2024-01-02T10:00:00Z"}})

    response = client.post("/api/calendar/summarize-meeting", headers=AUTH,
                           json={"meetingId": created["id"]})

    assert response.status_code == 200
    assert response.get_json()["data"]["summary"]["summary"] == "Mock summary of Retro."


def test_upcoming_events(client, harness):
    harness.calendar.insert_event({"summary": "Later", "start": {"dateTime": "2099-05-01T10:00:00Z"},
                                   "organizer": {"email": "me@x.com"}})

    response = client.get("/api/calendar/upcoming-events?maxResults=5", headers=AUTH)

    events = response.get_json()["data"]["events"]
    assert [event["summary"] for event in events] == ["Later"]
    assert events[0]["organizer"] == {"email": "me@x.com"}


def test_test_auth(client):
    response = client.get("/api/calendar/test-auth", headers=AUTH)

    assert response.get_json()["data"] == {"calendars": 1, "primaryCalendar": "Mock Calendar"}


def test_unknown_endpoint(client):
    response = client.get("/api/calendar/nope", headers=AUTH)

    assert response.status_code == 404
    assert response.get_json()["message"] == "Endpoint not found"


def test_available_slots_with_duration_longer_than_a_working_day(client, harness):
    response = client.get(
        "/api/calendar/available-slots?participants=a@x.com&dateRange=tomorrow&durationMinutes=99999999999",
        headers=AUTH)

    assert response.status_code == 200
    assert response.get_json()["data"]["slots"] == []
    assert harness.calendar.free_busy_queries == []


def test_unexpected_value_error_is_a_server_error(client, harness):
    created = harness.calendar.insert_event({"summary": "Retro", "start": {"dateTime": "2024-01-02T10:00:00Z"}})
    harness.llm.generate_meeting_summary = Mock(side_effect=ValueError("invalid literal for int()"))

    response = client.post("/api/calendar/summarize-meeting", headers=AUTH,
                           json={"meetingId": created["id"]})

    assert response.status_code == 500
    assert response.get_json() == {
        "success": False,
        "message": "Failed to summarize meeting: invalid literal for int()",
    }


def test_rejected_scheduling_input_is_a_bad_request(harness):
    finder = Mock()
    finder.find_slots.side_effect = InvalidSchedulingRequest("At least one participant is required")

    def factory(auth):
        return MeetingScheduler(harness.calendar, harness.llm, UtcConfig(), finder=finder,
                                clock=lambda: FIXED_NOW)

    client = create_app(UtcConfig(), scheduler_factory=factory).test_client()
    response = client.get("/api/calendar/available-slots?participants=a@x.com&dateRange=tomorrow",
                          headers=AUTH)

    assert response.status_code == 400
    assert response.get_json()["message"] == "At least one participant is required"


def test_server_config_reaches_the_llm_client():
    class LiveConfig(UtcConfig):
        USE_MOCK_SERVICES = False
        OPENAI_API_KEY = "sk-test"
        OPENAI_MODEL = "gpt-4o"

    api = ChiefCalendarAPI(LiveConfig())
    llm = api._get_llm_client()

    assert isinstance(llm.config, LiveConfig)
    assert llm.model_name == "gpt-4o"
