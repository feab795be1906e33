"""
Mock Calendar Manager for running without Google Calendar access
"""
import itertools
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from dateutil import parser as dtparse

from summary_chief.models import BusyInterval

logger = logging.getLogger(__name__)


class MockCalendarManager:
    """In-memory calendar with the same interface as CalendarManager"""

    def __init__(self, busy: Optional[Dict[str, List[BusyInterval]]] = None,
                 events: Optional[List[Dict[str, Any]]] = None,
                 fail_with: Optional[Exception] = None):
        self.busy = busy or {}
        self.events = list(events or [])
        self.fail_with = fail_with
        self.free_busy_queries: List[Dict[str, Any]] = []
        self.inserted_events: List[Dict[str, Any]] = []
        self._ids = itertools.count(1)

    def _maybe_fail(self):
        if self.fail_with is not None:
            raise self.fail_with

    def add_busy(self, participant: str, start: datetime, end: datetime):
        self.busy.setdefault(participant, []).append(
            BusyInterval(participant=participant, start=start, end=end)
        )

    def query_free_busy(self, participants: Iterable[str], time_min: datetime,
                        time_max: datetime) -> Dict[str, List[BusyInterval]]:
        participants = list(dict.fromkeys(participants))
        logger.info(f"MOCK: free/busy for {len(participants)} participants")
        self.free_busy_queries.append({
            "participants": participants,
            "time_min": time_min,
            "time_max": time_max,
        })
        self._maybe_fail()

        result = {}
        for participant in participants:
            intervals = [
                interval for interval in self.busy.get(participant, [])
                if interval.start < time_max and interval.end > time_min
            ]
            result[participant] = sorted(intervals, key=lambda interval: interval.start)
        return result

    def insert_event(self, event: Dict[str, Any]) -> Dict[str, Any]:
        self._maybe_fail()
        created = dict(event)
        created["id"] = f"mock_event_{next(self._ids)}"
        created["status"] = "confirmed"
        self.inserted_events.append(event)
        self.events.append(created)
        logger.info(f"MOCK: created event {created['id']}: {event.get('summary')}")
        return created

    def list_upcoming_events(self, max_results: int = 10, now: datetime = None) -> List[Dict[str, Any]]:
        self._maybe_fail()
        now = now or datetime.now(timezone.utc)
        upcoming = [event for event in self.events if _event_start(event) >= now]
        upcoming.sort(key=_event_start)
        return upcoming[:max_results]

    def get_event(self, event_id: str) -> Dict[str, Any]:
        self._maybe_fail()
        for event in self.events:
            if event.get("id") == event_id:
                return event
        raise KeyError(f"Event not found: {event_id}")

    def patch_event_description(self, event_id: str, description: str) -> Dict[str, Any]:
        event = self.get_event(event_id)
        event["description"] = description
        return event

    def list_calendars(self) -> List[Dict[str, Any]]:
        self._maybe_fail()
        return [{"id": "primary", "summary": "Mock Calendar", "primary": True}]


def _event_start(event: Dict[str, Any]) -> datetime:
    value = event.get("start", {}).get("dateTime")
    if not value:
        return datetime.min.replace(tzinfo=timezone.utc)
    parsed = dtparse.isoparse(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
