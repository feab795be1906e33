"""
Meeting Scheduler - orchestrates interpretation, slot search and event creation
"""
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional
from zoneinfo import ZoneInfo

from config.settings import Config
from summary_chief.ai_agent.meeting_interpreter import MeetingCommandInterpreter
from summary_chief.errors import (
    CalendarAccessError,
    InterpretationFailed,
    NoAvailableSlot,
    provider_message,
)
from summary_chief.models import SUMMARY_HEADING, CandidateSlot, MeetingSummary
from summary_chief.scheduler.availability_finder import AvailabilityFinder
from summary_chief.scheduler.date_range import resolve_date_range
from summary_chief.scheduler.event_materializer import EventMaterializer

logger = logging.getLogger(__name__)


def select_slot(slots: List[CandidateSlot]) -> CandidateSlot:
    """Pick the slot to book: the earliest one"""
    if not slots:
        raise NoAvailableSlot()
    return slots[0]


def meeting_notes(description: Optional[str]) -> str:
    """The human-written part of an event description, without any earlier AI summary"""
    notes, _, _ = (description or "").partition(SUMMARY_HEADING)
    return notes.strip()


class MeetingScheduler:
    """
    Entry point for every calendar operation of one request.

    Built per request around that request's calendar provider and the LLM
    client. Stages run strictly in sequence and the first failure ends the
    operation; nothing is retried.
    """

    def __init__(self, calendar_manager, llm_client, config: Config = None,
                 interpreter: MeetingCommandInterpreter = None,
                 finder: AvailabilityFinder = None,
                 materializer: EventMaterializer = None,
                 clock: Callable[[], datetime] = None):
        self.config = config or Config()
        self.calendar_manager = calendar_manager
        self.llm_client = llm_client
        self.interpreter = interpreter or MeetingCommandInterpreter(llm_client, self.config)
        self.finder = finder or AvailabilityFinder(calendar_manager, self.config)
        self.materializer = materializer or EventMaterializer(calendar_manager, self.config)
        self.clock = clock or (lambda: datetime.now(ZoneInfo(self.config.TIMEZONE)))

    def get_available_slots(self, participants: Iterable[str], date_range: str,
                            duration_minutes: int = None) -> List[CandidateSlot]:
        """Free slots for all participants inside a date-range phrase"""
        start_date, end_date = resolve_date_range(date_range, now=self.clock(),
                                                  tz_name=self.config.TIMEZONE)
        logger.info(f"Finding slots for '{date_range}': {start_date.date()} to {end_date.date()}")
        if duration_minutes is None:
            duration_minutes = self.config.DEFAULT_MEETING_DURATION
        return self.finder.find_slots(participants, start_date, end_date, duration_minutes)

    def schedule_meeting(self, command: str) -> Dict[str, Any]:
        """Interpret a command, book the earliest free slot and return the created event"""
        meeting_request = self.interpreter.interpret(command)
        if not meeting_request.participants:
            raise InterpretationFailed("no participants found in meeting command")

        slots = self.get_available_slots(meeting_request.participants,
                                         meeting_request.preferred_date_range)
        slot = select_slot(slots)
        logger.info(f"Scheduling '{meeting_request.meeting_type}' at {slot.start_time.isoformat()}")

        return self.materializer.materialize(slot, meeting_request)

    def create_simple_event(self, title: str, description: Optional[str], start_time: str,
                            end_time: str, attendees: Optional[List[str]] = None) -> Dict[str, Any]:
        """Write an event directly, without interpretation or slot search"""
        return self.materializer.create_event(title, description, start_time, end_time, attendees)

    def book_interview(self, candidate_name: str, interviewer_email: str,
                       date_range: str) -> Dict[str, Any]:
        """Book the earliest interview-length slot free for the interviewer"""
        participants = [interviewer_email]
        slots = self.get_available_slots(participants, date_range, self.config.INTERVIEW_DURATION)
        slot = select_slot(slots)

        return self.materializer.create_event(
            title=f"Interview: {candidate_name}",
            description=f"Interview with {candidate_name} for the position.",
            start_time=slot.start_time,
            end_time=slot.end_time,
            attendees=participants,
        )

    def get_upcoming_events(self, max_results: int = None) -> List[Dict[str, Any]]:
        try:
            return self.calendar_manager.list_upcoming_events(
                max_results or self.config.UPCOMING_EVENTS_LIMIT)
        except Exception as e:
            logger.error(f"Error getting upcoming events: {e}")
            raise CalendarAccessError(provider_message(e)) from e

    def summarize_meeting(self, event_id: str) -> MeetingSummary:
        """Summarize an event and write the summary into its description"""
        try:
            event = self.calendar_manager.get_event(event_id)
        except Exception as e:
            logger.error(f"Error getting calendar event {event_id}: {e}")
            raise CalendarAccessError(provider_message(e)) from e

        notes = meeting_notes(event.get("description"))
        summary = self.llm_client.generate_meeting_summary(
            event, notes or f"No notes recorded for {event.get('summary', event_id)}.")

        description = summary.to_description()
        if notes:
            description = f"{notes}\n\n{description}"
        try:
            self.calendar_manager.patch_event_description(event_id, description)
        except Exception as e:
            # The summary is still returned when the description patch fails
            logger.warning(f"Error updating event description for {event_id}: {e}")

        return summary

    def test_calendar_access(self) -> Dict[str, Any]:
        """Check the credentials reach the calendar list"""
        try:
            calendars = self.calendar_manager.list_calendars()
        except Exception as e:
            logger.error(f"Error testing Calendar API: {e}")
            raise CalendarAccessError(provider_message(e)) from e

        primary = next((calendar for calendar in calendars if calendar.get("primary")), None)
        return {
            "calendars": len(calendars),
            "primaryCalendar": primary.get("summary") if primary else "Not found",
        }
