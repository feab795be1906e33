"""
Calendar event creation for chosen slots and direct requests
"""
import copy
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from config.settings import Config
from summary_chief.errors import EventWriteFailed, provider_message
from summary_chief.models import CandidateSlot, MeetingRequest

logger = logging.getLogger(__name__)

TimeValue = Union[datetime, str]


class EventMaterializer:
    """Writes one event per call, with invitations sent by the provider"""

    def __init__(self, calendar_manager, config: Config = None):
        self.calendar_manager = calendar_manager
        self.config = config or Config()

    def materialize(self, slot: CandidateSlot, request: MeetingRequest) -> Dict[str, Any]:
        """Create the event for an interpreted meeting request in the chosen slot"""
        return self.create_event(
            title=request.meeting_type,
            description=request.description or f"AI-scheduled {request.meeting_type}",
            start_time=slot.start_time,
            end_time=slot.end_time,
            attendees=request.participants,
        )

    def create_event(self, title: str, description: Optional[str], start_time: TimeValue,
                     end_time: TimeValue, attendees: Optional[List[str]] = None) -> Dict[str, Any]:
        """Insert the event and return the provider's created-event echo"""
        event = self.build_event_body(title, description, start_time, end_time, attendees or [])
        logger.info(f"Creating event '{title}' {event['start']['dateTime']} to "
                    f"{event['end']['dateTime']} for {len(event['attendees'])} attendees")

        try:
            return self.calendar_manager.insert_event(event)
        except Exception as e:
            logger.error(f"Error creating calendar event: {e}")
            raise EventWriteFailed(provider_message(e)) from e

    def build_event_body(self, title: str, description: Optional[str], start_time: TimeValue,
                         end_time: TimeValue, attendees: List[str]) -> Dict[str, Any]:
        return {
            "summary": title,
            "description": description,
            "start": {
                "dateTime": _format_time(start_time),
                "timeZone": self.config.TIMEZONE,
            },
            "end": {
                "dateTime": _format_time(end_time),
                "timeZone": self.config.TIMEZONE,
            },
            "attendees": [{"email": email} for email in attendees],
            "reminders": {
                "useDefault": False,
                "overrides": copy.deepcopy(self.config.REMINDER_OVERRIDES),
            },
        }


def _format_time(value: TimeValue) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return value
