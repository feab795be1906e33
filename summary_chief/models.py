"""
Data structures shared by the scheduler, the providers and the API
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from config.settings import Config

SUMMARY_HEADING = "AI Summary:"


@dataclass(frozen=True)
class AuthContext:
    """Per-request Google credentials, passed explicitly to every provider call"""

    access_token: str
    refresh_token: Optional[str] = None


@dataclass(frozen=True)
class BusyInterval:
    """Half-open busy range [start, end) for one participant"""

    participant: str
    start: datetime
    end: datetime


@dataclass(frozen=True)
class CandidateSlot:
    """Half-open free range [start_time, end_time) of a fixed duration"""

    start_time: datetime
    end_time: datetime

    @property
    def date(self) -> str:
        return self.start_time.strftime(Config.SLOT_DATE_FORMAT)

    def to_dict(self) -> Dict[str, str]:
        return {
            "startTime": _utc_iso(self.start_time),
            "endTime": _utc_iso(self.end_time),
            "date": self.date,
        }


@dataclass
class MeetingRequest:
    """Structured form of a natural-language scheduling command"""

    meeting_type: str
    participants: List[str]
    preferred_date_range: str
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "meetingType": self.meeting_type,
            "participants": list(self.participants),
            "preferredDateRange": self.preferred_date_range,
            "description": self.description,
        }


@dataclass
class ResolvedEvent:
    """A calendar event as echoed back by the provider"""

    id: str
    summary: Optional[str]
    start: Dict[str, Any]
    end: Dict[str, Any]
    attendees: List[Dict[str, Any]] = field(default_factory=list)
    description: Optional[str] = None
    organizer: Optional[Dict[str, Any]] = None

    @classmethod
    def from_provider(cls, data: Dict[str, Any]) -> "ResolvedEvent":
        return cls(
            id=data.get("id", ""),
            summary=data.get("summary"),
            start=data.get("start", {}),
            end=data.get("end", {}),
            attendees=data.get("attendees") or [],
            description=data.get("description"),
            organizer=data.get("organizer"),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "id": self.id,
            "summary": self.summary,
            "start": self.start,
            "end": self.end,
            "attendees": self.attendees,
            "description": self.description,
        }
        if self.organizer is not None:
            result["organizer"] = self.organizer
        return result


@dataclass
class MeetingSummary:
    summary: str
    key_points: List[str] = field(default_factory=list)
    action_items: List[str] = field(default_factory=list)
    next_steps: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary,
            "keyPoints": self.key_points,
            "actionItems": self.action_items,
            "nextSteps": self.next_steps,
        }

    def to_description(self) -> str:
        """Render as the text written into the event description"""
        sections = [
            ("Key Points", self.key_points),
            ("Action Items", self.action_items),
            ("Next Steps", self.next_steps),
        ]
        lines = [SUMMARY_HEADING, self.summary]
        for title, items in sections:
            lines.append("")
            lines.append(f"{title}:")
            lines.extend(f"• {item}" for item in items)
        return "\n".join(lines)


def _utc_iso(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat()
