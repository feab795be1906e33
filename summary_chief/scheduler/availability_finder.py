"""
Free slot search over participants' busy intervals
"""
import logging
from datetime import datetime, timedelta
from typing import Dict, Iterable, List

from config.settings import Config
from summary_chief.errors import InvalidSchedulingRequest, SchedulingUnavailable, provider_message
from summary_chief.models import BusyInterval, CandidateSlot

logger = logging.getLogger(__name__)


def is_slot_available(start: datetime, end: datetime,
                      busy_times: Dict[str, List[BusyInterval]]) -> bool:
    """True when [start, end) overlaps no busy interval of any participant"""
    for intervals in busy_times.values():
        for busy in intervals:
            if start < busy.end and end > busy.start:
                return False
    return True


class AvailabilityFinder:
    """
    Scans a date window in fixed steps and keeps the slots free for everyone.

    The provider is queried once; every candidate is then tested locally.
    A candidate must lie inside working hours of its own day. The cursor
    walks through the night in the same fixed steps instead of jumping to
    the next morning.
    """

    def __init__(self, calendar_manager, config: Config = None):
        self.calendar_manager = calendar_manager
        self.config = config or Config()

    def find_slots(self, participants: Iterable[str], start_date: datetime, end_date: datetime,
                   duration_minutes: int = None) -> List[CandidateSlot]:
        participants = list(participants)
        if duration_minutes is None:
            duration_minutes = self.config.DEFAULT_MEETING_DURATION
        if not participants:
            raise InvalidSchedulingRequest("At least one participant is required")
        if duration_minutes <= 0:
            raise InvalidSchedulingRequest("Duration must be a positive number of minutes")

        working_minutes = (self.config.WORKING_HOURS_END - self.config.WORKING_HOURS_START) * 60
        if duration_minutes > working_minutes:
            logger.info(f"No {duration_minutes}-minute slot fits in a {working_minutes}-minute working day")
            return []

        try:
            busy_times = self.calendar_manager.query_free_busy(participants, start_date, end_date)
        except Exception as e:
            logger.error(f"Error getting busy times: {e}")
            raise SchedulingUnavailable(provider_message(e)) from e

        slots = self._scan(busy_times, start_date, end_date, duration_minutes)
        logger.info(f"Found {len(slots)} free {duration_minutes}-minute slots for "
                    f"{len(participants)} participants")
        return slots

    def _scan(self, busy_times: Dict[str, List[BusyInterval]], start_date: datetime,
              end_date: datetime, duration_minutes: int) -> List[CandidateSlot]:
        duration = timedelta(minutes=duration_minutes)
        step = timedelta(minutes=self.config.SLOT_STEP_MINUTES)

        slots = []
        cursor = start_date.replace(hour=self.config.WORKING_HOURS_START, minute=0,
                                    second=0, microsecond=0)
        while cursor < end_date:
            slot_end = cursor + duration
            if self._within_working_hours(cursor, slot_end):
                if is_slot_available(cursor, slot_end, busy_times):
                    slots.append(CandidateSlot(start_time=cursor, end_time=slot_end))
            cursor += step

        return slots

    def _within_working_hours(self, start: datetime, end: datetime) -> bool:
        day_start = start.replace(hour=self.config.WORKING_HOURS_START, minute=0,
                                  second=0, microsecond=0)
        day_end = start.replace(hour=self.config.WORKING_HOURS_END, minute=0,
                                second=0, microsecond=0)
        return day_start <= start and end <= day_end
