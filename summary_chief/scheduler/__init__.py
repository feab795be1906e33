"""Slot finding, date-range resolution and event creation"""

from .availability_finder import AvailabilityFinder, is_slot_available
from .date_range import resolve_date_range
from .event_materializer import EventMaterializer
from .meeting_scheduler import MeetingScheduler, select_slot

__all__ = ['AvailabilityFinder', 'is_slot_available', 'resolve_date_range',
           'EventMaterializer', 'MeetingScheduler', 'select_slot']
