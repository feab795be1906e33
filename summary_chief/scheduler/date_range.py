"""
Date-range phrase resolution for the scheduler
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from config.settings import Config

logger = logging.getLogger(__name__)

FRIDAY = 5  # Sunday-based weekday index


def _sunday_weekday(day: date) -> int:
    """Weekday index with Sunday = 0 through Saturday = 6"""
    return (day.weekday() + 1) % 7


def resolve_date_range(phrase: str, now: Optional[datetime] = None,
                       tz_name: str = None) -> Tuple[datetime, datetime]:
    """
    Map a free-form date-range phrase to a (start, end) pair of full days.

    Matching is a case-sensitive substring test and the first match wins:
    "next week", "tomorrow", "this week", "this Friday", then the default
    of the next seven days. Start is midnight, end is 23:59:59.999, both
    in the scheduling timezone. Never raises.
    """
    tz = ZoneInfo(tz_name or Config.TIMEZONE)
    if now is None:
        now = datetime.now(tz)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=tz)
    else:
        now = now.astimezone(tz)
    phrase = phrase if isinstance(phrase, str) else ""
    today = now.date()
    weekday = _sunday_weekday(today)

    if "next week" in phrase:
        start_day, end_day = today + timedelta(days=7), today + timedelta(days=14)
        label = "next week"
    elif "tomorrow" in phrase:
        start_day = end_day = today + timedelta(days=1)
        label = "tomorrow"
    elif "this week" in phrase:
        start_day = today - timedelta(days=weekday)
        end_day = today + timedelta(days=6 - weekday)
        label = "this week"
    elif "this Friday" in phrase:
        start_day = end_day = today + timedelta(days=(FRIDAY - weekday + 7) % 7)
        label = "this Friday"
    else:
        start_day, end_day = today + timedelta(days=1), today + timedelta(days=7)
        label = "default next 7 days"

    start = datetime.combine(start_day, time.min, tzinfo=tz)
    end = datetime.combine(end_day, time(23, 59, 59, 999000), tzinfo=tz)

    logger.debug(f"Resolved date range '{phrase}' as {label}: {start.isoformat()} to {end.isoformat()}")
    return start, end
