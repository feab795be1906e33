"""
Google Calendar integration for the Summary Chief scheduler
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

from dateutil import parser as dtparse
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from config.settings import Config
from summary_chief.models import AuthContext, BusyInterval

logger = logging.getLogger(__name__)


class CalendarManager:
    """
    Calendar provider bound to one request's credentials.

    A new manager is built for every request from that request's
    AuthContext, so no client object ever holds another caller's tokens.
    Provider errors (googleapiclient.errors.HttpError, transport errors)
    propagate unchanged; the scheduler stage that made the call decides
    how to report them.
    """

    def __init__(self, auth: AuthContext, config: Config = None):
        self.config = config or Config()
        self.auth = auth
        self._service = None

    def _get_credentials(self) -> Credentials:
        """Build google-auth credentials from the request's tokens"""
        return Credentials(
            token=self.auth.access_token,
            refresh_token=self.auth.refresh_token,
            **self.config.get_oauth_client_config(),
        )

    def _build_calendar_service(self):
        """Build the Calendar v3 service once per manager"""
        if self._service is None:
            self._service = build("calendar", "v3", credentials=self._get_credentials(),
                                  cache_discovery=False)
        return self._service

    def query_free_busy(self, participants: Iterable[str], time_min: datetime,
                        time_max: datetime) -> Dict[str, List[BusyInterval]]:
        """Return busy intervals per participant between time_min and time_max"""
        participants = list(dict.fromkeys(participants))
        body = {
            "timeMin": _to_rfc3339(time_min),
            "timeMax": _to_rfc3339(time_max),
            "items": [{"id": participant} for participant in participants],
        }

        logger.info(f"Querying free/busy for {len(participants)} participants: {body['timeMin']} to {body['timeMax']}")
        response = self._build_calendar_service().freebusy().query(body=body).execute()

        calendars = response.get("calendars", {})
        busy_map: Dict[str, List[BusyInterval]] = {}
        for participant, calendar in calendars.items():
            for error in calendar.get("errors", []):
                logger.warning(f"Free/busy unavailable for {participant}: {error.get('reason', 'unknown')}")
            busy_map[participant] = [
                BusyInterval(
                    participant=participant,
                    start=dtparse.isoparse(period["start"]),
                    end=dtparse.isoparse(period["end"]),
                )
                for period in calendar.get("busy", [])
            ]

        total = sum(len(intervals) for intervals in busy_map.values())
        logger.info(f"Free/busy returned {total} busy intervals across {len(busy_map)} calendars")
        return busy_map

    def insert_event(self, event: Dict[str, Any]) -> Dict[str, Any]:
        """Insert an event on the primary calendar and send invitations to all attendees"""
        created = self._build_calendar_service().events().insert(
            calendarId=self.config.CALENDAR_ID,
            body=event,
            sendUpdates="all",
        ).execute()
        logger.info(f"Event created: {created.get('id')} ({created.get('htmlLink', 'no link')})")
        return created

    def list_upcoming_events(self, max_results: int = 10, now: datetime = None) -> List[Dict[str, Any]]:
        """List upcoming events on the primary calendar, earliest first"""
        now = now or datetime.now(timezone.utc)
        events_result = self._build_calendar_service().events().list(
            calendarId=self.config.CALENDAR_ID,
            timeMin=_to_rfc3339(now),
            maxResults=max_results,
            singleEvents=True,
            orderBy="startTime",
        ).execute()
        return events_result.get("items", [])

    def get_event(self, event_id: str) -> Dict[str, Any]:
        return self._build_calendar_service().events().get(
            calendarId=self.config.CALENDAR_ID,
            eventId=event_id,
        ).execute()

    def patch_event_description(self, event_id: str, description: str) -> Dict[str, Any]:
        return self._build_calendar_service().events().patch(
            calendarId=self.config.CALENDAR_ID,
            eventId=event_id,
            body={"description": description},
        ).execute()

    def list_calendars(self) -> List[Dict[str, Any]]:
        result = self._build_calendar_service().calendarList().list().execute()
        return result.get("items", [])


def _to_rfc3339(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
