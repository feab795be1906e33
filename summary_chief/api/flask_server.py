"""
Flask API server for the Summary Chief scheduler
"""
import logging
import signal
import sys
import time
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from config.settings import Config
from summary_chief.ai_agent.llm_client import LLMClient
from summary_chief.ai_agent.mock_llm_client import MockLLMClient
from summary_chief.calendar.calendar_manager import CalendarManager
from summary_chief.calendar.mock_calendar_manager import MockCalendarManager
from summary_chief.errors import (
    CalendarAccessError,
    EventWriteFailed,
    InterpretationFailed,
    InvalidSchedulingRequest,
    NoAvailableSlot,
    SchedulingError,
    SchedulingUnavailable,
)
from summary_chief.models import AuthContext, ResolvedEvent
from summary_chief.scheduler.meeting_scheduler import MeetingScheduler
from utils.logger import ChiefLogger
from utils.validators import DataSanitizer, RequestValidator

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    NoAvailableSlot: 409,
    InterpretationFailed: 502,
    SchedulingUnavailable: 502,
    EventWriteFailed: 502,
    CalendarAccessError: 502,
}

SchedulerFactory = Callable[[AuthContext], MeetingScheduler]


class ChiefCalendarAPI:
    """
    Flask API exposing the calendar scheduling operations.

    Each request gets its own MeetingScheduler built from the caller's
    bearer token, so no provider object outlives the request it served.
    """

    def __init__(self, config: Config = None, scheduler_factory: Optional[SchedulerFactory] = None):
        self.config = config or Config()
        self.app = Flask(__name__)
        CORS(self.app)  # Enable CORS for the dashboard frontend

        self._llm_client = None
        self._mock_calendar = None
        self.scheduler_factory = scheduler_factory or self._default_scheduler_factory
        self.start_time = time.time()

        self._setup_routes()

    def _get_llm_client(self):
        if self._llm_client is None:
            if self.config.USE_MOCK_SERVICES:
                self._llm_client = MockLLMClient()
            else:
                self._llm_client = LLMClient(config=self.config)
        return self._llm_client

    def _default_scheduler_factory(self, auth: AuthContext) -> MeetingScheduler:
        if self.config.USE_MOCK_SERVICES:
            if self._mock_calendar is None:
                self._mock_calendar = MockCalendarManager()
            calendar_manager = self._mock_calendar
        else:
            calendar_manager = CalendarManager(auth, self.config)
        return MeetingScheduler(calendar_manager, self._get_llm_client(), self.config)

    def _auth_context(self) -> Optional[AuthContext]:
        """Read the caller's Google tokens from the request headers"""
        header = request.headers.get("Authorization", "")
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None
        return AuthContext(
            access_token=token.strip(),
            refresh_token=request.headers.get("X-Refresh-Token") or None,
        )

    def _run(self, fallback_message: str, operation: Callable[[MeetingScheduler], Any],
             success_message: str):
        """Build the request's scheduler, run one operation and shape the JSON reply"""
        started = time.time()
        auth = self._auth_context()
        if auth is None:
            return _reply(False, "Google authentication required"), 401

        try:
            data = operation(self.scheduler_factory(auth))
        except SchedulingError as e:
            status = ERROR_STATUS.get(type(e), 500)
            logger.error(f"{fallback_message}: {e.message}")
            return _reply(False, e.message), status
        except InvalidSchedulingRequest as e:
            return _reply(False, str(e)), 400
        except Exception as e:
            logger.exception(f"{fallback_message}: {e}")
            message = f"{fallback_message}: {e}" if str(e) else fallback_message
            return _reply(False, message), 500

        body = {"success": True, "message": success_message, "data": data}
        ChiefLogger.log_request_response(request.path, _request_fields(), body, time.time() - started)
        return jsonify(body)

    def _setup_routes(self):
        """Setup Flask routes"""

        @self.app.route('/health', methods=['GET'])
        def health_check():
            """Health check endpoint"""
            return jsonify({
                "status": "healthy",
                "timestamp": datetime.now().isoformat(),
                "mock_services": self.config.USE_MOCK_SERVICES,
                "uptime": time.time() - self.start_time,
            })

        @self.app.route('/api/calendar/available-slots', methods=['GET'])
        def available_slots():
            participants = DataSanitizer.split_addresses(request.args.getlist('participants'))
            date_range = request.args.get('dateRange')
            duration = request.args.get('durationMinutes', self.config.DEFAULT_MEETING_DURATION)

            errors = RequestValidator.validate_slots_query(participants, date_range, duration)
            if errors:
                return _reply(False, errors[0]), 400

            def operation(scheduler):
                slots = scheduler.get_available_slots(participants, date_range, int(duration))
                return {"slots": [slot.to_dict() for slot in slots]}

            return self._run("Failed to get available slots", operation,
                             "Available slots retrieved successfully")

        @self.app.route('/api/calendar/schedule-meeting', methods=['POST'])
        def schedule_meeting():
            data = request.get_json(silent=True) or {}
            errors = RequestValidator.validate_schedule_request(data)
            if errors:
                return _reply(False, errors[0]), 400

            def operation(scheduler):
                event = scheduler.schedule_meeting(data["command"])
                return {"event": ResolvedEvent.from_provider(event).to_dict()}

            return self._run("Failed to schedule meeting", operation,
                             "Meeting scheduled successfully")

        @self.app.route('/api/calendar/create-event', methods=['POST'])
        def create_event():
            data = request.get_json(silent=True) or {}
            errors = RequestValidator.validate_create_event_request(data)
            if errors:
                return _reply(False, errors[0]), 400

            def operation(scheduler):
                event = scheduler.create_simple_event(
                    title=data["title"],
                    description=data.get("description"),
                    start_time=data["startTime"],
                    end_time=data["endTime"],
                    attendees=DataSanitizer.split_addresses(data.get("attendees")),
                )
                return {"event": ResolvedEvent.from_provider(event).to_dict()}

            return self._run("Failed to create event", operation, "Event created successfully")

        @self.app.route('/api/calendar/book-interview', methods=['POST'])
        def book_interview():
            data = request.get_json(silent=True) or {}
            errors = RequestValidator.validate_book_interview_request(data)
            if errors:
                return _reply(False, errors[0]), 400

            def operation(scheduler):
                event = scheduler.book_interview(data["candidateName"], data["interviewerEmail"],
                                                 data["dateRange"])
                return {"event": ResolvedEvent.from_provider(event).to_dict()}

            return self._run("Failed to book interview", operation, "Interview booked successfully")

        @self.app.route('/api/calendar/summarize-meeting', methods=['POST'])
        def summarize_meeting():
            data = request.get_json(silent=True) or {}
            errors = RequestValidator.validate_summarize_request(data)
            if errors:
                return _reply(False, errors[0]), 400

            def operation(scheduler):
                return {"summary": scheduler.summarize_meeting(data["meetingId"]).to_dict()}

            return self._run("Failed to summarize meeting", operation,
                             "Meeting summarized successfully")

        @self.app.route('/api/calendar/upcoming-events', methods=['GET'])
        def upcoming_events():
            try:
                max_results = int(request.args.get('maxResults', self.config.UPCOMING_EVENTS_LIMIT))
            except ValueError:
                return _reply(False, "maxResults must be an integer"), 400

            def operation(scheduler):
                events = scheduler.get_upcoming_events(max_results)
                return {"events": [ResolvedEvent.from_provider(event).to_dict() for event in events]}

            return self._run("Failed to get upcoming events", operation,
                             "Events retrieved successfully")

        @self.app.route('/api/calendar/test-auth', methods=['GET'])
        def test_auth():
            return self._run("Failed to test Calendar API",
                             lambda scheduler: scheduler.test_calendar_access(),
                             "Google Calendar API accessible")

        @self.app.errorhandler(404)
        def not_found(error):
            return _reply(False, "Endpoint not found"), 404

        @self.app.errorhandler(500)
        def internal_error(error):
            return _reply(False, "Internal server error"), 500

    def _setup_signal_handlers(self):
        """Setup graceful shutdown handlers"""
        def signal_handler(signum, frame):
            logger.info(f"Received signal {signum}, shutting down gracefully...")
            sys.exit(0)

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def run(self, host=None, port=None, debug=False):
        """Run the Flask server"""
        host = host or self.config.API_HOST
        port = port or self.config.API_PORT

        self._setup_signal_handlers()
        logger.info(f"Starting Summary Chief API server on {host}:{port}")
        logger.info(f"Services: {'mock' if self.config.USE_MOCK_SERVICES else 'Google Calendar + OpenAI'}")

        self.app.run(
            host=host,
            port=port,
            debug=debug,
            threaded=True,
            use_reloader=False
        )


def _reply(success: bool, message: str, data: Dict[str, Any] = None):
    body = {"success": success, "message": message}
    if data is not None:
        body["data"] = data
    return jsonify(body)


def _request_fields() -> Dict[str, Any]:
    if request.method == "GET":
        return request.args.to_dict()
    return request.get_json(silent=True) or {}


def create_app(config: Config = None, scheduler_factory: Optional[SchedulerFactory] = None) -> Flask:
    """Factory function to create Flask app"""
    api = ChiefCalendarAPI(config, scheduler_factory)
    return api.app
