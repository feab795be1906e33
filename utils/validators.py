"""
Validation utilities for the Summary Chief API
"""
import re
from typing import Any, Dict, Iterable, List, Union

from dateutil import parser as dtparse


class RequestValidator:
    """Validators for incoming API payloads; each returns a list of errors"""

    @staticmethod
    def validate_email(email: str) -> bool:
        """Validate email format"""
        email_pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        return bool(re.match(email_pattern, email))

    @staticmethod
    def validate_datetime(datetime_str: Any) -> bool:
        """Validate an ISO-8601 date-time string"""
        if not isinstance(datetime_str, str) or not datetime_str:
            return False
        try:
            dtparse.isoparse(datetime_str)
            return True
        except ValueError:
            return False

    @staticmethod
    def _missing(request_data: Dict[str, Any], fields: Iterable[str]) -> List[str]:
        return [field for field in fields if not request_data.get(field)]

    @staticmethod
    def validate_schedule_request(request_data: Dict[str, Any]) -> List[str]:
        command = request_data.get("command")
        if not isinstance(command, str) or not command.strip():
            return ["Meeting command is required"]
        return []

    @staticmethod
    def validate_create_event_request(request_data: Dict[str, Any]) -> List[str]:
        if RequestValidator._missing(request_data, ["title", "startTime", "endTime"]):
            return ["Title, start time, and end time are required"]

        errors = []
        for field in ["startTime", "endTime"]:
            if not RequestValidator.validate_datetime(request_data[field]):
                errors.append(f"Invalid {field}: {request_data[field]}. Expected an ISO-8601 date-time")

        if not errors:
            start = dtparse.isoparse(request_data["startTime"])
            end = dtparse.isoparse(request_data["endTime"])
            if (start.tzinfo is None) == (end.tzinfo is None) and end <= start:
                errors.append("End time must be after start time")

        attendees = request_data.get("attendees")
        if attendees is not None and not isinstance(attendees, (str, list)):
            errors.append("'attendees' must be a comma-separated string or a list")

        return errors

    @staticmethod
    def validate_slots_query(participants: List[str], date_range: Any, duration: Any) -> List[str]:
        if not participants or not date_range:
            return ["Participants and date range are required"]

        try:
            if int(duration) <= 0:
                return ["durationMinutes must be a positive integer"]
        except (TypeError, ValueError):
            return ["durationMinutes must be a positive integer"]
        return []

    @staticmethod
    def validate_book_interview_request(request_data: Dict[str, Any]) -> List[str]:
        if RequestValidator._missing(request_data, ["candidateName", "interviewerEmail", "dateRange"]):
            return ["Candidate name, interviewer email, and date range are required"]
        return []

    @staticmethod
    def validate_summarize_request(request_data: Dict[str, Any]) -> List[str]:
        if RequestValidator._missing(request_data, ["meetingId"]):
            return ["Meeting ID is required"]
        return []


class DataSanitizer:
    """Normalize list-like request fields"""

    @staticmethod
    def split_addresses(value: Union[str, List[str], None]) -> List[str]:
        """Split a comma-separated string or a list of them into trimmed entries"""
        if value is None:
            return []
        items = [value] if isinstance(value, str) else value

        result = []
        for item in items:
            for part in str(item).split(","):
                part = part.strip()
                if part:
                    result.append(part)
        return result
