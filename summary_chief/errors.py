"""
Error taxonomy for the scheduling core

Every stage fails closed: the first error ends the request and nothing is
retried. The HTTP layer turns these into status codes.
"""


class SchedulingError(Exception):
    """Base class for scheduling failures with a user-visible message"""

    default_message = "Failed to schedule meeting"

    def __init__(self, provider_message: str = None):
        self.provider_message = provider_message
        self.message = self.default_message
        if provider_message:
            self.message = f"{self.default_message}: {provider_message}"
        super().__init__(self.message)


class SchedulingUnavailable(SchedulingError):
    """The free/busy query failed"""

    default_message = "Failed to get available slots"


class InterpretationFailed(SchedulingError):
    """The LLM call failed or its output was not the expected JSON shape"""

    default_message = "Failed to parse meeting command"


class NoAvailableSlot(SchedulingError):
    """No free slot exists in the requested window"""

    default_message = "No available time slots found"


class EventWriteFailed(SchedulingError):
    """The calendar write failed after a slot was chosen"""

    default_message = "Failed to create calendar event"


class CalendarAccessError(SchedulingError):
    """A calendar read outside slot finding failed"""

    default_message = "Failed to access calendar"


class InvalidSchedulingRequest(ValueError):
    """Caller input the scheduler cannot work with, reported as a bad request"""


def provider_message(error: Exception) -> str:
    """Best human-readable message from a provider exception"""
    # googleapiclient.errors.HttpError carries the API's reason separately
    reason = getattr(error, "reason", None)
    if isinstance(reason, str) and reason:
        return reason
    return str(error) or error.__class__.__name__
