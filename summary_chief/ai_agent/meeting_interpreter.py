"""
Natural-language meeting command interpretation
"""
import json
import logging
from typing import Any

from config.settings import Config
from summary_chief.errors import InterpretationFailed, provider_message
from summary_chief.models import MeetingRequest

logger = logging.getLogger(__name__)


class MeetingCommandInterpreter:
    """
    Turns a scheduling instruction into a MeetingRequest through the LLM.

    There is no fallback object here: an LLM failure or a response that is
    not the expected JSON shape raises InterpretationFailed.
    """

    def __init__(self, llm_client, config: Config = None):
        self.llm_client = llm_client
        self.config = config or Config()

    def interpret(self, command: str) -> MeetingRequest:
        try:
            response = self.llm_client.complete(
                self.config.MEETING_COMMAND_PROMPT,
                command,
                temperature=self.config.PARSE_TEMPERATURE,
                max_tokens=self.config.PARSE_MAX_TOKENS,
            )
        except Exception as e:
            logger.error(f"Error parsing meeting command: {e}")
            raise InterpretationFailed(provider_message(e)) from e

        if not response:
            logger.error("Empty response for meeting command")
            raise InterpretationFailed()

        try:
            data = json.loads(response)
        except json.JSONDecodeError as e:
            logger.error(f"Meeting command response is not JSON: {e}")
            raise InterpretationFailed() from e

        request = parse_meeting_request(data)
        logger.info(f"Parsed meeting command: {request.meeting_type} with "
                    f"{len(request.participants)} participants, range '{request.preferred_date_range}'")
        return request


def parse_meeting_request(data: Any) -> MeetingRequest:
    """Check the JSON shape of an interpreted command and build the request"""
    if not isinstance(data, dict):
        raise InterpretationFailed()

    meeting_type = data.get("meetingType")
    participants = data.get("participants")
    date_range = data.get("preferredDateRange")
    description = data.get("description")

    if not isinstance(meeting_type, str):
        raise InterpretationFailed()
    if not isinstance(participants, list) or not all(isinstance(p, str) for p in participants):
        raise InterpretationFailed()
    if not isinstance(date_range, str):
        raise InterpretationFailed()
    if description is not None and not isinstance(description, str):
        raise InterpretationFailed()

    return MeetingRequest(
        meeting_type=meeting_type,
        participants=participants,
        preferred_date_range=date_range,
        description=description,
    )
