"""
Mock LLM Client for running without OpenAI access
"""
import json
import logging
import re
from typing import Any, Dict, List, Optional

from summary_chief.models import MeetingSummary

logger = logging.getLogger(__name__)

EMAIL_PATTERN = r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b'

DATE_RANGE_PHRASES = ["next week", "tomorrow", "this week", "this Friday"]

MEETING_TYPES = [
    ("interview", "interview"),
    ("client", "client call"),
    ("standup", "standup"),
    ("sync", "sync"),
    ("review", "review"),
]


class MockLLMClient:
    """
    Offline stand-in for LLMClient.

    Replays queued responses when given, otherwise builds a meeting command
    JSON answer with simple regex patterns.
    """

    def __init__(self, responses: Optional[List[str]] = None, fail_with: Optional[Exception] = None):
        self.model_name = "mock-llm"
        self.responses = list(responses or [])
        self.fail_with = fail_with
        self.calls: List[Dict[str, Any]] = []
        logger.info(f"Initialized Mock LLM client: {self.model_name}")

    def complete(self, system_prompt: Optional[str], user_prompt: str,
                 temperature: float = None, max_tokens: int = None) -> str:
        self.calls.append({"system_prompt": system_prompt, "user_prompt": user_prompt})
        if self.fail_with is not None:
            raise self.fail_with
        if self.responses:
            return self.responses.pop(0)
        return json.dumps(self._parse_command(user_prompt))

    def _parse_command(self, command: str) -> Dict[str, Any]:
        logger.info("MOCK: Parsing meeting command")
        content_lower = command.lower()

        participants = re.findall(EMAIL_PATTERN, command)

        date_range = "flexible"
        for phrase in DATE_RANGE_PHRASES:
            if phrase.lower() in content_lower:
                date_range = phrase
                break

        meeting_type = "meeting"
        for keyword, label in MEETING_TYPES:
            if keyword in content_lower:
                meeting_type = label
                break

        about = re.search(r'(?:about|to discuss|regarding)\s+([^.!?\n]+)', command, re.IGNORECASE)

        return {
            "meetingType": meeting_type,
            "participants": participants,
            "preferredDateRange": date_range,
            "description": about.group(1).strip() if about else None,
        }

    def generate_meeting_summary(self, event: Dict[str, Any], notes: str) -> MeetingSummary:
        self.calls.append({"system_prompt": None, "user_prompt": notes})
        title = event.get("summary", "Meeting")
        return MeetingSummary(
            summary=f"Mock summary of {title}.",
            key_points=[f"Discussed {title}"],
            action_items=["Share notes with attendees"],
            next_steps=["Schedule a follow-up"],
        )
