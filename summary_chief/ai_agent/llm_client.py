"""
OpenAI chat completions client for the Summary Chief scheduler
"""
import json
import logging
import time
from typing import Any, Dict, List, Optional

from openai import OpenAI

from config.settings import Config
from summary_chief.models import MeetingSummary

logger = logging.getLogger(__name__)


class LLMClient:
    """Thin wrapper around chat completions with summary fallback handling"""

    def __init__(self, model_name: str = None, client: OpenAI = None, config: Config = None):
        self.config = config or Config()
        self.model_config = self.config.get_model_config(model_name)
        self.model_name = self.model_config["model"]

        self.client = client or OpenAI(
            api_key=self.model_config["api_key"],
            base_url=self.model_config["base_url"],
            timeout=self.model_config["timeout"],
            max_retries=self.model_config["max_retries"],
        )

        logger.info(f"Initialized OpenAI client: {self.model_name}")

    def complete(self, system_prompt: Optional[str], user_prompt: str,
                 temperature: float = None, max_tokens: int = None) -> str:
        """
        Run one chat completion and return the message content.

        openai.OpenAIError propagates to the caller; an empty completion is
        returned as an empty string.
        """
        messages: List[Dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})

        start_time = time.time()
        completion = self.client.chat.completions.create(
            model=self.model_name,
            messages=messages,
            temperature=self.config.PARSE_TEMPERATURE if temperature is None else temperature,
            max_tokens=max_tokens or self.config.PARSE_MAX_TOKENS,
        )
        logger.info(f"{self.model_name} chat completion: {time.time() - start_time:.2f}s")

        if not completion.choices:
            return ""
        return (completion.choices[0].message.content or "").strip()

    def generate_meeting_summary(self, event: Dict[str, Any], notes: str) -> MeetingSummary:
        """Summarize a meeting, falling back to a default summary on unusable output"""
        prompt = self.config.MEETING_SUMMARY_PROMPT.format(
            title=event.get("summary", "Untitled meeting"),
            date=event.get("start", {}).get("dateTime") or event.get("start", {}).get("date", "unknown"),
            notes=notes,
        )

        try:
            response = self.complete(
                None, prompt,
                temperature=self.config.SUMMARY_TEMPERATURE,
                max_tokens=self.config.SUMMARY_MAX_TOKENS,
            )
        except Exception as e:
            logger.warning(f"Meeting summary request failed, using fallback summary: {e}")
            return self._fallback_summary(event)

        parsed = self._extract_json_by_braces(response) if response else None
        if not isinstance(parsed, dict) or not isinstance(parsed.get("summary"), str):
            logger.warning("Meeting summary response was not usable JSON, using fallback summary")
            return self._fallback_summary(event)

        return MeetingSummary(
            summary=parsed["summary"],
            key_points=_string_list(parsed.get("keyPoints")),
            action_items=_string_list(parsed.get("actionItems")),
            next_steps=_string_list(parsed.get("nextSteps")),
        )

    def _extract_json_by_braces(self, response: str) -> Optional[Dict[str, Any]]:
        """Extract the first balanced JSON object from a response"""
        start = response.find('{')
        if start == -1:
            return None

        brace_count = 0
        for i, char in enumerate(response[start:], start):
            if char == '{':
                brace_count += 1
            elif char == '}':
                brace_count -= 1
                if brace_count == 0:
                    try:
                        return json.loads(response[start:i + 1])
                    except json.JSONDecodeError as e:
                        logger.debug(f"JSON extraction failed: {e}")
                        return None
        return None

    def _fallback_summary(self, event: Dict[str, Any]) -> MeetingSummary:
        title = event.get("summary", "this meeting")
        return MeetingSummary(
            summary=f"Summary unavailable for {title}.",
            key_points=[],
            action_items=[],
            next_steps=["Review the meeting notes manually"],
        )


def _string_list(value: Any) -> List[str]:
    if isinstance(value, list):
        return [str(item) for item in value]
    if isinstance(value, str) and value:
        return [value]
    return []
