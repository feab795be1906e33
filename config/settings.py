"""
Configuration settings for the Summary Chief scheduler
"""
import os
from typing import Dict, List

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    # OpenAI chat completions
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
    OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL") or None
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "30"))
    LLM_MAX_RETRIES = 0  # failures surface immediately, nothing retries

    PARSE_TEMPERATURE = 0.1
    PARSE_MAX_TOKENS = 200
    SUMMARY_TEMPERATURE = 0.3
    SUMMARY_MAX_TOKENS = 500

    # Google OAuth client, used only to refresh per-request tokens
    GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID")
    GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET")
    GOOGLE_TOKEN_URI = os.getenv("GOOGLE_TOKEN_URI", "https://oauth2.googleapis.com/token")
    CALENDAR_ID = "primary"

    # Scheduling Configuration
    TIMEZONE = os.getenv("TIMEZONE", "UTC")
    WORKING_HOURS_START = 9   # 9 AM
    WORKING_HOURS_END = 17    # 5 PM
    SLOT_STEP_MINUTES = 30
    DEFAULT_MEETING_DURATION = 60  # minutes
    INTERVIEW_DURATION = 90  # minutes
    UPCOMING_EVENTS_LIMIT = 10

    # Fixed for every write, never per call
    REMINDER_OVERRIDES: List[Dict] = [
        {"method": "email", "minutes": 24 * 60},
        {"method": "popup", "minutes": 10},
    ]

    # API Configuration
    API_HOST = os.getenv("API_HOST", "0.0.0.0")
    API_PORT = int(os.getenv("API_PORT", "5000"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE") or None

    # In-memory calendar and canned LLM instead of Google/OpenAI
    USE_MOCK_SERVICES = _env_flag("USE_MOCK_SERVICES")

    # Slot output format, mirrors JavaScript's Date.toDateString()
    SLOT_DATE_FORMAT = "%a %b %d %Y"

    MEETING_COMMAND_PROMPT = """You are an AI assistant that parses natural language meeting requests. Extract the following information:
- meetingType: The type of meeting (interview, team meeting, client call, etc.)
- participants: Array of participant emails or names
- preferredDateRange: Preferred date range (e.g., "next week", "tomorrow", "this Friday")
- description: Brief description of the meeting purpose

Return only valid JSON with these fields."""

    MEETING_SUMMARY_PROMPT = """Summarize this meeting:

Meeting: {title}
Date: {date}
Notes: {notes}

Please provide:
1. A concise summary
2. Key points discussed
3. Action items
4. Next steps

Format as JSON with fields: summary, keyPoints, actionItems, nextSteps"""

    @classmethod
    def get_model_config(cls, model_name: str = None) -> Dict[str, object]:
        """Get chat completion settings for the configured OpenAI model"""
        return {
            "model": model_name or cls.OPENAI_MODEL,
            "api_key": cls.OPENAI_API_KEY,
            "base_url": cls.OPENAI_BASE_URL,
            "timeout": cls.LLM_TIMEOUT,
            "max_retries": cls.LLM_MAX_RETRIES,
        }

    @classmethod
    def get_oauth_client_config(cls) -> Dict[str, str]:
        """Client fields google-auth needs to refresh an access token"""
        return {
            "client_id": cls.GOOGLE_CLIENT_ID,
            "client_secret": cls.GOOGLE_CLIENT_SECRET,
            "token_uri": cls.GOOGLE_TOKEN_URI,
        }
