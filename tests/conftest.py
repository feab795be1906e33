"""
Shared fixtures for the scheduler tests
"""
from datetime import datetime, timezone

import pytest

from config.settings import Config
from summary_chief.ai_agent.mock_llm_client import MockLLMClient
from summary_chief.calendar.mock_calendar_manager import MockCalendarManager
from summary_chief.scheduler.meeting_scheduler import MeetingScheduler

# Wednesday
FIXED_NOW = datetime(2024, 1, 3, 15, 30, tzinfo=timezone.utc)


class UtcConfig(Config):
    TIMEZONE = "UTC"
    USE_MOCK_SERVICES = True


def utc(day, hour, minute=0):
    return datetime(2024, 1, day, hour, minute, tzinfo=timezone.utc)


@pytest.fixture
def config():
    return UtcConfig()


@pytest.fixture
def calendar():
    return MockCalendarManager()


@pytest.fixture
def llm():
    return MockLLMClient()


@pytest.fixture
def scheduler(calendar, llm, config):
    return MeetingScheduler(calendar, llm, config, clock=lambda: FIXED_NOW)
