"""LLM clients and the meeting command interpreter"""

from .meeting_interpreter import MeetingCommandInterpreter

__all__ = ['MeetingCommandInterpreter']
