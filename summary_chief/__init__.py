"""
Summary Chief - calendar scheduling backend for the productivity dashboard

This package provides the scheduling core that:
- Finds free meeting slots across participants' calendars
- Parses natural language meeting commands with an LLM
- Writes events with invitations through Google Calendar
- Summarizes past meetings back into the event description
"""

__version__ = "1.0.0"
__author__ = "Summary Chief Team"
