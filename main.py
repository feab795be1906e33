#!/usr/bin/env python3
"""
Main entry point for the Summary Chief scheduler

Runs the API server, prints free slots from the command line, or runs the
HTTP smoke tests against a running server.
"""

import json
import logging
import os

from config.settings import Config
from summary_chief.api.flask_server import ChiefCalendarAPI
from utils.logger import ChiefLogger


def run_server(host=None, port=None, debug=False):
    """Run the Flask API server"""
    ChiefLogger.setup_logging(log_level=Config.LOG_LEVEL, log_file=Config.LOG_FILE)
    logger = logging.getLogger(__name__)

    logger.info("Starting Summary Chief scheduler...")

    try:
        api = ChiefCalendarAPI()
        api.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")


def show_slots(participants, date_range, duration, access_token=None, refresh_token=None):
    """Print free slots for participants using the configured providers"""
    from summary_chief.ai_agent.llm_client import LLMClient
    from summary_chief.ai_agent.mock_llm_client import MockLLMClient
    from summary_chief.calendar.calendar_manager import CalendarManager
    from summary_chief.calendar.mock_calendar_manager import MockCalendarManager
    from summary_chief.models import AuthContext
    from summary_chief.scheduler.meeting_scheduler import MeetingScheduler

    ChiefLogger.setup_logging(log_level=Config.LOG_LEVEL)

    if Config.USE_MOCK_SERVICES:
        scheduler = MeetingScheduler(MockCalendarManager(), MockLLMClient())
    else:
        if not access_token:
            raise SystemExit("An access token is required (--access-token or GOOGLE_ACCESS_TOKEN)")
        auth = AuthContext(access_token=access_token, refresh_token=refresh_token)
        scheduler = MeetingScheduler(CalendarManager(auth), LLMClient())

    slots = scheduler.get_available_slots(participants, date_range, duration)
    print(json.dumps([slot.to_dict() for slot in slots], indent=2))
    return slots


def run_tests(api_url="http://localhost:5000", access_token=None):
    """Run HTTP smoke tests against a running server"""
    from tests.test_client import ChiefApiSmokeClient

    ChiefLogger.setup_logging(log_level="INFO")
    logger = logging.getLogger(__name__)

    logger.info(f"Running tests against {api_url}")

    client = ChiefApiSmokeClient(api_url, access_token=access_token or "smoke-test-token")
    results = client.run_test_suite()

    summary = results["summary"]
    print(f"\nTest Results:")
    print(f"  Total: {summary['total']}")
    print(f"  Passed: {summary['passed']}")
    print(f"  Failed: {summary['failed']}")
    print(f"  Success rate: {(summary['passed']/summary['total']*100) if summary['total'] > 0 else 0:.1f}%")
    print(f"  Avg response time: {summary['avg_response_time']:.2f}s")

    return results


def main():
    """Main CLI entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Summary Chief scheduler')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Server command
    server_parser = subparsers.add_parser('server', help='Run API server')
    server_parser.add_argument('--host', default=None, help='Host to bind to')
    server_parser.add_argument('--port', type=int, default=None, help='Port to bind to')
    server_parser.add_argument('--debug', action='store_true', help='Enable debug mode')

    # Slots command
    slots_parser = subparsers.add_parser('slots', help='Print available slots')
    slots_parser.add_argument('participants', nargs='+', help='Participant emails')
    slots_parser.add_argument('--range', dest='date_range', default='next week',
                              help='Date range phrase, e.g. "tomorrow"')
    slots_parser.add_argument('--duration', type=int, default=Config.DEFAULT_MEETING_DURATION,
                              help='Meeting length in minutes')
    slots_parser.add_argument('--access-token', default=os.getenv('GOOGLE_ACCESS_TOKEN'))
    slots_parser.add_argument('--refresh-token', default=os.getenv('GOOGLE_REFRESH_TOKEN'))

    # Test command
    test_parser = subparsers.add_parser('test', help='Run HTTP smoke tests')
    test_parser.add_argument('--url', default='http://localhost:5000', help='API URL to test')
    test_parser.add_argument('--access-token', default=os.getenv('GOOGLE_ACCESS_TOKEN'))

    args = parser.parse_args()

    if args.command == 'server':
        run_server(host=args.host, port=args.port, debug=args.debug)

    elif args.command == 'slots':
        show_slots(args.participants, args.date_range, args.duration,
                   args.access_token, args.refresh_token)

    elif args.command == 'test':
        run_tests(api_url=args.url, access_token=args.access_token)

    else:
        parser.print_help()


if __name__ == '__main__':
    main()
