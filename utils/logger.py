"""
Logging utilities for the Summary Chief scheduler
"""
import logging
import sys
from datetime import datetime
import json


class ChiefLogger:
    """Logging setup shared by the server and the CLI"""

    @staticmethod
    def setup_logging(log_level: str = "INFO", log_file: str = None):
        """Setup logging configuration"""

        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        # Setup root logger
        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, log_level.upper()))

        # Clear existing handlers
        root_logger.handlers.clear()

        # Console handler
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        # File handler (if specified)
        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        # Suppress some noisy loggers
        logging.getLogger('urllib3').setLevel(logging.WARNING)
        logging.getLogger('googleapiclient').setLevel(logging.WARNING)
        logging.getLogger('httpx').setLevel(logging.WARNING)
        logging.getLogger('openai').setLevel(logging.WARNING)

        return root_logger

    @staticmethod
    def log_request_response(endpoint: str, request_data: dict,
                             response_data: dict, processing_time: float):
        """Log a compact request/response summary for one API call"""
        logger = logging.getLogger(__name__)

        data = response_data.get("data") or {}
        log_entry = {
            "timestamp": datetime.now().isoformat(),
            "endpoint": endpoint,
            "processing_time_seconds": round(processing_time, 3),
            "request_fields": sorted(request_data.keys()),
            "response_summary": {
                "success": response_data.get("success"),
                "message": response_data.get("message"),
                "event_id": (data.get("event") or {}).get("id"),
                "slot_count": len(data["slots"]) if "slots" in data else None,
            }
        }

        logger.info(f"Request processed: {json.dumps(log_entry)}")
