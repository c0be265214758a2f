"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO
from pythonjsonlogger import jsonlogger

from rewards_service.config import settings

# Third-party loggers that emit an INFO line per scheduled run or request
NOISY_LOGGERS = ("apscheduler.executors.default", "apscheduler.scheduler")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Adds UTC timestamp, level and service name to every record"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """Route the root logger to a single JSON handler"""
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_rewards_query(
    request_id: str,
    customer_id: int,
    total_points: int,
    months: int,
    duration_ms: float,
) -> None:
    logging.getLogger("rewards_service.queries").info(
        "Rewards query completed",
        extra={
            "request_id": request_id,
            "customer_id": customer_id,
            "step": "rewards_complete",
            "total_points": total_points,
            "months": months,
            "duration_ms": duration_ms,
        },
    )


def log_cache_invalidation(dropped: int, interval_ms: int) -> None:
    logging.getLogger("rewards_service.cache").info(
        "Rewards cache cleared",
        extra={"step": "cache_clear", "dropped_entries": dropped, "next_clear_ms": interval_ms},
    )
