"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from revolving_calc.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_rules_resolved(source: str, tier_count: int, duration_ms: float) -> None:
    """Log which rule format was loaded for the session"""
    logging.info(
        "Rules resolved",
        extra={
            "step": "rules_resolved",
            "source": source,
            "tier_count": tier_count,
            "duration_ms": duration_ms,
        },
    )


def log_schedule(
    session_id: str,
    status: str,
    tier_id: str | None,
    months: int,
    duration_ms: float,
) -> None:
    """Log structured schedule outcome for analysis"""
    logging.info(
        "Schedule computed",
        extra={
            "session_id": session_id,
            "step": "schedule_complete",
            "status": status,
            "tier_id": tier_id,
            "months": months,
            "duration_ms": duration_ms,
        },
    )
