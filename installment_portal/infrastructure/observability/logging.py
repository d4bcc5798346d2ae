"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from installment_portal.config import settings
from installment_portal.utils.masking import mask_digits


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

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_login(request_id: str, suffix: str, outcome: str, duration_ms: float, customer_id: str | None = None) -> None:
    """Log login attempt outcome; the typed digits are masked"""
    logging.info(
        "Login completed",
        extra={
            "request_id": request_id,
            "step": "login",
            "suffix": mask_digits(suffix),
            "outcome": outcome,
            "customer_id": customer_id,
            "duration_ms": duration_ms,
        },
    )


def log_dashboard_load(
    request_id: str,
    customer_id: str,
    state: str,
    transaction_count: int,
    duration_ms: float,
) -> None:
    """Log dashboard load outcome"""
    logging.info(
        "Dashboard loaded",
        extra={
            "request_id": request_id,
            "customer_id": customer_id,
            "step": "dashboard_load",
            "state": state,
            "transaction_count": transaction_count,
            "duration_ms": duration_ms,
        },
    )
