"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from tradebill.config import settings


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


def log_receipt(
    request_id: str,
    bill_ids: list[int],
    amount: float,
    interest_paid: str,
) -> None:
    """Log structured receipt outcome for reconciliation"""
    logging.info(
        "Receipt recorded",
        extra={
            "request_id": request_id,
            "step": "receipt_recorded",
            "bill_ids": bill_ids,
            "amount": amount,
            "interest_paid": interest_paid,
        },
    )


def log_import(request_id: str, upload_name: str, imported: int, skipped: int) -> None:
    """Log structured CSV import outcome"""
    logging.info(
        "CSV import completed",
        extra={
            "request_id": request_id,
            "step": "csv_import",
            "upload_name": upload_name,
            "imported": imported,
            "skipped": skipped,
        },
    )
