"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from loan_portfolio.config import settings

# Third-party loggers that are noisy at INFO
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """
    Route all logging through one JSON handler on stdout.

    RequestIDMiddleware writes the access log, so uvicorn's is silenced.
    """
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_loan_event(
    request_id: str,
    loan_id: str,
    event: str,
    **fields: Any,
) -> None:
    """Log a structured loan lifecycle event (created, updated, deleted, ...)"""
    logging.info(
        f"Loan {event}",
        extra={
            "request_id": request_id,
            "loan_id": loan_id,
            "step": f"loan_{event}",
            **fields,
        },
    )
