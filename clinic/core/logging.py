"""Structured logging configuration."""

import logging
import sys
from typing import Any

from clinic.core.config import settings


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured log output."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with structured data."""
        # Base format
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add extra fields if present
        if hasattr(record, "user_id"):
            log_data["user_id"] = record.user_id
        if hasattr(record, "action"):
            log_data["action"] = record.action
        if hasattr(record, "entity"):
            log_data["entity"] = record.entity

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Simple key=value format for readability
        parts = [f"{k}={v}" for k, v in log_data.items()]
        return " ".join(parts)


def setup_logging() -> None:
    """Configure application logging."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Create console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    # Human-readable in dev, key=value everywhere else
    if settings.is_dev:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    else:
        formatter = StructuredFormatter()

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)


class AuditLogger:
    """Logger for business actions on patient, doctor and appointment records.

    Entries are log records only; nothing is written to the database.
    """

    def __init__(self) -> None:
        self.logger = get_logger("audit")

    def log(
        self,
        action: str,
        actor_id: int | str | None,
        entity_type: str,
        entity_id: int | str | None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Log an audit event.

        Args:
            action: What happened, e.g. ``appointment_booked``
            actor_id: Id of the authenticated user, or None for anonymous calls
            entity_type: Kind of record acted on
            entity_id: Id of that record, if one exists
            metadata: Extra context included in the line
        """
        entity = f"{entity_type}:{entity_id}"
        self.logger.info(
            f"AUDIT: action={action} actor=user:{actor_id} "
            f"entity={entity} metadata={metadata or {}}",
            extra={"action": action, "user_id": actor_id, "entity": entity},
        )


audit_logger = AuditLogger()
