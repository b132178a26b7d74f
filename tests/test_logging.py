"""Tests for structured and audit logging."""

import logging

import pytest

from clinic.core.logging import StructuredFormatter, audit_logger


def test_audit_entry_carries_action_actor_and_entity(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="audit"):
        audit_logger.log(
            "appointment_booked", 7, "appointment", 42, metadata={"doctor_id": 3}
        )

    record = caplog.records[-1]
    assert record.action == "appointment_booked"
    assert record.user_id == 7
    assert record.entity == "appointment:42"
    assert "metadata={'doctor_id': 3}" in record.getMessage()


def test_structured_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord(
        name="audit",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="AUDIT: patient_registered",
        args=(),
        exc_info=None,
    )
    record.action = "patient_registered"
    record.user_id = 1
    record.entity = "patient:5"

    line = StructuredFormatter().format(record)

    assert "level=INFO" in line
    assert "action=patient_registered" in line
    assert "user_id=1" in line
    assert "entity=patient:5" in line
