"""Tests for structured logging helpers."""

import logging

from app.core.logging import (
    StructuredFormatter,
    log_with_context,
    mask_email,
    mask_name,
    mask_phone,
    new_request_id,
)


def _record(msg: str = "PDF generated", **attrs) -> logging.LogRecord:
    record = logging.LogRecord("app.core.pdf_service", logging.INFO, __file__, 10, msg, None, None)
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


def test_request_id_and_fields_formatted():
    line = StructuredFormatter().format(
        _record(request_id="abc123def456", extra_data={"pdf_bytes": 2048, "student": "A.R."})
    )

    assert "level=INFO" in line
    assert 'message="PDF generated"' in line
    assert "request_id=abc123def456 pdf_bytes=2048 student=A.R." in line


def test_record_without_request_id():
    line = StructuredFormatter().format(_record("ready"))

    assert "request_id" not in line
    assert line.endswith("message=ready")


def test_log_with_context_sets_request_id(caplog):
    logger = logging.getLogger("tests.logging")

    with caplog.at_level(logging.INFO, logger="tests.logging"):
        log_with_context(logger, logging.INFO, "Lead logged", request_id="rid-1", rows_scanned=3)

    record = caplog.records[-1]
    assert record.request_id == "rid-1"
    assert record.extra_data == {"rows_scanned": 3}


def test_new_request_id_is_unique():
    first, second = new_request_id(), new_request_id()

    assert len(first) == 12
    assert first != second


def test_contact_details_masked():
    assert mask_email("asha@example.com") == "a***@example.com"
    assert mask_email("not-an-email") == "***"
    assert mask_phone("+91 98765 43210") == "***3210"
    assert mask_phone("") == "***"
    assert mask_name("Asha  Rao") == "A.R."
    assert mask_name("") == "***"
