"""
Tests for eventdesk.utils.logger — extra fields in formatted output.
"""

import logging

from eventdesk.utils.logger import ExtraFormatter, logger


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("eventdesk", logging.INFO, __file__, 1, "Deleted event", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_extra_fields_are_appended():
    line = ExtraFormatter(fmt="%(levelname)s | %(message)s").format(_record(event_id=7, count=2))
    assert line == "INFO | Deleted event | count=2 event_id=7"


def test_plain_record_is_unchanged():
    line = ExtraFormatter(fmt="%(message)s").format(_record())
    assert line == "Deleted event"


def test_logger_is_configured_once():
    assert logger.name == "eventdesk"
    assert len(logger.handlers) == 1
    assert not logger.propagate
