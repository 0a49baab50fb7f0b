"""Structured Logging: JSON rendering of records and domain extras."""

import json
import logging

from cardealer.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "cardealer.services.car_service", logging.INFO, __file__, 1,
        "Car created: %s", ("1HGCM82633A004352",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_line_has_core_fields():
    line = json.loads(JSONFormatter().format(_record()))
    assert line["level"] == "INFO"
    assert line["logger"] == "cardealer.services.car_service"
    assert line["message"] == "Car created: 1HGCM82633A004352"
    assert "timestamp" in line


def test_json_line_includes_only_set_extras():
    line = json.loads(JSONFormatter().format(_record(entity="Car", entity_id=3)))
    assert line["entity"] == "Car"
    assert line["entity_id"] == 3
    assert "error_code" not in line


def test_setup_logging_replaces_root_handlers():
    previous = logging.root.handlers[:], logging.root.level
    try:
        setup_logging("debug", "text")
        setup_logging("warning", "json")
        assert len(logging.root.handlers) == 1
        assert isinstance(logging.root.handlers[0].formatter, JSONFormatter)
        assert logging.root.level == logging.WARNING
    finally:
        logging.root.handlers, level = previous
        logging.root.setLevel(level)
