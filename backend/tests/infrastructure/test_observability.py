"""Logging — JSON and text formatters carry the request context fields."""

import json
import logging

from librario.infrastructure.observability import (
    ContextTextFormatter, JSONFormatter, log_context, setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "librario.test", logging.WARNING, __file__, 1, "Book %s missing", ("999",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_base_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "WARNING"
    assert out["logger"] == "librario.test"
    assert out["message"] == "Book 999 missing"
    assert "timestamp" in out


def test_json_formatter_surfaces_known_extras_only():
    out = json.loads(JSONFormatter().format(
        _record(book_id=999, error_code="RESOURCE_NOT_FOUND", password="x"),
    ))
    assert out["book_id"] == 999
    assert out["error_code"] == "RESOURCE_NOT_FOUND"
    assert "password" not in out


def test_log_context_keeps_field_order_and_skips_none():
    record = _record(path="/libros", user_id=3, review_id=None)
    assert list(log_context(record).items()) == [("user_id", 3), ("path", "/libros")]


def test_text_formatter_appends_context():
    line = ContextTextFormatter().format(_record(book_id=7, operation="find_book"))
    assert line.endswith("librario.test: Book 999 missing [book_id=7 operation=find_book]")


def test_text_formatter_without_context_is_plain():
    assert ContextTextFormatter().format(_record()).endswith("Book 999 missing")


def test_setup_logging_replaces_its_own_handler():
    root = logging.getLogger()
    level = root.level
    try:
        setup_logging("DEBUG", "text")
        setup_logging("WARNING", "json")
        ours = [h for h in root.handlers if h.get_name() == "librario"]
        assert len(ours) == 1
        assert isinstance(ours[0].formatter, JSONFormatter)
        assert root.level == logging.WARNING
    finally:
        for handler in [h for h in root.handlers if h.get_name() == "librario"]:
            root.removeHandler(handler)
        root.setLevel(level)
