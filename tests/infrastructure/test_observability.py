"""Structured logging — JSON output and handler setup."""

import json
import logging

from postfeed.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "postfeed.test", logging.INFO, __file__, 1, "Post %s", ("liked",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_base_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "postfeed.test"
    assert payload["message"] == "Post liked"
    assert "timestamp" in payload


def test_json_formatter_surfaces_known_extras_only():
    payload = json.loads(JSONFormatter().format(
        _record(post_id="p-1", user_id="u-1", unrelated="nope"),
    ))
    assert payload["post_id"] == "p-1"
    assert payload["user_id"] == "u-1"
    assert "unrelated" not in payload


def test_setup_logging_is_idempotent():
    before = len(logging.root.handlers)
    first = setup_logging("DEBUG", "json")
    second = setup_logging("INFO", "text")
    try:
        assert len(logging.root.handlers) == before + 1
        assert first not in logging.root.handlers
        assert not isinstance(second.formatter, JSONFormatter)
        assert logging.root.level == logging.INFO
    finally:
        logging.root.removeHandler(second)


def test_upload_log_extra_reaches_json_output(caplog):
    caplog.set_level(logging.INFO, logger="postfeed.uploads")
    logging.getLogger("postfeed.uploads").info(
        "Stored upload", extra={"stored_name": "1ok.jpg"},
    )
    payload = json.loads(JSONFormatter().format(caplog.records[-1]))
    assert payload["stored_name"] == "1ok.jpg"
