"""Structured Logging — tests for the JSON formatter."""

import json
import logging

from decision_ledger.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="decision_ledger.test", level=logging.INFO, pathname=__file__,
        lineno=1, msg="Decision recorded", args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "decision_ledger.test"
    assert payload["message"] == "Decision recorded"
    assert "timestamp" in payload


def test_json_formatter_surfaces_ledger_fields():
    payload = json.loads(JSONFormatter().format(
        _record(actor_id="a", recipient_id="b", mutual_like=True),
    ))
    assert payload["actor_id"] == "a"
    assert payload["recipient_id"] == "b"
    assert payload["mutual_like"] is True


def test_json_formatter_skips_unknown_extras():
    payload = json.loads(JSONFormatter().format(_record(secret="x")))
    assert "secret" not in payload
