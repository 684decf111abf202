from __future__ import annotations

import json
import logging

from mock_factory.utils.logging import JsonFormatter, _json_formatter, configure_logging

EXPECTED_COUNT = 10
EXPECTED_START_ID = 3


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hello",
        args=(),
        exc_info=None,
    )


def test_json_formatter_promotes_standard_extra_fields() -> None:
    record = _record()
    record.count = EXPECTED_COUNT
    record.factory = "user"

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["count"] == EXPECTED_COUNT
    assert payload["factory"] == "user"
    assert "pathname" not in payload


def test_json_formatter_supports_legacy_nested_extra_field() -> None:
    record = _record()
    record.extra = {"start_id": EXPECTED_START_ID}

    payload = json.loads(_json_formatter(record))

    assert payload["start_id"] == EXPECTED_START_ID
    assert "extra" not in payload


def test_json_formatter_stringifies_unserializable_values() -> None:
    record = _record()
    record.attrs = {"name", "role"}

    payload = json.loads(_json_formatter(record))

    assert isinstance(payload["attrs"], str)


def test_configure_logging_selects_json_formatter() -> None:
    configure_logging(level="debug", json_logs=True)
    root = logging.getLogger()

    assert root.level == logging.DEBUG
    assert isinstance(root.handlers[0].formatter, JsonFormatter)

    configure_logging(level="WARNING")
    assert not isinstance(logging.getLogger().handlers[0].formatter, JsonFormatter)
