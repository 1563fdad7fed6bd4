import io
import json

import pytest

from trayassist.logger import (
    Level,
    Logger,
    current_request_id,
    parse_level,
    request_id_context,
)


def _records(buf):
    return [json.loads(line) for line in buf.getvalue().splitlines()]


def _json_logger(**kwargs):
    buf = io.StringIO()
    return Logger(json_format=True, output=buf, **kwargs), buf


def test_default_level_is_info():
    buf = io.StringIO()
    logger = Logger(output=buf)
    logger.debug("hidden")
    logger.info("shown")
    out = buf.getvalue()
    assert "hidden" not in out
    assert "shown" in out


def test_json_with_source():
    logger, buf = _json_logger(level=Level.DEBUG, add_source=True)
    logger.debug("where")
    (record,) = _records(buf)
    assert record["level"] == "DEBUG"
    assert record["source"]["file"].endswith("test_logger.py")
    assert record["source"]["function"] == "test_json_with_source"


def test_all_methods_log():
    buf = io.StringIO()
    logger = Logger(level=Level.DEBUG, output=buf)
    logger.info("info message", key="value")
    logger.debug("debug message", key="value")
    logger.warn("warn message", key="value")
    logger.error("error message", key="value")
    out = buf.getvalue()
    for text in ("info message", "debug message", "warn message", "error message"):
        assert text in out


def test_text_format():
    buf = io.StringIO()
    Logger(output=buf).info("hello world", key="value", flag=True)
    line = buf.getvalue().strip()
    assert 'level=INFO msg="hello world" key=value flag=true' in line
    assert line.startswith("time=")


def test_bind_adds_attributes():
    logger, buf = _json_logger()
    logger.bind(component="test").info("msg")
    assert _records(buf)[0]["component"] == "test"


def test_with_group_nests_attributes():
    logger, buf = _json_logger()
    logger.bind(top=1).with_group("request").bind(method="GET").info("msg", id=7)
    (record,) = _records(buf)
    assert record["top"] == 1
    assert record["request"] == {"method": "GET", "id": 7}


def test_with_group_in_text_uses_dotted_keys():
    buf = io.StringIO()
    Logger(output=buf).with_group("request").info("msg", id=7)
    assert "request.id=7" in buf.getvalue()


def test_with_request_id():
    logger, buf = _json_logger()
    logger.with_request_id("req-123").info("test message")
    assert _records(buf)[0]["request_id"] == "req-123"


def test_with_tool():
    logger, buf = _json_logger()
    logger.with_tool("youtube_download").info("test message")
    assert _records(buf)[0]["tool"] == "youtube_download"


def test_with_platform():
    logger, buf = _json_logger()
    logger.with_platform("discord").info("test message")
    assert _records(buf)[0]["platform"] == "discord"


def test_sensitive_keys_are_redacted():
    logger, buf = _json_logger()
    password = "password"
    logger.info("test", api_key="placeholder")
    logger.info("test", password=password)
    logger.info("test", token="token")
    logger.info("test", channel_secret="secret")
    records = _records(buf)
    assert records[0]["api_key"] == "[REDACTED]"
    assert records[1]["password"] == "[REDACTED]"
    assert records[2]["token"] == "[REDACTED]"
    assert records[3]["channel_secret"] == "[REDACTED]"
    assert "placeholder" not in buf.getvalue()


def test_sensitive_values_are_redacted():
    logger, buf = _json_logger()
    logger.info("test", data="api_key=placeholder")
    logger.info("test", message="token: placeholder")
    logger.info("test", config="password=placeholder")
    records = _records(buf)
    assert [r[k] for r, k in zip(records, ("data", "message", "config"))] == ["[REDACTED]"] * 3
    assert "placeholder" not in buf.getvalue()


def test_word_boundary_prevents_false_positives():
    logger, buf = _json_logger()
    logger.info("test", author="John Doe")
    logger.info("test", custom_field="my_custom_api_key_value")
    records = _records(buf)
    assert records[0]["author"] == "John Doe"
    assert records[1]["custom_field"] == "my_custom_api_key_value"


def test_bearer_values_are_redacted():
    logger, buf = _json_logger()
    logger.info("auth header", value="Bearer token")
    logger.info("auth header", value="bearer token")
    records = _records(buf)
    assert [r["value"] for r in records] == ["[REDACTED]", "[REDACTED]"]
    assert records[0]["msg"] == "auth header"


def test_non_sensitive_data_kept():
    logger, buf = _json_logger()
    logger.info("test", user_id="12345", action="download")
    (record,) = _records(buf)
    assert record["user_id"] == "12345"
    assert record["action"] == "download"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("debug", Level.DEBUG),
        ("info", Level.INFO),
        ("warn", Level.WARN),
        ("error", Level.ERROR),
        ("unknown", Level.INFO),
        ("", Level.INFO),
    ],
)
def test_parse_level(name, expected):
    assert parse_level(name) == expected


def test_level_from_string():
    buf = io.StringIO()
    logger = Logger(level="warn", output=buf)
    logger.debug("debug message")
    logger.info("info message")
    logger.warn("warn message")
    out = buf.getvalue()
    assert "debug message" not in out
    assert "info message" not in out
    assert "warn message" in out


def test_request_id_context():
    with request_id_context("test-request-id") as rid:
        assert rid == "test-request-id"
        assert current_request_id() == "test-request-id"
    assert current_request_id() == ""


def test_request_id_empty_by_default():
    assert current_request_id() == ""


def test_structured_json_output():
    logger, buf = _json_logger()
    logger.info("structured test", count=42, enabled=True)
    (record,) = _records(buf)
    assert record["msg"] == "structured test"
    assert record["count"] == 42
    assert record["enabled"] is True
    assert record["level"] == "INFO"