"""
Tests for app/core/logging_config.py - formatters, context logger and request logging.
"""
import json
import logging

import pytest
from unittest.mock import patch

from app.core.logging_config import (
    ColoredFormatter,
    ContextLogger,
    JSONFormatter,
    RequestLoggingMiddleware,
    setup_logging,
)


def _record(msg="hello", level=logging.INFO, **extra):
    record = logging.LogRecord("employees.test", level, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:

    def test_basic_fields(self):
        data = json.loads(JSONFormatter("svc").format(_record()))

        assert data["message"] == "hello"
        assert data["level"] == "INFO"
        assert data["service"] == "svc"
        assert data["logger"] == "employees.test"
        assert "extra" not in data

    def test_extra_fields_are_collected(self):
        data = json.loads(JSONFormatter().format(_record(employee_id=3)))

        assert data["extra"] == {"employee_id": 3}

    def test_exception_info(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            import sys
            record = _record(level=logging.ERROR)
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))

        assert data["exception"]["type"] == "RuntimeError"
        assert data["exception"]["message"] == "boom"


class TestColoredFormatter:

    def test_contains_level_and_name(self):
        line = ColoredFormatter().format(_record(level=logging.WARNING))

        assert "WARNING" in line
        assert "employees.test" in line
        assert line.endswith(ColoredFormatter.RESET)


class TestContextLogger:

    def test_context_is_attached(self, caplog):
        logger = ContextLogger(logging.getLogger("employees.ctx"))
        logger.set_context(request_id="abc")

        with caplog.at_level(logging.INFO, logger="employees.ctx"):
            logger.info("loaded")

        assert caplog.records[-1].request_id == "abc"

    def test_clear_context(self, caplog):
        logger = ContextLogger(logging.getLogger("employees.ctx"))
        logger.set_context(request_id="abc")
        logger.clear_context()

        with caplog.at_level(logging.INFO, logger="employees.ctx"):
            logger.info("loaded")

        assert not hasattr(caplog.records[-1], "request_id")


class TestSetupLogging:

    def test_json_in_production(self):
        root = logging.getLogger()
        saved, saved_level = root.handlers[:], root.level
        try:
            with patch("app.core.logging_config.settings") as mock_settings:
                mock_settings.ENVIRONMENT = "production"
                mock_settings.LOG_LEVEL = "warning"
                mock_settings.DEBUG = False
                setup_logging()

            assert root.level == logging.WARNING
            assert isinstance(root.handlers[0].formatter, JSONFormatter)
        finally:
            root.handlers[:] = saved
            root.setLevel(saved_level)


class TestRequestLoggingMiddleware:

    @pytest.mark.asyncio
    async def test_logs_request_and_sets_header(self, caplog):
        sent = []

        async def app(scope, receive, send):
            await send({"type": "http.response.start", "status": 404, "headers": []})
            await send({"type": "http.response.body", "body": b""})

        async def send(message):
            sent.append(message)

        middleware = RequestLoggingMiddleware(app)
        scope = {"type": "http", "method": "GET", "path": "/api/v1/employees/9"}

        with caplog.at_level(logging.INFO, logger="employees.http"):
            await middleware(scope, None, send)

        assert scope["state"]["request_id"]
        assert (b"x-request-id", scope["state"]["request_id"].encode()) in sent[0]["headers"]
        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.status == 404
        assert "GET /api/v1/employees/9 404" in record.getMessage()
