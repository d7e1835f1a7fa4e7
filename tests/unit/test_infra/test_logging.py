"""Unit tests for logging formatters and lazy logger."""
from __future__ import annotations

import json
import logging
import sys

import pytest

from blog_service.infra.logging import JSONFormatter, get_lazy_logger


def make_record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("blog.test", logging.WARNING, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_fields(self):
        payload = json.loads(JSONFormatter().format(make_record()))

        assert payload["level"] == "WARNING"
        assert payload["logger"] == "blog.test"
        assert payload["message"] == "hello"
        assert payload["timestamp"].endswith("Z")

    def test_extra_and_static_fields(self):
        formatter = JSONFormatter(static={"service": "blog-service"})

        payload = json.loads(formatter.format(make_record(filter="where__id__foo")))

        assert payload["service"] == "blog-service"
        assert payload["filter"] == "where__id__foo"

    def test_single_line_with_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record()
            record.exc_info = sys.exc_info()

        line = JSONFormatter().format(record)

        assert "\n" not in line
        assert "ValueError" in json.loads(line)["exception"]


@pytest.mark.unit
class TestLazyLogger:
    """Tests for LazyLoggerAdapter."""

    def test_callable_not_evaluated_when_disabled(self, caplog):
        calls = []
        lazy = get_lazy_logger("blog.lazy.disabled")
        caplog.set_level(logging.INFO, logger="blog.lazy.disabled")

        lazy.debug(lambda: calls.append("called") or "expensive")

        assert calls == []

    def test_callable_evaluated_when_enabled(self, caplog):
        lazy = get_lazy_logger("blog.lazy.enabled")
        caplog.set_level(logging.DEBUG, logger="blog.lazy.enabled")

        lazy.debug(lambda: "computed message")
        lazy.debug("value: %s", lambda: 42)

        assert [r.getMessage() for r in caplog.records] == ["computed message", "value: 42"]

    def test_context_merged_into_extra(self, caplog):
        lazy = get_lazy_logger("blog.lazy.context", component="pagination")
        caplog.set_level(logging.INFO, logger="blog.lazy.context")

        lazy.info("composed", extra={"take": 5})

        record = caplog.records[-1]
        assert record.component == "pagination"
        assert record.take == 5
