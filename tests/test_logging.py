"""
Tests for structured logging.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from docbuild.logging import (
    JSONFormatter,
    get_logger,
    get_namespace,
    get_session_id,
    log_context,
    setup_logging,
)


class TestLogContext:
    """Test scoped context variables."""

    def test_context_set_and_restored(self) -> None:
        assert get_session_id() is None

        with log_context(session_id="session_abc", namespace="partials"):
            assert get_session_id() == "session_abc"
            assert get_namespace() == "partials"
            with log_context(namespace="tooltips"):
                assert get_session_id() == "session_abc"
                assert get_namespace() == "tooltips"
            assert get_namespace() == "partials"

        assert get_session_id() is None
        assert get_namespace() is None


class TestJSONFormatter:
    """Test JSON-lines output."""

    def test_format_includes_context_and_extra(self) -> None:
        record = logging.LogRecord(
            name="docbuild.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="invalidating %s",
            args=("/docs/a.mdx",),
            exc_info=None,
        )
        record.extra = {"key": "a"}

        with log_context(session_id="session_1"):
            payload = json.loads(JSONFormatter().format(record))

        assert payload["message"] == "invalidating /docs/a.mdx"
        assert payload["level"] == "INFO"
        assert payload["session_id"] == "session_1"
        assert payload["extra"] == {"key": "a"}


class TestSetupLogging:
    """Test handler installation."""

    def test_file_logging(self, temp_dir: Path) -> None:
        log_file = temp_dir / "logs" / "build.jsonl"
        setup_logging(log_level="DEBUG", log_file=log_file, console_output=False)
        try:
            get_logger("cache.test").debug("Evicted", key="/docs/a.mdx")
            for handler in logging.getLogger("docbuild").handlers:
                handler.flush()

            lines = log_file.read_text(encoding="utf-8").splitlines()
            entry = json.loads(lines[-1])
            assert entry["logger"] == "docbuild.cache.test"
            assert entry["extra"]["key"] == "/docs/a.mdx"
        finally:
            for handler in logging.getLogger("docbuild").handlers:
                handler.close()
            setup_logging()
