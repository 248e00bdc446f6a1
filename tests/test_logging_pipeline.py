"""Tests for structured logging pipeline utilities."""

from __future__ import annotations

import io
import json
import logging
from logging.handlers import QueueListener
from queue import Queue
from typing import Any, cast

import pytest

from greendex import logging_pipeline
from greendex.settings import GreendexSettings


def _settings(**overrides: object) -> GreendexSettings:
    return GreendexSettings().model_copy(update=overrides)


def test_configure_logging_emits_json() -> None:
    """Configure structured logging and verify JSON payloads are emitted."""

    logger = logging.getLogger("greendex-json-test")
    listener = logging_pipeline.configure_logging(
        logger, _settings(log_format="json"), session_id="session-123"
    )

    assert listener.handlers
    stream_handler = cast(logging.StreamHandler[Any], listener.handlers[0])
    buffer = io.StringIO()
    stream_handler.setStream(buffer)

    logger.info("submitted", extra={"total_co2": 12.5})
    logging_pipeline.shutdown_listeners([listener], logger)

    payload = json.loads(buffer.getvalue().strip())
    assert payload["message"] == "submitted"
    assert payload["level"] == "INFO"
    assert payload["session_id"] == "session-123"
    assert payload["context"]["total_co2"] == 12.5
    assert not logger.handlers


def test_configure_logging_generates_session_id() -> None:
    """When the session ID is omitted a random identifier is emitted."""

    logger = logging.getLogger("greendex-auto-session")
    listener = logging_pipeline.configure_logging(logger, _settings(log_format="json"))

    stream_handler = cast(logging.StreamHandler[Any], listener.handlers[0])
    buffer = io.StringIO()
    stream_handler.setStream(buffer)

    logger.warning("auto-session")
    logging_pipeline.shutdown_listeners([listener], logger)

    payload = json.loads(buffer.getvalue())
    assert isinstance(payload["session_id"], str) and payload["session_id"]


def test_configure_logging_text_format_and_level() -> None:
    """Text output uses plain lines and honours the configured level."""

    logger = logging.getLogger("greendex-text-test")
    listener = logging_pipeline.configure_logging(
        logger, _settings(log_format="text", log_level="WARNING")
    )

    stream_handler = cast(logging.StreamHandler[Any], listener.handlers[0])
    buffer = io.StringIO()
    stream_handler.setStream(buffer)

    logger.info("hidden")
    logger.warning("visible")
    logging_pipeline.shutdown_listeners([listener], logger)

    output = buffer.getvalue()
    assert "hidden" not in output
    assert "WARNING greendex-text-test: visible" in output


def test_shutdown_listeners_logs_failures(caplog: pytest.LogCaptureFixture) -> None:
    """Listener shutdown failures should emit warnings."""

    class _FailingListener(QueueListener):
        def __init__(self) -> None:
            super().__init__(Queue(), logging.StreamHandler())

        def stop(self) -> None:
            raise RuntimeError("stop failure")

    with caplog.at_level(logging.WARNING):
        logging_pipeline.shutdown_listeners([_FailingListener()])

    assert "Failed to stop logging listener" in caplog.text


def test_session_id_from_extra_overrides_default_and_is_not_context() -> None:
    """A per-record session ID wins and is reported only at the top level."""

    formatter = logging_pipeline.JsonFormatter(default_session_id="default")
    record = logging.makeLogRecord(
        {"msg": "step answered", "session_id": "participant-7", "step": "days"}
    )

    payload = json.loads(formatter.format(record))
    assert payload["session_id"] == "participant-7"
    assert payload["context"] == {"step": "days"}

    plain = json.loads(formatter.format(logging.makeLogRecord({"msg": "plain"})))
    assert plain["session_id"] == "default"
    assert plain["context"] == {}


def test_bounded_queue_handler_drops_records_when_full() -> None:
    """A full queue drops records instead of blocking the caller."""

    record_queue: Queue[logging.LogRecord] = Queue(maxsize=1)
    handler = logging_pipeline.BoundedQueueHandler(record_queue)

    handler.handle(logging.makeLogRecord({"msg": "first"}))
    handler.handle(logging.makeLogRecord({"msg": "second"}))

    assert record_queue.qsize() == 1
    assert record_queue.get_nowait().getMessage() == "first"
