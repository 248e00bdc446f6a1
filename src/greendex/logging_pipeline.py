"""Structured logging utilities for the Greendex command line."""

from __future__ import annotations

import contextlib
import json
import logging
import logging.handlers
from collections.abc import Iterable
from datetime import datetime, timezone
from queue import Full, Queue
from typing import Final, override
from uuid import uuid4

from greendex.settings import GreendexSettings

LOGGER = logging.getLogger(__name__)

# Attributes of a bare LogRecord plus those set while formatting. Anything
# else on a record came from ``extra=`` and is reported as context.
_RECORD_ATTRIBUTES: Final[frozenset[str]] = frozenset(
    vars(logging.makeLogRecord({}))
) | {"message", "asctime", "taskName", "session_id"}

_TEXT_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_QUEUE_CAPACITY: Final[int] = 1024


def _record_context(record: logging.LogRecord) -> dict[str, object]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRIBUTES
    }


class JsonFormatter(logging.Formatter):
    """Render one log record per line as a JSON object.

    A ``session_id`` passed through ``extra=`` takes precedence over the
    formatter's default, so a single process can log for several
    questionnaire sessions.
    """

    def __init__(self, *, default_session_id: str | None = None) -> None:
        super().__init__()
        self._default_session_id = default_session_id

    @override
    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, timezone.utc)
        session_id = getattr(record, "session_id", None) or self._default_session_id
        payload: dict[str, object] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "session_id": session_id,
            "context": _record_context(record),
        }

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        elif record.exc_text:
            payload["exception"] = record.exc_text

        return json.dumps(payload, default=str, ensure_ascii=False)


class BoundedQueueHandler(logging.handlers.QueueHandler):
    """Queue handler that drops records instead of blocking on a full queue."""

    @override
    def enqueue(self, record: logging.LogRecord) -> None:
        with contextlib.suppress(Full):
            self.queue.put_nowait(record)


def _build_formatter(
    settings: GreendexSettings, session_id: str | None
) -> logging.Formatter:
    if settings.log_format == "text":
        return logging.Formatter(_TEXT_FORMAT)
    return JsonFormatter(default_session_id=session_id or str(uuid4()))


def configure_logging(
    logger: logging.Logger,
    settings: GreendexSettings,
    *,
    session_id: str | None = None,
) -> logging.handlers.QueueListener:
    """Attach a queue-backed handler to ``logger`` according to ``settings``.

    Args:
        logger: Target logger, usually the ``greendex`` package logger.
        settings: Provides the level and the output format.
        session_id: Optional identifier stamped on every JSON record. A random
            identifier is generated when omitted.

    Returns:
        The started queue listener; stop it with :func:`shutdown_listeners`.
    """

    logger.setLevel(settings.log_level_number)

    record_queue: Queue[logging.LogRecord] = Queue(maxsize=_QUEUE_CAPACITY)
    logger.addHandler(BoundedQueueHandler(record_queue))

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(_build_formatter(settings, session_id))

    listener = logging.handlers.QueueListener(record_queue, stream_handler)
    listener.start()
    return listener


def shutdown_listeners(
    listeners: Iterable[logging.handlers.QueueListener],
    logger: logging.Logger | None = None,
) -> None:
    """Stop queue listeners and detach their queue handlers from ``logger``."""

    for listener in listeners:
        try:
            listener.stop()
        except Exception as exc:
            LOGGER.warning("Failed to stop logging listener", exc_info=exc)
    if logger is None:
        return
    for handler in list(logger.handlers):
        if isinstance(handler, BoundedQueueHandler):
            logger.removeHandler(handler)
