"""Structured JSON logging for the command-line interface.

Records are pushed onto a bounded queue by the emitting thread and rendered
by a :class:`logging.handlers.QueueListener`, so estimation never blocks on
stderr.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from queue import Full, Queue
from typing import IO, Iterable
from uuid import uuid4

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

LOGGER = logging.getLogger(__name__)

# Attributes every LogRecord carries; anything else arrived via ``extra``.
_RECORD_ATTRIBUTES: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "run_id"}


class JsonFormatter(logging.Formatter):
    """Render log records as one JSON object per line.

    Fields passed through ``extra`` are grouped under ``context``. A record
    level ``run_id`` wins over the formatter's default one.
    """

    def __init__(
        self,
        *,
        default_run_id: str | None = None,
        static_fields: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__()
        self._default_run_id = default_run_id
        self._static_fields = dict(static_fields or {})

    @override
    def format(self, record: logging.LogRecord) -> str:
        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRIBUTES
        }
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "run_id": getattr(record, "run_id", None) or self._default_run_id,
            **self._static_fields,
            "context": context,
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        elif record.exc_text:
            payload["exception"] = record.exc_text
        return json.dumps(payload, default=str)


class BoundedQueueHandler(logging.handlers.QueueHandler):
    """Queue handler that drops records instead of blocking on a full queue."""

    dropped: int

    def __init__(self, queue: Queue[logging.LogRecord]) -> None:
        super().__init__(queue)
        self.dropped = 0

    @override
    def enqueue(self, record: logging.LogRecord) -> None:
        try:
            self.queue.put_nowait(record)
        except Full:
            self.dropped += 1


@dataclass(slots=True)
class StructuredLogging:
    """Handles installed by :func:`configure_structured_logging`."""

    logger: logging.Logger
    handler: BoundedQueueHandler
    listener: logging.handlers.QueueListener
    run_id: str
    previous_level: int = logging.NOTSET

    def stop(self) -> None:
        """Detach the queue handler, drain the listener and restore the level."""

        self.logger.removeHandler(self.handler)
        self.listener.stop()
        self.logger.setLevel(self.previous_level)


def configure_structured_logging(
    logger: logging.Logger,
    *,
    run_id: str | None = None,
    level: int = logging.INFO,
    stream: IO[str] | None = None,
    max_queue: int = 1024,
) -> StructuredLogging:
    """Route ``logger`` through a bounded queue to a JSON stream handler.

    Args:
        logger: Target logger to configure.
        run_id: Identifier stamped on every record. A random UUID is used
            when omitted.
        level: Logging verbosity level applied to ``logger``.
        stream: Destination stream; ``sys.stderr`` when omitted.
        max_queue: Queue capacity before records are dropped.

    Returns:
        Handles needed to stop the pipeline again.
    """

    previous_level = logger.level
    logger.setLevel(level)
    effective_run_id = run_id or str(uuid4())

    record_queue: Queue[logging.LogRecord] = Queue(maxsize=max_queue)
    queue_handler = BoundedQueueHandler(record_queue)
    logger.addHandler(queue_handler)

    stream_handler = logging.StreamHandler(stream)
    stream_handler.setFormatter(
        JsonFormatter(
            default_run_id=effective_run_id,
            static_fields={"component": "query_footprint"},
        )
    )

    listener = logging.handlers.QueueListener(record_queue, stream_handler)
    listener.start()
    return StructuredLogging(
        logger=logger,
        handler=queue_handler,
        listener=listener,
        run_id=effective_run_id,
        previous_level=previous_level,
    )


def shutdown_pipelines(pipelines: Iterable[StructuredLogging]) -> None:
    """Stop every pipeline, logging rather than raising shutdown errors."""

    for pipeline in pipelines:
        try:
            pipeline.stop()
        except Exception as exc:
            LOGGER.warning("Failed to stop logging listener", exc_info=exc)
