"""Ready-made observers."""

from __future__ import annotations

from typing import Any

from changepack.core.models import Change
from changepack.hooks.events import CompareFailed, CompareFinished, CompareStarted, DiffObserver
from changepack.observability.logging import get_logger


class LoggingObserver(DiffObserver):
    """Writes one structured log line per comparison, and per change at debug level."""

    name = "logging"

    def __init__(self, logger: Any | None = None) -> None:
        self._log = logger if logger is not None else get_logger(component="diff")

    def on_start(self, event: CompareStarted) -> None:
        self._log.debug("diff.compare.started", **event.to_dict())

    def on_change(self, change: Change) -> None:
        self._log.debug("diff.change", type=change.type, pointer=change.pointer or "/")

    def on_finish(self, event: CompareFinished) -> None:
        self._log.info("diff.compare.finished", **event.to_dict())

    def on_failure(self, event: CompareFailed) -> None:
        self._log.warning("diff.compare.failed", **event.to_dict())
