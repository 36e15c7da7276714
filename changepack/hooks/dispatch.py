"""Fault-isolated delivery of comparison events to observers."""

from __future__ import annotations

from dataclasses import dataclass, field
import threading
import warnings

from changepack.hooks.events import DiffObserver, HookName
from changepack.observability.logging import get_logger

_log = get_logger(component="hooks")


@dataclass(frozen=True, slots=True)
class ObserverFailure:
    observer: str
    hook: HookName
    error_type: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {
            "observer": self.observer,
            "hook": self.hook,
            "error_type": self.error_type,
            "message": self.message,
        }


@dataclass(slots=True)
class ObserverSet:
    """Observers attached to a Differ.

    An observer that raises is recorded in ``failures`` and reported as a
    RuntimeWarning; the comparison itself carries on. One set may be shared by
    differs running on several threads.
    """

    observers: tuple[DiffObserver, ...] = ()
    failures: list[ObserverFailure] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.observers)

    def clear_failures(self) -> None:
        with self._lock:
            self.failures.clear()

    def notify(self, hook: HookName, payload: object) -> None:
        for observer in self.observers:
            try:
                getattr(observer, hook)(payload)
            except Exception as error:
                self._record_failure(observer, hook, error)

    def _record_failure(self, observer: DiffObserver, hook: HookName, error: Exception) -> None:
        failure = ObserverFailure(
            observer=str(getattr(observer, "name", observer.__class__.__name__)),
            hook=hook,
            error_type=error.__class__.__name__,
            message=str(error),
        )
        with self._lock:
            self.failures.append(failure)
        _log.warning("hooks.observer_failed", **failure.to_dict())
        warnings.warn(
            (
                f"ChangeKit observer failure: observer={failure.observer} "
                f"hook={failure.hook} error={failure.error_type}: {failure.message}"
            ),
            RuntimeWarning,
            stacklevel=3,
        )
