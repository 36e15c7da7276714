"""Observer interface and the events a comparison reports to it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from changepack.core.models import Change, Changelog

HookName = Literal["on_start", "on_change", "on_finish", "on_failure"]
HOOK_NAMES: tuple[HookName, ...] = ("on_start", "on_change", "on_finish", "on_failure")


@dataclass(frozen=True, slots=True)
class CompareStarted:
    old_type: str
    new_type: str

    def to_dict(self) -> dict[str, Any]:
        return {"old_type": self.old_type, "new_type": self.new_type}


@dataclass(frozen=True, slots=True)
class CompareFinished:
    old_type: str
    new_type: str
    changelog: Changelog

    def to_dict(self) -> dict[str, Any]:
        return {
            "old_type": self.old_type,
            "new_type": self.new_type,
            "change_count": len(self.changelog),
            "summary": self.changelog.summary(),
        }


@dataclass(frozen=True, slots=True)
class CompareFailed:
    old_type: str
    new_type: str
    error: Exception

    @property
    def path(self) -> tuple[str, ...] | None:
        return getattr(self.error, "path", None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "old_type": self.old_type,
            "new_type": self.new_type,
            "error_type": self.error.__class__.__name__,
            "error_message": str(self.error),
            "path": None if self.path is None else list(self.path),
        }


class DiffObserver:
    """No-op base for comparison observers.

    ``on_change`` sees every change as the walker records it, so an observer
    of a failed comparison may have seen changes that never reach a changelog.
    """

    name = "observer"

    def on_start(self, event: CompareStarted) -> None:
        return None

    def on_change(self, change: Change) -> None:
        return None

    def on_finish(self, event: CompareFinished) -> None:
        return None

    def on_failure(self, event: CompareFailed) -> None:
        return None
