"""Opt-in observers for ChangeKit comparisons."""

from changepack.hooks.dispatch import ObserverFailure, ObserverSet
from changepack.hooks.events import (
    HOOK_NAMES,
    CompareFailed,
    CompareFinished,
    CompareStarted,
    DiffObserver,
)
from changepack.hooks.observers import LoggingObserver

__all__ = [
    "HOOK_NAMES",
    "CompareStarted",
    "CompareFinished",
    "CompareFailed",
    "DiffObserver",
    "ObserverFailure",
    "ObserverSet",
    "LoggingObserver",
]
