"""Diff subsystem exceptions."""

from __future__ import annotations


class DiffError(Exception):
    """Base class for diff errors."""


class DiffConfigError(DiffError):
    """Invalid diff configuration."""


class FieldDirectiveError(DiffError):
    """Malformed diff directive on a record field."""


class _PathError(DiffError):
    def __init__(self, message: str, *, path: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.path = path


class ShapeMismatchError(_PathError):
    """Old and new values do not share the same declared shape."""


class UnsupportedTypeError(_PathError):
    """A value does not belong to any comparable category."""


class CycleDetectedError(_PathError):
    """The same value pair reappeared on the active comparison path."""


class PathResolutionError(_PathError):
    """A change path cannot be followed through a value."""
