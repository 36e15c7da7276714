"""Stable public API surface for ChangeKit.

This module is the supported import path for library users.
"""

from changepack.core.models import ABSENT, Change, Changelog
from changepack.core.types import CREATE, DELETE, UPDATE, ChangeType
from changepack.diff import (
    CycleDetectedError,
    DiffConfig,
    DiffConfigError,
    Differ,
    DiffError,
    FieldDirectiveError,
    PathResolutionError,
    ShapeMismatchError,
    UnsupportedTypeError,
    compare,
    diff_field,
    render_changelog,
    render_changelog_summary,
    resolve_path,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ABSENT",
    "CREATE",
    "UPDATE",
    "DELETE",
    "ChangeType",
    "Change",
    "Changelog",
    "DiffConfig",
    "Differ",
    "compare",
    "diff_field",
    "resolve_path",
    "render_changelog",
    "render_changelog_summary",
    "DiffError",
    "DiffConfigError",
    "FieldDirectiveError",
    "ShapeMismatchError",
    "UnsupportedTypeError",
    "CycleDetectedError",
    "PathResolutionError",
]
