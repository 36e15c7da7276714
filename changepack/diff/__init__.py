"""Structural diff subsystem for ChangeKit."""

from changepack.diff.config import DEFAULT_DIRECTIVE_KEY, DiffConfig
from changepack.diff.engine import Differ, compare
from changepack.diff.equality import deep_equal
from changepack.diff.exceptions import (
    CycleDetectedError,
    DiffConfigError,
    DiffError,
    FieldDirectiveError,
    PathResolutionError,
    ShapeMismatchError,
    UnsupportedTypeError,
)
from changepack.diff.fields import (
    FieldDescriptor,
    diff_field,
    identifier_field,
    parse_directive,
    reset_field_cache,
    resolve_fields,
)
from changepack.diff.formatting import render_changelog, render_changelog_summary
from changepack.diff.paths import resolve_path
from changepack.diff.sequences import SequenceOp, match_sequences, select_strategy
from changepack.diff.shapes import classify

__all__ = [
    "DEFAULT_DIRECTIVE_KEY",
    "DiffConfig",
    "Differ",
    "compare",
    "deep_equal",
    "DiffError",
    "DiffConfigError",
    "FieldDirectiveError",
    "ShapeMismatchError",
    "UnsupportedTypeError",
    "CycleDetectedError",
    "PathResolutionError",
    "FieldDescriptor",
    "diff_field",
    "identifier_field",
    "parse_directive",
    "resolve_fields",
    "reset_field_cache",
    "SequenceOp",
    "match_sequences",
    "select_strategy",
    "classify",
    "resolve_path",
    "render_changelog",
    "render_changelog_summary",
]
