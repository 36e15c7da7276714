"""Value categorization and shape checks."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
import numbers
from pathlib import PurePath
from typing import Any
from uuid import UUID

from changepack.core.models import escape_pointer_token, is_absent
from changepack.core.types import Category
from changepack.diff.config import DEFAULT_CONFIG, DiffConfig
from changepack.diff.exceptions import ShapeMismatchError, UnsupportedTypeError
from changepack.diff.fields import is_record

BUILTIN_SCALAR_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    Decimal,
    Fraction,
    date,
    time,
    timedelta,
    UUID,
    Enum,
    PurePath,
    frozenset,
    set,
)


def classify(
    value: Any,
    *,
    config: DiffConfig = DEFAULT_CONFIG,
    path: tuple[str, ...] = (),
) -> Category:
    """Place a runtime value in one of the comparable categories."""
    if is_absent(value):
        return "absent"
    if isinstance(value, BUILTIN_SCALAR_TYPES + config.scalar_types):
        return "scalar"
    if is_record(value):
        return "record"
    if isinstance(value, Mapping):
        return "mapping"
    if isinstance(value, Sequence):
        return "sequence"
    raise UnsupportedTypeError(
        f"Unsupported value of type {type(value).__name__} at {format_path(path)}",
        path=path,
    )


def scalar_kind(value: Any, *, config: DiffConfig = DEFAULT_CONFIG) -> object:
    """Token identifying the declared shape of a scalar."""
    for scalar_type in config.scalar_types:
        if isinstance(value, scalar_type):
            return scalar_type
    if isinstance(value, Enum):
        return type(value)
    if isinstance(value, bool):
        return bool
    if isinstance(value, numbers.Number):
        return numbers.Number
    if isinstance(value, str):
        return str
    if isinstance(value, (bytes, bytearray)):
        return bytes
    if isinstance(value, (set, frozenset)):
        return frozenset
    if isinstance(value, PurePath):
        return PurePath
    return type(value)


def ensure_same_shape(
    old: Any,
    new: Any,
    *,
    old_category: Category,
    new_category: Category,
    config: DiffConfig = DEFAULT_CONFIG,
    path: tuple[str, ...] = (),
) -> None:
    """Raise ShapeMismatchError when two present values cannot be compared."""
    if old_category != new_category:
        mismatch = True
    elif old_category == "record":
        mismatch = type(old) is not type(new)
    elif old_category == "scalar":
        mismatch = scalar_kind(old, config=config) != scalar_kind(new, config=config)
    else:
        mismatch = False

    if mismatch:
        raise ShapeMismatchError(
            f"Shape mismatch at {format_path(path)}: "
            f"{_describe(old, old_category)} vs {_describe(new, new_category)}",
            path=path,
        )


def values_equal(left: Any, right: Any, *, config: DiffConfig = DEFAULT_CONFIG) -> bool:
    """Scalar equality that never equates values of different kinds (``1`` and ``True``)."""
    if left is right:
        return True
    if scalar_kind(left, config=config) != scalar_kind(right, config=config):
        return False
    return left == right


def describe_kind(kind: object) -> str:
    return getattr(kind, "__name__", repr(kind))


def format_path(path: tuple[str, ...]) -> str:
    if not path:
        return "<root>"
    return "".join(f"/{escape_pointer_token(segment)}" for segment in path)


def _describe(value: Any, category: Category) -> str:
    return f"{category} {type(value).__name__}"
