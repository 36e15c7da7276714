"""Core models and type definitions for ChangeKit."""

from changepack.core.models import ABSENT, Absent, Change, Changelog, escape_pointer_token, is_absent
from changepack.core.types import (
    CATEGORIES,
    CHANGE_TYPES,
    CREATE,
    DELETE,
    UPDATE,
    Category,
    ChangeType,
)

__all__ = [
    "ABSENT",
    "Absent",
    "Change",
    "Changelog",
    "CHANGE_TYPES",
    "ChangeType",
    "CREATE",
    "UPDATE",
    "DELETE",
    "CATEGORIES",
    "Category",
    "escape_pointer_token",
    "is_absent",
]
