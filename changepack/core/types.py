"""Type definitions for ChangeKit core models."""

from typing import Literal

ChangeType = Literal["create", "update", "delete"]

CREATE: ChangeType = "create"
UPDATE: ChangeType = "update"
DELETE: ChangeType = "delete"

CHANGE_TYPES: tuple[str, ...] = (
    "create",
    "update",
    "delete",
)

Category = Literal["absent", "scalar", "sequence", "mapping", "record"]

CATEGORIES: tuple[str, ...] = (
    "absent",
    "scalar",
    "sequence",
    "mapping",
    "record",
)
