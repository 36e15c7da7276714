"""Element matching for ordered sequences."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Sequence

from changepack.core.types import CREATE, DELETE, UPDATE, ChangeType
from changepack.diff.config import DEFAULT_CONFIG, DiffConfig
from changepack.diff.exceptions import ShapeMismatchError
from changepack.diff.fields import FieldDescriptor, identifier_field
from changepack.diff.shapes import classify, describe_kind, format_path, scalar_kind, values_equal

SequenceStrategy = Literal["identity", "ordered", "positional"]


@dataclass(frozen=True, slots=True)
class SequenceOp:
    """One matched element operation.

    ``old_index`` is set for delete and update ops, ``new_index`` for create
    and update ops. ``key`` holds the identity key for identity matching.
    """

    op: ChangeType
    old_index: int | None = None
    new_index: int | None = None
    key: str | None = None

    @property
    def segment(self) -> str:
        if self.key is not None:
            return self.key
        if self.op == CREATE:
            return str(self.new_index)
        return str(self.old_index)


def select_strategy(
    old: Sequence[Any],
    new: Sequence[Any],
    *,
    config: DiffConfig = DEFAULT_CONFIG,
    path: tuple[str, ...] = (),
) -> tuple[SequenceStrategy, FieldDescriptor | None]:
    """Choose how elements of two sequences are paired."""
    elements = [*old, *new]
    categories = [classify(item, config=config, path=path) for item in elements]

    if all(category in ("scalar", "absent") for category in categories):
        kinds = {
            scalar_kind(item, config=config)
            for item, category in zip(elements, categories)
            if category == "scalar"
        }
        if len(kinds) > 1:
            names = ", ".join(sorted(describe_kind(kind) for kind in kinds))
            raise ShapeMismatchError(
                f"Shape mismatch at {format_path(path)}: mixed scalar elements ({names})",
                path=path,
            )
        return "ordered", None

    if all(category == "record" for category in categories):
        record_types = {type(item) for item in elements}
        if len(record_types) > 1:
            names = ", ".join(sorted(item.__name__ for item in record_types))
            raise ShapeMismatchError(
                f"Shape mismatch at {format_path(path)}: mixed record elements ({names})",
                path=path,
            )
        identifier = identifier_field(record_types.pop(), directive_key=config.directive_key)
        if identifier is not None:
            return "identity", identifier

    return "positional", None


def match_sequences(
    old: Sequence[Any],
    new: Sequence[Any],
    *,
    config: DiffConfig = DEFAULT_CONFIG,
    path: tuple[str, ...] = (),
) -> list[SequenceOp]:
    """Pair elements of two sequences into create, delete and update ops."""
    strategy, identifier = select_strategy(old, new, config=config, path=path)
    if strategy == "identity":
        return match_by_identity(old, new, identifier)
    if strategy == "ordered":
        return match_ordered(old, new, config=config)
    return match_positional(old, new)


def identity_key(element: Any, identifier: FieldDescriptor) -> str:
    return str(getattr(element, identifier.attribute))


def match_by_identity(
    old: Sequence[Any],
    new: Sequence[Any],
    identifier: FieldDescriptor,
) -> list[SequenceOp]:
    """Match record elements by their identifier field.

    Deletes come first in old order, then creates in new order, then updates
    for shared keys in old order.
    """
    # Keys map to the index of their last occurrence.
    old_by_key = _index_by_key(old, identifier)
    new_by_key = _index_by_key(new, identifier)

    ops: list[SequenceOp] = []
    for key, old_index in old_by_key.items():
        if key not in new_by_key:
            ops.append(SequenceOp(op=DELETE, old_index=old_index, key=key))
    for key, new_index in new_by_key.items():
        if key not in old_by_key:
            ops.append(SequenceOp(op=CREATE, new_index=new_index, key=key))
    for key, old_index in old_by_key.items():
        new_index = new_by_key.get(key)
        if new_index is None:
            continue
        if old[old_index] is not new[new_index]:
            ops.append(SequenceOp(op=UPDATE, old_index=old_index, new_index=new_index, key=key))
    return ops


def match_ordered(
    old: Sequence[Any],
    new: Sequence[Any],
    *,
    config: DiffConfig = DEFAULT_CONFIG,
) -> list[SequenceOp]:
    """Walk both sequences with independent cursors.

    On a mismatch the old element is treated as deleted when the next old
    element lines up with the current new one; otherwise the new element is
    treated as inserted. This is a heuristic, not a minimal edit script.
    """
    ops: list[SequenceOp] = []
    i = j = 0
    while i < len(old) and j < len(new):
        if values_equal(old[i], new[j], config=config):
            i += 1
            j += 1
            continue
        if i + 1 < len(old) and values_equal(old[i + 1], new[j], config=config):
            ops.append(SequenceOp(op=DELETE, old_index=i))
            i += 1
        else:
            ops.append(SequenceOp(op=CREATE, new_index=j))
            j += 1

    ops.extend(SequenceOp(op=DELETE, old_index=idx) for idx in range(i, len(old)))
    ops.extend(SequenceOp(op=CREATE, new_index=idx) for idx in range(j, len(new)))
    return ops


def match_positional(old: Sequence[Any], new: Sequence[Any]) -> list[SequenceOp]:
    """Pair elements by index; extras at the tail are deletes or creates.

    Shared positions holding distinct objects become update ops; the walker
    decides whether they actually differ.
    """
    shared = min(len(old), len(new))
    ops = [
        SequenceOp(op=UPDATE, old_index=idx, new_index=idx)
        for idx in range(shared)
        if old[idx] is not new[idx]
    ]
    ops.extend(SequenceOp(op=DELETE, old_index=idx) for idx in range(shared, len(old)))
    ops.extend(SequenceOp(op=CREATE, new_index=idx) for idx in range(shared, len(new)))
    return ops


def _index_by_key(elements: Sequence[Any], identifier: FieldDescriptor) -> dict[str, int]:
    indexed: dict[str, int] = {}
    for idx, element in enumerate(elements):
        indexed[identity_key(element, identifier)] = idx
    return indexed
