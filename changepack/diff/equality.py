"""Deep equality for values compared as opaque leaves.

Mapping values are reported whole, so the walker only needs to know whether
two of them differ. The check follows the same rules as the walker: shapes
must agree, scalars of different kinds never compare equal, ignored record
fields are skipped and a value pair that repeats on the current path is a
cycle.
"""

from __future__ import annotations

from typing import Any

from changepack.diff.config import DEFAULT_CONFIG, DiffConfig
from changepack.diff.exceptions import CycleDetectedError
from changepack.diff.fields import resolve_fields
from changepack.diff.sequences import select_strategy
from changepack.diff.shapes import classify, ensure_same_shape, format_path, values_equal


def deep_equal(
    old: Any,
    new: Any,
    *,
    config: DiffConfig = DEFAULT_CONFIG,
    path: tuple[str, ...] = (),
    active: set[tuple[int, int]] | None = None,
) -> bool:
    """Return whether two values of the same shape hold the same data.

    ``active`` holds the ``(id(old), id(new))`` pairs already open on the
    caller's path. Raises ShapeMismatchError, UnsupportedTypeError or
    CycleDetectedError like the walker.
    """
    return _equal(old, new, config, path, set() if active is None else active)


def _equal(
    old: Any,
    new: Any,
    config: DiffConfig,
    path: tuple[str, ...],
    active: set[tuple[int, int]],
) -> bool:
    old_category = classify(old, config=config, path=path)
    if old is new:
        return True
    new_category = classify(new, config=config, path=path)

    if old_category == "absent" or new_category == "absent":
        return old_category == new_category

    ensure_same_shape(
        old,
        new,
        old_category=old_category,
        new_category=new_category,
        config=config,
        path=path,
    )
    if old_category == "scalar":
        return values_equal(old, new, config=config)

    pair = (id(old), id(new))
    if pair in active:
        raise CycleDetectedError(f"Cycle detected at {format_path(path)}", path=path)
    active.add(pair)
    try:
        if old_category == "mapping":
            return _mappings_equal(old, new, config, path, active)
        if old_category == "record":
            return all(
                _equal(
                    getattr(old, item.attribute),
                    getattr(new, item.attribute),
                    config,
                    path + (item.name,),
                    active,
                )
                for item in resolve_fields(type(old), directive_key=config.directive_key)
                if not item.ignored
            )
        select_strategy(old, new, config=config, path=path)
        if len(old) != len(new):
            return False
        return all(
            _equal(left, right, config, path + (str(idx),), active)
            for idx, (left, right) in enumerate(zip(old, new))
        )
    finally:
        active.discard(pair)


def _mappings_equal(
    old: Any,
    new: Any,
    config: DiffConfig,
    path: tuple[str, ...],
    active: set[tuple[int, int]],
) -> bool:
    if len(old) != len(new) or any(key not in new for key in old):
        return False
    return all(
        _equal(value, new[key], config, path + (str(key),), active)
        for key, value in old.items()
    )
