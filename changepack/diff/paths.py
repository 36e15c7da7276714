"""Navigation of change paths through compared values."""

from __future__ import annotations

from typing import Any, Iterable

from changepack.diff.config import DEFAULT_CONFIG, DiffConfig
from changepack.diff.exceptions import PathResolutionError
from changepack.diff.fields import resolve_fields
from changepack.diff.sequences import identity_key, select_strategy
from changepack.diff.shapes import classify, format_path


def resolve_path(
    value: Any,
    path: Iterable[str],
    *,
    config: DiffConfig | None = None,
) -> Any:
    """Return the value a change path points at.

    Use the new value for create and update paths and the old value for
    delete paths.
    """
    cfg = config or DEFAULT_CONFIG
    segments = tuple(path)
    current = value

    for depth, segment in enumerate(segments):
        walked = segments[: depth + 1]
        category = classify(current, config=cfg, path=segments[:depth])

        if category == "record":
            current = _record_member(current, segment, cfg, walked)
        elif category == "mapping":
            current = _mapping_member(current, segment, walked)
        elif category == "sequence":
            current = _sequence_member(current, segment, cfg, walked)
        else:
            raise PathResolutionError(
                f"Cannot descend into {category} value at {format_path(walked)}",
                path=walked,
            )

    return current


def _record_member(record: Any, segment: str, cfg: DiffConfig, walked: tuple[str, ...]) -> Any:
    for descriptor in resolve_fields(type(record), directive_key=cfg.directive_key):
        if not descriptor.ignored and descriptor.name == segment:
            return getattr(record, descriptor.attribute)
    raise PathResolutionError(
        f"{type(record).__name__} has no field named {segment!r} at {format_path(walked)}",
        path=walked,
    )


def _mapping_member(mapping: Any, segment: str, walked: tuple[str, ...]) -> Any:
    for key, item in mapping.items():
        if str(key) == segment:
            return item
    raise PathResolutionError(f"No mapping key {segment!r} at {format_path(walked)}", path=walked)


def _sequence_member(sequence: Any, segment: str, cfg: DiffConfig, walked: tuple[str, ...]) -> Any:
    strategy, identifier = select_strategy(sequence, (), config=cfg, path=walked[:-1])
    if strategy == "identity":
        for element in reversed(sequence):
            if identity_key(element, identifier) == segment:
                return element
        raise PathResolutionError(
            f"No element with identifier {segment!r} at {format_path(walked)}",
            path=walked,
        )

    try:
        index = int(segment)
    except ValueError as error:
        raise PathResolutionError(
            f"Expected a sequence index at {format_path(walked)}, got {segment!r}",
            path=walked,
        ) from error
    if not 0 <= index < len(sequence):
        raise PathResolutionError(
            f"Sequence index {index} out of range at {format_path(walked)}",
            path=walked,
        )
    return sequence[index]
