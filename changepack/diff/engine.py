"""Recursive structural comparison engine."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Sequence

from changepack.core.models import ABSENT, Change, Changelog, is_absent
from changepack.core.types import CREATE, DELETE, UPDATE
from changepack.diff.config import DEFAULT_CONFIG, DiffConfig
from changepack.diff.equality import deep_equal
from changepack.diff.exceptions import CycleDetectedError
from changepack.diff.fields import resolve_fields
from changepack.diff.sequences import match_sequences
from changepack.diff.shapes import classify, ensure_same_shape, format_path, values_equal
from changepack.hooks import CompareFailed, CompareFinished, CompareStarted, ObserverSet


@dataclass(slots=True)
class _CompareContext:
    changes: list[Change] = field(default_factory=list)
    active: set[tuple[int, int]] = field(default_factory=set)
    observers: ObserverSet | None = None

    def record(self, change: Change) -> None:
        self.changes.append(change)
        if self.observers:
            self.observers.notify("on_change", change)


@dataclass(frozen=True, slots=True)
class Differ:
    """Produces changelogs for pairs of values of the same shape.

    ``observers`` is optional; without it a comparison touches nothing but its
    own changelog.
    """

    config: DiffConfig = DEFAULT_CONFIG
    observers: ObserverSet | None = None

    def compare(self, old: Any, new: Any) -> Changelog:
        """Diff ``old`` against ``new``.

        Raises ShapeMismatchError, UnsupportedTypeError or CycleDetectedError;
        no partial changelog is returned in that case.
        """
        observers = self.observers
        context = _CompareContext(observers=observers)
        if not observers:
            self._compare((), old, new, context)
            return Changelog(changes=context.changes)

        old_type = _type_name(old)
        new_type = _type_name(new)
        observers.notify("on_start", CompareStarted(old_type=old_type, new_type=new_type))
        try:
            self._compare((), old, new, context)
        except Exception as error:
            observers.notify(
                "on_failure",
                CompareFailed(old_type=old_type, new_type=new_type, error=error),
            )
            raise

        changelog = Changelog(changes=context.changes)
        observers.notify(
            "on_finish",
            CompareFinished(old_type=old_type, new_type=new_type, changelog=changelog),
        )
        return changelog

    def _compare(
        self,
        path: tuple[str, ...],
        old: Any,
        new: Any,
        context: _CompareContext,
    ) -> None:
        old_category = classify(old, config=self.config, path=path)
        if old is new:
            return
        new_category = classify(new, config=self.config, path=path)

        if old_category == "absent" or new_category == "absent":
            if old_category != new_category:
                context.record(
                    Change(
                        type=UPDATE,
                        path=path,
                        from_=ABSENT if is_absent(old) else old,
                        to=ABSENT if is_absent(new) else new,
                    )
                )
            return

        ensure_same_shape(
            old,
            new,
            old_category=old_category,
            new_category=new_category,
            config=self.config,
            path=path,
        )

        if old_category == "scalar":
            if not values_equal(old, new, config=self.config):
                context.record(Change(type=UPDATE, path=path, from_=old, to=new))
            return

        with _guard(context, old, new, path):
            if old_category == "mapping":
                self._compare_mapping(path, old, new, context)
            elif old_category == "record":
                self._compare_record(path, old, new, context)
            else:
                self._compare_sequence(path, old, new, context)

    def _compare_mapping(
        self,
        path: tuple[str, ...],
        old: Mapping[Any, Any],
        new: Mapping[Any, Any],
        context: _CompareContext,
    ) -> None:
        for key, old_value in old.items():
            child = path + (str(key),)
            if key not in new:
                context.record(Change(type=DELETE, path=child, from_=old_value))
                continue
            new_value = new[key]
            if not deep_equal(
                old_value,
                new_value,
                config=self.config,
                path=child,
                active=context.active,
            ):
                context.record(
                    Change(type=UPDATE, path=child, from_=old_value, to=new_value)
                )

        for key, new_value in new.items():
            if key not in old:
                context.record(Change(type=CREATE, path=path + (str(key),), to=new_value))

    def _compare_record(
        self,
        path: tuple[str, ...],
        old: Any,
        new: Any,
        context: _CompareContext,
    ) -> None:
        for descriptor in resolve_fields(type(old), directive_key=self.config.directive_key):
            if descriptor.ignored:
                continue
            self._compare(
                path + (descriptor.name,),
                getattr(old, descriptor.attribute),
                getattr(new, descriptor.attribute),
                context,
            )

    def _compare_sequence(
        self,
        path: tuple[str, ...],
        old: Sequence[Any],
        new: Sequence[Any],
        context: _CompareContext,
    ) -> None:
        for op in match_sequences(old, new, config=self.config, path=path):
            child = path + (op.segment,)
            if op.op == DELETE:
                context.record(Change(type=DELETE, path=child, from_=old[op.old_index]))
            elif op.op == CREATE:
                context.record(Change(type=CREATE, path=child, to=new[op.new_index]))
            else:
                self._compare(child, old[op.old_index], new[op.new_index], context)


def compare(old: Any, new: Any, *, config: DiffConfig | None = None) -> Changelog:
    """Diff two values of the same shape into an ordered changelog."""
    return Differ(config=config or DEFAULT_CONFIG).compare(old, new)


@contextmanager
def _guard(
    context: _CompareContext,
    old: Any,
    new: Any,
    path: tuple[str, ...],
) -> Iterator[None]:
    pair = (id(old), id(new))
    if pair in context.active:
        raise CycleDetectedError(f"Cycle detected at {format_path(path)}", path=path)
    context.active.add(pair)
    try:
        yield
    finally:
        context.active.discard(pair)


def _type_name(value: Any) -> str:
    return type(value).__name__
