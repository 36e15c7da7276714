from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from changepack.diff import (
    CycleDetectedError,
    DiffConfig,
    ShapeMismatchError,
    UnsupportedTypeError,
    deep_equal,
    diff_field,
)
from changepack.diff.shapes import values_equal


@dataclass(eq=False)
class Branch:
    name: str = ""
    children: list[Any] = field(default_factory=list)
    cache: dict = diff_field(ignore=True, default_factory=dict)


def test_values_equal_respects_scalar_kinds() -> None:
    assert values_equal(1, 1.0) is True
    assert values_equal(1, True) is False
    assert values_equal(0, False) is False
    assert values_equal("a", b"a") is False
    assert values_equal(None, None) is True


def test_deep_equal_walks_nested_containers() -> None:
    assert deep_equal({"a": [1, {"b": "x"}]}, {"a": [1.0, {"b": "x"}]}) is True
    assert deep_equal({"a": [1, {"b": "x"}]}, {"a": [1, {"b": "y"}]}) is False
    assert deep_equal({"a": 1}, {"a": 1, "b": 2}) is False
    assert deep_equal({"a": 1}, {"b": 1}) is False
    assert deep_equal([1, 2], [1]) is False


def test_deep_equal_treats_none_as_absent() -> None:
    assert deep_equal({"a": None}, {"a": None}) is True
    assert deep_equal({"a": None}, {"a": 0}) is False


def test_deep_equal_uses_record_fields_and_skips_ignored_ones() -> None:
    assert deep_equal(Branch("a", cache={"k": 1}), Branch("a")) is True
    assert deep_equal(Branch("a", [Branch("b")]), Branch("a", [Branch("c")])) is False


def test_deep_equal_reports_shape_mismatch_with_path() -> None:
    with pytest.raises(ShapeMismatchError) as excinfo:
        deep_equal({"a": [1]}, {"a": [True]})
    assert excinfo.value.path == ("a",)

    with pytest.raises(ShapeMismatchError) as excinfo:
        deep_equal({"a": 1}, {"a": "1"})
    assert excinfo.value.path == ("a",)


def test_deep_equal_rejects_unsupported_values() -> None:
    with pytest.raises(UnsupportedTypeError):
        deep_equal([object()], [object()])


def test_deep_equal_detects_cycles() -> None:
    left = Branch("root")
    left.children.append(left)
    right = Branch("root")
    right.children.append(right)

    with pytest.raises(CycleDetectedError) as excinfo:
        deep_equal(left, right)
    assert excinfo.value.path == ("children", "0")

    assert deep_equal(left, left) is True


def test_deep_equal_honors_configured_scalar_types() -> None:
    @dataclass(frozen=True)
    class Money:
        amount: int
        note: str = diff_field(ignore=True, default="")

    config = DiffConfig(scalar_types=(Money,))

    assert deep_equal(Money(1, "a"), Money(1, "b")) is True
    assert deep_equal(Money(1, "a"), Money(1, "b"), config=config) is False
