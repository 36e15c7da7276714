from collections.abc import Iterator
import copy
import pickle

import pytest

from changepack.core.models import ABSENT, Absent, Change, Changelog, is_absent
from changepack.core.types import CREATE, DELETE, UPDATE


def test_absent_is_a_falsy_singleton() -> None:
    assert Absent() is ABSENT
    assert not ABSENT
    assert repr(ABSENT) == "<ABSENT>"
    assert copy.copy(ABSENT) is ABSENT
    assert copy.deepcopy({"value": ABSENT})["value"] is ABSENT
    assert pickle.loads(pickle.dumps(ABSENT)) is ABSENT


def test_none_and_absent_are_both_absent() -> None:
    assert is_absent(None)
    assert is_absent(ABSENT)
    assert not is_absent(0)
    assert not is_absent("")


def test_change_validates_type_and_sides() -> None:
    with pytest.raises(ValueError, match="Unsupported change type"):
        Change("rename", ("a",))
    with pytest.raises(ValueError, match="prior value"):
        Change(CREATE, ("a",), from_=1, to=2)
    with pytest.raises(ValueError, match="new value"):
        Change(DELETE, ("a",), from_=1, to=2)
    with pytest.raises(ValueError, match="must be strings"):
        Change(UPDATE, ("a", 1), from_=1, to=2)


def test_change_path_is_normalized_to_tuple() -> None:
    change = Change(UPDATE, ["a", "b"], from_=1, to=2)

    assert change.path == ("a", "b")


def test_change_pointer_escapes_segments() -> None:
    assert Change(UPDATE, ("a/b", "c~d"), from_=1, to=2).pointer == "/a~1b/c~0d"
    assert Change(UPDATE, (), from_=1, to=2).pointer == ""


def test_change_inversion_swaps_kind_and_sides() -> None:
    assert Change(CREATE, ("x",), to=1).inverted() == Change(DELETE, ("x",), from_=1)
    assert Change(DELETE, ("x",), from_=1).inverted() == Change(CREATE, ("x",), to=1)
    assert Change(UPDATE, ("x",), from_=ABSENT, to=1).inverted() == Change(
        UPDATE, ("x",), from_=1, to=ABSENT
    )


def test_change_to_dict_maps_absent_to_none() -> None:
    assert Change(CREATE, ("items", "3"), to=4).to_dict() == {
        "type": "create",
        "path": ["items", "3"],
        "from": None,
        "to": 4,
    }


def test_changelog_summary_and_sequence_protocol() -> None:
    changelog = Changelog(
        changes=[
            Change(CREATE, ("a",), to=1),
            Change(UPDATE, ("b",), from_=1, to=2),
            Change(UPDATE, ("c",), from_=1, to=2),
        ]
    )

    assert len(changelog) == 3
    assert changelog[0].path == ("a",)
    assert [change.type for change in changelog] == [CREATE, UPDATE, UPDATE]
    assert changelog.identical is False
    assert changelog.summary() == {"create": 1, "update": 2, "delete": 0}
    assert changelog.inverted().summary() == {"create": 0, "update": 2, "delete": 1}

    payload = changelog.to_dict()
    assert payload["identical"] is False
    assert payload["changes"][1] == {"type": "update", "path": ["b"], "from": 1, "to": 2}


def test_empty_changelog_is_identical() -> None:
    changelog = Changelog()

    assert changelog.identical is True
    assert not changelog
    assert changelog.summary() == {"create": 0, "update": 0, "delete": 0}


def test_changelog_iterates_changes_in_discovery_order() -> None:
    first = Change(DELETE, ("a",), from_=1)
    second = Change(CREATE, ("b",), to=2)
    changelog = Changelog(changes=[first, second])

    iterator = iter(changelog)

    assert isinstance(iterator, Iterator)
    assert next(iterator) is first
    assert next(iterator) is second
    with pytest.raises(StopIteration):
        next(iterator)
