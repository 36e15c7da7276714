from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from changekit import DELETE, PathResolutionError, compare, diff_field, resolve_path


@dataclass
class Member:
    handle: str = diff_field("handle", identifier=True)
    role: str = diff_field("role", default="viewer")


@dataclass
class Team:
    Name: str = ""
    members: list[Member] = field(default_factory=list)
    scores: list[int] = field(default_factory=list)
    settings: dict[int, str] = field(default_factory=dict)
    token: str = diff_field(ignore=True, default="")


def _team() -> Team:
    return Team(
        Name="core",
        members=[Member("ana", "admin"), Member("bo")],
        scores=[3, 5, 8],
        settings={1: "on"},
        token="secret",
    )


def test_resolve_path_follows_each_category() -> None:
    team = _team()

    assert resolve_path(team, ()) is team
    assert resolve_path(team, ("name",)) == "core"
    assert resolve_path(team, ("members", "bo", "role")) == "viewer"
    assert resolve_path(team, ("scores", "2")) == 8
    assert resolve_path(team, ["settings", "1"]) == "on"


@pytest.mark.parametrize(
    ("path", "message"),
    [
        (("token",), "no field named 'token'"),
        (("members", "cy"), "No element with identifier"),
        (("scores", "x"), "Expected a sequence index"),
        (("scores", "9"), "out of range"),
        (("settings", "2"), "No mapping key"),
        (("name", "first"), "Cannot descend into scalar"),
    ],
)
def test_resolve_path_errors(path: tuple[str, ...], message: str) -> None:
    with pytest.raises(PathResolutionError, match=message) as excinfo:
        resolve_path(_team(), path)

    assert excinfo.value.path == tuple(path)


def test_change_paths_address_their_values() -> None:
    old = _team()
    new = Team(
        Name="platform",
        members=[Member("bo", "admin"), Member("cy")],
        scores=[3, 8, 13],
        settings={1: "off", 2: "on"},
        token="rotated",
    )

    changelog = compare(old, new)

    assert len(changelog) > 0
    for change in changelog:
        if change.type == DELETE:
            assert resolve_path(old, change.path) == change.from_
        else:
            assert resolve_path(new, change.path) == change.to
