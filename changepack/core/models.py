"""Core data models for ChangeKit changes and changelogs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from changepack.core.types import CHANGE_TYPES, CREATE, DELETE, UPDATE, ChangeType


class Absent:
    """Marker for the missing side of a change."""

    _instance: Absent | None = None

    def __new__(cls) -> Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<ABSENT>"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> Absent:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Absent:
        return self

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT = Absent()

_INVERSE: dict[str, ChangeType] = {
    CREATE: DELETE,
    DELETE: CREATE,
    UPDATE: UPDATE,
}


def is_absent(value: Any) -> bool:
    return value is None or value is ABSENT


def escape_pointer_token(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


@dataclass(frozen=True, slots=True)
class Change:
    """A single atomic difference located by a path of string segments."""

    type: ChangeType
    path: tuple[str, ...]
    from_: Any = ABSENT
    to: Any = ABSENT

    def __post_init__(self) -> None:
        if self.type not in CHANGE_TYPES:
            raise ValueError(f"Unsupported change type: {self.type}")
        path = tuple(self.path)
        if not all(isinstance(segment, str) for segment in path):
            raise ValueError(f"Change path segments must be strings: {path!r}")
        object.__setattr__(self, "path", path)
        if self.type == CREATE and self.from_ is not ABSENT:
            raise ValueError("create changes cannot carry a prior value")
        if self.type == DELETE and self.to is not ABSENT:
            raise ValueError("delete changes cannot carry a new value")

    @property
    def pointer(self) -> str:
        """JSON-pointer rendering of the path ("" for the root)."""
        return "".join(f"/{escape_pointer_token(segment)}" for segment in self.path)

    def inverted(self) -> Change:
        """Return the change that undoes this one."""
        return Change(
            type=_INVERSE[self.type],
            path=self.path,
            from_=self.to,
            to=self.from_,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "path": list(self.path),
            "from": None if self.from_ is ABSENT else self.from_,
            "to": None if self.to is ABSENT else self.to,
        }


@dataclass(slots=True)
class Changelog:
    """Ordered changes discovered by one comparison."""

    changes: list[Change] = field(default_factory=list)

    def __iter__(self) -> Iterator[Change]:
        return iter(self.changes)

    def __len__(self) -> int:
        return len(self.changes)

    def __getitem__(self, index: int) -> Change:
        return self.changes[index]

    @property
    def identical(self) -> bool:
        return not self.changes

    def summary(self) -> dict[str, int]:
        counts = {change_type: 0 for change_type in CHANGE_TYPES}
        for change in self.changes:
            counts[change.type] += 1
        return counts

    def inverted(self) -> Changelog:
        return Changelog(changes=[change.inverted() for change in self.changes])

    def to_dict(self) -> dict[str, Any]:
        return {
            "identical": self.identical,
            "summary": self.summary(),
            "changes": [change.to_dict() for change in self.changes],
        }
