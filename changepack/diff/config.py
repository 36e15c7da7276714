"""Configuration for structural comparison."""

from __future__ import annotations

from dataclasses import dataclass

from changepack.diff.exceptions import DiffConfigError

DEFAULT_DIRECTIVE_KEY = "diff"


@dataclass(frozen=True, slots=True)
class DiffConfig:
    """Settings shared by the walker, field resolver and sequence matcher."""

    directive_key: str = DEFAULT_DIRECTIVE_KEY
    scalar_types: tuple[type, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.directive_key, str) or not self.directive_key.strip():
            raise DiffConfigError("directive_key must be a non-empty string")

        scalar_types = tuple(self.scalar_types)
        invalid = [repr(item) for item in scalar_types if not isinstance(item, type)]
        if invalid:
            raise DiffConfigError(f"scalar_types must contain classes: {', '.join(invalid)}")
        object.__setattr__(self, "scalar_types", scalar_types)


DEFAULT_CONFIG = DiffConfig()
