"""Field descriptors derived from record types.

Record fields carry an optional diff directive in their dataclass metadata:

    name: str = field(metadata={"diff": "name,identifier"})
    cache: dict = field(metadata={"diff": "-"})

The first option is the external name used in change paths. ``identifier``
marks the field as the identity key used to match elements of a sequence of
that record type. A bare ``-`` excludes the field from comparison.
"""

from __future__ import annotations

from dataclasses import dataclass
import dataclasses
import threading
from typing import Any

from changepack.diff.config import DEFAULT_DIRECTIVE_KEY
from changepack.diff.exceptions import FieldDirectiveError

IGNORE_DIRECTIVE = "-"
IDENTIFIER_OPTION = "identifier"


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    attribute: str
    name: str
    ignored: bool = False
    identifier: bool = False


_FIELD_CACHE: dict[tuple[type, str], tuple[FieldDescriptor, ...]] = {}
_FIELD_CACHE_LOCK = threading.Lock()


def is_record_type(record_type: type) -> bool:
    if dataclasses.is_dataclass(record_type):
        return True
    return issubclass(record_type, tuple) and hasattr(record_type, "_fields")


def is_record(value: Any) -> bool:
    return not isinstance(value, type) and is_record_type(type(value))


def parse_directive(attribute: str, directive: Any) -> FieldDescriptor:
    """Parse one field directive into a descriptor."""
    default_name = attribute.lower()
    if directive is None:
        return FieldDescriptor(attribute=attribute, name=default_name)
    if not isinstance(directive, str):
        raise FieldDirectiveError(
            f"Diff directive on field '{attribute}' must be a string, got {type(directive).__name__}."
        )

    raw = directive.strip()
    if raw == IGNORE_DIRECTIVE:
        return FieldDescriptor(attribute=attribute, name=default_name, ignored=True)

    name, *options = [part.strip() for part in raw.split(",")]
    if name == IGNORE_DIRECTIVE:
        raise FieldDirectiveError(
            f"Diff directive on field '{attribute}' cannot combine '-' with other options."
        )

    identifier = False
    for option in options:
        if option == IDENTIFIER_OPTION:
            identifier = True
            continue
        raise FieldDirectiveError(
            f"Diff directive on field '{attribute}' has unsupported option {option!r}."
        )

    return FieldDescriptor(attribute=attribute, name=name or default_name, identifier=identifier)


def resolve_fields(
    record_type: type,
    *,
    directive_key: str = DEFAULT_DIRECTIVE_KEY,
) -> tuple[FieldDescriptor, ...]:
    """Return field descriptors for a record type in declaration order.

    Results are memoized for the lifetime of the process.
    """
    cache_key = (record_type, directive_key)
    cached = _FIELD_CACHE.get(cache_key)
    if cached is not None:
        return cached

    descriptors = _derive_fields(record_type, directive_key=directive_key)
    with _FIELD_CACHE_LOCK:
        return _FIELD_CACHE.setdefault(cache_key, descriptors)


def identifier_field(
    record_type: type,
    *,
    directive_key: str = DEFAULT_DIRECTIVE_KEY,
) -> FieldDescriptor | None:
    for descriptor in resolve_fields(record_type, directive_key=directive_key):
        if descriptor.identifier:
            return descriptor
    return None


def reset_field_cache() -> None:
    """Clear memoized descriptors (for tests)."""
    with _FIELD_CACHE_LOCK:
        _FIELD_CACHE.clear()


def diff_field(
    name: str | None = None,
    *,
    identifier: bool = False,
    ignore: bool = False,
    directive_key: str = DEFAULT_DIRECTIVE_KEY,
    **field_kwargs: Any,
) -> Any:
    """``dataclasses.field`` carrying a diff directive."""
    if ignore and (name or identifier):
        raise FieldDirectiveError("Ignored fields cannot declare a name or identifier.")

    if ignore:
        directive = IGNORE_DIRECTIVE
    else:
        options = [name or ""]
        if identifier:
            options.append(IDENTIFIER_OPTION)
        directive = ",".join(options)

    metadata = dict(field_kwargs.pop("metadata", None) or {})
    if directive:
        metadata[directive_key] = directive
    return dataclasses.field(metadata=metadata, **field_kwargs)


def _derive_fields(record_type: type, *, directive_key: str) -> tuple[FieldDescriptor, ...]:
    if dataclasses.is_dataclass(record_type):
        descriptors = tuple(
            parse_directive(item.name, item.metadata.get(directive_key))
            for item in dataclasses.fields(record_type)
        )
    elif is_record_type(record_type):
        descriptors = tuple(parse_directive(name, None) for name in record_type._fields)
    else:
        raise FieldDirectiveError(f"{record_type.__name__} is not a record type.")

    identifiers = [item.attribute for item in descriptors if item.identifier]
    if len(identifiers) > 1:
        raise FieldDirectiveError(
            f"{record_type.__name__} declares more than one identifier field: "
            f"{', '.join(identifiers)}"
        )

    seen: dict[str, str] = {}
    for item in descriptors:
        if item.ignored:
            continue
        if item.name in seen:
            raise FieldDirectiveError(
                f"{record_type.__name__} fields '{seen[item.name]}' and '{item.attribute}' "
                f"share the external name {item.name!r}."
            )
        seen[item.name] = item.attribute

    return descriptors
