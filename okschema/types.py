"""
Type definitions for okschema.

Provides the Valid/Invalid outcome types, the Failure record, and the
value-model helpers every schema inspects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Mapping, TypeVar

from .errors import ValidationError

T = TypeVar("T")


class Missing(Enum):
    """Sentinel for a property or position that is absent from the input."""

    MISSING = "missing"

    def __repr__(self) -> str:
        return "MISSING"


MISSING = Missing.MISSING


class Kind(str, Enum):
    """Tags of the JSON value model."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    UNSIGNED = "unsigned"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    UNSUPPORTED = "unsupported"

    def __str__(self) -> str:
        return self.value


def kind_of(value: Any) -> Kind:
    """Classify a value. `bool` is checked before `int` since it subclasses it."""
    if value is None:
        return Kind.NULL
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if isinstance(value, int):
        return Kind.INTEGER
    if isinstance(value, float):
        return Kind.NUMBER
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, list):
        return Kind.ARRAY
    if isinstance(value, dict):
        return Kind.OBJECT
    return Kind.UNSUPPORTED


class Constraint(str, Enum):
    """Identifiers of the constraints a Failure can report."""

    TYPE = "type"
    REQUIRED = "required"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    PATTERN = "pattern"
    ONE_OF = "oneOf"
    NOT_ONE_OF = "notOneOf"
    MIN = "min"
    MAX = "max"
    EQUALS = "equals"
    MIN_ITEMS = "minItems"
    MAX_ITEMS = "maxItems"
    UNKNOWN_PROPERTY = "unknownProperty"
    TEST = "test"
    TRANSFORM = "transform"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Failure:
    """One violated constraint, located by its path in the input tree."""

    path: Path
    constraint: Constraint
    detail: Mapping[str, Any] = field(default_factory=dict)
    label: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "path": list(self.path),
            "constraint": self.constraint.value,
            "detail": dict(self.detail),
        }
        if self.label is not None:
            result["label"] = self.label
        return result

    def __str__(self) -> str:
        where = format_path(self.path)
        if self.label is not None:
            where = f"{where} ({self.label})"
        return f"{where}: {self.constraint.value} {dict(self.detail)}"


@dataclass(frozen=True, slots=True)
class Valid(Generic[T]):
    """Success outcome containing the validated value."""

    value: T

    def is_valid(self) -> bool:
        return True

    def is_invalid(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Invalid:
    """Failure outcome containing every violated constraint, in order."""

    failures: tuple[Failure, ...]

    def __post_init__(self) -> None:
        if not self.failures:
            raise ValueError("Invalid outcome requires at least one failure")

    def is_valid(self) -> bool:
        return False

    def is_invalid(self) -> bool:
        return True

    def unwrap(self) -> Any:
        raise ValidationError(self.failures)


def format_path(path: Path) -> str:
    """Render a path as `$.user.tags[0]`."""
    rendered = "$"
    for segment in path:
        if isinstance(segment, int):
            rendered += f"[{segment}]"
        else:
            rendered += f".{segment}"
    return rendered


# Type aliases
Path = tuple[str | int, ...]
Outcome = Valid[T] | Invalid
Predicate = Callable[[Any], bool]
Transform = Callable[[Any], Any]
