"""
Leaf schemas for scalar values: strings, integers, numbers, booleans.

Each leaf checks the value's kind first and stops there on a mismatch;
otherwise every configured constraint runs and reports independently.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from typing import Any, ClassVar, Iterable

from .core import Check, FailureCollector, Schema, check_bounds
from .types import Constraint, Invalid, Kind, Outcome, Path, Transform

_MISMATCH = object()


@dataclass(frozen=True, slots=True)
class ScalarSchema(Schema):
    """Base for leaf schemas: narrow, transform, then run checks."""

    transforms: tuple[Transform, ...] = ()

    def _narrow(self, value: Any) -> Any:
        """Return the value as this kind, or _MISMATCH."""
        raise NotImplementedError

    def _check(self, value: Any, path: Path) -> Outcome[Any]:
        narrowed = self._narrow(value)
        if narrowed is _MISMATCH:
            return self._type_failure(path, value)

        for transform in self.transforms:
            try:
                narrowed = transform(narrowed)
            except Exception as e:
                failure = self._failure(path, Constraint.TRANSFORM, error=str(e))
                return Invalid((failure,))

        collector = FailureCollector()
        collector.run(self.checks, narrowed, path, self.title)
        return collector.outcome(narrowed)

    def transform(self, fn: Transform) -> ScalarSchema:
        """
        Apply `fn` to the value after the type check and before constraints.

        Usage:
            string().transform(str.strip).min_length(1)
        """
        if not callable(fn):
            raise TypeError(f"Transform must be callable, got {type(fn).__name__}")
        return replace(self, transforms=(*self.transforms, fn))


def _literals(values: Iterable[Any], accepts: Any, what: str) -> tuple[Any, ...]:
    literals = tuple(values)
    if not literals:
        raise ValueError(f"Expected at least one {what} literal")
    for literal in literals:
        if isinstance(literal, bool) or not isinstance(literal, accepts):
            raise TypeError(f"Expected {what} literals, got {literal!r}")
    return literals


@dataclass(frozen=True, slots=True)
class StringSchema(ScalarSchema):
    kind: ClassVar[Kind] = Kind.STRING

    def _narrow(self, value: Any) -> Any:
        return value if isinstance(value, str) else _MISMATCH

    def min_length(self, n: int) -> StringSchema:
        """Require at least `n` characters (inclusive)."""
        if n < 0:
            raise ValueError(f"minLength must be non-negative, got {n}")
        schema = self._with_check(
            Check(Constraint.MIN_LENGTH, lambda s: len(s) >= n, {"limit": n}, len)
        )
        check_bounds(schema, Constraint.MIN_LENGTH, Constraint.MAX_LENGTH)
        return schema

    def max_length(self, n: int) -> StringSchema:
        """Allow at most `n` characters (inclusive)."""
        if n < 0:
            raise ValueError(f"maxLength must be non-negative, got {n}")
        schema = self._with_check(
            Check(Constraint.MAX_LENGTH, lambda s: len(s) <= n, {"limit": n}, len)
        )
        check_bounds(schema, Constraint.MIN_LENGTH, Constraint.MAX_LENGTH)
        return schema

    def pattern(self, regex: str) -> StringSchema:
        """
        Require the string to match `regex` from its start.

        Usage:
            string().pattern(r"^[a-z]+$")
        """
        compiled = re.compile(regex)
        return self._with_check(
            Check(
                Constraint.PATTERN,
                lambda s: compiled.match(s) is not None,
                {"pattern": regex},
            )
        )

    def one_of(self, values: Iterable[str]) -> StringSchema:
        allowed = _literals(values, str, "string")
        return self._with_check(
            Check(Constraint.ONE_OF, lambda s: s in allowed, {"allowed": allowed})
        )

    def not_one_of(self, values: Iterable[str]) -> StringSchema:
        excluded = _literals(values, str, "string")
        return self._with_check(
            Check(Constraint.NOT_ONE_OF, lambda s: s not in excluded, {"excluded": excluded})
        )


@dataclass(frozen=True, slots=True)
class NumericSchema(ScalarSchema):
    """Shared bounds and literal sets for integer, unsigned and number schemas."""

    literal_types: ClassVar[tuple[type, ...]] = (int, float)

    def min(self, limit: int | float) -> NumericSchema:
        """Require value >= `limit`."""
        self._literal(limit)
        schema = self._with_check(Check(Constraint.MIN, lambda x: x >= limit, {"limit": limit}))
        check_bounds(schema, Constraint.MIN, Constraint.MAX)
        return schema

    def max(self, limit: int | float) -> NumericSchema:
        """Require value <= `limit`."""
        self._literal(limit)
        schema = self._with_check(Check(Constraint.MAX, lambda x: x <= limit, {"limit": limit}))
        check_bounds(schema, Constraint.MIN, Constraint.MAX)
        return schema

    def one_of(self, values: Iterable[int | float]) -> NumericSchema:
        allowed = _literals(values, self.literal_types, self.kind.value)
        return self._with_check(
            Check(Constraint.ONE_OF, lambda x: x in allowed, {"allowed": allowed})
        )

    def not_one_of(self, values: Iterable[int | float]) -> NumericSchema:
        """
        Reject the listed literals.

        Usage:
            integer().not_one_of([2, 3, 5, 7])
        """
        excluded = _literals(values, self.literal_types, self.kind.value)
        return self._with_check(
            Check(Constraint.NOT_ONE_OF, lambda x: x not in excluded, {"excluded": excluded})
        )

    def _literal(self, limit: Any) -> None:
        _literals((limit,), (int, float), "numeric")
        if isinstance(limit, float) and math.isnan(limit):
            raise ValueError("Numeric bounds cannot be NaN")


@dataclass(frozen=True, slots=True)
class IntegerSchema(NumericSchema):
    kind: ClassVar[Kind] = Kind.INTEGER
    literal_types: ClassVar[tuple[type, ...]] = (int,)

    def _narrow(self, value: Any) -> Any:
        if isinstance(value, bool):
            return _MISMATCH
        if isinstance(value, int):
            return value
        # Integral floats such as 3.0 narrow to 3
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return _MISMATCH


@dataclass(frozen=True, slots=True)
class UnsignedSchema(IntegerSchema):
    kind: ClassVar[Kind] = Kind.UNSIGNED

    def _narrow(self, value: Any) -> Any:
        narrowed = IntegerSchema._narrow(self, value)
        if narrowed is _MISMATCH or narrowed < 0:
            return _MISMATCH
        return narrowed


@dataclass(frozen=True, slots=True)
class NumberSchema(NumericSchema):
    kind: ClassVar[Kind] = Kind.NUMBER

    def _narrow(self, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return _MISMATCH
        return value


@dataclass(frozen=True, slots=True)
class BooleanSchema(ScalarSchema):
    kind: ClassVar[Kind] = Kind.BOOLEAN

    def _narrow(self, value: Any) -> Any:
        return value if isinstance(value, bool) else _MISMATCH

    def equals(self, expected: bool) -> BooleanSchema:
        """Require the value to be exactly `expected`."""
        if not isinstance(expected, bool):
            raise TypeError(f"Expected a bool literal, got {expected!r}")
        return self._with_check(
            Check(Constraint.EQUALS, lambda b: b is expected, {"expected": expected})
        )
