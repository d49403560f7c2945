"""
Container schemas: objects and arrays.

Containers validate their own shape first, then hand every declared child
its sub-value at the extended path and merge all child outcomes. Siblings
are always fully evaluated, so one pass reports every problem.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, ClassVar, TypeVar

from .core import Check, FailureCollector, Schema, check_bounds
from .scalars import (
    BooleanSchema,
    IntegerSchema,
    NumberSchema,
    StringSchema,
    UnsignedSchema,
)
from .types import MISSING, Constraint, Kind, Outcome, Path

S = TypeVar("S", bound=Schema)


class UnknownKeys(Enum):
    """What an object schema does with keys it does not declare."""

    IGNORE = "ignore"
    PASSTHROUGH = "passthrough"
    REJECT = "reject"


def _configure(schema: S, build: Callable[[S], Schema] | None) -> Schema:
    """Run a configuration callback once, at construction time."""
    if build is None:
        return schema
    configured = build(schema)
    if not isinstance(configured, type(schema)):
        raise TypeError(
            f"Configuration callback must return a {type(schema).__name__}, "
            f"got {type(configured).__name__}"
        )
    return configured


def _require_schema(child: Any) -> Schema:
    if not isinstance(child, Schema):
        raise TypeError(f"Expected a schema, got {type(child).__name__}")
    return child


@dataclass(frozen=True, slots=True)
class ObjectSchema(Schema):
    """
    Validator for mappings with declared properties.

    Properties are validated in declaration order. The Valid output holds
    the validated value of every declared property that was present.
    """

    kind: ClassVar[Kind] = Kind.OBJECT

    properties: tuple[tuple[str, Schema], ...] = ()
    unknown: UnknownKeys = UnknownKeys.IGNORE

    def _check(self, value: Any, path: Path) -> Outcome[Any]:
        if not isinstance(value, dict):
            return self._type_failure(path, value)

        collector = FailureCollector()
        collector.run(self.checks, value, path, self.title)

        if not self.properties and self.unknown is not UnknownKeys.REJECT:
            return collector.outcome(value)

        output: dict[str, Any] = {}
        for key, schema in self.properties:
            result = collector.take(schema.validate_at(value.get(key, MISSING), (*path, key)))
            if result is not MISSING:
                output[key] = result

        declared = {key for key, _ in self.properties}
        for key, item in value.items():
            if key in declared:
                continue
            if self.unknown is UnknownKeys.REJECT:
                collector.add(self._failure((*path, key), Constraint.UNKNOWN_PROPERTY))
            elif self.unknown is UnknownKeys.PASSTHROUGH:
                output[key] = item

        return collector.outcome(output)

    def key(self, name: str, schema: Schema) -> ObjectSchema:
        """
        Declare a property. Redeclaring a name replaces it in place.

        Usage:
            object().key("id", integer().min(1))
        """
        if not isinstance(name, str):
            raise TypeError(f"Property names must be strings, got {name!r}")
        schema = _require_schema(schema)
        for i, (existing, _) in enumerate(self.properties):
            if existing == name:
                properties = (*self.properties[:i], (name, schema), *self.properties[i + 1 :])
                return replace(self, properties=properties)
        return replace(self, properties=(*self.properties, (name, schema)))

    def string(self, name: str, build: Callable[[StringSchema], Schema] | None = None) -> ObjectSchema:
        return self.key(name, _configure(StringSchema(), build))

    def integer(self, name: str, build: Callable[[IntegerSchema], Schema] | None = None) -> ObjectSchema:
        return self.key(name, _configure(IntegerSchema(), build))

    def unsigned(self, name: str, build: Callable[[UnsignedSchema], Schema] | None = None) -> ObjectSchema:
        return self.key(name, _configure(UnsignedSchema(), build))

    def number(self, name: str, build: Callable[[NumberSchema], Schema] | None = None) -> ObjectSchema:
        return self.key(name, _configure(NumberSchema(), build))

    def boolean(self, name: str, build: Callable[[BooleanSchema], Schema] | None = None) -> ObjectSchema:
        return self.key(name, _configure(BooleanSchema(), build))

    def object(self, name: str, build: Callable[[ObjectSchema], Schema] | None = None) -> ObjectSchema:
        return self.key(name, _configure(ObjectSchema(), build))

    def array(self, name: str, build: Callable[[ArraySchema], Schema] | None = None) -> ObjectSchema:
        return self.key(name, _configure(ArraySchema(), build))

    def unknown_keys(self, policy: UnknownKeys | str) -> ObjectSchema:
        return replace(self, unknown=UnknownKeys(policy))

    def strict(self) -> ObjectSchema:
        """Reject undeclared keys."""
        return self.unknown_keys(UnknownKeys.REJECT)


@dataclass(frozen=True, slots=True)
class ArraySchema(Schema):
    """
    Validator for sequences.

    Either every element is validated against one item schema, or the i-th
    element against the i-th positional schema. minItems/maxItems are
    checked alongside the elements, not instead of them.
    """

    kind: ClassVar[Kind] = Kind.ARRAY

    item_schema: Schema | None = None
    positions: tuple[Schema, ...] | None = None

    def _check(self, value: Any, path: Path) -> Outcome[Any]:
        if not isinstance(value, list):
            return self._type_failure(path, value)

        collector = FailureCollector()
        collector.run(self.checks, value, path, self.title)

        if self.positions is not None:
            items = []
            for index, schema in enumerate(self.positions):
                item = value[index] if index < len(value) else MISSING
                result = collector.take(schema.validate_at(item, (*path, index)))
                if result is not MISSING:
                    items.append(result)
            items.extend(value[len(self.positions) :])
        elif self.item_schema is not None:
            items = [
                collector.take(self.item_schema.validate_at(item, (*path, index)))
                for index, item in enumerate(value)
            ]
        else:
            items = list(value)

        return collector.outcome(items)

    def items(self, schema: Schema) -> ArraySchema:
        """
        Validate every element against `schema`.

        Usage:
            array().items(string().min_length(1))
        """
        if self.positions is not None:
            raise ValueError("Array already has positional schemas")
        return replace(self, item_schema=_require_schema(schema))

    def positional(self, *schemas: Schema) -> ArraySchema:
        """Validate the i-th element against the i-th schema."""
        if self.item_schema is not None:
            raise ValueError("Array already has an item schema")
        if not schemas:
            raise ValueError("Expected at least one positional schema")
        return replace(self, positions=tuple(_require_schema(s) for s in schemas))

    def min_items(self, n: int) -> ArraySchema:
        if n < 0:
            raise ValueError(f"minItems must be non-negative, got {n}")
        schema = self._with_check(
            Check(Constraint.MIN_ITEMS, lambda a: len(a) >= n, {"limit": n}, len)
        )
        check_bounds(schema, Constraint.MIN_ITEMS, Constraint.MAX_ITEMS)
        return schema

    def max_items(self, n: int) -> ArraySchema:
        if n < 0:
            raise ValueError(f"maxItems must be non-negative, got {n}")
        schema = self._with_check(
            Check(Constraint.MAX_ITEMS, lambda a: len(a) <= n, {"limit": n}, len)
        )
        check_bounds(schema, Constraint.MIN_ITEMS, Constraint.MAX_ITEMS)
        return schema

