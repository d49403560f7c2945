"""
Schema operations for okschema.

Provides validate() and to_pydantic() functions.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal
from typing import Optional as TypingOptional

from pydantic import BaseModel, ConfigDict, Field, create_model

from .builders import to_schema
from .containers import ArraySchema, ObjectSchema, UnknownKeys
from .core import Schema
from .scalars import (
    BooleanSchema,
    IntegerSchema,
    NumberSchema,
    ScalarSchema,
    StringSchema,
    UnsignedSchema,
)
from .types import Constraint, Outcome

logger = logging.getLogger(__name__)

_UNMAPPED = (Constraint.NOT_ONE_OF, Constraint.TEST)

_EXTRA = {
    UnknownKeys.IGNORE: "ignore",
    UnknownKeys.PASSTHROUGH: "allow",
    UnknownKeys.REJECT: "forbid",
}


def validate(data: Any, schema: Schema | dict[str, Any] | list[Any] | type) -> Outcome[Any]:
    """
    Validate data against a schema or schema shorthand.

    Returns:
        Valid(value) if validation passes
        Invalid(failures) listing every failure otherwise

    Usage:
        schema = object().string("name").integer("age", lambda n: n.min(0))
        result = validate({"name": "Alice", "age": 30}, schema)

        result = validate({"name": "Alice"}, {"name": str})
    """
    return to_schema(schema).validate(data)


def to_pydantic(name: str, schema: ObjectSchema | dict[str, Any]) -> type[BaseModel]:
    """
    Compile an object schema to a Pydantic model.

    Args:
        name: Name of the generated model class
        schema: Object schema, or dict shorthand for one

    Returns:
        A Pydantic BaseModel subclass

    Usage:
        User = to_pydantic("User", object().string("name").integer("age").optional())
        user = User(name="Alice")
    """
    compiled = to_schema(schema)
    if not isinstance(compiled, ObjectSchema):
        raise TypeError("Schema must be an object schema")

    fields: dict[str, Any] = {}
    for key, child in compiled.properties:
        fields[key] = _pydantic_field(f"{name}_{key}", child)

    config = ConfigDict(extra=_EXTRA[compiled.unknown])
    return create_model(name, __config__=config, **fields)


def _pydantic_field(name: str, schema: Schema) -> tuple[Any, Any]:
    """Extract Pydantic field type and FieldInfo from a schema."""
    field_type = _pydantic_type(name, schema)
    if schema.is_optional:
        field_type = TypingOptional[field_type]

    default = None if schema.is_optional else ...
    return (field_type, Field(default, title=schema.title, description=schema.description))


def _pydantic_type(name: str, schema: Schema) -> Any:
    """Pydantic type of a schema, including None when it is nullable."""
    base = _base_type(name, schema)
    return TypingOptional[base] if schema.is_nullable else base


def _base_type(name: str, schema: Schema) -> Any:
    _log_unmapped(name, schema)

    choice = schema.constraint_detail(Constraint.ONE_OF)
    if choice is not None:
        return Literal[choice["allowed"]]

    match schema:
        case StringSchema():
            regex = _detail(schema, Constraint.PATTERN, "pattern")
            return _annotated(
                str,
                min_length=_limit(schema, Constraint.MIN_LENGTH),
                max_length=_limit(schema, Constraint.MAX_LENGTH),
                # Pydantic searches anywhere; okschema matches from the start
                pattern=None if regex is None else f"^(?:{regex})",
            )
        case UnsignedSchema():
            lower = _limit(schema, Constraint.MIN)
            return _annotated(
                int,
                ge=0 if lower is None else max(lower, 0),
                le=_limit(schema, Constraint.MAX),
            )
        case IntegerSchema() | NumberSchema():
            return _annotated(
                int if isinstance(schema, IntegerSchema) else float,
                ge=_limit(schema, Constraint.MIN),
                le=_limit(schema, Constraint.MAX),
            )
        case BooleanSchema():
            expected = _detail(schema, Constraint.EQUALS, "expected")
            return bool if expected is None else Literal[expected]
        case ObjectSchema(properties=()) if schema.unknown is not UnknownKeys.REJECT:
            return dict[str, Any]
        case ObjectSchema():
            return to_pydantic(name, schema)
        case ArraySchema(positions=positions) if positions is not None:
            _log_positional(name, positions)
            types = tuple(
                _pydantic_type(f"{name}_{i}", position) for i, position in enumerate(positions)
            )
            return tuple[types]
        case ArraySchema(item_schema=item_schema):
            item_type = Any if item_schema is None else _pydantic_type(f"{name}_item", item_schema)
            return _annotated(
                list[item_type],  # type: ignore[valid-type]
                min_length=_limit(schema, Constraint.MIN_ITEMS),
                max_length=_limit(schema, Constraint.MAX_ITEMS),
            )

    return Any


def _annotated(base: Any, **constraints: Any) -> Any:
    constraints = {k: v for k, v in constraints.items() if v is not None}
    if not constraints:
        return base
    return Annotated[base, Field(**constraints)]


def _detail(schema: Schema, constraint: Constraint, key: str) -> Any:
    detail = schema.constraint_detail(constraint)
    return None if detail is None else detail[key]


def _limit(schema: Schema, constraint: Constraint) -> Any:
    return _detail(schema, constraint, "limit")


def _log_unmapped(name: str, schema: Schema) -> None:
    for check in schema.checks:
        if check.constraint in _UNMAPPED:
            logger.debug("Skipping %s on %s: no Pydantic equivalent", check.constraint.value, name)
    if isinstance(schema, ScalarSchema) and schema.transforms:
        logger.debug("Skipping %d transform(s) on %s", len(schema.transforms), name)


def _log_positional(name: str, positions: tuple[Schema, ...]) -> None:
    # Pydantic tuples have a fixed length
    logger.debug("Extra elements beyond %d position(s) on %s are rejected", len(positions), name)
    for i, position in enumerate(positions):
        if position.is_optional:
            logger.debug("Optional position %d on %s is required by Pydantic", i, name)
