"""
Builder entry points for okschema.

Each function returns a fresh, unconstrained schema to configure fluently:

    schema = (
        object()
        .string("username", lambda s: s.min_length(1).max_length(20))
        .integer("luckyNumber", lambda n: n.not_one_of([2, 3, 5, 7, 11, 13, 17]))
    )
"""

from __future__ import annotations

from typing import Any

from .containers import ArraySchema, ObjectSchema
from .core import Schema
from .scalars import (
    BooleanSchema,
    IntegerSchema,
    NumberSchema,
    StringSchema,
    UnsignedSchema,
)


def string() -> StringSchema:
    return StringSchema()


def integer() -> IntegerSchema:
    return IntegerSchema()


def unsigned() -> UnsignedSchema:
    return UnsignedSchema()


def number() -> NumberSchema:
    return NumberSchema()


def boolean() -> BooleanSchema:
    return BooleanSchema()


def object() -> ObjectSchema:
    return ObjectSchema()


def array() -> ArraySchema:
    return ArraySchema()


_TYPE_SCHEMAS: dict[type, type[Schema]] = {
    bool: BooleanSchema,
    int: IntegerSchema,
    float: NumberSchema,
    str: StringSchema,
    dict: ObjectSchema,
    list: ArraySchema,
}


def to_schema(shorthand: Any) -> Schema:
    """
    Coerce shorthand to a schema.

    Conversion rules:
        Schema -> pass through
        str | int | float | bool -> leaf schema of that kind
        dict | list (the types) -> unconstrained container
        dict instance -> ObjectSchema, every property required
        [x] -> ArraySchema with item schema x
        [x, y, ...] -> ArraySchema with positional schemas
    """
    if isinstance(shorthand, Schema):
        return shorthand

    if isinstance(shorthand, type):
        if shorthand in _TYPE_SCHEMAS:
            return _TYPE_SCHEMAS[shorthand]()
        raise TypeError(f"No schema for type {shorthand.__name__}")

    if isinstance(shorthand, dict):
        schema = ObjectSchema()
        for key, value in shorthand.items():
            schema = schema.key(key, to_schema(value))
        return schema

    if isinstance(shorthand, list):
        if len(shorthand) == 0:
            raise ValueError("Empty list cannot be converted to a schema")
        if len(shorthand) == 1:
            return ArraySchema().items(to_schema(shorthand[0]))
        return ArraySchema().positional(*(to_schema(s) for s in shorthand))

    raise TypeError(f"Cannot convert {type(shorthand).__name__} to a schema")
