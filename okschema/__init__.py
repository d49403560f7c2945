"""
okschema - composable schema validation for JSON-like values.

Usage:
    from okschema import object, validate

    schema = (
        object()
        .string("username", lambda s: s.min_length(1).max_length(20))
        .integer("luckyNumber", lambda n: n.not_one_of([2, 3, 5, 7, 11, 13, 17]))
    )

    result = schema.validate({"username": "", "luckyNumber": 7})
    # Invalid(failures=(Failure(path=('username',), constraint=minLength, ...), ...))
"""

import logging

from .builders import (
    array,
    boolean,
    integer,
    number,
    object,
    string,
    to_schema,
    unsigned,
)
from .containers import ArraySchema, ObjectSchema, UnknownKeys
from .core import Schema
from .errors import ValidationError
from .scalars import (
    BooleanSchema,
    IntegerSchema,
    NumberSchema,
    StringSchema,
    UnsignedSchema,
)
from .schema import to_pydantic, validate
from .types import (
    MISSING,
    Constraint,
    Failure,
    Invalid,
    Kind,
    Outcome,
    Path,
    Valid,
    format_path,
    kind_of,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Outcome types
    "Valid",
    "Invalid",
    "Outcome",
    "Failure",
    "Constraint",
    "Path",
    "Kind",
    "MISSING",
    "kind_of",
    "format_path",
    "ValidationError",
    # Schemas
    "Schema",
    "StringSchema",
    "IntegerSchema",
    "UnsignedSchema",
    "NumberSchema",
    "BooleanSchema",
    "ObjectSchema",
    "ArraySchema",
    "UnknownKeys",
    # Builders
    "object",
    "array",
    "string",
    "integer",
    "unsigned",
    "number",
    "boolean",
    "to_schema",
    # Schema operations
    "validate",
    "to_pydantic",
]
