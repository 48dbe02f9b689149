# -*- coding: utf-8 -*-

__all__ = (
    "array",
    "ArraySchema",
    "BaseShapevalError",
    "boolean",
    "BooleanSchema",
    "DefaultSchema",
    "enum_",
    "EnumSchema",
    "ErrorKind",
    "FieldError",
    "NullableSchema",
    "number",
    "NumberSchema",
    "object_",
    "ObjectSchema",
    "OptionalSchema",
    "parse",
    "ParseResult",
    "RefinedSchema",
    "safe_parse",
    "Schema",
    "SchemaError",
    "schema_from_type",
    "SchemaMixin",
    "string",
    "StringFormat",
    "StringSchema",
    "TransformedSchema",
    "ValidationError",
)

from shapeval.checks import StringFormat
from shapeval.exception import (
    BaseShapevalError,
    ErrorKind,
    FieldError,
    SchemaError,
    ValidationError,
)
from shapeval.introspect import schema_from_type
from shapeval.mixin import SchemaMixin
from shapeval.schema import (
    ArraySchema,
    BooleanSchema,
    DefaultSchema,
    EnumSchema,
    NullableSchema,
    NumberSchema,
    ObjectSchema,
    OptionalSchema,
    ParseResult,
    RefinedSchema,
    Schema,
    StringSchema,
    TransformedSchema,
    array,
    boolean,
    enum_,
    number,
    object_,
    parse,
    safe_parse,
    string,
)
