import typing

from shapeval.introspect import schema_from_type
from shapeval.schema import Schema

T = typing.TypeVar("T", bound="SchemaMixin")


class SchemaMixin:
    """Base class for dataclasses that provides load and load_json methods."""

    @classmethod
    def load(cls: typing.Type[T], data: typing.Any) -> T:
        """Validate the given data and return a new object."""
        return typing.cast(T, cls.schema().parse(data))

    @classmethod
    def load_json(cls: typing.Type[T], json_string: str) -> T:
        """Validate the given JSON string and return a new object."""
        return typing.cast(T, cls.schema().parse_json(json_string))

    @classmethod
    def schema(cls) -> Schema:
        """Schema instance for this class."""
        # looked up in the class itself so that subclasses get their own schema
        schema = cls.__dict__.get("_shapeval_schema")
        if schema is None:
            schema = schema_from_type(cls)
            setattr(cls, "_shapeval_schema", schema)
        return typing.cast(Schema, schema)
