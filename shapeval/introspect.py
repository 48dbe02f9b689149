import dataclasses
import enum
import typing

import typing_inspect  # type: ignore

from shapeval.exception import SchemaError
from shapeval.schema import Schema, array, boolean, enum_, number, object_, string
from shapeval.util import (
    _DataClassParams,
    _is_generic,
    _is_literal,
    _is_optional,
    _is_union,
    _issubclass_safe,
)

_collection_types: typing.Dict[type, typing.Optional[type]] = {
    list: None,
    tuple: tuple,
    set: set,
    frozenset: frozenset,
}


def schema_from_type(
    type_: typing.Any, _parents: typing.Optional[typing.List[type]] = None
) -> Schema:
    """
    Creates a schema from a python type annotation.

    Supported types are str, int, float, bool, Optional, List, Sequence,
    Tuple[X, ...], Set, FrozenSet, Literal, enum.Enum subclasses, NewType
    and dataclasses. Enum values are loaded as members and dataclasses
    as instances.
    """
    parents = _parents or []

    # bool before int as bool is a subclass of int
    if type_ is bool:
        return boolean()
    if type_ is int:
        return number().int()
    if type_ is float:
        return number()
    if type_ is str:
        return string()
    if _is_optional(type_):
        args = [
            arg
            for arg in typing_inspect.get_args(type_, evaluate=True)
            if arg is not type(None)
        ]
        if len(args) != 1:
            raise SchemaError(f"Unable to create schema for '{type_}'")
        return schema_from_type(args[0], parents).nullable()
    if _is_union(type_):
        msg = f"Unable to create schema for '{type_}', unions are not supported"
        raise SchemaError(msg)
    if _is_literal(type_):
        return enum_(typing_inspect.get_args(type_, evaluate=True))
    if _issubclass_safe(type_, enum.Enum):
        return enum_(type_).transform(type_)
    if hasattr(type_, "__supertype__"):  # NewType
        return schema_from_type(type_.__supertype__, parents)
    if _is_generic(type_, typing.Mapping):
        raise SchemaError(f"Unable to create schema for '{type_}', use a dataclass")
    if _is_generic(type_, typing.Iterable):
        return _collection_schema(type_, parents)
    return _dataclass_schema(type_, parents)


def _collection_schema(type_: typing.Any, parents: typing.List[type]) -> Schema:
    origin = typing_inspect.get_origin(type_)
    args = typing_inspect.get_args(type_, evaluate=True)
    if origin is tuple:
        if len(args) != 2 or args[1] is not ...:
            raise SchemaError(f"Unable to create schema for '{type_}'")
        args = args[:1]
    if len(args) != 1:
        raise SchemaError(f"Unable to create schema for '{type_}'")
    schema = array(schema_from_type(args[0], parents))
    target = _collection_types.get(origin)
    if target is not None:
        return schema.transform(target)
    return schema


def _dataclass_schema(type_: typing.Any, parents: typing.List[type]) -> Schema:
    try:
        params = _DataClassParams(type_)
    except SchemaError:
        raise SchemaError(f"Unable to create schema for '{type_}'")
    if params.type_ in parents:
        msg = f"Recursive dataclass '{params.type_.__name__}' is not supported"
        raise SchemaError(msg)

    type_hints = typing.get_type_hints(params.type_)
    fields = {}
    for f in dataclasses.fields(params.type_):
        if not f.init:
            continue
        field_type = params.resolve_type(type_hints[f.name])
        schema = schema_from_type(field_type, parents + [params.type_])
        # A field is not required if either a:
        # - default value
        # - default factory
        # is provided.
        if f.default is not dataclasses.MISSING:
            schema = schema.default(f.default)
        elif f.default_factory is not dataclasses.MISSING:  # type: ignore
            schema = schema.default(f.default_factory())  # type: ignore
        fields[f.name] = schema

    cls = params.type_
    return object_(fields).transform(lambda data: cls(**data))
