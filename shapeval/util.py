# -*- coding: utf-8 -*-
import dataclasses
import math
import typing

import typing_inspect  # type: ignore

from shapeval.exception import SchemaError

JsonDict = typing.Dict[str, typing.Any]

TypeOrTypes = typing.Union[
    type, typing.Tuple[typing.Union[type, typing.Tuple[typing.Any, ...]], ...]
]


class _Missing(object):
    """Marks a key absent from the input, as opposed to a None value."""

    _instance: typing.Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def _get_type_name(value: typing.Any) -> str:
    """
    Returns the JSON-ish name of the runtime type of value,
    as used in type mismatch messages.
    """
    if value is None:
        return "null"
    # bool is checked first as it is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, float) and math.isnan(value):
        return "nan"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, typing.Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return value.__class__.__name__


def _format_literal(value: typing.Any) -> str:
    if isinstance(value, str):
        return f"'{value}'"
    return repr(value)


def _issubclass_safe(field_type: type, types: TypeOrTypes) -> bool:
    try:
        return issubclass(field_type, types)
    except (TypeError, AttributeError):
        return False


def _is_generic(field_type: type, types: TypeOrTypes) -> bool:
    return (
        typing_inspect.is_generic_type(field_type)
        or typing_inspect.is_tuple_type(field_type)
    ) and _issubclass_safe(typing_inspect.get_origin(field_type), types)


def _is_union(field_type: type) -> bool:
    return typing_inspect.is_union_type(field_type)  # type: ignore


def _is_optional(field_type: type) -> bool:
    return typing_inspect.is_optional_type(field_type)  # type: ignore


def _is_literal(field_type: type) -> bool:
    return typing_inspect.is_literal_type(field_type)  # type: ignore


@dataclasses.dataclass(init=False)
class _DataClassParams(object):
    type_: type
    arguments: typing.Tuple[type, ...]
    parameters: typing.Tuple[typing.Any, ...]

    def __init__(self, type_: type) -> None:
        self.arguments = typing_inspect.get_args(type_, evaluate=True)
        self.type_ = typing_inspect.get_origin(type_) or type_
        self.parameters = typing_inspect.get_parameters(self.type_)
        if not dataclasses.is_dataclass(self.type_):
            raise SchemaError(f"{self.type_} is not a dataclass")

    def resolve_type(self, field_type: typing.Any) -> typing.Any:
        # Resolve type in case of generic
        try:
            index = self.parameters.index(field_type)
            field_type = self.arguments[index]
        except ValueError:
            pass
        return field_type
