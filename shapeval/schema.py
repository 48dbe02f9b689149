import abc
import copy
import dataclasses
import enum
import logging
import math
import types
import typing

import rapidjson  # type: ignore

from shapeval.checks import (
    Check,
    Format,
    Integer,
    Maximum,
    MaxLength,
    Minimum,
    MinLength,
    Pattern,
    StringFormat,
)
from shapeval.exception import (
    ErrorKind,
    FieldError,
    PathItem,
    SchemaError,
    ValidationError,
)
from shapeval.util import (
    MISSING,
    JsonDict,
    _format_literal,
    _get_type_name,
    _issubclass_safe,
)

logger = logging.getLogger(__name__)

Path = typing.Tuple[PathItem, ...]
Errors = typing.List[FieldError]
Predicate = typing.Callable[[typing.Any], bool]
TransformCallable = typing.Callable[[typing.Any], typing.Any]

JSON_SCHEMA_VERSION = "http://json-schema.org/draft-04/schema#"


class _Invalid(object):
    def __repr__(self) -> str:
        return "INVALID"


# Returned by Schema._run() when the value failed validation,
# the reasons being appended to the errors list.
INVALID = _Invalid()


@dataclasses.dataclass(frozen=True)
class ParseResult(object):
    """
    Outcome of :meth:`Schema.safe_parse`.

    :param ok: True if the data is valid
    :param value: the parsed value, None when not ok
    :param errors: the failures, empty when ok
    """

    ok: bool
    value: typing.Any = None
    errors: typing.List[FieldError] = dataclasses.field(default_factory=list)

    def unwrap(self) -> typing.Any:
        """Returns the parsed value or raises the ValidationError."""
        if not self.ok:
            raise ValidationError.from_errors(self.errors)
        return self.value


class Schema(abc.ABC):
    """
    Base class of every schema.
    Schemas are immutable: every method returns a new schema.
    """

    @property
    def is_optional(self) -> bool:
        """True if an object field using this schema may be absent."""
        return False

    def parse(self, data: typing.Any) -> typing.Any:
        """
        Validates data and returns the parsed value.
        Raises ValidationError listing every failure otherwise.
        """
        errors: Errors = []
        value = self._run(data, (), errors)
        if errors:
            logger.debug("Validation failed with %d error(s)", len(errors))
            raise ValidationError.from_errors(errors)
        return value

    def safe_parse(self, data: typing.Any) -> ParseResult:
        """
        Same as :meth:`parse` but returns a ParseResult instead of raising.
        """
        errors: Errors = []
        value = self._run(data, (), errors)
        if errors:
            return ParseResult(ok=False, errors=errors)
        return ParseResult(ok=True, value=value)

    def parse_json(self, json_string: typing.Union[str, bytes]) -> typing.Any:
        """
        Decodes the given JSON document and parses the result.
        """
        try:
            data = rapidjson.loads(json_string)
        except rapidjson.JSONDecodeError as exc:
            raise ValidationError.from_errors(
                [FieldError((), ErrorKind.INVALID_JSON, f"Invalid JSON: {exc}")]
            ) from exc
        return self.parse(data)

    def json_schema(self) -> JsonDict:
        """
        Returns a JSON schema describing the data accepted by this schema.
        Refinements and transforms cannot be expressed and are left out.
        """
        return {"$schema": JSON_SCHEMA_VERSION, **self._json_schema()}

    def optional(self) -> "OptionalSchema":
        return OptionalSchema(self)

    def nullable(self) -> "NullableSchema":
        return NullableSchema(self)

    def default(self, value: typing.Any) -> "DefaultSchema":
        """
        Returns a schema substituting value when the field is absent.
        The default value is not validated.
        """
        return DefaultSchema(self, value)

    def refine(
        self, predicate: Predicate, message: str = "Invalid input"
    ) -> "RefinedSchema":
        """
        Returns a schema also requiring predicate(value) to be true
        once this schema succeeded.
        """
        if not callable(predicate):
            raise SchemaError(f"{predicate!r} is not callable")
        return RefinedSchema(self, predicate, message)

    def transform(self, fn: TransformCallable) -> "TransformedSchema":
        """
        Returns a schema applying fn to the value once this schema succeeded.
        """
        if not callable(fn):
            raise SchemaError(f"{fn!r} is not callable")
        return TransformedSchema(self, fn)

    def _run(self, value: typing.Any, path: Path, errors: Errors) -> typing.Any:
        if value is MISSING:
            errors.append(FieldError(path, ErrorKind.REQUIRED, "Required"))
            return INVALID
        return self._parse(value, path, errors)

    @abc.abstractmethod
    def _parse(self, value: typing.Any, path: Path, errors: Errors) -> typing.Any:
        """
        Validates a present value, appending failures to errors.
        Returns the parsed value or INVALID.
        """

    @abc.abstractmethod
    def _json_schema(self) -> JsonDict:
        pass


@dataclasses.dataclass(frozen=True)
class _PrimitiveSchema(Schema):
    checks: typing.Tuple[Check, ...] = ()

    type_name: typing.ClassVar[str]

    @abc.abstractmethod
    def _accepts(self, value: typing.Any) -> bool:
        pass

    def _with_check(self, check: Check) -> typing.Any:
        return dataclasses.replace(self, checks=self.checks + (check,))

    def _check_range(self, check: Check, lower: type, upper: type, label: str) -> None:
        # the bound of each range check is its single field
        checks = self.checks + (check,)
        lows = [dataclasses.astuple(c)[0] for c in checks if isinstance(c, lower)]
        highs = [dataclasses.astuple(c)[0] for c in checks if isinstance(c, upper)]
        if lows and highs and max(lows) > min(highs):
            raise SchemaError(
                f"minimum {label}{max(lows)} is greater than "
                f"maximum {label}{min(highs)}"
            )

    def _parse(self, value: typing.Any, path: Path, errors: Errors) -> typing.Any:
        if not self._accepts(value):
            errors.append(
                FieldError(
                    path,
                    ErrorKind.TYPE_MISMATCH,
                    f"Expected {self.type_name}, received {_get_type_name(value)}",
                )
            )
            return INVALID
        valid = True
        # every failing check is reported, not only the first one
        for check in self.checks:
            if not check(value):
                errors.append(FieldError(path, check.kind, check.message(value)))
                valid = False
        return value if valid else INVALID

    def _json_schema(self) -> JsonDict:
        schema: JsonDict = {"type": self.type_name}
        for check in self.checks:
            schema.update(check.json_schema())
        return schema


def _check_bound(name: str, value: typing.Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaError(f"{name} must be a number, got {value!r}")


@dataclasses.dataclass(frozen=True)
class StringSchema(_PrimitiveSchema):
    type_name = "string"

    def _accepts(self, value: typing.Any) -> bool:
        return isinstance(value, str)

    def min(self, length: int) -> "StringSchema":
        """Requires at least length characters."""
        return self._with_length(MinLength(length))

    def max(self, length: int) -> "StringSchema":
        """Requires at most length characters."""
        return self._with_length(MaxLength(length))

    def email(self) -> "StringSchema":
        return self._with_check(Format(StringFormat.EMAIL))

    def url(self) -> "StringSchema":
        return self._with_check(Format(StringFormat.URL))

    def uuid(self) -> "StringSchema":
        return self._with_check(Format(StringFormat.UUID))

    def datetime(self) -> "StringSchema":
        """Requires an ISO 8601 date-time."""
        return self._with_check(Format(StringFormat.DATETIME))

    def regex(self, pattern: str) -> "StringSchema":
        """Requires the value to match the given regular expression."""
        return self._with_check(Pattern(pattern))

    def _with_length(self, check: typing.Union[MinLength, MaxLength]) -> "StringSchema":
        length = check.length
        if isinstance(length, bool) or not isinstance(length, int) or length < 0:
            raise SchemaError(f"length must be a non-negative integer, got {length!r}")
        self._check_range(check, MinLength, MaxLength, "length ")
        return self._with_check(check)


@dataclasses.dataclass(frozen=True)
class NumberSchema(_PrimitiveSchema):
    type_name = "number"

    def _accepts(self, value: typing.Any) -> bool:
        # bool is a subclass of int but is never a number here
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return not math.isnan(value)

    def min(self, minimum: typing.Union[int, float]) -> "NumberSchema":
        """Requires value >= minimum."""
        _check_bound("minimum", minimum)
        return self._with_bound(Minimum(minimum))

    def max(self, maximum: typing.Union[int, float]) -> "NumberSchema":
        """Requires value <= maximum."""
        _check_bound("maximum", maximum)
        return self._with_bound(Maximum(maximum))

    def _with_bound(self, check: typing.Union[Minimum, Maximum]) -> "NumberSchema":
        self._check_range(check, Minimum, Maximum, "")
        return self._with_check(check)

    def int(self) -> "NumberSchema":
        return self._with_check(Integer())


@dataclasses.dataclass(frozen=True)
class BooleanSchema(_PrimitiveSchema):
    type_name = "boolean"

    def _accepts(self, value: typing.Any) -> bool:
        return isinstance(value, bool)


@dataclasses.dataclass(frozen=True)
class EnumSchema(Schema):
    values: typing.Tuple[typing.Any, ...]

    def __post_init__(self) -> None:
        if not self.values:
            raise SchemaError("an enum needs at least one value")
        for value in self.values:
            if value is not None and not isinstance(value, (str, int, float, bool)):
                raise SchemaError(f"{value!r} is not a literal value")

    @property
    def options(self) -> typing.List[typing.Any]:
        return list(self.values)

    def _parse(self, value: typing.Any, path: Path, errors: Errors) -> typing.Any:
        value_type = _get_type_name(value)
        for allowed in self.values:
            # 1 == True in python, so the types are compared too
            if _get_type_name(allowed) == value_type and allowed == value:
                return allowed
        expected = " | ".join(_format_literal(v) for v in self.values)
        errors.append(
            FieldError(
                path,
                ErrorKind.INVALID_ENUM_VALUE,
                f"Invalid enum value. Expected {expected}, "
                f"received {_format_literal(value)}",
            )
        )
        return INVALID

    def _json_schema(self) -> JsonDict:
        schema: JsonDict = {}
        member_types = set(_get_type_name(v) for v in self.values)
        if len(member_types) == 1:
            schema["type"] = member_types.pop()
        schema["enum"] = list(self.values)
        return schema


FieldMap = typing.Mapping[str, Schema]
FieldItems = typing.Tuple[typing.Tuple[str, Schema], ...]


@dataclasses.dataclass(frozen=True)
class ObjectSchema(Schema):
    """
    Schema of a mapping with a fixed set of fields.
    Keys of the input that are not fields are dropped,
    or reported if strict is true.

    The given fields mapping is stored as a tuple of (name, schema)
    pairs so that the schema stays hashable and copyable,
    use :attr:`shape` to get it back as a mapping.
    """

    fields: typing.Union[FieldMap, FieldItems]
    strict_keys: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.fields, typing.Mapping):
            raise SchemaError(f"fields must be a mapping, got {self.fields!r}")
        for name, schema in self.fields.items():
            if not isinstance(name, str):
                raise SchemaError(f"field name {name!r} is not a string")
            if not isinstance(schema, Schema):
                raise SchemaError(f"field {name!r} is not a schema: {schema!r}")
        object.__setattr__(self, "fields", tuple(self.fields.items()))

    @property
    def shape(self) -> FieldMap:
        """Read-only mapping of the fields, in declaration order."""
        return types.MappingProxyType(dict(self.fields))

    def extend(self, fields: FieldMap) -> "ObjectSchema":
        """
        Returns a new schema with the given fields added,
        replacing the existing ones with the same name.
        """
        if isinstance(fields, ObjectSchema):
            fields = fields.shape
        return ObjectSchema({**self.shape, **fields}, self.strict_keys)

    def merge(self, other: "ObjectSchema") -> "ObjectSchema":
        """
        Returns a new schema with the fields of both schemas,
        fields of other taking precedence.
        """
        if not isinstance(other, ObjectSchema):
            raise SchemaError(f"cannot merge with {other!r}, not an object schema")
        return ObjectSchema({**self.shape, **other.shape}, other.strict_keys)

    def pick(self, *names: str) -> "ObjectSchema":
        shape = self._check_names(names)
        return ObjectSchema({n: shape[n] for n in names}, self.strict_keys)

    def omit(self, *names: str) -> "ObjectSchema":
        self._check_names(names)
        return ObjectSchema(
            {n: s for n, s in self.fields if n not in names}, self.strict_keys
        )

    def strict(self) -> "ObjectSchema":
        """Returns a schema failing on keys which are not fields."""
        return ObjectSchema(self.shape, strict_keys=True)

    def _check_names(self, names: typing.Iterable[str]) -> FieldMap:
        shape = self.shape
        unknown = [n for n in names if n not in shape]
        if unknown:
            raise SchemaError(f"unknown field(s): {', '.join(unknown)}")
        return shape

    def _parse(self, value: typing.Any, path: Path, errors: Errors) -> typing.Any:
        if not isinstance(value, typing.Mapping):
            errors.append(
                FieldError(
                    path,
                    ErrorKind.TYPE_MISMATCH,
                    f"Expected object, received {_get_type_name(value)}",
                )
            )
            return INVALID
        error_count = len(errors)
        result = {}
        for name, schema in self.fields:
            item = schema._run(value.get(name, MISSING), path + (name,), errors)
            if item is not MISSING and item is not INVALID:
                result[name] = item
        if self.strict_keys:
            names = {name for name, _ in self.fields}
            unknown = [k for k in value.keys() if k not in names]
            if unknown:
                keys = ", ".join(_format_literal(k) for k in unknown)
                errors.append(
                    FieldError(
                        path,
                        ErrorKind.UNRECOGNIZED_KEYS,
                        f"Unrecognized key(s) in object: {keys}",
                    )
                )
        if len(errors) > error_count:
            return INVALID
        return result

    def _json_schema(self) -> JsonDict:
        return {
            "type": "object",
            "properties": {n: s._json_schema() for n, s in self.fields},
            "required": [n for n, s in self.fields if not s.is_optional],
            "additionalProperties": not self.strict_keys,
        }


@dataclasses.dataclass(frozen=True)
class ArraySchema(Schema):
    items: Schema

    def _parse(self, value: typing.Any, path: Path, errors: Errors) -> typing.Any:
        if not isinstance(value, (list, tuple)):
            errors.append(
                FieldError(
                    path,
                    ErrorKind.TYPE_MISMATCH,
                    f"Expected array, received {_get_type_name(value)}",
                )
            )
            return INVALID
        error_count = len(errors)
        result = [
            self.items._run(item, path + (index,), errors)
            for index, item in enumerate(value)
        ]
        if len(errors) > error_count:
            return INVALID
        return result

    def _json_schema(self) -> JsonDict:
        return {"type": "array", "items": self.items._json_schema()}


@dataclasses.dataclass(frozen=True)
class _WrapperSchema(Schema):
    inner: Schema

    @property
    def is_optional(self) -> bool:
        return self.inner.is_optional

    @abc.abstractmethod
    def _run(self, value: typing.Any, path: Path, errors: Errors) -> typing.Any:
        """Applies the wrapper behaviour around inner._run()."""

    def _parse(self, value: typing.Any, path: Path, errors: Errors) -> typing.Any:
        return self._run(value, path, errors)

    def _json_schema(self) -> JsonDict:
        return self.inner._json_schema()


@dataclasses.dataclass(frozen=True)
class OptionalSchema(_WrapperSchema):
    @property
    def is_optional(self) -> bool:
        return True

    def _run(self, value: typing.Any, path: Path, errors: Errors) -> typing.Any:
        if value is MISSING:
            return MISSING
        return self.inner._run(value, path, errors)


@dataclasses.dataclass(frozen=True)
class NullableSchema(_WrapperSchema):
    def _run(self, value: typing.Any, path: Path, errors: Errors) -> typing.Any:
        if value is None:
            return None
        return self.inner._run(value, path, errors)

    def _json_schema(self) -> JsonDict:
        return {"anyOf": [self.inner._json_schema(), {"type": "null"}]}


@dataclasses.dataclass(frozen=True)
class DefaultSchema(_WrapperSchema):
    value: typing.Any

    @property
    def is_optional(self) -> bool:
        return True

    def _run(self, value: typing.Any, path: Path, errors: Errors) -> typing.Any:
        if value is MISSING:
            # copied so that parsed values never share a mutable default
            return copy.deepcopy(self.value)
        return self.inner._run(value, path, errors)

    def _json_schema(self) -> JsonDict:
        return {**self.inner._json_schema(), "default": self.value}


@dataclasses.dataclass(frozen=True)
class RefinedSchema(_WrapperSchema):
    predicate: Predicate
    message: str

    def _run(self, value: typing.Any, path: Path, errors: Errors) -> typing.Any:
        result = self.inner._run(value, path, errors)
        if result is INVALID or result is MISSING:
            return result
        if not self.predicate(result):
            errors.append(FieldError(path, ErrorKind.CUSTOM, self.message))
            return INVALID
        return result


@dataclasses.dataclass(frozen=True)
class TransformedSchema(_WrapperSchema):
    fn: TransformCallable

    def _run(self, value: typing.Any, path: Path, errors: Errors) -> typing.Any:
        result = self.inner._run(value, path, errors)
        if result is INVALID or result is MISSING:
            return result
        return self.fn(result)


def string() -> StringSchema:
    return StringSchema()


def number() -> NumberSchema:
    return NumberSchema()


def boolean() -> BooleanSchema:
    return BooleanSchema()


def enum_(values: typing.Iterable[typing.Any]) -> EnumSchema:
    """
    Returns a schema accepting only the given literal values.
    An enum.Enum subclass can be given, its member values are then used.
    """
    if isinstance(values, (str, bytes)):
        raise SchemaError("enum values must be given as a list")
    if _issubclass_safe(values, enum.Enum):  # type: ignore
        return EnumSchema(tuple(member.value for member in values))
    return EnumSchema(tuple(values))


def object_(
    fields: typing.Optional[FieldMap] = None, strict: bool = False
) -> ObjectSchema:
    """
    Returns a schema for a mapping having the given fields.

    :param fields: mapping of field name to schema, in output order
    :param strict: if true, keys which are not fields make the validation fail
    """
    return ObjectSchema(fields or {}, strict)


def array(items: Schema) -> ArraySchema:
    if not isinstance(items, Schema):
        raise SchemaError(f"{items!r} is not a schema")
    return ArraySchema(items)


def parse(schema: Schema, data: typing.Any) -> typing.Any:
    return schema.parse(data)


def safe_parse(schema: Schema, data: typing.Any) -> ParseResult:
    return schema.safe_parse(data)
