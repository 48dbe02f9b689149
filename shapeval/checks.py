# -*- coding: utf-8 -*-
import abc
import dataclasses
import enum
import re
import typing
import urllib.parse

import dateutil.parser

from shapeval.exception import ErrorKind, SchemaError
from shapeval.util import JsonDict


class StringFormat(str, enum.Enum):
    """Possible formats for a string schema"""

    DATETIME = "date-time"
    EMAIL = "email"
    URL = "uri"
    UUID = "uuid"


_email_pattern = re.compile(
    r"^(?!\.)(?!.*\.\.)([A-Z0-9_'+\-\.]*)[A-Z0-9_+\-]"
    r"@([A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}$",
    re.IGNORECASE,
)
_uuid_pattern = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
_scheme_pattern = re.compile(r"^[a-z][a-z0-9+.\-]*$", re.IGNORECASE)


def _is_email(value: str) -> bool:
    return _email_pattern.match(value) is not None


def _is_url(value: str) -> bool:
    try:
        parts = urllib.parse.urlsplit(value)
    except ValueError:
        return False
    if not parts.scheme or not _scheme_pattern.match(parts.scheme):
        return False
    return bool(parts.netloc or parts.path)


def _is_uuid(value: str) -> bool:
    return _uuid_pattern.match(value) is not None


def _is_datetime(value: str) -> bool:
    try:
        dateutil.parser.isoparse(value)
    except (ValueError, OverflowError):
        return False
    return True


_format_checkers: typing.Dict[StringFormat, typing.Callable[[str], bool]] = {
    StringFormat.DATETIME: _is_datetime,
    StringFormat.EMAIL: _is_email,
    StringFormat.URL: _is_url,
    StringFormat.UUID: _is_uuid,
}

_format_names = {
    StringFormat.DATETIME: "datetime",
    StringFormat.EMAIL: "email",
    StringFormat.URL: "url",
    StringFormat.UUID: "uuid",
}


class Check(abc.ABC):
    """
    A constraint applied to an already type-checked value.
    """

    kind: ErrorKind

    @abc.abstractmethod
    def __call__(self, value: typing.Any) -> bool:
        """Returns True if value satisfies this check."""

    @abc.abstractmethod
    def message(self, value: typing.Any) -> str:
        pass

    def json_schema(self) -> JsonDict:
        """Keywords this check adds to the JSON schema of its schema."""
        return {}


@dataclasses.dataclass(frozen=True)
class MinLength(Check):
    length: int
    kind = ErrorKind.TOO_SHORT

    def __call__(self, value: str) -> bool:
        return len(value) >= self.length

    def message(self, value: str) -> str:
        return f"String must contain at least {self.length} character(s)"

    def json_schema(self) -> JsonDict:
        return {"minLength": self.length}


@dataclasses.dataclass(frozen=True)
class MaxLength(Check):
    length: int
    kind = ErrorKind.TOO_LONG

    def __call__(self, value: str) -> bool:
        return len(value) <= self.length

    def message(self, value: str) -> str:
        return f"String must contain at most {self.length} character(s)"

    def json_schema(self) -> JsonDict:
        return {"maxLength": self.length}


@dataclasses.dataclass(frozen=True)
class Format(Check):
    format_: StringFormat
    kind = ErrorKind.INVALID_FORMAT

    def __call__(self, value: str) -> bool:
        return _format_checkers[self.format_](value)

    def message(self, value: str) -> str:
        return f"Invalid {_format_names[self.format_]}"

    def json_schema(self) -> JsonDict:
        return {"format": self.format_.value}


@dataclasses.dataclass(frozen=True)
class Pattern(Check):
    pattern: str
    compiled: re.Pattern = dataclasses.field(init=False, repr=False, compare=False)
    kind = ErrorKind.INVALID_FORMAT

    def __post_init__(self) -> None:
        try:
            compiled = re.compile(self.pattern)
        except (re.error, TypeError) as exc:
            raise SchemaError(
                f"invalid regular expression {self.pattern!r}: {exc}"
            ) from exc
        object.__setattr__(self, "compiled", compiled)

    def __call__(self, value: str) -> bool:
        return self.compiled.search(value) is not None

    def message(self, value: str) -> str:
        return "Invalid"

    def json_schema(self) -> JsonDict:
        return {"pattern": self.pattern}


@dataclasses.dataclass(frozen=True)
class Minimum(Check):
    minimum: typing.Union[int, float]
    kind = ErrorKind.TOO_SMALL

    def __call__(self, value: typing.Union[int, float]) -> bool:
        return value >= self.minimum

    def message(self, value: typing.Union[int, float]) -> str:
        return f"Number must be greater than or equal to {self.minimum}"

    def json_schema(self) -> JsonDict:
        return {"minimum": self.minimum}


@dataclasses.dataclass(frozen=True)
class Maximum(Check):
    maximum: typing.Union[int, float]
    kind = ErrorKind.TOO_BIG

    def __call__(self, value: typing.Union[int, float]) -> bool:
        return value <= self.maximum

    def message(self, value: typing.Union[int, float]) -> str:
        return f"Number must be less than or equal to {self.maximum}"

    def json_schema(self) -> JsonDict:
        return {"maximum": self.maximum}


@dataclasses.dataclass(frozen=True)
class Integer(Check):
    kind = ErrorKind.TYPE_MISMATCH

    def __call__(self, value: typing.Union[int, float]) -> bool:
        return isinstance(value, int)

    def message(self, value: typing.Union[int, float]) -> str:
        return "Expected integer, received float"

    def json_schema(self) -> JsonDict:
        return {"type": "integer"}
