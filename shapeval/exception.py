import dataclasses
import enum
import typing

PathItem = typing.Union[str, int]


class BaseShapevalError(Exception):
    pass


class SchemaError(BaseShapevalError):
    pass


class ErrorKind(str, enum.Enum):
    """Possible kinds of a validation failure"""

    TYPE_MISMATCH = "type_mismatch"
    REQUIRED = "required"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    INVALID_FORMAT = "invalid_format"
    INVALID_ENUM_VALUE = "invalid_enum_value"
    UNRECOGNIZED_KEYS = "unrecognized_keys"
    CUSTOM = "custom"
    INVALID_JSON = "invalid_json"


@dataclasses.dataclass(frozen=True)
class FieldError(object):
    """
    A single validation failure.

    :param path: field names and array indices leading to the invalid value,
        empty for the root value.
    :param kind: the kind of failure
    :param message: human readable description of the failure
    """

    path: typing.Tuple[PathItem, ...]
    kind: ErrorKind
    message: str

    @property
    def pointer(self) -> str:
        """JSON path of the invalid value, "#" being the root."""
        return "/".join(["#"] + [str(item) for item in self.path])

    @property
    def element_index(self) -> typing.Optional[int]:
        """Index of the innermost array element containing the failure."""
        for item in reversed(self.path):
            if isinstance(item, int):
                return item
        return None


class ValidationError(BaseShapevalError):
    """Raised when an error is found during validation of data.

    :param msg: formatted exception message(s).
    :param errors: every failure found, in discovery order.
    """

    def __init__(
        self, msg: str, errors: typing.Optional[typing.List[FieldError]] = None
    ):
        super().__init__(msg, errors or [FieldError((), ErrorKind.CUSTOM, msg)])

    @classmethod
    def from_errors(cls, errors: typing.List[FieldError]) -> "ValidationError":
        lines = [f'- value at path "{e.pointer}": {e.message}' for e in errors]
        return cls("Validation failed:\n" + "\n".join(lines), errors)

    @property
    def errors(self) -> typing.List[FieldError]:
        return self.args[1]

    def messages(self) -> typing.Dict[str, typing.List[str]]:
        """
        Returns the error messages grouped by JSON path.
        """
        grouped: typing.Dict[str, typing.List[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.pointer, []).append(error.message)
        return grouped

    def __str__(self) -> str:
        return self.args[0]
