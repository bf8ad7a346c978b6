"""Errors raised while parsing, converting and rendering documents."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .formats import DataFormat


class DataConvertError(ValueError):
    """Base class for every conversion pipeline failure."""


class ParseError(DataConvertError):
    """Source text does not conform to a format's grammar."""

    def __init__(self, format: "DataFormat", message: str):
        self.format = format
        self.message = message
        super().__init__(f"Failed to parse {format.value}: {message}")


class DetectionError(DataConvertError):
    """No parser accepted the input."""

    def __init__(self, cause: ParseError):
        self.cause = cause
        super().__init__(f"Unrecognized input format ({cause})")


class UnsupportedKeyError(DataConvertError):
    """A mapping key cannot be represented in the destination format."""

    def __init__(self, kind: str, format: "DataFormat"):
        self.kind = kind
        self.format = format
        super().__init__(f"Unsupported key type for {format.value}: {kind}")


class InternalInvariantError(DataConvertError):
    """A value reached the converter in a shape that should be impossible."""


class RenderError(DataConvertError):
    """The destination serializer rejected a value."""

    def __init__(self, format: "DataFormat", message: str):
        self.format = format
        self.message = message
        super().__init__(f"Failed to render {format.value}: {message}")
