"""Data Converter - Convert documents between YAML, JSON, and TOML formats."""

from .converter import ConversionRequest, DataConverter
from .errors import (
    DataConvertError,
    DetectionError,
    InternalInvariantError,
    ParseError,
    RenderError,
    UnsupportedKeyError,
)
from .formats import DataFormat

__all__ = [
    "ConversionRequest",
    "DataConverter",
    "DataConvertError",
    "DataFormat",
    "DetectionError",
    "InternalInvariantError",
    "ParseError",
    "RenderError",
    "UnsupportedKeyError",
]
