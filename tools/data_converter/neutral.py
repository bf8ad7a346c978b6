"""
Conversion between native format values and the neutral value model.

Every format gets one ``to_neutral`` and one ``from_neutral`` rule set;
converting between two formats composes them.
"""

import datetime
import math
from typing import Any, Callable, Dict

from shared.logger import get_logger

from .errors import InternalInvariantError, UnsupportedKeyError
from .formats import DataFormat, MappingKey, ScalarKey, SequenceKey
from .values import (
    Bool,
    Float,
    Int,
    Mapping,
    Null,
    Sequence,
    String,
    UInt,
    Value,
    number,
)

logger = get_logger(__name__)

NAN_TOKEN = ".nan"
INF_TOKEN = ".inf"
NEG_INF_TOKEN = "-.inf"


def non_finite_token(value: float) -> str:
    """Return the YAML literal for a NaN or infinite float."""
    if math.isnan(value):
        return NAN_TOKEN
    return INF_TOKEN if value > 0 else NEG_INF_TOKEN


# Native -> neutral


def to_neutral(native: Any, format: DataFormat) -> Value:
    """
    Convert a parsed native value into the neutral model.

    Args:
        native: Value produced by the parser for ``format``
        format: Format the value was parsed from

    Returns:
        Neutral value tree

    Raises:
        InternalInvariantError: If the tree holds a type no parser produces
    """
    if native is None:
        return Null()

    if isinstance(native, ScalarKey):
        return to_neutral(native.value, format)

    if isinstance(native, bool):
        return Bool(native)

    if isinstance(native, (int, float)):
        return number(native)

    if isinstance(native, str):
        return String(native)

    if isinstance(native, MappingKey):
        return Mapping.from_pairs(
            (to_neutral(k, format), to_neutral(v, format)) for k, v in native
        )

    if isinstance(native, (list, tuple)):
        return Sequence(tuple(to_neutral(item, format) for item in native))

    if isinstance(native, dict):
        return Mapping.from_pairs(
            (to_neutral(k, format), to_neutral(v, format)) for k, v in native.items()
        )

    if format == DataFormat.TOML and isinstance(
        native, (datetime.datetime, datetime.date, datetime.time)
    ):
        return String(native.isoformat())

    raise InternalInvariantError(
        f"Unexpected {type(native).__name__} value in parsed {format.value} document"
    )


# Neutral -> native


def _float_text(value: float) -> str:
    if math.isfinite(value):
        return repr(value)
    return non_finite_token(value)


def _string_key(key: Value, format: DataFormat) -> str:
    """Stringify a mapping key for a format whose keys are plain strings."""
    if isinstance(key, String):
        return key.value
    if isinstance(key, Bool):
        return "true" if key.value else "false"
    if isinstance(key, (UInt, Int)):
        return str(key.value)
    if isinstance(key, Float):
        return _float_text(key.value)
    if isinstance(key, (Null, Sequence, Mapping)):
        raise UnsupportedKeyError(key.kind.value, format)
    raise InternalInvariantError(f"Unknown value type as key: {type(key).__name__}")


def _string_keyed_native(value: Value, format: DataFormat) -> Any:
    """Build JSON/TOML native values: string keys, non-finite floats as text."""
    if isinstance(value, Null):
        return None
    if isinstance(value, Bool):
        return value.value
    if isinstance(value, (UInt, Int)):
        return value.value
    if isinstance(value, Float):
        return value.value if value.is_finite else non_finite_token(value.value)
    if isinstance(value, String):
        return value.value
    if isinstance(value, Sequence):
        return [_string_keyed_native(item, format) for item in value]
    if isinstance(value, Mapping):
        table: Dict[str, Any] = {}
        for key, item in value.items:
            text = _string_key(key, format)
            if text in table:
                logger.warning(f"Key {text!r} appears twice after stringification; keeping the last value")
            table[text] = _string_keyed_native(item, format)
        return table
    raise InternalInvariantError(f"Unknown value type: {type(value).__name__}")


def _yaml_key(key: Value) -> Any:
    if isinstance(key, (Bool, UInt, Int, Float)):
        return ScalarKey(key.value)
    if isinstance(key, Mapping):
        return MappingKey((_yaml_key(k), _yaml_frozen(v)) for k, v in key.items)
    return _yaml_frozen(key)


def _yaml_frozen(value: Value) -> Any:
    """Build a hashable native value for use inside a YAML key."""
    if isinstance(value, Sequence):
        return SequenceKey(_yaml_frozen(item) for item in value)
    if isinstance(value, Mapping):
        return MappingKey((_yaml_key(k), _yaml_frozen(v)) for k, v in value.items)
    return _yaml_native(value)


def _yaml_native(value: Value) -> Any:
    if isinstance(value, Null):
        return None
    if isinstance(value, (Bool, UInt, Int, Float, String)):
        return value.value
    if isinstance(value, Sequence):
        return [_yaml_native(item) for item in value]
    if isinstance(value, Mapping):
        return {_yaml_key(key): _yaml_native(item) for key, item in value.items}
    raise InternalInvariantError(f"Unknown value type: {type(value).__name__}")


def _json_native(value: Value) -> Any:
    return _string_keyed_native(value, DataFormat.JSON)


def _toml_native(value: Value) -> Any:
    return _string_keyed_native(value, DataFormat.TOML)


FROM_NEUTRAL: Dict[DataFormat, Callable[[Value], Any]] = {
    DataFormat.YAML: _yaml_native,
    DataFormat.JSON: _json_native,
    DataFormat.TOML: _toml_native,
}


def from_neutral(value: Value, format: DataFormat) -> Any:
    """
    Convert a neutral value into the native representation of ``format``.

    Raises:
        UnsupportedKeyError: If a mapping key cannot be a key in ``format``
        InternalInvariantError: If the tree holds an unknown value type
    """
    return FROM_NEUTRAL[format](value)


def convert_native(native: Any, source: DataFormat, dest: DataFormat) -> Any:
    """
    Convert a native value of ``source`` into a native value of ``dest``.

    Raises:
        UnsupportedKeyError: If a mapping key cannot be a key in ``dest``
        InternalInvariantError: If the tree holds an unknown value type or
            nests deeper than the interpreter can recurse
    """
    try:
        return from_neutral(to_neutral(native, source), dest)
    except RecursionError:
        raise InternalInvariantError("document nests too deeply to convert")
