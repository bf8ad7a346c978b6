"""Supported formats and their parsers."""

import json
import math
import re
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Union

import yaml
from yaml.composer import Composer
from yaml.constructor import ConstructorError, SafeConstructor
from yaml.parser import Parser
from yaml.reader import Reader
from yaml.resolver import BaseResolver
from yaml.scanner import Scanner

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .errors import ParseError


class DataFormat(str, Enum):
    """Supported conversion formats."""

    YAML = "yaml"
    JSON = "json"
    TOML = "toml"


@dataclass(frozen=True, eq=False)
class ScalarKey:
    """
    A YAML boolean or number used as a mapping key.

    Python treats ``1``, ``1.0`` and ``True`` as the same dict key; wrapping
    keeps them apart by type. All NaN keys compare equal.
    """

    value: Union[bool, int, float]

    @property
    def is_nan(self) -> bool:
        return isinstance(self.value, float) and math.isnan(self.value)

    def _identity(self):
        return (type(self.value), "nan" if self.is_nan else self.value)

    def __eq__(self, other):
        if not isinstance(other, ScalarKey):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self):
        return hash(self._identity())


class SequenceKey(tuple):
    """A YAML sequence used as a mapping key."""


class MappingKey(tuple):
    """A YAML mapping used as a mapping key, stored as (key, value) pairs."""


def freeze_key(key: Any) -> Any:
    """Make a constructed YAML key hashable, keeping its structure and type."""
    if isinstance(key, (bool, int, float)):
        return ScalarKey(key)
    if isinstance(key, dict):
        return MappingKey((k, freeze_value(v)) for k, v in key.items())
    if isinstance(key, list):
        return SequenceKey(freeze_value(item) for item in key)
    return key


def freeze_value(value: Any) -> Any:
    """Make a value nested inside a YAML key hashable."""
    if isinstance(value, dict):
        return MappingKey((k, freeze_value(v)) for k, v in value.items())
    if isinstance(value, list):
        return SequenceKey(freeze_value(item) for item in value)
    return value


class CoreResolver(BaseResolver):
    """Implicit scalar tags of the YAML 1.2 core schema."""


CoreResolver.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)
CoreResolver.add_implicit_resolver(
    "tag:yaml.org,2002:int",
    re.compile(r"^(?:[-+]?[0-9]+|0o[0-7]+|0x[0-9a-fA-F]+)$"),
    list("-+0123456789"),
)
CoreResolver.add_implicit_resolver(
    "tag:yaml.org,2002:float",
    re.compile(
        r"""^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?
        |[-+]?\.(?:inf|Inf|INF)
        |\.(?:nan|NaN|NAN))$""",
        re.X,
    ),
    list("-+.0123456789"),
)
CoreResolver.add_implicit_resolver(
    "tag:yaml.org,2002:null",
    re.compile(r"^(?:~|null|Null|NULL|)$"),
    ["~", "n", "N", ""],
)
CoreResolver.add_implicit_resolver(
    "tag:yaml.org,2002:merge",
    re.compile(r"^(?:<<)$"),
    ["<"],
)


class YamlLoader(Reader, Scanner, Parser, Composer, SafeConstructor, CoreResolver):
    """
    Safe loader for the YAML 1.2 core schema.

    Differences from ``yaml.SafeLoader``:
        - ``yes``/``no``/``on``/``off`` stay strings, ``1e3`` is a float,
          ``010`` is decimal and ``0o10`` is octal
        - bool and number keys load as ScalarKey, sequence and mapping keys
          as SequenceKey / MappingKey
        - explicit timestamps and !!binary load as their scalar text
        - !!set loads as a mapping with null values
    """

    def __init__(self, stream):
        Reader.__init__(self, stream)
        Scanner.__init__(self)
        Parser.__init__(self)
        Composer.__init__(self)
        SafeConstructor.__init__(self)
        CoreResolver.__init__(self)

    def construct_mapping(self, node, deep=False):
        if not isinstance(node, yaml.MappingNode):
            raise ConstructorError(
                None, None, f"expected a mapping node, but found {node.id}", node.start_mark
            )
        self.flatten_mapping(node)
        mapping = {}
        for key_node, value_node in node.value:
            key = freeze_key(self.construct_object(key_node, deep=True))
            if isinstance(key, ScalarKey) and key.is_nan and key in mapping:
                raise ConstructorError(
                    "while constructing a mapping", node.start_mark,
                    "found duplicate .nan key", key_node.start_mark,
                )
            mapping[key] = self.construct_object(value_node, deep=deep)
        return mapping


def _construct_core_int(loader: YamlLoader, node: yaml.Node) -> int:
    value = loader.construct_scalar(node)
    if value.startswith("0o"):
        return int(value[2:], 8)
    if value.startswith("0x"):
        return int(value[2:], 16)
    return int(value, 10)


def _construct_scalar_text(loader: YamlLoader, node: yaml.Node) -> str:
    return loader.construct_scalar(node)


def _construct_set(loader: YamlLoader, node: yaml.Node) -> Dict[Any, Any]:
    return loader.construct_mapping(node, deep=True)


YamlLoader.add_constructor("tag:yaml.org,2002:int", _construct_core_int)
YamlLoader.add_constructor("tag:yaml.org,2002:timestamp", _construct_scalar_text)
YamlLoader.add_constructor("tag:yaml.org,2002:binary", _construct_scalar_text)
YamlLoader.add_constructor("tag:yaml.org,2002:set", _construct_set)


def _has_cycle(root: Any) -> bool:
    """Check for containers that contain themselves (YAML aliases)."""
    on_path = set()
    stack = [(root, False)]
    while stack:
        node, leaving = stack.pop()
        if not isinstance(node, (list, dict)):
            continue
        if leaving:
            on_path.discard(id(node))
            continue
        if id(node) in on_path:
            return True
        on_path.add(id(node))
        stack.append((node, True))
        children = node.values() if isinstance(node, dict) else node
        stack.extend((child, False) for child in children)
    return False


def _ensure_text(data: Union[str, bytes], format: DataFormat) -> str:
    if isinstance(data, bytes):
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(format, f"input is not valid UTF-8: {e}")
    return data


def parse_yaml(data: Union[str, bytes]) -> Any:
    """
    Parse a single YAML document.

    Raises:
        ParseError: If the text is not a valid single YAML document, nests
            too deeply or refers to itself through an alias
    """
    text = _ensure_text(data, DataFormat.YAML)
    try:
        native = yaml.load(text, Loader=YamlLoader)
    except yaml.YAMLError as e:
        raise ParseError(DataFormat.YAML, str(e))
    except RecursionError:
        raise ParseError(DataFormat.YAML, "document nests too deeply or refers to itself")

    if _has_cycle(native):
        raise ParseError(DataFormat.YAML, "document refers to itself through an alias")
    return native


def _reject_constant(name: str) -> float:
    raise ValueError(f"non-finite number {name} is not valid JSON")


def _parse_finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {literal}")
    return value


def parse_json(data: Union[str, bytes]) -> Any:
    """
    Parse a JSON document.

    NaN and Infinity literals are rejected, as are float literals too large
    for a 64-bit float.

    Raises:
        ParseError: If the text is not valid JSON or nests too deeply
    """
    text = _ensure_text(data, DataFormat.JSON)
    try:
        return json.loads(
            text,
            parse_constant=_reject_constant,
            parse_float=_parse_finite_float,
        )
    except ValueError as e:
        raise ParseError(DataFormat.JSON, str(e))
    except RecursionError:
        raise ParseError(DataFormat.JSON, "document nests too deeply")


def parse_toml(data: Union[str, bytes]) -> Dict[str, Any]:
    """
    Parse a TOML 1.0 document.

    Raises:
        ParseError: If the text is not valid TOML or nests too deeply
    """
    text = _ensure_text(data, DataFormat.TOML)
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ParseError(DataFormat.TOML, str(e))
    except RecursionError:
        raise ParseError(DataFormat.TOML, "document nests too deeply")


PARSERS: Dict[DataFormat, Callable[[Union[str, bytes]], Any]] = {
    DataFormat.YAML: parse_yaml,
    DataFormat.JSON: parse_json,
    DataFormat.TOML: parse_toml,
}


def parse(data: Union[str, bytes], format: DataFormat) -> Any:
    """Parse text with the parser for ``format``."""
    return PARSERS[format](data)
