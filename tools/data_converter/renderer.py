"""Serialize native values to text."""

import json
from typing import Any

import tomli_w
import yaml

from .errors import RenderError
from .formats import CoreResolver, DataFormat, MappingKey, ScalarKey, SequenceKey
from .values import I64_MAX, I64_MIN


class YamlDumper(yaml.SafeDumper):
    """
    Safe dumper that writes the key types of YamlLoader.

    Plain scalars are checked against the YAML 1.2 core schema, so a string
    such as ``1e3`` or ``010`` is quoted and reads back as a string. No
    anchors or aliases are written.
    """

    yaml_implicit_resolvers = CoreResolver.yaml_implicit_resolvers

    def ignore_aliases(self, data: Any) -> bool:
        # Shared nodes are written out in full; cyclic ones never reach here
        return True


def _represent_scalar_key(dumper: YamlDumper, data: ScalarKey) -> yaml.Node:
    return dumper.represent_data(data.value)


def _represent_sequence_key(dumper: YamlDumper, data: SequenceKey) -> yaml.Node:
    return dumper.represent_list(list(data))


def _represent_mapping_key(dumper: YamlDumper, data: MappingKey) -> yaml.Node:
    return dumper.represent_mapping("tag:yaml.org,2002:map", list(data))


YamlDumper.add_representer(ScalarKey, _represent_scalar_key)
YamlDumper.add_representer(SequenceKey, _represent_sequence_key)
YamlDumper.add_representer(MappingKey, _represent_mapping_key)


def render_yaml(data: Any, pretty: bool = False) -> str:
    """Render block-style YAML. There is no compact variant."""
    try:
        text = yaml.dump(
            data,
            Dumper=YamlDumper,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )
    except Exception as e:
        raise RenderError(DataFormat.YAML, str(e) or type(e).__name__)
    return text.rstrip("\n")


def render_json(data: Any, pretty: bool = False) -> str:
    """Render JSON, indented when ``pretty`` and without whitespace otherwise."""
    try:
        if pretty:
            return json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False)
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except Exception as e:
        raise RenderError(DataFormat.JSON, str(e) or type(e).__name__)


def _check_toml_value(value: Any, path: str) -> None:
    if value is None:
        raise RenderError(DataFormat.TOML, f"TOML has no null value (at {path or 'root'})")
    if isinstance(value, bool):
        return
    if isinstance(value, int) and not I64_MIN <= value <= I64_MAX:
        raise RenderError(DataFormat.TOML, f"integer {value} out of range (at {path})")
    if isinstance(value, list):
        for index, item in enumerate(value):
            _check_toml_value(item, f"{path}[{index}]")
    elif isinstance(value, dict):
        for key, item in value.items():
            _check_toml_value(item, f"{path}.{key}" if path else key)


def render_toml(data: Any, pretty: bool = False) -> str:
    """
    Render TOML.

    Arrays are always written one element per line. Pretty mode also writes
    strings containing newlines as multi-line strings. Arrays that mix tables
    with other values are written with inline tables.

    Raises:
        RenderError: If the root is not a table, a null is present, an
            integer does not fit in 64 signed bits or the writer fails
    """
    if not isinstance(data, dict):
        raise RenderError(DataFormat.TOML, f"document root must be a table, not {type(data).__name__}")
    try:
        _check_toml_value(data, "")
        text = tomli_w.dumps(data, multiline_strings=pretty)
    except RenderError:
        raise
    except Exception as e:
        raise RenderError(DataFormat.TOML, str(e) or type(e).__name__)
    return text.rstrip("\n")


RENDERERS = {
    DataFormat.YAML: render_yaml,
    DataFormat.JSON: render_json,
    DataFormat.TOML: render_toml,
}


def render(data: Any, format: DataFormat, pretty: bool = False) -> str:
    """
    Render a native value of ``format`` to text without a trailing newline.

    Raises:
        RenderError: If the serializer rejects the value
    """
    return RENDERERS[format](data, pretty=pretty)
