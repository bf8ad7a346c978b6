"""CLI interface for Data Converter."""

import sys
from pathlib import Path
from typing import Dict, Optional

import click

from shared.cli import error, handle_errors, success
from shared.logger import setup_logger

from .converter import ConversionRequest, DataConverter
from .errors import DataConvertError
from .formats import DataFormat

YAML, JSON, TOML = DataFormat.YAML, DataFormat.JSON, DataFormat.TOML

# Mode code -> request. Letters name source then destination, "p" means pretty;
# single-format codes auto-detect the source.
MODES: Dict[str, ConversionRequest] = {
    "yj": ConversionRequest(source_format=YAML, dest_format=JSON, pretty=False),
    "yjp": ConversionRequest(source_format=YAML, dest_format=JSON, pretty=True),
    "yt": ConversionRequest(source_format=YAML, dest_format=TOML, pretty=False),
    "ytp": ConversionRequest(source_format=YAML, dest_format=TOML, pretty=True),
    "jy": ConversionRequest(source_format=JSON, dest_format=YAML, pretty=False),
    "jjp": ConversionRequest(source_format=JSON, dest_format=JSON, pretty=True),
    "jt": ConversionRequest(source_format=JSON, dest_format=TOML, pretty=False),
    "jtp": ConversionRequest(source_format=JSON, dest_format=TOML, pretty=True),
    "ty": ConversionRequest(source_format=TOML, dest_format=YAML, pretty=False),
    "tj": ConversionRequest(source_format=TOML, dest_format=JSON, pretty=False),
    "tjp": ConversionRequest(source_format=TOML, dest_format=JSON, pretty=True),
    "ttp": ConversionRequest(source_format=TOML, dest_format=TOML, pretty=True),
    "y": ConversionRequest(source_format=None, dest_format=YAML, pretty=False),
    "j": ConversionRequest(source_format=None, dest_format=JSON, pretty=False),
    "jp": ConversionRequest(source_format=None, dest_format=JSON, pretty=True),
    "t": ConversionRequest(source_format=None, dest_format=TOML, pretty=False),
    "tp": ConversionRequest(source_format=None, dest_format=TOML, pretty=True),
}


def read_input(input_file: Optional[Path]) -> bytes:
    """Read the whole input file, or standard input when no file is given."""
    if input_file is None:
        return click.get_binary_stream("stdin").read()
    return input_file.read_bytes()


@click.command()
@click.argument("mode", type=click.Choice(list(MODES)))
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=False,
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (print to stdout if not specified)",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@handle_errors
def main(
    mode: str,
    input_file: Optional[Path],
    output: Optional[Path],
    verbose: bool,
):
    """
    Data Converter - Convert between YAML, JSON, and TOML formats.

    MODE names source and destination formats (y, j, t) with an optional
    trailing p for pretty output. Single-format modes detect the source,
    trying YAML, then JSON, then TOML. Reads standard input when INPUT_FILE
    is omitted.

    Examples:

        \b
        # YAML to JSON
        data-convert yj config.yaml

        \b
        # JSON to pretty TOML
        data-convert jtp data.json

        \b
        # Detect the format, print pretty JSON
        cat settings.toml | data-convert jp

        \b
        # Write to a file
        data-convert ty pyproject.toml --output pyproject.yaml
    """
    # Setup logging
    log_level = "DEBUG" if verbose else "WARNING"
    setup_logger("tools.data_converter", level=log_level)

    converter = DataConverter()
    request = MODES[mode]

    try:
        data = read_input(input_file)
        output_data = converter.convert_string(data, request)

        if output:
            with open(output, "w", encoding="utf-8") as f:
                f.write(output_data + "\n")
            success(f"Converted to {output}")
        else:
            click.echo(output_data)

        sys.exit(0)

    except DataConvertError as e:
        error(str(e))
        sys.exit(1)

    except OSError as e:
        error(str(e))
        sys.exit(1)

    except Exception as e:
        error(f"Unexpected error: {e}")
        if verbose:
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
