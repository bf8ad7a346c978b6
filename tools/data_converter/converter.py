"""Core data conversion logic."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from shared.logger import get_logger

from .detector import detect
from .formats import DataFormat, parse
from .neutral import convert_native
from .renderer import render

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConversionRequest:
    """What to convert: optional source format, destination format, pretty flag."""

    dest_format: DataFormat
    source_format: Optional[DataFormat] = None
    pretty: bool = False


class DataConverter:
    """
    Convert documents between YAML, JSON, and TOML.

    Conversions between two formats go through the neutral value model:
    parse (or detect) -> to_neutral -> from_neutral -> render. A document
    converted to its own format is rendered straight from the parsed value,
    so values such as TOML dates keep their type.
    """

    def __init__(self):
        """Initialize data converter."""
        logger.debug("Initialized DataConverter")

    def load(
        self, data: Union[str, bytes], format: Optional[DataFormat] = None
    ) -> Tuple[DataFormat, Any]:
        """
        Parse document text.

        Args:
            data: Document text
            format: Format to parse (auto-detect if None)

        Returns:
            Tuple of (source format, native value)

        Raises:
            ParseError: If ``format`` is given and the text does not parse
            DetectionError: If ``format`` is None and no parser accepts it
        """
        if format is None:
            return detect(data)
        return format, parse(data, format)

    def load_file(
        self, filepath: Path, format: Optional[DataFormat] = None
    ) -> Tuple[DataFormat, Any]:
        """
        Load and parse a whole file.

        Args:
            filepath: Path to file
            format: Format to parse (auto-detect if None)

        Returns:
            Tuple of (source format, native value)
        """
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        logger.info(f"Loading {format.value if format else 'document'} from {filepath}")
        return self.load(filepath.read_bytes(), format)

    def convert(
        self,
        native: Any,
        from_format: DataFormat,
        to_format: DataFormat,
        pretty: bool = False,
    ) -> str:
        """
        Convert an already parsed native value and render it.

        Args:
            native: Value produced by the ``from_format`` parser
            from_format: Format the value was parsed from
            to_format: Target format
            pretty: Whether to pretty-print

        Returns:
            Rendered text

        Raises:
            UnsupportedKeyError: If a key cannot be represented in ``to_format``
            RenderError: If the serializer rejects the converted value
        """
        if from_format == to_format:
            return render(native, to_format, pretty=pretty)

        target = convert_native(native, from_format, to_format)
        return render(target, to_format, pretty=pretty)

    def convert_string(self, data: Union[str, bytes], request: ConversionRequest) -> str:
        """
        Run a full conversion on document text.

        Args:
            data: Document text
            request: Conversion request

        Returns:
            Rendered text (no trailing newline)
        """
        source_format, native = self.load(data, request.source_format)
        logger.info(
            f"Converting {source_format.value} to {request.dest_format.value}"
            f"{' (pretty)' if request.pretty else ''}"
        )
        return self.convert(native, source_format, request.dest_format, pretty=request.pretty)

    def convert_file(
        self,
        input_path: Path,
        output_path: Path,
        request: ConversionRequest,
    ) -> None:
        """
        Convert a file and write the result with a trailing newline.

        Args:
            input_path: Input file path
            output_path: Output file path
            request: Conversion request
        """
        if not input_path.exists():
            raise FileNotFoundError(f"File not found: {input_path}")

        output_data = self.convert_string(input_path.read_bytes(), request)

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(output_data + "\n")

        logger.info(f"Converted {input_path} to {output_path}")
