"""Guess the format of a document by trial parsing."""

from typing import Any, Optional, Tuple, Union

from shared.logger import get_logger

from .errors import DetectionError, ParseError
from .formats import DataFormat, parse

logger = get_logger(__name__)

# YAML accepts most JSON documents, so ambiguous input gets the YAML reading.
DETECTION_ORDER = (DataFormat.YAML, DataFormat.JSON, DataFormat.TOML)


def detect(data: Union[str, bytes]) -> Tuple[DataFormat, Any]:
    """
    Parse ``data`` with the first format that accepts it.

    Args:
        data: Document text

    Returns:
        Tuple of (detected format, native value)

    Raises:
        DetectionError: If no parser accepts the text; carries the YAML error
    """
    first_error: Optional[ParseError] = None

    for format in DETECTION_ORDER:
        try:
            native = parse(data, format)
        except ParseError as e:
            logger.debug(f"Not {format.value}: {e.message}")
            if first_error is None:
                first_error = e
            continue

        logger.debug(f"Detected {format.value}")
        return format, native

    raise DetectionError(first_error)
