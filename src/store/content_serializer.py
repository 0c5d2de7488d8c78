"""File sink for imported content objects.

This module writes a populated content object as pretty-printed JSON or
as a pickle blob. It runs only after a successful import.
"""

from __future__ import annotations

import json
import pickle
from pathlib import Path

from core.constants import BINARY_FILE_SUFFIX, JSON_FILE_SUFFIX, JSON_INDENT
from core.errors import SheetportSerializationError
from core.logging_config import get_logger
from core.types import SUPPORTED_SERIALIZATION_FORMATS, SerializationOptions
from store.content_payload import content_to_payload

_LOGGER = get_logger(__name__)


def serialize_content(content: object, options: SerializationOptions) -> Path:
    """Write a content object to ``<output_dir>/<file_name>.<suffix>``.

    Args:
        content: Populated content object.
        options: Output directory, file name, and format.

    Returns:
        Path of the written file.

    Raises:
        SheetportSerializationError: If options are invalid or writing fails.
    """
    output_dir = Path(options.output_dir).expanduser().resolve()
    if not output_dir.is_dir():
        raise SheetportSerializationError(
            f"Missing directory '{output_dir}'. Create it before serializing."
        )
    if not options.file_name.strip():
        raise SheetportSerializationError("Serialization file name is empty.")
    if options.format == "json":
        output_path = output_dir / f"{options.file_name}{JSON_FILE_SUFFIX}"
        _write_json(output_path, content)
    elif options.format == "binary":
        output_path = output_dir / f"{options.file_name}{BINARY_FILE_SUFFIX}"
        _write_binary(output_path, content)
    else:
        supported_rows = ", ".join(SUPPORTED_SERIALIZATION_FORMATS)
        raise SheetportSerializationError(
            f"Unsupported serialization format '{options.format}'. Use one of: {supported_rows}."
        )
    _LOGGER.info("content_serialized", output_path=str(output_path), format=options.format)
    return output_path


def _write_json(output_path: Path, content: object) -> None:
    payload = content_to_payload(content)
    try:
        output_path.write_text(json.dumps(payload, indent=JSON_INDENT) + "\n", encoding="utf-8")
    except OSError as error:
        raise SheetportSerializationError(
            f"Failed to write JSON content to {output_path}: {error}."
        ) from error


def _write_binary(output_path: Path, content: object) -> None:
    try:
        with output_path.open("wb") as output_file:
            pickle.dump(content, output_file)
    except OSError as error:
        raise SheetportSerializationError(
            f"Failed to write binary content to {output_path}: {error}."
        ) from error
    except (pickle.PicklingError, TypeError, AttributeError) as error:
        raise SheetportSerializationError(
            f"Content object cannot be pickled for {output_path}: {error}. "
            "Define content and record classes at module level."
        ) from error
