"""Runtime configuration model for Sheetport.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import os
from pathlib import Path

from core.constants import (
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_URL_TEMPLATE,
    URL_TEMPLATE_PLACEHOLDERS,
)
from core.errors import SheetportConfigError


@dataclass(frozen=True)
class SheetportConfig:
    """Validated runtime configuration.

    Attributes:
        url_template: Page export URL with ``{document_id}`` and ``{page_name}``.
        fetch_timeout_seconds: HTTP timeout applied to every page fetch.
        output_dir: Default directory for serialized content files.
    """

    url_template: str
    fetch_timeout_seconds: float
    output_dir: Path

    @classmethod
    def from_env(cls) -> "SheetportConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SheetportConfigError: If environment values are invalid.
        """
        url_template = _parse_url_template(
            os.getenv("SHEETPORT_URL_TEMPLATE", DEFAULT_URL_TEMPLATE)
        )
        timeout_value = os.getenv("SHEETPORT_FETCH_TIMEOUT", str(DEFAULT_FETCH_TIMEOUT_SECONDS))
        output_dir_value = os.getenv("SHEETPORT_OUTPUT_DIR", str(DEFAULT_OUTPUT_DIR))
        return cls(
            url_template=url_template,
            fetch_timeout_seconds=_parse_fetch_timeout(timeout_value),
            output_dir=Path(output_dir_value).expanduser().resolve(),
        )


def _parse_url_template(raw_value: str) -> str:
    """Validate the page URL template.

    Args:
        raw_value: Raw string from environment.

    Returns:
        The template unchanged.

    Raises:
        SheetportConfigError: If a placeholder is missing or unknown.
    """
    missing = [token for token in URL_TEMPLATE_PLACEHOLDERS if token not in raw_value]
    if missing:
        raise SheetportConfigError(
            "Invalid SHEETPORT_URL_TEMPLATE value: "
            f"missing placeholder(s) {', '.join(missing)} in '{raw_value}'. "
            "Include both {document_id} and {page_name}."
        )
    try:
        raw_value.format(document_id="document", page_name="page")
    except (KeyError, IndexError, ValueError) as error:
        raise SheetportConfigError(
            "Invalid SHEETPORT_URL_TEMPLATE value: "
            f"unsupported placeholder {error} in '{raw_value}'. "
            "Use only {document_id} and {page_name}; write literal braces as {{ and }}."
        ) from error
    return raw_value


def _parse_fetch_timeout(raw_value: str) -> float:
    """Parse the fetch timeout environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Positive timeout in seconds.

    Raises:
        SheetportConfigError: If value is not a finite positive number.
    """
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise SheetportConfigError(
            "Invalid SHEETPORT_FETCH_TIMEOUT value: "
            f"expected number of seconds, got '{raw_value}'. "
            "Set SHEETPORT_FETCH_TIMEOUT to a positive number."
        ) from error
    if not math.isfinite(timeout) or timeout <= 0:
        raise SheetportConfigError(
            f"Invalid SHEETPORT_FETCH_TIMEOUT value: {raw_value} must be a finite number "
            "greater than zero."
        )
    return timeout
