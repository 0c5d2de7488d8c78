"""Core constants used across Sheetport modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_URL_TEMPLATE = (
    "https://docs.google.com/spreadsheets/d/{document_id}/export?format=csv&sheet={page_name}"
)
URL_TEMPLATE_PLACEHOLDERS = ("{document_id}", "{page_name}")
DEFAULT_FETCH_TIMEOUT_SECONDS = 30.0
DEFAULT_OUTPUT_DIR = Path(".")
FIELD_DELIMITER = ","
QUOTE_CHARACTER = '"'
LINE_BREAK_PATTERN = r"\r\n|\r|\n"
IDENTIFIER_HEADER = "id"
IMPORT_STEPS_PER_PAGE = 3
DEFAULT_SERIALIZATION_FILE_NAME = "Configs.v0.1"
JSON_FILE_SUFFIX = ".json"
BINARY_FILE_SUFFIX = ".bin"
JSON_INDENT = 4
IMPORT_PLAN_VERSION = 1
