"""Shared typed models.

This module defines immutable data models used by ingest, store,
SDK, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ContainerKind = Literal["single", "list", "array"]
SUPPORTED_CONTAINER_KINDS: tuple[ContainerKind, ...] = ("single", "list", "array")

SemanticType = Literal[
    "string",
    "int8",
    "int16",
    "int32",
    "int64",
    "bool",
    "float32",
    "float64",
    "enum",
]
SUPPORTED_SEMANTIC_TYPES: tuple[SemanticType, ...] = (
    "string",
    "int8",
    "int16",
    "int32",
    "int64",
    "bool",
    "float32",
    "float64",
    "enum",
)

ImportRunState = Literal["idle", "running", "completed", "failed", "cancelled"]
ALLOWED_RUN_TRANSITIONS: dict[ImportRunState, tuple[ImportRunState, ...]] = {
    "idle": ("running", "failed"),
    "running": ("completed", "failed", "cancelled"),
    "completed": (),
    "failed": (),
    "cancelled": (),
}

SerializationFormat = Literal["json", "binary"]
SUPPORTED_SERIALIZATION_FORMATS: tuple[SerializationFormat, ...] = ("json", "binary")


@dataclass(frozen=True)
class PageSource:
    """One named page of a remote spreadsheet document.

    Attributes:
        document_id: Spreadsheet document identifier.
        page_name: Worksheet name within the document.
    """

    document_id: str
    page_name: str


@dataclass(frozen=True)
class TargetDescriptor:
    """Destination field of a content object bound to one page.

    Attributes:
        field_name: Attribute of the content object that receives records.
        page_name: Page whose rows populate the field.
        container_kind: Container stored in the field.
        element_type: Record type created for each row.
    """

    field_name: str
    page_name: str
    container_kind: str
    element_type: type


@dataclass(frozen=True)
class ImportResult:
    """Terminal outcome of one import run.

    Attributes:
        state: Terminal run state.
        imported_fields: Content fields populated before the run ended.
        message: Failure or cancellation message, if any.
    """

    state: ImportRunState
    imported_fields: tuple[str, ...]
    message: str | None = None

    @property
    def succeeded(self) -> bool:
        """Return whether every target was imported."""
        return self.state == "completed"


@dataclass(frozen=True)
class SerializationOptions:
    """Where and how imported content is written.

    Attributes:
        output_dir: Existing directory that receives the file.
        file_name: File name without suffix.
        format: Output format identifier.
    """

    output_dir: str
    file_name: str
    format: SerializationFormat = "json"
