"""Setup-time validation of import targets.

Every target is checked before the first page is fetched so that an
unsupported container or field type never leaves a run half-applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import inspect
from typing import Mapping, Sequence, cast

from core.errors import SheetportSetupError
from core.record_schema import FieldSpec, RecordRegistry, RecordSchema
from core.types import SUPPORTED_CONTAINER_KINDS, ContainerKind, SemanticType, TargetDescriptor
from ingest.coercion import coerce_value, resolve_semantic_type


@dataclass(frozen=True)
class ResolvedField:
    """Record field with its coercion rule resolved."""

    spec: FieldSpec
    semantic_type: SemanticType
    enum_type: type[Enum] | None

    @property
    def name(self) -> str:
        return self.spec.name

    def coerce(self, raw: str) -> object | None:
        """Coerce one cell for this field; ``None`` means absent."""
        return coerce_value(raw, self.semantic_type, self.enum_type)


@dataclass(frozen=True)
class ResolvedTarget:
    """Target descriptor paired with its schema and resolved fields."""

    descriptor: TargetDescriptor
    container_kind: ContainerKind
    schema: RecordSchema
    fields: Mapping[str, ResolvedField]


def validate_targets(
    targets: Sequence[TargetDescriptor],
    registry: RecordRegistry,
    content: object,
) -> list[ResolvedTarget]:
    """Validate and resolve all targets of a run.

    Args:
        targets: Targets in caller order.
        registry: Registered record schemas.
        content: Content object whose fields receive records.

    Returns:
        Resolved targets in the same order.

    Raises:
        SheetportSetupError: If any target cannot be imported.
    """
    if not targets:
        raise SheetportSetupError("Nothing selected to import. Choose at least one target field.")
    return [_resolve_target(target, registry, content) for target in targets]


def _resolve_target(
    target: TargetDescriptor,
    registry: RecordRegistry,
    content: object,
) -> ResolvedTarget:
    if target.container_kind not in SUPPORTED_CONTAINER_KINDS:
        supported_rows = ", ".join(SUPPORTED_CONTAINER_KINDS)
        raise SheetportSetupError(
            f"Unsupported container kind '{target.container_kind}' for field "
            f"'{target.field_name}'. Use one of: {supported_rows}."
        )
    if not target.page_name:
        raise SheetportSetupError(f"Field '{target.field_name}' is not bound to a page name.")
    if not hasattr(content, target.field_name):
        raise SheetportSetupError(
            f"Content object {type(content).__name__} has no field '{target.field_name}'."
        )
    schema = _schema_for_element(target, registry)
    return ResolvedTarget(
        descriptor=target,
        container_kind=cast(ContainerKind, target.container_kind),
        schema=schema,
        fields=_resolve_fields(target, schema),
    )


def _schema_for_element(target: TargetDescriptor, registry: RecordRegistry) -> RecordSchema:
    element_type = target.element_type
    unsupported = (
        not isinstance(element_type, type)
        or inspect.isabstract(element_type)
        or issubclass(element_type, Enum)
    )
    schema = None if unsupported else registry.schema_for(element_type)
    if schema is None:
        raise SheetportSetupError(
            f"Could not identify type of records stored in '{target.field_name}': "
            f"{getattr(element_type, '__name__', element_type)!s} is not a registered, "
            "concrete record type."
        )
    return schema


def _resolve_fields(target: TargetDescriptor, schema: RecordSchema) -> dict[str, ResolvedField]:
    resolved: dict[str, ResolvedField] = {}
    for name, spec in schema.fields.items():
        try:
            semantic_type, enum_type = resolve_semantic_type(spec.declared_type)
        except SheetportSetupError as error:
            raise SheetportSetupError(
                f"Field '{target.field_name}' cannot be imported: record field "
                f"{schema.name}.{name} has an unsupported type. {error}"
            ) from error
        resolved[name] = ResolvedField(spec=spec, semantic_type=semantic_type, enum_type=enum_type)
    return resolved
