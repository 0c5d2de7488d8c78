"""Typed import plan parsing for declarative page imports.

This module loads and validates YAML import plans used by the CLI and SDK.
A plan names the spreadsheet document, the record registry and content
type to populate, the target fields with their pages, and an optional
serialization output.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import importlib
import importlib.util
from pathlib import Path
import sys
from types import ModuleType
from typing import Mapping, Sequence, cast

import yaml

from core.constants import DEFAULT_SERIALIZATION_FILE_NAME, IMPORT_PLAN_VERSION
from core.errors import SheetportPlanError
from core.record_schema import RecordRegistry
from core.types import (
    SUPPORTED_CONTAINER_KINDS,
    SUPPORTED_SERIALIZATION_FORMATS,
    SerializationFormat,
    SerializationOptions,
    TargetDescriptor,
)

_ROOT_KEYS = ("version", "document_id", "registry", "content", "targets", "serialization")
_TARGET_KEYS = ("field", "page", "kind", "element")
_SERIALIZATION_KEYS = ("output_dir", "file_name", "format")


@dataclass(frozen=True)
class ImportPlan:
    """Validated import plan root object."""

    document_id: str
    registry: RecordRegistry
    content_type: type
    targets: tuple[TargetDescriptor, ...]
    serialization: SerializationOptions | None

    def select(self, field_names: Sequence[str]) -> "ImportPlan":
        """Return a plan restricted to the named target fields.

        Args:
            field_names: Target fields to keep; empty keeps every target.

        Returns:
            Plan with targets in their original plan order.

        Raises:
            SheetportPlanError: If a name does not match any target.
        """
        if not field_names:
            return self
        known = {target.field_name for target in self.targets}
        unknown = [name for name in field_names if name not in known]
        if unknown:
            raise SheetportPlanError(
                f"Unknown target field(s): {', '.join(unknown)}. "
                f"Plan fields: {', '.join(sorted(known))}."
            )
        selected = tuple(target for target in self.targets if target.field_name in field_names)
        return replace(self, targets=selected)


def load_import_plan(plan_path: str) -> ImportPlan:
    """Load and validate a YAML import plan from disk.

    Args:
        plan_path: File path to YAML import plan.

    Returns:
        Fully validated import plan.

    Raises:
        SheetportPlanError: If file is invalid or schema checks fail.
    """
    plan_file = Path(plan_path).expanduser().resolve()
    root_mapping = _expect_mapping(_load_yaml_payload(plan_file), "import plan root")
    _validate_keys(root_mapping, _ROOT_KEYS, "import plan root")
    _parse_version(root_mapping)
    loader = _ReferenceLoader(plan_file.parent)
    registry = loader.load(_required_string(root_mapping, "registry", "import plan"))
    if not isinstance(registry, RecordRegistry):
        raise SheetportPlanError(
            f"Import plan 'registry' must reference a RecordRegistry, got {type(registry).__name__}."
        )
    content_type = loader.load(_required_string(root_mapping, "content", "import plan"))
    if not isinstance(content_type, type):
        raise SheetportPlanError("Import plan 'content' must reference a class.")
    return ImportPlan(
        document_id=_required_string(root_mapping, "document_id", "import plan"),
        registry=registry,
        content_type=content_type,
        targets=_parse_targets(root_mapping, registry),
        serialization=_parse_serialization(root_mapping),
    )


def _load_yaml_payload(plan_file: Path) -> object:
    if not plan_file.exists():
        raise SheetportPlanError(
            f"Import plan file does not exist at {plan_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(plan_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise SheetportPlanError(
            f"Failed to read import plan at {plan_file}: {error}. Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise SheetportPlanError(
            f"Failed to parse YAML import plan at {plan_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise SheetportPlanError(
            f"Import plan at {plan_file} is empty. Define 'version', 'document_id' and 'targets'."
        )
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise SheetportPlanError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise SheetportPlanError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _expect_sequence(value: object, context: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise SheetportPlanError(f"Invalid {context}: expected list, got {type(value).__name__}.")


def _validate_keys(mapping: Mapping[str, object], allowed: Sequence[str], context: str) -> None:
    unknown = sorted(key for key in mapping if key not in allowed)
    if unknown:
        raise SheetportPlanError(
            f"Unknown {context} field(s): {', '.join(unknown)}. Allowed: {', '.join(allowed)}."
        )


def _parse_version(root_mapping: Mapping[str, object]) -> int:
    raw_version = root_mapping.get("version")
    if not isinstance(raw_version, int) or isinstance(raw_version, bool):
        raise SheetportPlanError("Import plan field 'version' must be an integer. Set version: 1.")
    if raw_version != IMPORT_PLAN_VERSION:
        raise SheetportPlanError(
            f"Unsupported import plan version {raw_version}. Use version: {IMPORT_PLAN_VERSION}."
        )
    return raw_version


def _required_string(mapping: Mapping[str, object], field_name: str, context: str) -> str:
    value = mapping.get(field_name)
    if isinstance(value, str) and value.strip():
        return value.strip()
    raise SheetportPlanError(f"{context.capitalize()} is missing required string '{field_name}'.")


def _parse_targets(
    root_mapping: Mapping[str, object],
    registry: RecordRegistry,
) -> tuple[TargetDescriptor, ...]:
    raw_targets = _expect_sequence(root_mapping.get("targets"), "import plan targets")
    targets: list[TargetDescriptor] = []
    for index, raw_target in enumerate(raw_targets, 1):
        context = f"target {index}"
        target_mapping = _expect_mapping(raw_target, context)
        _validate_keys(target_mapping, _TARGET_KEYS, context)
        kind = _required_string(target_mapping, "kind", context)
        if kind not in SUPPORTED_CONTAINER_KINDS:
            raise SheetportPlanError(
                f"Invalid kind '{kind}' in {context}. "
                f"Use one of: {', '.join(SUPPORTED_CONTAINER_KINDS)}."
            )
        element_name = _required_string(target_mapping, "element", context)
        schema = registry.schema_named(element_name)
        if schema is None:
            raise SheetportPlanError(
                f"Unknown element '{element_name}' in {context}. "
                f"Registered records: {', '.join(registry.names()) or '-'}."
            )
        targets.append(
            TargetDescriptor(
                field_name=_required_string(target_mapping, "field", context),
                page_name=_required_string(target_mapping, "page", context),
                container_kind=kind,
                element_type=schema.record_type,
            )
        )
    return tuple(targets)


def _parse_serialization(root_mapping: Mapping[str, object]) -> SerializationOptions | None:
    raw_serialization = root_mapping.get("serialization")
    if raw_serialization is None:
        return None
    mapping = _expect_mapping(raw_serialization, "import plan serialization")
    _validate_keys(mapping, _SERIALIZATION_KEYS, "import plan serialization")
    raw_file_name = mapping.get("file_name", DEFAULT_SERIALIZATION_FILE_NAME)
    if not isinstance(raw_file_name, str) or not raw_file_name.strip():
        raise SheetportPlanError("Serialization field 'file_name' must be a non-empty string.")
    raw_format = mapping.get("format", "json")
    if raw_format not in SUPPORTED_SERIALIZATION_FORMATS:
        raise SheetportPlanError(
            f"Invalid serialization format '{raw_format}'. "
            f"Use one of: {', '.join(SUPPORTED_SERIALIZATION_FORMATS)}."
        )
    return SerializationOptions(
        output_dir=_required_string(mapping, "output_dir", "serialization"),
        file_name=raw_file_name.strip(),
        format=cast(SerializationFormat, raw_format),
    )


class _ReferenceLoader:
    """Resolve ``module:attribute`` and ``file.py:attribute`` references."""

    def __init__(self, base_dir: Path) -> None:
        self._base_dir = base_dir
        self._file_modules: dict[Path, ModuleType] = {}

    def load(self, reference: str) -> object:
        module_ref, separator, attribute = reference.rpartition(":")
        if not separator or not module_ref or not attribute:
            raise SheetportPlanError(
                f"Invalid reference '{reference}': expected 'module:attribute' or 'file.py:attribute'."
            )
        module = self._load_module(module_ref)
        if not hasattr(module, attribute):
            raise SheetportPlanError(f"Invalid reference '{reference}': attribute not found.")
        return getattr(module, attribute)

    def _load_module(self, module_ref: str) -> ModuleType:
        if module_ref.endswith(".py"):
            return self._load_file_module((self._base_dir / module_ref).resolve())
        try:
            return importlib.import_module(module_ref)
        except (ImportError, SyntaxError) as error:
            raise SheetportPlanError(f"Failed to import module '{module_ref}': {error}.") from error

    def _load_file_module(self, module_path: Path) -> ModuleType:
        cached = self._file_modules.get(module_path)
        if cached is not None:
            return cached
        if not module_path.exists():
            raise SheetportPlanError(f"Referenced module file not found at {module_path}.")
        spec = importlib.util.spec_from_file_location(
            f"sheetport_plan_{module_path.stem}", module_path
        )
        if spec is None or spec.loader is None:
            raise SheetportPlanError(f"Failed to load module file at {module_path}.")
        module = importlib.util.module_from_spec(spec)
        sys.modules[spec.name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as error:
            sys.modules.pop(spec.name, None)
            raise SheetportPlanError(
                f"Failed to execute module file at {module_path}: {error}. "
                "Fix the module and retry."
            ) from error
        self._file_modules[module_path] = module
        return module
