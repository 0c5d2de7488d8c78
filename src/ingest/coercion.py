"""Cell text to typed value coercion.

This module converts raw cell strings into field values using a fixed,
locale-independent numeric convention. A ``None`` result means no valid
value could be derived; callers keep the field default in that case.
"""

from __future__ import annotations

from enum import Enum
import math
import re
from typing import cast

from core.errors import SheetportSetupError
from core.types import SUPPORTED_SEMANTIC_TYPES, SemanticType

_INTEGER_RE = re.compile(r"^\s*[+-]?\d+\s*$")
_FLOAT_RE = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$")
_INTEGER_BITS: dict[str, int] = {"int8": 8, "int16": 16, "int32": 32, "int64": 64}
_FLOAT32_MAX = 3.4028234663852886e38
_BUILTIN_SEMANTIC_TYPES: dict[type, SemanticType] = {
    str: "string",
    bool: "bool",
    int: "int64",
    float: "float64",
}


def resolve_semantic_type(declared_type: object) -> tuple[SemanticType, type[Enum] | None]:
    """Resolve a declared field type into a semantic type.

    Args:
        declared_type: Semantic type name, builtin scalar type, or Enum subclass.

    Returns:
        Semantic type name and the enum class for ``enum`` fields.

    Raises:
        SheetportSetupError: If the declared type is not supported.
    """
    if isinstance(declared_type, str) and declared_type in SUPPORTED_SEMANTIC_TYPES:
        if declared_type == "enum":
            raise SheetportSetupError(
                "Enum fields must declare the Enum subclass, not the 'enum' name."
            )
        return cast(SemanticType, declared_type), None
    if isinstance(declared_type, type):
        if issubclass(declared_type, Enum):
            return "enum", declared_type
        builtin = _BUILTIN_SEMANTIC_TYPES.get(declared_type)
        if builtin is not None:
            return builtin, None
    supported_rows = ", ".join(SUPPORTED_SEMANTIC_TYPES)
    raise SheetportSetupError(
        f"Unsupported field type {declared_type!r}. Use one of: {supported_rows}, "
        "str, int, float, bool, or an Enum subclass."
    )


def coerce_value(
    raw: str,
    semantic_type: SemanticType,
    enum_type: type[Enum] | None = None,
) -> object | None:
    """Coerce one cell string into a typed value.

    Args:
        raw: Raw cell text.
        semantic_type: Target semantic type.
        enum_type: Enum class, required for ``enum`` targets.

    Returns:
        Coerced value, or ``None`` when the text is not valid for the type.
    """
    if semantic_type == "string":
        return raw
    if semantic_type in _INTEGER_BITS:
        return _coerce_integer(raw, _INTEGER_BITS[semantic_type])
    if semantic_type == "bool":
        return _coerce_bool(raw)
    if semantic_type == "float64":
        return _coerce_float(raw)
    if semantic_type == "float32":
        value = _coerce_float(raw)
        if value is None or abs(value) > _FLOAT32_MAX:
            return None
        return value
    if semantic_type == "enum" and enum_type is not None:
        return _coerce_enum(raw, enum_type)
    return None


def _coerce_integer(raw: str, bits: int) -> int | None:
    if not _INTEGER_RE.match(raw):
        return None
    value = int(raw)
    limit = 1 << (bits - 1)
    if value < -limit or value >= limit:
        return None
    return value


def _coerce_bool(raw: str) -> bool | None:
    token = raw.strip().lower()
    if token == "true":
        return True
    if token == "false":
        return False
    return None


def _coerce_float(raw: str) -> float | None:
    normalized = raw.replace(",", ".")
    if not _FLOAT_RE.match(normalized):
        return None
    value = float(normalized)
    # Exponents can still overflow to infinity.
    if math.isinf(value):
        return None
    return value


def _coerce_enum(raw: str, enum_type: type[Enum]) -> Enum | None:
    token = raw.strip().lower()
    for member in enum_type:
        if member.name.lower() == token:
            return member
    return None
