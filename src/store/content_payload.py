"""JSON-safe payload conversion for content objects.

Content objects and records may be dataclasses or plain classes. Public
instance attributes are serialized; enum members are written by name.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from core.errors import SheetportSerializationError


def content_to_payload(value: Any) -> object:
    """Convert a content object into JSON-compatible data.

    Args:
        value: Content object, record, container, or scalar.

    Returns:
        Nested dicts, lists, and scalars.

    Raises:
        SheetportSerializationError: If a value cannot be represented.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, (list, tuple)):
        return [content_to_payload(item) for item in value]
    if isinstance(value, dict):
        return {str(key): content_to_payload(item) for key, item in value.items()}
    if is_dataclass(value) and not isinstance(value, type):
        return {field.name: content_to_payload(getattr(value, field.name)) for field in fields(value)}
    attributes = getattr(value, "__dict__", None)
    if isinstance(attributes, dict):
        return {
            name: content_to_payload(item)
            for name, item in attributes.items()
            if not name.startswith("_")
        }
    raise SheetportSerializationError(
        f"Cannot serialize value of type {type(value).__name__}. "
        "Use dataclasses, plain classes, enums, lists, or scalars in content objects."
    )
