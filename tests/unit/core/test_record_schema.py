"""Unit tests for record schema registration."""

from __future__ import annotations

import pytest

from core.errors import SheetportSetupError
from core.record_schema import FieldSpec, RecordRegistry, RecordSchema
from tests.records import Measurement, Unit


def test_field_spec_uses_custom_setter() -> None:
    """Custom setters should replace attribute assignment."""
    received: list[tuple[object, object]] = []
    spec = FieldSpec("value", "float64", setter=lambda record, value: received.append((record, value)))
    record = Measurement()

    spec.assign(record, 2.5)

    assert received == [(record, 2.5)] and record.value == 0.0


def test_record_schema_rejects_duplicate_fields() -> None:
    """A schema should not declare one field twice."""
    with pytest.raises(SheetportSetupError):
        RecordSchema(Unit, [FieldSpec("id", "int32"), FieldSpec("id", "int64")])


def test_record_schema_creates_default_instances() -> None:
    """Schemas should build fresh records from the factory."""
    schema = RecordSchema(Unit, [FieldSpec("id", "int32")], factory=lambda: Unit(name="new"))

    assert schema.create() == Unit(name="new")
    assert schema.create() is not schema.create()


def test_registry_looks_up_by_type_and_name() -> None:
    """Registered schemas should be reachable by type and by name."""
    schema = RecordSchema(Unit, [FieldSpec("id", "int32")], name="Soldier")
    registry = RecordRegistry([schema])

    assert registry.schema_for(Unit) is schema
    assert registry.schema_named("Soldier") is schema
    assert registry.schema_for(Measurement) is None


def test_registry_rejects_duplicate_registration() -> None:
    """One record type should be registered once."""
    registry = RecordRegistry([RecordSchema(Unit, [])])

    with pytest.raises(SheetportSetupError):
        registry.register(RecordSchema(Unit, [], name="Other"))
