"""Explicit record schemas for importable record types.

A record schema lists which fields of a record type can receive column
values, the type each field is coerced to, and how values are assigned.
Schemas are registered once per record type in a ``RecordRegistry`` so
the importer never inspects record classes at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Mapping

from core.errors import SheetportSetupError

FieldSetter = Callable[[object, object], None]
RecordFactory = Callable[[], object]


@dataclass(frozen=True)
class FieldSpec:
    """One importable record field.

    Attributes:
        name: Field name; must equal the column header exactly.
        declared_type: ``SemanticType`` name, ``str``/``int``/``float``/``bool``,
            or an ``Enum`` subclass.
        setter: Optional assignment hook; defaults to ``setattr``.
    """

    name: str
    declared_type: object
    setter: FieldSetter | None = None

    def assign(self, record: object, value: object) -> None:
        """Assign one coerced value to a record instance."""
        if self.setter is not None:
            self.setter(record, value)
            return
        setattr(record, self.name, value)


class RecordSchema:
    """Importable field table for one record type."""

    def __init__(
        self,
        record_type: type,
        fields: Iterable[FieldSpec],
        name: str | None = None,
        factory: RecordFactory | None = None,
    ) -> None:
        """Create a schema.

        Args:
            record_type: Class of the records this schema populates.
            fields: Importable fields, in any order.
            name: Registry name; defaults to the class name.
            factory: Zero-argument record constructor; defaults to ``record_type``.

        Raises:
            SheetportSetupError: If two fields share a name.
        """
        self.record_type = record_type
        self.name = name or record_type.__name__
        self._factory: RecordFactory = factory or record_type
        self._fields = _index_fields(self.name, fields)

    @property
    def fields(self) -> Mapping[str, FieldSpec]:
        """Return fields keyed by exact name."""
        return dict(self._fields)

    def create(self) -> object:
        """Create one default-valued record instance."""
        return self._factory()

    def __repr__(self) -> str:
        return f"RecordSchema(name={self.name!r}, fields={list(self._fields)!r})"


class RecordRegistry:
    """Registered record schemas keyed by record type and by name."""

    def __init__(self, schemas: Iterable[RecordSchema] = ()) -> None:
        self._by_type: dict[type, RecordSchema] = {}
        self._by_name: dict[str, RecordSchema] = {}
        for schema in schemas:
            self.register(schema)

    def register(self, schema: RecordSchema) -> RecordSchema:
        """Register one schema and return it.

        Raises:
            SheetportSetupError: If the type or name is already registered.
        """
        if schema.record_type in self._by_type:
            raise SheetportSetupError(
                f"Record type {schema.record_type.__name__} is already registered."
            )
        if schema.name in self._by_name:
            raise SheetportSetupError(f"Record schema name '{schema.name}' is already registered.")
        self._by_type[schema.record_type] = schema
        self._by_name[schema.name] = schema
        return schema

    def schema_for(self, record_type: type) -> RecordSchema | None:
        """Return the schema registered for a record type, if any."""
        return self._by_type.get(record_type)

    def schema_named(self, name: str) -> RecordSchema | None:
        """Return the schema registered under a name, if any."""
        return self._by_name.get(name)

    def names(self) -> tuple[str, ...]:
        """Return registered schema names in registration order."""
        return tuple(self._by_name)


def _index_fields(schema_name: str, fields: Iterable[FieldSpec]) -> dict[str, FieldSpec]:
    indexed: dict[str, FieldSpec] = {}
    for spec in fields:
        if spec.name in indexed:
            raise SheetportSetupError(
                f"Record schema '{schema_name}' declares field '{spec.name}' more than once."
            )
        indexed[spec.name] = spec
    return indexed
