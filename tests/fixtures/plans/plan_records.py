"""Record types referenced by import plan fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field

from core.record_schema import FieldSpec, RecordRegistry, RecordSchema


@dataclass
class Hero:
    id: int = 0
    name: str = ""
    speed: float = 0.0


@dataclass
class Balance:
    version: str = ""
    hard_mode: bool = False


@dataclass
class PlanContent:
    heroes: list[Hero] = field(default_factory=list)
    balance: Balance = field(default_factory=Balance)


REGISTRY = RecordRegistry(
    [
        RecordSchema(
            Hero,
            [FieldSpec("id", "int32"), FieldSpec("name", str), FieldSpec("speed", "float32")],
        ),
        RecordSchema(Balance, [FieldSpec("version", str), FieldSpec("hard_mode", bool)]),
    ]
)
