"""Unit tests for import plan parsing."""

from __future__ import annotations

from pathlib import Path
import sys

import pytest

from core.errors import SheetportPlanError
from core.import_plan import load_import_plan
from tests.fixture_paths import plan_path


def test_load_import_plan_valid_plan_parses_targets() -> None:
    """Valid plans should resolve targets to registered record types."""
    plan = load_import_plan(plan_path("valid_plan"))

    assert plan.document_id == "doc-123"
    assert [target.field_name for target in plan.targets] == ["heroes", "balance"]
    assert plan.targets[0].element_type.__name__ == "Hero"
    assert plan.targets[1].container_kind == "single"
    assert plan.serialization is not None and plan.serialization.file_name == "Content.v1"


def test_load_import_plan_shares_module_between_references() -> None:
    """Registry and content references to one file should share classes."""
    plan = load_import_plan(plan_path("valid_plan"))

    content = plan.content_type()

    assert plan.registry.schema_for(type(content.balance)) is not None


def test_load_import_plan_without_serialization() -> None:
    """Serialization settings should be optional."""
    plan = load_import_plan(plan_path("no_serialization"))

    assert plan.serialization is None


def test_load_import_plan_unknown_element_raises() -> None:
    """Elements must name a registered record schema."""
    with pytest.raises(SheetportPlanError, match="Villain"):
        load_import_plan(plan_path("unknown_element"))


def test_load_import_plan_invalid_kind_raises() -> None:
    """Unsupported container kinds should be rejected."""
    with pytest.raises(SheetportPlanError, match="dictionary"):
        load_import_plan(plan_path("invalid_kind"))


def test_load_import_plan_unknown_root_key_raises() -> None:
    """Unknown root fields should be rejected."""
    with pytest.raises(SheetportPlanError, match="pages"):
        load_import_plan(plan_path("unknown_root_key"))


def test_load_import_plan_missing_file_raises(tmp_path: Path) -> None:
    """Missing plan files should raise a plan error."""
    with pytest.raises(SheetportPlanError):
        load_import_plan(str(tmp_path / "missing.yaml"))


def test_select_keeps_plan_order_and_rejects_unknown() -> None:
    """Selecting fields should keep plan order and fail on unknown names."""
    plan = load_import_plan(plan_path("valid_plan"))

    selected = plan.select(["balance"])

    assert [target.field_name for target in selected.targets] == ["balance"]
    with pytest.raises(SheetportPlanError):
        plan.select(["villains"])


def test_load_import_plan_wraps_failing_module_file() -> None:
    """Errors raised by a referenced module file should become plan errors."""
    with pytest.raises(SheetportPlanError, match="registry unavailable"):
        load_import_plan(plan_path("failing_module"))

    assert "sheetport_plan_failing_records" not in sys.modules
