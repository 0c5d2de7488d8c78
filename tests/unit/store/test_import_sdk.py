"""Unit tests for the import SDK client."""

from __future__ import annotations

from dataclasses import replace
import json
from pathlib import Path

from core.config import SheetportConfig
from core.import_plan import load_import_plan
from core.types import SerializationOptions, TargetDescriptor
from store.import_sdk import SheetportClient
from tests.fakes import FakeSession
from tests.fixture_paths import plan_path
from tests.records import GameContent, Unit, build_registry

_PLAN_PAGES = {
    "Heroes": 'id,name,speed\n1,Ayla,"1,5"\n2,Bram,2',
    "Balance": "version,hard_mode\n1.4,TRUE",
}


def test_import_content_uses_injected_session_without_closing() -> None:
    """Caller-provided sessions should be reused and left open."""
    session = FakeSession(pages={"Units": "id,name\n1,A"})
    client = SheetportClient(SheetportConfig.from_env(), session)
    content = GameContent()

    result = client.import_content(
        "doc1", content, build_registry(), [TargetDescriptor("units", "Units", "list", Unit)]
    )

    assert result.succeeded
    assert content.units == [Unit(id=1, name="A")]
    assert session.closed is False


def test_run_plan_serializes_on_success(tmp_path: Path) -> None:
    """Successful plan runs should write the configured output file."""
    plan = load_import_plan(plan_path("valid_plan"))
    plan = replace(
        plan, serialization=SerializationOptions(output_dir=str(tmp_path), file_name="out")
    )
    client = SheetportClient(SheetportConfig.from_env(), FakeSession(pages=_PLAN_PAGES))

    run = client.run_plan(plan)

    assert run.result.succeeded
    assert run.output_path == tmp_path / "out.json"
    payload = json.loads(run.output_path.read_text(encoding="utf-8"))
    assert payload["balance"] == {"version": "1.4", "hard_mode": True}
    assert [hero["name"] for hero in payload["heroes"]] == ["Ayla", "Bram"]


def test_run_plan_skips_serialization_on_failure(tmp_path: Path) -> None:
    """Failed runs should not write output files."""
    plan = load_import_plan(plan_path("valid_plan"))
    plan = replace(
        plan, serialization=SerializationOptions(output_dir=str(tmp_path), file_name="out")
    )
    session = FakeSession(pages={"Heroes": _PLAN_PAGES["Heroes"]})
    client = SheetportClient(SheetportConfig.from_env(), session)

    run = client.run_plan(plan)

    assert run.result.state == "failed"
    assert run.output_path is None
    assert list(tmp_path.iterdir()) == []
