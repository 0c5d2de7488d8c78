"""Unit tests for CLI command handling."""

from __future__ import annotations

import json
from pathlib import Path

from cli.main import main
from store import import_sdk
from tests.fakes import FakeSession
from tests.fixture_paths import plan_path

_PLAN_PAGES = {
    "Heroes": "id,name,speed\n1,Ayla,3\n,Ghost,0\n2,Bram,2",
    "Balance": "version,hard_mode\n1.4,false",
}


def _patch_session(monkeypatch, session: FakeSession) -> None:
    monkeypatch.setattr(import_sdk.requests, "Session", lambda: session)


def test_cli_pages_lists_plan_targets(capsys) -> None:
    """CLI pages should print one row per plan target."""
    exit_code = main(["pages", plan_path("valid_plan")])
    output = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0
    assert output == ["heroes\tHeroes\tlist\tHero", "balance\tBalance\tsingle\tBalance"]


def test_cli_import_writes_output(tmp_path: Path, capsys, monkeypatch) -> None:
    """CLI import should serialize content and print the output path."""
    _patch_session(monkeypatch, FakeSession(pages=_PLAN_PAGES))
    args = [
        "import",
        plan_path("valid_plan"),
        "--output-dir",
        str(tmp_path),
        "--file-name",
        "cli",
    ]

    exit_code = main(args)
    output = capsys.readouterr().out

    assert exit_code == 0
    assert f"output_path={tmp_path / 'cli.json'}" in output
    payload = json.loads((tmp_path / "cli.json").read_text(encoding="utf-8"))
    assert [hero["id"] for hero in payload["heroes"]] == [1, 2]


def test_cli_import_only_selects_fields(tmp_path: Path, capsys, monkeypatch) -> None:
    """--only should restrict the import to the named fields."""
    session = FakeSession(pages=_PLAN_PAGES)
    _patch_session(monkeypatch, session)

    exit_code = main(
        ["import", plan_path("valid_plan"), "--only", "balance", "--no-serialize"]
    )
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "imported_fields=balance" in output
    assert session.requested_pages == ["Balance"]


def test_cli_import_reports_failed_run(capsys, monkeypatch) -> None:
    """A failed fetch should print the failure and exit non-zero."""
    _patch_session(monkeypatch, FakeSession(pages={}))

    exit_code = main(["import", plan_path("no_serialization")])
    output = capsys.readouterr().out

    assert exit_code == 1
    assert "import_failed=" in output and "Heroes" in output


def test_cli_reports_plan_errors(capsys) -> None:
    """Invalid plans should print an error line and exit non-zero."""
    exit_code = main(["pages", plan_path("unknown_element")])

    assert exit_code == 1
    assert capsys.readouterr().out.startswith("error=")
