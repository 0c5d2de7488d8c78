"""Unit tests for core config parsing."""

from __future__ import annotations

import os

import pytest

from core.config import SheetportConfig
from core.constants import DEFAULT_URL_TEMPLATE
from core.errors import SheetportConfigError


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to the default URL template and timeout."""
    monkeypatch.delenv("SHEETPORT_URL_TEMPLATE", raising=False)
    monkeypatch.delenv("SHEETPORT_FETCH_TIMEOUT", raising=False)

    config = SheetportConfig.from_env()

    assert config.url_template == DEFAULT_URL_TEMPLATE
    assert config.fetch_timeout_seconds == 30.0


def test_from_env_reads_output_dir(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve output directory from environment."""
    monkeypatch.setenv("SHEETPORT_OUTPUT_DIR", "./.tmp-sheetport")

    config = SheetportConfig.from_env()

    assert config.output_dir.name == ".tmp-sheetport"


def test_from_env_raises_for_invalid_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for non-numeric timeouts."""
    monkeypatch.setenv("SHEETPORT_FETCH_TIMEOUT", "soon")

    with pytest.raises(SheetportConfigError):
        SheetportConfig.from_env()

    assert os.getenv("SHEETPORT_FETCH_TIMEOUT") == "soon"


def test_from_env_raises_for_non_positive_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for zero or negative timeouts."""
    monkeypatch.setenv("SHEETPORT_FETCH_TIMEOUT", "0")

    with pytest.raises(SheetportConfigError):
        SheetportConfig.from_env()


def test_from_env_raises_for_template_without_page(monkeypatch: pytest.MonkeyPatch) -> None:
    """URL templates must contain both placeholders."""
    monkeypatch.setenv("SHEETPORT_URL_TEMPLATE", "https://host/{document_id}/export")

    with pytest.raises(SheetportConfigError, match="page_name"):
        SheetportConfig.from_env()


def test_from_env_raises_for_template_with_unknown_placeholder(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """URL templates may only use the document and page placeholders."""
    monkeypatch.setenv(
        "SHEETPORT_URL_TEMPLATE",
        "https://host/{document_id}/export?sheet={page_name}&gid={gid}",
    )

    with pytest.raises(SheetportConfigError, match="gid"):
        SheetportConfig.from_env()


def test_from_env_accepts_template_with_escaped_braces(monkeypatch: pytest.MonkeyPatch) -> None:
    """Doubled braces should be accepted as literal braces."""
    template = "https://host/{document_id}/export?sheet={page_name}&tag={{raw}}"
    monkeypatch.setenv("SHEETPORT_URL_TEMPLATE", template)

    assert SheetportConfig.from_env().url_template == template


@pytest.mark.parametrize("raw_timeout", ["nan", "inf", "-inf"])
def test_from_env_raises_for_non_finite_timeout(
    monkeypatch: pytest.MonkeyPatch, raw_timeout: str
) -> None:
    """Config should fail for timeouts that are not finite numbers."""
    monkeypatch.setenv("SHEETPORT_FETCH_TIMEOUT", raw_timeout)

    with pytest.raises(SheetportConfigError, match="finite"):
        SheetportConfig.from_env()
