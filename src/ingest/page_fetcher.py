"""HTTP download of spreadsheet pages as CSV text.

This module builds page export URLs and performs one GET per page.
Any transport failure or non-success status is terminal for the run.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import requests

from core.config import SheetportConfig
from core.errors import SheetportFetchError
from core.logging_config import get_logger
from core.types import PageSource

_LOGGER = get_logger(__name__)


def build_page_url(url_template: str, source: PageSource) -> str:
    """Render the export URL for one page.

    Args:
        url_template: Template with ``{document_id}`` and ``{page_name}``.
        source: Page to download.

    Returns:
        Fully-qualified page URL.

    Raises:
        SheetportFetchError: If the template has placeholders other than the two above.
    """
    try:
        return url_template.format(
            document_id=quote(source.document_id, safe=""),
            page_name=quote(source.page_name, safe=""),
        )
    except (KeyError, IndexError, ValueError) as error:
        raise SheetportFetchError(
            f"Cannot build URL for page '{source.page_name}' from template '{url_template}': "
            f"unsupported placeholder {error}. Use only {{document_id}} and {{page_name}}."
        ) from error


class PageFetcher:
    """Download pages with a shared ``requests`` session."""

    def __init__(self, config: SheetportConfig, session: Any | None = None) -> None:
        self._url_template = config.url_template
        self._timeout_seconds = config.fetch_timeout_seconds
        self._session = session or requests.Session()

    def fetch_page_text(self, source: PageSource) -> str:
        """Download one page and return its CSV text.

        Args:
            source: Page to download.

        Returns:
            Decoded response body.

        Raises:
            SheetportFetchError: If the request fails or returns non-2xx.
        """
        url = build_page_url(self._url_template, source)
        _LOGGER.info("page_fetch_started", page_name=source.page_name, url=url)
        try:
            response = self._session.get(url, timeout=self._timeout_seconds)
        except requests.RequestException as error:
            raise SheetportFetchError(
                f"Bad URL '{url}' for page '{source.page_name}': {error}. "
                "Check the document id and that the document is shared by link."
            ) from error
        if not 200 <= response.status_code < 300:
            raise SheetportFetchError(
                f"Bad URL '{url}' for page '{source.page_name}': "
                f"HTTP {response.status_code}. Check the page name and document sharing."
            )
        if response.encoding is None:
            response.encoding = "utf-8"
        return str(response.text)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()
