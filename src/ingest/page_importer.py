"""Single page import: fetch, parse, and populate one target field.

The importer runs three steps per page and advances the run progress by
one third of the page share after each step:

1. download the page text,
2. resolve headers and filter data rows,
3. create one record per row and store the container on the content object.
"""

from __future__ import annotations

from typing import Mapping, Protocol, Sequence

from core.errors import SheetportImportError, SheetportParseError
from core.logging_config import get_logger
from core.types import PageSource
from ingest.header_resolver import HeaderSet, map_headers_to_fields, resolve_headers
from ingest.row_filter import DataRow, filter_rows
from ingest.run_context import ImportRunContext
from ingest.target_setup import ResolvedField, ResolvedTarget
from ingest.text_splitter import split_line, split_lines

_LOGGER = get_logger(__name__)


class PageTextSource(Protocol):
    """Anything that can return the CSV text of a page."""

    def fetch_page_text(self, source: PageSource) -> str: ...


class PageImporter:
    """Import pages of one document into one content object."""

    def __init__(
        self,
        document_id: str,
        content: object,
        fetcher: PageTextSource,
        context: ImportRunContext,
    ) -> None:
        self._document_id = document_id
        self._content = content
        self._fetcher = fetcher
        self._context = context

    def import_page(self, target: ResolvedTarget) -> None:
        """Populate one target field from its page.

        Args:
            target: Validated target.

        Raises:
            SheetportFetchError: If the page cannot be downloaded.
            SheetportParseError: If rows do not match the header line.
            SheetportImportError: If a single-record page has no rows, or a record
                factory or field setter fails.
        """
        descriptor = target.descriptor
        source = PageSource(document_id=self._document_id, page_name=descriptor.page_name)

        self._step(f"Downloading page '{source.page_name}'...")
        page_text = self._fetcher.fetch_page_text(source)
        self._finish_step()

        self._step("Analysing headers...")
        header_set, rows = _parse_page(page_text, source.page_name)
        self._finish_step()

        self._step(
            f"Populating records '{descriptor.field_name}'<{target.schema.name}>..."
        )
        mapping = map_headers_to_fields(
            header_set, target.fields, source.page_name, target.schema.name
        )
        container = _build_container(target, header_set.names, rows, mapping)
        setattr(self._content, descriptor.field_name, container)
        self._finish_step()

        _LOGGER.info(
            "page_imported",
            page_name=source.page_name,
            field_name=descriptor.field_name,
            container_kind=target.container_kind,
            row_count=len(rows),
            mapped_headers=len(mapping),
        )

    def _step(self, status: str) -> None:
        self._context.describe(status)
        self._context.publish()

    def _finish_step(self) -> None:
        self._context.advance_step()
        self._context.publish()


def _parse_page(page_text: str, page_name: str) -> tuple[HeaderSet, list[DataRow]]:
    """Split page text into a header set and filtered rows."""
    lines = split_lines(page_text)
    if not lines or not lines[0]:
        raise SheetportParseError(f"Page '{page_name}' has no header line.")
    header_set = resolve_headers(split_line(lines[0]))
    rows = filter_rows(lines[1:], header_set, page_name)
    return header_set, rows


def _build_container(
    target: ResolvedTarget,
    header_names: Sequence[str],
    rows: Sequence[DataRow],
    mapping: Mapping[str, ResolvedField],
) -> object:
    descriptor = target.descriptor
    if target.container_kind == "single":
        if not rows:
            raise SheetportImportError(
                f"Page '{descriptor.page_name}' has no data rows for single-record field "
                f"'{descriptor.field_name}'."
            )
        return _build_record(target, header_names, rows[0], mapping)
    records = [_build_record(target, header_names, row, mapping) for row in rows]
    if target.container_kind == "array":
        return tuple(records)
    return records


def _build_record(
    target: ResolvedTarget,
    header_names: Sequence[str],
    row: DataRow,
    mapping: Mapping[str, ResolvedField],
) -> object:
    descriptor = target.descriptor
    try:
        record = target.schema.create()
    except Exception as error:
        raise SheetportImportError(
            f"Record factory for <{target.schema.name}> failed while populating "
            f"'{descriptor.field_name}': {error}. Fix the schema factory."
        ) from error
    for header, cell in zip(header_names, row):
        field = mapping.get(header)
        if field is None:
            continue
        value = field.coerce(cell)
        if value is None:
            _LOGGER.warning(
                "cell_coercion_missed",
                page_name=descriptor.page_name,
                header=header,
                value=cell,
                field_type=field.semantic_type,
            )
            continue
        try:
            field.spec.assign(record, value)
        except Exception as error:
            raise SheetportImportError(
                f"Could not assign column '{header}' of page '{descriptor.page_name}' "
                f"to {target.schema.name}.{field.name} for '{descriptor.field_name}': {error}."
            ) from error
    return record
