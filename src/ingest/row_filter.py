"""Data row splitting and filtering."""

from __future__ import annotations

from typing import Sequence

from core.errors import SheetportParseError
from core.logging_config import get_logger
from ingest.header_resolver import HeaderSet
from ingest.text_splitter import split_line

_LOGGER = get_logger(__name__)

DataRow = tuple[str, ...]


def filter_rows(
    data_lines: Sequence[str],
    header_set: HeaderSet,
    page_name: str,
) -> list[DataRow]:
    """Split data lines into rows aligned with the header set.

    Rows with an empty identifier cell are dropped when the page has an
    identifier column. Blank lines are skipped. Cells beyond the header
    line are dropped with a warning. Row order is preserved.

    Args:
        data_lines: Page lines after the header line.
        header_set: Resolved page headers.
        page_name: Page name for error context.

    Returns:
        Rows with empty-header columns removed.

    Raises:
        SheetportParseError: If a row has fewer cells than the headers need.
    """
    rows: list[DataRow] = []
    for line_number, line in enumerate(data_lines, 2):
        if not line:
            continue
        cells = split_line(line)
        if len(cells) <= header_set.max_index:
            raise SheetportParseError(
                f"Line {line_number} of page '{page_name}' has {len(cells)} cells; "
                f"expected at least {header_set.max_index + 1} to match the header line."
            )
        if header_set.id_index is not None and not cells[header_set.id_index]:
            continue
        if len(cells) > header_set.width:
            _LOGGER.warning(
                "row_extra_cells",
                page_name=page_name,
                line_number=line_number,
                cell_count=len(cells),
                header_count=header_set.width,
            )
        rows.append(
            tuple(
                cell
                for index, cell in enumerate(cells[: header_set.width])
                if index not in header_set.empty_indexes
            )
        )
    return rows
