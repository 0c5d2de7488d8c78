"""Header line resolution and header-to-field mapping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence, TypeVar

from core.constants import IDENTIFIER_HEADER
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)

FieldT = TypeVar("FieldT")


@dataclass(frozen=True)
class HeaderSet:
    """Named columns of one page.

    Attributes:
        columns: Ordered ``(column_index, name)`` pairs for named columns.
        empty_indexes: Raw indexes of columns with empty header names.
        id_index: Raw index of the identifier column, if one exists.
        width: Number of cells on the header line.
    """

    columns: tuple[tuple[int, str], ...]
    empty_indexes: frozenset[int]
    id_index: int | None
    width: int

    @property
    def names(self) -> tuple[str, ...]:
        """Return header names aligned with stripped row cells."""
        return tuple(name for _, name in self.columns)

    @property
    def max_index(self) -> int:
        """Return the highest raw column index a row must cover."""
        if not self.columns:
            return -1
        return self.columns[-1][0]


def resolve_headers(header_cells: Sequence[str]) -> HeaderSet:
    """Build a header set from the split header line.

    Args:
        header_cells: Fields of the first page line.

    Returns:
        Header set without empty-named columns.
    """
    columns: list[tuple[int, str]] = []
    empty_indexes: set[int] = set()
    id_index: int | None = None
    for index, name in enumerate(header_cells):
        if not name:
            empty_indexes.add(index)
            continue
        if id_index is None and name.lower() == IDENTIFIER_HEADER:
            id_index = index
        columns.append((index, name))
    return HeaderSet(
        columns=tuple(columns),
        empty_indexes=frozenset(empty_indexes),
        id_index=id_index,
        width=len(header_cells),
    )


def map_headers_to_fields(
    header_set: HeaderSet,
    fields: Mapping[str, FieldT],
    page_name: str,
    record_name: str,
) -> dict[str, FieldT]:
    """Map header names onto record fields by exact name.

    Args:
        header_set: Resolved page headers.
        fields: Importable record fields keyed by exact name.
        page_name: Page name for log context.
        record_name: Record type name for log context.

    Returns:
        Header name to field mapping; unmatched headers are omitted.
    """
    mapping: dict[str, FieldT] = {}
    for name in header_set.names:
        field = fields.get(name)
        if field is None:
            _LOGGER.warning(
                "header_unmapped",
                page_name=page_name,
                header=name,
                record_type=record_name,
            )
            continue
        mapping[name] = field
    return mapping
