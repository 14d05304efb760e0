from __future__ import annotations

import re
from dataclasses import dataclass

from .column_id import ColumnId

_TABLE_LABEL_PATTERN = re.compile(r"^table-(\d+)$")


@dataclass(frozen=True, slots=True)
class CellAddress:
    """
    CellAddress — stable (table, row, column) coordinate of one grid cell.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - src/reinfate/contexts/tables/domain/entities/grid_snapshot.py
      - src/reinfate/contexts/tables/domain/value_objects/validation_issue.py

    Representation:
    - table, row: 1-based indices
    - path: "table-2.3.jan"
    """

    table: int
    row: int
    column: ColumnId

    def __post_init__(self) -> None:
        if self.table < 1:
            raise ValueError(f"CellAddress.table must be >= 1, got {self.table}")
        if self.row < 1:
            raise ValueError(f"CellAddress.row must be >= 1, got {self.row}")
        object.__setattr__(self, "column", ColumnId.parse(self.column))

    @property
    def path(self) -> str:
        return f"{table_label(self.table)}.{self.row}.{self.column.value}"

    def __str__(self) -> str:
        return self.path


def table_label(table: int) -> str:
    """Whole-table address label, e.g. `table-1`."""
    return f"table-{table}"


def parse_index(raw: object, *, field_name: str) -> int:
    """
    Parse 1-based table/row index from int, numeric string or `table-N` label.

    Args:
        raw: Raw index value from nested payload keys.
        field_name: Field label for deterministic error messages.
    Returns:
        int: Parsed index value.
    Assumptions:
        Bool values are rejected despite inheriting from `int`.
    Raises:
        ValueError: If value cannot be parsed into a positive integer.
    Side Effects:
        None.
    """
    if isinstance(raw, bool):
        raise ValueError(f"{field_name} must be an integer, got bool")
    if isinstance(raw, int):
        value = raw
    else:
        literal = str(raw).strip().lower()
        match = _TABLE_LABEL_PATTERN.match(literal)
        if match is not None:
            literal = match.group(1)
        if not literal.isdigit():
            raise ValueError(f"{field_name} must be a positive integer, got {raw!r}")
        value = int(literal)
    if value < 1:
        raise ValueError(f"{field_name} must be >= 1, got {value}")
    return value
