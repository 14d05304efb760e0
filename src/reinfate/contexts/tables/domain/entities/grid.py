from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from reinfate.contexts.tables.domain.value_objects import CellAddress, ColumnId, ColumnSpec

from .grid_dimensions import GridDimensions


@dataclass(frozen=True, slots=True)
class GridCell:
    """
    One rendered cell: address, value and whether the user may edit it.
    """

    address: CellAddress
    value: float | None
    editable: bool


@dataclass(frozen=True, slots=True)
class GridRow:
    """
    One row of a table with cells in column display order.
    """

    index: int
    cells: tuple[GridCell, ...]

    def value(self, column: ColumnId) -> float | None:
        for cell in self.cells:
            if cell.address.column is column:
                return cell.value
        raise KeyError(column)


@dataclass(frozen=True, slots=True)
class GridTable:
    """
    One table; rows are ordered for display (highest row index first).
    """

    index: int
    rows: tuple[GridRow, ...]

    def row(self, index: int) -> GridRow:
        for row in self.rows:
            if row.index == index:
                return row
        raise KeyError(index)


@dataclass(frozen=True, slots=True)
class Grid:
    """
    Grid — fully materialized projection of dimensions + snapshot.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - src/reinfate/contexts/tables/application/services/grid_builder.py
      - src/reinfate/contexts/tables/application/use_cases/edit_tables.py
      - apps/api/dto/tables.py

    Never stored: computed columns are re-derived on every build.
    """

    dimensions: GridDimensions
    columns: tuple[ColumnSpec, ...]
    tables: tuple[GridTable, ...]

    def __post_init__(self) -> None:
        """
        Validate that every table shares the dimensions' row count and column schema.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Grid is produced by GridBuilder from one dimensions object.
        Raises:
            ValueError: If table count, row count or row width is inconsistent.
        Side Effects:
            None.
        """
        if len(self.tables) != self.dimensions.tables:
            raise ValueError(
                f"Grid must have {self.dimensions.tables} tables, got {len(self.tables)}"
            )
        width = len(self.columns)
        for table in self.tables:
            if len(table.rows) != self.dimensions.rows:
                raise ValueError(
                    f"table-{table.index} must have {self.dimensions.rows} rows, "
                    f"got {len(table.rows)}"
                )
            for row in table.rows:
                if len(row.cells) != width:
                    raise ValueError(f"table-{table.index} row {row.index} must have {width} cells")

    def table(self, index: int) -> GridTable:
        return self.tables[index - 1]

    def value(self, *, table: int, row: int, column: ColumnId) -> float | None:
        return self.table(table).row(row).value(column)

    def to_payload(self) -> dict[str, Any]:
        """
        Build JSON-compatible nested payload for API/CLI output.

        Args:
            None.
        Returns:
            dict[str, Any]: `{"dimensions", "columns", "tables": [{"table", "rows": [...]}]}`.
        Assumptions:
            Row order in payload is display order.
        Raises:
            None.
        Side Effects:
            None.
        """
        return {
            "dimensions": {"tables": self.dimensions.tables, "rows": self.dimensions.rows},
            "columns": [
                {
                    "id": spec.column_id.value,
                    "label": spec.label,
                    "editable": spec.editable,
                    "server_seeded": spec.server_seeded,
                }
                for spec in self.columns
            ],
            "tables": [
                {
                    "table": table.index,
                    "rows": [
                        {
                            "row": row.index,
                            "values": {
                                cell.address.column.value: cell.value for cell in row.cells
                            },
                        }
                        for row in table.rows
                    ],
                }
                for table in self.tables
            ],
        }
