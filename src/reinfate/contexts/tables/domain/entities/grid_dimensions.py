from __future__ import annotations

from dataclasses import dataclass

from reinfate.contexts.tables.domain.value_objects import (
    CellAddress,
    ColumnSpec,
    column_specs,
)


@dataclass(frozen=True, slots=True)
class GridDimensions:
    """
    GridDimensions — immutable (tables x rows) shape shared by every table of the grid.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - src/reinfate/contexts/tables/domain/entities/grid_snapshot.py
      - src/reinfate/contexts/tables/application/use_cases/edit_tables.py

    Growth returns a new object; the grid itself is rebuilt from dimensions + snapshot.
    """

    tables: int = 1
    rows: int = 1

    def __post_init__(self) -> None:
        if isinstance(self.tables, bool) or not isinstance(self.tables, int) or self.tables < 1:
            raise ValueError(f"GridDimensions.tables must be >= 1, got {self.tables!r}")
        if isinstance(self.rows, bool) or not isinstance(self.rows, int) or self.rows < 1:
            raise ValueError(f"GridDimensions.rows must be >= 1, got {self.rows!r}")

    def add_table(self) -> GridDimensions:
        """Append one table sharing the current row count."""
        return GridDimensions(tables=self.tables + 1, rows=self.rows)

    def add_row(self) -> GridDimensions:
        """Append one row to every table."""
        return GridDimensions(tables=self.tables, rows=self.rows + 1)

    def table_indices(self) -> range:
        return range(1, self.tables + 1)

    def row_indices(self) -> range:
        """
        Row indices in display order: most recent row (index 1) is shown last.

        Args:
            None.
        Returns:
            range: `rows, rows - 1, ..., 1`.
        Assumptions:
            Row 1 holds the current year, higher indices hold earlier years, so
            display order is also chronological month order.
        Raises:
            None.
        Side Effects:
            None.
        """
        return range(self.rows, 0, -1)

    def contains(self, address: CellAddress) -> bool:
        return address.table <= self.tables and address.row <= self.rows

    @staticmethod
    def columns() -> tuple[ColumnSpec, ...]:
        return column_specs()
