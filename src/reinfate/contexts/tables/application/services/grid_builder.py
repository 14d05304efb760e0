from __future__ import annotations

import logging

from reinfate.contexts.tables.domain.entities import (
    Grid,
    GridCell,
    GridRow,
    GridSnapshot,
    GridTable,
)
from reinfate.contexts.tables.domain.value_objects import (
    COMPUTED_COLUMNS,
    MONTH_COLUMNS,
    CellAddress,
    ColumnId,
    column_specs,
)

from .aggregator_v1 import compute_row

log = logging.getLogger(__name__)


def seed_year(*, current_year: int, row: int) -> int:
    """Default `year` value of a row: row 1 is the current year, row 2 the previous one."""
    return current_year - row + 1


class GridBuilder:
    """
    GridBuilder — materializes a Grid from dimensions + latest raw snapshot.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - src/reinfate/contexts/tables/domain/entities/grid.py
      - src/reinfate/contexts/tables/application/services/aggregator_v1.py
      - src/reinfate/contexts/tables/application/use_cases/edit_tables.py
    """

    def build(
        self,
        *,
        snapshot: GridSnapshot,
        current_year: int,
        display_decimals: int | None,
    ) -> Grid:
        """
        Build full grid with seeded `year` cells and freshly computed columns.

        Args:
            snapshot: Raw cell values with current dimensions.
            current_year: Calendar year used to seed `year` cells absent from snapshot.
            display_decimals: Rounding precision for computed cells, or `None` to keep
                canonical unrounded values.
        Returns:
            Grid: Materialized grid; computed values from the snapshot are ignored.
        Assumptions:
            Snapshot addresses are already validated against dimensions.
        Raises:
            ValueError: If `display_decimals` is negative.
        Side Effects:
            None.
        """
        if display_decimals is not None and display_decimals < 0:
            raise ValueError(f"display_decimals must be >= 0, got {display_decimals}")

        dimensions = snapshot.dimensions
        specs = column_specs()
        tables: list[GridTable] = []
        for table_index in dimensions.table_indices():
            rows: list[GridRow] = []
            for row_index in dimensions.row_indices():
                rows.append(
                    self._build_row(
                        snapshot=snapshot,
                        table=table_index,
                        row=row_index,
                        current_year=current_year,
                        display_decimals=display_decimals,
                    )
                )
            tables.append(GridTable(index=table_index, rows=tuple(rows)))

        log.debug(
            "tables grid built tables=%s rows=%s rounded=%s",
            dimensions.tables,
            dimensions.rows,
            display_decimals is not None,
        )
        return Grid(dimensions=dimensions, columns=specs, tables=tuple(tables))

    def _build_row(
        self,
        *,
        snapshot: GridSnapshot,
        table: int,
        row: int,
        current_year: int,
        display_decimals: int | None,
    ) -> GridRow:
        months = {
            column: snapshot.value(table=table, row=row, column=column) for column in MONTH_COLUMNS
        }
        aggregates = compute_row(months)
        if display_decimals is not None:
            aggregates = aggregates.rounded(display_decimals)
        computed = aggregates.as_mapping()

        cells: list[GridCell] = []
        for column in ColumnId:
            address = CellAddress(table=table, row=row, column=column)
            if column in COMPUTED_COLUMNS:
                cells.append(GridCell(address=address, value=computed[column], editable=False))
                continue
            value = snapshot.cells.get(address)
            if column is ColumnId.YEAR and value is None:
                value = float(seed_year(current_year=current_year, row=row))
            cells.append(GridCell(address=address, value=value, editable=True))
        return GridRow(index=row, cells=tuple(cells))
