from __future__ import annotations

from datetime import datetime, timezone

import pytest

from reinfate.contexts.tables.adapters.outbound.time import FixedYearTablesClock
from reinfate.contexts.tables.application import EditTablesUseCase, SubmitTablesResult
from reinfate.contexts.tables.application.use_cases import SUBMIT_ACCEPTED_STATUS
from reinfate.contexts.tables.domain.entities import GridDimensions, GridSnapshot
from reinfate.contexts.tables.domain.errors import TablesSnapshotError
from reinfate.contexts.tables.domain.value_objects import ColumnId


class _MutableClock:
    """
    Clock fake whose year can be changed between calls.
    """

    def __init__(self, *, year: int) -> None:
        self.year = year

    def now(self) -> datetime:
        return datetime(self.year, 6, 30, tzinfo=timezone.utc)


def _use_case(*, year: int = 2024, display_decimals: int = 2) -> EditTablesUseCase:
    return EditTablesUseCase(
        clock=FixedYearTablesClock(year=year),
        display_decimals=display_decimals,
    )


def _snapshot(dimensions: GridDimensions, *items: tuple[int, int, str, float]) -> GridSnapshot:
    return GridSnapshot.from_items(
        dimensions=dimensions,
        items=[
            {"table": table, "row": row, "column": column, "value": value}
            for table, row, column, value in items
        ],
    )


def test_start_returns_single_empty_table() -> None:
    view = _use_case().start()

    assert view.snapshot.dimensions == GridDimensions(tables=1, rows=1)
    assert view.snapshot.cells == {}
    assert view.grid.value(table=1, row=1, column=ColumnId.YEAR) == 2024.0
    assert view.grid.value(table=1, row=1, column=ColumnId.JAN) is None


def test_add_table_preserves_existing_values() -> None:
    """
    Verify growing tables keeps entered values and the shared row count.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        New table is empty apart from seeded year and computed cells.
    Raises:
        AssertionError: If values are lost or shape differs.
    Side Effects:
        None.
    """
    snapshot = _snapshot(GridDimensions(tables=1, rows=2), (1, 2, "jan", 4.0))

    view = _use_case().add_table(snapshot)

    assert view.snapshot.dimensions == GridDimensions(tables=2, rows=2)
    assert view.grid.value(table=1, row=2, column=ColumnId.JAN) == 4.0
    assert view.grid.value(table=2, row=2, column=ColumnId.JAN) is None
    assert view.grid.value(table=2, row=2, column=ColumnId.YEAR) == 2023.0


def test_add_row_grows_every_table() -> None:
    snapshot = _snapshot(GridDimensions(tables=3, rows=1), (3, 1, "dec", 1.0))

    view = _use_case().add_row(snapshot)

    assert view.snapshot.dimensions == GridDimensions(tables=3, rows=2)
    for table in view.grid.tables:
        assert [row.index for row in table.rows] == [2, 1]
    assert view.grid.value(table=3, row=2, column=ColumnId.YEAR) == 2023.0
    assert view.grid.value(table=3, row=1, column=ColumnId.DEC) == 1.0


def test_refresh_recomputes_from_months_and_ignores_stale_computed() -> None:
    snapshot = _snapshot(
        GridDimensions(),
        (1, 1, "jan", 2.0),
        (1, 1, "q1", 123.0),
    )

    view = _use_case().refresh(snapshot)

    assert view.grid.value(table=1, row=1, column=ColumnId.Q1) == 1.0
    assert view.grid.value(table=1, row=1, column=ColumnId.Q2) == 0.33


def test_year_seed_follows_clock() -> None:
    clock = _MutableClock(year=2020)
    use_case = EditTablesUseCase(clock=clock)

    assert use_case.start().grid.value(table=1, row=1, column=ColumnId.YEAR) == 2020.0
    clock.year = 2021
    assert use_case.start().grid.value(table=1, row=1, column=ColumnId.YEAR) == 2021.0


def test_submit_accepts_valid_snapshot_with_unrounded_values() -> None:
    snapshot = _snapshot(GridDimensions(), (1, 1, "jan", 1.0), (1, 1, "feb", 1.0))

    result = _use_case().submit(snapshot)

    assert result.accepted is True
    assert result.issues == ()
    assert result.status_message == SUBMIT_ACCEPTED_STATUS == "Valid"
    assert result.view.grid.value(table=1, row=1, column=ColumnId.Q1) == 3.0 / 3
    assert result.view.grid.value(table=1, row=1, column=ColumnId.Q2) == 1.0 / 3


def test_submit_rejects_invalid_snapshot_and_keeps_grid() -> None:
    snapshot = _snapshot(GridDimensions(), (1, 1, "jan", 5.0), (1, 1, "mar", 6.0))

    result = _use_case().submit(snapshot)

    assert result.accepted is False
    assert result.status_message is None
    assert [issue.path for issue in result.issues] == ["table-1.1.feb"]
    assert result.view.snapshot is snapshot
    assert result.view.grid.value(table=1, row=1, column=ColumnId.MAR) == 6.0
    assert result.view.grid.value(table=1, row=1, column=ColumnId.Q1) == 4.0


def test_compute_row_delegates_to_aggregation() -> None:
    aggregates = _use_case().compute_row([2.0] + [None] * 11)

    assert aggregates.q1 == 1.0


def test_use_case_rejects_negative_display_decimals() -> None:
    with pytest.raises(ValueError, match="display_decimals"):
        _use_case(display_decimals=-1)


def test_use_case_rejects_limits_outside_ceiling() -> None:
    with pytest.raises(ValueError, match="max_tables"):
        EditTablesUseCase(clock=FixedYearTablesClock(year=2024), max_tables=0)
    with pytest.raises(ValueError, match="max_rows"):
        EditTablesUseCase(clock=FixedYearTablesClock(year=2024), max_rows=1001)


def test_growth_stops_at_configured_limits() -> None:
    use_case = EditTablesUseCase(clock=FixedYearTablesClock(year=2024), max_tables=2, max_rows=1)

    view = use_case.add_table(GridSnapshot.empty())

    assert view.snapshot.dimensions == GridDimensions(tables=2, rows=1)
    with pytest.raises(TablesSnapshotError) as tables_error:
        use_case.add_table(view.snapshot)
    with pytest.raises(TablesSnapshotError) as rows_error:
        use_case.add_row(view.snapshot)
    with pytest.raises(TablesSnapshotError):
        use_case.submit(GridSnapshot.empty(GridDimensions(tables=3, rows=1)))

    assert tables_error.value.errors[0]["path"] == "dimensions.tables"
    assert rows_error.value.errors[0]["path"] == "dimensions.rows"


def test_submit_result_enforces_consistency() -> None:
    view = _use_case().start()

    with pytest.raises(ValueError, match="at least one issue"):
        SubmitTablesResult(accepted=False, issues=(), view=view)
