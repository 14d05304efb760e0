from __future__ import annotations

import pytest

from reinfate.contexts.tables.domain.entities import GridDimensions, GridSnapshot, is_empty_value
from reinfate.contexts.tables.domain.errors import TablesSnapshotError
from reinfate.contexts.tables.domain.value_objects import CellAddress, ColumnId


def test_grid_dimensions_growth_returns_new_shape() -> None:
    dimensions = GridDimensions()

    grown = dimensions.add_table().add_row().add_row()

    assert dimensions == GridDimensions(tables=1, rows=1)
    assert grown == GridDimensions(tables=2, rows=3)
    assert list(grown.table_indices()) == [1, 2]
    assert list(grown.row_indices()) == [3, 2, 1]


@pytest.mark.parametrize(
    ("tables", "rows"),
    [(0, 1), (1, 0), (True, 1), ("2", 1)],
)
def test_grid_dimensions_rejects_invalid_values(tables: object, rows: object) -> None:
    with pytest.raises(ValueError):
        GridDimensions(tables=tables, rows=rows)  # type: ignore[arg-type]


def test_grid_dimensions_contains_checks_both_axes() -> None:
    dimensions = GridDimensions(tables=2, rows=2)

    assert dimensions.contains(CellAddress(table=2, row=2, column=ColumnId.DEC))
    assert not dimensions.contains(CellAddress(table=3, row=1, column=ColumnId.DEC))
    assert not dimensions.contains(CellAddress(table=1, row=3, column=ColumnId.DEC))


def test_is_empty_value_treats_zero_as_empty() -> None:
    assert is_empty_value(None)
    assert is_empty_value(0)
    assert is_empty_value(0.0)
    assert not is_empty_value(-1.5)
    assert not is_empty_value(0.01)


def test_snapshot_from_items_normalizes_values() -> None:
    """
    Verify numeric strings are parsed, blanks become empty and ints become floats.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Later duplicate items overwrite earlier ones.
    Raises:
        AssertionError: If normalization differs.
    Side Effects:
        None.
    """
    snapshot = GridSnapshot.from_items(
        dimensions=GridDimensions(tables=1, rows=1),
        items=[
            {"table": 1, "row": 1, "column": "jan", "value": 5},
            {"table": 1, "row": 1, "column": "feb", "value": " 2.5 "},
            {"table": 1, "row": 1, "column": "mar", "value": ""},
            {"table": 1, "row": 1, "column": "jan", "value": 7},
        ],
    )

    assert snapshot.value(table=1, row=1, column=ColumnId.JAN) == 7.0
    assert isinstance(snapshot.value(table=1, row=1, column=ColumnId.JAN), float)
    assert snapshot.value(table=1, row=1, column=ColumnId.FEB) == 2.5
    assert snapshot.value(table=1, row=1, column=ColumnId.MAR) is None
    assert snapshot.value(table=1, row=1, column=ColumnId.APR) is None


def test_snapshot_rejects_out_of_range_and_non_numeric_cells() -> None:
    with pytest.raises(TablesSnapshotError) as error_info:
        GridSnapshot.from_items(
            dimensions=GridDimensions(tables=1, rows=1),
            items=[
                {"table": 2, "row": 1, "column": "jan", "value": 1},
                {"table": 1, "row": 1, "column": "feb", "value": "abc"},
                {"table": 1, "row": 1, "column": "mar", "value": True},
                {"table": 1, "row": 1, "column": "apr", "value": float("inf")},
            ],
        )

    errors = error_info.value.errors
    assert [(item["path"], item["code"]) for item in errors] == [
        ("table-2.1.jan", "out_of_range"),
        ("table-1.1.feb", "invalid_value"),
        ("table-1.1.mar", "invalid_value"),
        ("table-1.1.apr", "invalid_value"),
    ]


def test_snapshot_from_items_reports_bad_addresses_by_position() -> None:
    with pytest.raises(TablesSnapshotError) as error_info:
        GridSnapshot.from_items(
            dimensions=GridDimensions(),
            items=[
                {"table": 1, "row": 1, "column": "jan", "value": 1},
                {"table": 1, "row": 1, "column": "q5", "value": 1},
            ],
        )

    assert error_info.value.errors[0]["path"] == "cells[1]"
    assert error_info.value.errors[0]["code"] == "invalid_address"


def test_snapshot_from_nested_accepts_table_labels() -> None:
    snapshot = GridSnapshot.from_nested(
        dimensions=GridDimensions(tables=2, rows=2),
        tables={
            "table-1": {1: {"jan": 1.0}, "2": {"dec": 4.0}},
            2: {1: {"jan": 3.0}},
        },
    )

    assert snapshot.value(table=1, row=2, column=ColumnId.DEC) == 4.0
    assert snapshot.value(table=2, row=1, column=ColumnId.JAN) == 3.0


def test_snapshot_from_nested_rejects_non_mapping_rows() -> None:
    with pytest.raises(TablesSnapshotError) as error_info:
        GridSnapshot.from_nested(
            dimensions=GridDimensions(),
            tables={1: {1: [1, 2, 3]}},  # type: ignore[dict-item]
        )

    assert error_info.value.errors[0]["code"] == "invalid_shape"


def test_snapshot_without_computed_and_ordered_items() -> None:
    snapshot = GridSnapshot.from_items(
        dimensions=GridDimensions(tables=2, rows=1),
        items=[
            {"table": 2, "row": 1, "column": "jan", "value": 1},
            {"table": 1, "row": 1, "column": "q1", "value": 99},
            {"table": 1, "row": 1, "column": "feb", "value": 2},
            {"table": 1, "row": 1, "column": "year", "value": 2020},
        ],
    )

    stripped = snapshot.without_computed()

    assert stripped.value(table=1, row=1, column=ColumnId.Q1) is None
    assert [(item["table"], item["column"]) for item in stripped.to_items()] == [
        (1, "year"),
        (1, "feb"),
        (2, "jan"),
    ]


def test_snapshot_with_dimensions_keeps_values() -> None:
    snapshot = GridSnapshot.from_items(
        dimensions=GridDimensions(),
        items=[{"table": 1, "row": 1, "column": "jan", "value": 1}],
    )

    grown = snapshot.with_dimensions(snapshot.dimensions.add_table())

    assert grown.dimensions.tables == 2
    assert grown.value(table=1, row=1, column=ColumnId.JAN) == 1.0
