from __future__ import annotations

import pytest

from reinfate.contexts.tables.application.services import RowAggregates, compute_row
from reinfate.contexts.tables.domain.value_objects import ColumnId


def test_compute_row_applies_plus_one_offsets_exactly() -> None:
    """
    Verify quarter and ytd formulas including the +1 offsets.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Quarter totals 2, 5, 8, 11 produce exact binary results.
    Raises:
        AssertionError: If any derived value differs bit-for-bit.
    Side Effects:
        None.
    """
    months = [2.0, None, None, 5.0, None, None, 8.0, None, None, 11.0, None, None]

    aggregates = compute_row(months)

    assert aggregates == RowAggregates(q1=1.0, q2=2.0, q3=3.0, q4=4.0, ytd=2.75)


def test_compute_row_all_empty_months_is_not_zero() -> None:
    aggregates = compute_row([None] * 12)

    quarter = (0.0 + 0.0 + 0.0 + 1.0) / 3
    assert aggregates.q1 == quarter
    assert aggregates.q4 == quarter
    assert aggregates.ytd == (quarter + quarter + quarter + quarter + 1.0) / 4


def test_compute_row_calendar_sequence_bit_for_bit() -> None:
    aggregates = compute_row([1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 10.0, 11.0, 12.0])

    q1 = (1.0 + 2.0 + 3.0 + 1.0) / 3
    q2 = (4.0 + 5.0 + 6.0 + 1.0) / 3
    q3 = (7.0 + 8.0 + 9.0 + 1.0) / 3
    q4 = (10.0 + 11.0 + 12.0 + 1.0) / 3
    ytd = (q1 + q2 + q3 + q4 + 1.0) / 4
    assert aggregates == RowAggregates(q1=q1, q2=q2, q3=q3, q4=q4, ytd=ytd)


def test_compute_row_sequential_months() -> None:
    aggregates = compute_row([float(month) for month in range(1, 13)])

    assert aggregates.q1 == pytest.approx(7 / 3)
    assert aggregates.q2 == pytest.approx(16 / 3)
    assert aggregates.q3 == pytest.approx(25 / 3)
    assert aggregates.q4 == pytest.approx(34 / 3)
    assert aggregates.ytd == pytest.approx(85 / 12)
    assert aggregates.rounded(2) == RowAggregates(q1=2.33, q2=5.33, q3=8.33, q4=11.33, ytd=7.08)


def test_compute_row_mapping_ignores_year_and_computed_keys() -> None:
    from_mapping = compute_row(
        {"year": 2024.0, "jan": 2.0, ColumnId.APR: 5.0, "q1": 100.0, "ytd": -3.0}
    )
    from_sequence = compute_row([2.0, None, None, 5.0] + [None] * 8)

    assert from_mapping == from_sequence


def test_compute_row_rejects_wrong_sequence_length() -> None:
    with pytest.raises(ValueError, match="12 monthly values"):
        compute_row([1.0] * 11)


def test_compute_row_rejects_unknown_mapping_key() -> None:
    with pytest.raises(ValueError, match="Unknown column"):
        compute_row({"janvier": 1.0})


def test_as_mapping_is_keyed_by_computed_columns() -> None:
    mapping = RowAggregates(q1=1.0, q2=2.0, q3=3.0, q4=4.0, ytd=5.0).as_mapping()

    assert list(mapping) == [ColumnId.Q1, ColumnId.Q2, ColumnId.Q3, ColumnId.Q4, ColumnId.YTD]
