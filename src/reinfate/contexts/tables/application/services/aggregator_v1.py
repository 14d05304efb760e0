"""
Quarter/YTD aggregation for one row of monthly values.

Docs: docs/architecture/tables/tables-grid-validation-v1.md
Related: reinfate.contexts.tables.application.services.grid_builder,
  reinfate.contexts.tables.application.use_cases.edit_tables
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from reinfate.contexts.tables.domain.value_objects import MONTH_COLUMNS, QUARTER_MONTHS, ColumnId

# Смещение +1 перед делением входит в формулу расчёта.
_QUARTER_OFFSET = 1.0
_YTD_OFFSET = 1.0


@dataclass(frozen=True, slots=True)
class RowAggregates:
    """
    Derived quarter and year-to-date values of one row.
    """

    q1: float
    q2: float
    q3: float
    q4: float
    ytd: float

    def as_mapping(self) -> dict[ColumnId, float]:
        return {
            ColumnId.Q1: self.q1,
            ColumnId.Q2: self.q2,
            ColumnId.Q3: self.q3,
            ColumnId.Q4: self.q4,
            ColumnId.YTD: self.ytd,
        }

    def rounded(self, decimals: int) -> RowAggregates:
        """Presentation copy rounded to `decimals` places."""
        return RowAggregates(
            q1=round(self.q1, decimals),
            q2=round(self.q2, decimals),
            q3=round(self.q3, decimals),
            q4=round(self.q4, decimals),
            ytd=round(self.ytd, decimals),
        )


def compute_row(
    monthly: Sequence[float | None] | Mapping[ColumnId | str, float | None],
) -> RowAggregates:
    """
    Compute q1..q4 and ytd from the twelve monthly values of one row.

    Args:
        monthly: Twelve values in calendar order, or a mapping keyed by month column.
            Missing/`None` months count as zero.
    Returns:
        RowAggregates: Unrounded derived values.
    Assumptions:
        `qN = (m1 + m2 + m3 + 1) / 3` and `ytd = (q1 + q2 + q3 + q4 + 1) / 4`.
        Non-month keys in mapping input (`year`, computed columns) are ignored.
    Raises:
        ValueError: If a sequence input does not have exactly twelve items.
    Side Effects:
        None.
    """
    months = _month_values(monthly=monthly)
    quarters: dict[ColumnId, float] = {}
    for quarter, quarter_months in QUARTER_MONTHS.items():
        total = months[quarter_months[0]] + months[quarter_months[1]] + months[quarter_months[2]]
        quarters[quarter] = (total + _QUARTER_OFFSET) / 3

    q1 = quarters[ColumnId.Q1]
    q2 = quarters[ColumnId.Q2]
    q3 = quarters[ColumnId.Q3]
    q4 = quarters[ColumnId.Q4]
    ytd = (q1 + q2 + q3 + q4 + _YTD_OFFSET) / 4
    return RowAggregates(q1=q1, q2=q2, q3=q3, q4=q4, ytd=ytd)


def _month_values(
    *,
    monthly: Sequence[float | None] | Mapping[ColumnId | str, float | None],
) -> dict[ColumnId, float]:
    if isinstance(monthly, Mapping):
        by_column: dict[ColumnId, float | None] = {}
        for raw_key, raw_value in monthly.items():
            column = ColumnId.parse(raw_key)
            if column in MONTH_COLUMNS:
                by_column[column] = raw_value
        return {column: _as_number(by_column.get(column)) for column in MONTH_COLUMNS}

    values = list(monthly)
    if len(values) != len(MONTH_COLUMNS):
        raise ValueError(
            f"compute_row expects {len(MONTH_COLUMNS)} monthly values, got {len(values)}"
        )
    return {column: _as_number(value) for column, value in zip(MONTH_COLUMNS, values)}


def _as_number(value: float | None) -> float:
    if value is None:
        return 0.0
    return float(value)
