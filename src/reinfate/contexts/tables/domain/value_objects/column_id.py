from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ColumnId(str, Enum):
    """
    ColumnId — one of the fixed year/month/quarter/YTD column identifiers.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - src/reinfate/contexts/tables/domain/value_objects/cell_address.py
      - src/reinfate/contexts/tables/application/services/aggregator_v1.py
    """

    YEAR = "year"
    JAN = "jan"
    FEB = "feb"
    MAR = "mar"
    Q1 = "q1"
    APR = "apr"
    MAY = "may"
    JUN = "jun"
    Q2 = "q2"
    JUL = "jul"
    AUG = "aug"
    SEP = "sep"
    Q3 = "q3"
    OCT = "oct"
    NOV = "nov"
    DEC = "dec"
    Q4 = "q4"
    YTD = "ytd"

    @classmethod
    def parse(cls, raw: str | ColumnId) -> ColumnId:
        """
        Resolve column id from literal with whitespace/case normalization.

        Args:
            raw: Column literal (`"Jan"`, `" q1 "`) or existing enum member.
        Returns:
            ColumnId: Matching column identifier.
        Assumptions:
            Column literals are ASCII lowercase identifiers.
        Raises:
            ValueError: If literal does not name a known column.
        Side Effects:
            None.
        """
        if isinstance(raw, ColumnId):
            return raw
        normalized = str(raw).strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(
                f"Unknown column={normalized!r}. Supported: {[c.value for c in COLUMN_ORDER]}"
            ) from None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ColumnSpec:
    """
    Display schema entry for one column.

    `server_seeded` marks columns whose default value is filled by the server
    (`year` and the computed columns); only computed columns are read-only.
    """

    column_id: ColumnId
    label: str
    editable: bool
    server_seeded: bool

    @property
    def computed(self) -> bool:
        return not self.editable


# Порядок отображения колонок фиксирован.
COLUMN_ORDER: tuple[ColumnId, ...] = tuple(ColumnId)

MONTH_COLUMNS: tuple[ColumnId, ...] = (
    ColumnId.JAN,
    ColumnId.FEB,
    ColumnId.MAR,
    ColumnId.APR,
    ColumnId.MAY,
    ColumnId.JUN,
    ColumnId.JUL,
    ColumnId.AUG,
    ColumnId.SEP,
    ColumnId.OCT,
    ColumnId.NOV,
    ColumnId.DEC,
)

COMPUTED_COLUMNS: tuple[ColumnId, ...] = (
    ColumnId.Q1,
    ColumnId.Q2,
    ColumnId.Q3,
    ColumnId.Q4,
    ColumnId.YTD,
)

EDITABLE_COLUMNS: tuple[ColumnId, ...] = tuple(
    column for column in COLUMN_ORDER if column not in COMPUTED_COLUMNS
)

SERVER_SEEDED_COLUMNS: tuple[ColumnId, ...] = (ColumnId.YEAR, *COMPUTED_COLUMNS)

# Колонки, участвующие в проверках пустоты/непрерывности/схожести (без year).
VALIDATED_COLUMNS: tuple[ColumnId, ...] = tuple(
    column for column in EDITABLE_COLUMNS if column is not ColumnId.YEAR
)

QUARTER_MONTHS: Mapping[ColumnId, tuple[ColumnId, ColumnId, ColumnId]] = MappingProxyType(
    {
        ColumnId.Q1: (ColumnId.JAN, ColumnId.FEB, ColumnId.MAR),
        ColumnId.Q2: (ColumnId.APR, ColumnId.MAY, ColumnId.JUN),
        ColumnId.Q3: (ColumnId.JUL, ColumnId.AUG, ColumnId.SEP),
        ColumnId.Q4: (ColumnId.OCT, ColumnId.NOV, ColumnId.DEC),
    }
)

_LABELS: Mapping[ColumnId, str] = MappingProxyType(
    {
        ColumnId.YEAR: "Year",
        ColumnId.YTD: "YTD",
        **{column: column.value.capitalize() for column in MONTH_COLUMNS},
        **{column: column.value.upper() for column in QUARTER_MONTHS},
    }
)


def column_specs() -> tuple[ColumnSpec, ...]:
    """
    Return the fixed display schema in column display order.

    Args:
        None.
    Returns:
        tuple[ColumnSpec, ...]: One spec per column, `year` first and `ytd` last.
    Assumptions:
        Column set is fixed and never extended at runtime.
    Raises:
        None.
    Side Effects:
        None.
    """
    return tuple(
        ColumnSpec(
            column_id=column,
            label=_LABELS[column],
            editable=column not in COMPUTED_COLUMNS,
            server_seeded=column in SERVER_SEEDED_COLUMNS,
        )
        for column in COLUMN_ORDER
    )
