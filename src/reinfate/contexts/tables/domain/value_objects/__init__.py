from .cell_address import CellAddress, parse_index, table_label
from .column_id import (
    COLUMN_ORDER,
    COMPUTED_COLUMNS,
    EDITABLE_COLUMNS,
    MONTH_COLUMNS,
    QUARTER_MONTHS,
    SERVER_SEEDED_COLUMNS,
    VALIDATED_COLUMNS,
    ColumnId,
    ColumnSpec,
    column_specs,
)
from .validation_issue import TableIssueKind, TableValidationIssue

__all__ = [
    "COLUMN_ORDER",
    "COMPUTED_COLUMNS",
    "CellAddress",
    "ColumnId",
    "ColumnSpec",
    "EDITABLE_COLUMNS",
    "MONTH_COLUMNS",
    "QUARTER_MONTHS",
    "SERVER_SEEDED_COLUMNS",
    "TableIssueKind",
    "TableValidationIssue",
    "VALIDATED_COLUMNS",
    "column_specs",
    "parse_index",
    "table_label",
]
