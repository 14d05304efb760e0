from .ports import TablesClock
from .services import GridBuilder, RowAggregates, compute_row, validate_snapshot
from .use_cases import (
    EditTablesUseCase,
    SubmitTablesResult,
    TablesView,
    issues_payload,
    map_tables_exception,
    tables_submit_rejected,
    validation_error,
)

__all__ = [
    "EditTablesUseCase",
    "GridBuilder",
    "RowAggregates",
    "SubmitTablesResult",
    "TablesClock",
    "TablesView",
    "compute_row",
    "issues_payload",
    "map_tables_exception",
    "tables_submit_rejected",
    "validate_snapshot",
    "validation_error",
]
