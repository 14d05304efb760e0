from .edit_tables import (
    DISPLAY_DECIMALS_DEFAULT,
    MAX_ROWS_DEFAULT,
    MAX_TABLES_DEFAULT,
    ROWS_CEILING,
    SUBMIT_ACCEPTED_STATUS,
    TABLES_CEILING,
    EditTablesUseCase,
    SubmitTablesResult,
    TablesView,
)
from .errors import (
    issues_payload,
    map_tables_exception,
    tables_submit_rejected,
    validation_error,
)

__all__ = [
    "DISPLAY_DECIMALS_DEFAULT",
    "EditTablesUseCase",
    "MAX_ROWS_DEFAULT",
    "MAX_TABLES_DEFAULT",
    "ROWS_CEILING",
    "SUBMIT_ACCEPTED_STATUS",
    "TABLES_CEILING",
    "SubmitTablesResult",
    "TablesView",
    "issues_payload",
    "map_tables_exception",
    "tables_submit_rejected",
    "validation_error",
]
