from .tables_errors import TablesDomainError, TablesSnapshotError

__all__ = [
    "TablesDomainError",
    "TablesSnapshotError",
]
