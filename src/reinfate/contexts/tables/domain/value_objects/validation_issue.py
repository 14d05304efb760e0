from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .cell_address import CellAddress, table_label
from .column_id import ColumnId


class TableIssueKind(str, Enum):
    """
    Validation issue taxonomy for submitted table snapshots.

    Value is the stable machine code exposed in API/CLI payloads.
    """

    EMPTY_TABLE = "empty_table"
    BROKEN_SEQUENCE = "broken_sequence"
    SHAPE_MISMATCH = "shape_mismatch"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    TableIssueKind.EMPTY_TABLE: "Table should not be empty",
    TableIssueKind.BROKEN_SEQUENCE: "Table should not contain breaks",
    TableIssueKind.SHAPE_MISMATCH: "Tables should be similar",
}


@dataclass(frozen=True, slots=True)
class TableValidationIssue:
    """
    One user-correctable validation issue addressed to a cell or to a whole table.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - src/reinfate/contexts/tables/application/services/snapshot_validator_v1.py
      - src/reinfate/contexts/tables/application/use_cases/errors.py
      - apps/api/dto/tables.py

    Whole-table issues (`EMPTY_TABLE`) carry `row=None` and `column=None`.
    """

    table: int
    row: int | None
    column: ColumnId | None
    kind: TableIssueKind

    def __post_init__(self) -> None:
        """
        Validate addressing shape against issue kind.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Only `EMPTY_TABLE` targets the whole table.
        Raises:
            ValueError: If table index is invalid or addressing does not match kind.
        Side Effects:
            None.
        """
        if self.table < 1:
            raise ValueError(f"TableValidationIssue.table must be >= 1, got {self.table}")
        whole_table = self.row is None and self.column is None
        if self.kind is TableIssueKind.EMPTY_TABLE and not whole_table:
            raise ValueError("empty_table issue must target the whole table")
        if self.kind is not TableIssueKind.EMPTY_TABLE and whole_table:
            raise ValueError(f"{self.kind.value} issue must target one cell")

    @classmethod
    def for_table(cls, *, table: int, kind: TableIssueKind) -> TableValidationIssue:
        return cls(table=table, row=None, column=None, kind=kind)

    @classmethod
    def for_cell(cls, *, address: CellAddress, kind: TableIssueKind) -> TableValidationIssue:
        return cls(table=address.table, row=address.row, column=address.column, kind=kind)

    @property
    def message(self) -> str:
        return self.kind.message

    @property
    def path(self) -> str:
        """Error target: `table-N` for whole-table issues, else the cell path."""
        if self.row is None or self.column is None:
            return table_label(self.table)
        return CellAddress(table=self.table, row=self.row, column=self.column).path

    def to_payload(self) -> dict[str, str | int | None]:
        return {
            "path": self.path,
            "code": self.kind.value,
            "message": self.message,
            "table": self.table,
            "row": self.row,
            "column": self.column.value if self.column is not None else None,
        }
