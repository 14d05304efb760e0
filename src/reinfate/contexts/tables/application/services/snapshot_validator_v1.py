"""
Contiguity and cross-table similarity validation of raw table snapshots.

Docs: docs/architecture/tables/tables-grid-validation-v1.md
Related: reinfate.contexts.tables.domain.value_objects.validation_issue,
  reinfate.contexts.tables.application.use_cases.edit_tables,
  reinfate.contexts.tables.application.use_cases.errors
"""

from __future__ import annotations

from dataclasses import dataclass

from reinfate.contexts.tables.domain.entities import CellValue, GridSnapshot, is_empty_value
from reinfate.contexts.tables.domain.value_objects import (
    VALIDATED_COLUMNS,
    CellAddress,
    TableIssueKind,
    TableValidationIssue,
)

REFERENCE_TABLE = 1


@dataclass(frozen=True, slots=True)
class _SequenceCell:
    address: CellAddress
    value: CellValue

    @property
    def empty(self) -> bool:
        return is_empty_value(self.value)


class _IssueCollector:
    """
    Ordered issue list with at most one issue per error target.

    The first issue recorded for a target wins; later ones are dropped.
    """

    def __init__(self) -> None:
        self._issues: list[TableValidationIssue] = []
        self._targets: set[str] = set()

    def add(self, issue: TableValidationIssue) -> None:
        if issue.path in self._targets:
            return
        self._targets.add(issue.path)
        self._issues.append(issue)

    def result(self) -> tuple[TableValidationIssue, ...]:
        return tuple(self._issues)


def validate_snapshot(snapshot: GridSnapshot) -> tuple[TableValidationIssue, ...]:
    """
    Validate raw snapshot of all tables and return every issue found.

    Args:
        snapshot: Raw values of all tables; computed columns are stripped here.
    Returns:
        tuple[TableValidationIssue, ...]: Issues in deterministic order; empty means valid.
    Assumptions:
        Table 1 is the reference shape. Per table, similarity issues are recorded before
        presence/contiguity issues, and the first issue at an address wins.
        `year` never participates in any check.
    Raises:
        None.
    Side Effects:
        None.
    """
    raw = snapshot.without_computed()
    dimensions = raw.dimensions
    sequences = {
        table: _flatten_table(snapshot=raw, table=table) for table in dimensions.table_indices()
    }

    collector = _IssueCollector()
    for table, sequence in sequences.items():
        if table != REFERENCE_TABLE:
            _check_similarity(
                sequence=sequence,
                reference=sequences[REFERENCE_TABLE],
                tables=dimensions.tables,
                collector=collector,
            )

        if any(not cell.empty for cell in sequence):
            _check_contiguity(sequence=sequence, collector=collector)
        else:
            collector.add(
                TableValidationIssue.for_table(table=table, kind=TableIssueKind.EMPTY_TABLE)
            )

    return collector.result()


def _flatten_table(*, snapshot: GridSnapshot, table: int) -> tuple[_SequenceCell, ...]:
    """
    Flatten one table into a single row-major sequence of validated cells.

    Args:
        snapshot: Raw snapshot without computed columns.
        table: 1-based table index.
    Returns:
        tuple[_SequenceCell, ...]: Cells ordered by display row order, then column order.
    Assumptions:
        Display row order (oldest row first) is chronological month order.
    Raises:
        None.
    Side Effects:
        None.
    """
    cells: list[_SequenceCell] = []
    for row in snapshot.dimensions.row_indices():
        for column in VALIDATED_COLUMNS:
            address = CellAddress(table=table, row=row, column=column)
            cells.append(_SequenceCell(address=address, value=snapshot.cells.get(address)))
    return tuple(cells)


def _check_similarity(
    *,
    sequence: tuple[_SequenceCell, ...],
    reference: tuple[_SequenceCell, ...],
    tables: int,
    collector: _IssueCollector,
) -> None:
    for cell, reference_cell in zip(sequence, reference):
        if cell.empty == reference_cell.empty:
            continue
        # Расхождение помечается в той же позиции во всех таблицах.
        for table in range(1, tables + 1):
            address = CellAddress(table=table, row=cell.address.row, column=cell.address.column)
            collector.add(
                TableValidationIssue.for_cell(address=address, kind=TableIssueKind.SHAPE_MISMATCH)
            )


def _check_contiguity(*, sequence: tuple[_SequenceCell, ...], collector: _IssueCollector) -> None:
    filled_positions = [position for position, cell in enumerate(sequence) if not cell.empty]
    first, last = filled_positions[0], filled_positions[-1]
    for cell in sequence[first : last + 1]:
        if cell.empty:
            collector.add(
                TableValidationIssue.for_cell(
                    address=cell.address,
                    kind=TableIssueKind.BROKEN_SEQUENCE,
                )
            )
