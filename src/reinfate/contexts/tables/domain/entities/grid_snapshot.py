from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from reinfate.contexts.tables.domain.errors import TablesSnapshotError
from reinfate.contexts.tables.domain.value_objects import (
    COMPUTED_COLUMNS,
    CellAddress,
    ColumnId,
    parse_index,
)

from .grid_dimensions import GridDimensions

CellValue = float | None


def is_empty_value(value: CellValue) -> bool:
    """
    Emptiness rule shared by presence, contiguity and similarity checks.

    Args:
        value: Cell value or `None` when the cell is unset.
    Returns:
        bool: True for unset cells and numeric zero.
    Assumptions:
        Zero is indistinguishable from "not entered" for validation purposes.
    Raises:
        None.
    Side Effects:
        None.
    """
    return value is None or value == 0


@dataclass(frozen=True, slots=True)
class GridSnapshot:
    """
    GridSnapshot — raw cell values of all tables keyed by stable cell address.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - src/reinfate/contexts/tables/application/services/snapshot_validator_v1.py
      - src/reinfate/contexts/tables/application/services/grid_builder.py
      - apps/api/dto/tables.py

    Cells missing from `cells` are empty. Computed columns may be present in input
    (echoed back by clients) and are ignored by validation and aggregation.
    """

    dimensions: GridDimensions = field(default_factory=GridDimensions)
    cells: Mapping[CellAddress, CellValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """
        Validate addresses against dimensions and freeze normalized cell values.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Values are int/float or None; ints are converted to float.
        Raises:
            TablesSnapshotError: If one address is outside dimensions or one value is
                not numeric.
        Side Effects:
            Replaces `cells` with an immutable mapping proxy.
        """
        normalized: dict[CellAddress, CellValue] = {}
        problems: list[dict[str, str]] = []
        for address, raw_value in self.cells.items():
            if not self.dimensions.contains(address):
                problems.append(
                    {
                        "path": address.path,
                        "code": "out_of_range",
                        "message": (
                            f"Cell is outside grid {self.dimensions.tables}x"
                            f"{self.dimensions.rows}"
                        ),
                    }
                )
                continue
            try:
                normalized[address] = _normalize_value(raw_value)
            except ValueError as error:
                problems.append(
                    {"path": address.path, "code": "invalid_value", "message": str(error)}
                )

        if problems:
            raise TablesSnapshotError("Snapshot does not match grid", errors=problems)
        object.__setattr__(self, "cells", MappingProxyType(normalized))

    @classmethod
    def empty(cls, dimensions: GridDimensions | None = None) -> GridSnapshot:
        return cls(dimensions=dimensions or GridDimensions(), cells={})

    @classmethod
    def from_items(
        cls,
        *,
        dimensions: GridDimensions,
        items: Iterable[Mapping[str, Any]],
    ) -> GridSnapshot:
        """
        Build snapshot from flat `{"table", "row", "column", "value"}` items.

        Args:
            dimensions: Current grid dimensions.
            items: Flat cell items; later duplicates overwrite earlier ones.
        Returns:
            GridSnapshot: Validated snapshot.
        Assumptions:
            Item keys follow API cell payload contract.
        Raises:
            TablesSnapshotError: If one item cannot be parsed or addressed.
        Side Effects:
            None.
        """
        cells: dict[CellAddress, Any] = {}
        problems: list[dict[str, str]] = []
        for position, item in enumerate(items):
            try:
                address = CellAddress(
                    table=parse_index(item.get("table"), field_name="table"),
                    row=parse_index(item.get("row"), field_name="row"),
                    column=ColumnId.parse(str(item.get("column", ""))),
                )
            except ValueError as error:
                problems.append(
                    {"path": f"cells[{position}]", "code": "invalid_address", "message": str(error)}
                )
                continue
            cells[address] = item.get("value")

        if problems:
            raise TablesSnapshotError("Snapshot does not match grid", errors=problems)
        return cls(dimensions=dimensions, cells=cells)

    @classmethod
    def from_nested(
        cls,
        *,
        dimensions: GridDimensions,
        tables: Mapping[Any, Mapping[Any, Mapping[str, Any]]],
    ) -> GridSnapshot:
        """
        Build snapshot from nested `{table: {row: {column: value}}}` payload.

        Args:
            dimensions: Current grid dimensions.
            tables: Nested payload; table keys may be ints, digits or `table-N` labels.
        Returns:
            GridSnapshot: Validated snapshot.
        Assumptions:
            Nested layout mirrors form-style value trees.
        Raises:
            TablesSnapshotError: If nesting is malformed or one key cannot be parsed.
        Side Effects:
            None.
        """
        items: list[dict[str, Any]] = []
        problems: list[dict[str, str]] = []
        for table_key, rows in tables.items():
            if not isinstance(rows, Mapping):
                problems.append(
                    {
                        "path": str(table_key),
                        "code": "invalid_shape",
                        "message": "Table payload must be a mapping of rows",
                    }
                )
                continue
            for row_key, row in rows.items():
                if not isinstance(row, Mapping):
                    problems.append(
                        {
                            "path": f"{table_key}.{row_key}",
                            "code": "invalid_shape",
                            "message": "Row payload must be a mapping of columns",
                        }
                    )
                    continue
                for column_key, value in row.items():
                    items.append(
                        {"table": table_key, "row": row_key, "column": column_key, "value": value}
                    )

        if problems:
            raise TablesSnapshotError("Snapshot does not match grid", errors=problems)
        return cls.from_items(dimensions=dimensions, items=items)

    def value(self, *, table: int, row: int, column: ColumnId) -> CellValue:
        return self.cells.get(CellAddress(table=table, row=row, column=column))

    def with_dimensions(self, dimensions: GridDimensions) -> GridSnapshot:
        return GridSnapshot(dimensions=dimensions, cells=dict(self.cells))

    def without_computed(self) -> GridSnapshot:
        """Drop computed columns so only user-entered values remain."""
        return GridSnapshot(
            dimensions=self.dimensions,
            cells={
                address: value
                for address, value in self.cells.items()
                if address.column not in COMPUTED_COLUMNS
            },
        )

    def to_items(self) -> list[dict[str, Any]]:
        """Flat cell items ordered by table, row and column display position."""
        ordered = sorted(
            self.cells.items(),
            key=lambda item: (item[0].table, item[0].row, _COLUMN_POSITION[item[0].column]),
        )
        return [
            {
                "table": address.table,
                "row": address.row,
                "column": address.column.value,
                "value": value,
            }
            for address, value in ordered
        ]


_COLUMN_POSITION = {column: position for position, column in enumerate(ColumnId)}


def _normalize_value(raw: Any) -> CellValue:
    if raw is None:
        return None
    if isinstance(raw, str):
        literal = raw.strip()
        if not literal:
            return None
        try:
            raw = float(literal)
        except ValueError:
            raise ValueError(f"Cell value must be numeric, got {literal!r}") from None
    if isinstance(raw, bool) or not isinstance(raw, int | float):
        raise ValueError(f"Cell value must be numeric, got {type(raw).__name__}")
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError("Cell value must be finite")
    return value
