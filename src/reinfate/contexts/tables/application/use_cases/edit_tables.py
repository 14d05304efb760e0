from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Sequence

from reinfate.contexts.tables.application.ports import TablesClock
from reinfate.contexts.tables.application.services import (
    GridBuilder,
    RowAggregates,
    compute_row,
    validate_snapshot,
)
from reinfate.contexts.tables.domain.entities import Grid, GridDimensions, GridSnapshot
from reinfate.contexts.tables.domain.errors import TablesSnapshotError
from reinfate.contexts.tables.domain.value_objects import ColumnId, TableValidationIssue

log = logging.getLogger(__name__)

SUBMIT_ACCEPTED_STATUS = "Valid"
DISPLAY_DECIMALS_DEFAULT = 2
MAX_TABLES_DEFAULT = 50
MAX_ROWS_DEFAULT = 200
TABLES_CEILING = 1000
ROWS_CEILING = 1000


@dataclass(frozen=True, slots=True)
class TablesView:
    """
    Current editable state (snapshot) plus its display projection (grid).
    """

    snapshot: GridSnapshot
    grid: Grid


@dataclass(frozen=True, slots=True)
class SubmitTablesResult:
    """
    Outcome of one submit attempt.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - src/reinfate/contexts/tables/application/use_cases/edit_tables.py
      - apps/api/routes/tables.py
      - apps/cli/commands/tables.py

    Accepted results carry the grid with unrounded computed values and a status
    message; rejected results carry issues and the unchanged pre-submit grid.
    """

    accepted: bool
    issues: tuple[TableValidationIssue, ...]
    view: TablesView
    status_message: str | None = None

    def __post_init__(self) -> None:
        if self.accepted and self.issues:
            raise ValueError("accepted submit result must not carry issues")
        if not self.accepted and not self.issues:
            raise ValueError("rejected submit result must carry at least one issue")


class EditTablesUseCase:
    """
    EditTablesUseCase — grow, recompute, validate and submit multi-table monthly grids.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - src/reinfate/contexts/tables/application/services/grid_builder.py
      - src/reinfate/contexts/tables/application/services/snapshot_validator_v1.py
      - apps/api/routes/tables.py
    """

    def __init__(
        self,
        *,
        clock: TablesClock,
        display_decimals: int = DISPLAY_DECIMALS_DEFAULT,
        max_tables: int = MAX_TABLES_DEFAULT,
        max_rows: int = MAX_ROWS_DEFAULT,
        grid_builder: GridBuilder | None = None,
    ) -> None:
        """
        Initialize use-case dependencies.

        Args:
            clock: Clock port used to seed `year` cells.
            display_decimals: Rounding precision of computed cells in displayed grids.
            max_tables: Largest table count accepted or produced by any operation.
            max_rows: Largest row count accepted or produced by any operation.
            grid_builder: Optional builder override.
        Returns:
            None.
        Assumptions:
            Every operation is a pure transformation of the snapshot passed in.
        Raises:
            ValueError: If clock is missing, `display_decimals` is negative or a limit
                is outside `[1, ceiling]`.
        Side Effects:
            None.
        """
        if clock is None:  # type: ignore[truthy-bool]
            raise ValueError("EditTablesUseCase requires clock")
        if display_decimals < 0:
            raise ValueError(f"display_decimals must be >= 0, got {display_decimals}")
        if not 1 <= max_tables <= TABLES_CEILING:
            raise ValueError(f"max_tables must be in [1, {TABLES_CEILING}], got {max_tables}")
        if not 1 <= max_rows <= ROWS_CEILING:
            raise ValueError(f"max_rows must be in [1, {ROWS_CEILING}], got {max_rows}")
        self._clock = clock
        self._display_decimals = display_decimals
        self._max_tables = max_tables
        self._max_rows = max_rows
        self._grid_builder = grid_builder or GridBuilder()

    def ensure_within_limits(self, dimensions: GridDimensions) -> None:
        """
        Reject dimensions above configured table/row limits.

        Args:
            dimensions: Dimensions of an incoming or grown snapshot.
        Returns:
            None.
        Assumptions:
            Both axes are checked; every exceeded axis yields one error item.
        Raises:
            TablesSnapshotError: If `tables > max_tables` or `rows > max_rows`.
        Side Effects:
            None.
        """
        errors: list[dict[str, str]] = []
        if dimensions.tables > self._max_tables:
            errors.append(
                {
                    "path": "dimensions.tables",
                    "code": "too_large",
                    "message": f"at most {self._max_tables} tables are allowed",
                }
            )
        if dimensions.rows > self._max_rows:
            errors.append(
                {
                    "path": "dimensions.rows",
                    "code": "too_large",
                    "message": f"at most {self._max_rows} rows are allowed",
                }
            )
        if errors:
            raise TablesSnapshotError("Grid exceeds size limits", errors=errors)

    def start(self) -> TablesView:
        """Return the initial 1x1 empty grid."""
        return self.refresh(GridSnapshot.empty())

    def add_table(self, snapshot: GridSnapshot) -> TablesView:
        """
        Append one empty table sharing the current row count.

        Args:
            snapshot: Latest raw snapshot.
        Returns:
            TablesView: Grown snapshot and its rebuilt grid.
        Assumptions:
            Existing cell values are carried over unchanged.
        Raises:
            TablesSnapshotError: If the grown grid exceeds `max_tables`.
        Side Effects:
            None.
        """
        grown = snapshot.with_dimensions(snapshot.dimensions.add_table())
        log.debug(
            "tables add_table tables=%s rows=%s",
            grown.dimensions.tables,
            grown.dimensions.rows,
        )
        return self.refresh(grown)

    def add_row(self, snapshot: GridSnapshot) -> TablesView:
        """
        Append one row to every table.

        Args:
            snapshot: Latest raw snapshot.
        Returns:
            TablesView: Grown snapshot and its rebuilt grid.
        Assumptions:
            New row's `year` is seeded as `current_year - row + 1`.
        Raises:
            TablesSnapshotError: If the grown grid exceeds `max_rows`.
        Side Effects:
            None.
        """
        grown = snapshot.with_dimensions(snapshot.dimensions.add_row())
        log.debug(
            "tables add_row tables=%s rows=%s",
            grown.dimensions.tables,
            grown.dimensions.rows,
        )
        return self.refresh(grown)

    def refresh(self, snapshot: GridSnapshot) -> TablesView:
        """Rebuild the display grid with rounded computed values."""
        self.ensure_within_limits(snapshot.dimensions)
        grid = self._grid_builder.build(
            snapshot=snapshot,
            current_year=self._current_year(),
            display_decimals=self._display_decimals,
        )
        return TablesView(snapshot=snapshot, grid=grid)

    def compute_row(
        self,
        monthly: Sequence[float | None] | Mapping[ColumnId | str, float | None],
    ) -> RowAggregates:
        return compute_row(monthly)

    def validate(self, snapshot: GridSnapshot) -> tuple[TableValidationIssue, ...]:
        self.ensure_within_limits(snapshot.dimensions)
        return validate_snapshot(snapshot)

    def submit(self, snapshot: GridSnapshot) -> SubmitTablesResult:
        """
        Validate snapshot and compute final values when it is valid.

        Args:
            snapshot: Raw snapshot at submit time.
        Returns:
            SubmitTablesResult: Accepted result with unrounded computed grid, or rejected
                result with issues and the pre-submit display grid.
        Assumptions:
            Validation never raises; an empty issue list is the only success signal.
        Raises:
            TablesSnapshotError: If snapshot dimensions exceed configured limits.
        Side Effects:
            Writes one log record with the outcome.
        """
        self.ensure_within_limits(snapshot.dimensions)
        issues = validate_snapshot(snapshot)
        if issues:
            log.info(
                "tables submit rejected tables=%s rows=%s issues=%s",
                snapshot.dimensions.tables,
                snapshot.dimensions.rows,
                len(issues),
            )
            return SubmitTablesResult(accepted=False, issues=issues, view=self.refresh(snapshot))

        grid = self._grid_builder.build(
            snapshot=snapshot,
            current_year=self._current_year(),
            display_decimals=None,
        )
        log.info(
            "tables submit accepted tables=%s rows=%s",
            snapshot.dimensions.tables,
            snapshot.dimensions.rows,
        )
        return SubmitTablesResult(
            accepted=True,
            issues=(),
            view=TablesView(snapshot=snapshot, grid=grid),
            status_message=SUBMIT_ACCEPTED_STATUS,
        )

    def _current_year(self) -> int:
        return self._clock.now().year
