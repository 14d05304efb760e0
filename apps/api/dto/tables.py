"""
Pydantic API models and converters for tables endpoints.

Docs: docs/architecture/tables/tables-grid-validation-v1.md
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from reinfate.contexts.tables.application import RowAggregates, SubmitTablesResult, TablesView
from reinfate.contexts.tables.application.use_cases import ROWS_CEILING, TABLES_CEILING
from reinfate.contexts.tables.domain.entities import Grid, GridDimensions, GridSnapshot
from reinfate.contexts.tables.domain.value_objects import (
    MONTH_COLUMNS,
    ColumnSpec,
    TableValidationIssue,
)


class TablesDimensionsPayload(BaseModel):
    """
    Grid dimensions (shared row count for all tables).

    Hard ceilings here; configured `tables.max_tables`/`tables.max_rows` are enforced by
    the use-case.
    """

    model_config = ConfigDict(extra="forbid")

    tables: int = Field(default=1, ge=1, le=TABLES_CEILING)
    rows: int = Field(default=1, ge=1, le=ROWS_CEILING)


class TablesCellPayload(BaseModel):
    """
    One raw cell value addressed by (table, row, column).
    """

    model_config = ConfigDict(extra="forbid")

    table: int = Field(ge=1, le=TABLES_CEILING)
    row: int = Field(ge=1, le=ROWS_CEILING)
    column: str
    value: float | None = None


class TablesSnapshotRequest(BaseModel):
    """
    Snapshot request DTO echoed by the client on every call.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - src/reinfate/contexts/tables/domain/entities/grid_snapshot.py
      - apps/api/routes/tables.py
    """

    model_config = ConfigDict(extra="forbid")

    dimensions: TablesDimensionsPayload = Field(default_factory=TablesDimensionsPayload)
    cells: list[TablesCellPayload] = Field(default_factory=list)


class TablesComputeRowRequest(BaseModel):
    """
    Twelve monthly values in calendar order; `null` counts as zero.
    """

    model_config = ConfigDict(extra="forbid")

    months: list[float | None] = Field(min_length=len(MONTH_COLUMNS), max_length=len(MONTH_COLUMNS))


class TablesColumnResponse(BaseModel):
    id: str
    label: str
    editable: bool
    server_seeded: bool


class TablesColumnsResponse(BaseModel):
    schema_version: int
    items: list[TablesColumnResponse]


class TablesRowResponse(BaseModel):
    row: int
    values: dict[str, float | None]


class TablesTableResponse(BaseModel):
    table: int
    rows: list[TablesRowResponse]


class TablesGridResponse(BaseModel):
    dimensions: TablesDimensionsPayload
    columns: list[TablesColumnResponse]
    tables: list[TablesTableResponse]


class TablesIssueResponse(BaseModel):
    path: str
    code: str
    message: str
    table: int
    row: int | None
    column: str | None


class TablesViewResponse(BaseModel):
    """
    Current snapshot and its rebuilt grid.
    """

    snapshot: TablesSnapshotRequest
    grid: TablesGridResponse


class TablesValidateResponse(BaseModel):
    valid: bool
    errors: list[TablesIssueResponse]


class TablesSubmitResponse(BaseModel):
    status: str
    snapshot: TablesSnapshotRequest
    grid: TablesGridResponse


class TablesRowAggregatesResponse(BaseModel):
    q1: float
    q2: float
    q3: float
    q4: float
    ytd: float


def build_grid_snapshot(*, request: TablesSnapshotRequest) -> GridSnapshot:
    """
    Convert API snapshot payload into domain snapshot.

    Args:
        request: Parsed request payload.
    Returns:
        GridSnapshot: Domain snapshot validated against request dimensions.
    Assumptions:
        Column literals are validated by the domain (`ColumnId.parse`).
    Raises:
        TablesSnapshotError: If one cell is outside dimensions or names unknown column.
    Side Effects:
        None.
    """
    dimensions = GridDimensions(tables=request.dimensions.tables, rows=request.dimensions.rows)
    return GridSnapshot.from_items(
        dimensions=dimensions,
        items=[cell.model_dump() for cell in request.cells],
    )


def build_snapshot_payload(*, snapshot: GridSnapshot) -> TablesSnapshotRequest:
    return TablesSnapshotRequest(
        dimensions=TablesDimensionsPayload(
            tables=snapshot.dimensions.tables,
            rows=snapshot.dimensions.rows,
        ),
        cells=[TablesCellPayload(**item) for item in snapshot.to_items()],
    )


def build_columns_response(*, columns: tuple[ColumnSpec, ...]) -> TablesColumnsResponse:
    return TablesColumnsResponse(
        schema_version=1,
        items=[_column_response(spec=spec) for spec in columns],
    )


def build_grid_response(*, grid: Grid) -> TablesGridResponse:
    return TablesGridResponse.model_validate(grid.to_payload())


def build_view_response(*, view: TablesView) -> TablesViewResponse:
    return TablesViewResponse(
        snapshot=build_snapshot_payload(snapshot=view.snapshot),
        grid=build_grid_response(grid=view.grid),
    )


def build_validate_response(*, issues: tuple[TableValidationIssue, ...]) -> TablesValidateResponse:
    return TablesValidateResponse(
        valid=len(issues) == 0,
        errors=[TablesIssueResponse.model_validate(issue.to_payload()) for issue in issues],
    )


def build_submit_response(*, result: SubmitTablesResult) -> TablesSubmitResponse:
    """
    Build accepted-submit response.

    Args:
        result: Accepted submit result.
    Returns:
        TablesSubmitResponse: Status message, snapshot and unrounded grid.
    Assumptions:
        Rejected results are converted to ReinfateError by the route.
    Raises:
        ValueError: If result is rejected.
    Side Effects:
        None.
    """
    if not result.accepted or result.status_message is None:
        raise ValueError("build_submit_response requires accepted result")
    return TablesSubmitResponse(
        status=result.status_message,
        snapshot=build_snapshot_payload(snapshot=result.view.snapshot),
        grid=build_grid_response(grid=result.view.grid),
    )


def build_row_aggregates_response(*, aggregates: RowAggregates) -> TablesRowAggregatesResponse:
    return TablesRowAggregatesResponse(
        q1=aggregates.q1,
        q2=aggregates.q2,
        q3=aggregates.q3,
        q4=aggregates.q4,
        ytd=aggregates.ytd,
    )


def _column_response(*, spec: ColumnSpec) -> TablesColumnResponse:
    return TablesColumnResponse(
        id=spec.column_id.value,
        label=spec.label,
        editable=spec.editable,
        server_seeded=spec.server_seeded,
    )
