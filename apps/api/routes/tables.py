"""
Tables API routes.

Docs: docs/architecture/tables/tables-grid-validation-v1.md
"""

from __future__ import annotations

from typing import Callable

from fastapi import APIRouter

from apps.api.dto import (
    TablesColumnsResponse,
    TablesComputeRowRequest,
    TablesRowAggregatesResponse,
    TablesSnapshotRequest,
    TablesSubmitResponse,
    TablesValidateResponse,
    TablesViewResponse,
    build_columns_response,
    build_grid_snapshot,
    build_row_aggregates_response,
    build_submit_response,
    build_validate_response,
    build_view_response,
)
from reinfate.contexts.tables.application import (
    EditTablesUseCase,
    TablesView,
    map_tables_exception,
    tables_submit_rejected,
)
from reinfate.contexts.tables.domain.entities import GridDimensions, GridSnapshot
from reinfate.contexts.tables.domain.errors import TablesDomainError


def build_tables_router(*, use_case: EditTablesUseCase) -> APIRouter:
    """
    Build router exposing stateless grid growth, recompute, validate and submit endpoints.

    Docs: docs/architecture/tables/tables-grid-validation-v1.md
    Related: apps.api.dto.tables,
      reinfate.contexts.tables.application.use_cases.edit_tables

    Args:
        use_case: Configured tables use-case.
    Returns:
        APIRouter: Router with `/tables/*` endpoints.
    Assumptions:
        Server keeps no session; clients echo the snapshot on every call.
    Raises:
        ValueError: If use-case dependency is missing.
    Side Effects:
        None.
    """
    if use_case is None:  # type: ignore[truthy-bool]
        raise ValueError("build_tables_router requires use_case")

    router = APIRouter(tags=["tables"])

    @router.get("/tables/columns", response_model=TablesColumnsResponse)
    def get_tables_columns() -> TablesColumnsResponse:
        return build_columns_response(columns=GridDimensions.columns())

    @router.post("/tables/start", response_model=TablesViewResponse)
    def post_tables_start() -> TablesViewResponse:
        return build_view_response(view=use_case.start())

    @router.post("/tables/add-table", response_model=TablesViewResponse)
    def post_tables_add_table(request: TablesSnapshotRequest) -> TablesViewResponse:
        snapshot = _snapshot_or_raise(request=request, use_case=use_case)
        return build_view_response(view=_grow_or_raise(use_case.add_table, snapshot))

    @router.post("/tables/add-row", response_model=TablesViewResponse)
    def post_tables_add_row(request: TablesSnapshotRequest) -> TablesViewResponse:
        snapshot = _snapshot_or_raise(request=request, use_case=use_case)
        return build_view_response(view=_grow_or_raise(use_case.add_row, snapshot))

    @router.post("/tables/refresh", response_model=TablesViewResponse)
    def post_tables_refresh(request: TablesSnapshotRequest) -> TablesViewResponse:
        snapshot = _snapshot_or_raise(request=request, use_case=use_case)
        return build_view_response(view=use_case.refresh(snapshot))

    @router.post("/tables/compute-row", response_model=TablesRowAggregatesResponse)
    def post_tables_compute_row(request: TablesComputeRowRequest) -> TablesRowAggregatesResponse:
        return build_row_aggregates_response(aggregates=use_case.compute_row(request.months))

    @router.post("/tables/validate", response_model=TablesValidateResponse)
    def post_tables_validate(request: TablesSnapshotRequest) -> TablesValidateResponse:
        snapshot = _snapshot_or_raise(request=request, use_case=use_case)
        return build_validate_response(issues=use_case.validate(snapshot))

    @router.post("/tables/submit", response_model=TablesSubmitResponse)
    def post_tables_submit(request: TablesSnapshotRequest) -> TablesSubmitResponse:
        """
        Validate and submit snapshot.

        Args:
            request: Snapshot payload.
        Returns:
            TablesSubmitResponse: Status `Valid` with unrounded computed grid.
        Assumptions:
            Rejected submit is not an HTTP success.
        Raises:
            ReinfateError: `validation_error` (422) with issues and the preserved grid.
        Side Effects:
            None.
        """
        snapshot = _snapshot_or_raise(request=request, use_case=use_case)
        result = use_case.submit(snapshot)
        if not result.accepted:
            raise tables_submit_rejected(result=result)
        return build_submit_response(result=result)

    return router


def _snapshot_or_raise(
    *,
    request: TablesSnapshotRequest,
    use_case: EditTablesUseCase,
) -> GridSnapshot:
    try:
        snapshot = build_grid_snapshot(request=request)
        use_case.ensure_within_limits(snapshot.dimensions)
    except (TablesDomainError, ValueError) as error:
        raise map_tables_exception(error=error) from error
    return snapshot


def _grow_or_raise(
    grow: Callable[[GridSnapshot], TablesView],
    snapshot: GridSnapshot,
) -> TablesView:
    # Growth past `max_tables`/`max_rows` is rejected with 422.
    try:
        return grow(snapshot)
    except TablesDomainError as error:
        raise map_tables_exception(error=error) from error
