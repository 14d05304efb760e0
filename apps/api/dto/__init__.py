from .tables import (
    TablesCellPayload,
    TablesColumnsResponse,
    TablesComputeRowRequest,
    TablesDimensionsPayload,
    TablesGridResponse,
    TablesIssueResponse,
    TablesRowAggregatesResponse,
    TablesSnapshotRequest,
    TablesSubmitResponse,
    TablesValidateResponse,
    TablesViewResponse,
    build_columns_response,
    build_grid_response,
    build_grid_snapshot,
    build_row_aggregates_response,
    build_snapshot_payload,
    build_submit_response,
    build_validate_response,
    build_view_response,
)

__all__ = [
    "TablesCellPayload",
    "TablesColumnsResponse",
    "TablesComputeRowRequest",
    "TablesDimensionsPayload",
    "TablesGridResponse",
    "TablesIssueResponse",
    "TablesRowAggregatesResponse",
    "TablesSnapshotRequest",
    "TablesSubmitResponse",
    "TablesValidateResponse",
    "TablesViewResponse",
    "build_columns_response",
    "build_grid_response",
    "build_grid_snapshot",
    "build_row_aggregates_response",
    "build_snapshot_payload",
    "build_submit_response",
    "build_validate_response",
    "build_view_response",
]
