from __future__ import annotations

from typing import Any

from fastapi import FastAPI
from fastapi.testclient import TestClient

from apps.api.common import register_api_error_handlers
from apps.api.routes import build_tables_router
from reinfate.contexts.tables.adapters.outbound.time import FixedYearTablesClock
from reinfate.contexts.tables.application import EditTablesUseCase


def _build_client(*, max_tables: int = 50, max_rows: int = 200) -> TestClient:
    """
    Build test client with tables router and canonical error handlers.

    Args:
        max_tables: Configured table limit.
        max_rows: Configured row limit.
    Returns:
        TestClient: Client bound to an in-memory app.
    Assumptions:
        Year is pinned to 2024 for deterministic seeded cells.
    Raises:
        None.
    Side Effects:
        None.
    """
    app = FastAPI()
    register_api_error_handlers(app=app)
    use_case = EditTablesUseCase(
        clock=FixedYearTablesClock(year=2024),
        display_decimals=2,
        max_tables=max_tables,
        max_rows=max_rows,
    )
    app.include_router(build_tables_router(use_case=use_case))
    return TestClient(app)


def _snapshot_body(
    *,
    tables: int = 1,
    rows: int = 1,
    cells: list[tuple[int, int, str, Any]] | None = None,
) -> dict[str, Any]:
    return {
        "dimensions": {"tables": tables, "rows": rows},
        "cells": [
            {"table": table, "row": row, "column": column, "value": value}
            for table, row, column, value in (cells or [])
        ],
    }


def _row_values(grid: dict[str, Any], *, table: int, row: int) -> dict[str, Any]:
    table_payload = grid["tables"][table - 1]
    for row_payload in table_payload["rows"]:
        if row_payload["row"] == row:
            return row_payload["values"]
    raise KeyError(row)


def test_get_tables_columns_returns_fixed_schema() -> None:
    response = _build_client().get("/tables/columns")

    assert response.status_code == 200
    body = response.json()
    assert body["schema_version"] == 1
    assert [item["id"] for item in body["items"]][:5] == ["year", "jan", "feb", "mar", "q1"]
    assert len(body["items"]) == 18
    assert body["items"][-1] == {
        "id": "ytd",
        "label": "YTD",
        "editable": False,
        "server_seeded": True,
    }


def test_post_tables_start_returns_seeded_grid() -> None:
    response = _build_client().post("/tables/start")

    assert response.status_code == 200
    body = response.json()
    assert body["snapshot"] == {"dimensions": {"tables": 1, "rows": 1}, "cells": []}
    values = _row_values(body["grid"], table=1, row=1)
    assert values["year"] == 2024.0
    assert values["q1"] == 0.33
    assert values["ytd"] == 0.58


def test_post_tables_add_table_and_add_row_grow_grid() -> None:
    client = _build_client()
    body = _snapshot_body(cells=[(1, 1, "jan", 3.0)])

    added_table = client.post("/tables/add-table", json=body).json()
    added_row = client.post("/tables/add-row", json=added_table["snapshot"]).json()

    assert added_table["snapshot"]["dimensions"] == {"tables": 2, "rows": 1}
    assert added_row["snapshot"]["dimensions"] == {"tables": 2, "rows": 2}
    assert added_row["snapshot"]["cells"] == [
        {"table": 1, "row": 1, "column": "jan", "value": 3.0}
    ]
    assert [row["row"] for row in added_row["grid"]["tables"][1]["rows"]] == [2, 1]
    assert _row_values(added_row["grid"], table=2, row=2)["year"] == 2023.0


def test_post_tables_refresh_recomputes_rounded_values() -> None:
    body = _snapshot_body(cells=[(1, 1, "jan", 1.0), (1, 1, "q1", 50.0)])

    response = _build_client().post("/tables/refresh", json=body)

    assert response.status_code == 200
    assert _row_values(response.json()["grid"], table=1, row=1)["q1"] == 0.67


def test_post_tables_compute_row_returns_unrounded_aggregates() -> None:
    months = [2.0, None, None, 5.0, None, None, 8.0, None, None, 11.0, None, None]

    response = _build_client().post("/tables/compute-row", json={"months": months})

    assert response.status_code == 200
    assert response.json() == {"q1": 1.0, "q2": 2.0, "q3": 3.0, "q4": 4.0, "ytd": 2.75}


def test_post_tables_compute_row_rejects_wrong_length() -> None:
    response = _build_client().post("/tables/compute-row", json={"months": [1.0] * 11})

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "validation_error"
    assert error["message"] == "Validation failed"
    assert error["details"]["errors"][0]["path"] == "body.months"


def test_post_tables_validate_reports_issues_in_order() -> None:
    body = _snapshot_body(
        tables=2,
        cells=[(1, 1, "jan", 5.0), (1, 1, "mar", 6.0), (2, 1, "jan", 5.0)],
    )

    response = _build_client().post("/tables/validate", json=body)

    assert response.status_code == 200
    payload = response.json()
    assert payload["valid"] is False
    assert [(item["path"], item["code"]) for item in payload["errors"]] == [
        ("table-1.1.feb", "broken_sequence"),
        ("table-1.1.mar", "shape_mismatch"),
        ("table-2.1.mar", "shape_mismatch"),
    ]
    assert payload["errors"][0]["message"] == "Table should not contain breaks"


def test_post_tables_submit_accepts_valid_snapshot() -> None:
    body = _snapshot_body(cells=[(1, 1, "jan", 1.0)])

    response = _build_client().post("/tables/submit", json=body)

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "Valid"
    assert _row_values(payload["grid"], table=1, row=1)["q1"] == 2.0 / 3


def test_post_tables_submit_rejects_with_preserved_grid() -> None:
    """
    Verify rejected submit returns 422 with issues and the grid the user was editing.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Second table is empty, so table 2 gets mismatch and empty-table issues.
    Raises:
        AssertionError: If error contract differs.
    Side Effects:
        None.
    """
    body = _snapshot_body(tables=2, cells=[(1, 1, "jan", 1.0)])

    response = _build_client().post("/tables/submit", json=body)

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "validation_error"
    assert error["message"] == "Tables validation failed"
    assert [item["path"] for item in error["details"]["errors"]] == [
        "table-1.1.jan",
        "table-2.1.jan",
        "table-2",
    ]
    assert _row_values(error["details"]["grid"], table=1, row=1)["jan"] == 1.0
    assert _row_values(error["details"]["grid"], table=1, row=1)["q1"] == 0.67


def test_post_tables_snapshot_outside_dimensions_is_rejected() -> None:
    body = _snapshot_body(cells=[(2, 1, "jan", 1.0)])

    response = _build_client().post("/tables/validate", json=body)

    assert response.status_code == 422
    items = response.json()["error"]["details"]["errors"]
    assert items == [
        {"code": "out_of_range", "message": "Cell is outside grid 1x1", "path": "table-2.1.jan"}
    ]


def test_post_tables_unknown_column_is_rejected() -> None:
    body = _snapshot_body(cells=[(1, 1, "q9", 1.0)])

    response = _build_client().post("/tables/refresh", json=body)

    assert response.status_code == 422
    assert response.json()["error"]["details"]["errors"][0]["code"] == "invalid_address"


def test_post_tables_extra_fields_are_forbidden() -> None:
    response = _build_client().post("/tables/validate", json={"dimensions": {}, "session": "x"})

    assert response.status_code == 422
    assert response.json()["error"]["details"]["errors"][0]["path"] == "body.session"


def test_post_tables_growth_past_limits_is_rejected() -> None:
    client = _build_client(max_tables=2, max_rows=2)

    grown = client.post("/tables/add-table", json=_snapshot_body(tables=1))
    at_table_limit = client.post("/tables/add-table", json=_snapshot_body(tables=2))
    at_row_limit = client.post("/tables/add-row", json=_snapshot_body(rows=2))

    assert grown.status_code == 200
    assert grown.json()["snapshot"]["dimensions"] == {"tables": 2, "rows": 1}
    assert at_table_limit.status_code == 422
    assert at_table_limit.json()["error"]["details"]["errors"] == [
        {
            "code": "too_large",
            "message": "at most 2 tables are allowed",
            "path": "dimensions.tables",
        }
    ]
    assert at_row_limit.status_code == 422
    assert at_row_limit.json()["error"]["details"]["errors"][0]["path"] == "dimensions.rows"


def test_post_tables_dimensions_above_limits_are_rejected() -> None:
    client = _build_client(max_tables=2, max_rows=2)

    configured = client.post("/tables/validate", json=_snapshot_body(tables=3, rows=3))
    ceiling = client.post("/tables/refresh", json=_snapshot_body(rows=1_000_000))

    assert configured.status_code == 422
    paths = [item["path"] for item in configured.json()["error"]["details"]["errors"]]
    assert paths == ["dimensions.tables", "dimensions.rows"]
    assert ceiling.status_code == 422
    ceiling_item = ceiling.json()["error"]["details"]["errors"][0]
    assert ceiling_item["path"] == "body.dimensions.rows"
    assert ceiling_item["code"] == "less_than_equal"
