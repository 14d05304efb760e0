from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping, Sequence

import yaml

from apps.cli.wiring.modules import TablesCliWiring
from reinfate.contexts.tables.application import (
    EditTablesUseCase,
    issues_payload,
    map_tables_exception,
)
from reinfate.contexts.tables.domain.entities import GridDimensions, GridSnapshot
from reinfate.contexts.tables.domain.errors import TablesDomainError

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


class ValidateTablesCli:
    def run(self, argv: Sequence[str]) -> int:
        ns = _build_parser(prog="validate").parse_args(list(argv))
        loaded = _load_or_report(ns)
        if loaded is None:
            return EXIT_USAGE
        use_case, snapshot = loaded

        issues = use_case.validate(snapshot)
        print(
            json.dumps(
                {"valid": not issues, "errors": issues_payload(issues)},
                ensure_ascii=False,
            )
        )
        return EXIT_OK if not issues else EXIT_INVALID


class SubmitTablesCli:
    def run(self, argv: Sequence[str]) -> int:
        ns = _build_parser(prog="submit").parse_args(list(argv))
        loaded = _load_or_report(ns)
        if loaded is None:
            return EXIT_USAGE
        use_case, snapshot = loaded

        result = use_case.submit(snapshot)
        payload: dict[str, Any] = {"grid": result.view.grid.to_payload()}
        if result.accepted:
            payload["status"] = result.status_message
        else:
            payload["errors"] = issues_payload(result.issues)
        print(json.dumps(payload, ensure_ascii=False))
        return EXIT_OK if result.accepted else EXIT_INVALID


def load_snapshot_file(path: str | Path) -> GridSnapshot:
    """
    Read snapshot from YAML or JSON file.

    Accepted layout:
      dimensions: {tables: N, rows: M}
      cells: [{table, row, column, value}, ...]    # flat items
      tables: {1: {1: {jan: 5.0}}}                 # or nested tree

    Raises FileNotFoundError for missing files, ValueError for malformed documents
    and TablesSnapshotError when cells do not fit the grid.
    """
    snapshot_path = Path(path)
    if not snapshot_path.exists():
        raise FileNotFoundError(f"snapshot file not found: {snapshot_path}")

    # JSON is a subset of YAML for the documents we accept.
    payload = yaml.safe_load(snapshot_path.read_text(encoding="utf-8"))
    if not isinstance(payload, Mapping):
        raise ValueError("snapshot file must contain a mapping at top-level")

    dimensions_map = payload.get("dimensions") or {}
    if not isinstance(dimensions_map, Mapping):
        raise ValueError("snapshot 'dimensions' must be a mapping")
    dimensions = GridDimensions(
        tables=dimensions_map.get("tables", 1),
        rows=dimensions_map.get("rows", 1),
    )

    if "cells" in payload and "tables" in payload:
        raise ValueError("snapshot must define either 'cells' or 'tables', not both")
    if "tables" in payload:
        tables = payload.get("tables") or {}
        if not isinstance(tables, Mapping):
            raise ValueError("snapshot 'tables' must be a mapping")
        return GridSnapshot.from_nested(dimensions=dimensions, tables=tables)

    cells = payload.get("cells") or []
    if not isinstance(cells, list) or not all(isinstance(item, Mapping) for item in cells):
        raise ValueError("snapshot 'cells' must be a list of mappings")
    return GridSnapshot.from_items(dimensions=dimensions, items=cells)


def _load_or_report(ns: argparse.Namespace) -> tuple[EditTablesUseCase, GridSnapshot] | None:
    wiring = TablesCliWiring(environ=os.environ, config_path=ns.config)
    try:
        config = wiring.config()
    except FileNotFoundError as error:
        log.error("%s", error)
        return None
    except ValueError as error:
        log.error("tables config rejected path=%s", ns.config)
        print(json.dumps(map_tables_exception(error=error).to_payload(), ensure_ascii=False))
        return None

    logging.getLogger().setLevel(config.log_settings.level)
    use_case = wiring.use_case(config=config)
    try:
        snapshot = load_snapshot_file(ns.snapshot)
        use_case.ensure_within_limits(snapshot.dimensions)
    except FileNotFoundError as error:
        log.error("%s", error)
        return None
    except (TablesDomainError, ValueError) as error:
        log.error("snapshot rejected path=%s", ns.snapshot)
        print(json.dumps(map_tables_exception(error=error).to_payload(), ensure_ascii=False))
        return None
    return use_case, snapshot


def _build_parser(*, prog: str) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=f"reinfate-tables {prog}")
    p.add_argument("snapshot", help="Path to snapshot YAML/JSON file")
    p.add_argument(
        "--config",
        default=None,
        help="Path to tables.yaml (default: resolved from REINFATE_TABLES_CONFIG/REINFATE_ENV)",
    )
    return p
