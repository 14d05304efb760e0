"""
Composition helpers for tables API module.

Docs: docs/architecture/tables/tables-grid-validation-v1.md
"""

from __future__ import annotations

from typing import Mapping

from fastapi import APIRouter

from apps.api.routes import build_tables_router
from reinfate.contexts.tables.adapters.outbound.config import (
    TablesRuntimeConfig,
    load_tables_runtime_config,
    resolve_tables_config_path,
)
from reinfate.contexts.tables.adapters.outbound.time import (
    FixedYearTablesClock,
    SystemTablesClock,
)
from reinfate.contexts.tables.application import EditTablesUseCase, TablesClock


def build_tables_runtime_config(*, environ: Mapping[str, str]) -> TablesRuntimeConfig:
    """
    Load fail-fast tables runtime config from environment-aware YAML path.

    Args:
        environ: Process environment mapping.
    Returns:
        TablesRuntimeConfig: Validated runtime config.
    Assumptions:
        Config path resolves to `configs/<env>/tables.yaml` unless overridden.
    Raises:
        FileNotFoundError: If YAML file does not exist.
        ValueError: If environment/config is invalid.
    Side Effects:
        Reads config YAML from filesystem.
    """
    return load_tables_runtime_config(resolve_tables_config_path(environ=environ))


def build_tables_use_case(*, config: TablesRuntimeConfig) -> EditTablesUseCase:
    """
    Build tables use-case with clock selected by `tables.current_year`.

    Args:
        config: Validated runtime config.
    Returns:
        EditTablesUseCase: Ready use-case.
    Assumptions:
        Pinned year takes precedence over the system clock.
    Raises:
        None.
    Side Effects:
        None.
    """
    clock: TablesClock
    if config.tables.current_year is not None:
        clock = FixedYearTablesClock(year=config.tables.current_year)
    else:
        clock = SystemTablesClock()
    return EditTablesUseCase(
        clock=clock,
        display_decimals=config.tables.display_decimals,
        max_tables=config.tables.max_tables,
        max_rows=config.tables.max_rows,
    )


def build_tables_api_router(*, config: TablesRuntimeConfig) -> APIRouter:
    return build_tables_router(use_case=build_tables_use_case(config=config))
