"""
FastAPI application factory for Reinfate tables API.
"""

from __future__ import annotations

import os
from typing import Mapping

from fastapi import FastAPI

from apps.api.common import register_api_error_handlers
from apps.api.wiring.modules import build_tables_api_router, build_tables_runtime_config


def create_app(*, environ: Mapping[str, str] | None = None) -> FastAPI:
    """
    Build FastAPI app with tables module wired at startup.

    Docs: docs/architecture/tables/tables-grid-validation-v1.md
    Related: apps.api.routes.tables,
      apps.api.wiring.modules.tables

    Args:
        environ: Optional environment mapping override.
    Returns:
        FastAPI: Application instance with registered routers.
    Assumptions:
        Modules wiring performs fail-fast config validation before first request.
    Raises:
        FileNotFoundError: If tables config path is missing.
        ValueError: If config parsing/validation fails.
    Side Effects:
        Reads tables YAML config.
    """
    effective_environ = os.environ if environ is None else environ
    config = build_tables_runtime_config(environ=effective_environ)

    app = FastAPI(
        title="Reinfate Tables API",
        version="1.0.0",
    )
    register_api_error_handlers(app=app)
    app.include_router(build_tables_api_router(config=config))
    return app
