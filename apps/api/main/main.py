"""
CLI entrypoint for running Reinfate tables FastAPI service.
"""

from __future__ import annotations

import argparse
import logging
import os

import uvicorn

from apps.api.wiring.modules import build_tables_runtime_config


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="reinfate-api")
    parser.add_argument("--host", default="0.0.0.0", help="Bind host")
    parser.add_argument("--port", type=int, default=8000, help="Bind port")
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Run API process using uvicorn.

    Args:
        argv: Optional command arguments without program name.
    Returns:
        int: Process exit code.
    Assumptions:
        Import path `apps.api.main.app:create_app` is available in PYTHONPATH.
    Raises:
        FileNotFoundError: If tables config path is missing.
        ValueError: If config is invalid.
    Side Effects:
        Configures root logging and starts HTTP server loop.
    """
    args = _build_parser().parse_args(argv)
    config = build_tables_runtime_config(environ=os.environ)
    logging.basicConfig(
        level=config.log_settings.level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    uvicorn.run("apps.api.main.app:create_app", factory=True, host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
