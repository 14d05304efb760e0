from .tables import build_tables_api_router, build_tables_runtime_config, build_tables_use_case

__all__ = [
    "build_tables_api_router",
    "build_tables_runtime_config",
    "build_tables_use_case",
]
