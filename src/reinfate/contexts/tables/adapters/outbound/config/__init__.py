from .tables_runtime_config import (
    LoggingRuntimeConfig,
    TablesRuntimeConfig,
    TablesSectionRuntimeConfig,
    load_tables_runtime_config,
    resolve_tables_config_path,
)

__all__ = [
    "LoggingRuntimeConfig",
    "TablesRuntimeConfig",
    "TablesSectionRuntimeConfig",
    "load_tables_runtime_config",
    "resolve_tables_config_path",
]
