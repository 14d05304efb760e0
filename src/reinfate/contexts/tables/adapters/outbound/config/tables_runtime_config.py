from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from reinfate.contexts.tables.application.use_cases import (
    DISPLAY_DECIMALS_DEFAULT,
    MAX_ROWS_DEFAULT,
    MAX_TABLES_DEFAULT,
    ROWS_CEILING,
    TABLES_CEILING,
)

log = logging.getLogger(__name__)

_ENV_NAME_KEY = "REINFATE_ENV"
_TABLES_CONFIG_PATH_KEY = "REINFATE_TABLES_CONFIG"
_ALLOWED_ENVS = ("dev", "prod", "test")

_MAX_DISPLAY_DECIMALS = 10
_LOG_LEVEL_DEFAULT = "INFO"
_ALLOWED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class TablesSectionRuntimeConfig:
    """
    Runtime settings of the tables engine loaded from `tables` section.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - configs/dev/tables.yaml
      - src/reinfate/contexts/tables/application/use_cases/edit_tables.py
      - apps/api/wiring/modules/tables.py
    """

    display_decimals: int = DISPLAY_DECIMALS_DEFAULT
    current_year: int | None = None
    max_tables: int = MAX_TABLES_DEFAULT
    max_rows: int = MAX_ROWS_DEFAULT

    def __post_init__(self) -> None:
        """
        Validate tables settings with fail-fast startup semantics.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            `current_year=None` means the system clock seeds `year` cells.
        Raises:
            ValueError: If rounding precision, pinned year or grid limits are out of range.
        Side Effects:
            None.
        """
        if self.display_decimals < 0 or self.display_decimals > _MAX_DISPLAY_DECIMALS:
            raise ValueError(
                f"tables.display_decimals must be in [0, {_MAX_DISPLAY_DECIMALS}]"
            )
        if self.current_year is not None and self.current_year < 1:
            raise ValueError("tables.current_year must be >= 1 when provided")
        if not 1 <= self.max_tables <= TABLES_CEILING:
            raise ValueError(f"tables.max_tables must be in [1, {TABLES_CEILING}]")
        if not 1 <= self.max_rows <= ROWS_CEILING:
            raise ValueError(f"tables.max_rows must be in [1, {ROWS_CEILING}]")


@dataclass(frozen=True, slots=True)
class LoggingRuntimeConfig:
    """
    Logging settings loaded from `logging` section.
    """

    level: str = _LOG_LEVEL_DEFAULT

    def __post_init__(self) -> None:
        normalized = self.level.strip().upper()
        if normalized not in _ALLOWED_LOG_LEVELS:
            raise ValueError(
                f"logging.level must be one of {_ALLOWED_LOG_LEVELS}, got {self.level!r}"
            )
        object.__setattr__(self, "level", normalized)


@dataclass(frozen=True, slots=True)
class TablesRuntimeConfig:
    """
    Tables runtime config v1 loaded from `configs/<env>/tables.yaml`.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - configs/dev/tables.yaml
      - configs/test/tables.yaml
      - configs/prod/tables.yaml
    """

    version: int
    tables: TablesSectionRuntimeConfig = field(default_factory=TablesSectionRuntimeConfig)
    log_settings: LoggingRuntimeConfig = field(default_factory=LoggingRuntimeConfig)

    def __post_init__(self) -> None:
        if self.version != 1:
            raise ValueError(f"tables config version must be 1, got {self.version!r}")


def resolve_tables_config_path(*, environ: Mapping[str, str]) -> Path:
    """
    Resolve runtime config path using env override precedence contract.

    Args:
        environ: Runtime environment mapping.
    Returns:
        Path: Resolved `tables.yaml` path.
    Assumptions:
        Precedence is `REINFATE_TABLES_CONFIG` > `configs/<REINFATE_ENV>/tables.yaml`.
    Raises:
        ValueError: If `REINFATE_ENV` value is unsupported.
    Side Effects:
        None.
    """
    override_path = environ.get(_TABLES_CONFIG_PATH_KEY, "").strip()
    if override_path:
        return Path(override_path)

    env_name = _resolve_env_name(environ=environ)
    return Path("configs") / env_name / "tables.yaml"


def load_tables_runtime_config(path: str | Path) -> TablesRuntimeConfig:
    """
    Load and validate source-of-truth tables runtime YAML configuration.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - configs/dev/tables.yaml
      - apps/api/wiring/modules/tables.py
      - apps/cli/commands/tables.py

    Args:
        path: Path to `tables.yaml`.
    Returns:
        TablesRuntimeConfig: Parsed validated config object.
    Assumptions:
        Missing optional sections and keys fallback to documented defaults.
    Raises:
        FileNotFoundError: If path does not exist.
        ValueError: If YAML shape or values are invalid.
    Side Effects:
        Reads one UTF-8 YAML file from filesystem.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"tables config not found: {config_path}")

    payload = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if not isinstance(payload, Mapping):
        raise ValueError("tables config must be mapping at top-level")

    version = _get_int(payload, "version", required=True)
    tables_map = _get_mapping(payload, "tables", required=False)
    logging_map = _get_mapping(payload, "logging", required=False)

    config = TablesRuntimeConfig(
        version=version,
        tables=TablesSectionRuntimeConfig(
            display_decimals=_get_int_with_default(
                tables_map,
                "display_decimals",
                default=DISPLAY_DECIMALS_DEFAULT,
            ),
            current_year=_get_optional_int(tables_map, "current_year"),
            max_tables=_get_int_with_default(
                tables_map,
                "max_tables",
                default=MAX_TABLES_DEFAULT,
            ),
            max_rows=_get_int_with_default(tables_map, "max_rows", default=MAX_ROWS_DEFAULT),
        ),
        log_settings=LoggingRuntimeConfig(
            level=_get_str_with_default(logging_map, "level", default=_LOG_LEVEL_DEFAULT),
        ),
    )
    log.info(
        "tables config loaded path=%s display_decimals=%s current_year=%s max=%sx%s",
        config_path,
        config.tables.display_decimals,
        config.tables.current_year,
        config.tables.max_tables,
        config.tables.max_rows,
    )
    return config


def _resolve_env_name(*, environ: Mapping[str, str]) -> str:
    raw_env_name = environ.get(_ENV_NAME_KEY, "dev").strip().lower()
    if raw_env_name not in _ALLOWED_ENVS:
        raise ValueError(
            f"{_ENV_NAME_KEY} must be one of {_ALLOWED_ENVS}, got {raw_env_name!r}"
        )
    return raw_env_name


def _get_mapping(data: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    value = data.get(key)
    if value is None:
        if required:
            raise ValueError(f"missing required key: {key}")
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"expected mapping at key '{key}', got {type(value).__name__}")
    return value


def _get_int(data: Mapping[str, Any], key: str, *, required: bool) -> int:
    """
    Read integer value from payload while rejecting bools.

    Args:
        data: Source mapping.
        key: Integer key name.
        required: Whether key is mandatory.
    Returns:
        int: Parsed integer value.
    Assumptions:
        Bool values are rejected despite inheriting from `int`.
    Raises:
        ValueError: If missing required key or value type is invalid.
    Side Effects:
        None.
    """
    value = data.get(key)
    if value is None:
        if required:
            raise ValueError(f"missing required key: {key}")
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected int at key '{key}', got {type(value).__name__}")
    return value


def _get_optional_int(data: Mapping[str, Any], key: str) -> int | None:
    # YAML `null` is treated as absent.
    if data.get(key) is None:
        return None
    return _get_int(data, key, required=True)


def _get_int_with_default(data: Mapping[str, Any], key: str, *, default: int) -> int:
    if key not in data:
        return default
    return _get_int(data, key, required=True)


def _get_str_with_default(data: Mapping[str, Any], key: str, *, default: str) -> str:
    if key not in data:
        return default
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"expected str at key '{key}', got {type(value).__name__}")
    return value
