from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from apps.api.wiring.modules.tables import build_tables_runtime_config, build_tables_use_case
from reinfate.contexts.tables.adapters.outbound.config import (
    TablesRuntimeConfig,
    load_tables_runtime_config,
)
from reinfate.contexts.tables.application import EditTablesUseCase


@dataclass(frozen=True, slots=True)
class TablesCliWiring:
    """
    Composition root for `validate` and `submit` CLI commands.

    Env is the source of truth unless `config_path` is passed explicitly.
    Use-case composition is shared with API wiring (`build_tables_use_case`).
    """

    environ: Mapping[str, str]
    config_path: str | None = None

    def config(self) -> TablesRuntimeConfig:
        """
        Load tables runtime config for one CLI invocation.

        Parameters:
        - none.

        Returns:
        - Validated `TablesRuntimeConfig`.

        Errors/Exceptions:
        - FileNotFoundError if the resolved path does not exist.
        - ValueError if `REINFATE_ENV` or YAML content is invalid.

        Side effects:
        - Reads config YAML from filesystem.
        """
        if self.config_path:
            return load_tables_runtime_config(self.config_path)
        return build_tables_runtime_config(environ=self.environ)

    def use_case(self, *, config: TablesRuntimeConfig) -> EditTablesUseCase:
        return build_tables_use_case(config=config)
