from __future__ import annotations

from typing import Mapping, Sequence


class TablesDomainError(ValueError):
    """
    Base deterministic domain error for the tables bounded context.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - src/reinfate/contexts/tables/application/use_cases/errors.py
      - src/reinfate/platform/errors/reinfate_error.py
      - apps/api/common/errors.py
    """


class TablesSnapshotError(TablesDomainError):
    """
    Raised when a snapshot payload cannot be mapped onto the grid.

    Covers addresses outside current dimensions, unknown column ids and
    non-numeric cell values. Unlike validation issues these are caller bugs,
    not user-correctable input states.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - src/reinfate/contexts/tables/domain/entities/grid_snapshot.py
      - src/reinfate/contexts/tables/application/use_cases/errors.py
    """

    def __init__(
        self,
        message: str,
        *,
        errors: Sequence[Mapping[str, str]] | None = None,
    ) -> None:
        """
        Build snapshot error with optional deterministic item payload.

        Args:
            message: Human-readable failure description.
            errors: Optional detailed items (`path`, `code`, `message`).
        Returns:
            None.
        Assumptions:
            Missing item fields are normalized to deterministic fallback values.
        Raises:
            None.
        Side Effects:
            Stores normalized immutable items for API/CLI mapping layer.
        """
        super().__init__(message)
        normalized_errors: list[dict[str, str]] = []
        if errors is not None:
            for item in errors:
                normalized_errors.append(
                    {
                        "path": str(item.get("path", "unknown")),
                        "code": str(item.get("code", "invalid_snapshot")),
                        "message": str(item.get("message", "Invalid snapshot")),
                    }
                )
        self._errors = tuple(normalized_errors)

    @property
    def errors(self) -> tuple[Mapping[str, str], ...]:
        return self._errors
