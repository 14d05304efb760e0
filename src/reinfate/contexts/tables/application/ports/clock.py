from __future__ import annotations

from datetime import datetime
from typing import Protocol


class TablesClock(Protocol):
    """
    TablesClock — порт источника текущего времени для засева колонки `year`.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - src/reinfate/contexts/tables/application/use_cases/edit_tables.py
      - src/reinfate/contexts/tables/adapters/outbound/time/system_tables_clock.py
    """

    def now(self) -> datetime:
        """
        Return current timezone-aware datetime.

        Args:
            None.
        Returns:
            datetime: Current datetime; only its year is used.
        Assumptions:
            Implementations may pin the year for deterministic tests.
        Raises:
            None.
        Side Effects:
            None.
        """
        ...
