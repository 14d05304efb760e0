from __future__ import annotations

from datetime import datetime, timezone

from reinfate.contexts.tables.application.ports import TablesClock


class SystemTablesClock(TablesClock):
    """
    SystemTablesClock — реализация `TablesClock` на системном UTC времени.

    Docs:
      - docs/architecture/tables/tables-grid-validation-v1.md
    Related:
      - src/reinfate/contexts/tables/application/ports/clock.py
      - apps/api/wiring/modules/tables.py
    """

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedYearTablesClock(TablesClock):
    """
    Clock pinned to January 1st of a configured year (`tables.current_year`).
    """

    def __init__(self, *, year: int) -> None:
        if year < 1:
            raise ValueError(f"FixedYearTablesClock.year must be >= 1, got {year}")
        self._now = datetime(year, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now
