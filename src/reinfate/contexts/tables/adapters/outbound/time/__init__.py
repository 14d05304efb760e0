from .system_tables_clock import FixedYearTablesClock, SystemTablesClock

__all__ = ["FixedYearTablesClock", "SystemTablesClock"]
