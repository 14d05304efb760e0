from .clock import TablesClock

__all__ = ["TablesClock"]
