from .tables import build_tables_router

__all__ = ["build_tables_router"]
