from .tables import TablesCliWiring

__all__ = ["TablesCliWiring"]
