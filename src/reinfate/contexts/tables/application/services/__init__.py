from .aggregator_v1 import RowAggregates, compute_row
from .grid_builder import GridBuilder, seed_year
from .snapshot_validator_v1 import REFERENCE_TABLE, validate_snapshot

__all__ = [
    "GridBuilder",
    "REFERENCE_TABLE",
    "RowAggregates",
    "compute_row",
    "seed_year",
    "validate_snapshot",
]
