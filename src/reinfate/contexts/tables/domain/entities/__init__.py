from .grid import Grid, GridCell, GridRow, GridTable
from .grid_dimensions import GridDimensions
from .grid_snapshot import CellValue, GridSnapshot, is_empty_value

__all__ = [
    "CellValue",
    "Grid",
    "GridCell",
    "GridDimensions",
    "GridRow",
    "GridSnapshot",
    "GridTable",
    "is_empty_value",
]
