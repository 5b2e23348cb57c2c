"""
Presentation adapter for road grids.

The engine keeps logical columns of unbounded height. This module lays them
out on a display grid of bounded height. A column that reaches the bottom row,
or that would run into a cell already placed, turns right and continues
along its current row (the "dragon tail"). Each logical column starts one
display column to the right of where the previous one started.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from roadsharp.roadmap.constants import (
    DEFAULT_BEAD_PLATE_COLUMNS,
    DEFAULT_DISPLAY_COLUMNS,
    DEFAULT_ROWS,
)

DisplayGrid = List[List[Optional[Any]]]


@dataclass
class RoadmapConfig:
    """
    Display configuration for the roads.

    Attributes:
        rows: Display height of every road
        display_columns: Most recent display columns kept for the Big Road and derived roads
        bead_plate_columns: Most recent columns kept for the Bead Plate
    """

    rows: int = DEFAULT_ROWS
    display_columns: int = DEFAULT_DISPLAY_COLUMNS
    bead_plate_columns: int = DEFAULT_BEAD_PLATE_COLUMNS

    def __post_init__(self):
        if self.rows < 1:
            raise ValueError(f"rows must be at least 1, got {self.rows}")
        if self.display_columns < 1 or self.bead_plate_columns < 1:
            raise ValueError("Display column counts must be at least 1")


def place_columns(
    columns: Sequence[Sequence[Any]], rows: int = DEFAULT_ROWS
) -> Dict[Tuple[int, int], Any]:
    """
    Map every cell of the logical columns to a (display column, row) slot.

    Args:
        columns: Logical columns, each in row order
        rows: Display height

    Returns:
        Dictionary from (column, row) to cell
    """
    if rows < 1:
        raise ValueError(f"rows must be at least 1, got {rows}")

    occupied: Dict[Tuple[int, int], Any] = {}
    start = 0
    for logical in columns:
        if not logical:
            continue
        while (start, 0) in occupied:
            start += 1
        col, row = start, 0
        turned = False
        for index, cell in enumerate(logical):
            if index:
                if not turned and row + 1 < rows and (col, row + 1) not in occupied:
                    row += 1
                else:
                    turned = True
                    col += 1
                    while (col, row) in occupied:
                        col += 1
            occupied[(col, row)] = cell
        start += 1
    return occupied


def wrap_columns(
    columns: Sequence[Sequence[Any]],
    rows: int = DEFAULT_ROWS,
    max_columns: Optional[int] = None,
) -> DisplayGrid:
    """
    Lay logical columns out on a display grid.

    Args:
        columns: Logical columns, each in row order
        rows: Display height
        max_columns: Keep only this many of the most recent display columns

    Returns:
        Display columns, each a list of `rows` cells or None
    """
    occupied = place_columns(columns, rows)
    width = max((col for col, _ in occupied), default=-1) + 1
    grid = [[occupied.get((col, row)) for row in range(rows)] for col in range(width)]
    if max_columns is not None and width > max_columns:
        grid = grid[width - max_columns:]
    return grid


def fill_columns(
    cells: Sequence[Any], rows: int = DEFAULT_ROWS, max_columns: Optional[int] = None
) -> DisplayGrid:
    """Lay cells out top to bottom, left to right, as the Bead Plate is drawn."""
    grid = []
    for start in range(0, len(cells), rows):
        chunk = list(cells[start:start + rows])
        grid.append(chunk + [None] * (rows - len(chunk)))
    if max_columns is not None and len(grid) > max_columns:
        grid = grid[len(grid) - max_columns:]
    return grid


def layout_snapshot(snapshot, config: Optional[RoadmapConfig] = None) -> Dict[str, DisplayGrid]:
    """Display grids for every road in a RoadmapSnapshot."""
    config = config if config else RoadmapConfig()
    bead_cells = [cell for column in snapshot.bead_plate for cell in column]
    grids = {
        "bead_plate": fill_columns(bead_cells, config.rows, config.bead_plate_columns),
        "big_road": wrap_columns(snapshot.big_road, config.rows, config.display_columns),
    }
    for road_type, columns in snapshot.derived_roads.items():
        grids[road_type.value] = wrap_columns(columns, config.rows, config.display_columns)
    return grids


def render_text(grid: DisplayGrid, symbol: Callable[[Any], str], blank: str = ".") -> str:
    """
    Render a display grid as text, one line per row.

    Args:
        grid: Display columns
        symbol: Maps a cell to a single display character
        blank: Character for empty slots
    """
    if not grid:
        return ""
    rows = len(grid[0])
    lines = []
    for row in range(rows):
        lines.append(
            "".join(blank if column[row] is None else symbol(column[row]) for column in grid)
        )
    return "\n".join(lines)
