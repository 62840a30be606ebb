"""
Tile-array view of a layout, for debugging and previews.
"""

from enum import IntEnum
from typing import Dict, Iterable, Tuple

import numpy as np

from .features import StairPlacement
from .geometry import Cell
from .layout import Layout

# Type Definition
TileGrid = np.ndarray


class Tile(IntEnum):
    NOTHING = 0
    FLOOR = 1
    CORRIDOR = 2
    DOOR = 3
    STAIRS_UP = 4
    STAIRS_DOWN = 5


TILE_TO_ASCII: Dict[int, str] = {
    Tile.NOTHING: " ",
    Tile.FLOOR: ".",
    Tile.CORRIDOR: ",",
    Tile.DOOR: "+",
    Tile.STAIRS_UP: "<",
    Tile.STAIRS_DOWN: ">",
}


def rasterize(
    layout: Layout,
    stairs: Iterable[StairPlacement] = (),
    padding: int = 1,
) -> Tuple[TileGrid, Cell]:
    """
    Draw a layout into a 2D tile array indexed [row, column] = [y, x].

    The array is cropped to the floor cells plus `padding` empty cells on
    every side.

    Returns: (grid, origin) where origin is the grid cell at grid[0, 0]
    """
    if not layout.floors:
        size = 2 * padding
        return np.zeros((size, size), dtype=int), (0, 0)

    xs = [x for x, _ in layout.floors]
    ys = [y for _, y in layout.floors]
    min_x, min_y = min(xs) - padding, min(ys) - padding
    cols = max(xs) - min_x + 1 + padding
    rows = max(ys) - min_y + 1 + padding

    grid: TileGrid = np.zeros((rows, cols), dtype=int)
    for x, y in layout.floors:
        grid[y - min_y, x - min_x] = Tile.FLOOR
    for x, y in layout.corridors:
        grid[y - min_y, x - min_x] = Tile.CORRIDOR
    for door in layout.doors:
        grid[door.y - min_y, door.x - min_x] = Tile.DOOR
    for stair in stairs:
        tile = Tile.STAIRS_DOWN if stair.going_down else Tile.STAIRS_UP
        grid[stair.y - min_y, stair.x - min_x] = tile

    return grid, (min_x, min_y)


def render_ascii(grid: TileGrid) -> str:
    """Convert a tile grid to an ASCII string, one line per row."""
    lines = []
    for row in grid:
        lines.append("".join(TILE_TO_ASCII.get(int(tile), "?") for tile in row))
    return "\n".join(lines)
