"""
Logical wall segments for a layout.

Walls are emitted per exposed tile edge, pushed outward by the wall
thickness and mitred at corners using the neighbouring cells. Output is in
pixels: a grid cell (gx, gy) covers ((gx + ox) * grid_size, (gy + oy) *
grid_size) to one grid_size further along each axis.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import AbstractSet, Dict, Iterable, List, Tuple

from .geometry import ALL_DIRECTIONS, Cell, Direction
from .layout import DoorPlacement, EntranceEdge

DEFAULT_GRID_SIZE = 100

# Grid offset added to every cell before scaling to pixels.
Offset = Tuple[float, float]

# Corners of a cell's side as (start, end) in cell units.
# Start is the west/north end, end is the east/south end.
_SIDE_CORNERS: Dict[Direction, Tuple[Tuple[int, int], Tuple[int, int]]] = {
    Direction.NORTH: ((0, 0), (1, 0)),
    Direction.SOUTH: ((0, 1), (1, 1)),
    Direction.EAST: ((1, 0), (1, 1)),
    Direction.WEST: ((0, 0), (0, 1)),
}


class WallKind(Enum):
    SOLID = auto()
    DOOR = auto()


@dataclass(frozen=True)
class WallSegment:
    """A wall line from (x1, y1) to (x2, y2) in pixels."""

    x1: float
    y1: float
    x2: float
    y2: float
    kind: WallKind = WallKind.SOLID

    @property
    def coords(self) -> Tuple[float, float, float, float]:
        return (self.x1, self.y1, self.x2, self.y2)

    @property
    def is_horizontal(self) -> bool:
        return self.y1 == self.y2

    @property
    def blocks_movement(self) -> bool:
        # Doors are placed closed.
        return True

    @property
    def blocks_sight(self) -> bool:
        return True


def entrance_edge_set(entrance_edges: Iterable[EntranceEdge]) -> AbstractSet[EntranceEdge]:
    if isinstance(entrance_edges, (set, frozenset)):
        return entrance_edges
    return frozenset(entrance_edges)


def _flank_adjustment(
    floors: AbstractSet[Cell], cell: Cell, side: Direction, along: Cell
) -> int:
    """
    Corner correction for one end of a wall on `side` of `cell`.

    `along` points from the cell towards that end of the wall.
    Returns 1 to extend the end (outside corner: the next cell along the
    wall is not floor) or -1 to pull it back (inside corner: the cell
    diagonally across the wall is floor), else 0.
    """
    gx, gy = cell
    dx, dy = side.step()
    ax, ay = along
    source_flank = (gx + ax, gy + ay)
    void_flank = (gx + dx + ax, gy + dy + ay)
    if source_flank not in floors:
        return 1
    if void_flank in floors:
        return -1
    return 0


def generate_walls(
    floors: AbstractSet[Cell],
    offset: Offset,
    entrance_edges: Iterable[EntranceEdge],
    thickness: float,
    grid_size: float = DEFAULT_GRID_SIZE,
) -> List[WallSegment]:
    """
    Builds a wall segment for every floor tile side that faces non-floor.

    Sides listed in entrance_edges are skipped. An empty floor set gives an
    empty list.

    Args:
        floors: Walkable grid cells
        offset: Grid offset (ox, oy) applied before scaling to pixels
        entrance_edges: Tile sides where walls are suppressed
        thickness: Outward wall offset, in pixels
        grid_size: Pixel size of one grid cell

    Returns:
        SOLID wall segments, one per exposed tile side
    """
    suppressed = entrance_edge_set(entrance_edges)
    ox, oy = offset
    walls: List[WallSegment] = []

    for gx, gy in sorted(floors):
        px = (gx + ox) * grid_size
        py = (gy + oy) * grid_size

        for side in ALL_DIRECTIONS:
            if EntranceEdge(gx, gy, side) in suppressed:
                continue
            dx, dy = side.step()
            if (gx + dx, gy + dy) in floors:
                continue

            (ax, ay), (bx, by) = _SIDE_CORNERS[side]
            x1 = px + ax * grid_size + dx * thickness
            y1 = py + ay * grid_size + dy * thickness
            x2 = px + bx * grid_size + dx * thickness
            y2 = py + by * grid_size + dy * thickness

            if side.is_horizontal:
                start_along, end_along = (0, -1), (0, 1)
            else:
                start_along, end_along = (-1, 0), (1, 0)

            start_mod = _flank_adjustment(floors, (gx, gy), side, start_along)
            end_mod = _flank_adjustment(floors, (gx, gy), side, end_along)

            if side.is_horizontal:
                y1 -= thickness * start_mod
                y2 += thickness * end_mod
            else:
                x1 -= thickness * start_mod
                x2 += thickness * end_mod

            walls.append(WallSegment(x1, y1, x2, y2))

    return walls


def generate_doors(
    doors: Iterable[DoorPlacement],
    offset: Offset,
    thickness: float,
    grid_size: float = DEFAULT_GRID_SIZE,
) -> List[WallSegment]:
    """
    Builds a door segment across the middle of each door cell.

    Doors in corridors heading north/south run horizontally, east/west ones
    vertically. Each door gets two SOLID filler segments, `thickness` long,
    continuing the door line past both ends so it meets the offset walls.
    """
    ox, oy = offset
    segments: List[WallSegment] = []
    half = grid_size / 2

    for door in doors:
        px = (door.x + ox) * grid_size
        py = (door.y + oy) * grid_size

        if door.direction.is_horizontal:
            x1, y1, x2, y2 = px + half, py, px + half, py + grid_size
            segments.append(WallSegment(x1, y1, x2, y2, WallKind.DOOR))
            segments.append(WallSegment(x1, y1 - thickness, x1, y1))
            segments.append(WallSegment(x2, y2, x2, y2 + thickness))
        else:
            x1, y1, x2, y2 = px, py + half, px + grid_size, py + half
            segments.append(WallSegment(x1, y1, x2, y2, WallKind.DOOR))
            segments.append(WallSegment(x1 - thickness, y1, x1, y1))
            segments.append(WallSegment(x2, y2, x2 + thickness, y2))

    return segments
