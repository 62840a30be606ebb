"""
Grid geometry: cardinal directions and axis-aligned rooms.

Everything here is in grid cells; y grows southward.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

# A grid cell (x, y). Grid units, not pixels.
Cell = Tuple[int, int]

MIN_ROOM_SIZE = 3


class Direction(Enum):
    """Cardinal directions for walkers, doors and wall sides."""

    NORTH = "N"
    SOUTH = "S"
    EAST = "E"
    WEST = "W"

    def opposite(self) -> "Direction":
        """Returns the opposite direction."""
        opposites = {
            Direction.NORTH: Direction.SOUTH,
            Direction.SOUTH: Direction.NORTH,
            Direction.EAST: Direction.WEST,
            Direction.WEST: Direction.EAST,
        }
        return opposites[self]

    def step(self) -> Cell:
        """Returns the (dx, dy) offset for moving one cell in this direction."""
        steps = {
            Direction.NORTH: (0, -1),
            Direction.SOUTH: (0, 1),
            Direction.EAST: (1, 0),
            Direction.WEST: (-1, 0),
        }
        return steps[self]

    def perpendicular(self) -> Tuple["Direction", "Direction"]:
        """The two directions at right angles to this one."""
        if self.is_horizontal:
            return (Direction.NORTH, Direction.SOUTH)
        return (Direction.EAST, Direction.WEST)

    @property
    def is_horizontal(self) -> bool:
        """True for EAST/WEST, i.e. movement along the x axis."""
        return self in (Direction.EAST, Direction.WEST)


# Fixed order used whenever a direction is drawn at random.
ALL_DIRECTIONS: Tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.SOUTH,
    Direction.EAST,
    Direction.WEST,
)


@dataclass(frozen=True)
class Room:
    """
    An axis-aligned rectangle of floor cells.

    (x, y) is the top-left cell; the room covers x <= gx < x + w and
    y <= gy < y + h. right/bottom are exclusive edges.
    """

    x: int
    y: int
    w: int
    h: int

    @property
    def left(self) -> int:
        return self.x

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def top(self) -> int:
        return self.y

    @property
    def bottom(self) -> int:
        return self.y + self.h

    @property
    def cx(self) -> int:
        return self.x + self.w // 2

    @property
    def cy(self) -> int:
        return self.y + self.h // 2

    @property
    def center(self) -> Cell:
        return (self.cx, self.cy)

    def intersects(self, other: "Room", margin: int = 0) -> bool:
        """
        Separating-axis overlap test with both rectangles inflated by margin.

        With margin=0, rooms that merely share an edge do not intersect.
        With margin=n, rooms closer than n empty cells apart do.
        """
        return not (
            self.right + margin <= other.left
            or other.right + margin <= self.left
            or self.bottom + margin <= other.top
            or other.bottom + margin <= self.top
        )

    def contains(self, cell: Cell) -> bool:
        gx, gy = cell
        return self.left <= gx < self.right and self.top <= gy < self.bottom

    def spans_lane(self, side: Direction, lane: int) -> bool:
        """True if a corridor along `lane` can meet this room's `side` wall."""
        if side.is_horizontal:
            return self.top <= lane < self.bottom
        return self.left <= lane < self.right

    def _lane(self, side: Direction, lane: Optional[int]) -> int:
        if lane is not None:
            return lane
        return self.cy if side.is_horizontal else self.cx

    def edge_cell(self, side: Direction, lane: Optional[int] = None) -> Cell:
        """
        The room's own cell on `side`, in row/column `lane`.

        lane defaults to the room's centre line.
        """
        lane = self._lane(side, lane)
        if side == Direction.NORTH:
            return (lane, self.top)
        if side == Direction.SOUTH:
            return (lane, self.bottom - 1)
        if side == Direction.EAST:
            return (self.right - 1, lane)
        return (self.left, lane)

    def exit_cell(self, side: Direction, lane: Optional[int] = None) -> Cell:
        """The cell just outside the room on `side`, next to edge_cell()."""
        gx, gy = self.edge_cell(side, lane)
        dx, dy = side.step()
        return (gx + dx, gy + dy)

    def cells(self) -> Iterator[Cell]:
        """All floor cells of the room, column by column."""
        for gx in range(self.left, self.right):
            for gy in range(self.top, self.bottom):
                yield (gx, gy)


def manhattan_distance(a: Room, b: Room) -> int:
    """Taxicab distance between two room centres."""
    return abs(a.cx - b.cx) + abs(a.cy - b.cy)
