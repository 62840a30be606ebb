"""
Dungeon Layout Algorithm
========================

We grow the dungeon with "walkers" that step outward from room to room.

1. Place a start room centred on the origin.
2. Pick a random spine direction. The opposite side of the start room gets
   a short entrance corridor with a door on it.
3. Start one walker (the spine) at the start room, heading along the spine
   direction with a budget of max(2, ceil(room_count / 4)) steps.
4. Round-robin over the live walkers. Each step tries to place a new room
   a fixed corridor length away in the walker's direction:
   a. If it fits, lay a straight corridor between the facing edges, put a
      door on the corridor cell next to the new room and suppress the
      walls at both ends of the corridor.
   b. A successful step may spawn a perpendicular branch walker (and its
      mirror image when symmetry is on), and a branch may turn a corner.
   c. A failed step turns the walker; repeated failures kill it.
5. Stop when enough rooms are placed, every walker is dead, or the attempt
   budget of room_count * 40 is spent. Falling short is not an error.
6. Add extra corridors between nearby rooms to create loops (see loops.py).
"""

import math
from dataclasses import dataclass, field, fields
from typing import Callable, Dict, FrozenSet, List, Mapping, Optional, Sequence, Set, TypeVar, Union

from .geometry import ALL_DIRECTIONS, MIN_ROOM_SIZE, Cell, Direction, Room
from .loops import create_loops

T = TypeVar("T")

# Any callable returning floats in [0, 1), e.g. a SeededRandom.
RandomSource = Callable[[], float]

ENTRANCE_LENGTH = 3
# A walker dies on this many placement failures in a row.
MAX_PLACEMENT_FAILURES = 3
ATTEMPTS_PER_ROOM = 40


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return math.floor(value + 0.5)


def _choose(rng: RandomSource, options: Sequence[T]) -> T:
    return options[int(rng() * len(options))]


def _check_ratio(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number in [0, 1], got {value!r}")
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {value}")


@dataclass(frozen=True)
class LayoutParams:
    """Validated inputs to generate_layout()."""

    room_count: int = 10
    density: float = 0.8
    # 1 - branching. Higher linearity means fewer, shorter branches.
    linearity: float = 0.5
    room_size_bias: float = 0.5
    symmetry: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.room_count, bool) or not isinstance(self.room_count, int):
            raise ValueError(f"room_count must be an integer, got {self.room_count!r}")
        if self.room_count < 1:
            raise ValueError(f"room_count must be at least 1, got {self.room_count}")
        _check_ratio("density", self.density)
        _check_ratio("linearity", self.linearity)
        _check_ratio("room_size_bias", self.room_size_bias)
        if not isinstance(self.symmetry, bool):
            raise ValueError(f"symmetry must be a bool, got {self.symmetry!r}")

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> "LayoutParams":
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown layout parameters: {', '.join(sorted(unknown))}")
        return cls(**values)  # type: ignore[arg-type]

    @property
    def spacing(self) -> int:
        """Minimum number of empty cells kept between any two rooms."""
        return max(0, round_half_up(4 * (1 - self.density)))

    @property
    def min_room_size(self) -> int:
        return MIN_ROOM_SIZE

    @property
    def max_room_size(self) -> int:
        return 5 + round_half_up(3 * self.room_size_bias)

    @property
    def corridor_length(self) -> int:
        """Empty cells between a room and the next room a walker places."""
        return 2 + self.spacing

    @property
    def spine_length(self) -> int:
        return max(2, math.ceil(self.room_count / 4))

    @property
    def branch_length_cap(self) -> int:
        return max(2, math.ceil(self.room_count / 5))

    @property
    def max_attempts(self) -> int:
        return self.room_count * ATTEMPTS_PER_ROOM


@dataclass(frozen=True)
class DoorPlacement:
    """A door in cell (x, y); direction is the way the corridor was heading."""

    x: int
    y: int
    direction: Direction


@dataclass(frozen=True)
class EntranceEdge:
    """Side `direction` of cell (x, y) must not get a wall."""

    x: int
    y: int
    direction: Direction

    @property
    def cell(self) -> Cell:
        return (self.x, self.y)


@dataclass(frozen=True)
class RoomRecord:
    room: Room
    is_start: bool


@dataclass
class Walker:
    """Generation-time state of one spine or branch walker."""

    current_room: Room
    room_index: int
    direction: Direction
    remaining: int
    depth: int
    fail_count: int = 0
    is_dead: bool = False

    @property
    def is_branch(self) -> bool:
        return self.depth > 0


@dataclass
class Layout:
    """
    The generated dungeon, in grid coordinates.

    floors holds every walkable cell (rooms and corridors); corridors is the
    subset laid as corridor. rooms[0] is always the start room.
    """

    floors: Set[Cell]
    corridors: Set[Cell]
    rooms: List[Room]
    doors: List[DoorPlacement]
    entrance_edges: List[EntranceEdge]
    room_data: List[RoomRecord]
    spacing: int
    requested_rooms: int
    adjacency: Dict[int, FrozenSet[int]] = field(default_factory=dict)
    loops_created: int = 0

    @property
    def start_room(self) -> Room:
        return self.rooms[0]

    @property
    def is_complete(self) -> bool:
        """False when placement ran out of attempts before room_count rooms."""
        return len(self.rooms) >= self.requested_rooms


class LayoutBuilder:
    """
    Owns the floor, corridor, door and entrance-edge state of one layout.

    generate_layout() drives the walkers; the builder does the actual
    placement and bookkeeping so no callbacks need to be passed around.
    """

    def __init__(self, params: LayoutParams, rng: RandomSource) -> None:
        self.params = params
        self.rng = rng
        self._floors: Set[Cell] = set()
        self._corridors: Set[Cell] = set()
        self._rooms: List[Room] = []
        self._doors: List[DoorPlacement] = []
        self._entrance_edges: List[EntranceEdge] = []
        self._room_data: List[RoomRecord] = []
        self._adjacency: Dict[int, Set[int]] = {}

    @property
    def spacing(self) -> int:
        return self.params.spacing

    @property
    def rooms(self) -> Sequence[Room]:
        return tuple(self._rooms)

    @property
    def room_count(self) -> int:
        return len(self._rooms)

    @property
    def floors(self) -> FrozenSet[Cell]:
        return frozenset(self._floors)

    @property
    def doors(self) -> Sequence[DoorPlacement]:
        return tuple(self._doors)

    def random_room_size(self) -> int:
        lo = self.params.min_room_size
        hi = self.params.max_room_size
        return lo + int(self.rng() * (hi - lo + 1))

    def can_place(self, room: Room) -> bool:
        """True if room keeps at least `spacing` cells from every placed room."""
        return not any(room.intersects(existing, self.spacing) for existing in self._rooms)

    def add_room(self, room: Room, is_start: bool = False) -> int:
        """Register a room and its floor cells. Returns the room's index."""
        self._rooms.append(room)
        self._floors.update(room.cells())
        self._room_data.append(RoomRecord(room=room, is_start=is_start))
        return len(self._rooms) - 1

    def lay_corridor(self, start: Cell, end: Cell) -> List[Cell]:
        """
        Lay corridor cells from start to end, both inclusive.

        Walks along x first, then y; callers only ask for straight runs.
        """
        x, y = start
        x2, y2 = end
        ddx = (x2 > x) - (x2 < x)
        ddy = (y2 > y) - (y2 < y)
        tiles: List[Cell] = []
        while (x, y) != (x2, y2):
            tiles.append((x, y))
            if x != x2:
                x += ddx
            else:
                y += ddy
        tiles.append((x2, y2))
        self._corridors.update(tiles)
        self._floors.update(tiles)
        return tiles

    def mark_junction(self, room: Room, side: Direction, lane: Optional[int] = None) -> None:
        """
        Suppress the wall where a corridor leaves `room` through `side`.

        Marks both faces of the junction: the room's edge cell and the
        corridor cell just outside it.
        """
        inside = room.edge_cell(side, lane)
        outside = room.exit_cell(side, lane)
        self._entrance_edges.append(EntranceEdge(inside[0], inside[1], side))
        self._entrance_edges.append(EntranceEdge(outside[0], outside[1], side.opposite()))

    def add_door(self, cell: Cell, direction: Direction) -> None:
        self._doors.append(DoorPlacement(cell[0], cell[1], direction))

    def connect(self, a: int, b: int) -> None:
        self._adjacency.setdefault(a, set()).add(b)
        self._adjacency.setdefault(b, set()).add(a)

    def are_adjacent(self, a: int, b: int) -> bool:
        return b in self._adjacency.get(a, ())

    def place_start_room(self) -> Room:
        w = self.random_room_size()
        h = self.random_room_size()
        room = Room(-(w // 2), -(h // 2), w, h)
        self.add_room(room, is_start=True)
        return room

    def place_entrance(self, direction: Direction) -> None:
        """Lay the entrance stub out of the start room's `direction` side."""
        start_room = self._rooms[0]
        ex, ey = start_room.exit_cell(direction)
        dx, dy = direction.step()
        last = (ex + dx * (ENTRANCE_LENGTH - 1), ey + dy * (ENTRANCE_LENGTH - 1))
        self.lay_corridor((ex, ey), last)
        self.mark_junction(start_room, direction)
        self.add_door((ex, ey), direction)

    def place_next_room(self, walker: Walker) -> Optional[Room]:
        """
        Try to place one room in front of the walker.

        The new room has a freshly rolled size, sits corridor_length cells
        beyond the walker's current room and is centred on its centre line.
        Returns the new room, or None if it would crowd an existing room.
        Does not touch the walker.
        """
        rw = self.random_room_size()
        rh = self.random_room_size()
        gap = self.params.corridor_length
        current = walker.current_room
        direction = walker.direction

        if direction == Direction.NORTH:
            nx, ny = current.cx - rw // 2, current.top - gap - rh
        elif direction == Direction.SOUTH:
            nx, ny = current.cx - rw // 2, current.bottom + gap
        elif direction == Direction.EAST:
            nx, ny = current.right + gap, current.cy - rh // 2
        else:
            nx, ny = current.left - gap - rw, current.cy - rh // 2

        new_room = Room(nx, ny, rw, rh)
        if not self.can_place(new_room):
            return None

        self.add_room(new_room)
        lane = current.cy if direction.is_horizontal else current.cx
        corridor_start = current.exit_cell(direction, lane)
        corridor_end = new_room.exit_cell(direction.opposite(), lane)
        self.lay_corridor(corridor_start, corridor_end)
        self.add_door(corridor_end, direction)
        self.mark_junction(current, direction, lane)
        self.mark_junction(new_room, direction.opposite(), lane)
        return new_room

    def build(self, loops_created: int = 0) -> Layout:
        return Layout(
            floors=self._floors,
            corridors=self._corridors,
            rooms=list(self._rooms),
            doors=list(self._doors),
            entrance_edges=list(self._entrance_edges),
            room_data=list(self._room_data),
            spacing=self.spacing,
            requested_rooms=self.params.room_count,
            adjacency={k: frozenset(v) for k, v in self._adjacency.items()},
            loops_created=loops_created,
        )


def _next_live_walker(walkers: List[Walker], cursor: int) -> Optional[int]:
    """Index of the first live walker at or after cursor, wrapping around."""
    for offset in range(len(walkers)):
        idx = (cursor + offset) % len(walkers)
        if not walkers[idx].is_dead:
            return idx
    return None


def _after_success(
    builder: LayoutBuilder,
    walkers: List[Walker],
    walker: Walker,
    new_room: Room,
    new_index: int,
) -> None:
    params = builder.params
    rng = builder.rng
    branchiness = 1 - params.linearity

    # Branch likelihood decays with depth but never below a quarter.
    branch_chance = branchiness * max(0.25, 1.0 - walker.depth * 0.1)
    if builder.room_count < params.room_count and rng() < branch_chance:
        branch_dir = _choose(rng, walker.direction.perpendicular())
        branch_len = 1 + int(rng() * params.branch_length_cap)
        walkers.append(Walker(new_room, new_index, branch_dir, branch_len, walker.depth + 1))
        if params.symmetry and builder.room_count + 2 < params.room_count:
            walkers.append(
                Walker(new_room, new_index, branch_dir.opposite(), branch_len, walker.depth + 1)
            )

    if walker.is_branch and walker.remaining > 0 and rng() < branchiness * 0.4:
        walker.direction = _choose(rng, walker.direction.perpendicular())


def _after_failure(rng: RandomSource, walker: Walker) -> None:
    walker.fail_count += 1
    if walker.fail_count < MAX_PLACEMENT_FAILURES:
        walker.direction = _choose(rng, walker.direction.perpendicular())
    else:
        walker.is_dead = True


def _run_walkers(builder: LayoutBuilder, walkers: List[Walker]) -> None:
    """
    Round-robin the walkers until the room quota, the attempt budget or the
    walkers run out. Mutates `walkers`; branch walkers are appended to it.
    """
    params = builder.params
    cursor = 0
    attempts = 0

    while builder.room_count < params.room_count and attempts < params.max_attempts:
        attempts += 1

        idx = _next_live_walker(walkers, cursor)
        if idx is None:
            break
        walker = walkers[idx]
        cursor = (idx + 1) % len(walkers)

        if walker.remaining <= 0:
            walker.is_dead = True
            continue

        new_room = builder.place_next_room(walker)
        if new_room is None:
            _after_failure(builder.rng, walker)
            continue

        new_index = builder.room_count - 1
        builder.connect(walker.room_index, new_index)
        walker.current_room = new_room
        walker.room_index = new_index
        walker.remaining -= 1
        walker.fail_count = 0

        _after_success(builder, walkers, walker, new_room, new_index)


def generate_layout(
    params: Union[LayoutParams, Mapping[str, object]],
    rng: RandomSource,
) -> Layout:
    """
    Generates a dungeon layout with the walker algorithm at the top of this file.

    Parameters:
        params: LayoutParams, or a mapping of its field names. Invalid values
                raise ValueError before any random numbers are drawn.
        rng: Callable returning floats in [0, 1). Use a fresh SeededRandom
             per call; the layout is a pure function of params and rng.

    Returns:
        The Layout. It may hold fewer rooms than requested when placement
        runs out of room (see Layout.is_complete).
    """
    if not isinstance(params, LayoutParams):
        params = LayoutParams.from_mapping(params)

    builder = LayoutBuilder(params, rng)
    start_room = builder.place_start_room()

    spine_dir = _choose(rng, ALL_DIRECTIONS)
    builder.place_entrance(spine_dir.opposite())

    _run_walkers(builder, [Walker(start_room, 0, spine_dir, params.spine_length, depth=0)])

    loops_created = create_loops(builder, params.linearity)
    return builder.build(loops_created)
