"""
Loop creation: extra corridors between nearby rooms.

The walkers produce a tree of rooms. This pass adds straight corridors
between rooms that are close together but not yet connected, so the
dungeon gets alternate routes. Candidates are tried nearest first and
accepted greedily; a corridor that would cut through a third room is
skipped. Nothing already placed is moved or removed.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence

from .geometry import Cell, Direction, Room, manhattan_distance

if TYPE_CHECKING:
    from .layout import LayoutBuilder

# At or above this linearity the layout stays a tree.
LOOP_LINEARITY_CUTOFF = 0.9
MIN_ROOMS_FOR_LOOPS = 4


@dataclass(frozen=True)
class LoopCandidate:
    i: int
    j: int
    distance: int


@dataclass(frozen=True)
class LoopRoute:
    """A straight corridor from room i's exit cell to room j's entry cell."""

    direction: Direction
    lane: int
    exit: Cell
    entry: Cell

    def cells(self) -> List[Cell]:
        dx, dy = self.direction.step()
        x, y = self.exit
        path = [(x, y)]
        while (x, y) != self.entry:
            x += dx
            y += dy
            path.append((x, y))
        return path


def loop_budget(room_count: int, linearity: float) -> int:
    return max(1, int(room_count * (1 - linearity) * 0.3))


def find_loop_candidates(
    rooms: Sequence[Room],
    are_adjacent: Callable[[int, int], bool],
    spacing: int,
) -> List[LoopCandidate]:
    """
    Unconnected room pairs that are near each other, closest first.

    A pair qualifies when its centre distance is above the largest side of
    either room and below five times that plus four times the spacing.
    """
    candidates: List[LoopCandidate] = []
    for i in range(len(rooms)):
        for j in range(i + 1, len(rooms)):
            if are_adjacent(i, j):
                continue
            a, b = rooms[i], rooms[j]
            distance = manhattan_distance(a, b)
            max_dim = max(a.w, a.h, b.w, b.h)
            if max_dim < distance < max_dim * 5 + spacing * 4:
                candidates.append(LoopCandidate(i, j, distance))
    # sort() is stable, so ties stay in (i, j) order.
    candidates.sort(key=lambda c: c.distance)
    return candidates


def plan_loop_route(rooms: Sequence[Room], i: int, j: int) -> Optional[LoopRoute]:
    """
    Work out a straight corridor joining rooms i and j, or None.

    The corridor runs along room i's centre line on whichever axis has the
    larger centre-to-centre delta. It is rejected if room j does not reach
    that line, if the rooms leave no gap along it, or if the corridor would
    pass through any other room.
    """
    room_a, room_b = rooms[i], rooms[j]
    dx = room_b.cx - room_a.cx
    dy = room_b.cy - room_a.cy

    if abs(dx) >= abs(dy):
        direction = Direction.EAST if dx > 0 else Direction.WEST
        lane = room_a.cy
    else:
        direction = Direction.SOUTH if dy > 0 else Direction.NORTH
        lane = room_a.cx

    if not room_b.spans_lane(direction.opposite(), lane):
        return None

    exit_cell = room_a.exit_cell(direction, lane)
    entry_cell = room_b.exit_cell(direction.opposite(), lane)
    step_x, step_y = direction.step()
    # Signed number of steps from exit to entry; must run forward, at least one step.
    run = (entry_cell[0] - exit_cell[0]) * step_x + (entry_cell[1] - exit_cell[1]) * step_y
    if run < 1:
        return None

    route = LoopRoute(direction=direction, lane=lane, exit=exit_cell, entry=entry_cell)
    for cell in route.cells():
        for k, other in enumerate(rooms):
            if k != i and k != j and other.contains(cell):
                return None
    return route


def create_loops(builder: "LayoutBuilder", linearity: float) -> int:
    """
    Add loop corridors to a layout under construction.

    Does nothing when linearity >= 0.9 or fewer than 4 rooms were placed.
    Pairs that plan_loop_route() rejects are skipped: the far room must
    reach the near room's centre line and leave at least one cell of gap,
    so every loop corridor runs forward between two facing walls and never
    ends in open space.

    Returns:
        The number of loop corridors added.
    """
    rooms = builder.rooms
    if linearity >= LOOP_LINEARITY_CUTOFF or len(rooms) < MIN_ROOMS_FOR_LOOPS:
        return 0

    budget = loop_budget(len(rooms), linearity)
    created = 0

    for candidate in find_loop_candidates(rooms, builder.are_adjacent, builder.spacing):
        if created >= budget:
            break

        route = plan_loop_route(rooms, candidate.i, candidate.j)
        if route is None:
            continue

        room_a, room_b = rooms[candidate.i], rooms[candidate.j]
        builder.lay_corridor(route.exit, route.entry)
        builder.mark_junction(room_a, route.direction, route.lane)
        builder.mark_junction(room_b, route.direction.opposite(), route.lane)
        # The exit cell is outside both rooms.
        builder.add_door(route.exit, route.direction)
        builder.connect(candidate.i, candidate.j)
        created += 1

    return created
