"""
Reachability checks over a layout's floor cells.
"""

from collections import deque
from typing import AbstractSet, List, Set, Tuple

from .geometry import Cell
from .layout import Layout

# 4-directional neighbours: North, South, West, East
_NEIGHBOURS: Tuple[Cell, ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))


def flood_fill(floors: AbstractSet[Cell], start: Cell) -> Set[Cell]:
    """
    All floor cells reachable from start by 4-connected steps.

    Returns an empty set if start is not a floor cell.
    """
    if start not in floors:
        return set()

    visited: Set[Cell] = {start}
    queue: deque[Cell] = deque([start])

    while queue:
        x, y = queue.popleft()
        for dx, dy in _NEIGHBOURS:
            neighbour = (x + dx, y + dy)
            if neighbour in floors and neighbour not in visited:
                visited.add(neighbour)
                queue.append(neighbour)

    return visited


def unreachable_rooms(layout: Layout) -> List[int]:
    """Indices of rooms whose centre cannot be reached from the start room."""
    if not layout.rooms:
        return []
    reachable = flood_fill(layout.floors, layout.start_room.center)
    return [
        index
        for index, room in enumerate(layout.rooms)
        if room.center not in reachable
    ]
