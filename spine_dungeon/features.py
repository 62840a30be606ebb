"""Stair placement inside generated rooms."""

from dataclasses import dataclass
from typing import List, Sequence

from .layout import RoomRecord
from .rng import SeededRandom


@dataclass(frozen=True)
class StairPlacement:
    x: int
    y: int
    going_down: bool


def check_stair_counts(up: int, down: int, room_count: int) -> None:
    """Stairs go one per room and never in the start room."""
    if up < 0 or down < 0:
        raise ValueError(f"Stair counts must be non-negative, got up={up} down={down}")
    if up + down > room_count - 1:
        raise ValueError(
            f"Too many stairs ({up + down}) for {room_count} rooms; "
            f"at most {room_count - 1} fit outside the start room"
        )


def place_stairs(
    room_data: Sequence[RoomRecord],
    up: int,
    down: int,
    rng: SeededRandom,
) -> List[StairPlacement]:
    """
    Put up and down staircases into randomly chosen rooms.

    The non-start rooms are shuffled, then each staircase takes the next
    room and a random cell of its interior (the room minus its outer ring
    of cells). Rooms with no interior are passed over. Up staircases are
    placed first. If there are fewer usable rooms than staircases, the
    rest are dropped.
    """
    if up < 0 or down < 0:
        raise ValueError(f"Stair counts must be non-negative, got up={up} down={down}")

    candidates = [record.room for record in room_data if not record.is_start]
    rng.shuffle(candidates)

    placements: List[StairPlacement] = []
    pending = [False] * up + [True] * down
    rooms = iter(candidates)

    for going_down in pending:
        for room in rooms:
            interior_w = room.w - 2
            interior_h = room.h - 2
            if interior_w < 1 or interior_h < 1:
                continue
            sx = room.left + 1 + rng.randint_below(interior_w)
            sy = room.top + 1 + rng.randint_below(interior_h)
            placements.append(StairPlacement(sx, sy, going_down))
            break
        else:
            break

    return placements
