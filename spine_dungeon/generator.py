"""
Full dungeon generation: layout plus everything a renderer needs.
"""

import math
import sys
from dataclasses import dataclass, field
from typing import AbstractSet, List, Optional

from .features import StairPlacement, check_stair_counts, place_stairs
from .geometry import Cell
from .layout import Layout, LayoutParams, generate_layout
from .rng import Seed, seed_rng
from .wall_visuals import DEFAULT_WALL_COLOR, WallRect, WallVisualStyle, generate_wall_visuals
from .walls import DEFAULT_GRID_SIZE, Offset, WallSegment, generate_doors, generate_walls


@dataclass
class DungeonSettings:
    """Caller-facing knobs, in the terms a user picks them."""

    rooms: int = 10
    density: float = 0.8
    branching: float = 0.5
    room_size: float = 0.5
    symmetry: bool = True
    stairs: int = 1
    stairs_down: int = 1
    use_texture: bool = False
    wall_color: str = DEFAULT_WALL_COLOR
    thickness: float = 20
    texture_path: Optional[str] = None
    grid_size: float = DEFAULT_GRID_SIZE
    # Pixels of empty scene around the dungeon.
    padding: float = 300

    def __post_init__(self) -> None:
        if self.grid_size <= 0:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")
        if self.padding < 0:
            raise ValueError(f"padding cannot be negative, got {self.padding}")
        if self.thickness <= 0:
            raise ValueError(f"Wall thickness must be positive, got {self.thickness}")

    def layout_params(self) -> LayoutParams:
        if not 0.0 <= self.branching <= 1.0:
            raise ValueError(f"branching must be in [0, 1], got {self.branching}")
        return LayoutParams(
            room_count=self.rooms,
            density=self.density,
            linearity=1 - self.branching,
            room_size_bias=self.room_size,
            symmetry=self.symmetry,
        )

    def wall_style(self) -> WallVisualStyle:
        return WallVisualStyle(
            use_texture=self.use_texture,
            wall_color=self.wall_color,
            thickness=self.thickness,
            texture_path=self.texture_path,
        )


@dataclass(frozen=True)
class SceneFit:
    """Grid offset that places the dungeon `padding` pixels in, and the scene size."""

    offset: Offset
    width: float
    height: float


def fit_to_content(floors: AbstractSet[Cell], grid_size: float, padding: float) -> SceneFit:
    """
    Size a scene around the floor cells.

    The offset moves the top-left floor cell ceil(padding / grid_size)
    cells in from the scene origin.
    """
    pad_cells = math.ceil(padding / grid_size)
    if not floors:
        return SceneFit(offset=(pad_cells, pad_cells), width=padding * 2, height=padding * 2)

    min_x = min(x for x, _ in floors)
    min_y = min(y for _, y in floors)
    max_x = max(x for x, _ in floors) + 1
    max_y = max(y for _, y in floors) + 1

    return SceneFit(
        offset=(-min_x + pad_cells, -min_y + pad_cells),
        width=(max_x - min_x) * grid_size + padding * 2,
        height=(max_y - min_y) * grid_size + padding * 2,
    )


@dataclass
class GeneratedDungeon:
    seed: Seed
    settings: DungeonSettings
    layout: Layout
    fit: SceneFit
    walls: List[WallSegment] = field(default_factory=list)
    doors: List[WallSegment] = field(default_factory=list)
    wall_visuals: List[WallRect] = field(default_factory=list)
    stairs: List[StairPlacement] = field(default_factory=list)


def generate_dungeon(settings: DungeonSettings, seed: Seed) -> GeneratedDungeon:
    """
    Generates a dungeon and all of its renderer-facing geometry.

    One SeededRandom drives the layout and then the stair placement, so the
    result is a pure function of (settings, seed).

    Parameters:
        settings: Generation and styling settings
        seed: String or integer seed

    Returns:
        A GeneratedDungeon with walls, doors and wall visuals in pixels
    """
    params = settings.layout_params()
    check_stair_counts(settings.stairs, settings.stairs_down, params.room_count)

    rng = seed_rng(seed)
    layout = generate_layout(params, rng)
    if not layout.is_complete:
        print(
            f"Warning: placed {len(layout.rooms)} of {params.room_count} rooms (seed {seed!r})",
            file=sys.stderr,
        )

    fit = fit_to_content(layout.floors, settings.grid_size, settings.padding)
    walls = generate_walls(
        layout.floors, fit.offset, layout.entrance_edges, settings.thickness, settings.grid_size
    )
    doors = generate_doors(layout.doors, fit.offset, settings.thickness, settings.grid_size)
    visuals = generate_wall_visuals(
        layout.floors, fit.offset, settings.wall_style(), layout.entrance_edges, settings.grid_size
    )
    stairs = place_stairs(layout.room_data, settings.stairs, settings.stairs_down, rng)

    return GeneratedDungeon(
        seed=seed,
        settings=settings,
        layout=layout,
        fit=fit,
        walls=walls,
        doors=doors,
        wall_visuals=visuals,
        stairs=stairs,
    )
