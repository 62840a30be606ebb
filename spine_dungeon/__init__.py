"""Procedural dungeon layout generation and wall geometry."""

from spine_dungeon.rng import SeededRandom, seed_rng, generate_random_seed
from spine_dungeon.geometry import Cell, Direction, Room
from spine_dungeon.layout import (
    DoorPlacement,
    EntranceEdge,
    Layout,
    LayoutBuilder,
    LayoutParams,
    RoomRecord,
    Walker,
    generate_layout,
)
from spine_dungeon.loops import create_loops
from spine_dungeon.walls import WallKind, WallSegment, generate_walls, generate_doors
from spine_dungeon.wall_visuals import (
    WallRect,
    WallRun,
    WallVisualStyle,
    generate_wall_visuals,
    merge_wall_runs,
)
from spine_dungeon.features import StairPlacement, place_stairs
from spine_dungeon.connectivity import flood_fill, unreachable_rooms
from spine_dungeon.raster import Tile, rasterize, render_ascii
from spine_dungeon.generator import (
    DungeonSettings,
    GeneratedDungeon,
    SceneFit,
    fit_to_content,
    generate_dungeon,
)
