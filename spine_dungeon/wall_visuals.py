"""
Visual wall pieces: exposed tile sides merged into long straight runs.

The runs carry no collision meaning (see walls.py for that). They exist so
a renderer can draw a few long textured strips instead of one per tile.
"""

from dataclasses import dataclass
from typing import AbstractSet, Dict, Iterable, List, Optional, Set

from .geometry import ALL_DIRECTIONS, Cell, Direction
from .layout import EntranceEdge
from .walls import DEFAULT_GRID_SIZE, Offset, entrance_edge_set

DEFAULT_WALL_COLOR = "#5C3D3D"
TEXTURED_FILL_COLOR = "#ffffff"
DEFAULT_HORIZONTAL_TEXTURE = "assets/wall_tiles/stone_brick_horizontal.png"
DEFAULT_VERTICAL_TEXTURE = "assets/wall_tiles/stone_brick_vertical.png"


@dataclass(frozen=True)
class WallVisualStyle:
    use_texture: bool = False
    wall_color: str = DEFAULT_WALL_COLOR
    thickness: float = 20
    # Horizontal texture; the vertical one swaps "horizontal" for "vertical".
    texture_path: Optional[str] = None

    def __post_init__(self) -> None:
        if self.thickness <= 0:
            raise ValueError(f"Wall thickness must be positive, got {self.thickness}")

    @property
    def horizontal_texture(self) -> str:
        return self.texture_path or DEFAULT_HORIZONTAL_TEXTURE

    @property
    def vertical_texture(self) -> str:
        if self.texture_path:
            return self.texture_path.replace("horizontal", "vertical")
        return DEFAULT_VERTICAL_TEXTURE


@dataclass(frozen=True)
class WallRun:
    """
    `length` consecutive exposed sides facing `direction`.

    N/S runs extend east from (gx, gy); E/W runs extend south.
    """

    direction: Direction
    gx: int
    gy: int
    length: int

    def cells(self) -> List[Cell]:
        if self.direction.is_horizontal:
            return [(self.gx, self.gy + k) for k in range(self.length)]
        return [(self.gx + k, self.gy) for k in range(self.length)]


@dataclass(frozen=True)
class WallRect:
    """A filled rectangle in pixels."""

    x: float
    y: float
    width: float
    height: float
    horizontal: bool
    fill_color: str
    texture: Optional[str] = None


def exposed_sides(
    floors: AbstractSet[Cell], entrance_edges: Iterable[EntranceEdge]
) -> Dict[Direction, Set[Cell]]:
    """For each direction, the floor cells whose side that way needs a wall."""
    suppressed = entrance_edge_set(entrance_edges)
    exposed: Dict[Direction, Set[Cell]] = {d: set() for d in ALL_DIRECTIONS}
    for gx, gy in floors:
        for side in ALL_DIRECTIONS:
            dx, dy = side.step()
            if (gx + dx, gy + dy) in floors:
                continue
            if EntranceEdge(gx, gy, side) in suppressed:
                continue
            exposed[side].add((gx, gy))
    return exposed


def merge_wall_runs(
    floors: AbstractSet[Cell], entrance_edges: Iterable[EntranceEdge]
) -> List[WallRun]:
    """
    Greedily merge exposed sides into maximal straight runs.

    N/S sides are scanned row by row and merged eastward; E/W sides column
    by column and merged southward. Merged cells are removed from the pool
    as they are absorbed.
    """
    runs: List[WallRun] = []
    for side, cells in exposed_sides(floors, entrance_edges).items():
        pool = set(cells)
        if side.is_horizontal:
            order = sorted(pool)
            step = (0, 1)
        else:
            order = sorted(pool, key=lambda c: (c[1], c[0]))
            step = (1, 0)

        for gx, gy in order:
            if (gx, gy) not in pool:
                continue
            pool.discard((gx, gy))
            length = 1
            nxt = (gx + step[0], gy + step[1])
            while nxt in pool:
                pool.discard(nxt)
                length += 1
                nxt = (nxt[0] + step[0], nxt[1] + step[1])
            runs.append(WallRun(side, gx, gy, length))
    return runs


def generate_wall_visuals(
    floors: AbstractSet[Cell],
    offset: Offset,
    style: WallVisualStyle,
    entrance_edges: Iterable[EntranceEdge],
    grid_size: float = DEFAULT_GRID_SIZE,
) -> List[WallRect]:
    """
    Builds wall rectangles for rendering.

    One rectangle per merged run, `thickness` deep and sitting just outside
    the floor, then a thickness-sized square at every outside corner to fill
    the gap where two runs meet.

    Args:
        floors: Walkable grid cells
        offset: Grid offset (ox, oy) applied before scaling to pixels
        style: Colour, texture and thickness settings
        entrance_edges: Tile sides where walls are suppressed
        grid_size: Pixel size of one grid cell

    Returns:
        Run rectangles followed by corner squares
    """
    ox, oy = offset
    t = style.thickness
    rects: List[WallRect] = []

    def make_rect(x: float, y: float, w: float, h: float, horizontal: bool) -> WallRect:
        if style.use_texture:
            texture = style.horizontal_texture if horizontal else style.vertical_texture
            return WallRect(x, y, w, h, horizontal, TEXTURED_FILL_COLOR, texture)
        return WallRect(x, y, w, h, horizontal, style.wall_color)

    for run in merge_wall_runs(floors, entrance_edges):
        px = (run.gx + ox) * grid_size
        py = (run.gy + oy) * grid_size
        span = run.length * grid_size
        if run.direction == Direction.NORTH:
            rects.append(make_rect(px, py - t, span, t, True))
        elif run.direction == Direction.SOUTH:
            rects.append(make_rect(px, py + grid_size, span, t, True))
        elif run.direction == Direction.EAST:
            rects.append(make_rect(px + grid_size, py, t, span, False))
        else:
            rects.append(make_rect(px - t, py, t, span, False))

    # Corner fill is decided by floor occupancy alone.
    for gx, gy in sorted(floors):
        px = (gx + ox) * grid_size
        py = (gy + oy) * grid_size
        open_n = (gx, gy - 1) not in floors
        open_s = (gx, gy + 1) not in floors
        open_e = (gx + 1, gy) not in floors
        open_w = (gx - 1, gy) not in floors

        if open_n and open_w:
            rects.append(make_rect(px - t, py - t, t, t, True))
        if open_n and open_e:
            rects.append(make_rect(px + grid_size, py - t, t, t, True))
        if open_s and open_w:
            rects.append(make_rect(px - t, py + grid_size, t, t, True))
        if open_s and open_e:
            rects.append(make_rect(px + grid_size, py + grid_size, t, t, True))

    return rects
