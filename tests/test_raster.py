"""Unit tests for the tile-array preview."""

import numpy as np

from spine_dungeon.features import StairPlacement
from spine_dungeon.geometry import Direction, Room
from spine_dungeon.layout import DoorPlacement, Layout, LayoutParams, RoomRecord, generate_layout
from spine_dungeon.raster import Tile, rasterize, render_ascii
from spine_dungeon.rng import seed_rng


def small_layout() -> Layout:
    room = Room(0, 0, 3, 3)
    corridors = {(3, 1), (4, 1)}
    return Layout(
        floors=set(room.cells()) | corridors,
        corridors=corridors,
        rooms=[room],
        doors=[DoorPlacement(4, 1, Direction.EAST)],
        entrance_edges=[],
        room_data=[RoomRecord(room, True)],
        spacing=1,
        requested_rooms=1,
    )


class TestRasterize:
    def test_shape_and_origin(self):
        grid, origin = rasterize(small_layout())
        assert grid.shape == (5, 7)
        assert origin == (-1, -1)

    def test_tiles(self):
        grid, _ = rasterize(small_layout())
        assert grid[2, 1] == Tile.FLOOR
        assert grid[2, 4] == Tile.CORRIDOR
        assert grid[2, 5] == Tile.DOOR
        assert grid[0, 0] == Tile.NOTHING

    def test_stairs_are_drawn(self):
        stairs = [StairPlacement(1, 1, going_down=True)]
        grid, _ = rasterize(small_layout(), stairs)
        assert grid[2, 2] == Tile.STAIRS_DOWN

    def test_padding(self):
        grid, origin = rasterize(small_layout(), padding=3)
        assert grid.shape == (9, 11)
        assert origin == (-3, -3)

    def test_floor_count_matches_layout(self):
        layout = generate_layout(LayoutParams(room_count=8), seed_rng("raster"))
        grid, _ = rasterize(layout)
        assert int(np.count_nonzero(grid)) == len(layout.floors)

    def test_empty_layout(self):
        layout = small_layout()
        layout.floors = set()
        grid, origin = rasterize(layout)
        assert grid.shape == (2, 2)
        assert not grid.any()
        assert origin == (0, 0)


class TestRenderAscii:
    def test_render(self):
        grid, _ = rasterize(small_layout(), [StairPlacement(1, 1, going_down=True)])
        lines = render_ascii(grid).split("\n")
        assert lines == [
            "       ",
            " ...   ",
            " .>.,+ ",
            " ...   ",
            "       ",
        ]
