"""Unit tests for rooms and directions."""

import pytest

from spine_dungeon.geometry import ALL_DIRECTIONS, Direction, Room, manhattan_distance


class TestDirection:
    @pytest.mark.parametrize("direction", ALL_DIRECTIONS)
    def test_opposite_is_an_involution(self, direction):
        assert direction.opposite().opposite() == direction
        assert direction.opposite() != direction

    @pytest.mark.parametrize("direction", ALL_DIRECTIONS)
    def test_opposite_steps_cancel(self, direction):
        dx, dy = direction.step()
        ox, oy = direction.opposite().step()
        assert (dx + ox, dy + oy) == (0, 0)

    @pytest.mark.parametrize("direction", ALL_DIRECTIONS)
    def test_perpendicular_directions_are_at_right_angles(self, direction):
        dx, dy = direction.step()
        for perp in direction.perpendicular():
            px, py = perp.step()
            assert dx * px + dy * py == 0

    def test_north_is_up(self):
        assert Direction.NORTH.step() == (0, -1)

    def test_is_horizontal(self):
        assert Direction.EAST.is_horizontal
        assert Direction.WEST.is_horizontal
        assert not Direction.NORTH.is_horizontal
        assert not Direction.SOUTH.is_horizontal


class TestRoom:
    def test_derived_edges(self):
        room = Room(2, 3, 5, 4)
        assert (room.left, room.right, room.top, room.bottom) == (2, 7, 3, 7)

    def test_center_floors_half_size(self):
        assert Room(0, 0, 5, 4).center == (2, 2)
        assert Room(-2, -1, 4, 3).center == (0, 0)

    def test_cells_cover_the_rectangle(self):
        room = Room(1, 1, 3, 4)
        cells = list(room.cells())
        assert len(cells) == 12
        assert len(set(cells)) == 12
        assert all(room.contains(cell) for cell in cells)

    def test_contains_excludes_far_edges(self):
        room = Room(0, 0, 3, 3)
        assert room.contains((2, 2))
        assert not room.contains((3, 0))
        assert not room.contains((0, 3))

    def test_edge_and_exit_cells(self):
        room = Room(0, 0, 5, 3)  # centre (2, 1)
        assert room.edge_cell(Direction.NORTH) == (2, 0)
        assert room.exit_cell(Direction.NORTH) == (2, -1)
        assert room.edge_cell(Direction.SOUTH) == (2, 2)
        assert room.exit_cell(Direction.SOUTH) == (2, 3)
        assert room.edge_cell(Direction.EAST) == (4, 1)
        assert room.exit_cell(Direction.EAST) == (5, 1)
        assert room.edge_cell(Direction.WEST) == (0, 1)
        assert room.exit_cell(Direction.WEST) == (-1, 1)

    def test_edge_cell_with_lane(self):
        room = Room(0, 0, 5, 3)
        assert room.edge_cell(Direction.NORTH, lane=4) == (4, 0)
        assert room.exit_cell(Direction.EAST, lane=2) == (5, 2)

    def test_spans_lane(self):
        room = Room(0, 0, 5, 3)
        assert room.spans_lane(Direction.NORTH, 4)
        assert not room.spans_lane(Direction.NORTH, 5)
        assert room.spans_lane(Direction.EAST, 2)
        assert not room.spans_lane(Direction.WEST, 3)


class TestIntersects:
    def test_overlapping_rooms_intersect(self):
        assert Room(0, 0, 4, 4).intersects(Room(2, 2, 4, 4))

    def test_touching_rooms_do_not_intersect_without_margin(self):
        assert not Room(0, 0, 3, 3).intersects(Room(3, 0, 3, 3))

    def test_touching_rooms_intersect_with_margin(self):
        assert Room(0, 0, 3, 3).intersects(Room(3, 0, 3, 3), margin=1)

    def test_gap_equal_to_margin_is_allowed(self):
        # One empty column between them.
        a, b = Room(0, 0, 3, 3), Room(4, 0, 3, 3)
        assert not a.intersects(b, margin=1)
        assert a.intersects(b, margin=2)

    def test_diagonal_gap(self):
        a, b = Room(0, 0, 3, 3), Room(5, 5, 3, 3)
        assert not a.intersects(b, margin=2)
        assert a.intersects(b, margin=3)

    def test_is_symmetric(self):
        a, b = Room(0, 0, 3, 5), Room(4, 2, 6, 3)
        for margin in range(4):
            assert a.intersects(b, margin) == b.intersects(a, margin)


def test_manhattan_distance_between_centres():
    assert manhattan_distance(Room(0, 0, 3, 3), Room(6, 4, 3, 3)) == 10
