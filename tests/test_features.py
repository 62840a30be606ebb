"""Unit tests for stair placement."""

import pytest

from spine_dungeon.features import StairPlacement, check_stair_counts, place_stairs
from spine_dungeon.geometry import Room
from spine_dungeon.layout import LayoutParams, RoomRecord, generate_layout
from spine_dungeon.rng import seed_rng


def records(*rooms, start_first=True):
    return [RoomRecord(room, is_start=start_first and i == 0) for i, room in enumerate(rooms)]


class TestCheckStairCounts:
    def test_default_counts_fit_three_rooms(self):
        check_stair_counts(1, 1, 3)

    def test_too_many_stairs(self):
        with pytest.raises(ValueError, match="Too many stairs"):
            check_stair_counts(1, 1, 2)

    def test_single_room_allows_no_stairs(self):
        check_stair_counts(0, 0, 1)
        with pytest.raises(ValueError):
            check_stair_counts(1, 0, 1)

    @pytest.mark.parametrize("up,down", [(-1, 0), (0, -1)])
    def test_negative_counts(self, up, down):
        with pytest.raises(ValueError, match="non-negative"):
            check_stair_counts(up, down, 10)


class TestPlaceStairs:
    def test_three_by_three_room_uses_its_centre(self):
        data = records(Room(0, 0, 5, 5), Room(10, 10, 3, 3))
        stairs = place_stairs(data, 1, 0, seed_rng("x"))
        assert stairs == [StairPlacement(11, 11, going_down=False)]

    def test_never_in_start_room(self):
        start = Room(-2, -2, 5, 5)
        data = records(start, Room(10, 0, 5, 5), Room(0, 10, 5, 5), Room(10, 10, 5, 5))
        for seed in ["a", "b", "c", "d", "e"]:
            for stair in place_stairs(data, 2, 1, seed_rng(seed)):
                assert not start.contains((stair.x, stair.y))

    def test_stairs_sit_in_room_interiors(self):
        rooms = [Room(0, 0, 4, 4), Room(10, 0, 6, 5), Room(0, 10, 7, 3), Room(20, 20, 8, 8)]
        data = records(*rooms)
        for seed in ["s1", "s2", "s3", "s4"]:
            for stair in place_stairs(data, 2, 1, seed_rng(seed)):
                owner = [room for room in rooms if room.contains((stair.x, stair.y))]
                assert len(owner) == 1
                room = owner[0]
                assert room.left < stair.x < room.right - 1
                assert room.top < stair.y < room.bottom - 1

    def test_one_stair_per_room_and_up_first(self):
        data = records(Room(0, 0, 5, 5), Room(10, 0, 5, 5), Room(20, 0, 5, 5), Room(30, 0, 5, 5))
        stairs = place_stairs(data, 2, 1, seed_rng("order"))
        assert [s.going_down for s in stairs] == [False, False, True]
        owners = {(s.x // 10) for s in stairs}
        assert len(owners) == 3

    def test_drops_stairs_when_rooms_run_out(self):
        data = records(Room(0, 0, 5, 5), Room(10, 0, 5, 5))
        stairs = place_stairs(data, 1, 1, seed_rng("short"))
        assert len(stairs) == 1
        assert not stairs[0].going_down
        assert 11 <= stairs[0].x <= 13 and 1 <= stairs[0].y <= 3

    def test_rooms_without_interior_are_skipped(self):
        # A room with no interior cells cannot hold stairs.
        data = records(Room(0, 0, 5, 5), Room(10, 0, 2, 5), Room(20, 0, 3, 3))
        stairs = place_stairs(data, 1, 0, seed_rng("skip"))
        assert stairs == [StairPlacement(21, 1, going_down=False)]

    def test_zero_stairs(self):
        data = records(Room(0, 0, 5, 5), Room(10, 0, 5, 5))
        assert place_stairs(data, 0, 0, seed_rng("none")) == []

    def test_deterministic(self):
        layout = generate_layout(LayoutParams(room_count=10), seed_rng("stairs"))
        a = place_stairs(layout.room_data, 2, 2, seed_rng("same"))
        b = place_stairs(layout.room_data, 2, 2, seed_rng("same"))
        assert a == b

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            place_stairs(records(Room(0, 0, 5, 5)), -1, 0, seed_rng("x"))
