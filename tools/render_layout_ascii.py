#!/usr/bin/env python3
"""
Render a generated dungeon layout as ASCII art for debugging.

Usage:
    python tools/render_layout_ascii.py [--rooms N] [--seed S] [--branching B]

Legend: '.' room floor, ',' corridor, '+' door, '<' stairs up, '>' stairs down
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path so we can import spine_dungeon
sys.path.insert(0, str(Path(__file__).parent.parent))

from spine_dungeon.connectivity import unreachable_rooms
from spine_dungeon.generator import DungeonSettings, generate_dungeon
from spine_dungeon.raster import rasterize, render_ascii
from spine_dungeon.rng import generate_random_seed


def main():
    parser = argparse.ArgumentParser(description="Render dungeon layout as ASCII art")
    parser.add_argument("--rooms", type=int, default=10, help="Number of rooms to place")
    parser.add_argument("--seed", type=str, help="Seed for reproducible generation")
    parser.add_argument("--density", type=float, default=0.8)
    parser.add_argument("--branching", type=float, default=0.5)
    parser.add_argument("--room-size", type=float, default=0.5)
    parser.add_argument("--no-symmetry", action="store_true", help="Disable mirrored branches")
    parser.add_argument("--stairs", type=int, default=1)
    parser.add_argument("--stairs-down", type=int, default=1)
    args = parser.parse_args()

    seed = args.seed if args.seed is not None else generate_random_seed()
    settings = DungeonSettings(
        rooms=args.rooms,
        density=args.density,
        branching=args.branching,
        room_size=args.room_size,
        symmetry=not args.no_symmetry,
        stairs=args.stairs,
        stairs_down=args.stairs_down,
    )

    try:
        dungeon = generate_dungeon(settings, seed)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    grid, origin = rasterize(dungeon.layout, dungeon.stairs)
    print(render_ascii(grid))

    layout = dungeon.layout
    print(f"\n--- Debug Info ---")
    print(f"Seed: {seed}")
    print(f"Map size: {grid.shape[1]}x{grid.shape[0]} cells, origin {origin}")
    print(f"Rooms placed: {len(layout.rooms)} of {layout.requested_rooms}")
    print(f"Doors: {len(layout.doors)}, loops: {layout.loops_created}")
    print(f"Wall segments: {len(dungeon.walls)}, wall visuals: {len(dungeon.wall_visuals)}")
    unreachable = unreachable_rooms(layout)
    if unreachable:
        print(f"Unreachable rooms: {unreachable}")


if __name__ == "__main__":
    main()
