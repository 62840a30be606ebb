#!/usr/bin/env python3
"""
Render a generated dungeon to an image file for visual inspection.

Draws floors, corridors, wall visuals, logical wall segments, doors and
stairs the way a host renderer would place them.

Usage:
    python tools/render_layout_image.py                    # Default: 10 rooms, random seed
    python tools/render_layout_image.py --rooms 20         # 20 rooms
    python tools/render_layout_image.py --seed abc123      # Reproducible dungeon
    python tools/render_layout_image.py --output my.png    # Custom output path
"""

import argparse
import sys
from pathlib import Path
from typing import Tuple

import cv2
import numpy as np

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from spine_dungeon.generator import DungeonSettings, generate_dungeon
from spine_dungeon.rng import generate_random_seed
from spine_dungeon.walls import WallKind

BACKGROUND = (26, 26, 26)
FLOOR_COLOR = (150, 150, 150)
CORRIDOR_COLOR = (110, 110, 110)
WALL_LINE_COLOR = (0, 215, 255)
DOOR_COLOR = (0, 140, 255)


def hex_to_bgr(color: str) -> Tuple[int, int, int]:
    """Convert '#RRGGBB' to an OpenCV BGR tuple."""
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected a #RRGGBB colour, got {color!r}")
    r, g, b = (int(value[i : i + 2], 16) for i in (0, 2, 4))
    return (b, g, r)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Render a dungeon to an image file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--rooms", "-r", type=int, default=10, help="Number of rooms (default: 10)")
    parser.add_argument("--seed", "-s", type=str, default=None, help="Seed for reproducible dungeons")
    parser.add_argument("--branching", type=float, default=0.5)
    parser.add_argument("--density", type=float, default=0.8)
    parser.add_argument("--grid-size", type=int, default=32, help="Pixels per cell (default: 32)")
    parser.add_argument("--thickness", type=int, default=6, help="Wall thickness in pixels (default: 6)")
    parser.add_argument(
        "--output", "-o", type=str, default="dungeon_render.png",
        help="Output image path (default: dungeon_render.png)",
    )
    parser.add_argument("--show-walls", action="store_true", help="Overlay logical wall segments")
    args = parser.parse_args()

    seed = args.seed if args.seed is not None else generate_random_seed()
    print(f"Using seed: {seed}")

    settings = DungeonSettings(
        rooms=args.rooms,
        branching=args.branching,
        density=args.density,
        use_texture=False,
        grid_size=args.grid_size,
        thickness=args.thickness,
        padding=args.grid_size * 3,
    )
    print(f"Generating dungeon with {args.rooms} rooms...")
    dungeon = generate_dungeon(settings, seed)
    layout = dungeon.layout
    fit = dungeon.fit
    grid = settings.grid_size
    ox, oy = fit.offset

    width = int(fit.width)
    height = int(fit.height)
    print(f"Image size: {width}x{height} pixels")
    image = np.full((height, width, 3), BACKGROUND, dtype=np.uint8)

    for x, y in layout.floors:
        color = CORRIDOR_COLOR if (x, y) in layout.corridors else FLOOR_COLOR
        px, py = int((x + ox) * grid), int((y + oy) * grid)
        cv2.rectangle(image, (px, py), (px + int(grid) - 1, py + int(grid) - 1), color, -1)

    for rect in dungeon.wall_visuals:
        top_left = (int(rect.x), int(rect.y))
        bottom_right = (int(rect.x + rect.width) - 1, int(rect.y + rect.height) - 1)
        cv2.rectangle(image, top_left, bottom_right, hex_to_bgr(rect.fill_color), -1)

    if args.show_walls:
        for wall in dungeon.walls:
            cv2.line(image, (int(wall.x1), int(wall.y1)), (int(wall.x2), int(wall.y2)), WALL_LINE_COLOR, 1)

    for segment in dungeon.doors:
        color = DOOR_COLOR if segment.kind == WallKind.DOOR else WALL_LINE_COLOR
        cv2.line(image, (int(segment.x1), int(segment.y1)), (int(segment.x2), int(segment.y2)), color, 3)

    for stair in dungeon.stairs:
        cx = int((stair.x + ox) * grid + grid / 2)
        cy = int((stair.y + oy) * grid + grid / 2)
        color = (0, 0, 255) if stair.going_down else (0, 255, 0)
        cv2.circle(image, (cx, cy), max(3, int(grid) // 4), color, -1)

    output_path = Path(args.output)
    cv2.imwrite(str(output_path), image)
    print(f"Saved to: {output_path.absolute()}")

    print(f"\nRooms ({len(layout.rooms)}):")
    for index, record in enumerate(layout.room_data):
        room = record.room
        marker = " (start)" if record.is_start else ""
        print(f"  Room {index}: at cell ({room.x}, {room.y}), size {room.w}x{room.h}{marker}")


if __name__ == "__main__":
    main()
