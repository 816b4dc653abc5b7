#!/usr/bin/env python3
"""
Convert a folder of images into PROGMEM frames for an SSD1306 OLED.

Usage:
    python3 img2oled.py <image_folder> [width] [height] [output_file]

Examples:
    python3 img2oled.py ./img
    python3 img2oled.py ./img 64 64
    python3 img2oled.py ./img 128 64 output.ino --threshold 100 --invert

Supported formats: PNG, JPG, JPEG, BMP, GIF
"""

import argparse
import sys

from frame_batch import process_folder
from frame_errors import FrameConvertError
from frame_packer import DEFAULT_THRESHOLD, Thresholder
from sketch_template import DisplayConfig, render_sketch

DEFAULT_WIDTH = 64
DEFAULT_HEIGHT = 64
DEFAULT_OUTPUT = "oled.ino"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="img2oled",
        description="Convert a folder of images to a PROGMEM frame table for Arduino OLED displays.",
        epilog="Frames are played in filename order; zero-pad numbers (frame_001.png).",
    )
    parser.add_argument("folder", help="folder containing the images to convert")
    parser.add_argument("width", nargs="?", type=int, default=DEFAULT_WIDTH,
                        help=f"frame width in pixels (default: {DEFAULT_WIDTH})")
    parser.add_argument("height", nargs="?", type=int, default=DEFAULT_HEIGHT,
                        help=f"frame height in pixels (default: {DEFAULT_HEIGHT})")
    parser.add_argument("output", nargs="?", default=DEFAULT_OUTPUT,
                        help=f"output sketch (default: {DEFAULT_OUTPUT})")
    parser.add_argument("--threshold", type=int, default=DEFAULT_THRESHOLD,
                        help="brightness above which a pixel is on (default: %(default)s)")
    parser.add_argument("--invert", action="store_true",
                        help="turn on pixels at or below the threshold instead")
    parser.add_argument("--delay", type=int, default=DisplayConfig.frame_delay,
                        help="ms between frames (default: %(default)s)")
    parser.add_argument("--screen-width", type=int, default=DisplayConfig.screen_width)
    parser.add_argument("--screen-height", type=int, default=DisplayConfig.screen_height)
    parser.add_argument("--address", type=lambda s: int(s, 0), default=DisplayConfig.i2c_address,
                        help="I2C address, e.g. 0x3C or 0x3D")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.width <= 0 or args.height <= 0:
        print(f"Error: width and height must be positive, got {args.width}x{args.height}",
              file=sys.stderr)
        return 1

    print(f"""
Image to Arduino converter

Configuration:
  Folder: {args.folder}
  Size:   {args.width}x{args.height} pixels
  Output: {args.output}
""")

    config = DisplayConfig(
        screen_width=args.screen_width,
        screen_height=args.screen_height,
        i2c_address=args.address,
        frame_delay=args.delay,
    )

    try:
        thresholder = Thresholder(args.threshold, invert=args.invert)
        frames, failures = process_folder(args.folder, args.width, args.height, thresholder)
        code = render_sketch(frames, args.width, args.height, config)
    except FrameConvertError as exc:
        print(f"\nError: {exc}\n", file=sys.stderr)
        return 1

    try:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(code)
    except OSError as exc:
        print(f"\nError: cannot write {args.output}: {exc.strerror or exc}\n", file=sys.stderr)
        return 1

    if failures:
        print(f"\nSkipped {len(failures)} file(s):", file=sys.stderr)
        for failure in failures:
            print(f"  {failure.filename}: {failure.message}", file=sys.stderr)

    print("\nDone!")
    print(f"  Frames processed: {len(frames)}")
    print(f"  Output file:      {args.output}")
    print(f"  Size:             {len(code) / 1024:.2f} KB\n")
    print("To use it in your own sketch:")
    print("  1. Copy the frames table from the generated file")
    print("  2. Paste it above setup()")
    print("  3. Draw with: display.drawBitmap(x, y, frames[i], FRAME_WIDTH, FRAME_HEIGHT, 1);\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
