#!/usr/bin/env python3
"""
Command-line seam carving.

    seamgraph-carve input.png output.png --vertical 50 --horizontal 20
    seamgraph-carve input.png output.png --width 300 --policy random --seed 1
    seamgraph-carve input.png output.png -v 40 --gif steps.gif --energy energy.png
"""

import argparse
import logging
import sys

from .carving import POLICIES, build_image, carve, carve_to_size, highlight_seam
from .errors import SeamCarvingError
from .io import load_image, save_animation, save_image


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='seamgraph-carve',
        description="Content-aware image shrinking by graph-based seam carving"
    )
    parser.add_argument('input', help='Input image path')
    parser.add_argument('output', help='Output image path')
    parser.add_argument(
        '-v', '--vertical',
        type=int,
        default=0,
        help='Number of vertical seams to remove (default: 0)'
    )
    parser.add_argument(
        '-H', '--horizontal',
        type=int,
        default=0,
        help='Number of horizontal seams to remove (default: 0)'
    )
    parser.add_argument(
        '--width',
        type=int,
        help='Target width; overrides --vertical/--horizontal'
    )
    parser.add_argument(
        '--height',
        type=int,
        help='Target height; overrides --vertical/--horizontal'
    )
    parser.add_argument(
        '--policy',
        choices=POLICIES,
        default='vertical-first',
        help='Direction order when carving to a target size (default: vertical-first)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        help='Random seed for --policy random'
    )
    parser.add_argument(
        '--energy',
        help='Also save the energy view of the result to this path'
    )
    parser.add_argument(
        '--gif',
        help='Save an animation of every step, seam highlighted in red'
    )
    parser.add_argument(
        '--fps',
        type=int,
        default=10,
        help='Frames per second for --gif (default: 10)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log every seam removal'
    )
    return parser


def run(args) -> int:
    if args.vertical < 0 or args.horizontal < 0:
        print("Error: seam counts must be non-negative", file=sys.stderr)
        return 1

    print(f"Loading {args.input}...")
    pixels = load_image(args.input)

    print("Constructing graph...")
    image = build_image(pixels)
    print(f"Image size: {image.width} x {image.height}")

    frames = [pixels] if args.gif else None
    state = {'frame': pixels}

    def on_step(step, direction, coords):
        if frames is not None:
            frames[-1] = highlight_seam(state['frame'], coords)
            state['frame'] = image.read_pixels()
            frames.append(state['frame'])
        if step % 20 == 0:
            print(f"  Removed {step} seams, size: {image.width} x {image.height}")

    if args.width is not None or args.height is not None:
        print(f"Carving to {args.width or image.width} x {args.height or image.height} "
              f"({args.policy})...")
        carve_to_size(image, args.width, args.height, policy=args.policy,
                      seed=args.seed, on_step=on_step)
    else:
        print(f"Removing {args.vertical} vertical and {args.horizontal} horizontal seams...")
        carve(image, args.vertical, args.horizontal, on_step=on_step)

    print(f"Saving to {args.output} ({image.width} x {image.height})...")
    save_image(image.read_pixels(), args.output)

    if args.energy:
        save_image(image.energy_pixels(), args.energy)
        print(f"Saved energy view: {args.energy}")

    if frames is not None:
        save_animation(frames, args.gif, fps=args.fps)
        print(f"Saved animation: {args.gif} ({len(frames)} frames)")

    print("Done.")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

    try:
        return run(args)
    except (SeamCarvingError, ValueError, OSError) as ex:
        print(f"Error: {ex}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
