#!/usr/bin/env python3
"""
Terminal Game of Life driver.

Loads a plaintext pattern file, a named pattern or a random grid, then
prints one frame per generation until the generation limit or Ctrl-C.

Exit codes: 0 on success or interrupt, 1 when the pattern file cannot be
read or parsed or the final grid cannot be written, 2 on invalid arguments.
"""

import argparse
import logging
import sys
import time
from typing import List, Optional, TextIO

from .config import DEFAULT_RULE, SimulationConfig
from .core.grid import Grid
from .core.rules import NEIGHBOR_COUNTERS
from .core.world import World
from .errors import PlaintextError
from .formats.plaintext import read_plaintext, save_plaintext
from .patterns import available_patterns, get_pattern, place_pattern, random_grid, rotate_pattern

logger = logging.getLogger(__name__)


def render_frame(world: World, live_char: str = 'O', dead_char: str = ' ') -> str:
    """Render the world's grid followed by a separator line."""
    lines = [''.join(live_char if cell.is_live() else dead_char for cell in row)
             for row in world.iter_rows()]
    lines.append('-' * max(world.width, 9))
    return '\n'.join(lines)


def load_grid(config: SimulationConfig, path: Optional[str] = None,
              pattern: Optional[str] = None, rotate: int = 0) -> Grid:
    """Build the starting grid from a file, a named pattern or randomly.

    Raises:
        PlaintextError: If the pattern file cannot be read or parsed
        KeyError: If the pattern name is unknown
        ValueError: If the pattern does not fit the configured grid
    """
    if path is not None:
        document = read_plaintext(path)
        logger.info(f"Loaded {document.name or path}: "
                    f"{document.grid.width}x{document.grid.height}")
        return rotate_pattern(document.grid, rotate) if rotate else document.grid

    if pattern is not None:
        seed = get_pattern(pattern)
        if rotate:
            seed = rotate_pattern(seed, rotate)
        grid = Grid.create_dead(config.width, config.height)
        offset = place_pattern(grid, seed)
        logger.info(f"Placed {pattern} at {offset} on {config.width}x{config.height} grid")
        return grid

    logger.info(f"Random {config.width}x{config.height} grid, density={config.density}, "
                f"seed={config.seed}")
    return random_grid(config.width, config.height, config.density, config.seed)


def run(world: World, config: SimulationConfig, out: TextIO = sys.stdout) -> World:
    """Animate ``world`` until the generation limit or a keyboard interrupt.

    Returns:
        The world holding the final state (a new object when not mutating)
    """
    try:
        while True:
            print(render_frame(world, config.live_char, config.dead_char), file=out, flush=True)
            if config.generations is not None and world.generation >= config.generations:
                break
            if config.mutate:
                world.step_mut()
            else:
                world = world.step()
            if config.delay:
                time.sleep(config.delay)
    except KeyboardInterrupt:
        logger.info(f"Interrupted at generation {world.generation}")

    logger.info(f"Stopped at generation {world.generation}, {world.count_live()} live cells")
    return world


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='torus-life',
                                     description="Conway's Game of Life on a toroidal grid")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--file", help="Plaintext pattern file to load")
    source.add_argument("--pattern", choices=available_patterns(),
                        help="Named pattern, centered on the grid")
    parser.add_argument("--rotate", type=int, default=0,
                        help="Quarter turns clockwise applied to the loaded pattern")
    parser.add_argument("--width", type=int, default=50, help="Grid width")
    parser.add_argument("--height", type=int, default=50, help="Grid height")
    parser.add_argument("--density", type=float, default=0.5, help="Live density for random grids")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--generations", type=int, default=None,
                        help="Stop after this many generations (default: run forever)")
    parser.add_argument("--delay", type=float, default=0.2, help="Seconds between frames")
    parser.add_argument("--topology", choices=sorted(NEIGHBOR_COUNTERS), default='torus',
                        help="Edge behaviour: wrap around or treat off-grid cells as dead")
    parser.add_argument("--rule", default=DEFAULT_RULE, help="Rulestring, e.g. B36/S23")
    parser.add_argument("--immutable", action="store_true",
                        help="Produce a new world each step instead of stepping in place")
    parser.add_argument("--dump", help="Write the final grid to this plaintext file")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None, out: TextIO = sys.stdout) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        config = SimulationConfig(width=args.width, height=args.height,
                                  density=args.density, seed=args.seed,
                                  delay=args.delay, generations=args.generations,
                                  topology=args.topology, rule=args.rule,
                                  mutate=not args.immutable)
    except ValueError as e:
        parser.error(str(e))

    try:
        grid = load_grid(config, path=args.file, pattern=args.pattern, rotate=args.rotate)
    except PlaintextError as e:
        logger.error(f"Cannot load pattern: {e}")
        return 1
    except ValueError as e:
        parser.error(str(e))

    world = World(grid, config.rule_fn(), config.neighbor_counter())
    world = run(world, config, out)

    if args.dump:
        try:
            save_plaintext(args.dump, world.grid, name=f"generation {world.generation}")
        except OSError as e:
            logger.error(f"Cannot write final grid: {e}")
            return 1
        logger.info(f"Final grid written to {args.dump}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
