"""Command-line interface that animates Conway's Game of Life in a terminal."""

import argparse
import sys
import time
from typing import Iterable, Optional, TextIO

from ..core.grid import Grid, Update
from ..core.patterns import PatternLibrary

CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"
ALIVE_CHAR = "#"
DEAD_CHAR = "."


def move_cursor(x: int, y: int) -> str:
    """ANSI sequence that moves the cursor to grid column x, row y."""
    return f"\x1b[{y + 1};{x + 1}H"


class CLIGameOfLife:
    """Runs a Game of Life animation on a text terminal."""

    def __init__(self, output: Optional[TextIO] = None) -> None:
        """Initialize CLI interface.

        Args:
            output: Stream frames are written to (defaults to stdout)
        """
        self.pattern_library = PatternLibrary()
        self.output = output if output is not None else sys.stdout

    def create_grid(self, width: int, height: int, pattern: str, pattern_x: int = 0, pattern_y: int = 0) -> Grid:
        """Create a grid seeded with a library pattern.

        Args:
            width: Grid width
            height: Grid height
            pattern: Name of the pattern to seed
            pattern_x: X offset for pattern placement
            pattern_y: Y offset for pattern placement

        Raises:
            KeyError: If the pattern is not in the library
        """
        loaded_pattern = self.pattern_library.get_pattern(pattern)
        if loaded_pattern is None:
            raise KeyError(pattern)

        grid = Grid(width, height)
        loaded_pattern.apply_to_grid(grid, pattern_x, pattern_y)
        return grid

    def draw_frame(self, grid: Grid) -> None:
        """Clear the screen and draw every cell of the grid."""
        self.output.write(CLEAR_SCREEN)
        self.output.write(str(grid))
        self.output.write("\n")
        self.output.flush()

    def draw_updates(self, grid: Grid, updates: Iterable[Update]) -> int:
        """Redraw only the cells reported by an update stream.

        Args:
            grid: Grid the updates belong to
            updates: Changed cells, consumed to exhaustion

        Returns:
            Number of cells redrawn
        """
        redrawn = 0
        for update in updates:
            char = ALIVE_CHAR if update.alive else DEAD_CHAR
            self.output.write(move_cursor(update.x, update.y) + char)
            redrawn += 1

        # Park the cursor below the grid
        self.output.write(move_cursor(0, grid.height))
        self.output.flush()
        return redrawn

    def draw_status(self, grid: Grid, generation: int) -> None:
        """Write a status line below the grid."""
        self.output.write(move_cursor(0, grid.height))
        self.output.write(f"Generation {generation}, population {grid.population}\x1b[K\n")
        self.output.flush()

    def run(
        self,
        grid: Grid,
        generations: int,
        interval: float,
        incremental: bool = False,
        verbose: bool = False,
    ) -> int:
        """Animate a grid for a number of generations.

        The seed is drawn first; each generation then pauses, steps and
        redraws.

        Args:
            grid: Seeded grid to animate
            generations: Number of generations to step
            interval: Pause between frames in seconds
            incremental: Redraw only changed cells after the first frame
            verbose: Show a generation/population status line

        Returns:
            Number of generations stepped
        """
        self.draw_frame(grid)
        if verbose:
            self.draw_status(grid, 0)

        stepped = 0
        for generation in range(1, generations + 1):
            time.sleep(interval)

            if incremental:
                self.draw_updates(grid, grid.step_iter())
            else:
                grid.step()
                self.draw_frame(grid)

            if verbose:
                self.draw_status(grid, generation)
            stepped += 1

        return stepped

    def list_patterns(self) -> None:
        """List available patterns by category."""
        categories = self.pattern_library.get_patterns_by_category()

        print("Available patterns:")

        for category, pattern_names in categories.items():
            print(f"\n{category}:")
            for pattern_name in pattern_names:
                pattern = self.pattern_library.get_pattern(pattern_name)
                if pattern:
                    size = pattern.get_size()
                    print(f"  {pattern_name}: {size[0]}x{size[1]}, {len(pattern.cells)} cells")
                    if pattern.description:
                        print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Animate Conway's Game of Life in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the Gosper glider gun on a 100x40 grid
  game-of-life

  # Run a glider on a small grid, quickly
  game-of-life -W 20 -H 20 --pattern Glider --interval 0.05

  # Only redraw cells that changed
  game-of-life --incremental --verbose

  # List available patterns
  game-of-life --list-patterns
        """,
    )

    # Grid configuration
    parser.add_argument("-W", "--width", type=int, default=100, help="Grid width (default: 100)")

    parser.add_argument("-H", "--height", type=int, default=40, help="Grid height (default: 40)")

    # Pattern configuration
    parser.add_argument(
        "--pattern",
        type=str,
        default="Gosper Glider Gun",
        help="Pattern to seed the grid with (default: Gosper Glider Gun)",
    )

    parser.add_argument("--pattern-x", type=int, default=0, help="X offset for pattern placement (default: 0)")

    parser.add_argument("--pattern-y", type=int, default=0, help="Y offset for pattern placement (default: 0)")

    # Animation configuration
    parser.add_argument(
        "-g",
        "--generations",
        type=int,
        default=1000,
        help="Number of generations to animate (default: 1000)",
    )

    parser.add_argument(
        "-i",
        "--interval",
        type=float,
        default=0.1,
        help="Pause between frames in seconds (default: 0.1)",
    )

    parser.add_argument(
        "--incremental",
        action="store_true",
        help="Redraw only the cells that changed instead of the whole frame",
    )

    # Output options
    parser.add_argument("-v", "--verbose", action="store_true", help="Show generation and population")

    parser.add_argument("--list-patterns", action="store_true", help="List available patterns and exit")

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.height <= 0:
        errors.append("Height must be positive")

    if args.generations < 0:
        errors.append("Generations must be non-negative")

    if args.interval < 0:
        errors.append("Interval must be non-negative")

    if args.pattern_x < 0:
        errors.append("Pattern X offset must be non-negative")

    if args.pattern_y < 0:
        errors.append("Pattern Y offset must be non-negative")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main() -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args()

    cli = CLIGameOfLife()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    if cli.pattern_library.get_pattern(args.pattern) is None:
        available = cli.pattern_library.list_patterns()
        print(f"Error: Pattern '{args.pattern}' not found")
        print(f"Available patterns: {', '.join(available)}")
        print("Use --list-patterns to see detailed information")
        return 1

    try:
        grid = cli.create_grid(args.width, args.height, args.pattern, args.pattern_x, args.pattern_y)
        cli.run(
            grid,
            generations=args.generations,
            interval=args.interval,
            incremental=args.incremental,
            verbose=args.verbose,
        )
        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
