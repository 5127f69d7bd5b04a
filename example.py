#!/usr/bin/env python3
"""
Example usage of the game_of_life package.
"""

from game_of_life import Grid, PatternLibrary


def main():
    """Demonstrate programmatic usage of the game_of_life package."""
    grid = Grid(10, 10)

    library = PatternLibrary()
    glider = library.get_pattern("Glider")

    if glider:
        glider.apply_to_grid(grid, offset_x=2, offset_y=2)

        print("Initial state:")
        print(grid)
        print(f"Population: {grid.population}")
        print()

        # Watch individual cells change
        for generation in range(1, 5):
            changes = list(grid.step_iter())
            print(f"Generation {generation}: {len(changes)} cells changed")
            for update in changes:
                state = "born" if update.alive else "died"
                print(f"  ({update.x}, {update.y}) {state}")

        print()
        print("After 4 generations the glider has moved one cell diagonally:")
        print(grid)

    # Cells outside the grid report None instead of raising
    print()
    print(f"grid.get(50, 50) -> {grid.get(50, 50)}")
    print(f"grid.set(0, 0, True) -> {grid.set(0, 0, True)}")
    print(f"grid.toggle(0, 0) -> {grid.toggle(0, 0)}")


if __name__ == "__main__":
    main()
