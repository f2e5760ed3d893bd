"""Command line entry point: solve a puzzle file and animate the solution."""

from __future__ import annotations

import curses
import sys
import time
from typing import List, Optional, Sequence, Tuple

from npuzzle.board import (
    INVALID_ARGUMENTS,
    INVALID_INPUT,
    Grid,
    PuzzleError,
    load_puzzle,
)
from npuzzle.solver import HeapLimitError, Solution, preview_grid, solve

MIN_COLS = 42
MIN_LINES = 30
TOO_SMALL_MESSAGE = "WINDOW IS TOO SMOL:("

Cell = Tuple[int, int, str]


def grid_cells(grid: Grid, lines: int, cols: int) -> List[Cell]:
    """Screen positions and texts that draw the grid centred in a window.

    Returns a single message cell when the window is too small.
    """
    if cols < MIN_COLS or lines < MIN_LINES:
        return [(0, 0, TOO_SMALL_MESSAGE)]
    size = len(grid)
    blank = size * size
    top = lines // 2 - 4 * size // 2
    left = cols // 2 - 4 * size // 2
    cells: List[Cell] = []
    lin = top
    for i, row in enumerate(grid):
        lin = 4 * i + top
        for j, value in enumerate(row):
            col = 6 * j + left
            if j == 0:
                cells.append((lin, col - 3, "|"))
            cells.extend((lin - 2, col - 1 + k, "-") for k in range(size - 1))
            cells.append((lin, col, str(value)))
            if value == blank:
                cells.extend(
                    [
                        (lin - 1, col, "-"),
                        (lin + 1, col, "-"),
                        (lin, col - 1, "|"),
                        (lin, col + 1, "|"),
                    ]
                )
            cells.append((lin, col + 3, "|"))
    for column in range(size):
        col = 6 * column + left
        cells.extend((lin + 2, col - 1 + k, "-") for k in range(size - 1))
    return cells


def _frames(solution: Solution) -> List[Grid]:
    grids = solution.grids
    frames: List[Grid] = [grids[0]]
    letters = solution.letters
    if letters:
        frames.append(preview_grid(grids[0], letters[0]))
        frames.extend(grids[2:])
    return frames


def _draw(window, grid: Grid) -> None:
    lines, cols = window.getmaxyx()
    window.erase()
    for y, x, text in grid_cells(grid, lines, cols):
        try:
            window.addstr(y, x, text)
        except curses.error:
            pass
    window.refresh()


def animate(solution: Solution, delay: float = 1.0) -> None:
    """Show each board of the solution in the terminal, pausing between them."""
    frames = _frames(solution)

    def run(window) -> None:
        curses.cbreak()
        curses.noecho()
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        window.keypad(True)
        for grid in frames:
            _draw(window, grid)
            time.sleep(delay)

    curses.wrapper(run)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Solve the puzzle named on the command line and print its moves."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        sys.stderr.write("Wrong number of arguments\n")
        return INVALID_ARGUMENTS
    try:
        puzzle = load_puzzle(args[0])
    except PuzzleError as exc:
        sys.stderr.write(f"{exc}\n")
        return exc.exit_code
    if not puzzle.is_solvable():
        sys.stderr.write("Grid is not solvable\n")
        return INVALID_INPUT
    try:
        solution = solve(puzzle)
    except HeapLimitError as exc:
        print(exc)
        return 0
    if sys.stdout.isatty():
        animate(solution)
    sys.stdout.write(solution.letters)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())