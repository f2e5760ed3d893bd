"""Puzzle boards: parsing, formatting, heuristics and hashing."""

from __future__ import annotations

import re
from dataclasses import dataclass
from itertools import chain, combinations
from pathlib import Path
from typing import Sequence, Tuple, Union

Grid = Sequence[Sequence[int]]

INVALID_ARGUMENTS = 1
INVALID_FILE = 2
INVALID_INPUT = 3

HASH_SIZE = 17000
HASH_SIZE_LARGE = 300000
HEAP_LIMIT_3 = 17000
HEAP_LIMIT_4 = 30000000

FNV_OFFSET_BASIS_32 = 2166136261
FNV_PRIME_32 = 16777619
_MASK_32 = 0xFFFFFFFF

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_ROW_INT = re.compile(r"[ \t]*([+-]?\d+)")


class PuzzleError(Exception):
    """Raised for unreadable, malformed or unsolvable puzzles."""

    def __init__(self, message: str, exit_code: int = INVALID_INPUT) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def manhattan_distance(grid: Grid, y: int, x: int) -> int:
    """Distance of the tile at (y, x) from its goal cell."""
    size = len(grid)
    index = grid[y][x] - 1
    return abs(index // size - y) + abs(index % size - x)


def manhattan_total(grid: Grid) -> int:
    """Sum of the Manhattan distances of every cell, blank included."""
    return sum(
        manhattan_distance(grid, y, x)
        for y, row in enumerate(grid)
        for x, _ in enumerate(row)
    )


def inversion_count(grid: Grid) -> int:
    """Number of pairs out of order when the grid is read row by row."""
    cells = list(chain.from_iterable(grid))
    return sum(1 for a, b in combinations(cells, 2) if a > b)


def inversion_change(
    grid: Grid, empty_x: int, empty_y: int, swap_x: int, swap_y: int
) -> int:
    """Estimate the change in inversions when the blank moves vertically."""
    size = len(grid)
    tile = grid[swap_y][swap_x]

    def score(cells, hit) -> int:
        return sum(1 if hit(cell) else -1 for cell in cells)

    if empty_y < swap_y:
        empty_res = size
        swap_res = score(grid[empty_y][empty_x + 1:], lambda c: c > tile)
        swap_res += score(grid[swap_y][:swap_x], lambda c: c > tile)
    else:
        empty_res = -size
        swap_res = score(grid[swap_y][swap_x + 1:], lambda c: c < tile)
        swap_res += score(grid[empty_y][:empty_x], lambda c: c < tile)
    return empty_res + swap_res


def grid_hash(grid: Grid, buckets: int = HASH_SIZE) -> int:
    """32-bit FNV-1a over the cells, reduced to a bucket index."""
    if buckets <= 0:
        raise ValueError("buckets must be positive")
    result = FNV_OFFSET_BASIS_32
    for cell in chain.from_iterable(grid):
        result ^= cell & _MASK_32
        result = (result * FNV_PRIME_32) & _MASK_32
    return result % buckets


def format_grid(grid: Grid) -> str:
    """Rows of space-separated cells, one row per line."""
    return "".join(" ".join(str(cell) for cell in row) + "\n" for row in grid)


@dataclass(frozen=True)
class Puzzle:
    """A square sliding puzzle; the blank holds the value size * size."""

    grid: Tuple[Tuple[int, ...], ...]

    def __post_init__(self) -> None:
        grid = tuple(tuple(int(cell) for cell in row) for row in self.grid)
        size = len(grid)
        if size == 0:
            raise PuzzleError("puzzle is empty")
        if any(len(row) != size for row in grid):
            raise PuzzleError("puzzle is not square")
        if sorted(chain.from_iterable(grid)) != list(range(1, size * size + 1)):
            raise PuzzleError("tiles must be distinct and cover the board")
        object.__setattr__(self, "grid", grid)

    @property
    def size(self) -> int:
        return len(self.grid)

    @property
    def blank(self) -> Tuple[int, int]:
        """Row and column of the blank."""
        target = self.size * self.size
        for y, row in enumerate(self.grid):
            if target in row:
                return y, row.index(target)
        raise PuzzleError("puzzle has no blank")

    def is_solvable(self) -> bool:
        y, x = self.blank
        return (inversion_count(self.grid) + manhattan_distance(self.grid, y, x)) % 2 == 0

    def format(self) -> str:
        return format_grid(self.grid)


def _row_values(line: str, count: int) -> list:
    values = []
    pos = 0
    while len(values) < count:
        match = _ROW_INT.match(line, pos)
        if not match:
            break
        values.append(int(match.group(1)))
        pos = match.end()
    return values


def parse_puzzle(text: str) -> Puzzle:
    """Parse a size line followed by one line per row; 0 marks the blank."""
    if not text:
        raise PuzzleError("puzzle text is empty")
    lines = text.split("\n")
    if not text[0].isdigit():
        lines = lines[1:]
    if not lines:
        raise PuzzleError("puzzle size is missing")
    match = _LEADING_INT.match(lines[0])
    if not match:
        raise PuzzleError("puzzle size is missing")
    size = int(match.group(1))
    if size < 1:
        raise PuzzleError(f"invalid puzzle size {size}")
    rows = lines[1:size + 1]
    if len(rows) < size:
        raise PuzzleError("puzzle has too few rows")
    blank = size * size
    grid = []
    for line in rows:
        values = _row_values(line, size)
        if len(values) < size:
            raise PuzzleError(f"row {line!r} has fewer than {size} tiles")
        grid.append(tuple(blank if value == 0 else value for value in values))
    return Puzzle(tuple(grid))


def load_puzzle(path: Union[str, Path]) -> Puzzle:
    """Read and parse a puzzle file."""
    try:
        text = Path(path).read_text()
    except (OSError, UnicodeDecodeError) as exc:
        raise PuzzleError(f"cannot read {path}", INVALID_FILE) from exc
    return parse_puzzle(text)