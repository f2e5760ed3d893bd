# npuzzle

Solves square sliding-tile puzzles, such as the 8-puzzle and the 15-puzzle.
It runs an A* search with the Manhattan-distance heuristic. When standard
output is a terminal, it plays the solution back in a curses window. It then
prints the moves.

## Installing

```
pip install .
```

## Puzzle files

If the file does not start with a digit, its first line is skipped as a
comment. The next line gives the size of the board. One line per row follows,
with the tiles separated by spaces. Write the blank as `0` or as `size * size`:

```
# an 8-puzzle
3
1 2 3
4 5 6
7 0 8
```

In the goal the tiles are in order and the blank is in the bottom-right corner.

## Running

```
npuzzle puzzle.txt
```

If standard output is a terminal, the command shows each board of the solution
for one second in a curses window. When the window is smaller than 42 columns
by 30 lines, it shows a short message instead of the board. After that the
command writes the moves as one line of letters. Each letter is the direction
the blank moves: `u`, `d`, `l` or `r`.

Exit codes:

- `1`: the wrong number of arguments was given;
- `2`: the file cannot be read;
- `3`: the puzzle is malformed or cannot be solved.

The search keeps a limited number of open states: 17000 for a 3×3 board and
30000000 for any other size. If that limit is reached, the command prints
`HEAP SIZE IS NOT ENOUGH` and exits with status 0.

## Using it as a library

```python
from npuzzle.board import parse_puzzle
from npuzzle.solver import solve

puzzle = parse_puzzle("3\n1 2 3\n4 5 6\n7 0 8\n")
if puzzle.is_solvable():
    solution = solve(puzzle)
    print(solution.letters)   # "r"
```

`npuzzle.board`:

- `parse_puzzle(text)` and `load_puzzle(path)` return a `Puzzle`. On a bad
  file or bad input they raise `PuzzleError`, whose `exit_code` holds the
  command's exit status.
- `Puzzle` has `grid`, `size`, `blank` (row, column), `is_solvable()` and
  `format()`.
- Helpers: `manhattan_distance`, `manhattan_total`, `inversion_count`,
  `inversion_change`, `grid_hash` (32-bit FNV-1a reduced to a bucket) and
  `format_grid`.

`npuzzle.solver`:

- `solve(puzzle, heap_limit=None)` runs A* with a table of visited boards. If
  the open set fills, it raises `HeapLimitError`.
- `solve_with_queue(puzzle)` runs a best-first search on a priority queue. It
  does not detect duplicate boards, and among states of equal priority it
  expands the newest first.
- Both return a `Solution`, which has the properties `moves` (`Move` values),
  `letters` (a string) and `grids` (every board from the start to the goal).
- `State`, `StateHeap`, `VisitedTable` and `Move` are the building blocks of
  the search.

`npuzzle.cli`:

- `main(argv=None)` is the command.
- `animate(solution, delay=1.0)` plays a solution in curses.
- `grid_cells(grid, lines, cols)` gives the screen cells used to draw a board.

## Tests

```
pip install .[test]
pytest
```