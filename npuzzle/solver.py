"""Best-first search over sliding-puzzle states."""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Dict, Iterator, List, Optional, Tuple

from npuzzle.board import (
    HASH_SIZE,
    HEAP_LIMIT_3,
    HEAP_LIMIT_4,
    Grid,
    Puzzle,
    PuzzleError,
    grid_hash,
    manhattan_distance,
    manhattan_total,
)

GridTuple = Tuple[Tuple[int, ...], ...]


class Move(IntFlag):
    """Direction the blank travels."""

    UP = 1
    DOWN = 2
    LEFT = 4
    RIGHT = 8

    @property
    def letter(self) -> str:
        return _LETTERS[self]

    @property
    def opposite(self) -> "Move":
        return _OPPOSITES[self]

    @property
    def delta(self) -> Tuple[int, int]:
        """Row and column offset of the blank."""
        return _DELTAS[self]


_LETTERS = {Move.UP: "u", Move.DOWN: "d", Move.LEFT: "l", Move.RIGHT: "r"}
_OPPOSITES = {
    Move.UP: Move.DOWN,
    Move.DOWN: Move.UP,
    Move.LEFT: Move.RIGHT,
    Move.RIGHT: Move.LEFT,
}
_DELTAS = {
    Move.UP: (-1, 0),
    Move.DOWN: (1, 0),
    Move.LEFT: (0, -1),
    Move.RIGHT: (0, 1),
}
_MOVE_ORDER = (Move.UP, Move.DOWN, Move.LEFT, Move.RIGHT)


class HeapLimitError(Exception):
    """Raised when the open set outgrows its limit."""

    def __init__(self, message: str = "HEAP SIZE IS NOT ENOUGH") -> None:
        super().__init__(message)


@dataclass(frozen=True, eq=False)
class State:
    """A board reached by a sequence of moves, with its Manhattan heuristic."""

    grid: GridTuple
    blank: Tuple[int, int]
    heuristic: int
    depth: int = 0
    move: Optional[Move] = None
    parent: Optional["State"] = field(default=None, repr=False)

    @classmethod
    def root(cls, puzzle: Puzzle) -> "State":
        return cls(puzzle.grid, puzzle.blank, manhattan_total(puzzle.grid))

    @property
    def size(self) -> int:
        return len(self.grid)

    @property
    def priority(self) -> int:
        return self.heuristic + self.depth

    def legal_moves(self) -> List[Move]:
        """Moves that stay on the board and do not undo the previous one."""
        y, x = self.blank
        last = self.size - 1
        allowed = {
            Move.UP: y != 0,
            Move.DOWN: y != last,
            Move.LEFT: x != 0,
            Move.RIGHT: x != last,
        }
        return [
            move
            for move in _MOVE_ORDER
            if allowed[move] and (self.move is None or move != self.move.opposite)
        ]

    def child(self, move: Move) -> "State":
        """The state after sliding the blank one cell in the given direction."""
        ey, ex = self.blank
        dy, dx = move.delta
        sy, sx = ey + dy, ex + dx
        if not (0 <= sy < self.size and 0 <= sx < self.size):
            raise ValueError(f"move {move.name} leaves the board")
        old = manhattan_distance(self.grid, ey, ex) + manhattan_distance(self.grid, sy, sx)
        rows = [list(row) for row in self.grid]
        rows[ey][ex], rows[sy][sx] = rows[sy][sx], rows[ey][ex]
        grid = tuple(tuple(row) for row in rows)
        new = manhattan_distance(grid, ey, ex) + manhattan_distance(grid, sy, sx)
        return State(
            grid=grid,
            blank=(sy, sx),
            heuristic=self.heuristic + new - old,
            depth=self.depth + 1,
            move=move,
            parent=self,
        )

    def _ancestry(self) -> Iterator["State"]:
        state: Optional[State] = self
        while state is not None:
            yield state
            state = state.parent

    def path(self) -> List["State"]:
        """States from the root down to this one."""
        return list(self._ancestry())[::-1]


class StateHeap:
    """Min-heap of states ordered by depth plus heuristic."""

    def __init__(self) -> None:
        self._items: List[Tuple[int, int, State]] = []
        self._counter = itertools.count()

    def push(self, state: State) -> None:
        heapq.heappush(self._items, (state.priority, next(self._counter), state))

    def pop(self) -> State:
        if not self._items:
            raise IndexError("pop from an empty heap")
        return heapq.heappop(self._items)[2]

    def is_valid(self) -> bool:
        """True if no state has a lower priority than its parent."""
        items = self._items
        return all(
            items[(child - 1) // 2][0] <= items[child][0]
            for child in range(1, len(items))
        )

    def __len__(self) -> int:
        return len(self._items)


class VisitedTable:
    """Hash table of boards already seen, bucketed by FNV-1a."""

    def __init__(self, buckets: int = HASH_SIZE) -> None:
        if buckets <= 0:
            raise ValueError("buckets must be positive")
        self._buckets_count = buckets
        self._buckets: Dict[int, List[GridTuple]] = {}
        self._size = 0

    def add(self, state: State) -> bool:
        """Record the state's board; False if it was already present."""
        bucket = self._buckets.setdefault(
            grid_hash(state.grid, self._buckets_count), []
        )
        if state.grid in bucket:
            return False
        bucket.append(state.grid)
        self._size += 1
        return True

    def __contains__(self, state: object) -> bool:
        if not isinstance(state, State):
            return False
        bucket = self._buckets.get(grid_hash(state.grid, self._buckets_count), ())
        return state.grid in bucket

    def __len__(self) -> int:
        return self._size


@dataclass(frozen=True)
class Solution:
    """The goal state found by a search and the path leading to it."""

    final: State

    @property
    def moves(self) -> Tuple[Move, ...]:
        return tuple(state.move for state in self.final.path() if state.move is not None)

    @property
    def letters(self) -> str:
        return "".join(move.letter for move in self.moves)

    @property
    def grids(self) -> Tuple[GridTuple, ...]:
        return tuple(state.grid for state in self.final.path())


def _default_limit(puzzle: Puzzle) -> int:
    return HEAP_LIMIT_3 if puzzle.size == 3 else HEAP_LIMIT_4


def solve(puzzle: Puzzle, heap_limit: Optional[int] = None) -> Solution:
    """A* search with a visited table; raises HeapLimitError when the heap fills."""
    limit = _default_limit(puzzle) if heap_limit is None else heap_limit
    root = State.root(puzzle)
    if root.heuristic == 0:
        return Solution(root)
    heap = StateHeap()
    visited = VisitedTable()
    heap.push(root)
    visited.add(root)
    while heap:
        current = heap.pop()
        for move in current.legal_moves():
            if len(heap) >= limit - 1:
                raise HeapLimitError()
            child = current.child(move)
            if child.heuristic == 0:
                return Solution(child)
            if visited.add(child):
                heap.push(child)
    raise PuzzleError("no solution found")


def solve_with_queue(puzzle: Puzzle) -> Solution:
    """Best-first search on a priority queue without duplicate detection.

    Among states of equal priority the most recently generated comes first.
    """
    root = State.root(puzzle)
    if root.heuristic == 0:
        return Solution(root)
    counter = itertools.count()
    queue: List[Tuple[int, int, State]] = [(root.priority, 0, root)]
    while queue:
        _, _, current = heapq.heappop(queue)
        for move in current.legal_moves():
            child = current.child(move)
            if child.heuristic == 0:
                return Solution(child)
            heapq.heappush(queue, (child.priority, -next(counter) - 1, child))
    raise PuzzleError("no solution found")


def preview_grid(grid: Grid, letter: str) -> GridTuple:
    """Copy of the grid with the bottom-right cell swapped up ('u') or left ('l')."""
    rows = [list(row) for row in grid]
    size = len(rows)
    blank = size * size
    if letter == "u":
        rows[-1][-1] = rows[-2][-1]
        rows[-2][-1] = blank
    elif letter == "l":
        rows[-1][-1] = rows[-1][-2]
        rows[-1][-2] = blank
    return tuple(tuple(row) for row in rows)