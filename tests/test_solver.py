import pytest

from npuzzle.board import Puzzle, manhattan_total
from npuzzle.solver import (
    HeapLimitError,
    Move,
    Solution,
    State,
    StateHeap,
    VisitedTable,
    preview_grid,
    solve,
    solve_with_queue,
)

GOAL_3 = ((1, 2, 3), (4, 5, 6), (7, 8, 9))


def _scramble(moves):
    state = State.root(Puzzle(GOAL_3))
    for move in moves:
        state = state.child(move)
    return Puzzle(state.grid)


def _differing_cells(a, b):
    return sum(
        1 for row_a, row_b in zip(a, b) for x, y in zip(row_a, row_b) if x != y
    )


SCRAMBLES = [
    [Move.LEFT],
    [Move.UP, Move.LEFT],
    [Move.UP, Move.UP, Move.LEFT, Move.DOWN, Move.LEFT],
    [Move.LEFT, Move.LEFT, Move.UP, Move.RIGHT, Move.UP, Move.RIGHT, Move.DOWN, Move.LEFT],
]


def test_move_letters_and_opposites():
    assert "".join(m.letter for m in (Move.UP, Move.DOWN, Move.LEFT, Move.RIGHT)) == "udlr"
    assert all(m.opposite.opposite == m for m in Move.__members__.values())
    assert Move.UP.opposite == Move.DOWN
    assert Move.LEFT.opposite == Move.RIGHT


def test_root_state_of_goal():
    root = State.root(Puzzle(GOAL_3))
    assert root.heuristic == 0
    assert root.blank == (2, 2)
    assert root.depth == 0
    assert root.legal_moves() == [Move.UP, Move.LEFT]


def test_legal_moves_exclude_reverse():
    child = State.root(Puzzle(GOAL_3)).child(Move.UP)
    assert Move.DOWN not in child.legal_moves()
    assert child.legal_moves() == [Move.UP, Move.LEFT]


def test_child_off_board_raises():
    root = State.root(Puzzle(GOAL_3))
    with pytest.raises(ValueError):
        root.child(Move.DOWN)


@pytest.mark.parametrize("moves", SCRAMBLES)
def test_incremental_heuristic_matches_total(moves):
    state = State.root(Puzzle(GOAL_3))
    for move in moves:
        state = state.child(move)
        assert state.heuristic == manhattan_total(state.grid)
        assert state.priority == state.heuristic + state.depth


def test_path_runs_from_root():
    root = State.root(Puzzle(GOAL_3))
    leaf = root.child(Move.UP).child(Move.LEFT)
    path = leaf.path()
    assert path[0] is root
    assert path[-1] is leaf
    assert [s.depth for s in path] == [0, 1, 2]


def test_heap_pops_in_priority_order():
    root = State.root(_scramble(SCRAMBLES[3]))
    heap = StateHeap()
    states = [root]
    frontier = [root]
    for _ in range(3):
        frontier = [s.child(m) for s in frontier for m in s.legal_moves()]
        states.extend(frontier)
    for state in states:
        heap.push(state)
        assert heap.is_valid()
    assert len(heap) == len(states)
    priorities = [heap.pop().priority for _ in range(len(states))]
    assert priorities == sorted(priorities)
    assert len(heap) == 0


def test_heap_pop_empty_raises():
    with pytest.raises(IndexError):
        StateHeap().pop()


def test_visited_table_rejects_duplicates():
    table = VisitedTable()
    root = State.root(Puzzle(GOAL_3))
    back = root.child(Move.UP).child(Move.DOWN)
    assert root not in table
    assert table.add(root) is True
    assert back in table
    assert table.add(back) is False
    assert len(table) == 1


def test_solve_already_solved():
    solution = solve(Puzzle(GOAL_3))
    assert solution.moves == ()
    assert solution.letters == ""
    assert solution.grids == (GOAL_3,)


def test_solve_one_move():
    solution = solve(_scramble([Move.LEFT]))
    assert solution.moves == (Move.RIGHT,)
    assert solution.letters == "r"


@pytest.mark.parametrize("solver", [solve, solve_with_queue])
@pytest.mark.parametrize("moves", SCRAMBLES)
def test_solutions_reach_goal(solver, moves):
    puzzle = _scramble(moves)
    solution = solver(puzzle)
    grids = solution.grids
    assert grids[0] == puzzle.grid
    assert grids[-1] == GOAL_3
    assert len(grids) == len(solution.moves) + 1
    assert len(solution.letters) == len(solution.moves)
    assert all(_differing_cells(a, b) == 2 for a, b in zip(grids, grids[1:]))


def test_solve_heap_limit():
    puzzle = _scramble(SCRAMBLES[3])
    with pytest.raises(HeapLimitError):
        solve(puzzle, heap_limit=2)


def test_solution_from_state():
    final = State.root(Puzzle(GOAL_3)).child(Move.UP).child(Move.LEFT)
    solution = Solution(final)
    assert solution.letters == "ul"
    assert solution.moves == (Move.UP, Move.LEFT)


def test_preview_grid_up():
    assert preview_grid(GOAL_3, "u") == ((1, 2, 3), (4, 5, 9), (7, 8, 6))


def test_preview_grid_left():
    assert preview_grid(GOAL_3, "l") == ((1, 2, 3), (4, 5, 6), (7, 9, 8))


def test_preview_grid_other_letter_copies():
    assert preview_grid(GOAL_3, "r") == GOAL_3