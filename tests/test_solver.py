import pytest

from Sudoku import BacktrackingSolver, SolveTimeout, SudokuGrid, solve_grid
from puzzles import ANTI_BRUTE_FORCE, CLASSIC_SOLUTION, assert_same_state, snapshot


def assert_solved(grid: SudokuGrid):
    assert grid.is_complete()
    assert grid.is_valid()
    for i in range(9):
        assert sorted(grid.cells[i, :].tolist()) == list(range(1, 10))
        assert sorted(grid.cells[:, i].tolist()) == list(range(1, 10))
        br, bc = (i // 3) * 3, (i % 3) * 3
        assert sorted(grid.cells[br:br + 3, bc:bc + 3].ravel().tolist()) == list(range(1, 10))


def test_solves_classic_puzzle(classic_grid):
    givens = classic_grid.copy()
    solution = BacktrackingSolver(classic_grid).solve()

    assert solution is not None
    assert_solved(solution)
    assert solution.to_string() == CLASSIC_SOLUTION
    for r, c in [(0, 0), (0, 1), (8, 8)]:
        assert solution.at(r, c) == givens.at(r, c)


def test_solution_is_the_owned_grid(classic_grid):
    solver = BacktrackingSolver(classic_grid)
    assert solver.solve() is classic_grid


def test_solves_empty_grid():
    solution = solve_grid(SudokuGrid())
    assert solution is not None
    assert_solved(solution)
    # Row-major, ascending digits: the first row is 1..9
    assert solution.to_rows()[0] == list(range(1, 10))


def test_unsolvable_returns_none(unsolvable_grid):
    before = snapshot(unsolvable_grid)
    solver = BacktrackingSolver(unsolvable_grid)
    assert solver.solve() is None
    # Every choice was undone
    assert_same_state(unsolvable_grid, before)
    assert solver.choices == []


def test_unsolvable_after_search():
    # Row 0 needs 8 and 9 in its last two cells; column 8 already holds both,
    # so each digit tried at (0, 7) dead-ends at (0, 8).
    grid = SudokuGrid.from_text("1234567__\n\n\n________9\n________8\n")
    solver = BacktrackingSolver(grid)
    assert solver.solve() is None
    assert solver.stats['search_moves'] == 2
    assert solver.stats['backtracks'] == 2


def test_already_solved_grid_returned_unchanged(solved_grid):
    before = snapshot(solved_grid)
    solver = BacktrackingSolver(solved_grid)
    solution = solver.solve()

    assert solution is solved_grid
    assert_same_state(solution, before)
    assert solver.stats['search_moves'] == 0
    assert solver.stats['total_attempts'] == 0


def test_full_but_invalid_grid_reports_no_solution(solved_grid):
    # Corrupt the cells behind the indexes' back; only the final scan sees it
    solved_grid.cells[0, 0], solved_grid.cells[0, 1] = solved_grid.cells[0, 1], solved_grid.cells[0, 0]
    solved_grid.cells[1, 0] = solved_grid.cells[0, 0]
    assert BacktrackingSolver(solved_grid).solve() is None


def test_stats_are_tracked(classic_grid):
    solver = BacktrackingSolver(classic_grid)
    solver.solve()

    stats = solver.stats
    assert stats['search_moves'] >= 51
    assert stats['backtracks'] == stats['search_moves'] - 51
    assert stats['total_attempts'] >= stats['search_moves']
    assert stats['max_depth'] == 51
    assert stats['elapsed_seconds'] >= 0


def test_solver_cannot_be_reused(classic_grid):
    solver = BacktrackingSolver(classic_grid)
    solver.solve()
    with pytest.raises(RuntimeError):
        solver.solve()


def test_timeout_raises():
    grid = SudokuGrid.from_text(ANTI_BRUTE_FORCE)
    solver = BacktrackingSolver(grid, timeout_seconds=-1)
    with pytest.raises(SolveTimeout) as exc:
        solver.solve()
    assert exc.value.stats['total_attempts'] == 1000
    assert solver.choices == []


def test_timeout_restores_givens():
    grid = SudokuGrid.from_text(ANTI_BRUTE_FORCE)
    before = snapshot(grid)

    with pytest.raises(SolveTimeout) as exc:
        BacktrackingSolver(grid, timeout_seconds=-1).solve()

    assert exc.value.stats['search_moves'] > 0
    assert grid.filled_count() == 17
    assert_same_state(grid, before)


def test_verbose_prints_progress_and_stats(classic_grid, capsys):
    BacktrackingSolver(classic_grid, verbose=True, progress_interval=10).solve()
    out = capsys.readouterr().out
    assert "Starting backtracking solver" in out
    assert "Progress:" in out
    assert "Puzzle solved" in out
    assert "Backtracks:" in out
