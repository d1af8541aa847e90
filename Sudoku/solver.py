"""
Backtracking solver for 9x9 Sudoku

Depth-first search over empty cells in row-major order, trying digits in
ascending order. The search is iterative: committed placements are kept on
an explicit history stack, and backtracking pops that stack and resumes at
the next higher digit for the popped cell.
"""

import time
from typing import Dict, List, Optional, Tuple

from .grid import SIZE, Position, SudokuGrid


Choice = Tuple[Position, int]

# Attempts between wall-clock checks when a timeout is set
TIMEOUT_CHECK_INTERVAL = 1000


class SolveTimeout(RuntimeError):
    """Raised when the search runs past its time limit"""

    def __init__(self, message: str, stats: Dict):
        super().__init__(message)
        self.stats = stats


class BacktrackingSolver:
    def __init__(self, grid: SudokuGrid, verbose: bool = False,
                 timeout_seconds: Optional[float] = None,
                 progress_interval: int = 10000):
        self.grid = grid
        self.verbose = verbose
        self.timeout = timeout_seconds
        self.progress_interval = progress_interval
        self.choices: List[Choice] = []
        self.stats = {
            'search_moves': 0,
            'backtracks': 0,
            'total_attempts': 0,
            'max_depth': 0,
            'elapsed_seconds': 0.0,
        }
        self._spent = False

    # -------------------------------------------------------------------------
    # Main solving driver
    # -------------------------------------------------------------------------
    def solve(self) -> Optional[SudokuGrid]:
        """
        Run the search to completion.

        Returns the solved grid, or None if the puzzle has no solution.
        The grid is mutated in place and handed back to the caller; a solver
        can only be used once. If SolveTimeout is raised, the search
        placements are undone first, so the grid holds only its givens.
        """
        if self._spent:
            raise RuntimeError("Solver already used; grid has been handed back")
        self._spent = True

        self.start_time = time.time()

        if self.verbose:
            print(f"Starting backtracking solver: {self.grid!r}")
            print(f"Empty cells: {SIZE * SIZE - self.grid.filled_count()}\n")

        try:
            solved = self._search()
        except SolveTimeout:
            self._unwind()
            raise
        finally:
            self.stats['elapsed_seconds'] = time.time() - self.start_time
            self.choices.clear()

        if self.verbose:
            print("\n✓ Puzzle solved!" if solved else "\n✗ No solution found")
            self.print_stats()

        return self.grid if solved else None

    def _search(self) -> bool:
        grid = self.grid
        choices = self.choices

        while True:
            cell = grid.find_empty()

            if cell is None:
                # Fully populated: confirm with a scan independent of the indexes
                return grid.is_valid()

            if self._place_from(cell, 1):
                continue

            # Dead end: undo choices until one can advance to a higher digit
            while True:
                if not choices:
                    return False

                (r, c), value = choices.pop()
                self.stats['backtracks'] += 1
                grid.unset(r, c)

                if self._place_from((r, c), value + 1):
                    break

    def _unwind(self) -> None:
        """Undo every recorded choice, leaving only the original givens."""
        while self.choices:
            (r, c), _ = self.choices.pop()
            self.grid.unset(r, c)

    def _place_from(self, cell: Position, start: int) -> bool:
        """Place the lowest digit >= start that fits at cell and record it."""
        r, c = cell
        for value in range(start, SIZE + 1):
            self._tick()
            if self.grid.set(r, c, value):
                self.choices.append((cell, value))
                self.stats['search_moves'] += 1
                if len(self.choices) > self.stats['max_depth']:
                    self.stats['max_depth'] = len(self.choices)
                return True
        return False

    def _tick(self) -> None:
        self.stats['total_attempts'] += 1
        attempts = self.stats['total_attempts']

        if self.timeout is not None and attempts % TIMEOUT_CHECK_INTERVAL == 0:
            if time.time() - self.start_time > self.timeout:
                self.stats['elapsed_seconds'] = time.time() - self.start_time
                raise SolveTimeout(
                    f"Timed out after {self.timeout}s", dict(self.stats))

        if self.verbose and self.progress_interval:
            if attempts % self.progress_interval == 0:
                cp = self.grid.get_completion_percentage()
                print(f"  Progress: {cp:.1%} | Attempts: {attempts} | "
                      f"Backtracks: {self.stats['backtracks']} | Depth: {len(self.choices)}")

    # -------------------------------------------------------------------------
    # Stats
    # -------------------------------------------------------------------------
    def print_stats(self) -> None:
        """Print solving statistics."""
        print("\nSolving Statistics:")
        print(f"  Search moves: {self.stats['search_moves']}")
        print(f"  Backtracks: {self.stats['backtracks']}")
        print(f"  Total attempts: {self.stats['total_attempts']}")
        print(f"  Max depth: {self.stats['max_depth']}")
        print(f"  Elapsed: {self.stats['elapsed_seconds']:.3f}s")


def solve_grid(grid: SudokuGrid, **kwargs) -> Optional[SudokuGrid]:
    """Solve a grid in place; see BacktrackingSolver for keyword arguments"""
    return BacktrackingSolver(grid, **kwargs).solve()
