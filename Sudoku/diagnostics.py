"""
Diagnostics: summarise a puzzle and a finished solve run
"""
from typing import Dict, Optional

from .grid import SIZE, SudokuGrid
from .solver import BacktrackingSolver


class SolverDiagnostics:

    @staticmethod
    def analyze_grid(grid: SudokuGrid) -> Dict:
        """Count givens and candidates per empty cell."""
        empties = grid.empty_cells()
        counts = {cell: len(grid.candidates(*cell)) for cell in empties}

        return {
            'givens': grid.filled_count(),
            'empty': len(empties),
            'min_candidates': min(counts.values()) if counts else None,
            'max_candidates': max(counts.values()) if counts else None,
            'dead_cells': sorted(cell for cell, n in counts.items() if n == 0),
            'forced_cells': sorted(cell for cell, n in counts.items() if n == 1),
            'conflicts': list(grid.conflicts),
            'valid': grid.is_valid(),
        }

    @staticmethod
    def print_summary(solver: BacktrackingSolver, puzzle: SudokuGrid,
                      solution: Optional[SudokuGrid]) -> None:
        """
        Print puzzle analysis and solve outcome.

        `puzzle` should be a copy of the grid taken before solving, since the
        solver mutates the grid it owns.
        """
        info = SolverDiagnostics.analyze_grid(puzzle)

        print(f"\n{'='*60}")
        print("DIAGNOSTICS")
        print(f"{'='*60}")
        print(f"Givens: {info['givens']}/{SIZE * SIZE}")
        print(f"Empty cells: {info['empty']}")
        if info['empty']:
            print(f"Candidates per empty cell: {info['min_candidates']}..{info['max_candidates']}")
            print(f"Forced cells (single candidate): {len(info['forced_cells'])}")

        if info['conflicts']:
            print(f"\n⚠ {len(info['conflicts'])} conflicting given(s) skipped while loading:")
            for r, c, v in info['conflicts']:
                print(f"  {v} at row {r + 1}, column {c + 1}")

        if info['dead_cells']:
            print(f"\n⚠ {len(info['dead_cells'])} cell(s) have no candidates from the start:")
            for r, c in info['dead_cells']:
                print(f"  row {r + 1}, column {c + 1}")
            print("   The puzzle is unsatisfiable as given.")

        print(f"\nResult: {'SOLVED' if solution is not None else 'NO SOLUTION'}")
        stats = solver.stats
        print(f"  Search moves: {stats['search_moves']}")
        print(f"  Backtracks: {stats['backtracks']}")
        print(f"  Total attempts: {stats['total_attempts']}")
        print(f"  Elapsed: {stats['elapsed_seconds']:.3f}s")

        if stats['backtracks'] > 100000:
            print("\n⚠️  HIGH BACKTRACK COUNT - row-major search spent long in dead ends")
