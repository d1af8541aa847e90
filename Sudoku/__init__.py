"""
Sudoku Solver Package

A 9x9 Sudoku grid with constant-time placement checks and an iterative
backtracking solver.
"""

from .grid import SudokuGrid, PuzzleParseError, block_index
from .solver import BacktrackingSolver, SolveTimeout, solve_grid
from .output import SolutionFormatter
from .diagnostics import SolverDiagnostics

__version__ = "1.0.0"
__all__ = [
    'SudokuGrid',
    'PuzzleParseError',
    'block_index',
    'BacktrackingSolver',
    'SolveTimeout',
    'solve_grid',
    'SolutionFormatter',
    'SolverDiagnostics'
]
