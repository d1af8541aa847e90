from pathlib import Path

import pytest

from Sudoku import SudokuGrid
from puzzles import CLASSIC, CLASSIC_SOLUTION


@pytest.fixture
def classic_grid() -> SudokuGrid:
    return SudokuGrid.from_text(CLASSIC)


@pytest.fixture
def solved_grid() -> SudokuGrid:
    rows = [[int(ch) for ch in CLASSIC_SOLUTION[r * 9:(r + 1) * 9]] for r in range(9)]
    return SudokuGrid.from_rows(rows)


@pytest.fixture
def unsolvable_grid() -> SudokuGrid:
    # (0, 8) needs a 9, but 9 already sits in its column and block
    return SudokuGrid.from_text("12345678_\n________9\n")


@pytest.fixture
def puzzle_file(tmp_path):
    def write(text: str, name: str = "puzzle.txt") -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path
    return write
