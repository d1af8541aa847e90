"""
Core data structure for Sudoku puzzle representation with occupancy tracking
"""
from typing import List, Optional, Tuple

import numpy as np


SIZE = 9
BOX = 3
EMPTY_MARKERS = {'0', '.', '_'}
EMPTY_PLACEHOLDER = '_'
BORDER = "+-------+-------+-------+"

Position = Tuple[int, int]


def block_index(row: int, col: int) -> int:
    """Row-major index of the 3x3 block containing (row, col)"""
    return (row // BOX) * BOX + (col // BOX)


class PuzzleParseError(ValueError):
    """Raised when puzzle text cannot be loaded into a grid"""

    def __init__(self, message: str, line: Optional[int] = None,
                 column: Optional[int] = None, char: Optional[str] = None):
        super().__init__(message)
        self.line = line
        self.column = column
        self.char = char


class SudokuGrid:
    """
    9x9 Sudoku grid.

    Cell values live in a numpy matrix (0 = empty). Three parallel occupancy
    indexes, one bit-set per row, column and block, record which digits are
    present so a placement can be checked in constant time. Bit ``v - 1`` is
    set for digit ``v``.
    """

    def __init__(self):
        self.cells = np.zeros((SIZE, SIZE), dtype=np.uint8)
        self.row_occupancy: List[int] = [0] * SIZE
        self.col_occupancy: List[int] = [0] * SIZE
        self.block_occupancy: List[int] = [0] * SIZE

        # Placements skipped by lenient loading
        self.conflicts: List[Tuple[int, int, int]] = []

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------
    @classmethod
    def from_text(cls, text: str, strict: bool = True) -> 'SudokuGrid':
        """
        Parse puzzle text: up to 9 lines of up to 9 characters each.

        Digits 1-9 fill a cell, '0', '.' and '_' leave it empty. Anything
        else, or more than 9 lines / characters, raises PuzzleParseError.

        With strict=True a digit that clashes with an earlier one in its
        row, column or block is rejected as well. With strict=False it is
        skipped and recorded in ``grid.conflicts``.
        """
        grid = cls()

        # Only '\n' (optionally preceded by '\r') ends a line; any other
        # separator character is rejected as invalid below
        lines = text.split('\n')
        if lines and lines[-1] == '':
            lines.pop()

        for i, line in enumerate(lines):
            if line.endswith('\r'):
                line = line[:-1]
            if i >= SIZE:
                raise PuzzleParseError(
                    f"Input has more than {SIZE} lines (line {i + 1})", line=i + 1)

            for j, ch in enumerate(line.strip(' \t')):
                if j >= SIZE:
                    raise PuzzleParseError(
                        f"Line {i + 1} has more than {SIZE} characters",
                        line=i + 1, column=j + 1)

                if ch in EMPTY_MARKERS:
                    continue
                if not ('1' <= ch <= '9'):
                    raise PuzzleParseError(
                        f"Invalid character {ch!r} at line {i + 1}, column {j + 1}",
                        line=i + 1, column=j + 1, char=ch)

                value = int(ch)
                if grid.set(i, j, value):
                    continue
                if strict:
                    raise PuzzleParseError(
                        f"Digit {value} at line {i + 1}, column {j + 1} conflicts "
                        f"with an earlier digit in its row, column or block",
                        line=i + 1, column=j + 1, char=ch)
                grid.conflicts.append((i, j, value))

        return grid

    @classmethod
    def from_file(cls, path, strict: bool = True) -> 'SudokuGrid':
        """Load a puzzle from a text file (see from_text for the format)"""
        try:
            with open(path, 'r', encoding='utf-8', newline='') as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise PuzzleParseError(f"Failed to read file {str(path)!r}: {e}") from e

        return cls.from_text(text, strict=strict)

    @classmethod
    def from_rows(cls, rows: List[List[int]]) -> 'SudokuGrid':
        """Build a grid from a 9x9 list of ints (0 = empty)"""
        if len(rows) != SIZE or any(len(r) != SIZE for r in rows):
            raise ValueError(f"Grid must be {SIZE}x{SIZE}")

        grid = cls()
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                if value == 0:
                    continue
                if not grid.set(r, c, int(value)):
                    raise ValueError(f"Conflict: value {value} at ({r},{c})")
        return grid

    def copy(self) -> 'SudokuGrid':
        """Independent copy of cells and occupancy indexes"""
        other = SudokuGrid()
        other.cells = self.cells.copy()
        other.row_occupancy = list(self.row_occupancy)
        other.col_occupancy = list(self.col_occupancy)
        other.block_occupancy = list(self.block_occupancy)
        other.conflicts = list(self.conflicts)
        return other

    # -------------------------------------------------------------------------
    # Cell access and mutation
    # -------------------------------------------------------------------------
    def at(self, row: int, col: int) -> int:
        """Value at a cell, 0 if empty"""
        return int(self.cells[row, col])

    def can_place(self, row: int, col: int, value: int) -> bool:
        """Check whether value is absent from the cell's row, column and block"""
        bit = 1 << (value - 1)
        return not (self.row_occupancy[row] & bit
                    or self.col_occupancy[col] & bit
                    or self.block_occupancy[block_index(row, col)] & bit)

    def set(self, row: int, col: int, value: int) -> bool:
        """
        Place value at (row, col).

        Returns False and leaves the grid untouched if value already occupies
        the row, column or block. The cell must be cleared with unset() before
        it is overwritten with a different value.
        """
        if not 1 <= value <= SIZE:
            raise ValueError(f"Invalid value: {value} (allowed: 1..{SIZE})")

        if not self.can_place(row, col, value):
            return False

        bit = 1 << (value - 1)
        self.cells[row, col] = value
        self.row_occupancy[row] |= bit
        self.col_occupancy[col] |= bit
        self.block_occupancy[block_index(row, col)] |= bit
        return True

    def unset(self, row: int, col: int) -> None:
        """Clear a cell. Does nothing if the cell is already empty."""
        value = self.at(row, col)
        if value == 0:
            return

        mask = ~(1 << (value - 1))
        self.row_occupancy[row] &= mask
        self.col_occupancy[col] &= mask
        self.block_occupancy[block_index(row, col)] &= mask
        self.cells[row, col] = 0

    def candidates(self, row: int, col: int) -> List[int]:
        """Digits that could be placed at an empty cell"""
        if self.at(row, col) != 0:
            return []
        return [v for v in range(1, SIZE + 1) if self.can_place(row, col, v)]

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------
    def find_empty(self) -> Optional[Position]:
        """First empty cell in row-major order"""
        flat = np.flatnonzero(self.cells == 0)
        if flat.size == 0:
            return None
        r, c = divmod(int(flat[0]), SIZE)
        return (r, c)

    def empty_cells(self) -> List[Position]:
        """All empty cells in row-major order"""
        return [(int(r), int(c)) for r, c in np.argwhere(self.cells == 0)]

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def is_complete(self) -> bool:
        """Check if every cell holds a digit"""
        return self.filled_count() == SIZE * SIZE

    def get_completion_percentage(self) -> float:
        """Fraction of cells filled"""
        return self.filled_count() / (SIZE * SIZE)

    def is_valid(self) -> bool:
        """
        Full scan of rows, columns and blocks for repeated digits.

        Independent of the occupancy indexes; empty cells are ignored.
        """
        for i in range(SIZE):
            br, bc = (i // BOX) * BOX, (i % BOX) * BOX
            units = (
                self.cells[i, :],
                self.cells[:, i],
                self.cells[br:br + BOX, bc:bc + BOX].ravel(),
            )
            for unit in units:
                values = unit[unit != 0]
                if np.unique(values).size != values.size:
                    return False
        return True

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------
    def to_rows(self) -> List[List[int]]:
        return self.cells.astype(int).tolist()

    def to_string(self) -> str:
        """Single-line form, 81 characters, '0' for empty"""
        return ''.join(str(v) for v in self.cells.ravel())

    def __eq__(self, other):
        return isinstance(other, SudokuGrid) and np.array_equal(self.cells, other.cells)

    __hash__ = None

    def __str__(self):
        lines = [BORDER]
        for r in range(SIZE):
            row = "|"
            for c in range(SIZE):
                value = self.at(r, c)
                row += f" {value}" if value else f" {EMPTY_PLACEHOLDER}"
                if c % BOX == BOX - 1:
                    row += " |"
            lines.append(row)
            if r % BOX == BOX - 1:
                lines.append(BORDER)
        return "\n".join(lines)

    def __repr__(self):
        return f"SudokuGrid(filled={self.filled_count()}/{SIZE * SIZE}, valid={self.is_valid()})"
