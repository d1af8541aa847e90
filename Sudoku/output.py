import json
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from .grid import SIZE, SudokuGrid


class SolutionFormatter:
    """Formats puzzle solutions for output"""

    @staticmethod
    def format_grid(grid: SudokuGrid) -> str:
        """Bordered 9x9 layout with block separators"""
        return str(grid)

    @staticmethod
    def format_solution_json(puzzle: SudokuGrid, solution: Optional[SudokuGrid], stats: Dict) -> Dict:
        """
        Format solution as JSON
        """
        return {
            'puzzle_info': {
                'givens': puzzle.filled_count(),
                'empty_cells': SIZE * SIZE - puzzle.filled_count(),
                'solved': solution is not None,
                'timestamp': datetime.now().isoformat()
            },
            'solving_stats': stats,
            'puzzle': puzzle.to_string(),
            'puzzle_rows': puzzle.to_rows(),
            'solution': solution.to_string() if solution is not None else None,
            'solution_rows': solution.to_rows() if solution is not None else None,
        }

    @staticmethod
    def format_solution_human_readable(puzzle: SudokuGrid, solution: Optional[SudokuGrid],
                                       stats: Dict) -> str:
        """
        Format input, solution and solving stats as plain text
        """
        lines = []
        lines.append("=" * 60)
        lines.append("SUDOKU SOLUTION")
        lines.append("=" * 60)
        lines.append(f"\nPuzzle has {puzzle.filled_count()} givens, "
                     f"{SIZE * SIZE - puzzle.filled_count()} empty cells\n")

        lines.append("Input:")
        lines.append(SolutionFormatter.format_grid(puzzle))

        if solution is not None:
            lines.append("\nSolution:")
            lines.append(SolutionFormatter.format_grid(solution))
        else:
            lines.append("\nNo solution found")

        if stats:
            lines.append("\n" + "-" * 60)
            lines.append("SOLVING STATS:")
            for key, value in stats.items():
                if isinstance(value, float):
                    value = f"{value:.3f}"
                lines.append(f"  {key}: {value}")

        lines.append("=" * 60)

        return "\n".join(lines)

    @staticmethod
    def save_solution(puzzle: SudokuGrid, solution: Optional[SudokuGrid], stats: Dict,
                      output_path: str):
        """
        Save solution to JSON file
        """
        data = SolutionFormatter.format_solution_json(puzzle, solution, stats)

        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(data, f, indent=2)

        print(f"\n✓ Solution saved to: {output_path}")

    @staticmethod
    def save_human_readable(puzzle: SudokuGrid, solution: Optional[SudokuGrid], stats: Dict,
                            output_path: str):
        """
        Save human-readable solution to text file
        """
        text = SolutionFormatter.format_solution_human_readable(puzzle, solution, stats)

        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            f.write(text + "\n")
