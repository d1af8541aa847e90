#!/usr/bin/env python3
"""
Sudoku Solver - Main Entry Point

Usage:
    sudoku-solve data/puzzles/classic.txt
    sudoku-solve --verbose --timeout 30 data/puzzles/classic.txt
    sudoku-solve --output data/debug data/puzzles/classic.txt
    sudoku-solve --all data/puzzles
    python -m Sudoku.main data/puzzles/classic.txt
"""

import sys
from pathlib import Path
from typing import List, Optional

from .diagnostics import SolverDiagnostics
from .grid import PuzzleParseError, SudokuGrid
from .output import SolutionFormatter
from .solver import BacktrackingSolver, SolveTimeout

# ============================================================================
# CONFIGURATION
# ============================================================================
DEFAULT_PUZZLE_DIR = "data/puzzles"   # Used by --all when no directory given
OUTPUT_DIR = None                     # Set to a path to always save results

TIMEOUT_SECONDS = None
# Maximum time to spend solving a single puzzle (None = no limit)

VERBOSE = False
# Print search progress and statistics

STRICT_LOADING = True
# - True: a given that clashes with an earlier digit is a load error
# - False: the clashing given is skipped and reported as a warning

PROGRESS_INTERVAL = 10000
# Attempts between progress lines in verbose mode
# ============================================================================

USAGE = """Usage: sudoku-solve [options] <puzzle.txt>
       sudoku-solve [options] --all [<dir>]

Options:
  --lenient          Skip conflicting givens instead of rejecting the puzzle
  --verbose, -v      Print search progress and statistics
  --timeout SECONDS  Give up after SECONDS of searching
  --output DIR       Save solution.json and solution.txt under DIR/<puzzle>/
  --all [DIR]        Solve every *.txt puzzle in DIR
"""

EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_USAGE = 2
EXIT_TIMEOUT = 3


def solve_puzzle(input_path: str, output_dir: Optional[str] = OUTPUT_DIR,
                 verbose: bool = VERBOSE,
                 strict: bool = STRICT_LOADING,
                 timeout_seconds: Optional[float] = TIMEOUT_SECONDS,
                 quiet: bool = False):
    """
    Load, solve and print a single puzzle.

    Args:
        input_path: Path to the puzzle text file
        output_dir: Base directory for saved results (None = don't save)
        verbose: Print search progress, statistics and diagnostics
        strict: Reject puzzles whose givens clash
        timeout_seconds: Maximum solving time in seconds
        quiet: Skip printing the input and solution grids

    Returns:
        (solution, puzzle, solver) where solution is None if the puzzle
        has no solution and puzzle is the grid as loaded.

    Raises:
        PuzzleParseError: the puzzle could not be loaded
        SolveTimeout: timeout_seconds elapsed before the search finished
    """
    grid = SudokuGrid.from_file(input_path, strict=strict)
    puzzle = grid.copy()

    if not quiet:
        print("Input:")
        print(grid)

    if grid.conflicts:
        print(f"Warning: skipped {len(grid.conflicts)} conflicting given(s)", file=sys.stderr)

    solver = BacktrackingSolver(
        grid,
        verbose=verbose,
        timeout_seconds=timeout_seconds,
        progress_interval=PROGRESS_INTERVAL
    )
    solution = solver.solve()

    if not quiet:
        if solution is not None:
            print("Solution:")
            print(solution)
        else:
            print("No solution found")

    if verbose:
        SolverDiagnostics.print_summary(solver, puzzle, solution)

    if output_dir is not None:
        puzzle_dir = Path(output_dir) / Path(input_path).stem
        SolutionFormatter.save_solution(puzzle, solution, solver.stats,
                                        str(puzzle_dir / "solution.json"))
        SolutionFormatter.save_human_readable(puzzle, solution, solver.stats,
                                              str(puzzle_dir / "solution.txt"))

    return solution, puzzle, solver


def solve_all_puzzles(data_dir: str = DEFAULT_PUZZLE_DIR,
                      output_dir: Optional[str] = OUTPUT_DIR,
                      strict: bool = STRICT_LOADING,
                      timeout_seconds: Optional[float] = TIMEOUT_SECONDS) -> List[dict]:
    """
    Solve every *.txt puzzle in a directory and print a summary.

    Load failures and timeouts are recorded per puzzle and do not stop the batch.
    """
    data_path = Path(data_dir)
    if not data_path.is_dir():
        raise FileNotFoundError(f"Directory not found: {data_dir}")

    puzzle_files = sorted(data_path.glob("*.txt"))
    if not puzzle_files:
        print(f"No puzzles found in {data_dir}")
        return []

    print(f"\nFound {len(puzzle_files)} puzzle(s) to solve")

    results = []

    for i, puzzle_file in enumerate(puzzle_files, 1):
        print(f"\n[{i}/{len(puzzle_files)}] Solving {puzzle_file.name}...")

        result = {'file': puzzle_file.name, 'status': None, 'backtracks': None, 'elapsed': None}
        try:
            solution, _, solver = solve_puzzle(
                str(puzzle_file),
                output_dir=output_dir,
                verbose=False,
                strict=strict,
                timeout_seconds=timeout_seconds,
                quiet=True
            )
        except PuzzleParseError as e:
            result['status'] = 'error'
            print(f"  ✗ LOAD ERROR: {e}")
        except SolveTimeout as e:
            result['status'] = 'timeout'
            result['backtracks'] = e.stats['backtracks']
            print(f"  ✗ {e}")
        else:
            result['status'] = 'solved' if solution is not None else 'no_solution'
            result['backtracks'] = solver.stats['backtracks']
            result['elapsed'] = solver.stats['elapsed_seconds']
            print("  ✓ SOLVED" if solution is not None else "  ✗ NO SOLUTION")

        results.append(result)

    # ---------------------------
    # Print summary
    # ---------------------------
    print(f"\n{'='*60}")
    print("SUMMARY")
    print(f"{'='*60}")
    solved_count = sum(1 for r in results if r['status'] == 'solved')
    print(f"Solved: {solved_count}/{len(results)} puzzles\n")

    for r in results:
        status = "✓" if r['status'] == 'solved' else "✗"
        print(f"{status} {r['file']:30s} {r['status']:12s}", end="")
        if r['elapsed'] is not None:
            print(f" {r['backtracks']} backtracks, {r['elapsed']:.3f}s")
        else:
            print()

    print(f"{'='*60}")

    return results


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = list(sys.argv[1:] if argv is None else argv)

    strict = STRICT_LOADING
    verbose = VERBOSE
    timeout_seconds = TIMEOUT_SECONDS
    output_dir = OUTPUT_DIR
    batch_dir = None
    positional = []

    while args:
        arg = args.pop(0)
        if arg == "--lenient":
            strict = False
        elif arg in ("--verbose", "-v"):
            verbose = True
        elif arg in ("--timeout", "--output"):
            if not args:
                print(f"Error: {arg} requires a value\n", file=sys.stderr)
                print(USAGE, file=sys.stderr)
                return EXIT_USAGE
            value = args.pop(0)
            if arg == "--output":
                output_dir = value
                continue
            try:
                timeout_seconds = float(value)
            except ValueError:
                print(f"Error: invalid timeout: {value!r}", file=sys.stderr)
                return EXIT_USAGE
        elif arg == "--all":
            batch_dir = args.pop(0) if args and not args[0].startswith("-") else DEFAULT_PUZZLE_DIR
        elif arg in ("--help", "-h"):
            print(USAGE)
            return EXIT_OK
        elif arg.startswith("-"):
            print(f"Error: unknown option {arg}\n", file=sys.stderr)
            print(USAGE, file=sys.stderr)
            return EXIT_USAGE
        else:
            positional.append(arg)

    if batch_dir is not None:
        try:
            solve_all_puzzles(batch_dir, output_dir=output_dir, strict=strict,
                              timeout_seconds=timeout_seconds)
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_LOAD_ERROR
        return EXIT_OK

    if len(positional) != 1:
        print(USAGE, file=sys.stderr)
        return EXIT_USAGE

    try:
        solve_puzzle(positional[0], output_dir=output_dir, verbose=verbose,
                     strict=strict, timeout_seconds=timeout_seconds)
    except PuzzleParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_LOAD_ERROR
    except SolveTimeout as e:
        print(f"{e}", file=sys.stderr)
        return EXIT_TIMEOUT

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
