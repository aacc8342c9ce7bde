"""Letter Boxed Puzzle Solver.

Finds chains of dictionary words that use every letter on a four-sided board, where each
word only steps between letters on different sides and each word after the first starts
with the last letter of the previous one.  Uses iterative deepening over the chain length
with a depth-first search over letter bitmasks.
"""

import argparse
import sys
from time import time

from letterboxed.board import Board
from letterboxed.dictionary import Dictionary
from letterboxed.errors import BoardError
from letterboxed.solver.config import config as solver_config
from letterboxed.solver.solver import Solver


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="letterboxed",
        description="Solve a Letter Boxed puzzle.",
    )
    board_group = parser.add_mutually_exclusive_group()
    board_group.add_argument(
        "board",
        nargs="?",
        help="Comma-separated sides, e.g. 'yfa,otk,lgw,rni'.",
    )
    board_group.add_argument(
        "--board",
        dest="board_path",
        metavar="PATH",
        help="Path to a board file with one side per line.",
    )
    parser.add_argument(
        "--dictionary",
        default=solver_config.dictionary_path,
        metavar="PATH",
        help="Dictionary file with '<word> [<frequency>]' on each line.",
    )
    parser.add_argument(
        "--max-solutions",
        type=_non_negative_int,
        default=solver_config.max_solutions,
        help="Stop after this many solutions.",
    )
    parser.add_argument(
        "--max-words",
        type=_positive_int,
        default=solver_config.max_words,
        help="Longest chain of words to search for.",
    )
    parser.add_argument(
        "--order",
        choices=("discovery", "asc", "desc"),
        default="discovery",
        help="Print solutions in discovery order, or by ascending/descending word count.",
    )
    parser.add_argument(
        "--show-digraphs",
        action="store_true",
        help="Print the legal digraphs of the board before solving.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the Letter Boxed solver."""
    args = build_parser().parse_args(argv)

    try:
        if args.board_path is not None:
            board = Board.from_path(args.board_path)
        elif args.board is not None:
            board = Board.from_spec(args.board)
        else:
            print("No board given: pass the sides or --board <path>.", file=sys.stderr)
            sys.exit(1)
    except (BoardError, OSError) as e:
        print(f"Invalid board: {e}", file=sys.stderr)
        sys.exit(1)

    if args.show_digraphs:
        print(f"Number of legal digraphs: {len(board.digraphs)}", file=sys.stderr)
        print(" ".join(board.sorted_digraphs()), file=sys.stderr)

    try:
        dictionary = Dictionary.from_path(args.dictionary)
    except OSError as e:
        print(f"Could not load dictionary: {e}", file=sys.stderr)
        sys.exit(1)

    start_time = time()
    solver = Solver(board, dictionary, args.max_solutions, max_words=args.max_words)
    solutions = solver.solve()
    elapsed = time() - start_time

    if args.order == "discovery":
        ordered = list(solutions)
    else:
        ordered = list(solutions.ranked(descending=args.order == "desc"))
    for solution in ordered:
        print(f"{solution} {solution.score}")

    print(
        f"Found {len(solutions):,} solutions from {len(solver.word_bitmaps):,} playable words "
        f"in {elapsed:.3f}s",
        file=sys.stderr,
    )
