"""Exact cover by Knuth's Algorithm X, using bitmasks instead of a boolean matrix.

Columns (universe elements) are bits of an int; the rows (subsets) still available on the
current branch are tracked as a `bitarray`.  Selecting a row clears its columns from the
uncovered mask and removes every row that shares a column with it, so nothing is copied
or deleted while recursing.

This is an alternative formulation of the puzzle and is not used by `Solver`: an exact
cover forbids any two words from sharing a letter, while consecutive words in a Letter
Boxed chain always share one.  Word-chaining constraints cannot simply be bolted on by
discarding rows that add no new letters, since such words may be needed as bridges.
"""

from collections.abc import Collection, Hashable, Iterator, Sequence
from itertools import islice
from typing import Generic, TypeVar

from bitarray import bitarray
from bitarray.util import ones, zeros

from letterboxed.board import Board
from letterboxed.dictionary import Dictionary, Word

T = TypeVar("T", bound=Hashable)
L = TypeVar("L")


class ExactCover(Generic[T, L]):
    """Find every way to pick subsets so each universe element is covered exactly once."""

    def __init__(
        self,
        universe: Sequence[T],
        subsets: Sequence[Collection[T]],
        labels: Sequence[L] | None = None,
    ) -> None:
        """Set up the cover problem.

        Args:
            universe: Elements to cover.  Duplicates are ignored.
            subsets: Candidate subsets (rows); each must only hold universe elements.
            labels: Label reported for each subset in solutions.  Defaults to the subset index.

        Raises:
            ValueError: If `labels` and `subsets` differ in length, or a subset holds an
                element outside the universe.
        """
        if labels is not None and len(labels) != len(subsets):
            raise ValueError(
                f"Got {len(labels)} labels for {len(subsets)} subsets; lengths must match."
            )
        self.labels: Sequence = labels if labels is not None else range(len(subsets))

        col_of = {el: col for col, el in enumerate(dict.fromkeys(universe))}
        self.n_cols = len(col_of)
        self.n_rows = len(subsets)

        self.row_masks: list[int] = []
        self.column_rows: list[bitarray] = [zeros(self.n_rows) for _ in range(self.n_cols)]
        for row, subset in enumerate(subsets):
            mask = 0
            for el in subset:
                if el not in col_of:
                    raise ValueError(f"Subset {row} holds {el!r}, which is not in the universe.")
                col = col_of[el]
                mask |= 1 << col
                self.column_rows[col][row] = True
            self.row_masks.append(mask)

        # Rows that can no longer be chosen once `row` is chosen (including itself)
        self.row_conflicts: list[bitarray] = []
        for mask in self.row_masks:
            conflicts = zeros(self.n_rows)
            for col in _bits(mask):
                conflicts |= self.column_rows[col]
            self.row_conflicts.append(conflicts)

    def solutions(self) -> Iterator[list[L]]:
        """Yield each exact cover as a list of labels, in row order of the branches taken.

        An empty universe has exactly one (empty) cover.
        """
        all_cols = (1 << self.n_cols) - 1
        yield from self._search(all_cols, ones(self.n_rows), [])

    def _search(self, uncovered: int, active: bitarray, partial: list[L]) -> Iterator[list[L]]:
        if uncovered == 0:
            yield list(partial)
            return

        # Choose the least-constrained column; give up if some column can't be covered
        best_rows: bitarray | None = None
        best_count = self.n_rows + 1
        for col in _bits(uncovered):
            rows = self.column_rows[col] & active
            count = rows.count()
            if count == 0:
                return
            if count < best_count:
                best_rows, best_count = rows, count

        assert best_rows is not None
        for row in best_rows.search(1):
            partial.append(self.labels[row])
            yield from self._search(
                uncovered & ~self.row_masks[row],
                active & ~self.row_conflicts[row],
                partial,
            )
            partial.pop()


def _bits(mask: int) -> Iterator[int]:
    """Yield the positions of the set bits in `mask`, lowest first."""
    while mask:
        low = mask & -mask
        yield low.bit_length() - 1
        mask ^= low


def exact_letter_covers(
    board: Board,
    dictionary: Dictionary,
    max_covers: int | None = None,
) -> list[list[Word]]:
    """Find sets of playable words that use each board letter exactly once.

    Word order within a cover is not a chain; see the module docstring.
    """
    playable = dictionary.playable_dictionary(board).words
    problem: ExactCover[str, Word] = ExactCover(
        board.letters,
        [set(w.text) for w in playable],
        playable,
    )
    return list(islice(problem.solutions(), max_covers))
