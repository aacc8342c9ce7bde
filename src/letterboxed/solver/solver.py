"""Main solver module: depth-first search for chains of words covering the board."""

from collections.abc import Callable, Iterator, Sequence
from contextlib import closing
from typing import NamedTuple, TypeAlias

from letterboxed.board import Board
from letterboxed.dictionary import Dictionary, Word
from letterboxed.solver.cancellation import CancellationToken
from letterboxed.solver.config import config as solver_config
from letterboxed.solver.solution import Solution, SolutionSet

BatchSink: TypeAlias = Callable[[list[Solution]], None]
"""Receives each batch of solutions from `Solver.solve_streaming`."""


class WordBitmap(NamedTuple):
    """A playable word and the board letters it contains."""

    word: Word
    bitmap: int
    """Bit i is set iff the word contains the i-th board letter."""


class Solver:
    """Find chains of playable words that use every letter on a board.

    Chains are searched by iterative deepening over the chain length (1 word, then 2, ...,
    up to `max_words`), each length explored depth-first.  A chain is accepted only when it
    has exactly the target length and covers all board letters.  Words that add no new letter
    to the chain are never tried.  The whole search stops as soon as `max_solutions` chains
    have been found.

    All derived data is built once in the constructor and never modified, so a solver may be
    searched repeatedly (and from several threads) without interference.
    """

    def __init__(
        self,
        board: Board,
        dictionary: Dictionary,
        max_solutions: int | None = None,
        *,
        max_words: int | None = None,
    ) -> None:
        """Prepare a solver for `board`.

        Args:
            board (Board): The puzzle board.
            dictionary (Dictionary): Candidate words; filtered to the playable ones here.
            max_solutions (int | None): Cap on solutions per search.  Defaults to the
                configured `max_solutions`.
            max_words (int | None): Longest chain to search for.  Defaults to the configured
                `max_words`.
        """
        if max_solutions is None:
            max_solutions = solver_config.max_solutions
        if max_words is None:
            max_words = solver_config.max_words
        if max_solutions < 0:
            raise ValueError(f"max_solutions must be non-negative, got {max_solutions}")
        if max_words < 1:
            raise ValueError(f"max_words must be at least 1, got {max_words}")

        self.board = board
        self.max_solutions = max_solutions
        self.max_words = max_words

        # Bit position of each letter, in side order
        self.letter_bits: dict[str, int] = {ch: 1 << i for i, ch in enumerate(board.letters)}
        self.all_letters_mask = (1 << len(board.letters)) - 1

        playable = dictionary.playable_dictionary(board)
        self.word_bitmaps: list[WordBitmap] = [
            WordBitmap(w, self.bitmap_of(w.text)) for w in playable
        ]

        self.words_by_first_letter: dict[str, list[int]] = {}
        for idx, word_bitmap in enumerate(self.word_bitmaps):
            self.words_by_first_letter.setdefault(word_bitmap.word.first, []).append(idx)

    def bitmap_of(self, text: str) -> int:
        """OR together the bits of the board letters in `text` (other letters are ignored)."""
        bitmap = 0
        for ch in text:
            bitmap |= self.letter_bits.get(ch, 0)
        return bitmap

    def iter_solutions(self, token: CancellationToken | None = None) -> Iterator[Solution]:
        """Lazily yield every solution in discovery order, ignoring `max_solutions`.

        If `token` is given, it is checked before each candidate word is expanded and the
        generator finishes early once it is cancelled.
        """
        for target_words in range(1, self.max_words + 1):
            if token is not None and token.cancelled:
                return
            yield from self._search([], 0, target_words, token)

    def _search(
        self,
        path: list[Word],
        covered: int,
        target_words: int,
        token: CancellationToken | None,
    ) -> Iterator[Solution]:
        """Extend `path` depth-first until it holds `target_words` words.

        `path` is shared down the recursion; every append is undone before returning.
        """
        if covered == self.all_letters_mask and len(path) == target_words:
            yield Solution(tuple(path))
            return
        if len(path) >= target_words:
            return

        candidates: Sequence[int]
        if path:
            candidates = self.words_by_first_letter.get(path[-1].last, ())
        else:
            candidates = range(len(self.word_bitmaps))
        is_last_word = len(path) + 1 == target_words

        for idx in candidates:
            if token is not None and token.cancelled:
                return
            word, bitmap = self.word_bitmaps[idx]
            new_covered = covered | bitmap

            # Only continue if this word adds new letters
            if new_covered == covered:
                continue
            # The final word has to complete the cover
            if is_last_word and new_covered != self.all_letters_mask:
                continue

            path.append(word)
            try:
                yield from self._search(path, new_covered, target_words, token)
            finally:
                path.pop()

    def solve(self) -> SolutionSet:
        """Run the search to completion or until `max_solutions` are found."""
        return self._collect(None)

    def solve_cancellable(self, token: CancellationToken) -> SolutionSet:
        """Like `solve`, but stop early (keeping what was found) once `token` is cancelled.

        The token is checked before each candidate word is expanded.
        """
        return self._collect(token)

    def _collect(self, token: CancellationToken | None) -> SolutionSet:
        solutions = SolutionSet(self.max_solutions)
        if self.max_solutions == 0:
            return solutions

        with closing(self.iter_solutions(token)) as found:
            for solution in found:
                solutions.add(solution)
                if solutions.is_full:
                    break

        if token is not None and token.cancelled and not solutions.is_full:
            solutions.cancelled = True
        return solutions

    def solve_streaming(
        self,
        on_batch: BatchSink,
        token: CancellationToken | None = None,
        *,
        batch_size: int | None = None,
    ) -> int:
        """Run the search, handing solutions to `on_batch` in batches as they are found.

        The token is checked before each candidate word is expanded and again after each full
        batch is delivered; once it is cancelled the search stops.  A final partial batch is
        delivered when the search ends, is cancelled, or reaches `max_solutions`.

        Args:
            on_batch (BatchSink): Called with each batch (a fresh list) of solutions.
            token (CancellationToken | None): Optional cancellation token.
            batch_size (int | None): Solutions per batch.  Defaults to the configured value.

        Returns:
            The number of solutions delivered.
        """
        if batch_size is None:
            batch_size = solver_config.batch_size
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        if self.max_solutions == 0:
            return 0

        delivered = 0
        batch: list[Solution] = []
        with closing(self.iter_solutions(token)) as found:
            for solution in found:
                batch.append(solution)
                if delivered + len(batch) >= self.max_solutions:
                    break
                if len(batch) >= batch_size:
                    on_batch(batch)
                    delivered += len(batch)
                    batch = []
                    if token is not None and token.cancelled:
                        return delivered

        if batch:
            on_batch(batch)
            delivered += len(batch)
        return delivered


def solve(
    board: Board,
    dictionary: Dictionary,
    max_solutions: int | None = None,
) -> list[tuple[list[str], int]]:
    """Solve `board` with `dictionary`, returning `(word_chain, score)` pairs in discovery order."""
    return Solver(board, dictionary, max_solutions).solve().to_pairs()
