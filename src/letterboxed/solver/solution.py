"""Result types produced by the solver."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from sortedcontainers import SortedKeyList

from letterboxed.dictionary import Word


@dataclass(frozen=True)
class Solution:
    """A chain of words that covers every letter on the board."""

    words: tuple[Word, ...]

    @classmethod
    def from_words(cls, words: Iterable[Word]) -> "Solution":
        return cls(tuple(words))

    @property
    def score(self) -> int:
        """Number of words in the chain (lower is better)."""
        return len(self.words)

    @property
    def frequency(self) -> int:
        """Sum of the word frequencies, carried for presentation only."""
        return sum(w.frequency for w in self.words)

    @property
    def texts(self) -> list[str]:
        return [w.text for w in self.words]

    def __str__(self) -> str:
        return "-".join(self.texts)


class SolutionSet:
    """Solutions from a single search, in discovery order, bounded by `max_size`."""

    def __init__(self, max_size: int) -> None:
        if max_size < 0:
            raise ValueError(f"max_size must be non-negative, got {max_size}")
        self.max_size = max_size
        self._solutions: list[Solution] = []
        self.cancelled = False
        """Set when the search was stopped through its cancellation token."""

    def add(self, solution: Solution) -> bool:
        """Append a solution.  Returns False (and drops it) if the set is already full."""
        if self.is_full:
            return False
        self._solutions.append(solution)
        return True

    @property
    def is_full(self) -> bool:
        return len(self._solutions) >= self.max_size

    def ranked(self, *, descending: bool = False) -> SortedKeyList:
        """Order solutions by chain length, breaking ties by higher total frequency.

        Ties beyond that keep discovery order.  `descending` puts the longest chains first.
        """
        sign = -1 if descending else 1
        return SortedKeyList(self._solutions, key=lambda s: (sign * s.score, -s.frequency))

    def to_pairs(self) -> list[tuple[list[str], int]]:
        """Return `(word_chain, score)` pairs in discovery order."""
        return [(s.texts, s.score) for s in self._solutions]

    def __len__(self) -> int:
        return len(self._solutions)

    def __iter__(self) -> Iterator[Solution]:
        return iter(self._solutions)

    def __getitem__(self, idx: int) -> Solution:
        return self._solutions[idx]

    def __bool__(self) -> bool:
        return bool(self._solutions)

    def __repr__(self) -> str:
        return f"SolutionSet({len(self._solutions)}/{self.max_size}, cancelled={self.cancelled})"
