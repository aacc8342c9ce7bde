"""Module for dictionary management: words, loaders and board filtering."""

import sys
import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from letterboxed.errors import (
    DictionaryAlreadyInitializedError,
    DictionaryNotInitializedError,
    ParseError,
)
from letterboxed.solver.config import config as solver_config

if TYPE_CHECKING:
    from letterboxed.board import Board

MIN_FREQUENCY = -128
MAX_FREQUENCY = 127


def extract_digraphs(word: str) -> frozenset[str]:
    """Return the set of consecutive letter pairs in `word` (n letters give n-1 pairs)."""
    return frozenset(word[i : i + 2] for i in range(len(word) - 1))


@dataclass(frozen=True)
class Word:
    """A dictionary word with its frequency and derived digraphs."""

    text: str
    """The word itself, lowercase."""

    frequency: int = field(default_factory=lambda: solver_config.default_frequency)
    """Small integer frequency carried through to solutions."""

    digraphs: frozenset[str] = field(init=False, repr=False, compare=False)
    """Consecutive letter pairs of `text`."""

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("Words must be nonempty.")
        object.__setattr__(self, "digraphs", extract_digraphs(self.text))

    @property
    def first(self) -> str:
        return self.text[0]

    @property
    def last(self) -> str:
        return self.text[-1]

    def __str__(self) -> str:
        return self.text


def parse_word_line(line: str | bytes, line_number: int) -> Word | None:
    """Parse one dictionary line.

    A line is either a bare word or `<word> <frequency>`.  Words are lowercased; the frequency
    must be an integer in [-128, 127].  Blank lines return None.

    Raises:
        ParseError: If the line is malformed.
    """
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError:
            raise ParseError(
                f"Line {line_number} is not valid UTF-8",
                line_number=line_number,
                line=line.decode("utf-8", errors="replace"),
            ) from None

    parts = line.split()
    if not parts:
        return None
    if len(parts) > 2:
        raise ParseError(
            f"Expected '<word> [<frequency>]' on line {line_number}",
            line_number=line_number,
            line=line,
        )

    word_str = parts[0]
    if not (word_str.isascii() and word_str.isalpha()):
        raise ParseError(
            f"Invalid word {word_str!r} on line {line_number}",
            line_number=line_number,
            line=line,
        )

    if len(parts) == 1:
        return Word(word_str.lower())

    try:
        frequency = int(parts[1])
    except ValueError:
        raise ParseError(
            f"Invalid frequency {parts[1]!r} on line {line_number}",
            line_number=line_number,
            line=line,
        ) from None
    if not MIN_FREQUENCY <= frequency <= MAX_FREQUENCY:
        raise ParseError(
            f"Frequency {frequency} out of range on line {line_number}",
            line_number=line_number,
            line=line,
        )
    return Word(word_str.lower(), frequency)


class Dictionary:
    """An ordered, read-only collection of words and the union of their digraphs.

    A dictionary is not tied to any board; use `playable_dictionary` to derive the subset of
    words playable on a particular board.
    """

    def __init__(self, words: Iterable[Word]) -> None:
        self._words: tuple[Word, ...] = tuple(words)
        self._digraphs: frozenset[str] = frozenset().union(*(w.digraphs for w in self._words))

    @classmethod
    def from_words(cls, words: Iterable[Word]) -> "Dictionary":
        return cls(words)

    @classmethod
    def from_strings(cls, words: Iterable[str]) -> "Dictionary":
        """Build a dictionary from plain strings, all with the default frequency."""
        return cls(Word(w.strip().lower()) for w in words)

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str | bytes],
        *,
        out: TextIO | None = None,
    ) -> "Dictionary":
        """Parse dictionary lines, skipping (and reporting) malformed ones.

        Args:
            lines: Text or byte lines in the `<word> [<frequency>]` format.
            out: Stream for diagnostics about skipped lines.  Defaults to stderr.
        """
        out = out or sys.stderr
        words: list[Word] = []
        for line_number, line in enumerate(lines, start=1):
            try:
                word = parse_word_line(line, line_number)
            except ParseError as e:
                print(
                    f"Invalid format on line {e.line_number}: {e.line.rstrip()}",
                    file=out,
                    flush=True,
                )
                continue
            if word is not None:
                words.append(word)
        return cls(words)

    @classmethod
    def from_text(cls, text: str, *, out: TextIO | None = None) -> "Dictionary":
        return cls.from_lines(text.splitlines(), out=out)

    @classmethod
    def from_bytes(cls, data: bytes, *, out: TextIO | None = None) -> "Dictionary":
        """Parse the same grammar as `from_text` from raw bytes, decoding line by line."""
        return cls.from_lines((line.rstrip(b"\r") for line in data.split(b"\n")), out=out)

    @classmethod
    def from_path(cls, path: str | PathLike, *, out: TextIO | None = None) -> "Dictionary":
        """Load a dictionary file.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        out = out or sys.stderr
        dictionary_path = Path(path)
        if not dictionary_path.is_file():
            raise FileNotFoundError(f"Dictionary file not found: {dictionary_path}")

        with dictionary_path.open("rb") as f:
            dictionary = cls.from_lines((line.rstrip(b"\r\n") for line in f), out=out)
        print(f"Loaded {len(dictionary)} words from {dictionary_path}", file=out, flush=True)
        return dictionary

    @property
    def words(self) -> tuple[Word, ...]:
        return self._words

    @property
    def digraphs(self) -> frozenset[str]:
        """Union of the digraphs of all words."""
        return self._digraphs

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[Word]:
        return iter(self._words)

    def __contains__(self, text: object) -> bool:
        return any(w.text == text for w in self._words)

    def __repr__(self) -> str:
        return f"Dictionary(<{len(self._words)} words>)"

    def playable_dictionary(self, board: "Board") -> "Dictionary":
        """Return the words which can be played on `board`, preserving order.

        A word is playable iff each of its letters is on the board and every consecutive
        letter pair is a legal digraph of the board.  This dictionary is left unchanged.
        """
        # Drop board digraphs that no word uses at all, e.g. 'vz'
        usable_digraphs = board.digraphs & self._digraphs
        return Dictionary(
            w
            for w in self._words
            if w.digraphs <= usable_digraphs and all(ch in board for ch in w.text)
        )


def is_playable(word: str, board: "Board") -> bool:
    """Check a single word directly against the board rules."""
    if not word or not all(ch in board for ch in word):
        return False
    return all(board.is_legal(word[i : i + 2]) for i in range(len(word) - 1))


class DictionaryHandle:
    """Write-once holder for a dictionary shared by many searches.

    The dictionary is initialized exactly once and read-only afterwards, so concurrent
    readers need no synchronization.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._dictionary: Dictionary | None = None

    @property
    def is_initialized(self) -> bool:
        return self._dictionary is not None

    def initialize(self, dictionary: Dictionary) -> None:
        """Publish `dictionary`.

        Raises:
            DictionaryAlreadyInitializedError: If a dictionary was already published.
        """
        with self._lock:
            if self._dictionary is not None:
                raise DictionaryAlreadyInitializedError(
                    "Shared dictionary is already initialized."
                )
            self._dictionary = dictionary

    def get(self) -> Dictionary:
        """Return the published dictionary.

        Raises:
            DictionaryNotInitializedError: If `initialize` has not been called.
        """
        dictionary = self._dictionary
        if dictionary is None:
            raise DictionaryNotInitializedError(
                "Shared dictionary not initialized. Call initialize() first."
            )
        return dictionary


shared_dictionary = DictionaryHandle()
"""Process-wide dictionary handle for hosted deployments."""
