"""Exceptions raised by the Letter Boxed solver."""

from typing import Literal

SIDE_NAMES = ("top", "right", "bottom", "left")
"""Display names for the four sides of a board, in side order."""


def side_name(side: int) -> str:
    """Return the display name of a side index (falls back to the index itself)."""
    if 0 <= side < len(SIDE_NAMES):
        return SIDE_NAMES[side]
    return f"#{side}"


class LetterBoxedError(Exception):
    """Base class for all errors raised by this package."""


class BoardError(LetterBoxedError, ValueError):
    """The sides supplied for a board are not a valid Letter Boxed layout."""


class StructureError(BoardError):
    """Wrong number of sides, an empty side, or sides of unequal length."""

    def __init__(
        self,
        message: str,
        *,
        kind: Literal["wrong_count", "empty_side", "uneven_sides"],
        side: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        """Which structural rule was broken."""
        self.side = side
        """Index of the offending side, when there is one."""


class ContentError(BoardError):
    """A side contains an invalid character or a duplicated letter."""

    def __init__(
        self,
        message: str,
        *,
        kind: Literal["invalid_character", "duplicate_letter"],
        letter: str,
        side: int,
        other_side: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        """Which content rule was broken."""
        self.letter = letter
        """The offending character."""
        self.side = side
        """Index of the side on which the problem was detected."""
        self.other_side = other_side
        """For duplicates, the side where the letter was first seen (may equal `side`)."""

    @property
    def same_side(self) -> bool:
        """Whether a duplicate letter was repeated on a single side."""
        return self.other_side is not None and self.other_side == self.side


class ParseError(LetterBoxedError, ValueError):
    """A dictionary line does not match the `<word> [<frequency>]` grammar."""

    def __init__(self, message: str, *, line_number: int, line: str) -> None:
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class DictionaryNotInitializedError(LetterBoxedError, RuntimeError):
    """The shared dictionary was read before being initialized."""


class DictionaryAlreadyInitializedError(LetterBoxedError, RuntimeError):
    """The shared dictionary was initialized a second time."""


class DuplicateSearchError(LetterBoxedError, RuntimeError):
    """A search identical to the one already in flight was submitted."""
