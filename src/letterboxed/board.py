"""Classes and functions for representing the puzzle board."""

from collections.abc import Iterable, Sequence
from os import PathLike
from pathlib import Path

import numpy as np

from letterboxed.errors import ContentError, StructureError, side_name

N_SIDES = 4
"""A Letter Boxed board always has exactly four sides."""


class Board:
    """A validated four-sided Letter Boxed board.

    Letters are numbered 0..N-1 in side order (top, right, bottom, left), which is also the
    bit order used by the solver.  The set of legal digraphs (ordered letter pairs taken from
    two different sides) is computed once on construction; the board is read-only afterwards.
    """

    def __init__(self, sides: Sequence[str]) -> None:
        sides = tuple(sides)
        validate_sides_structure(sides)
        validate_sides_content(sides)

        self._sides: tuple[str, ...] = sides
        self._letters: str = "".join(sides)
        self._side_of: dict[str, int] = {
            ch: side_num for side_num, side in enumerate(sides) for ch in side
        }
        self._digraphs: frozenset[str] = _legal_digraphs(sides)

    @classmethod
    def from_spec(cls, spec: str) -> "Board":
        """Create a board from a comma- or newline-delimited spec (see `parse_board_spec`)."""
        return cls(parse_board_spec(spec))

    @classmethod
    def from_path(cls, path: str | PathLike) -> "Board":
        """Load a board from a text file holding one side per line.

        Raises:
            FileNotFoundError: If the file does not exist.
            BoardError: If the sides do not form a valid board.
        """
        board_path = Path(path)
        if not board_path.is_file():
            raise FileNotFoundError(f"Board file not found: {board_path}")
        with board_path.open("r", encoding="utf-8") as f:
            sides = [line.strip().lower() for line in f.read().splitlines()]
        return cls(sides)

    @property
    def sides(self) -> tuple[str, ...]:
        return self._sides

    @property
    def letters(self) -> str:
        """All board letters in side order."""
        return self._letters

    @property
    def letters_per_side(self) -> int:
        return len(self._sides[0])

    @property
    def digraphs(self) -> frozenset[str]:
        """The legal digraphs of this board."""
        return self._digraphs

    def side_of(self, letter: str) -> int | None:
        """Return the index of the side holding `letter`, or None if it is not on the board."""
        return self._side_of.get(letter)

    def is_legal(self, digraph: str) -> bool:
        """Whether the two-letter string `digraph` may be played on this board."""
        return digraph in self._digraphs

    def sorted_digraphs(self) -> list[str]:
        """Legal digraphs in board-letter order (useful for display)."""
        order = {ch: i for i, ch in enumerate(self._letters)}
        return sorted(self._digraphs, key=lambda d: (order[d[0]], order[d[1]]))

    def __contains__(self, letter: object) -> bool:
        return letter in self._side_of

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._sides == other._sides

    def __hash__(self) -> int:
        return hash(self._sides)

    def __repr__(self) -> str:
        return f"Board({list(self._sides)!r})"

    def __str__(self) -> str:
        return ",".join(self._sides)


def parse_board_spec(spec: str) -> list[str]:
    """Split a board spec into side strings.

    Accepts either a single comma-delimited string (`"yfa,otk,lgw,rni"`) or newline-delimited
    sides.  Whitespace around each side is removed and letters are lowercased.  No validation
    is done here; pass the result to `Board`.
    """
    spec = spec.strip()
    tokens: Iterable[str] = spec.split(",") if "," in spec else spec.splitlines()
    return [token.strip().lower() for token in tokens]


def validate_sides_structure(sides: Sequence[str]) -> None:
    """Check side count, emptiness and equal lengths, in that order."""
    if len(sides) != N_SIDES:
        raise StructureError(
            f"Board must contain exactly {N_SIDES} sides, found {len(sides)}",
            kind="wrong_count",
        )

    for side_num, side in enumerate(sides):
        if not side:
            raise StructureError(
                f"Empty sides are not allowed (the {side_name(side_num)} side is empty)",
                kind="empty_side",
                side=side_num,
            )

    first_len = len(sides[0])
    for side_num, side in enumerate(sides):
        if len(side) != first_len:
            raise StructureError(
                f"All sides must have the same length. The {side_name(0)} side has length "
                f"{first_len} but the {side_name(side_num)} side has length {len(side)}",
                kind="uneven_sides",
                side=side_num,
            )


def validate_sides_content(sides: Sequence[str]) -> None:
    """Check that all characters are lowercase ASCII letters and no letter is repeated."""
    for side_num, side in enumerate(sides):
        for ch in side:
            if not ("a" <= ch <= "z"):
                raise ContentError(
                    f"Invalid character {ch!r} on the {side_name(side_num)} side. "
                    "Only lowercase ASCII letters are allowed",
                    kind="invalid_character",
                    letter=ch,
                    side=side_num,
                )

    seen: dict[str, int] = {}
    for side_num, side in enumerate(sides):
        for ch in side:
            if ch not in seen:
                seen[ch] = side_num
                continue
            previous_side = seen[ch]
            if previous_side == side_num:
                message = f"Duplicate letter {ch!r} found on the {side_name(side_num)} side"
            else:
                message = (
                    f"Duplicate letter {ch!r} found on the {side_name(previous_side)} side "
                    f"and the {side_name(side_num)} side"
                )
            raise ContentError(
                message,
                kind="duplicate_letter",
                letter=ch,
                side=side_num,
                other_side=previous_side,
            )


def _legal_digraphs(sides: Sequence[str]) -> frozenset[str]:
    """Build every ordered pair of letters that lie on two different sides."""
    letters = "".join(sides)
    side_ids = np.repeat(np.arange(len(sides)), [len(side) for side in sides])

    # legal[i, j] is True iff letters i and j are on different sides
    legal = side_ids[:, None] != side_ids[None, :]
    return frozenset(letters[i] + letters[j] for i, j in np.argwhere(legal))
