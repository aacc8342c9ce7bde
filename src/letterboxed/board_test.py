import pytest
from inline_snapshot import snapshot

from letterboxed.board import Board, parse_board_spec
from letterboxed.errors import BoardError, ContentError, StructureError


def test_valid_board():
    board = Board(["abc", "def", "ghi", "jkl"])
    assert board.sides == ("abc", "def", "ghi", "jkl")
    assert board.letters == "abcdefghijkl"
    assert board.letters_per_side == 3
    assert len(board.digraphs) == 12 * 9


@pytest.mark.parametrize(
    "sides, expected",
    [
        (["a", "b", "c", "d"], 4 * 3),
        (["ab", "cd", "ef", "gh"], 8 * 6),
        (["abc", "def", "ghi", "jkl"], 12 * 9),
        (["abcd", "efgh", "ijkl", "mnop"], 16 * 12),
    ],
)
def test_digraph_count(sides, expected):
    board = Board(sides)
    n = len(board.letters)
    assert len(board.digraphs) == n * (n - board.letters_per_side) == expected


def test_same_side_digraphs_never_legal():
    board = Board(["ab", "cd", "ef", "gh"])
    assert board.is_legal("ac")
    assert board.is_legal("bd")
    assert board.is_legal("ha")
    assert not board.is_legal("ab")
    assert not board.is_legal("ba")
    assert not board.is_legal("aa")
    for digraph in board.digraphs:
        assert board.side_of(digraph[0]) != board.side_of(digraph[1])


def test_sorted_digraphs():
    board = Board(["a", "b", "c", "d"])
    assert board.sorted_digraphs() == snapshot(
        ["ab", "ac", "ad", "ba", "bc", "bd", "ca", "cb", "cd", "da", "db", "dc"]
    )


def test_side_of():
    board = Board(["yfa", "otk", "lgw", "rni"])
    assert board.side_of("y") == 0
    assert board.side_of("k") == 1
    assert board.side_of("i") == 3
    assert board.side_of("z") is None
    assert "g" in board
    assert "z" not in board


@pytest.mark.parametrize(
    "sides, error, kind",
    [
        (["abc", "def", "ghi"], StructureError, "wrong_count"),
        (["abc", "def", "ghi", "jkl", "mno"], StructureError, "wrong_count"),
        ([], StructureError, "wrong_count"),
        (["abc", "", "ghi", "jkl"], StructureError, "empty_side"),
        (["abc", "def", "ghij", "klm"], StructureError, "uneven_sides"),
        (["ABC", "DEF", "ghi", "jkl"], ContentError, "invalid_character"),
        (["abc", "d1f", "ghi", "jkl"], ContentError, "invalid_character"),
        (["abc", "def", "gha", "jkl"], ContentError, "duplicate_letter"),
        (["abc", "def", "ghi", "jkj"], ContentError, "duplicate_letter"),
    ],
)
def test_invalid_boards(sides, error, kind):
    with pytest.raises(error) as exc_info:
        Board(sides)
    assert exc_info.value.kind == kind
    assert isinstance(exc_info.value, BoardError)
    assert isinstance(exc_info.value, ValueError)


def test_error_messages():
    with pytest.raises(StructureError, match="exactly 4 sides"):
        Board(["abc", "def", "ghi"])
    with pytest.raises(StructureError, match="same length"):
        Board(["abc", "def", "ghij", "klm"])
    with pytest.raises(ContentError, match="lowercase"):
        Board(["ABC", "DEF", "ghi", "jkl"])


def test_validation_order():
    # Structure is checked before content
    with pytest.raises(StructureError) as exc_info:
        Board(["", "a", "b"])
    assert exc_info.value.kind == "wrong_count"

    with pytest.raises(StructureError) as exc_info:
        Board(["a1", "", "cd", "ef"])
    assert exc_info.value.kind == "empty_side"

    with pytest.raises(StructureError) as exc_info:
        Board(["a1", "b", "cd", "ef"])
    assert exc_info.value.kind == "uneven_sides"

    # Invalid characters are reported before duplicates, wherever they are
    with pytest.raises(ContentError) as exc_info:
        Board(["aab", "cde", "fgh", "ij!"])
    assert exc_info.value.kind == "invalid_character"
    assert exc_info.value.letter == "!"
    assert exc_info.value.side == 3


def test_duplicate_same_side():
    with pytest.raises(ContentError) as exc_info:
        Board(["abc", "def", "ghi", "jkj"])
    err = exc_info.value
    assert err.letter == "j"
    assert err.side == 3
    assert err.same_side
    assert str(err) == "Duplicate letter 'j' found on the left side"


def test_duplicate_cross_side():
    with pytest.raises(ContentError) as exc_info:
        Board(["abc", "def", "gha", "jkl"])
    err = exc_info.value
    assert err.letter == "a"
    assert err.side == 2
    assert err.other_side == 0
    assert not err.same_side
    assert str(err) == "Duplicate letter 'a' found on the top side and the bottom side"


def test_board_is_read_only():
    board = Board(["abc", "def", "ghi", "jkl"])
    with pytest.raises(AttributeError):
        board.digraphs = frozenset()  # type: ignore[misc]
    with pytest.raises(AttributeError):
        board.digraphs.add("aa")  # type: ignore[attr-defined]


def test_parse_board_spec():
    assert parse_board_spec("yfa,otk,lgw,rni") == ["yfa", "otk", "lgw", "rni"]
    assert parse_board_spec(" YFA, otk ,lgw,RNI\n") == ["yfa", "otk", "lgw", "rni"]
    assert parse_board_spec("yfa\notk\nlgw\nrni\n") == ["yfa", "otk", "lgw", "rni"]
    assert parse_board_spec("yfa,otk") == ["yfa", "otk"]


def test_from_spec():
    assert Board.from_spec("YFA,OTK,LGW,RNI") == Board(["yfa", "otk", "lgw", "rni"])
    with pytest.raises(StructureError):
        Board.from_spec("yfa,otk,lgw")


def test_from_path(tmp_path):
    path = tmp_path / "board.txt"
    path.write_text("YFA\notk\nlgw\nrni\n", encoding="utf-8")
    board = Board.from_path(path)
    assert board.sides == ("yfa", "otk", "lgw", "rni")
    assert len(board.digraphs) == 108


def test_from_path_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        Board.from_path(tmp_path / "missing.txt")

    path = tmp_path / "board.txt"
    path.write_text("abc\n\nghi\njkl\n", encoding="utf-8")
    with pytest.raises(StructureError) as exc_info:
        Board.from_path(path)
    assert exc_info.value.kind == "empty_side"
    assert exc_info.value.side == 1
