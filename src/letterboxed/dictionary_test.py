import io

import pytest

from letterboxed.board import Board
from letterboxed.dictionary import (
    Dictionary,
    DictionaryHandle,
    Word,
    extract_digraphs,
    is_playable,
    parse_word_line,
)
from letterboxed.errors import (
    DictionaryAlreadyInitializedError,
    DictionaryNotInitializedError,
    ParseError,
)


def test_extract_digraphs():
    assert extract_digraphs("pirate") == {"pi", "ir", "ra", "at", "te"}
    assert extract_digraphs("aaa") == {"aa"}
    assert extract_digraphs("a") == frozenset()


def test_word():
    word = Word("forklift", 12)
    assert word.frequency == 12
    assert word.first == "f"
    assert word.last == "t"
    assert len(word.digraphs) == 7
    assert Word("nag").frequency == 15
    assert Word("nag") == Word("nag", 15)
    with pytest.raises(ValueError):
        Word("")


@pytest.mark.parametrize(
    "line, expected",
    [
        ("forklift 12", Word("forklift", 12)),
        ("  twangy\t-3  ", Word("twangy", -3)),
        ("NAG 127", Word("nag", 127)),
        ("gawkily", Word("gawkily", 15)),
        (b"filtration 7", Word("filtration", 7)),
        ("", None),
        ("   ", None),
    ],
)
def test_parse_word_line(line, expected):
    assert parse_word_line(line, 1) == expected


@pytest.mark.parametrize(
    "line",
    [
        "forklift 12 extra",
        "forklift twelve",
        "forklift 128",
        "forklift -129",
        "fork-lift 3",
        "café 3",
        "123 4",
        b"\xff\xfe 3",
    ],
)
def test_parse_word_line_errors(line):
    with pytest.raises(ParseError) as exc_info:
        parse_word_line(line, 7)
    assert exc_info.value.line_number == 7


def test_from_words():
    words = [Word("dojo", 3), Word("joke", 5)]
    dictionary = Dictionary.from_words(words)
    assert dictionary.words == tuple(words)
    assert dictionary.digraphs == {"do", "oj", "jo", "ok", "ke"}
    assert len(dictionary) == 2
    assert "dojo" in dictionary
    assert "egg" not in dictionary


def test_from_text_skips_malformed_lines():
    out = io.StringIO()
    dictionary = Dictionary.from_text("forklift 12\nbad line here\n\ntwangy 9\nnag x\n", out=out)
    assert [w.text for w in dictionary] == ["forklift", "twangy"]
    assert [w.frequency for w in dictionary] == [12, 9]
    assert out.getvalue().splitlines() == [
        "Invalid format on line 2: bad line here",
        "Invalid format on line 5: nag x",
    ]


def test_from_bytes_matches_from_text():
    text = "forklift 12\r\ntwangy 9\nnag\n"
    from_text = Dictionary.from_text(text)
    from_bytes = Dictionary.from_bytes(text.encode("utf-8"))
    assert from_bytes.words == from_text.words


def test_from_bytes_skips_undecodable_lines():
    out = io.StringIO()
    dictionary = Dictionary.from_bytes(b"forklift 12\n\xff\xfe 3\ntwangy 9\n", out=out)
    assert [w.text for w in dictionary] == ["forklift", "twangy"]
    assert out.getvalue().startswith("Invalid format on line 2:")


def test_from_path(tmp_path):
    path = tmp_path / "dictionary.txt"
    path.write_text("forklift 12\ntwangy\noops 1 2\n", encoding="utf-8")
    out = io.StringIO()
    dictionary = Dictionary.from_path(path, out=out)
    assert [(w.text, w.frequency) for w in dictionary] == [("forklift", 12), ("twangy", 15)]
    lines = out.getvalue().splitlines()
    assert lines[0] == "Invalid format on line 3: oops 1 2"
    assert lines[1] == f"Loaded 2 words from {path}"


def test_from_path_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        Dictionary.from_path(tmp_path / "missing.txt")


def test_playable_words():
    board = Board(["abc", "def", "gho", "jkl"])
    dictionary = Dictionary.from_strings(["dojo", "abode", "joke", "egg"])
    playable = dictionary.playable_dictionary(board)

    texts = [w.text for w in playable]
    assert texts == ["dojo", "joke"]  # 'ab' is same-side, 'gg' repeats a letter


def test_playable_dictionary_is_pure():
    board = Board(["abc", "def", "gho", "jkl"])
    dictionary = Dictionary.from_strings(["dojo", "abode", "joke", "egg"])

    once = dictionary.playable_dictionary(board)
    twice = once.playable_dictionary(board)
    assert twice.words == once.words
    assert len(dictionary) == 4

    other = Board(["ad", "be", "ok", "jg"])
    assert [w.text for w in dictionary.playable_dictionary(other)] == ["dojo", "abode"]
    assert dictionary.playable_dictionary(board).words == once.words


def test_playable_iff_all_digraphs_legal():
    board = Board(["yfa", "otk", "lgw", "rni"])
    candidates = ["forklift", "twangy", "filtration", "nag", "gawkily", "fay", "tonk", "wag", "ai"]
    dictionary = Dictionary.from_strings(candidates)
    playable = {w.text for w in dictionary.playable_dictionary(board)}

    for text in candidates:
        direct = all(board.is_legal(text[i : i + 2]) for i in range(len(text) - 1))
        assert (text in playable) == direct == is_playable(text, board), text


def test_single_letter_words_need_board_letters():
    board = Board(["abc", "def", "ghi", "jkl"])
    dictionary = Dictionary.from_strings(["a", "z"])
    assert [w.text for w in dictionary.playable_dictionary(board)] == ["a"]
    assert is_playable("a", board)
    assert not is_playable("z", board)
    assert not is_playable("", board)


def test_dictionary_handle():
    handle = DictionaryHandle()
    assert not handle.is_initialized
    with pytest.raises(DictionaryNotInitializedError):
        handle.get()

    first = Dictionary.from_strings(["nag"])
    handle.initialize(first)
    assert handle.is_initialized
    assert handle.get() is first

    with pytest.raises(DictionaryAlreadyInitializedError):
        handle.initialize(Dictionary.from_strings(["twangy"]))
    assert handle.get() is first
