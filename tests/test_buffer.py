import pytest
from hypothesis import given
from hypothesis import strategies as st

from blink_pairs.buffer import ParsedBuffer
from blink_pairs.languages import UnsupportedFiletypeError
from blink_pairs.tokens import Kind, Match, Token

CURLY = Token.delimiter("{", "}")


def all_lines(buffer):
    return [buffer.line_matches(n) for n in range(len(buffer))]


def test_parse_matches_source_example():
    buffer = ParsedBuffer.parse("c", ["{", "}"])
    assert buffer.line_matches(0) == [Match(Kind.OPENING, CURLY, 0, 0)]
    assert buffer.line_matches(1) == [Match(Kind.CLOSING, CURLY, 0, 0)]
    assert buffer.line_matches(2) is None


def test_parse_unknown_filetype_raises():
    with pytest.raises(UnsupportedFiletypeError):
        ParsedBuffer.parse("no-such-language", ["{"])


def test_line_matches_returns_copies():
    buffer = ParsedBuffer.parse("c", ["{", "}"])
    copy = buffer.line_matches(0)
    copy[0].col = 42
    assert buffer.line_matches(0)[0].col == 0


def test_match_at_covers_whole_token():
    buffer = ParsedBuffer.parse("c", ["/* comment {} */", "}"])
    closing = buffer.match_at(0, 15)
    assert closing == Match(Kind.CLOSING, Token.block_comment("/*", "*/"), 14)
    assert buffer.match_at(0, 14) == closing
    assert buffer.match_at(0, 5) is None
    assert buffer.match_at(7, 0) is None


def test_match_pair_across_lines():
    buffer = ParsedBuffer.parse("c", ["{", "}"])
    expected = (
        Match(Kind.OPENING, CURLY, 0, 0).with_line(0),
        Match(Kind.CLOSING, CURLY, 0, 0).with_line(1),
    )
    assert buffer.match_pair(0, 0) == expected
    assert buffer.match_pair(1, 0) == expected


def test_match_pair_nested_uses_stack_height():
    buffer = ParsedBuffer.parse("c", ["({})"])
    inner_open, inner_close = buffer.match_pair(0, 1)
    assert (inner_open.col, inner_close.col) == (1, 2)
    assert inner_open.token == CURLY
    outer_open, outer_close = buffer.match_pair(0, 3)
    assert (outer_open.col, outer_close.col) == (0, 3)
    assert outer_open.kind is Kind.OPENING and outer_close.kind is Kind.CLOSING


def test_match_pair_block_comment():
    buffer = ParsedBuffer.parse("c", ["/* comment {} */"])
    opening, closing = buffer.match_pair(0, 0)
    assert opening.col == 0
    assert closing.col == 14
    assert opening.token == closing.token == Token.block_comment("/*", "*/")


def test_match_pair_line_comment_has_none():
    buffer = ParsedBuffer.parse("c", ["// comment {}"])
    assert buffer.match_at(0, 0) == Match.line_comment("//", 0)
    assert buffer.match_pair(0, 0) is None


def test_match_pair_unmatched_returns_none():
    buffer = ParsedBuffer.parse("c", ["{"])
    assert buffer.match_pair(0, 0) is None
    assert buffer.match_pair(0, 3) is None


def test_reparse_replaces_middle_line():
    buffer = ParsedBuffer.parse("c", ["{", "x", "}"])
    buffer.reparse_range("c", ["[]"], 1, 2, 2)
    fresh = ParsedBuffer.parse("c", ["{", "[]", "}"])
    assert all_lines(buffer) == all_lines(fresh)


def test_reparse_inserts_lines_and_fixes_heights():
    buffer = ParsedBuffer.parse("c", ["{", "}"])
    buffer.reparse_range("c", ["(", ")"], 1, 1, 3)
    fresh = ParsedBuffer.parse("c", ["{", "(", ")", "}"])
    assert len(buffer) == 4
    assert all_lines(buffer) == all_lines(fresh)
    opening, closing = buffer.match_pair(0, 0)
    assert closing.line == 3


def test_reparse_without_range_replaces_everything():
    buffer = ParsedBuffer.parse("c", ["{"])
    buffer.reparse_range("c", ["(", ")"])
    assert all_lines(buffer) == all_lines(ParsedBuffer.parse("c", ["(", ")"]))


def test_reparse_continues_from_previous_state():
    buffer = ParsedBuffer.parse("c", ["/*", "x", "*/"])
    buffer.reparse_range("c", ["{"], 1, 2, 2)
    assert buffer.line_matches(1) == []
    assert ParsedBuffer.parse("c", ["/*", "{", "*/"]).line_matches(1) == []


def test_reparse_unknown_filetype_leaves_buffer():
    buffer = ParsedBuffer.parse("c", ["{", "}"])
    before = all_lines(buffer)
    with pytest.raises(UnsupportedFiletypeError):
        buffer.reparse_range("no-such-language", ["("], 0, 1, 1)
    assert all_lines(buffer) == before


def test_reparse_rejects_end_past_parsed_lines():
    buffer = ParsedBuffer.parse("c", ["{", "}"])
    with pytest.raises(ValueError):
        buffer.reparse_range("c", ["("], 0, 1, 5)


def test_recalculated_height_for_mismatched_close():
    buffer = ParsedBuffer.parse("c", ["x"])
    buffer.reparse_range("c", ["(]"])
    assert all_lines(buffer) == all_lines(ParsedBuffer.parse("c", ["(]"]))


_lines = st.lists(st.text(alphabet="()[]{}x ", max_size=8), min_size=1, max_size=5)


@given(_lines, _lines)
def test_full_reparse_equals_fresh_parse(original, replacement):
    buffer = ParsedBuffer.parse("c", original)
    buffer.reparse_range("c", replacement)
    assert all_lines(buffer) == all_lines(ParsedBuffer.parse("c", replacement))


@given(_lines, st.text(alphabet="()[]{}x ", max_size=8))
def test_single_line_reparse_equals_fresh_parse(original, new_line):
    buffer = ParsedBuffer.parse("c", original)
    index = len(original) - 1
    buffer.reparse_range("c", [new_line], index, index + 1, index + 1)
    expected = ParsedBuffer.parse("c", original[:index] + [new_line])
    assert all_lines(buffer) == all_lines(expected)