from blink_pairs import api
from blink_pairs.api import BufferRegistry
from blink_pairs.tokens import Kind, Match, Token, TokenType

CURLY = Token.delimiter("{", "}")


def test_unknown_filetype_is_not_registered():
    registry = BufferRegistry()
    assert registry.parse_buffer(1, "no-such-language", ["{"]) is False
    assert registry.get_match_at(1, 0, 0) is None
    assert registry.get_line_matches(1, 0) == []


def test_parse_and_query_delimiters():
    registry = BufferRegistry()
    assert registry.parse_buffer(1, "c", ["{", "}"]) is True
    assert registry.get_line_matches(1, 0) == [Match(Kind.OPENING, CURLY, 0, 0)]
    assert registry.get_match_at(1, 1, 0) == Match(Kind.CLOSING, CURLY, 0, 0)


def test_line_matches_filtered_by_token_type():
    registry = BufferRegistry()
    registry.parse_buffer(1, "c", ['("a")'])
    strings = registry.get_line_matches(1, 0, TokenType.STRING)
    assert [m.kind for m in strings] == [Kind.OPENING, Kind.CLOSING]
    assert all(m.token == Token.string('"') for m in strings)
    delimiters = registry.get_line_matches(1, 0)
    assert all(TokenType.DELIMITER.matches(m.token) for m in delimiters)
    assert len(delimiters) == 2


def test_invalid_token_type_falls_back_to_delimiter():
    registry = BufferRegistry()
    registry.parse_buffer(1, "c", ['("a")'])
    assert registry.get_line_matches(1, 0, 99) == registry.get_line_matches(1, 0)
    assert registry.get_line_matches(1, 0, 1) == registry.get_line_matches(
        1, 0, TokenType.STRING
    )


def test_line_matches_out_of_range_or_unknown_buffer():
    registry = BufferRegistry()
    registry.parse_buffer(1, "c", ["{"])
    assert registry.get_line_matches(1, 10) == []
    assert registry.get_line_matches(2, 0) == []


def test_match_pair_table_form():
    registry = BufferRegistry()
    registry.parse_buffer(1, "c", ["{", "}"])
    pair = registry.get_match_pair(1, 0, 0)
    assert [m.to_dict() for m in pair] == [
        {1: "{", 2: "}", "line": 0, "col": 0, "stack_height": 0},
        {1: "{", 2: "}", "line": 1, "col": 0, "stack_height": 0},
    ]
    assert registry.get_match_pair(2, 0, 0) is None


def test_incremental_parse_of_known_buffer():
    registry = BufferRegistry()
    registry.parse_buffer(1, "c", ["{"])
    assert registry.get_match_pair(1, 0, 0) is None
    assert registry.parse_buffer(1, "c", ["}"], 1, 1, 2) is True
    pair = registry.get_match_pair(1, 0, 0)
    assert [(m.line, m.col) for m in pair] == [(0, 0), (1, 0)]


def test_incremental_parse_with_unknown_filetype_fails():
    registry = BufferRegistry()
    registry.parse_buffer(1, "c", ["{", "}"])
    assert registry.parse_buffer(1, "no-such-language", ["("], 0, 1, 1) is False
    assert registry.get_line_matches(1, 0) == [Match(Kind.OPENING, CURLY, 0, 0)]


def test_buffers_are_independent():
    registry = BufferRegistry()
    registry.parse_buffer(1, "c", ["{}"])
    registry.parse_buffer(2, "c", ["()"])
    assert registry.get_match_at(1, 0, 0).token == CURLY
    assert registry.get_match_at(2, 0, 0).token == Token.delimiter("(", ")")


def test_module_level_functions_share_registry():
    bufnr = 987654
    assert api.parse_buffer(bufnr, "c", ["{}"]) is True
    assert api.get_match_at(bufnr, 0, 1) == Match(Kind.CLOSING, CURLY, 1, 0)
    assert api.get_line_matches(bufnr, 0) == [
        Match(Kind.OPENING, CURLY, 0, 0),
        Match(Kind.CLOSING, CURLY, 1, 0),
    ]
    pair = api.get_match_pair(bufnr, 0, 0)
    assert [m.col for m in pair] == [0, 1]