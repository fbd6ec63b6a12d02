"""Parse lines into per-line matches and the parser state at each line end."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator, Sequence
from itertools import islice

from .languages import get_language
from .matcher import Matcher, State, StateKind
from .tokenize import CharPos, tokenize
from .tokens import Match

_NEWLINE = ord("\n")
_BACKSLASH = ord("\\")
_RESET_AT_LINE_END = (StateKind.IN_STRING, StateKind.IN_LINE_COMMENT)


class _TokenStream:
    """Token iterator that can look ahead without consuming."""

    def __init__(self, tokens: Iterable[CharPos]) -> None:
        self._source = iter(tokens)
        self._buffer: deque[CharPos] = deque()

    def __iter__(self) -> Iterator[CharPos]:
        return self

    def __next__(self) -> CharPos:
        if self._buffer:
            return self._buffer.popleft()
        return next(self._source)

    def peek(self, count: int) -> list[CharPos]:
        while len(self._buffer) < count:
            try:
                self._buffer.append(next(self._source))
            except StopIteration:
                break
        return list(islice(self._buffer, count))

    def skip(self, count: int) -> None:
        deque(islice(self, count), maxlen=0)


def parse(
    lines: Sequence[str], initial_state: State, matcher: Matcher
) -> tuple[list[list[Match]], list[State]]:
    """Return the matches of every line and the state at the end of every line."""
    matches_by_line: list[list[Match]] = []
    state_by_line: list[State] = []
    line_matches: list[Match] = []
    state = initial_state
    escaped_col: int | None = None

    matcher.stack.clear()
    lookahead = matcher.max_lookahead()
    stream = _TokenStream(tokenize("\n".join(lines), matcher.tokens()))

    for token in stream:
        if token.byte == _NEWLINE:
            matches_by_line.append(line_matches)
            line_matches = []
            escaped_col = None
            if state.kind in _RESET_AT_LINE_END:
                state = State.normal()
            state_by_line.append(state)
            continue

        follows_escape = escaped_col is not None and escaped_col == token.col - 1
        if token.byte == _BACKSLASH:
            escaped_col = None if follows_escape else token.col
            continue

        step = matcher.step(state, token, stream.peek(lookahead), follows_escape)
        line_matches.extend(step.matches)
        stream.skip(step.skip)
        state = step.state

    matches_by_line.append(line_matches)
    state_by_line.append(state)
    return matches_by_line, state_by_line


def parse_filetype(
    filetype: str, lines: Sequence[str], initial_state: State = State.normal()
) -> tuple[list[list[Match]], list[State]]:
    """Parse ``lines`` with the language for ``filetype``.

    Raises UnsupportedFiletypeError when the filetype is unknown.
    """
    return parse(lines, initial_state, Matcher(get_language(filetype)))