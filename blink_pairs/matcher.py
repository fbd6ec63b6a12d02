"""Turn the tokens of one language into delimiter, string and comment matches."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from itertools import islice

from .languages import LanguageDef
from .tokenize import CharPos
from .tokens import Kind, Match, Token

_NEWLINE = ord("\n")


class StateKind(Enum):
    """What the parser is currently inside of."""

    NORMAL = "normal"
    IN_STRING = "in_string"
    IN_BLOCK_STRING = "in_block_string"
    IN_LINE_COMMENT = "in_line_comment"
    IN_BLOCK_COMMENT = "in_block_comment"


@dataclass(frozen=True)
class State:
    """Parser state, with the opening text of the enclosing string or comment."""

    kind: StateKind = StateKind.NORMAL
    delim: str | None = None

    @classmethod
    def normal(cls) -> State:
        return cls(StateKind.NORMAL)

    @classmethod
    def in_string(cls, delim: str) -> State:
        return cls(StateKind.IN_STRING, delim)

    @classmethod
    def in_block_string(cls, opening: str) -> State:
        return cls(StateKind.IN_BLOCK_STRING, opening)

    @classmethod
    def in_line_comment(cls) -> State:
        return cls(StateKind.IN_LINE_COMMENT)

    @classmethod
    def in_block_comment(cls, opening: str) -> State:
        return cls(StateKind.IN_BLOCK_COMMENT, opening)


_NORMAL = State.normal()


@dataclass(frozen=True)
class Step:
    """Outcome of matching one token: next state, new matches, tokens to skip."""

    state: State
    matches: tuple[Match, ...] = ()
    skip: int = 0


@dataclass(frozen=True)
class _Window:
    """Bytes following the current token on its line, and their distances."""

    values: tuple[int, ...]
    distances: tuple[int | None, ...]


_Action = Callable[[CharPos, _Window], Step]
_Condition = Callable[[_Window], bool]


@dataclass(frozen=True)
class _Arm:
    pattern: bytes
    input_state: State
    action: _Action
    adjacent: bool
    ignore_escaped: bool = False
    condition: _Condition | None = None

    def accepts(
        self, state: State, token: CharPos, window: _Window, escaped: bool
    ) -> bool:
        if state != self.input_state or token.byte != self.pattern[0]:
            return False
        rest = tuple(self.pattern[1:])
        if window.values[: len(rest)] != rest:
            return False
        if self.ignore_escaped and escaped:
            return False
        if self.adjacent and window.distances[: len(rest)] != tuple(
            range(1, len(rest) + 1)
        ):
            return False
        return self.condition is None or self.condition(window)


def _arm(
    pattern: str,
    action: _Action,
    *,
    input_state: State = _NORMAL,
    ignore_escaped: bool = False,
    non_adjacent: bool = False,
    condition: _Condition | None = None,
) -> _Arm:
    raw = pattern.encode()
    return _Arm(
        pattern=raw,
        input_state=input_state,
        action=action,
        adjacent=len(raw) > 1 and not non_adjacent,
        ignore_escaped=ignore_escaped,
        condition=condition,
    )


def _extra(pattern: str) -> int:
    return len(pattern.encode()) - 1


def _emit(kind: Kind, token: Token, skip: int, state: State) -> _Action:
    def action(at: CharPos, _window: _Window) -> Step:
        return Step(state, (Match(kind, token, at.col),), skip)

    return action


def _char_literal(token: Token, index: int) -> _Action:
    def action(at: CharPos, window: _Window) -> Step:
        distance = window.distances[index]
        assert distance is not None
        return Step(
            _NORMAL,
            (
                Match(Kind.OPENING, token, at.col),
                Match(Kind.CLOSING, token, at.col + distance),
            ),
            index + 1,
        )

    return action


class Matcher:
    """Recognises the patterns of one language, one token at a time.

    The delimiter stack lives on the matcher and is cleared before each parse.
    """

    def __init__(self, language: LanguageDef) -> None:
        self.language = language
        self.stack: list[int] = []
        self._lookahead = language.max_lookahead()
        self._arms = tuple(self._build_arms())

    def tokens(self) -> tuple[int, ...]:
        """Bytes the tokenizer must report for this language."""
        return self.language.tokens()

    def max_lookahead(self) -> int:
        """How many following tokens a step may inspect."""
        return self._lookahead

    def step(
        self,
        state: State,
        token: CharPos,
        lookahead: Iterable[CharPos],
        escaped: bool,
    ) -> Step:
        """Match ``token`` given the tokens after it; the first fitting rule wins."""
        window = self._window(token, lookahead)
        for arm in self._arms:
            if arm.accepts(state, token, window, escaped):
                return arm.action(token, window)
        return Step(state)

    def _window(self, token: CharPos, lookahead: Iterable[CharPos]) -> _Window:
        values: list[int] = []
        distances: list[int | None] = []
        for ahead in islice(lookahead, self._lookahead):
            if ahead.byte == _NEWLINE:
                break
            values.append(ahead.byte)
            distances.append(ahead.col - token.col)
        pad = self._lookahead - len(values)
        return _Window(tuple(values) + (0,) * pad, tuple(distances) + (None,) * pad)

    def _open_delimiter(self, token: Token, close_byte: int) -> _Action:
        def action(at: CharPos, _window: _Window) -> Step:
            found = Match(Kind.OPENING, token, at.col, len(self.stack))
            self.stack.append(close_byte)
            return Step(_NORMAL, (found,))

        return action

    def _close_delimiter(self, token: Token) -> _Action:
        def action(at: CharPos, _window: _Window) -> Step:
            if self.stack and self.stack[-1] == at.byte:
                self.stack.pop()
            return Step(_NORMAL, (Match(Kind.CLOSING, token, at.col, len(self.stack)),))

        return action

    def _build_arms(self) -> Iterator[_Arm]:
        lang = self.language

        for open_, close in lang.block_comments:
            token = Token.block_comment(open_, close)
            inside = State.in_block_comment(open_)
            yield _arm(open_, _emit(Kind.OPENING, token, _extra(open_), inside))
            yield _arm(
                close,
                _emit(Kind.CLOSING, token, _extra(close), _NORMAL),
                input_state=inside,
            )

        for open_, close in lang.block_strings:
            token = Token.block_string(open_, close)
            inside = State.in_block_string(open_)
            yield _arm(open_, _emit(Kind.OPENING, token, _extra(open_), inside))
            yield _arm(
                close,
                _emit(Kind.CLOSING, token, _extra(close), _NORMAL),
                input_state=inside,
                ignore_escaped=True,
            )

        for comment in lang.line_comments:
            yield _arm(
                comment,
                _emit(
                    Kind.NON_PAIR,
                    Token.line_comment(comment),
                    _extra(comment),
                    State.in_line_comment(),
                ),
            )

        for delim in lang.strings:
            token = Token.string(delim)
            inside = State.in_string(delim)
            yield _arm(delim, _emit(Kind.OPENING, token, _extra(delim), inside))
            yield _arm(
                delim,
                _emit(Kind.CLOSING, token, _extra(delim), _NORMAL),
                input_state=inside,
                ignore_escaped=True,
            )

        for delim in lang.chars:
            token = Token.string(delim)
            code = delim.encode()[0]
            yield _arm(
                delim,
                _char_literal(token, 0),
                non_adjacent=True,
                condition=lambda w, code=code: w.values[0] == code
                and w.distances[0] in (1, 2),
            )
            yield _arm(
                delim,
                _char_literal(token, 1),
                non_adjacent=True,
                condition=lambda w, code=code: w.values[1] == code
                and w.distances[1] == 2,
            )

        for open_, close in lang.delimiters:
            token = Token.delimiter(open_, close)
            yield _arm(open_, self._open_delimiter(token, close.encode()[0]))
            yield _arm(close, self._close_delimiter(token))