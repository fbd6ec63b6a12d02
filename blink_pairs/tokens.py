"""Tokens, token kinds and the matches produced while parsing a buffer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class Kind(Enum):
    """Role of a match within a pair."""

    OPENING = 0
    CLOSING = 1
    NON_PAIR = 2


class TokenType(IntEnum):
    """Category of a token, numbered as exposed to editor clients."""

    DELIMITER = 0
    STRING = 1
    BLOCK_STRING = 2
    LINE_COMMENT = 3
    BLOCK_COMMENT = 4

    def matches(self, token: Token) -> bool:
        """Return whether ``token`` belongs to this category."""
        return token.type is self


@dataclass(frozen=True)
class Token:
    """A recognised token: its category, opening text and optional closing text."""

    type: TokenType
    opening: str
    closing: str | None = None

    @classmethod
    def delimiter(cls, opening: str, closing: str) -> Token:
        return cls(TokenType.DELIMITER, opening, closing)

    @classmethod
    def string(cls, delim: str) -> Token:
        return cls(TokenType.STRING, delim)

    @classmethod
    def block_string(cls, opening: str, closing: str) -> Token:
        return cls(TokenType.BLOCK_STRING, opening, closing)

    @classmethod
    def line_comment(cls, opening: str) -> Token:
        return cls(TokenType.LINE_COMMENT, opening)

    @classmethod
    def block_comment(cls, opening: str, closing: str) -> Token:
        return cls(TokenType.BLOCK_COMMENT, opening, closing)


@dataclass
class Match:
    """A token found at a column of a line."""

    kind: Kind
    token: Token
    col: int
    stack_height: int | None = None

    @classmethod
    def line_comment(cls, text: str, col: int) -> Match:
        """A line comment start, which has no partner."""
        return cls(Kind.NON_PAIR, Token.line_comment(text), col)

    def with_line(self, line: int) -> MatchWithLine:
        """Return a copy of this match that also records its line."""
        return MatchWithLine(
            kind=self.kind,
            token=self.token,
            line=line,
            col=self.col,
            stack_height=self.stack_height,
        )

    def __len__(self) -> int:
        """Number of bytes the matched text spans."""
        if self.kind is Kind.CLOSING and self.token.closing is not None:
            return len(self.token.closing.encode())
        return len(self.token.opening.encode())

    def to_dict(self) -> dict:
        """Table form with the texts under keys 0 and 1."""
        table: dict = {0: self.token.opening}
        if self.token.closing is not None:
            table[1] = self.token.closing
        table["col"] = self.col
        table["stack_height"] = self.stack_height
        return table


@dataclass
class MatchWithLine:
    """A match together with the line it was found on."""

    kind: Kind
    token: Token
    line: int
    col: int
    stack_height: int | None = None

    def to_dict(self) -> dict:
        """Table form with the texts under keys 1 and 2."""
        table: dict = {1: self.token.opening}
        if self.token.closing is not None:
            table[2] = self.token.closing
        table["line"] = self.line
        table["col"] = self.col
        table["stack_height"] = self.stack_height
        return table