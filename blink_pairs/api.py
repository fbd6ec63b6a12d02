"""Per-buffer registry of parses, with the queries an editor makes of them."""

from __future__ import annotations

import threading
from collections.abc import Sequence

from .buffer import ParsedBuffer
from .languages import UnsupportedFiletypeError
from .tokens import Match, MatchWithLine, TokenType


def _token_type(value: int | TokenType | None) -> TokenType:
    if value is None:
        return TokenType.DELIMITER
    try:
        return TokenType(value)
    except ValueError:
        return TokenType.DELIMITER


class BufferRegistry:
    """Parsed buffers keyed by buffer number, safe to share between threads."""

    def __init__(self) -> None:
        self._buffers: dict[int, ParsedBuffer] = {}
        self._lock = threading.Lock()

    def parse_buffer(
        self,
        bufnr: int,
        filetype: str,
        lines: Sequence[str],
        start_line: int | None = None,
        old_end_line: int | None = None,
        new_end_line: int | None = None,
    ) -> bool:
        """Parse a buffer, incrementally if it is already known.

        Returns False when the filetype is not supported.
        """
        with self._lock:
            existing = self._buffers.get(bufnr)
            try:
                if existing is not None:
                    existing.reparse_range(
                        filetype, lines, start_line, old_end_line, new_end_line
                    )
                else:
                    self._buffers[bufnr] = ParsedBuffer.parse(filetype, lines)
            except UnsupportedFiletypeError:
                return False
            return True

    def get_line_matches(
        self,
        bufnr: int,
        line_number: int,
        token_type: int | TokenType | None = None,
    ) -> list[Match]:
        """Matches of one category on a line; delimiters unless told otherwise."""
        wanted = _token_type(token_type)
        with self._lock:
            parsed = self._buffers.get(bufnr)
            line = parsed.line_matches(line_number) if parsed is not None else None
        if line is None:
            return []
        return [found for found in line if wanted.matches(found.token)]

    def get_match_at(self, bufnr: int, row: int, col: int) -> Match | None:
        """The match covering a position, if any."""
        with self._lock:
            parsed = self._buffers.get(bufnr)
            return parsed.match_at(row, col) if parsed is not None else None

    def get_match_pair(
        self, bufnr: int, row: int, col: int
    ) -> list[MatchWithLine] | None:
        """The opening and closing match of the pair at a position."""
        with self._lock:
            parsed = self._buffers.get(bufnr)
            pair = parsed.match_pair(row, col) if parsed is not None else None
        return list(pair) if pair is not None else None


_registry = BufferRegistry()


def parse_buffer(
    bufnr: int,
    filetype: str,
    lines: Sequence[str],
    start_line: int | None = None,
    old_end_line: int | None = None,
    new_end_line: int | None = None,
) -> bool:
    """Parse a buffer in the shared registry."""
    return _registry.parse_buffer(
        bufnr, filetype, lines, start_line, old_end_line, new_end_line
    )


def get_line_matches(
    bufnr: int, line_number: int, token_type: int | TokenType | None = None
) -> list[Match]:
    """Line matches from the shared registry."""
    return _registry.get_line_matches(bufnr, line_number, token_type)


def get_match_at(bufnr: int, row: int, col: int) -> Match | None:
    """Match at a position from the shared registry."""
    return _registry.get_match_at(bufnr, row, col)


def get_match_pair(bufnr: int, row: int, col: int) -> list[MatchWithLine] | None:
    """Match pair at a position from the shared registry."""
    return _registry.get_match_pair(bufnr, row, col)