"""A parsed buffer: per-line matches that can be updated one edit at a time."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from .matcher import State
from .parse import parse_filetype
from .tokens import Kind, Match, MatchWithLine, Token


class ParsedBuffer:
    """Matches and end-of-line parser states for every line of a buffer."""

    def __init__(
        self, matches_by_line: list[list[Match]], state_by_line: list[State]
    ) -> None:
        self.matches_by_line = matches_by_line
        self.state_by_line = state_by_line

    @classmethod
    def parse(cls, filetype: str, lines: Sequence[str]) -> ParsedBuffer:
        """Parse a whole buffer.

        Raises UnsupportedFiletypeError when the filetype is unknown.
        """
        matches_by_line, state_by_line = parse_filetype(
            filetype, lines, State.normal()
        )
        return cls(matches_by_line, state_by_line)

    def __len__(self) -> int:
        return len(self.matches_by_line)

    def reparse_range(
        self,
        filetype: str,
        lines: Sequence[str],
        start_line: int | None = None,
        old_end_line: int | None = None,
        new_end_line: int | None = None,
    ) -> None:
        """Replace lines ``start_line:old_end_line`` with the parse of ``lines``.

        Parsing starts from the state at the end of the line before
        ``start_line``; only the first ``new_end_line - start_line`` parsed
        lines are kept. Raises UnsupportedFiletypeError for an unknown
        filetype and ValueError for an inconsistent range.
        """
        max_line = len(self.matches_by_line)
        start = min(0 if start_line is None else start_line, max_line)
        old_end = min(max_line if old_end_line is None else old_end_line, max_line)
        if start < 0 or old_end < start:
            raise ValueError(
                f"invalid line range {start_line!r}..{old_end_line!r}"
            )

        initial_state = self.state_by_line[start - 1] if start > 0 else State.normal()
        new_matches, new_states = parse_filetype(filetype, lines, initial_state)

        new_end = start + len(new_matches) if new_end_line is None else new_end_line
        length = new_end - start
        if not 0 <= length <= len(new_matches):
            raise ValueError(
                f"new end line {new_end_line!r} does not fit the "
                f"{len(new_matches)} parsed lines starting at {start}"
            )

        self.matches_by_line[start:old_end] = new_matches[:length]
        self.state_by_line[start:old_end] = new_states[:length]
        self._recalculate_stack_heights()

    def line_matches(self, line_number: int) -> list[Match] | None:
        """Copies of the matches on a line, or None past the end of the buffer."""
        if not 0 <= line_number < len(self.matches_by_line):
            return None
        return [replace(found) for found in self.matches_by_line[line_number]]

    def match_at(self, line_number: int, col: int) -> Match | None:
        """The match whose text covers byte column ``col`` of a line."""
        if not 0 <= line_number < len(self.matches_by_line):
            return None
        return next(
            (
                replace(found)
                for found in self.matches_by_line[line_number]
                if found.col <= col < found.col + len(found)
            ),
            None,
        )

    def match_pair(
        self, line_number: int, col: int
    ) -> tuple[MatchWithLine, MatchWithLine] | None:
        """The opening and closing matches of the pair at a position."""
        found = self.match_at(line_number, col)
        if found is None:
            return None
        here = found.with_line(line_number)

        def partner(candidate: Match) -> bool:
            return (
                candidate.token == here.token
                and candidate.stack_height == here.stack_height
            )

        if here.kind is Kind.OPENING:
            for number in range(line_number, len(self.matches_by_line)):
                for candidate in self.matches_by_line[number]:
                    if (number != line_number or candidate.col > col) and partner(
                        candidate
                    ):
                        return here, candidate.with_line(number)
            return None

        if here.kind is Kind.CLOSING:
            for number in range(line_number, -1, -1):
                for candidate in reversed(self.matches_by_line[number]):
                    if (number != line_number or candidate.col < col) and partner(
                        candidate
                    ):
                        return candidate.with_line(number), here
            return None

        return None

    def _recalculate_stack_heights(self) -> None:
        stack: list[Token] = []
        for line in self.matches_by_line:
            for found in line:
                if found.kind is Kind.OPENING:
                    found.stack_height = len(stack)
                    stack.append(found.token)
                else:
                    if stack and stack[-1] == found.token:
                        stack.pop()
                    found.stack_height = len(stack)