"""Locate the bytes of interest in a text, with their column on each line."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

_NEWLINE = ord("\n")
_ESCAPE = ord("\\")


@dataclass(frozen=True)
class CharPos:
    """A found byte and its byte column within its line."""

    byte: int
    col: int


def _pattern(tokens: Iterable[int]) -> re.Pattern[bytes]:
    wanted = {_NEWLINE, _ESCAPE}
    wanted.update(b for b in tokens if b != 0)
    members = b"".join(re.escape(bytes([b])) for b in sorted(wanted))
    return re.compile(b"[" + members + b"]")


def tokenize(text: str | bytes, tokens: Iterable[int]) -> Iterator[CharPos]:
    """Yield every newline, backslash and listed byte in ``text``.

    Newlines are reported at column 0; other bytes carry their byte offset
    from the start of their line, so the row is the count of newlines seen.
    """
    data = text.encode() if isinstance(text, str) else bytes(text)
    line_start = 0
    for found in _pattern(tokens).finditer(data):
        pos = found.start()
        byte = data[pos]
        if byte == _NEWLINE:
            line_start = pos + 1
            yield CharPos(_NEWLINE, 0)
        else:
            yield CharPos(byte, pos - line_start)