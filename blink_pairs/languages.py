"""Token definitions for each supported filetype."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from types import MappingProxyType


class UnsupportedFiletypeError(LookupError):
    """Raised when no language definition exists for a filetype."""

    def __init__(self, filetype: str) -> None:
        super().__init__(f"unsupported filetype: {filetype!r}")
        self.filetype = filetype


def _byte_len(text: str) -> int:
    return len(text.encode())


def _pairs(items: Iterable[tuple[str, str]]) -> tuple[tuple[str, str], ...]:
    return tuple((open_, close) for open_, close in items)


@dataclass(frozen=True)
class LanguageDef:
    """The delimiters, comments and string forms recognised in one language."""

    name: str
    delimiters: tuple[tuple[str, str], ...] = ()
    line_comments: tuple[str, ...] = ()
    block_comments: tuple[tuple[str, str], ...] = ()
    strings: tuple[str, ...] = ()
    chars: tuple[str, ...] = ()
    block_strings: tuple[tuple[str, str], ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "delimiters", _pairs(self.delimiters))
        object.__setattr__(self, "line_comments", tuple(self.line_comments))
        object.__setattr__(self, "block_comments", _pairs(self.block_comments))
        object.__setattr__(self, "strings", tuple(self.strings))
        object.__setattr__(self, "chars", tuple(self.chars))
        object.__setattr__(self, "block_strings", _pairs(self.block_strings))

        singles = [text for pair in self.delimiters for text in pair]
        singles.extend(self.chars)
        for text in singles:
            if _byte_len(text) != 1:
                raise ValueError(
                    f"Delimiter must be a single character: {text!r}"
                )

    def _patterns(self) -> Iterable[str]:
        for pair in (*self.delimiters, *self.block_comments, *self.block_strings):
            yield from pair
        yield from self.line_comments
        yield from self.strings
        yield from self.chars

    def tokens(self) -> tuple[int, ...]:
        """Every distinct byte appearing in any pattern, in ascending order."""
        return tuple(
            sorted({byte for pattern in self._patterns() for byte in pattern.encode()})
        )

    def max_lookahead(self) -> int:
        """Bytes needed beyond the current one to recognise the longest pattern."""
        lengths = [
            _byte_len(p)
            for pair in (*self.delimiters, *self.block_comments, *self.block_strings)
            for p in pair
        ]
        lengths.extend(_byte_len(p) for p in self.line_comments)
        lengths.extend(_byte_len(p) for p in self.strings)
        # Character literals need two extra bytes to find the closing quote.
        lengths.extend(_byte_len(p) + 2 for p in self.chars)
        return max(max(lengths, default=0) - 1, 0)


_BRACKETS = (("(", ")"), ("[", "]"), ("{", "}"))
_C_BLOCK = (("/*", "*/"),)
_TRIPLE_DOUBLE = ('"""', '"""')

_LANGUAGES: dict[str, LanguageDef] = {
    "c": LanguageDef(
        name="C",
        delimiters=_BRACKETS,
        line_comments=("//",),
        block_comments=_C_BLOCK,
        chars=("'",),
        strings=('"',),
    ),
    "clojure": LanguageDef(
        name="Clojure",
        delimiters=_BRACKETS,
        line_comments=(";",),
        strings=('"',),
    ),
    "cpp": LanguageDef(
        name="Cpp",
        delimiters=_BRACKETS,
        line_comments=("//",),
        block_comments=_C_BLOCK,
        chars=("'",),
        strings=('"',),
        block_strings=(('R"(', ')"'),),
    ),
    "csharp": LanguageDef(
        name="CSharp",
        delimiters=_BRACKETS,
        line_comments=("//",),
        block_comments=_C_BLOCK,
        chars=("'",),
        strings=('"',),
        block_strings=(('@"', '"'),),
    ),
    "dart": LanguageDef(
        name="Dart",
        delimiters=_BRACKETS,
        line_comments=("//",),
        block_comments=_C_BLOCK,
        strings=('"', "'"),
        block_strings=(_TRIPLE_DOUBLE, ("'''", "'''")),
    ),
    "elixir": LanguageDef(
        name="Elixir",
        delimiters=_BRACKETS,
        line_comments=("#",),
        strings=('"',),
        block_strings=(_TRIPLE_DOUBLE,),
    ),
    "erlang": LanguageDef(
        name="Erlang",
        delimiters=_BRACKETS,
        line_comments=("%",),
        strings=('"',),
    ),
    "fsharp": LanguageDef(
        name="FSharp",
        delimiters=_BRACKETS,
        line_comments=("//",),
        block_comments=(("(*", "*)"),),
        strings=('"',),
        block_strings=(_TRIPLE_DOUBLE,),
    ),
    "go": LanguageDef(
        name="Go",
        delimiters=_BRACKETS,
        line_comments=("//",),
        block_comments=_C_BLOCK,
        strings=('"',),
        block_strings=(("`", "`"),),
    ),
    "haskell": LanguageDef(
        name="Haskell",
        delimiters=_BRACKETS,
        line_comments=("--",),
        block_comments=(("{-", "-}"),),
        strings=('"',),
    ),
    "haxe": LanguageDef(
        name="Haxe",
        delimiters=_BRACKETS,
        line_comments=("//",),
        block_comments=_C_BLOCK,
        chars=("'",),
        strings=('"',),
    ),
    "java": LanguageDef(
        name="Java",
        delimiters=_BRACKETS,
        line_comments=("//",),
        block_comments=_C_BLOCK,
        chars=("'",),
        strings=('"',),
        block_strings=(_TRIPLE_DOUBLE,),
    ),
    "javascript": LanguageDef(
        name="JavaScript",
        delimiters=_BRACKETS,
        line_comments=("//",),
        block_comments=_C_BLOCK,
        strings=('"', "'"),
        block_strings=(("`", "`"),),
    ),
    # Includes the comment forms of jsonc and json5.
    "json": LanguageDef(
        name="Json",
        delimiters=(("[", "]"), ("{", "}")),
        line_comments=("//",),
        block_comments=_C_BLOCK,
        strings=('"',),
    ),
    "kotlin": LanguageDef(
        name="Kotlin",
        delimiters=_BRACKETS,
        line_comments=("//",),
        block_comments=_C_BLOCK,
        strings=('"',),
        block_strings=(_TRIPLE_DOUBLE,),
    ),
    "latex": LanguageDef(
        name="Latex",
        delimiters=_BRACKETS,
        line_comments=("%",),
        strings=('"',),
        chars=("'",),
        block_strings=(("$", "$"), ("$$", "$$")),
    ),
    "lean": LanguageDef(
        name="Lean",
        delimiters=_BRACKETS,
        line_comments=("--",),
        block_comments=(("/-", "-/"),),
        strings=('"',),
    ),
    "lua": LanguageDef(
        name="Lua",
        delimiters=_BRACKETS,
        line_comments=("--",),
        block_comments=(("--[[", "--]]"),),
        strings=('"', "'"),
        block_strings=(("[[", "]]"),),
    ),
    "objc": LanguageDef(
        name="ObjC",
        delimiters=_BRACKETS,
        line_comments=("//",),
        block_comments=_C_BLOCK,
        strings=('"',),
    ),
    "ocaml": LanguageDef(
        name="OCaml",
        delimiters=_BRACKETS,
        block_comments=(("(*", "*)"),),
        strings=('"',),
    ),
    "perl": LanguageDef(
        name="Perl",
        delimiters=_BRACKETS,
        line_comments=("#",),
        strings=('"', "'"),
    ),
    "php": LanguageDef(
        name="Php",
        delimiters=_BRACKETS,
        line_comments=("//", "#"),
        block_comments=_C_BLOCK,
        strings=('"', "'"),
    ),
    "python": LanguageDef(
        name="Python",
        delimiters=_BRACKETS,
        line_comments=("#",),
        strings=('"', "'"),
        block_strings=(_TRIPLE_DOUBLE, ("'''", "'''")),
    ),
    "r": LanguageDef(
        name="R",
        delimiters=_BRACKETS,
        line_comments=("#",),
        strings=('"', "'"),
    ),
    "ruby": LanguageDef(
        name="Ruby",
        delimiters=_BRACKETS,
        line_comments=("#",),
        block_comments=(("=begin", "end"),),
        strings=('"', "'"),
    ),
    "rust": LanguageDef(
        name="Rust",
        delimiters=_BRACKETS,
        line_comments=("//",),
        block_comments=_C_BLOCK,
        chars=("'",),
        block_strings=(
            ('"', '"'),
            ('r#"', '"#'),
            ('r##"', '"##'),
            ('r###"', '"###'),
        ),
    ),
    "scala": LanguageDef(
        name="Scala",
        delimiters=_BRACKETS,
        line_comments=("//",),
        block_comments=_C_BLOCK,
        strings=('"',),
        block_strings=(_TRIPLE_DOUBLE,),
    ),
    "shell": LanguageDef(
        name="Shell",
        delimiters=_BRACKETS,
        line_comments=("#",),
        strings=('"', "'"),
    ),
    "swift": LanguageDef(
        name="Swift",
        delimiters=_BRACKETS,
        line_comments=("//",),
        block_comments=_C_BLOCK,
        strings=('"', "'"),
        block_strings=(_TRIPLE_DOUBLE,),
    ),
    "toml": LanguageDef(
        name="Toml",
        delimiters=_BRACKETS,
        line_comments=("#",),
        strings=('"', "'"),
        block_strings=(_TRIPLE_DOUBLE,),
    ),
    "typst": LanguageDef(
        name="Typst",
        delimiters=_BRACKETS,
        line_comments=("//",),
        block_comments=_C_BLOCK,
        strings=('"', "'"),
    ),
    # Zig multiline string literals are lines starting with \\ and have no
    # distinct closing form, so they are treated as line comments.
    "zig": LanguageDef(
        name="Zig",
        delimiters=_BRACKETS,
        line_comments=("//", "\\\\"),
        strings=('"',),
    ),
}

LANGUAGES = MappingProxyType(_LANGUAGES)


def get_language(filetype: str) -> LanguageDef:
    """Return the definition for ``filetype`` or raise UnsupportedFiletypeError."""
    try:
        return _LANGUAGES[filetype]
    except KeyError:
        raise UnsupportedFiletypeError(filetype) from None


def filetypes() -> tuple[str, ...]:
    """All supported filetype names, sorted."""
    return tuple(sorted(_LANGUAGES))