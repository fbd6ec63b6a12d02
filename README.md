# blink_pairs

`blink_pairs` finds brackets, string quotes and comment markers in source
code and pairs them up. It is meant for editors: a buffer is parsed once, then
only the lines that change are parsed again, and lookups by line and column
are cheap.

Supported filetypes:

c, clojure, cpp, csharp, dart, elixir, erlang, fsharp, go, haskell, haxe, java,
javascript, json, kotlin, latex, lean, lua, objc, ocaml, perl, php, python, r,
ruby, rust, scala, shell, swift, toml, typst, zig.

## Installation

```
pip install blink_pairs
```

There are no runtime dependencies.

## Quick start

The functions in `blink_pairs.api` keep a shared registry of parsed buffers
keyed by buffer number.

```python
from blink_pairs.api import parse_buffer, get_line_matches, get_match_at, get_match_pair

lines = [
    "int main() {",
    "    // a comment with a { brace",
    "    return 0;",
    "}",
]

# The first call for a buffer parses it fully.
# Returns False when the filetype is not supported.
parse_buffer(1, "c", lines)

# Delimiters on line 0; pass a TokenType (or its number) for other categories.
for match in get_line_matches(1, 0):
    print(match.col, match.token.opening, match.stack_height)

# The match under the cursor, and its partner.
print(get_match_at(1, 0, 11))
opening, closing = get_match_pair(1, 0, 11)
print(opening.line, opening.col, "->", closing.line, closing.col)  # 0 11 -> 3 0
```

Later calls to `parse_buffer` for a buffer number that is already known
reparse only a range: pass the new text of the changed lines, the first
changed line, the old end line (exclusive) and the new end line (exclusive).
Parsing resumes from the state at the end of the line before the range, and
the nesting depths of the whole buffer are recomputed afterwards.

```python
lines.insert(2, "    if (x) { y(); }")
parse_buffer(1, "c", lines[2:3], 2, 2, 3)
```

Independent registries can be kept with `BufferRegistry`, which has the same
four methods and guards its buffers with a lock:

```python
from blink_pairs.api import BufferRegistry

registry = BufferRegistry()
registry.parse_buffer(7, "python", ["print((1, 2))"])
print(registry.get_match_pair(7, 0, 5))  # the outer ( at col 5 and ) at col 12
```

`get_line_matches` returns an empty list and `get_match_at` /
`get_match_pair` return `None` for an unknown buffer or a position with
nothing on it.

## Token categories

`blink_pairs.tokens.TokenType` numbers the categories:

| value | member          |
|-------|-----------------|
| 0     | `DELIMITER`     |
| 1     | `STRING`        |
| 2     | `BLOCK_STRING`  |
| 3     | `LINE_COMMENT`  |
| 4     | `BLOCK_COMMENT` |

`get_line_matches` falls back to `DELIMITER` when given `None` or a number
outside this range.

## Results

A `Match` carries its `kind` (`Kind.OPENING`, `Kind.CLOSING` or
`Kind.NON_PAIR`), its `token` (a `Token` with `type`, `opening` and optional
`closing`), its `col` and, for delimiters, its `stack_height` (nesting depth).
`len(match)` is the byte length of the matched text. `match.with_line(n)`
gives a `MatchWithLine`, which also records the line.

`Match.to_dict()` puts the opening and closing texts under keys `0` and `1`;
`MatchWithLine.to_dict()` puts them under `1` and `2` and adds `line`. Both
include `col` and `stack_height`.

Columns are byte offsets within the line, counted from zero.

## Lower-level pieces

- `blink_pairs.buffer.ParsedBuffer` holds the matches and end-of-line parser
  states of one buffer: `ParsedBuffer.parse(filetype, lines)`,
  `reparse_range(filetype, lines, start_line, old_end_line, new_end_line)`,
  `line_matches`, `match_at` and `match_pair`. Unlike the registry, these
  raise `UnsupportedFiletypeError` for an unknown filetype, and
  `reparse_range` raises `ValueError` for a range that does not fit.
- `blink_pairs.parse.parse_filetype(filetype, lines, initial_state)` returns
  the matches of every line and the parser `State` at the end of every line;
  `parse(lines, initial_state, matcher)` does the same with a given `Matcher`.
- `blink_pairs.matcher.Matcher` recognises one language's patterns a token at
  a time; `State` records whether the parser is inside a string or comment.
- `blink_pairs.languages.get_language(filetype)` returns the `LanguageDef`
  describing a language's delimiters, comments and strings (raising
  `UnsupportedFiletypeError` if there is none); `filetypes()` lists the
  supported filetypes and `LANGUAGES` maps them to their definitions. A
  `LanguageDef` built by hand can be passed to `Matcher`.
- `blink_pairs.tokenize.tokenize(text, tokens)` yields a `CharPos` for every
  newline, backslash and listed byte in a text.

## What it does not do

This is a lightweight pattern matcher, not a full parser of each language:
it knows each language only by its delimiters, comment markers and string
quotes. It is a library only; it has no command-line tool and does not talk
to an editor by itself.

## Running the tests

```
pip install -e ".[test]"
pytest
```