"""Incremental matching of brackets, strings and comments in source code."""

__version__ = "0.1.0"
__all__ = ["api", "buffer", "languages", "matcher", "parse", "tokenize", "tokens"]