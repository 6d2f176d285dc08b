"""Configured parser API with results, diagnostics and statistics."""

from .parser import ParseResult, TagSoupParser, parse_string

__all__ = [
    "ParseResult",
    "TagSoupParser",
    "parse_string",
]
