"""Tokenization engine for tag-soup markup.

Key Components:
    TagSoupTokenizer: Configurable single-pass scanner reporting to a handler
    tokenize: One-call form using the default classifier tables
    TokenHandler: Protocol of the optional start/end/text callbacks
    Attribute: Name/value pair captured from a start tag
    ParseError: Raised when the scanner cannot make progress
    EventCollector, collect_events: Event stream captured as TokenEvent values
"""

from .tokenizer import (
    Attribute,
    ParseError,
    TagSoupTokenizer,
    TokenHandler,
    match_comment,
    match_doctype,
    match_end_tag,
    match_start_tag,
    parse_attributes,
    tokenize,
)
from .events import (
    EventCollector,
    EventType,
    TokenEvent,
    collect_events,
)

__all__ = [
    "Attribute",
    "EventCollector",
    "EventType",
    "ParseError",
    "TagSoupTokenizer",
    "TokenEvent",
    "TokenHandler",
    "collect_events",
    "match_comment",
    "match_doctype",
    "match_end_tag",
    "match_start_tag",
    "parse_attributes",
    "tokenize",
]
