"""Tag-soup markup parser.

Converts markup text into an ordered tree of element and text nodes without
requiring well-formedness, using a small, predictable set of recovery rules.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), tokenize()
- Level 2: Event stream - collect_events(), EventCollector
- Level 3: Configured parser - TagSoupParser with ParserConfig
"""

__version__ = "0.1.0"
__author__ = "Tag Soup Parser Team"

from .api import ParseResult, TagSoupParser, parse_string
from .classification import ClassifierTables, block, inline, raw_text, void
from .shared.config import ParserConfig, TokenizerConfig, TreeConfig
from .tokenization import (
    Attribute,
    EventType,
    ParseError,
    TagSoupTokenizer,
    TokenEvent,
    collect_events,
    tokenize,
)
from .tree import ElementNode, Node, TextNode, TreeBuilder, parse

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: entry points
    "parse",
    "tokenize",
    "ParseError",

    # Classification tables
    "ClassifierTables",
    "block",
    "inline",
    "raw_text",
    "void",

    # Tree and event types
    "Attribute",
    "ElementNode",
    "Node",
    "TextNode",
    "TreeBuilder",
    "EventType",
    "TokenEvent",
    "collect_events",
    "TagSoupTokenizer",

    # Level 3: configured parser
    "ParseResult",
    "TagSoupParser",
    "parse_string",
    "ParserConfig",
    "TokenizerConfig",
    "TreeConfig",
]
