"""Tag classification tables used by the tokenizer's recovery rules.

Key Components:
    ClassifierTables: Immutable bundle of the void/block/inline/raw-text sets
    VOID_ELEMENTS, BLOCK_ELEMENTS, INLINE_ELEMENTS, RAW_TEXT_ELEMENTS: Default sets
    void, block, inline, raw_text: Read-only presence maps over the default sets
"""

from .tables import (
    BLOCK_ELEMENTS,
    DEFAULT_TABLES,
    INLINE_ELEMENTS,
    RAW_TEXT_ELEMENTS,
    VOID_ELEMENTS,
    ClassifierTables,
    block,
    inline,
    raw_text,
    void,
)

__all__ = [
    "BLOCK_ELEMENTS",
    "DEFAULT_TABLES",
    "INLINE_ELEMENTS",
    "RAW_TEXT_ELEMENTS",
    "VOID_ELEMENTS",
    "ClassifierTables",
    "block",
    "inline",
    "raw_text",
    "void",
]
