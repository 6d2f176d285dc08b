"""Tag classification tables.

Four fixed sets of lowercase tag names drive the tokenizer's recovery rules:

* void elements never take content and are never pushed on the open-tag stack
* block elements auto-close any inline elements left open on top of the stack
* inline elements are the ones eligible for that auto-close
* raw-text elements hold opaque text up to their literal end tag

The sets overlap on purpose (``script`` is both inline and raw-text, ``br``
both void and inline). Only the void lookup lowercases the tag name; block,
inline and raw-text lookups compare the name exactly as written, so ``<BR>``
is void while ``<DIV>`` is not block-level.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

# https://www.w3.org/TR/html/syntax.html#void-elements
VOID_ELEMENTS = frozenset([
    "area", "base", "br", "col", "embed", "hr", "img", "input", "link",
    "meta", "param", "source", "track", "wbr",
])

# https://developer.mozilla.org/en-US/docs/Web/HTML/Block-level_elements
BLOCK_ELEMENTS = frozenset([
    "address", "article", "aside", "blockquote", "canvas", "dd", "div", "dl",
    "dt", "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2",
    "h3", "h4", "h5", "h6", "header", "hgroup", "hr", "li", "main", "nav",
    "noscript", "ol", "output", "p", "pre", "section", "table", "tfoot", "ul",
    "video",
])

# https://developer.mozilla.org/en-US/docs/Web/HTML/Inline_elements
INLINE_ELEMENTS = frozenset([
    "a", "abbr", "acronym", "b", "bdo", "big", "br", "button", "cite", "code",
    "dfn", "em", "i", "img", "input", "kbd", "label", "map", "object", "q",
    "samp", "script", "select", "small", "span", "strong", "sub", "sup",
    "textarea", "time", "tt", "var",
])

# https://www.w3.org/TR/html/syntax.html#raw-text
RAW_TEXT_ELEMENTS = frozenset(["script", "style"])


def _presence_map(names: Iterable[str]) -> Mapping[str, bool]:
    return MappingProxyType({name: True for name in names})


# Read-only presence maps for callers that classify tags outside the tokenizer.
void: Mapping[str, bool] = _presence_map(VOID_ELEMENTS)
block: Mapping[str, bool] = _presence_map(BLOCK_ELEMENTS)
inline: Mapping[str, bool] = _presence_map(INLINE_ELEMENTS)
raw_text: Mapping[str, bool] = _presence_map(RAW_TEXT_ELEMENTS)


@dataclass(frozen=True)
class ClassifierTables:
    """Immutable bundle of the four classification sets."""

    void_elements: frozenset = VOID_ELEMENTS
    block_elements: frozenset = BLOCK_ELEMENTS
    inline_elements: frozenset = INLINE_ELEMENTS
    raw_text_elements: frozenset = RAW_TEXT_ELEMENTS

    @classmethod
    def default(cls) -> "ClassifierTables":
        """Return the process-wide default tables."""
        return DEFAULT_TABLES

    def with_overrides(
        self,
        void_elements: Optional[Iterable[str]] = None,
        block_elements: Optional[Iterable[str]] = None,
        inline_elements: Optional[Iterable[str]] = None,
        raw_text_elements: Optional[Iterable[str]] = None,
    ) -> "ClassifierTables":
        """Return a copy with any of the sets replaced.

        Sets that are not given are shared with this instance.
        """
        return ClassifierTables(
            void_elements=(
                self.void_elements if void_elements is None
                else frozenset(void_elements)
            ),
            block_elements=(
                self.block_elements if block_elements is None
                else frozenset(block_elements)
            ),
            inline_elements=(
                self.inline_elements if inline_elements is None
                else frozenset(inline_elements)
            ),
            raw_text_elements=(
                self.raw_text_elements if raw_text_elements is None
                else frozenset(raw_text_elements)
            ),
        )

    def is_void(self, tag_name: str) -> bool:
        return tag_name.lower() in self.void_elements

    def is_block(self, tag_name: str) -> bool:
        return tag_name in self.block_elements

    def is_inline(self, tag_name: str) -> bool:
        return tag_name in self.inline_elements

    def is_raw_text(self, tag_name: str) -> bool:
        return tag_name in self.raw_text_elements


DEFAULT_TABLES = ClassifierTables()
