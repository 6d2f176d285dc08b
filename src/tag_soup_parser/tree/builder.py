"""Tree building on top of the tokenizer.

:class:`TreeBuilder` is a tokenizer handler that materializes element and text
nodes instead of passing events through. A build stack seeded with an
anonymous root container mirrors the tokenizer's open-tag stack: ``start``
appends a node to the current top and pushes it unless it is self-closing,
``end`` pops, ``text`` appends a trimmed text node. The root's children are the
parse result; the root itself is never exposed.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from tag_soup_parser.shared import TokenizerConfig, TreeConfig
from tag_soup_parser.tokenization import Attribute, TagSoupTokenizer


@dataclass
class TextNode:
    """Text content, trimmed and never empty."""

    content: str

    def __post_init__(self) -> None:
        """Validate text content."""
        if not self.content:
            raise ValueError("Text node content cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "text", "content": self.content}


@dataclass
class ElementNode:
    """A single element with its attributes and children.

    Attributes keep source order and duplicates. ``self_closing`` elements
    (void tags, or tags written with ``/>``) never have children.
    """

    tag_name: str
    attributes: List[Attribute] = field(default_factory=list)
    self_closing: bool = False
    children: List["Node"] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate element values."""
        if not self.tag_name:
            raise ValueError("Element tag name cannot be empty")
        if self.self_closing and self.children:
            raise ValueError("Self-closing elements cannot have children")

    @property
    def element_children(self) -> List["ElementNode"]:
        """Direct children that are elements."""
        return [child for child in self.children if isinstance(child, ElementNode)]

    @property
    def text_content(self) -> str:
        """All descendant text joined with single spaces."""
        return " ".join(
            node.content for node in self.iter() if isinstance(node, TextNode)
        )

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the value of the first attribute called ``name``.

        A bare attribute has value ``None``, so use :meth:`has_attribute` to
        tell it apart from a missing one.
        """
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute.value
        return default

    def get_attributes(self, name: str) -> List[Optional[str]]:
        """Get the values of every attribute called ``name``, in source order."""
        return [
            attribute.value for attribute in self.attributes if attribute.name == name
        ]

    def has_attribute(self, name: str) -> bool:
        return any(attribute.name == name for attribute in self.attributes)

    def iter(self) -> Iterator["Node"]:
        """Iterate over this element and its descendants in document order."""
        return iter_nodes([self])

    def find(self, tag_name: str) -> Optional["ElementNode"]:
        """Find the first descendant element with this tag name."""
        return next(
            (
                node for node in iter_nodes(self.children)
                if isinstance(node, ElementNode) and node.tag_name == tag_name
            ),
            None,
        )

    def find_all(self, tag_name: str) -> List["ElementNode"]:
        """Find all descendant elements with this tag name, in document order."""
        return [
            node for node in iter_nodes(self.children)
            if isinstance(node, ElementNode) and node.tag_name == tag_name
        ]

    def find_by_attribute(
        self, name: str, value: Optional[str] = None
    ) -> List["ElementNode"]:
        """Find this element and descendants carrying an attribute.

        With ``value`` given, only elements whose first ``name`` attribute has
        that value match.
        """
        return [
            node for node in self.iter()
            if isinstance(node, ElementNode)
            and node.has_attribute(name)
            and (value is None or node.get_attribute(name) == value)
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        return {
            "type": "element",
            "tag_name": self.tag_name,
            "attributes": [attribute.to_dict() for attribute in self.attributes],
            "self_closing": self.self_closing,
            "children": [child.to_dict() for child in self.children],
        }


Node = Union[ElementNode, TextNode]


def iter_nodes(nodes: Iterable[Node]) -> Iterator[Node]:
    """Walk a sequence of nodes depth-first in document order.

    Iterative, so arbitrarily deep trees do not hit the recursion limit.
    """
    pending = list(reversed(list(nodes)))
    while pending:
        node = pending.pop()
        yield node
        if isinstance(node, ElementNode):
            pending.extend(reversed(node.children))


@dataclass
class _RootContainer:
    children: List[Node] = field(default_factory=list)


class TreeBuilder:
    """Tokenizer handler that builds a node tree.

    Examples:
        >>> nodes = TreeBuilder().build("<p>Hello <b>world</b></p>")
        >>> nodes[0].tag_name, nodes[0].children[1].tag_name
        ('p', 'b')
    """

    def __init__(
        self,
        config: Optional[TreeConfig] = None,
        tokenizer: Optional[TagSoupTokenizer] = None,
    ) -> None:
        self.config = config or TreeConfig()
        self.tokenizer = tokenizer or TagSoupTokenizer()
        self._reset()

    def _reset(self) -> None:
        self._root = _RootContainer()
        self._stack: List[Any] = [self._root]
        self.elements_built = 0
        self.text_nodes_built = 0

    def build(self, buffer: str) -> List[Node]:
        """Parse ``buffer`` into a list of top-level nodes.

        Raises:
            ParseError: Propagated from the tokenizer; no partial tree is
                returned
        """
        self._reset()
        self.tokenizer.tokenize(buffer, self)
        return self._root.children

    def start(
        self, tag_name: str, attributes: List[Attribute], self_closing: bool
    ) -> None:
        node = ElementNode(tag_name, list(attributes), self_closing)
        self._stack[-1].children.append(node)
        self.elements_built += 1
        if not self_closing:
            self._stack.append(node)

    def end(self, tag_name: str) -> None:
        self._stack.pop()

    def text(self, content: str) -> None:
        if not self.config.collect_text:
            return
        content = content.strip()
        if not content:
            return
        self._stack[-1].children.append(TextNode(content))
        self.text_nodes_built += 1


def parse(buffer: str) -> List[Node]:
    """Parse ``buffer`` into an ordered list of top-level nodes.

    Raises:
        ParseError: If the tokenizer cannot make progress
    """
    tokenizer = TagSoupTokenizer(TokenizerConfig(enable_diagnostics=False))
    return TreeBuilder(tokenizer=tokenizer).build(buffer)
