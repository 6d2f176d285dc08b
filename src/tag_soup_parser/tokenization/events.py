"""Recorded event stream for callers that want tokenizer output as data."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional

from tag_soup_parser.shared import TokenizerConfig

from .tokenizer import Attribute, TagSoupTokenizer


class EventType(Enum):
    """Kinds of structural events reported by the tokenizer."""

    START = auto()
    END = auto()
    TEXT = auto()


@dataclass
class TokenEvent:
    """One tokenizer callback, captured as a value."""

    type: EventType
    name: Optional[str] = None
    attributes: List[Attribute] = field(default_factory=list)
    self_closing: bool = False
    content: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate that the payload fits the event type."""
        if self.type is EventType.TEXT:
            if self.content is None:
                raise ValueError("Text events require content")
        elif not self.name:
            raise ValueError("Start and end events require a tag name")

    def to_dict(self) -> Dict[str, Any]:
        if self.type is EventType.TEXT:
            return {"type": "text", "content": self.content}
        if self.type is EventType.END:
            return {"type": "end", "name": self.name}
        return {
            "type": "start",
            "name": self.name,
            "attributes": [attribute.to_dict() for attribute in self.attributes],
            "self_closing": self.self_closing,
        }


class EventCollector:
    """Handler that records every callback in order."""

    def __init__(self) -> None:
        self.events: List[TokenEvent] = []

    def start(
        self, tag_name: str, attributes: List[Attribute], self_closing: bool
    ) -> None:
        self.events.append(TokenEvent(
            EventType.START,
            name=tag_name,
            attributes=list(attributes),
            self_closing=self_closing,
        ))

    def end(self, tag_name: str) -> None:
        self.events.append(TokenEvent(EventType.END, name=tag_name))

    def text(self, content: str) -> None:
        self.events.append(TokenEvent(EventType.TEXT, content=content))


def collect_events(
    buffer: str, config: Optional[TokenizerConfig] = None
) -> List[TokenEvent]:
    """Tokenize ``buffer`` and return its events in scan order.

    Raises:
        ParseError: Propagated from the tokenizer
    """
    collector = EventCollector()
    TagSoupTokenizer(config).tokenize(buffer, collector)
    return collector.events
