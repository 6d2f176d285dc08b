"""Single-pass tag-soup tokenizer.

The tokenizer walks a markup buffer once, left to right, and reports
structure through a caller-supplied handler:

* ``start(tag_name, attributes, self_closing)`` for every opening tag
* ``end(tag_name)`` whenever an element closes, whether by its own end tag,
  by recovery, or because the input ran out
* ``text(content)`` for raw text runs, untrimmed and unescaped

Each callback is optional. Well-formedness is not required: an open-tag stack
plus a handful of recovery rules decide where elements close.

* An end tag closes the nearest open element of the same name and every
  element opened after it. An end tag with no open match is ignored.
* A block-level start tag first closes any inline elements on top of the
  stack.
* Void elements and explicit ``/>`` tags never go on the stack.
* Inside a raw-text element (``script``, ``style``) everything up to the first
  literal ``</name`` is text.
* Whatever is still open when the input ends is closed innermost first.

The only failure is an iteration that consumes nothing (a stray ``<``, an
unterminated comment, an unterminated raw-text element); it raises
:class:`ParseError`.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, List, Optional, Protocol, Tuple

from tag_soup_parser.classification import ClassifierTables
from tag_soup_parser.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    TokenizerConfig,
    get_logger,
)

COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"
END_TAG_OPEN = "</"
TAG_OPEN = "<"

# Shared by the start tag and doctype patterns: whitespace, a name, and an
# optional double-quoted, single-quoted or unquoted value.
_ATTRIBUTE_LIKE = (
    r"(?:\s+[-A-Za-z0-9_:@.]+"
    r"(?:\s*=\s*(?:(?:\"[^\"]*\")|(?:'[^']*')|[^>\s]+))?)*"
)

START_TAG_PATTERN = re.compile(
    r"<([-A-Za-z0-9_]+)(" + _ATTRIBUTE_LIKE + r")\s*(/?)>"
)
END_TAG_PATTERN = re.compile(r"</([-A-Za-z0-9_]+)[^>]*>")
DOCTYPE_PATTERN = re.compile(
    r"<!\s*(?i:doctype)((?:\s+[A-Za-z0-9_:]+"
    r"(?:\s*=\s*(?:(?:\"[^\"]*\")|(?:'[^']*')|[^>\s]+))?)*)\s*(/?)>"
)
ATTRIBUTE_PATTERN = re.compile(
    r"([-A-Za-z0-9_:@.]+)"
    r"(?:\s*=\s*(?:(?:\"((?:\\.|[^\"])*)\")|(?:'((?:\\.|[^'])*)')|([^>\s]+)))?"
)
COMMENT_SPAN_PATTERN = re.compile(r"<!--(.*?)-->", re.DOTALL)

PREVIEW_LENGTH = 100


class ParseError(Exception):
    """Raised when the scanning loop makes no progress.

    Attributes:
        remainder: The unconsumed input at the point of failure
        position: Offset of the remainder in the original buffer
    """

    def __init__(self, remainder: str, position: int = 0) -> None:
        self.remainder = remainder
        self.position = position
        preview = remainder
        if len(preview) > PREVIEW_LENGTH:
            preview = preview[:PREVIEW_LENGTH] + "..."
        super().__init__(f"parse error: {preview}")


@dataclass(frozen=True)
class Attribute:
    """One attribute as written in a start tag.

    ``value`` is ``None`` for a bare attribute (``<input disabled>``).
    """

    name: str
    value: Optional[str] = None

    def to_dict(self) -> dict:
        return {"name": self.name, "value": self.value}


class TokenHandler(Protocol):
    """Receiver of tokenizer events.

    Any subset of the three callbacks may be implemented; a missing one is
    simply not called. Plain mappings of callback name to callable are
    accepted as well.
    """

    def start(
        self, tag_name: str, attributes: List[Attribute], self_closing: bool
    ) -> None: ...

    def end(self, tag_name: str) -> None: ...

    def text(self, content: str) -> None: ...


def _callback(handler: Any, name: str) -> Optional[Callable[..., Any]]:
    if isinstance(handler, Mapping):
        return handler.get(name)
    return getattr(handler, name, None)


@lru_cache(maxsize=64)
def _raw_text_end_pattern(tag_name: str) -> "re.Pattern[str]":
    return re.compile(END_TAG_OPEN + re.escape(tag_name) + r"[^>]*>")


def match_start_tag(buffer: str, pos: int) -> Optional[Tuple[int, str, str, bool]]:
    """Match a start tag at ``pos``.

    Returns:
        ``(consumed_length, tag_name, rest, explicit_self_close)`` or None
    """
    match = START_TAG_PATTERN.match(buffer, pos)
    if match is None:
        return None
    return match.end() - pos, match.group(1), match.group(2), bool(match.group(3))


def match_end_tag(buffer: str, pos: int) -> Optional[Tuple[int, str]]:
    """Match an end tag at ``pos``; returns ``(consumed_length, tag_name)``."""
    match = END_TAG_PATTERN.match(buffer, pos)
    if match is None:
        return None
    return match.end() - pos, match.group(1)


def match_doctype(buffer: str, pos: int) -> Optional[int]:
    """Match a doctype declaration at ``pos``; returns the consumed length."""
    match = DOCTYPE_PATTERN.match(buffer, pos)
    if match is None:
        return None
    return match.end() - pos


def match_comment(buffer: str, pos: int) -> Optional[int]:
    """Match a comment at ``pos``; returns the consumed length.

    The close marker is searched from ``pos`` itself, so ``<!-->`` counts as a
    complete comment.
    """
    if not buffer.startswith(COMMENT_OPEN, pos):
        return None
    close = buffer.find(COMMENT_CLOSE, pos)
    if close < 0:
        return None
    return close + len(COMMENT_CLOSE) - pos


def parse_attributes(rest: str) -> List[Attribute]:
    """Extract attributes from the raw text between a tag name and its ``>``.

    Values take the double-quoted capture, then the single-quoted one, then
    the unquoted one. An empty capture counts as missing, so ``a=""`` yields a
    bare attribute. Duplicates are kept in source order.
    """
    return [
        Attribute(
            match.group(1),
            match.group(2) or match.group(3) or match.group(4) or None,
        )
        for match in ATTRIBUTE_PATTERN.finditer(rest)
    ]


class _Scan:
    """State of one ``tokenize`` call: the open-tag stack and the cursor."""

    def __init__(
        self,
        tokenizer: "TagSoupTokenizer",
        buffer: str,
        handler: Any,
    ) -> None:
        self.buffer = buffer
        self.tables = tokenizer.tables
        self.logger = tokenizer.logger
        self.collect = tokenizer.config.enable_diagnostics
        self.correlation_id = tokenizer.correlation_id
        self.on_start = _callback(handler, "start")
        self.on_end = _callback(handler, "end")
        self.on_text = _callback(handler, "text")
        self.stack: List[str] = []
        self.diagnostics: List[DiagnosticEntry] = []
        self.events = 0

    def run(self) -> None:
        buffer = self.buffer
        length = len(buffer)
        pos = 0

        while pos < length:
            last = pos
            if self.stack and self.tables.is_raw_text(self.stack[-1]):
                pos = self._consume_raw_text(pos)
            else:
                consumed = self._consume_markup(pos)
                pos = self._consume_text(pos) if consumed is None else consumed

            if pos == last:
                self._diagnose(
                    DiagnosticSeverity.CRITICAL,
                    "Scanner made no progress",
                    pos,
                    {"remainder": buffer[pos:pos + PREVIEW_LENGTH]},
                )
                raise ParseError(buffer[pos:], pos)

        self._close(None, pos, "end_of_input")

    def _consume_raw_text(self, pos: int) -> int:
        tag_name = self.stack[-1]
        match = _raw_text_end_pattern(tag_name).search(self.buffer, pos)
        if match is None:
            self._diagnose(
                DiagnosticSeverity.ERROR,
                f"Raw-text element <{tag_name}> has no end tag",
                pos,
                {"tag_name": tag_name},
            )
            self._close(tag_name, pos, "unterminated_raw_text")
            return pos

        content = COMMENT_SPAN_PATTERN.sub("", self.buffer[pos:match.start()])
        if content:
            self._emit_text(content)
        self._close(tag_name, match.start(), "end_tag")
        return match.end()

    def _consume_markup(self, pos: int) -> Optional[int]:
        """Consume a comment, end tag, start tag or doctype at ``pos``.

        Returns the new cursor, or None when the input is plain text here.
        """
        buffer = self.buffer

        if buffer.startswith(COMMENT_OPEN, pos):
            consumed = match_comment(buffer, pos)
            if consumed is not None:
                return pos + consumed

        elif buffer.startswith(END_TAG_OPEN, pos):
            end_tag = match_end_tag(buffer, pos)
            if end_tag is not None:
                consumed, tag_name = end_tag
                self._close(tag_name, pos, "end_tag")
                return pos + consumed

        elif buffer.startswith(TAG_OPEN, pos):
            start_tag = match_start_tag(buffer, pos)
            if start_tag is not None:
                consumed, tag_name, rest, explicit_self_close = start_tag
                self._open(tag_name, rest, explicit_self_close, pos)
                return pos + consumed

            consumed = match_doctype(buffer, pos)
            if consumed is not None:
                return pos + consumed

        return None

    def _consume_text(self, pos: int) -> int:
        end = self.buffer.find(TAG_OPEN, pos)
        if end < 0:
            end = len(self.buffer)
        if end > pos:
            self._emit_text(self.buffer[pos:end])
        return end

    def _open(
        self, tag_name: str, rest: str, explicit_self_close: bool, pos: int
    ) -> None:
        tables = self.tables
        stack = self.stack

        if tables.is_block(tag_name):
            while stack and tables.is_inline(stack[-1]):
                self._diagnose(
                    DiagnosticSeverity.INFO,
                    f"Closed inline <{stack[-1]}> before block <{tag_name}>",
                    pos,
                    {"tag_name": stack[-1], "block": tag_name},
                )
                self._close(stack[-1], pos, "inline_before_block")

        self_closing = tables.is_void(tag_name) or explicit_self_close
        if not self_closing:
            stack.append(tag_name)

        attributes = parse_attributes(rest)
        self.events += 1
        if self.on_start is not None:
            self.on_start(tag_name, attributes, self_closing)

    def _close(self, tag_name: Optional[str], pos: int, reason: str) -> None:
        stack = self.stack

        if tag_name is None:
            index = 0
        else:
            for index in range(len(stack) - 1, -1, -1):
                if stack[index] == tag_name:
                    break
            else:
                self._diagnose(
                    DiagnosticSeverity.WARNING,
                    f"Ignored orphan end tag </{tag_name}>",
                    pos,
                    {"tag_name": tag_name},
                )
                return

        for open_name in reversed(stack[index:]):
            if reason == "end_of_input":
                self._diagnose(
                    DiagnosticSeverity.INFO,
                    f"Closed unterminated <{open_name}> at end of input",
                    pos,
                    {"tag_name": open_name},
                )
            elif open_name != tag_name and reason == "end_tag":
                self._diagnose(
                    DiagnosticSeverity.INFO,
                    f"Closed <{open_name}> implicitly at </{tag_name}>",
                    pos,
                    {"tag_name": open_name, "closed_by": tag_name},
                )
            self.events += 1
            if self.on_end is not None:
                self.on_end(open_name)

        del stack[index:]

    def _emit_text(self, content: str) -> None:
        self.events += 1
        if self.on_text is not None:
            self.on_text(content)

    def _diagnose(
        self,
        severity: DiagnosticSeverity,
        message: str,
        pos: int,
        details: Optional[dict] = None,
    ) -> None:
        if self.logger.is_debug_enabled():
            self.logger.debug(message, extra={"position": pos})
        if self.collect:
            self.diagnostics.append(DiagnosticEntry(
                severity=severity,
                message=message,
                component="tokenizer",
                position=pos,
                details=details,
                correlation_id=self.correlation_id,
            ))


class TagSoupTokenizer:
    """Configurable tokenizer.

    An instance holds configuration only; every :meth:`tokenize` call scans
    with a fresh stack. ``diagnostics`` and ``events_emitted`` describe the
    most recent call on this instance.

    Examples:
        >>> events = []
        >>> TagSoupTokenizer().tokenize(
        ...     "<p>hi<br></p>", {"start": lambda t, a, s: events.append(t)}
        ... )
        >>> events
        ['p', 'br']
    """

    def __init__(
        self,
        config: Optional[TokenizerConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or TokenizerConfig()
        self.tables: ClassifierTables = self.config.tables()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "tokenizer")
        self.diagnostics: List[DiagnosticEntry] = []
        self.events_emitted = 0

    def tokenize(self, buffer: str, handler: Any) -> None:
        """Scan ``buffer`` and report its structure to ``handler``.

        Args:
            buffer: Markup text
            handler: Object or mapping offering any of start/end/text

        Raises:
            ParseError: If an iteration of the scanning loop consumed nothing
        """
        if not isinstance(buffer, str):
            raise TypeError("buffer must be a str")

        scan = _Scan(self, buffer, handler)
        try:
            scan.run()
        finally:
            self.diagnostics = scan.diagnostics
            self.events_emitted = scan.events


def tokenize(buffer: str, handler: Any) -> None:
    """Tokenize ``buffer`` with the default classifier tables.

    See :class:`TagSoupTokenizer` for the handler contract.
    """
    TagSoupTokenizer(TokenizerConfig(enable_diagnostics=False)).tokenize(
        buffer, handler
    )
