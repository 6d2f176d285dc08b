"""Configured parser facade.

:func:`tag_soup_parser.tree.parse` is the bare entry point: it returns nodes or
raises. :class:`TagSoupParser` wraps the same machinery for callers that want
a result object with diagnostics, metrics and a choice between propagating
:class:`~tag_soup_parser.tokenization.ParseError` or reporting it as a failed
result.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import psutil

from tag_soup_parser.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParserConfig,
    PerformanceMetrics,
    get_logger,
    set_package_level,
)
from tag_soup_parser.tokenization import ParseError, TagSoupTokenizer
from tag_soup_parser.tree import ElementNode, Node, TreeBuilder, iter_nodes

PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000


@dataclass
class ParseResult:
    """Outcome of one :meth:`TagSoupParser.parse` call."""

    nodes: List[Node] = field(default_factory=list)
    success: bool = True
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    error: Optional[ParseError] = None
    correlation_id: Optional[str] = None

    @property
    def element_count(self) -> int:
        """Total number of elements in the tree."""
        return sum(1 for node in iter_nodes(self.nodes) if isinstance(node, ElementNode))

    @property
    def processing_time_ms(self) -> float:
        return self.performance.processing_time_ms

    def has_errors(self) -> bool:
        """Check if result contains any error diagnostics."""
        return any(
            diag.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
            for diag in self.diagnostics
        )

    def get_diagnostics_by_severity(
        self, severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def summary(self) -> Dict[str, Any]:
        """Summarize counts and timing without the tree itself."""
        by_severity: Dict[str, int] = {}
        for diag in self.diagnostics:
            by_severity[diag.severity.name] = by_severity.get(diag.severity.name, 0) + 1

        return {
            "success": self.success,
            "top_level_nodes": len(self.nodes),
            "element_count": self.element_count,
            "diagnostics_by_severity": by_severity,
            "has_errors": self.has_errors(),
            "processing_time_ms": self.performance.processing_time_ms,
            "error": str(self.error) if self.error else None,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "nodes": [node.to_dict() for node in self.nodes],
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
            "performance": self.performance.to_dict(),
            "error": str(self.error) if self.error else None,
            "correlation_id": self.correlation_id,
        }


def _memory_rss() -> int:
    return psutil.Process().memory_info().rss


class TagSoupParser:
    """Reusable parser with configuration, diagnostics and statistics.

    Examples:
        >>> parser = TagSoupParser()
        >>> result = parser.parse('<ul><li>a<li>b</ul>')
        >>> result.success, result.nodes[0].tag_name
        (True, 'ul')

        >>> result = parser.parse('a < b')
        >>> result.success, result.has_errors()
        (False, True)

        >>> TagSoupParser(ParserConfig.strict()).parse('a < b')
        Traceback (most recent call last):
        ...
        tag_soup_parser.tokenization.tokenizer.ParseError: parse error: < b
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "parser")
        self._apply_logging_level()

        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0

    def _apply_logging_level(self) -> None:
        if self.config.logging_level is not None:
            set_package_level(self.config.logging_level)

    def parse(self, buffer: str) -> ParseResult:
        """Parse ``buffer`` into a :class:`ParseResult`.

        Raises:
            ParseError: Only when ``config.raise_on_error`` is set
        """
        config = self.config
        self.logger.info(
            "Starting parse",
            extra={
                "content_length": len(buffer),
                "preview": buffer[:PREVIEW_LENGTH],
                "parse_count": self._parse_count + 1,
            },
        )

        tokenizer = TagSoupTokenizer(config.tokenizer, correlation_id=self.correlation_id)
        builder = TreeBuilder(config.tree, tokenizer=tokenizer)
        result = ParseResult(correlation_id=self.correlation_id)

        memory_before = _memory_rss() if config.enable_metrics else 0
        start_time = time.perf_counter()
        try:
            result.nodes = builder.build(buffer)
        except ParseError as e:
            self._record(False, start_time)
            if config.raise_on_error:
                raise
            self.logger.exception(
                "Parse failed", extra={"position": e.position}
            )
            result.success = False
            result.error = e
            result.diagnostics = list(tokenizer.diagnostics)
            if not config.tokenizer.enable_diagnostics:
                result.diagnostics.append(DiagnosticEntry(
                    severity=DiagnosticSeverity.CRITICAL,
                    message=str(e),
                    component="parser",
                    position=e.position,
                    correlation_id=self.correlation_id,
                ))
            result.performance.processing_time_ms = (
                (time.perf_counter() - start_time) * MS_PER_SECOND
            )
            return result

        processing_time = self._record(True, start_time)
        result.diagnostics = list(tokenizer.diagnostics)
        if config.enable_metrics:
            result.performance = PerformanceMetrics(
                processing_time_ms=processing_time,
                memory_used_bytes=max(0, _memory_rss() - memory_before),
                characters_processed=len(buffer),
                events_emitted=tokenizer.events_emitted,
                elements_built=builder.elements_built,
                text_nodes_built=builder.text_nodes_built,
            )
        else:
            result.performance.processing_time_ms = processing_time

        self.logger.info(
            "Parse completed",
            extra={
                "processing_time_ms": processing_time,
                "diagnostic_count": len(result.diagnostics),
                "total_parses": self._parse_count,
            },
        )
        return result

    def _record(self, success: bool, start_time: float) -> float:
        processing_time = (time.perf_counter() - start_time) * MS_PER_SECOND
        self._parse_count += 1
        self._total_processing_time += processing_time
        if success:
            self._successful_parses += 1
        return processing_time

    def reconfigure(self, config: ParserConfig) -> None:
        """Swap in a new configuration; statistics are kept."""
        self.config = config
        if config.correlation_id is not None:
            self.correlation_id = config.correlation_id
            self.logger = get_logger(__name__, self.correlation_id, "parser")
        self._apply_logging_level()
        self.logger.info("Parser reconfigured", extra={"config_name": config.name})

    @property
    def statistics(self) -> Dict[str, Any]:
        """Parser usage statistics across calls."""
        return {
            "total_parses": self._parse_count,
            "successful_parses": self._successful_parses,
            "success_rate": (
                self._successful_parses / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0


def parse_string(buffer: str, correlation_id: Optional[str] = None) -> ParseResult:
    """Parse ``buffer`` with the default configuration.

    Never raises :class:`ParseError`; check ``result.success`` instead.
    """
    return TagSoupParser(correlation_id=correlation_id).parse(buffer)
