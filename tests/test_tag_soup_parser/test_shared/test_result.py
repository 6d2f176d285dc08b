"""Tests for diagnostics and performance metrics."""

import pytest

from tag_soup_parser.shared import DiagnosticEntry, DiagnosticSeverity, PerformanceMetrics


class TestDiagnosticEntry:
    """Tests for DiagnosticEntry."""

    def test_creation(self) -> None:
        """Test a diagnostic keeps its fields."""
        entry = DiagnosticEntry(
            severity=DiagnosticSeverity.WARNING,
            message="Ignored orphan end tag </span>",
            component="tokenizer",
            position=14,
            details={"tag_name": "span"},
        )
        assert entry.severity is DiagnosticSeverity.WARNING
        assert entry.position == 14
        assert entry.timestamp > 0

    def test_validation(self) -> None:
        """Test required fields and position bounds."""
        with pytest.raises(ValueError, match="Diagnostic message cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "", "tokenizer")
        with pytest.raises(ValueError, match="Diagnostic component cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "msg", "")
        with pytest.raises(ValueError, match="Diagnostic position must be >= 0"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "msg", "tokenizer", position=-1)

    def test_to_dict_omits_empty_fields(self) -> None:
        """Test optional fields only appear when set."""
        entry = DiagnosticEntry(DiagnosticSeverity.ERROR, "msg", "parser")
        assert entry.to_dict() == {
            "severity": "ERROR",
            "message": "msg",
            "component": "parser",
        }
        entry = DiagnosticEntry(
            DiagnosticSeverity.INFO, "msg", "parser",
            position=0, details={"k": 1}, correlation_id="c",
        )
        assert entry.to_dict()["position"] == 0
        assert entry.to_dict()["details"] == {"k": 1}
        assert entry.to_dict()["correlation_id"] == "c"


class TestPerformanceMetrics:
    """Tests for PerformanceMetrics derived values."""

    def test_zero_division_guards(self) -> None:
        """Test rates are zero when nothing was measured."""
        metrics = PerformanceMetrics()
        assert metrics.characters_per_second == 0.0
        assert metrics.events_per_second == 0.0
        assert metrics.memory_per_character == 0.0

    def test_rates(self) -> None:
        """Test rate calculations."""
        metrics = PerformanceMetrics(
            processing_time_ms=500.0,
            memory_used_bytes=2000,
            characters_processed=1000,
            events_emitted=50,
        )
        assert metrics.characters_per_second == 2000.0
        assert metrics.events_per_second == 100.0
        assert metrics.memory_per_character == 2.0
        assert metrics.to_dict()["characters_per_second"] == 2000.0
