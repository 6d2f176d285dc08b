"""Shared utilities for tag-soup parsing.

Configuration objects, diagnostic and metrics types, and correlation-aware
logging used across the tokenization, tree and API layers.
"""

from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)
from .config import (
    ConfigError,
    ConfigValidationError,
    ParserConfig,
    TokenizerConfig,
    TreeConfig,
)
from .logging import (
    CorrelationLogger,
    get_logger,
    set_package_level,
)

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
    "ConfigError",
    "ConfigValidationError",
    "ParserConfig",
    "TokenizerConfig",
    "TreeConfig",
    "CorrelationLogger",
    "get_logger",
    "set_package_level",
]
