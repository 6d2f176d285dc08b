"""Configuration classes for tag-soup parsing.

The defaults reproduce the parser's documented behavior exactly; every option
either switches off bookkeeping (diagnostics, metrics) or swaps in a different
set of tag classifications for callers with their own vocabulary.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, List, Optional

from tag_soup_parser.classification import DEFAULT_TABLES, ClassifierTables

_VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
_COMPONENTS = ["tokenizer", "tree"]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


def _normalize_names(field_name: str, names: Any) -> FrozenSet[str]:
    if isinstance(names, str) or not isinstance(names, Iterable):
        raise ValueError(f"{field_name} must be a collection of tag names")
    normalized = frozenset(names)
    for name in normalized:
        if not isinstance(name, str) or not name:
            raise ValueError(f"{field_name} must contain only non-empty strings")
    return normalized


@dataclass
class TokenizerConfig:
    """Configuration for the tokenizer.

    Each ``*_elements`` override replaces the corresponding default set
    wholesale; ``None`` keeps the default.
    """

    enable_diagnostics: bool = True
    void_elements: Optional[FrozenSet[str]] = None
    block_elements: Optional[FrozenSet[str]] = None
    inline_elements: Optional[FrozenSet[str]] = None
    raw_text_elements: Optional[FrozenSet[str]] = None

    def __post_init__(self) -> None:
        """Validate and normalize the classification overrides."""
        for name in ("void_elements", "block_elements",
                     "inline_elements", "raw_text_elements"):
            value = getattr(self, name)
            if value is not None:
                setattr(self, name, _normalize_names(name, value))

    @property
    def has_overrides(self) -> bool:
        return any(
            value is not None
            for value in (self.void_elements, self.block_elements,
                          self.inline_elements, self.raw_text_elements)
        )

    def tables(self) -> ClassifierTables:
        """Build the effective classifier tables for this configuration."""
        if not self.has_overrides:
            return DEFAULT_TABLES
        return DEFAULT_TABLES.with_overrides(
            void_elements=self.void_elements,
            block_elements=self.block_elements,
            inline_elements=self.inline_elements,
            raw_text_elements=self.raw_text_elements,
        )


@dataclass
class TreeConfig:
    """Configuration for tree building."""

    # False drops every text node; element structure is unaffected
    collect_text: bool = True


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for :class:`~tag_soup_parser.api.TagSoupParser`.

    Thread-safe to share between parsers: the dataclass is frozen and the
    parser never mutates its components.
    """

    tokenizer: TokenizerConfig = field(default_factory=TokenizerConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)

    raise_on_error: bool = False
    enable_metrics: bool = True
    logging_level: Optional[str] = None
    correlation_id: Optional[str] = None

    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete parser configuration."""
        try:
            self.tokenizer.__post_init__()
            if self.logging_level is not None and (
                not isinstance(self.logging_level, str)
                or self.logging_level.upper() not in _VALID_LOGGING_LEVELS
            ):
                raise ValueError(
                    f"logging_level must be one of {_VALID_LOGGING_LEVELS}"
                )
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Component fields use double-underscore notation.

        Example:
            >>> config = ParserConfig().override(
            ...     tokenizer__enable_diagnostics=False,
            ...     raise_on_error=True,
            ... )
        """
        nested: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=[f"Use one of {_COMPONENTS}"],
                    )
                nested.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        for component, overrides in nested.items():
            try:
                top_level[component] = replace(getattr(self, component), **overrides)
            except (TypeError, ValueError) as e:
                raise ConfigValidationError(str(e), field_name=component) from e

        return replace(self, **top_level)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _to_plain(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _to_plain(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, (set, frozenset)):
                return sorted(obj)
            if isinstance(obj, (list, tuple)):
                return [_to_plain(item) for item in obj]
            return obj

        return _to_plain(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Unknown keys are ignored so that files written by newer versions
        still load.
        """
        def _build(data_dict: Dict[str, Any], target_class: type) -> Any:
            values: Dict[str, Any] = {}
            for name, field_info in target_class.__dataclass_fields__.items():
                if name not in data_dict:
                    continue
                value = data_dict[name]
                if hasattr(field_info.type, "__dataclass_fields__"):
                    if not isinstance(value, dict):
                        raise ConfigValidationError(
                            f"{name} must be a mapping", field_name=name
                        )
                    value = _build(value, field_info.type)
                values[name] = value
            try:
                return target_class(**values)
            except ValueError as e:
                raise ConfigValidationError(str(e)) from e

        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration data must be a mapping")
        return _build(data, cls)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def strict(cls) -> "ParserConfig":
        """Preset that propagates ParseError to the caller."""
        return cls(
            raise_on_error=True,
            name="strict",
            description="Propagate parse errors instead of returning a failed result",
        )

    @classmethod
    def lenient(cls) -> "ParserConfig":
        """Preset that reports ParseError as a failed result."""
        return cls(
            raise_on_error=False,
            name="lenient",
            description="Report parse errors as diagnostics on a failed result",
        )

    @classmethod
    def minimal(cls) -> "ParserConfig":
        """Preset with diagnostics and metrics switched off."""
        return cls(
            tokenizer=TokenizerConfig(enable_diagnostics=False),
            enable_metrics=False,
            name="minimal",
            description="Tree only, no diagnostics or metrics bookkeeping",
        )
