"""Configuration classes for driver XML parsing and writing.

Each component has its own dataclass validated in ``__post_init__``;
``DriverXmlConfig`` bundles them and round-trips through JSON for the CLI.
"""

import json
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

from driver_xml.character.classifier import is_valid_name

# Tag name given to the synthetic container the parser wraps documents in
DEFAULT_ROOT_NAME = "Root"
# Output buffers grow by this many bytes when a small write does not fit
DEFAULT_GROW_STEP = 512
DEFAULT_MAX_DEPTH = 256


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError, ValueError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass
class ParserConfig:
    """Configuration for the tokenizer and tree builder."""

    max_depth: Optional[int] = DEFAULT_MAX_DEPTH
    recover_malformed_attributes: bool = True
    root_name: str = DEFAULT_ROOT_NAME

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if self.max_depth is not None:
            # bool is an int subclass
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                raise ConfigValidationError(
                    f"max_depth must be an integer or None, got {type(self.max_depth).__name__}",
                    field_name="max_depth",
                )
            if self.max_depth < 1:
                raise ConfigValidationError(
                    "max_depth must be >= 1 or None", field_name="max_depth"
                )
        if not self.root_name:
            raise ConfigValidationError(
                "root_name cannot be empty", field_name="root_name"
            )
        if not is_valid_name(self.root_name):
            raise ConfigValidationError(
                f"root_name is not a valid tag name: {self.root_name!r}",
                field_name="root_name",
            )

    @classmethod
    def strict(cls) -> "ParserConfig":
        """Every malformed attribute list aborts the parse."""
        return cls(recover_malformed_attributes=False)

    @classmethod
    def lenient(cls) -> "ParserConfig":
        """Drop elements with bad attributes and do not cap nesting depth."""
        return cls(max_depth=None, recover_malformed_attributes=True)


@dataclass
class WriterConfig:
    """Configuration for the canonical writer and the debug printer."""

    initial_capacity: int = 0
    grow_step: int = DEFAULT_GROW_STEP
    indent_width: int = 2

    def __post_init__(self) -> None:
        """Validate writer configuration."""
        if self.initial_capacity < 0:
            raise ConfigValidationError(
                "initial_capacity must be >= 0", field_name="initial_capacity"
            )
        if self.grow_step <= 0:
            raise ConfigValidationError(
                "grow_step must be > 0", field_name="grow_step"
            )
        if self.indent_width < 0:
            raise ConfigValidationError(
                "indent_width must be >= 0", field_name="indent_width"
            )


@dataclass
class DriverXmlConfig:
    """Complete configuration for parsing and writing."""

    parser: ParserConfig = field(default_factory=ParserConfig)
    writer: WriterConfig = field(default_factory=WriterConfig)

    def override(self, **kwargs: Any) -> "DriverXmlConfig":
        """Create a new configuration with nested overrides.

        Example:
            >>> config = DriverXmlConfig().override(parser__max_depth=16)
            >>> config.parser.max_depth
            16
        """
        nested: Dict[str, Dict[str, Any]] = {"parser": {}, "writer": {}}
        for key, value in kwargs.items():
            component, _, field_name = key.partition("__")
            if component not in nested or not field_name:
                raise ConfigValidationError(
                    f"Unknown configuration field: {key}", field_name=key
                )
            nested[component][field_name] = value

        return DriverXmlConfig(
            parser=replace(self.parser, **nested["parser"]),
            writer=replace(self.writer, **nested["writer"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {
            "parser": {f.name: getattr(self.parser, f.name) for f in fields(self.parser)},
            "writer": {f.name: getattr(self.writer, f.name) for f in fields(self.writer)},
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DriverXmlConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in a config file surface
        instead of being silently ignored.
        """
        parts: Dict[str, Any] = {}
        for name, target in (("parser", ParserConfig), ("writer", WriterConfig)):
            section = data.get(name, {})
            if not isinstance(section, dict):
                raise ConfigValidationError(
                    f"'{name}' section must be an object", field_name=name
                )
            known = {f.name for f in fields(target)}
            unknown = sorted(set(section) - known)
            if unknown:
                raise ConfigValidationError(
                    f"Unknown {name} settings: {', '.join(unknown)}",
                    field_name=name,
                    suggestions=sorted(known),
                )
            parts[name] = target(**section)
        return cls(**parts)

    @classmethod
    def from_json(cls, json_str: str) -> "DriverXmlConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)
