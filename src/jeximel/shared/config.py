"""Configuration classes for jeximel.

This module provides configuration objects for the reader and the writer,
enabling control over character encoding, output formatting, strictness and
tracing without any process-wide state.
"""

import json
from dataclasses import asdict, dataclass, field, replace
from enum import IntFlag
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

DEFAULT_ENCODING = "utf-8"


class WriteOptions(IntFlag):
    """Formatting option bits understood by the writer."""

    NONE = 0
    ATTR_NEWLINE_INLINE = 0x1  # One attribute per line for childless, textless elements
    ATTR_NEWLINE_ALL = 0x2     # One attribute per line for every element


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


def _validate_encoding(encoding: Optional[str]) -> None:
    if encoding is None:
        return
    if not isinstance(encoding, str) or not encoding.strip():
        raise ValueError("encoding must be a non-empty string or None")


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for reading documents.

    Frozen so one instance can be shared between independent parse calls.
    """

    encoding: Optional[str] = None
    trace: bool = False
    strict_closing_tags: bool = False
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        _validate_encoding(self.encoding)

    @property
    def effective_encoding(self) -> str:
        """Encoding used to decode byte input."""
        return self.encoding or DEFAULT_ENCODING

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides."""
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary, ignoring unknown keys."""
        known = {name: data[name] for name in cls.__dataclass_fields__ if name in data}
        return cls(**known)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))


@dataclass(frozen=True)
class WriterConfig:
    """Configuration for writing documents."""

    encoding: Optional[str] = None
    options: WriteOptions = field(default=WriteOptions.NONE)
    trace: bool = False
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate writer configuration and normalize the option bits."""
        _validate_encoding(self.encoding)
        if isinstance(self.options, bool) or not isinstance(self.options, int):
            raise ValueError("options must be an integer bitmask")
        if self.options < 0 or self.options & ~int(
            WriteOptions.ATTR_NEWLINE_INLINE | WriteOptions.ATTR_NEWLINE_ALL
        ):
            raise ValueError("options contains unknown bits")
        object.__setattr__(self, "options", WriteOptions(self.options))

    @property
    def effective_encoding(self) -> str:
        """Encoding used for the output bytes."""
        return self.encoding or DEFAULT_ENCODING

    @property
    def attr_newline_inline(self) -> bool:
        return bool(self.options & WriteOptions.ATTR_NEWLINE_INLINE)

    @property
    def attr_newline_all(self) -> bool:
        return bool(self.options & WriteOptions.ATTR_NEWLINE_ALL)

    def override(self, **kwargs: Any) -> "WriterConfig":
        """Create a new configuration with specific overrides."""
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        result = asdict(self)
        result["options"] = int(self.options)
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WriterConfig":
        """Create configuration from dictionary, ignoring unknown keys.

        ``options`` may be given as an integer or as a list of flag names,
        e.g. ``["ATTR_NEWLINE_ALL"]``.
        """
        known = {name: data[name] for name in cls.__dataclass_fields__ if name in data}
        options = known.get("options")
        if isinstance(options, list):
            flags = WriteOptions.NONE
            for flag_name in options:
                try:
                    flags |= WriteOptions[flag_name]
                except KeyError:
                    raise ValueError(f"Unknown write option: {flag_name}") from None
            known["options"] = flags
        return cls(**known)

    @classmethod
    def from_json(cls, json_str: str) -> "WriterConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))


def load_config(path: Union[str, Path]) -> Tuple[ParserConfig, WriterConfig]:
    """Load parser and writer configuration from a JSON file.

    The file holds an object with optional ``parser`` and ``writer`` sections.

    Args:
        path: Path to the JSON configuration file

    Returns:
        Tuple of (ParserConfig, WriterConfig)

    Raises:
        ConfigValidationError: If the file cannot be read or holds invalid values
    """
    config_path = Path(path)
    try:
        data = json.loads(config_path.read_text(encoding=DEFAULT_ENCODING))
    except (OSError, ValueError) as e:
        raise ConfigValidationError(f"Could not load config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigValidationError("Configuration file must contain a JSON object")

    try:
        parser_config = ParserConfig.from_dict(data.get("parser", {}))
        writer_config = WriterConfig.from_dict(data.get("writer", {}))
    except (TypeError, ValueError) as e:
        raise ConfigValidationError(
            str(e),
            suggestions=["Check the 'parser' and 'writer' sections of the file"]
        ) from e

    return parser_config, writer_config
