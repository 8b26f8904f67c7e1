"""Configuration management for nsvalidators using Pydantic models."""

import json
import logging
import re
from collections.abc import Mapping, Sequence
from enum import Enum
from pathlib import Path
from re import Pattern
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nsvalidators.constants import CONFIG_FILE_NAME, TENANT_SAFE_SERVICES
from nsvalidators.exceptions import ConfigurationError

if TYPE_CHECKING:
    from nsvalidators.validation.framework import Reporter

logger = logging.getLogger(__name__)

PatternSlot = tuple[Pattern, ...] | None


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"


class PatternRuleSet(BaseModel):
    """Allowed-pattern rules, one slot per checked namespace.

    A slot that is ``None`` or empty disables its check; it never means
    "nothing is allowed".
    """
    export_package: PatternSlot = Field(alias="allowedExportPackagePatterns", default=None)
    bundle_symbolic_name: PatternSlot = Field(alias="allowedBundleSymbolicNamePatterns", default=None)
    service_interface: PatternSlot = Field(alias="allowedServiceClassPatterns", default=None)
    servlet_paths: PatternSlot = Field(alias="allowedSlingServletPathsPatterns", default=None)
    servlet_resource_types: PatternSlot = Field(
        alias="allowedSlingServletResourceTypesPatterns", default=None
    )
    servlet_resource_super_type: PatternSlot = Field(
        alias="allowedSlingServletResourceSuperTypePatterns", default=None
    )
    filter_pattern: PatternSlot = Field(alias="allowedSlingFilterPatternPatterns", default=None)
    filter_resource_types: PatternSlot = Field(
        alias="allowedSlingFilterResourceTypesPatterns", default=None
    )
    whiteboard_servlet_pattern: PatternSlot = Field(
        alias="allowedHttpWhiteboardServletPatternPatterns", default=None
    )
    whiteboard_filter_pattern: PatternSlot = Field(
        alias="allowedHttpWhiteboardFilterPatternPatterns", default=None
    )
    auth_handler_path: PatternSlot = Field(
        alias="allowedSlingAuthenticationHandlerPathPatterns", default=None
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    @classmethod
    def known_keys(cls) -> list[str]:
        """Configuration keys accepted by the raw key/value adapter."""
        return [field.alias for field in cls.model_fields.values()]

    def is_enabled(self, slot: str) -> bool:
        """Whether the named slot is configured with at least one pattern."""
        return bool(getattr(self, slot))


DESCRIPTOR_SLOTS = (
    "service_interface",
    "servlet_paths",
    "servlet_resource_types",
    "servlet_resource_super_type",
    "filter_pattern",
    "filter_resource_types",
    "whiteboard_servlet_pattern",
    "whiteboard_filter_pattern",
    "auth_handler_path",
)

_TENANT_SAFE_PATTERNS: tuple[Pattern, ...] = tuple(
    re.compile(re.escape(interface)) for interface in TENANT_SAFE_SERVICES
)


def effective_service_patterns(rule_set: PatternRuleSet) -> tuple[Pattern, ...] | None:
    """User service patterns followed by the built-in tenant-safe services.

    Returns None when the service interface check is disabled.
    """
    if not rule_set.is_enabled("service_interface"):
        return None
    return tuple(rule_set.service_interface) + _TENANT_SAFE_PATTERNS


def split_patterns(value: str | Sequence[str]) -> list[str]:
    """Split a comma-separated option value into trimmed, non-blank entries."""
    entries = value.split(",") if isinstance(value, str) else list(value)
    return [entry.strip() for entry in entries if entry and entry.strip()]


def parse_rule_properties(
    properties: Mapping[str, str | Sequence[str]],
    reporter: "Reporter | None" = None,
) -> PatternRuleSet:
    """Build a rule set from raw key/value build settings.

    Args:
        properties: Option name to comma-separated string or list of patterns
        reporter: Receives one warning per unknown option name

    Returns:
        PatternRuleSet: Immutable, compiled rule set

    Raises:
        ConfigurationError: If a pattern is not a valid regular expression
    """
    known = set(PatternRuleSet.known_keys())
    data: dict[str, list[str]] = {}

    for key, value in properties.items():
        if key not in known:
            logger.warning(f"Ignoring unknown configuration key: {key}")
            if reporter is not None:
                reporter.warning(
                    "Unknown configuration key for namespace validators: '%s'",
                    key,
                    rule="configuration",
                )
            continue
        data[key] = split_patterns(value)

    try:
        return PatternRuleSet.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid namespace pattern configuration: {e}") from e


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO

    model_config = ConfigDict(use_enum_values=True)


class ValidatorConfig(BaseModel):
    """Complete nsvalidators configuration file model."""
    rules: dict[str, str | list[str]] = Field(default_factory=dict)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")

    def rule_set(self, reporter: "Reporter | None" = None) -> PatternRuleSet:
        """Compile the raw rules section."""
        return parse_rule_properties(self.rules, reporter)


def load_config(config_path: str | Path | None = None) -> ValidatorConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .nsvalidators.json

    Returns:
        ValidatorConfig: Loaded configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return ValidatorConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}")
        except Exception as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}")

    return ValidatorConfig()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .nsvalidators.json by searching up the directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None
