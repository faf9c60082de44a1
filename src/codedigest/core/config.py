"""
Configuration module for codedigest.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from codedigest.core.ignore_rules import IgnoreMatchMode, IgnoreRules

logger = logging.getLogger(__name__)

# Path to the default configuration file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None


def _load_defaults() -> dict[str, Any]:
    """Load default configuration values from defaults.yaml."""
    global _defaults_cache

    if _defaults_cache is not None:
        return _defaults_cache

    if not _DEFAULTS_CONFIG_PATH.exists():
        logger.warning(f"Defaults config not found: {_DEFAULTS_CONFIG_PATH}")
        _defaults_cache = {}
        return _defaults_cache

    try:
        content = _DEFAULTS_CONFIG_PATH.read_text(encoding="utf-8")
        _defaults_cache = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse defaults config: {e}")
        _defaults_cache = {}

    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Get a default value from the defaults config."""
    defaults = _load_defaults()
    section_defaults = defaults.get(section) or {}
    return section_defaults.get(key, fallback)


@dataclass
class SummaryConfig:
    """Configuration for the code summary document."""

    ignore_patterns: list[str] = field(
        default_factory=lambda: list(_get_default("summary", "ignore_patterns", ["node_modules"]))
    )
    ignore_mode: str = field(
        default_factory=lambda: _get_default("summary", "ignore_mode", "substring")
    )
    collapse_whitespace: bool = field(
        default_factory=lambda: _get_default("summary", "collapse_whitespace", True)
    )
    strip_comments: bool = field(
        default_factory=lambda: _get_default("summary", "strip_comments", True)
    )
    languages_file: Optional[str] = field(
        default_factory=lambda: _get_default("summary", "languages_file", None)
    )
    output_filename: str = field(
        default_factory=lambda: _get_default("summary", "output_filename", "CodeSummary.md")
    )

    def __post_init__(self) -> None:
        self.ignore_mode = IgnoreMatchMode.parse(self.ignore_mode).value

    def ignore_rules(self) -> IgnoreRules:
        """Build the ignore rules described by this section."""
        return IgnoreRules(tuple(self.ignore_patterns), IgnoreMatchMode.parse(self.ignore_mode))


@dataclass
class TreeConfig:
    """Configuration for the folder structure document."""

    ignore_patterns: list[str] = field(
        default_factory=lambda: list(_get_default("tree", "ignore_patterns", [".git"]))
    )
    ignore_mode: str = field(
        default_factory=lambda: _get_default("tree", "ignore_mode", "basename")
    )
    # None walks the whole tree
    max_depth: Optional[int] = field(default_factory=lambda: _get_default("tree", "max_depth", 2))
    output_filename: str = field(
        default_factory=lambda: _get_default("tree", "output_filename", "FileAndFolderSummary.md")
    )

    def __post_init__(self) -> None:
        self.ignore_mode = IgnoreMatchMode.parse(self.ignore_mode).value
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError(f"tree.max_depth must be >= 0 or null, got {self.max_depth}")

    def ignore_rules(self) -> IgnoreRules:
        """Build the ignore rules described by this section."""
        return IgnoreRules(tuple(self.ignore_patterns), IgnoreMatchMode.parse(self.ignore_mode))


@dataclass
class OutputConfig:
    """Where generated documents are written."""

    # Relative directories are resolved against the scan root
    directory: str = field(
        default_factory=lambda: _get_default("output", "directory", "ScriptOutput")
    )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "WARNING"))
    format: str = field(
        default_factory=lambda: _get_default(
            "logging", "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )


@dataclass
class DigestConfig:
    """Main configuration class for codedigest."""

    summary: SummaryConfig = field(default_factory=SummaryConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "DigestConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            DigestConfig instance with loaded values

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the file format is unsupported or invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        if path.suffix in (".yaml", ".yml"):
            try:
                data = yaml.safe_load(content) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in configuration file {path}: {e}") from e
        elif path.suffix == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        if not isinstance(data, dict):
            raise ValueError(f"Invalid configuration in {path}: expected a mapping")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "DigestConfig":
        """Create DigestConfig from a dictionary."""
        config = cls()

        try:
            if "summary" in data:
                config.summary = SummaryConfig(**data["summary"])
            if "tree" in data:
                config.tree = TreeConfig(**data["tree"])
            if "output" in data:
                config.output = OutputConfig(**data["output"])
            if "logging" in data:
                config.logging = LoggingConfig(**data["logging"])
        except TypeError as e:
            raise ValueError(f"Invalid configuration: {e}") from e

        return config

    def apply_env_overrides(self) -> "DigestConfig":
        """
        Apply environment variable overrides to the configuration.

        Environment variables follow the pattern: CODEDIGEST_<SECTION>_<KEY>
        Examples:
            - CODEDIGEST_SUMMARY_IGNORE_MODE
            - CODEDIGEST_SUMMARY_IGNORE_PATTERNS (comma separated)
            - CODEDIGEST_TREE_MAX_DEPTH ("none" for unlimited)
            - CODEDIGEST_OUTPUT_DIRECTORY
            - CODEDIGEST_LOGGING_LEVEL

        Returns:
            Self with environment overrides applied
        """
        env_mappings = {
            # Summary config
            "CODEDIGEST_SUMMARY_IGNORE_PATTERNS": ("summary", "ignore_patterns", _parse_list),
            "CODEDIGEST_SUMMARY_IGNORE_MODE": ("summary", "ignore_mode", _parse_ignore_mode),
            "CODEDIGEST_SUMMARY_COLLAPSE_WHITESPACE": ("summary", "collapse_whitespace", _parse_bool),
            "CODEDIGEST_SUMMARY_STRIP_COMMENTS": ("summary", "strip_comments", _parse_bool),
            "CODEDIGEST_SUMMARY_LANGUAGES_FILE": ("summary", "languages_file", str),
            "CODEDIGEST_SUMMARY_OUTPUT_FILENAME": ("summary", "output_filename", str),
            # Tree config
            "CODEDIGEST_TREE_IGNORE_PATTERNS": ("tree", "ignore_patterns", _parse_list),
            "CODEDIGEST_TREE_IGNORE_MODE": ("tree", "ignore_mode", _parse_ignore_mode),
            "CODEDIGEST_TREE_MAX_DEPTH": ("tree", "max_depth", _parse_depth),
            "CODEDIGEST_TREE_OUTPUT_FILENAME": ("tree", "output_filename", str),
            # Output config
            "CODEDIGEST_OUTPUT_DIRECTORY": ("output", "directory", str),
            # Logging config
            "CODEDIGEST_LOGGING_LEVEL": ("logging", "level", str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                section_obj = getattr(self, section)
                setattr(section_obj, key, converter(value))

        return self

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def to_json(self) -> str:
        """Serialize configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def save(self, path: Path | str) -> None:
        """
        Save configuration to a file.

        Args:
            path: Path to save the configuration (.yaml, .yml, or .json)

        Raises:
            ValueError: If the file format is unsupported
        """
        path = Path(path)

        if path.suffix in (".yaml", ".yml"):
            content = self.to_yaml()
        elif path.suffix == ".json":
            content = self.to_json()
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def _parse_bool(value: str) -> bool:
    """Parse a string to boolean."""
    return value.lower() in ("true", "1", "yes", "on")


def _parse_list(value: str) -> list[str]:
    """Parse a comma separated string, dropping empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_ignore_mode(value: str) -> str:
    return IgnoreMatchMode.parse(value).value


def _parse_depth(value: str) -> Optional[int]:
    """Parse a depth limit; 'none', 'unlimited' or an empty string mean no limit."""
    if value.strip().lower() in ("", "none", "null", "unlimited"):
        return None
    depth = int(value)
    if depth < 0:
        raise ValueError(f"Depth must be >= 0, got {depth}")
    return depth


def load_config(config_path: Optional[Path | str] = None, apply_env: bool = True) -> DigestConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        DigestConfig instance
    """
    if config_path:
        config = DigestConfig.from_file(config_path)
    else:
        config = DigestConfig()

    if apply_env:
        config.apply_env_overrides()

    return config
