"""
Configuration file support for volley-overlap.

Provides hierarchical configuration loading from:
1. Project config: .volley-overlap.toml or volley-overlap.toml in the project root
2. User config: ~/.config/volley-overlap/config.toml

Project config overrides user config, which overrides the built-in defaults.
Nothing is read unless the host calls :meth:`Config.load`.
"""

from __future__ import annotations

import logging
import sys
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .core.tolerance import EPSILON
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Config file names to search for in project directories
CONFIG_FILENAMES = [".volley-overlap.toml", "volley-overlap.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "volley-overlap" / "config.toml"

# All known config keys for validation
KNOWN_KEYS = {
    "tolerance": {"epsilon"},
    "screen": {"width", "height"},
    "cache": {"max_entries"},
}


@dataclass
class ToleranceConfig:
    """Position comparison tolerance."""

    epsilon: float = EPSILON


@dataclass
class ScreenConfig:
    """Reference canvas the host draws the court on, in pixels."""

    width: float = 600.0
    height: float = 360.0


@dataclass
class CacheConfig:
    """Result cache sizing."""

    max_entries: int = 1000


@dataclass
class Config:
    """Merged configuration from all sources."""

    tolerance: ToleranceConfig = field(default_factory=ToleranceConfig)
    screen: ScreenConfig = field(default_factory=ScreenConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)

    # Track which file each setting came from
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> Config:
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object

        Raises:
            ConfigError: If a config file is unreadable, is not valid TOML,
                or holds an out-of-range value
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()
        sources: dict[str, str] = {}

        # Load user config first (lower precedence)
        if USER_CONFIG_PATH.exists():
            logger.debug(f"Loading user config from {USER_CONFIG_PATH}")
            _merge_config(config, _load_toml_file(USER_CONFIG_PATH), str(USER_CONFIG_PATH), sources)

        # Load project config (higher precedence)
        project_config = _find_project_config(start_dir)
        if project_config:
            logger.debug(f"Loading project config from {project_config}")
            _merge_config(config, _load_toml_file(project_config), str(project_config), sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key such as ``"screen.width"``."""
        return self._sources.get(key, "default")


class ConfigError(ConfigurationError):
    """Configuration file could not be loaded or holds an invalid value."""

    pass


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.

    Args:
        start_dir: Directory to start searching from

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        # Stop at .git directory (project root)
        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """
    Load a TOML file.

    Raises:
        ConfigError: If the file cannot be read or the TOML is invalid
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(
            f"Invalid TOML in {path}: {e}",
            context={"file": str(path)},
            suggestions=["Check the file with a TOML validator"],
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Cannot read config file {path}: {e}",
            context={"file": str(path)},
        ) from e


def _positive_number(value: Any, key: str, source: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(
            f"Config key '{key}' must be a positive number",
            context={"file": source, "value": repr(value)},
        )
    return float(value)


def _positive_int(value: Any, key: str, source: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(
            f"Config key '{key}' must be a positive integer",
            context={"file": source, "value": repr(value)},
        )
    return value


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """
    Merge loaded config data into Config object.

    Args:
        config: Config object to update
        data: Raw config data from TOML
        source: Source file path (for tracking)
        sources: Dict to update with source info
    """
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    if "tolerance" in data:
        tolerance_data = data["tolerance"]
        _warn_unknown_keys(tolerance_data, KNOWN_KEYS["tolerance"], "tolerance", source)

        if "epsilon" in tolerance_data:
            epsilon = tolerance_data["epsilon"]
            if isinstance(epsilon, bool) or not isinstance(epsilon, (int, float)) or epsilon < 0:
                raise ConfigError(
                    "Config key 'tolerance.epsilon' must be a non-negative number",
                    context={"file": source, "value": repr(epsilon)},
                    suggestions=["The official tolerance is 0.03 (metres)"],
                )
            config.tolerance.epsilon = float(epsilon)
            sources["tolerance.epsilon"] = source

    if "screen" in data:
        screen_data = data["screen"]
        _warn_unknown_keys(screen_data, KNOWN_KEYS["screen"], "screen", source)

        if "width" in screen_data:
            config.screen.width = _positive_number(screen_data["width"], "screen.width", source)
            sources["screen.width"] = source
        if "height" in screen_data:
            config.screen.height = _positive_number(screen_data["height"], "screen.height", source)
            sources["screen.height"] = source

    if "cache" in data:
        cache_data = data["cache"]
        _warn_unknown_keys(cache_data, KNOWN_KEYS["cache"], "cache", source)

        if "max_entries" in cache_data:
            config.cache.max_entries = _positive_int(
                cache_data["max_entries"], "cache.max_entries", source
            )
            sources["cache.max_entries"] = source


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# volley-overlap configuration file
# Place as .volley-overlap.toml in project root or ~/.config/volley-overlap/config.toml for user defaults

[tolerance]
# Slack for position comparisons, in metres
# epsilon = 0.03

[screen]
# Reference canvas size in pixels used for screen <-> court conversion
# width = 600
# height = 360

[cache]
# Maximum number of cached validation and bounds results
# max_entries = 1000
"""


def get_config_paths() -> dict[str, Path | None]:
    """
    Get paths to config files that would be loaded.

    Returns:
        Dict with 'user' and 'project' keys
    """
    project_config = _find_project_config(Path.cwd())

    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": project_config,
    }
