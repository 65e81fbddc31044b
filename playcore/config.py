"""
Configuration management for playbrowser.
"""
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from playcore.filters import SuffixFilter, get_filter
from playcore.logging_config import get_logger, ConfigurationError

logger = get_logger('config')

DEFAULT_CONFIG: str = """# Playbrowser Configuration

[browser]
# Directory the browser starts in
root = "/"
# Show files and directories starting with '.'
show_hidden_files = false
# Filter used when started without one: "video", "audio", "image" or ""
default_filter = ""

[player]
# External player: auto, mpv, mplayer, ffplay or a path to an executable
command = "auto"
# Extra arguments passed before the file name
args = []

[menu]
# Hide the entry in the host's main menu
hide_main_menu_entry = false

[logging]
level = "INFO"
# file = "~/.local/state/playbrowser/playbrowser.log"
"""

# (section, key) in the TOML file -> AppConfig attribute
_TOML_KEYS: Dict[tuple, str] = {
    ("browser", "root"): "browser_root",
    ("browser", "show_hidden_files"): "show_hidden_files",
    ("browser", "default_filter"): "default_filter",
    ("player", "command"): "player",
    ("player", "args"): "player_args",
    ("menu", "hide_main_menu_entry"): "hide_main_menu_entry",
    ("logging", "level"): "log_level",
    ("logging", "file"): "log_file",
}

# expected TOML value type per AppConfig attribute
_VALUE_TYPES: Dict[str, type] = {
    "browser_root": str,
    "show_hidden_files": bool,
    "default_filter": str,
    "player": str,
    "player_args": list,
    "hide_main_menu_entry": bool,
    "log_level": str,
    "log_file": str,
}

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class AppConfig:
    """Application configuration settings."""

    # Browser
    browser_root: str = "/"
    show_hidden_files: bool = False
    default_filter: Optional[str] = None

    # Player
    player: str = "auto"  # auto, mpv, mplayer, ffplay
    player_args: List[str] = field(default_factory=list)

    # Host menu
    hide_main_menu_entry: bool = False

    # Logging settings
    log_level: str = "INFO"
    log_file: Optional[str] = None


def get_config_dir() -> Path:
    """Get the configuration directory following XDG spec."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "playbrowser"
    return Path.home() / ".config" / "playbrowser"


def _valid_type(attr: str, value: Any) -> bool:
    expected = _VALUE_TYPES[attr]
    if not isinstance(value, expected):
        return False
    if expected is list:
        return all(isinstance(item, str) for item in value)
    return True


class ConfigManager:
    """Manages configuration loading and validation."""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or get_config_dir() / "playbrowser.toml"
        self.config: AppConfig = AppConfig()
        self.created = False
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file."""
        if not self.config_path.exists():
            logger.info(f"Config file not found at {self.config_path}, using defaults")
            self._create_default_config()
            return

        try:
            with open(self.config_path, 'rb') as f:
                data = tomllib.load(f)
            self._apply_config_data(data)
            logger.info(f"Loaded configuration from {self.config_path}")
        except (tomllib.TOMLDecodeError, OSError) as e:
            logger.error(f"Failed to load config: {e}")
            logger.info("Using default configuration")

    def _create_default_config(self) -> None:
        """Create a default configuration file."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w') as f:
                f.write(DEFAULT_CONFIG)
            self.created = True
            logger.info(f"Created default config at {self.config_path}")
        except OSError as e:
            logger.warning(f"Failed to create default config: {e}")

    def _apply_config_data(self, data: Dict[str, Any]) -> None:
        """Apply TOML sections to the AppConfig object."""
        for section, values in data.items():
            if not isinstance(values, dict):
                logger.warning(f"Ignoring config value outside a section: {section}")
                continue
            for key, value in values.items():
                attr = _TOML_KEYS.get((section, key))
                if attr is None:
                    logger.warning(f"Unknown config key: [{section}] {key}")
                    continue
                if not _valid_type(attr, value):
                    logger.warning(f"Ignoring [{section}] {key} = {value!r}: "
                                   f"expected {_VALUE_TYPES[attr].__name__}")
                    continue
                if attr == "default_filter" and value == "":
                    value = None
                setattr(self.config, attr, value)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        return getattr(self.config, key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value."""
        if hasattr(self.config, key):
            setattr(self.config, key, value)
            logger.debug(f"Config updated: {key} = {value}")

    def validate_config(self) -> bool:
        """Validate current configuration."""
        issues = []

        root = self.get_browser_root_path()
        if not root.is_dir():
            issues.append(f"Browser root does not exist: {root}")

        try:
            get_filter(self.config.default_filter)
        except ConfigurationError:
            issues.append(f"Invalid default filter: {self.config.default_filter}")

        if not isinstance(self.config.player_args, list):
            issues.append(f"Player args must be a list, got {self.config.player_args!r}")

        if str(self.config.log_level).upper() not in VALID_LOG_LEVELS:
            issues.append(f"Invalid log level: {self.config.log_level}")

        if issues:
            logger.warning(f"Configuration validation issues: {issues}")
            return False

        return True

    def reset_to_defaults(self) -> None:
        """Reset configuration to defaults."""
        self.config = AppConfig()
        logger.info("Configuration reset to defaults")

    def get_browser_root_path(self) -> Path:
        """Get the browser root with '~' expanded."""
        return Path(self.config.browser_root).expanduser()

    def get_default_filter(self) -> Optional[SuffixFilter]:
        """Resolve the configured default filter.

        Raises:
            ConfigurationError: if the filter name is unknown
        """
        return get_filter(self.config.default_filter)

    def get_log_file_path(self) -> Optional[Path]:
        if not self.config.log_file:
            return None
        return Path(self.config.log_file).expanduser()


# Global configuration manager
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(config_path: Optional[Path] = None) -> ConfigManager:
    """Load configuration and return manager."""
    return ConfigManager(config_path)


def get_config_value(key: str, default: Any = None) -> Any:
    """Get configuration value."""
    return get_config_manager().get(key, default)


def validate_current_config() -> bool:
    """Validate the current configuration."""
    return get_config_manager().validate_config()
