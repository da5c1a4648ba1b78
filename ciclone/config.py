"""Configuration file holding the defaults of the clone and retry settings"""

import configparser
import logging
import os
import platform
from typing import Optional, Any

from pathlib import Path

from ciclone.constants import (
    DEFAULT_ATTEMPTS,
    DEFAULT_BACKOFF_ATTEMPTS,
    DEFAULT_BACKOFF_SECONDS,
    DEFAULT_DEPTH,
)

APP_NAME = "ciclone"

logger = logging.getLogger(__name__)

_home = os.path.expanduser("~")

xdg_config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(_home, ".config")

default_cfg = {
    "clone": {"depth": str(DEFAULT_DEPTH)},
    "retry": {
        "attempts": str(DEFAULT_ATTEMPTS),
        "backoff": f"{DEFAULT_BACKOFF_SECONDS:g}s",
        "backoff_attempts": str(DEFAULT_BACKOFF_ATTEMPTS),
    },
}

if platform.system() == "Darwin":
    # macOS
    config_dir = Path(f"~/Library/Application Support/{APP_NAME}").expanduser()
else:
    # Linux or others
    config_dir = Path(os.path.join(xdg_config_home, APP_NAME))


def get_config_file():
    return config_dir / f"{APP_NAME}.cfg"


def init_dirs():
    """Initialize the configuration directory.

    Fails gracefully if the directory cannot be created (e.g., read-only filesystem).
    """
    try:
        os.makedirs(config_dir, exist_ok=True)
    except OSError as e:
        logger.warning(
            f"Could not create config directory {config_dir}: {e}. "
            "Using built-in defaults only."
        )


class ConfigAccessor:
    """
    A dict-like accessor for configuration files.

    Missing sections or keys are handled gracefully, so callers can always
    ask for a value and fall back to a default.

    Usage:
        config = ConfigAccessor()
        value = config.get('retry', 'attempts', default='1')
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize a ConfigAccessor with an optional config file path.

        Args:
            config_path: Path to the configuration file. If None, uses the default path.
        """
        if config_path is None:
            self.config_path = get_config_file()
            init_dirs()
        else:
            self.config_path = config_path

        self.config = configparser.ConfigParser()
        if self.config_path.exists():
            self.config.read(self.config_path)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """
        Get a configuration value from the specified section and key.

        Args:
            section: The configuration section
            key: The configuration key
            default: Value to return if the section or key doesn't exist

        Returns:
            The configuration value if it exists, otherwise the default value
        """
        try:
            return self.config[section][key]
        except (KeyError, configparser.NoSectionError, configparser.NoOptionError):
            return default

    def default(self, section: str, key: str) -> str:
        """Value from the file, falling back to the built-in default."""
        return self.get(section, key, default_cfg[section][key])
