"""Settings lookup for Codex Account Switcher

``settings.py`` asks this loader for every configurable value: the Codex
home override, the accounts file, the usage endpoint, HTTP timeouts and the
usage concurrency cap. A value comes from the first source that has it:
1. Process environment
2. .env file in the working directory (never overrides the environment)
3. Default passed by ``settings.py``, which also fixes the value's type
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Reads typed settings from the environment and an optional .env file"""

    def __init__(self, env_path: Optional[str] = None):
        """Initialize the config loader

        Args:
            env_path: .env file to merge into the environment
                (default: '.env' in the current directory)
        """
        self.env_path = Path(env_path) if env_path else Path(".env")
        self._load_env_file()

    def _load_env_file(self):
        if self.env_path.exists():
            load_dotenv(dotenv_path=self.env_path)
            logger.debug(f"Loaded settings from {self.env_path}")
        else:
            logger.debug(f"No .env file at {self.env_path}, using environment and defaults")

    def get(self, env_var: str, default: Any) -> Any:
        """Look up a setting, converting it to the type of ``default``

        Booleans accept true/1/yes. Numbers that fail to parse fall back to
        the default with a warning. Strings starting with ``~/`` (such as
        ACCOUNTS_FILE) are expanded against the user's home.

        Args:
            env_var: Environment variable name
            default: Value used when the variable is unset

        Returns:
            The converted value
        """
        env_value = os.getenv(env_var)
        if env_value is None:
            return _expand_home(default)

        # bool before int: bool is an int subclass
        if isinstance(default, bool):
            return env_value.lower() in ('true', '1', 'yes')
        if isinstance(default, (int, float)):
            kind = type(default)
            try:
                return kind(env_value)
            except ValueError:
                logger.warning(
                    f"Failed to parse {env_var}={env_value} as {kind.__name__}, using default: {default}"
                )
                return default
        return _expand_home(env_value)


def _expand_home(value: Any) -> Any:
    if isinstance(value, str) and value.startswith("~/"):
        return str(Path(value).expanduser())
    return value


_config_loader = None

def get_config_loader() -> ConfigLoader:
    """Get or create the loader shared by settings.py"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader
