"""Global directory paths for opito.

Config lives in the platform user-config directory (``~/.config/opito``
on Linux) and logs live in the user data directory.
"""

import os
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

APP_NAME = "opito"


class GlobalPath:
    """Global path management for opito directories."""

    @classmethod
    def home(cls) -> str:
        """Get user home directory, with override for testing."""
        return os.environ.get("OPITO_TEST_HOME", str(Path.home()))

    @classmethod
    def config(cls) -> str:
        """Configuration directory."""
        override = os.environ.get("OPITO_CONFIG_DIR")
        if override:
            return override
        return user_config_dir(APP_NAME)

    @classmethod
    def config_file(cls) -> str:
        """Default configuration file."""
        return str(Path(cls.config()) / "config.json")

    @classmethod
    def data(cls) -> str:
        """Application data directory."""
        return user_data_dir(APP_NAME)

    @classmethod
    def log(cls) -> str:
        """Log file directory."""
        return str(Path(cls.data()) / "log")

    @classmethod
    def expand(cls, path: str) -> str:
        """Expand a leading ``~/`` against :meth:`home` and resolve the rest."""
        if path == "~":
            return cls.home()
        if path.startswith("~/"):
            return str(Path(cls.home()) / path[2:])
        return str(Path(path).resolve())
