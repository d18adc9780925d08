"""Per-user directory paths for hermes-cli-lib.

Only the data and log directories are needed: the library keeps no
persisted state apart from optional log files.
"""

import os
from pathlib import Path

from platformdirs import user_data_dir

APP_NAME = "hermes-cli-lib"


class GlobalPath:
    """Global path management for hermes-cli-lib directories."""

    @classmethod
    def data(cls) -> str:
        """Application data directory, with override for testing."""
        override = os.environ.get("HERMES_TEST_HOME")
        if override:
            return str(Path(override) / "data")
        return user_data_dir(APP_NAME)

    @classmethod
    def log(cls) -> str:
        """Log file directory."""
        return str(Path(cls.data()) / "log")
