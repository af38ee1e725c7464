"""GenConfigCommand for writing a sample config file.

This module implements the gen-config command that writes a TOML config
template with placeholder credentials. It never overwrites an existing
file and makes no remote calls.
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from supamarker.supabase_client.auth import (
    DEFAULT_BUCKET,
    DEFAULT_TABLE,
    default_config_path,
)
from .errors import ConfigAlreadyExistsError

logger = logging.getLogger(__name__)

SAMPLE_CONFIG = f'''supabase_url = "https://xxxxx.supabase.co"
supabase_service_key = "service_role_key"
bucket = "{DEFAULT_BUCKET}"
table = "{DEFAULT_TABLE}"
'''


class GenConfigCommand:
    """Writes a sample config file.

    Example:
        >>> cmd = GenConfigCommand(config_path="./config.toml")
        >>> cmd.run()
        PosixPath('config.toml')
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None
    ):
        """Initialize the command.

        Args:
            config_path: Target path (defaults to the per-user config location)
            environ: Environment mapping used to find the default location
        """
        self.config_path = config_path
        self.environ = os.environ if environ is None else environ

    @property
    def target_path(self) -> Path:
        """Path the template will be written to."""
        if self.config_path:
            return Path(self.config_path)
        return default_config_path(self.environ)

    def run(self) -> Path:
        """Write the sample config.

        Returns:
            Path of the written file

        Raises:
            ConfigAlreadyExistsError: If a file already exists at the target
            ConfigFileError: If the default location cannot be determined
            OSError: If the directory or file cannot be written
        """
        path = self.target_path

        if path.exists():
            raise ConfigAlreadyExistsError(str(path))

        path.parent.mkdir(parents=True, exist_ok=True)

        # 'x' mode refuses to clobber a file created since the check above
        try:
            with open(path, 'x', encoding='utf-8') as f:
                f.write(SAMPLE_CONFIG)
        except FileExistsError:
            raise ConfigAlreadyExistsError(str(path))

        logger.info(f"Sample config written to {path}")
        return path
