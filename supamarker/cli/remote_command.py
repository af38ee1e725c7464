"""Shared setup for commands that talk to Supabase.

Resolves the connection settings and builds the API wrapper lazily, so
that tests can inject a ResolvedConfig and a fake backend instead.
"""

import logging
from typing import Optional

from supamarker.supabase_client.api_wrapper import SupabaseWrapper
from supamarker.supabase_client.auth import ConfigResolver, ResolvedConfig
from .output import OutputHandler

logger = logging.getLogger(__name__)


class RemoteCommand:
    """Base class for publish, delete and list.

    Example:
        >>> cmd = ListCommand(config_path="./config.toml")
        >>> cmd.config.bucket
        'blog'
    """

    def __init__(
        self,
        output_handler: Optional[OutputHandler] = None,
        config: Optional[ResolvedConfig] = None,
        api_wrapper: Optional[SupabaseWrapper] = None,
        config_path: Optional[str] = None
    ):
        """Initialize the command.

        Args:
            output_handler: OutputHandler for terminal output
            config: Optional ResolvedConfig (resolved from file/env if omitted)
            api_wrapper: Optional SupabaseWrapper instance for testing
            config_path: Explicit config file path (used when config is omitted)
        """
        self.output = output_handler or OutputHandler()
        self._config = config
        self.api_wrapper = api_wrapper
        self.config_path = config_path

    @property
    def config(self) -> ResolvedConfig:
        """Resolved connection settings.

        Raises:
            ConfigFileError: If the config file cannot be read or parsed
            MissingCredentialsError: If the endpoint or service key is missing
        """
        if self._config is None:
            self._config = ConfigResolver(config_path=self.config_path).resolve()
            logger.debug(
                f"Resolved config: url={self._config.supabase_url} "
                f"bucket={self._config.bucket} table={self._config.table}"
            )
        return self._config

    def _get_api_wrapper(self) -> SupabaseWrapper:
        """Get or create the API wrapper.

        Credentials are resolved before the wrapper is built, so a missing
        endpoint or key fails before any remote call.
        """
        if self.api_wrapper is None:
            self.api_wrapper = SupabaseWrapper(self.config)
        return self.api_wrapper
