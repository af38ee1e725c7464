"""Connection settings for the Supabase project.

This module resolves the Supabase endpoint, service key, bucket and table
from a TOML config file and the environment. Config files are looked up
along a search path unless an explicit path is given. Environment
variables (optionally loaded from a .env file using python-dotenv) fill
in whatever the file does not set, and bucket/table fall back to
built-in defaults.
"""

import logging
import os
import sys
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Mapping, NamedTuple, Optional

from dotenv import load_dotenv

from .errors import ConfigFileError, MissingCredentialsError

logger = logging.getLogger(__name__)

APP_NAME = "supamarker"
CONFIG_FILENAME = "config.toml"

DEFAULT_BUCKET = "blog"
DEFAULT_TABLE = "posts"

ENV_URL = "SUPABASE_URL"
ENV_SERVICE_KEY = "SUPABASE_SERVICE_KEY"
ENV_BUCKET = "SUPABASE_BUCKET"
ENV_TABLE = "SUPABASE_TABLE"

CONFIG_KEYS = ("supabase_url", "supabase_service_key", "bucket", "table")


class ResolvedConfig(NamedTuple):
    """Merged Supabase connection settings for one invocation."""
    supabase_url: str
    service_key: str
    bucket: str
    table: str


def _user_config_dir(environ: Mapping[str, str], platform: str) -> Optional[Path]:
    """Return the per-user config directory for this platform, if determinable."""
    if platform.startswith("win"):
        for var in ("APPDATA", "LOCALAPPDATA"):
            if environ.get(var):
                return Path(environ[var])
        if environ.get("USERPROFILE"):
            return Path(environ["USERPROFILE"]) / ".config"
        return None

    if environ.get("XDG_CONFIG_HOME"):
        return Path(environ["XDG_CONFIG_HOME"])
    if environ.get("HOME"):
        return Path(environ["HOME"]) / ".config"
    return None


def default_config_path(
    environ: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None
) -> Path:
    """Return the default per-user config file location.

    Args:
        environ: Environment mapping (defaults to os.environ)
        platform: Platform identifier (defaults to sys.platform)

    Returns:
        Path such as ~/.config/supamarker/config.toml

    Raises:
        ConfigFileError: If no home/config directory can be determined
    """
    environ = os.environ if environ is None else environ
    platform = platform or sys.platform

    config_dir = _user_config_dir(environ, platform)
    if config_dir is None:
        raise ConfigFileError(
            CONFIG_FILENAME,
            "cannot determine default config path (HOME / APPDATA not set)"
        )
    return config_dir / APP_NAME / CONFIG_FILENAME


class ConfigResolver:
    """Resolves Supabase connection settings from file and environment.

    Precedence per field, highest first: config file value, environment
    variable, built-in default. The endpoint and service key have no
    default and must come from somewhere.

    Search path when no explicit config path is given:
        1. ./config.toml
        2. $XDG_CONFIG_HOME/supamarker/config.toml or ~/.config/supamarker/config.toml
           (%APPDATA% / %LOCALAPPDATA% / %USERPROFILE%\\.config on Windows)

    Example:
        >>> resolver = ConfigResolver(config_path="./config.toml")
        >>> config = resolver.resolve()
        >>> print(f"Publishing to bucket {config.bucket}")
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        cwd: Optional[Path] = None,
        platform: Optional[str] = None
    ):
        """Initialize the resolver.

        Args:
            config_path: Explicit config file path (skips the search path)
            environ: Environment mapping; when omitted, .env is loaded and
                os.environ is used
            cwd: Working directory for the search path (defaults to Path.cwd())
            platform: Platform identifier (defaults to sys.platform)
        """
        if environ is None:
            load_dotenv()
            environ = os.environ
        self.config_path = config_path
        self.environ = environ
        self.cwd = cwd
        self.platform = platform or sys.platform

    def candidate_paths(self) -> List[Path]:
        """Return config file locations in lookup order."""
        if self.config_path:
            return [Path(self.config_path)]

        cwd = self.cwd if self.cwd is not None else Path.cwd()
        paths = [cwd / CONFIG_FILENAME]

        config_dir = _user_config_dir(self.environ, self.platform)
        if config_dir is not None:
            paths.append(config_dir / APP_NAME / CONFIG_FILENAME)

        return paths

    def load_file_config(self) -> Dict[str, Any]:
        """Load the first config file found on the search path.

        Returns:
            Parsed config values, or an empty dict when no file exists

        Raises:
            ConfigFileError: If an explicit config file is missing, or any
                config file cannot be read or parsed
        """
        if self.config_path and not Path(self.config_path).is_file():
            raise ConfigFileError(self.config_path, "file not found")

        for path in self.candidate_paths():
            if path.is_file():
                logger.debug(f"Using config file {path}")
                return self._read_config_file(path)

        logger.debug("No config file found; using environment only")
        return {}

    @staticmethod
    def _read_config_file(path: Path) -> Dict[str, Any]:
        """Read and validate a TOML config file."""
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigFileError(str(path), f"Invalid TOML syntax: {e}")
        except OSError as e:
            raise ConfigFileError(str(path), str(e))

        for key in CONFIG_KEYS:
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ConfigFileError(
                    str(path),
                    f"'{key}' must be a string, got {type(value).__name__}"
                )

        unknown = sorted(set(data) - set(CONFIG_KEYS))
        if unknown:
            logger.warning(f"Ignoring unknown config keys in {path}: {', '.join(unknown)}")

        return data

    def _pick(self, file_config: Dict[str, Any], key: str, env_var: str) -> Optional[str]:
        """Return the first non-empty value from the file, then the environment."""
        value = file_config.get(key)
        if value:
            return value
        return self.environ.get(env_var) or None

    def resolve(self) -> ResolvedConfig:
        """Merge file config, environment and defaults.

        Returns:
            ResolvedConfig with all four settings populated

        Raises:
            ConfigFileError: If the config file cannot be read or parsed
            MissingCredentialsError: If the endpoint or service key is missing
        """
        file_config = self.load_file_config()

        supabase_url = self._pick(file_config, "supabase_url", ENV_URL)
        service_key = self._pick(file_config, "supabase_service_key", ENV_SERVICE_KEY)

        missing = []
        if not supabase_url:
            missing.append("supabase_url")
        if not service_key:
            missing.append("supabase_service_key")
        if missing:
            raise MissingCredentialsError(missing)

        bucket = self._pick(file_config, "bucket", ENV_BUCKET) or DEFAULT_BUCKET
        table = self._pick(file_config, "table", ENV_TABLE) or DEFAULT_TABLE

        # Type checker: guaranteed non-empty by the check above
        return ResolvedConfig(
            supabase_url=supabase_url,  # type: ignore[arg-type]
            service_key=service_key,  # type: ignore[arg-type]
            bucket=bucket,
            table=table,
        )
