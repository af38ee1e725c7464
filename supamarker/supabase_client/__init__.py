"""Supabase client library for supamarker.

This package resolves connection settings and provides a thin,
error-translating wrapper over the supabase-py storage and table APIs.
"""

from .auth import ConfigResolver, ResolvedConfig, default_config_path
from .errors import (
    SupamarkerError,
    SupabaseError,
    MissingCredentialsError,
    ConfigFileError,
    InvalidCredentialsError,
    APIUnreachableError,
    RemoteOperationError,
)

__all__ = [
    "ConfigResolver",
    "ResolvedConfig",
    "default_config_path",
    "SupamarkerError",
    "SupabaseError",
    "MissingCredentialsError",
    "ConfigFileError",
    "InvalidCredentialsError",
    "APIUnreachableError",
    "RemoteOperationError",
]
