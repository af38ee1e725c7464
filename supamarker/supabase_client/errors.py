"""Typed exception hierarchy for Supabase-related errors.

This module defines the exceptions raised while resolving connection
settings and talking to the Supabase storage bucket and posts table.
All exceptions inherit from SupamarkerError so the CLI can catch any
application-level failure in one place.
"""

from typing import List, Optional


class SupamarkerError(Exception):
    """Base exception for all supamarker errors.

    Use this to catch any application-level error from the tool.
    """
    pass


class SupabaseError(SupamarkerError):
    """Base exception for all Supabase-related errors."""
    pass


class MissingCredentialsError(SupabaseError):
    """Raised when the endpoint or service key could not be resolved."""

    def __init__(self, missing: List[str]):
        settings = ", ".join(missing)
        super().__init__(
            f"Missing Supabase credentials: {settings}. "
            f"Set them in a config file or via SUPABASE_URL / SUPABASE_SERVICE_KEY."
        )
        self.missing = missing


class ConfigFileError(SupabaseError):
    """Raised when a config file cannot be read or parsed."""

    def __init__(self, config_path: str, reason: str):
        super().__init__(f"Config file error in {config_path}: {reason}")
        self.config_path = config_path
        self.reason = reason


class InvalidCredentialsError(SupabaseError):
    """Raised when Supabase rejects the service key."""

    def __init__(self, endpoint: str):
        super().__init__(f"Service key was rejected by {endpoint}")
        self.endpoint = endpoint


class APIUnreachableError(SupabaseError):
    """Raised when the Supabase API cannot be reached."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class RemoteOperationError(SupabaseError):
    """Raised when a storage or table operation returns an error."""

    def __init__(self, operation: str, message: Optional[str] = None):
        full_message = f"Supabase operation '{operation}' failed"
        if message:
            full_message += f": {message}"
        super().__init__(full_message)
        self.operation = operation
        self.remote_message = message
