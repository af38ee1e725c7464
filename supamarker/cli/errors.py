"""Typed exception hierarchy for CLI-related errors.

This module defines the exceptions raised by the command handlers.
All exceptions inherit from CLIError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from supamarker.supabase_client.errors import SupamarkerError


class CLIError(SupamarkerError):
    """Base exception for all CLI-related errors."""
    pass


class NotFoundError(CLIError):
    """Raised when a slug exists in neither the bucket nor the table."""

    def __init__(self, slug: str):
        super().__init__(
            f"Slug '{slug}' not found in storage or table; nothing to delete"
        )
        self.slug = slug


class ConfigAlreadyExistsError(CLIError):
    """Raised when gen-config would overwrite an existing config file."""

    def __init__(self, config_path: str):
        super().__init__(
            f"Config already exists at {config_path}. Delete or move it to regenerate."
        )
        self.config_path = config_path
