"""Typed exception hierarchy for post mapper errors.

This module defines all custom exceptions raised while turning a local
Markdown file into a post: reading the file, parsing its frontmatter and
deriving its slug. All exceptions inherit from PostMapperError.
"""

from typing import Optional

from supamarker.supabase_client.errors import SupamarkerError


class PostMapperError(SupamarkerError):
    """Base exception for all post mapper errors."""
    pass


class FilesystemError(PostMapperError):
    """Raised when filesystem operations fail (read, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class FrontmatterError(PostMapperError):
    """Raised when YAML frontmatter parsing or validation fails."""

    def __init__(self, file_path: str, message: str):
        super().__init__(
            f"Frontmatter error in {file_path}: {message}"
        )
        self.file_path = file_path
        self.message = message


class MissingFrontmatterError(FrontmatterError):
    """Raised when a document has no usable frontmatter to publish."""

    def __init__(self, file_path: str, reason: Optional[str] = None):
        message = "Missing or invalid frontmatter"
        if reason:
            message += f" ({reason})"
        super().__init__(file_path, message)
        self.reason = reason


class SlugError(PostMapperError):
    """Raised when no slug can be derived for a document."""

    def __init__(self, file_path: str):
        super().__init__(
            f"Cannot derive a slug for {file_path}; set 'slug' in the frontmatter"
        )
        self.file_path = file_path
