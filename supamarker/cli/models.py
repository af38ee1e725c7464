"""Data models for CLI operations.

This module defines the results returned by the command handlers.
All models use dataclasses for clean, type-safe data structures,
following the patterns established in supamarker/post_mapper/models.py.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Literal


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): General error (config, frontmatter, not found, remote failure)
    - AUTH_ERROR (3): Missing or rejected Supabase credentials
    - NETWORK_ERROR (4): Supabase API unreachable

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 3
    NETWORK_ERROR = 4


@dataclass
class PublishResult:
    """Result of publishing one post.

    Attributes:
        slug: Slug the post was published under
        title: Post title from the frontmatter
        object_key: Bucket object name (<slug>.md)
    """
    slug: str
    title: str
    object_key: str


@dataclass
class DeleteResult:
    """Result of a delete operation.

    Attributes:
        slug: Normalized slug that was looked up
        in_bucket: Whether the object existed before the delete
        in_table: Whether the row existed before the delete
        removed_object: Whether the object was removed
        removed_row: Whether the row was deleted
        aborted: True when the user declined the confirmation prompt
    """
    slug: str
    in_bucket: bool
    in_table: bool
    removed_object: bool = False
    removed_row: bool = False
    aborted: bool = False


@dataclass(frozen=True)
class PostLocation:
    """Where a slug currently exists.

    Attributes:
        slug: Normalized slug
        in_bucket: Object <slug>.md exists in the bucket
        in_table: A row with this slug exists in the table

    Example:
        >>> PostLocation("my-post", in_bucket=True, in_table=False).location
        'bucket'
    """
    slug: str
    in_bucket: bool
    in_table: bool

    @property
    def location(self) -> Literal["both", "bucket", "table"]:
        """Classify the slug as bucket-only, table-only or both."""
        if self.in_bucket and self.in_table:
            return "both"
        if self.in_bucket:
            return "bucket"
        return "table"
