"""Command-line interface for supamarker.

This package provides the `supamarker` CLI tool with the publish, delete,
list and gen-config commands. It ties together config resolution,
frontmatter parsing and the Supabase API wrapper, with spinner output and
error handling.
"""

from .publish_command import PublishCommand
from .delete_command import DeleteCommand
from .list_command import ListCommand
from .gen_config_command import GenConfigCommand
from .models import ExitCode, PublishResult, DeleteResult, PostLocation
from .errors import (
    CLIError,
    NotFoundError,
    ConfigAlreadyExistsError,
)

__all__ = [
    'PublishCommand',
    'DeleteCommand',
    'ListCommand',
    'GenConfigCommand',
    'ExitCode',
    'PublishResult',
    'DeleteResult',
    'PostLocation',
    'CLIError',
    'NotFoundError',
    'ConfigAlreadyExistsError',
]
