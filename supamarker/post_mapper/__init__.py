"""Post mapper for supamarker.

This package turns local Markdown files into posts: it parses YAML
frontmatter, validates the metadata and resolves slugs.
"""

from .errors import (
    PostMapperError,
    FilesystemError,
    FrontmatterError,
    MissingFrontmatterError,
    SlugError,
)
from .frontmatter_handler import FrontmatterHandler
from .models import Frontmatter, ParsedDocument
from .slug_resolver import derive_slug, normalize_slug, object_key, slugify

__all__ = [
    'PostMapperError',
    'FilesystemError',
    'FrontmatterError',
    'MissingFrontmatterError',
    'SlugError',
    'FrontmatterHandler',
    'Frontmatter',
    'ParsedDocument',
    'derive_slug',
    'normalize_slug',
    'object_key',
    'slugify',
]
