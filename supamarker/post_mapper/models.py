"""Data models for post mapper.

This module defines the data models used when reading local posts.
All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Frontmatter:
    """Metadata parsed from a post's YAML header.

    Attributes:
        title: Post title
        tag: Post tag (category)
        ttr: Time to read, free-form (e.g. "5 min")
        slug: Explicit slug overriding the filename-derived one
    """
    title: str
    tag: str
    ttr: str
    slug: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the header mapping as it appears in the document."""
        data: Dict[str, Any] = {
            'title': self.title,
            'tag': self.tag,
            'ttr': self.ttr,
        }
        if self.slug:
            data['slug'] = self.slug
        return data

    def to_row(self, slug: str) -> Dict[str, Any]:
        """Return the posts table row for this post.

        Args:
            slug: Resolved slug (the table's conflict key)
        """
        return {
            'slug': slug,
            'title': self.title,
            'tag': self.tag,
            'time_to_read': self.ttr,
        }


@dataclass
class ParsedDocument:
    """A local Markdown file split into frontmatter and body.

    Attributes:
        file_path: Path to the markdown file
        frontmatter: Parsed header (None when the file has no header block)
        body: Markdown content without the header
    """
    file_path: str
    frontmatter: Optional[Frontmatter]
    body: str = ""
