"""YAML frontmatter parsing and generation for markdown posts.

This module handles reading and writing the YAML header of a post. The
header sits between two `---` markers at the top of the file and carries
the post metadata:

    ---
    title: "Hello"
    tag: "general"
    ttr: "2 min"
    slug: "optional-explicit-slug"
    ---

title, tag and ttr are required; slug is optional.
"""

from typing import Any, Dict, List, Optional, Tuple

import yaml

from .errors import FrontmatterError
from .models import Frontmatter, ParsedDocument

BYTE_ORDER_MARK = '\ufeff'


class FrontmatterHandler:
    """Handles YAML frontmatter operations for markdown posts.

    Provides methods to split a document into header and body, validate
    the header fields, and generate a document from a Frontmatter.

    A document without a leading `---` simply has no frontmatter. A
    document that starts a header block but leaves it empty, unclosed,
    unparsable or incomplete is invalid and raises FrontmatterError.
    """

    MARKER = '---'

    REQUIRED_FIELDS = ('title', 'tag', 'ttr')

    # Maximum allowed depth for YAML structures to prevent DoS attacks
    MAX_YAML_DEPTH = 10

    @classmethod
    def _validate_yaml_depth(cls, obj, current_depth: int = 0, max_depth: int = MAX_YAML_DEPTH) -> None:
        """Validate that YAML structure depth doesn't exceed maximum.

        Args:
            obj: YAML object (dict, list, or primitive)
            current_depth: Current nesting depth
            max_depth: Maximum allowed depth

        Raises:
            FrontmatterError: If depth exceeds maximum
        """
        if current_depth > max_depth:
            raise FrontmatterError(
                "<yaml>",
                f"YAML structure exceeds maximum depth of {max_depth}"
            )

        if isinstance(obj, dict):
            for value in obj.values():
                cls._validate_yaml_depth(value, current_depth + 1, max_depth)
        elif isinstance(obj, list):
            for item in obj:
                cls._validate_yaml_depth(item, current_depth + 1, max_depth)

    @classmethod
    def split(cls, file_path: str, content: str) -> Tuple[Optional[str], str]:
        """Split content into the raw header block and the body.

        Args:
            file_path: Path to the file (for error messages)
            content: Full markdown content

        Returns:
            Tuple of (header_text, body). header_text is None when the
            document does not start with a header marker.

        Raises:
            FrontmatterError: If the header block is never closed
        """
        # A UTF-8 byte order mark is not whitespace to str.lstrip()
        stripped = content.lstrip(BYTE_ORDER_MARK).lstrip()
        if not stripped.startswith(cls.MARKER):
            return None, content

        parts = stripped.split(cls.MARKER, 2)
        if len(parts) < 3:
            raise FrontmatterError(file_path, "no closing frontmatter marker")

        _, header, rest = parts
        return header, rest.lstrip('\r\n')

    @classmethod
    def _load_header(cls, file_path: str, header: str) -> Dict[str, Any]:
        """Parse the header block into a mapping."""
        # An empty header block is always invalid, never an empty mapping
        if not header.strip():
            raise FrontmatterError(file_path, "empty frontmatter")

        try:
            data = yaml.safe_load(header)
        except yaml.YAMLError as e:
            raise FrontmatterError(
                file_path,
                f"Invalid YAML syntax: {str(e)}"
            )

        if not isinstance(data, dict):
            raise FrontmatterError(
                file_path,
                f"Frontmatter must be a YAML dictionary, got {type(data).__name__}"
            )

        try:
            cls._validate_yaml_depth(data)
        except FrontmatterError as e:
            raise FrontmatterError(file_path, e.message)

        return data

    @staticmethod
    def _scalar(file_path: str, key: str, value: Any) -> Optional[str]:
        """Coerce a scalar header value to a stripped string (None if empty)."""
        if value is None:
            return None
        if isinstance(value, (dict, list)):
            raise FrontmatterError(
                file_path,
                f"Field '{key}' must be a scalar, got {type(value).__name__}"
            )
        text = str(value).strip()
        return text or None

    @classmethod
    def to_frontmatter(cls, file_path: str, data: Dict[str, Any]) -> Frontmatter:
        """Build a Frontmatter from a parsed header mapping.

        Raises:
            FrontmatterError: If any required field is missing or empty
        """
        values = {key: cls._scalar(file_path, key, data.get(key)) for key in cls.REQUIRED_FIELDS}

        missing: List[str] = [key for key, value in values.items() if value is None]
        if missing:
            raise FrontmatterError(
                file_path,
                f"missing required field(s): {', '.join(missing)}"
            )

        return Frontmatter(
            title=values['title'],  # type: ignore[arg-type]
            tag=values['tag'],  # type: ignore[arg-type]
            ttr=values['ttr'],  # type: ignore[arg-type]
            slug=cls._scalar(file_path, 'slug', data.get('slug')),
        )

    @classmethod
    def parse(cls, file_path: str, content: str) -> ParsedDocument:
        """Parse YAML frontmatter from markdown content.

        Args:
            file_path: Path to the file (for error messages)
            content: Full markdown content including frontmatter

        Returns:
            ParsedDocument; frontmatter is None when the document has no
            header block

        Raises:
            FrontmatterError: If the header is empty, unclosed, malformed,
                or missing required fields
        """
        header, body = cls.split(file_path, content)
        if header is None:
            return ParsedDocument(file_path=file_path, frontmatter=None, body=body)

        data = cls._load_header(file_path, header)
        return ParsedDocument(
            file_path=file_path,
            frontmatter=cls.to_frontmatter(file_path, data),
            body=body,
        )

    @classmethod
    def generate(cls, frontmatter: Frontmatter, body: str = "") -> str:
        """Generate markdown content with YAML frontmatter.

        Args:
            frontmatter: Post metadata
            body: Markdown content without frontmatter

        Returns:
            Full markdown content with a header block
        """
        yaml_str = yaml.safe_dump(
            frontmatter.to_dict(),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )
        return f"{cls.MARKER}\n{yaml_str}{cls.MARKER}\n{body}"
