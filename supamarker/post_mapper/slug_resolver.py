"""Slug derivation and normalization.

Two distinct operations live here:

- derive_slug() produces the canonical slug for a post being published:
  an explicit frontmatter slug verbatim, otherwise the file name turned
  into a lowercase URL-safe form ("My Post_v2.md" -> "my-post-v2").
- normalize_slug() only strips directories and the extension from an
  existing name ("posts/my-post.md" -> "my-post") so that bucket object
  names and table slugs can be compared. It never changes case or
  characters.
"""

from pathlib import PurePath
from typing import Optional

import inflection

from .errors import SlugError
from .models import Frontmatter

OBJECT_EXTENSION = ".md"


def slugify(text: str) -> str:
    """Convert text to a lowercase slug of [a-z0-9-].

    Examples:
        >>> slugify("Hello World!")
        'hello-world'
        >>> slugify("my_post")
        'my-post'
    """
    # parameterize keeps underscores; treat them as word separators
    return inflection.parameterize(text.replace("_", " "))


def derive_slug(frontmatter: Optional[Frontmatter], file_path: str) -> str:
    """Resolve the slug a post is published under.

    Args:
        frontmatter: Parsed frontmatter (its slug wins when set)
        file_path: Path of the markdown file

    Returns:
        The explicit slug unchanged, or a slug generated from the file
        name (falling back to the title when the name has no usable
        characters)

    Raises:
        SlugError: If no slug can be derived
    """
    if frontmatter is not None and frontmatter.slug:
        return frontmatter.slug

    slug = slugify(PurePath(file_path).stem)
    if not slug and frontmatter is not None:
        slug = slugify(frontmatter.title)
    if not slug:
        raise SlugError(file_path)
    return slug


def normalize_slug(name: str) -> str:
    """Strip path components and the .md extension from a name.

    Only the object extension is removed, so dotted slugs such as
    "release-1.2" compare equal to their "release-1.2.md" object.

    Examples:
        >>> normalize_slug("posts/my-post.md")
        'my-post'
        >>> normalize_slug("My-Post")
        'My-Post'
    """
    base = PurePath(name).name
    if base.endswith(OBJECT_EXTENSION) and base != OBJECT_EXTENSION:
        return base[:-len(OBJECT_EXTENSION)]
    return base


def object_key(slug: str) -> str:
    """Return the bucket object name for a slug."""
    return f"{slug}{OBJECT_EXTENSION}"
