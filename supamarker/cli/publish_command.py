"""PublishCommand for uploading a markdown post.

This module implements the publish command: it reads a local markdown
file, validates its frontmatter, uploads the file to the storage bucket
as <slug>.md and upserts the metadata row keyed by slug.

The upload and the upsert are two independent remote writes. If the
upsert fails after a successful upload, the object is left in place and
shows up as bucket-only in `list`.
"""

import logging
from pathlib import Path

from supamarker.post_mapper.errors import (
    FilesystemError,
    FrontmatterError,
    MissingFrontmatterError,
)
from supamarker.post_mapper.frontmatter_handler import FrontmatterHandler
from supamarker.post_mapper.slug_resolver import derive_slug, object_key
from .models import PublishResult
from .remote_command import RemoteCommand

logger = logging.getLogger(__name__)

CONTENT_TYPE = "text/markdown"


class PublishCommand(RemoteCommand):
    """Publishes one markdown file to Supabase.

    Example:
        >>> cmd = PublishCommand(output_handler=output)
        >>> result = cmd.run("notes/my-post.md")
        >>> result.slug
        'my-post'
    """

    def _read(self, path: str) -> str:
        try:
            return Path(path).read_text(encoding='utf-8-sig')
        except FileNotFoundError:
            raise FilesystemError(path, 'read', 'File not found')
        except PermissionError:
            raise FilesystemError(path, 'read', 'Permission denied')
        except (OSError, UnicodeDecodeError) as e:
            raise FilesystemError(path, 'read', str(e))

    def run(self, path: str) -> PublishResult:
        """Publish a markdown file.

        Args:
            path: Path to the markdown file

        Returns:
            PublishResult describing what was published

        Raises:
            FilesystemError: If the file cannot be read
            MissingFrontmatterError: If the file has no valid frontmatter
            SlugError: If no slug can be derived
            MissingCredentialsError: If the endpoint or service key is missing
            SupabaseError: If the upload or upsert fails
        """
        # Credentials are resolved before the file is touched
        config = self.config
        markdown = self._read(path)

        try:
            document = FrontmatterHandler.parse(path, markdown)
        except MissingFrontmatterError:
            raise
        except FrontmatterError as e:
            raise MissingFrontmatterError(path, e.message) from e

        frontmatter = document.frontmatter
        if frontmatter is None:
            raise MissingFrontmatterError(path, "no frontmatter block")

        slug = derive_slug(frontmatter, path)
        key = object_key(slug)
        logger.info(f"Publishing {path} as {key}")

        api = self._get_api_wrapper()

        with self.output.spinner("Uploading markdown to storage..."):
            api.upload_object(
                config.bucket,
                key,
                markdown.encode('utf-8'),
                CONTENT_TYPE,
                overwrite=True,
            )
        self.output.info(f"Uploaded markdown to storage as {config.bucket}/{key}")

        with self.output.spinner("Upserting metadata..."):
            api.upsert_row(config.table, frontmatter.to_row(slug), on_conflict='slug')
        self.output.info(f"Upserted metadata into {config.table} for slug '{slug}'")

        self.output.success(f"Published: {frontmatter.title}")
        return PublishResult(slug=slug, title=frontmatter.title, object_key=key)
