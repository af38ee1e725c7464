"""DeleteCommand for removing a published post.

Looks the slug up in the bucket and the table independently, asks for
confirmation, then removes the object (unless soft) and the row.
A soft delete keeps the markdown file in the bucket but still deletes the
metadata row.
"""

import logging

from supamarker.post_mapper.slug_resolver import normalize_slug, object_key
from .errors import NotFoundError
from .models import DeleteResult
from .remote_command import RemoteCommand

logger = logging.getLogger(__name__)


class DeleteCommand(RemoteCommand):
    """Deletes a post's object and/or row.

    Example:
        >>> cmd = DeleteCommand(output_handler=output)
        >>> result = cmd.run("my-post", soft=True, assume_yes=True)
        >>> result.removed_object
        False
    """

    def _in_bucket(self, slug: str) -> bool:
        """Check whether <slug>.md exists in the bucket."""
        key = object_key(slug)
        names = self._get_api_wrapper().list_objects(self.config.bucket, search=key)
        # search is a prefix match; require the exact object name
        return key in names

    def _in_table(self, slug: str) -> bool:
        """Check whether a row with this slug exists in the table."""
        rows = self._get_api_wrapper().select_rows(
            self.config.table, columns='slug', filters={'slug': slug}
        )
        return len(rows) > 0

    def run(self, slug: str, soft: bool = False, assume_yes: bool = False) -> DeleteResult:
        """Delete a post by slug.

        Args:
            slug: Post slug; a file name such as "posts/my-post.md" is accepted
            soft: Keep the markdown object, delete only the row
            assume_yes: Skip the confirmation prompt

        Returns:
            DeleteResult describing what was removed

        Raises:
            NotFoundError: If the slug exists in neither the bucket nor the table
            MissingCredentialsError: If the endpoint or service key is missing
            SupabaseError: If a lookup or removal fails
        """
        slug = normalize_slug(slug)

        with self.output.spinner(f"Verifying '{slug}'..."):
            in_bucket = self._in_bucket(slug)
            in_table = self._in_table(slug)

        logger.info(f"Slug '{slug}' found in: storage={in_bucket} table={in_table}")
        result = DeleteResult(slug=slug, in_bucket=in_bucket, in_table=in_table)

        if not in_bucket and not in_table:
            raise NotFoundError(slug)

        if not assume_yes:
            suffix = " (soft delete: keep bucket file)" if soft else ""
            if not self.output.confirm(f"Delete '{slug}'{suffix}?"):
                self.output.print("Aborted.")
                result.aborted = True
                return result

        if not soft and in_bucket:
            key = object_key(slug)
            with self.output.spinner(f"Deleting markdown from storage: {key}..."):
                self._get_api_wrapper().remove_objects(self.config.bucket, [key])
            result.removed_object = True
            self.output.success(f"Deleted markdown from storage: {self.config.bucket}/{key}")

        if in_table:
            with self.output.spinner(f"Deleting metadata from '{self.config.table}'..."):
                self._get_api_wrapper().delete_row(self.config.table, {'slug': slug})
            result.removed_row = True
            self.output.success(f"Deleted metadata from {self.config.table} table for slug '{slug}'")

        self.output.success(f"Deleted {slug}")
        return result
