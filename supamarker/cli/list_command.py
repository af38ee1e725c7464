"""ListCommand for reconciling bucket objects with table rows.

Fetches every object name in the bucket and every slug in the table,
normalizes both to bare slugs and reports, for each slug in sorted
order, whether it lives in the bucket, the table, or both.
"""

import logging
from typing import List, Set

from supamarker.post_mapper.slug_resolver import normalize_slug
from .models import PostLocation
from .remote_command import RemoteCommand

logger = logging.getLogger(__name__)


class ListCommand(RemoteCommand):
    """Lists slugs and where they exist."""

    def fetch_bucket_slugs(self) -> Set[str]:
        names = self._get_api_wrapper().list_objects(self.config.bucket)
        return {normalize_slug(name) for name in names}

    def fetch_table_slugs(self) -> Set[str]:
        rows = self._get_api_wrapper().select_rows(self.config.table, columns='slug')
        return {normalize_slug(str(row['slug'])) for row in rows if row.get('slug')}

    def run(self) -> List[PostLocation]:
        """List every known slug with its location.

        Returns:
            PostLocation entries sorted by slug

        Raises:
            MissingCredentialsError: If the endpoint or service key is missing
            SupabaseError: If either listing fails
        """
        with self.output.spinner("Fetching storage objects..."):
            bucket_slugs = self.fetch_bucket_slugs()
        with self.output.spinner("Fetching table rows..."):
            table_slugs = self.fetch_table_slugs()

        logger.info(f"Found {len(bucket_slugs)} object(s) and {len(table_slugs)} row(s)")

        locations = [
            PostLocation(
                slug=slug,
                in_bucket=slug in bucket_slugs,
                in_table=slug in table_slugs,
            )
            for slug in sorted(bucket_slugs | table_slugs)
        ]

        self.output.print_locations(locations)
        return locations
