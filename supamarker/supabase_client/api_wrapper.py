"""API wrapper for Supabase storage and PostgREST tables.

This module wraps the supabase-py client and provides error translation
from SDK and transport exceptions to our typed exception hierarchy. It
exposes only the primitive operations the commands need: object upload,
listing and removal in a bucket, and row upsert, select and delete in a
table. There are no retries: a single failed call aborts the command.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from httpx import TimeoutException, TransportError
from supabase import Client, ClientOptions, create_client

from .auth import ResolvedConfig
from .errors import (
    APIUnreachableError,
    InvalidCredentialsError,
    RemoteOperationError,
)

logger = logging.getLogger(__name__)

# postgrest's APIError message when the error body is not PostgREST JSON
JSON_PLACEHOLDER_MESSAGE = "JSON could not be generated"

# PostgREST JWT errors: PGRST300 (secret missing) through PGRST303 (claims)
AUTH_ERROR_CODE_PREFIX = "PGRST30"


class SupabaseWrapper:
    """Wrapper around the supabase-py client with error translation.

    This class provides a thin wrapper over the Supabase client that:
    1. Builds one authenticated client from ResolvedConfig, with session
       persistence and token refresh disabled
    2. Translates SDK and HTTP errors to typed exceptions
    3. Provides a narrow interface that commands (and test fakes) share

    Example:
        >>> wrapper = SupabaseWrapper(config)
        >>> wrapper.upload_object("blog", "my-post.md", b"# Hi", "text/markdown")
    """

    # Maximum objects returned by one storage list call
    LIST_PAGE_SIZE = 100

    def __init__(self, config: ResolvedConfig):
        """Initialize the wrapper with resolved connection settings.

        Args:
            config: ResolvedConfig with endpoint and service key
        """
        self._config = config
        self._client: Optional[Client] = None

    def _get_client(self) -> Client:
        """Get or create the Supabase client.

        The client is created lazily on first use so that constructing a
        wrapper never touches the network.

        Returns:
            Client: Initialized supabase-py client
        """
        if self._client is None:
            logger.debug(f"Creating Supabase client for {self._config.supabase_url}")
            self._client = create_client(
                self._config.supabase_url,
                self._config.service_key,
                options=ClientOptions(
                    persist_session=False,
                    auto_refresh_token=False,
                ),
            )
        return self._client

    def _sanitize_credentials(self, text: str) -> str:
        """Mask the service key and bearer tokens in error text.

        Args:
            text: The error message to sanitize

        Returns:
            str: Sanitized text
        """
        if not text:
            return text

        sanitized = text.replace(self._config.service_key, "***REDACTED***")

        sanitized = re.sub(
            r'Bearer\s+[^\s\n\r]+',
            'Bearer ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )

        # JWTs: three base64url segments separated by dots
        sanitized = re.sub(
            r'\beyJ[\w-]+\.[\w-]+\.[\w-]+\b',
            '***REDACTED***',
            sanitized
        )

        return sanitized

    @staticmethod
    def _status_code(exception: Exception) -> Optional[int]:
        """Extract an HTTP status code from an SDK exception, if present.

        postgrest's APIError puts the HTTP status in `code` when the
        response body is not a PostgREST error. Postgres SQLSTATE codes
        (e.g. "23505") share that attribute and are ignored.
        """
        for attr in ("status_code", "status", "code"):
            value = getattr(exception, attr, None)
            if isinstance(value, str) and value.isdigit():
                value = int(value)
            if isinstance(value, int) and not isinstance(value, bool) and 100 <= value <= 599:
                return value

        response = getattr(exception, "response", None)
        status_code = getattr(response, "status_code", None)
        if isinstance(status_code, int):
            return status_code
        return None

    @staticmethod
    def _remote_message(exception: Exception) -> str:
        """Return the most useful error text carried by an SDK exception."""
        message = getattr(exception, "message", None)
        details = getattr(exception, "details", None)
        # postgrest fills message with a placeholder when the body is not
        # a PostgREST error; the raw body ends up in details
        if details and (not message or message == JSON_PLACEHOLDER_MESSAGE):
            return str(details)
        return str(message or exception)

    def _translate_error(self, exception: Exception, operation: str) -> Exception:
        """Translate SDK exceptions to typed Supabase exceptions.

        Args:
            exception: The original exception from the client
            operation: Description of the operation that failed

        Returns:
            Exception: Translated exception (one of our typed exceptions)
        """
        endpoint = self._config.supabase_url

        if isinstance(exception, (TimeoutException, TransportError)):
            return APIUnreachableError(endpoint=endpoint)

        status_code = self._status_code(exception)
        message = self._remote_message(exception)
        error_msg = f"{exception} {message}".lower()
        error_code = str(getattr(exception, "code", "") or "")

        if status_code in (401, 403) or error_code.startswith(AUTH_ERROR_CODE_PREFIX) or any(
            keyword in error_msg for keyword in [
                'unauthorized',
                'invalid jwt',
                'invalid signature',
                'invalid api key',
                'jwt expired',
            ]
        ):
            return InvalidCredentialsError(endpoint=endpoint)

        safe_message = self._sanitize_credentials(message)
        logger.error(f"Supabase operation failed: {operation} - {safe_message}")
        return RemoteOperationError(operation, safe_message)

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    def upload_object(
        self,
        bucket: str,
        key: str,
        content: bytes,
        content_type: str,
        overwrite: bool = True
    ) -> None:
        """Upload an object to a storage bucket.

        Args:
            bucket: Bucket name
            key: Object name within the bucket
            content: Object body
            content_type: MIME type stored with the object
            overwrite: Replace an existing object with the same key

        Raises:
            InvalidCredentialsError: If the service key is rejected
            APIUnreachableError: If the API is unreachable
            RemoteOperationError: If the upload fails
        """
        logger.info(f"Uploading {bucket}/{key} ({len(content)} bytes)")
        try:
            self._get_client().storage.from_(bucket).upload(
                key,
                content,
                {
                    "content-type": content_type,
                    "upsert": "true" if overwrite else "false",
                },
            )
        except Exception as e:
            raise self._translate_error(e, f"upload_object({bucket}/{key})") from e

    def list_objects(self, bucket: str, search: Optional[str] = None) -> List[str]:
        """List object names in the root of a bucket.

        Pages through the listing so buckets with more than one page of
        objects are returned in full.

        Args:
            bucket: Bucket name
            search: Optional name search string

        Returns:
            List of object names

        Raises:
            InvalidCredentialsError: If the service key is rejected
            APIUnreachableError: If the API is unreachable
            RemoteOperationError: If the listing fails
        """
        names: List[str] = []
        offset = 0
        while True:
            options: Dict[str, Any] = {"limit": self.LIST_PAGE_SIZE, "offset": offset}
            if search:
                options["search"] = search
            try:
                page = self._get_client().storage.from_(bucket).list("", options)
            except Exception as e:
                raise self._translate_error(e, f"list_objects({bucket})") from e

            page = page or []
            names.extend(item["name"] for item in page if item.get("name"))
            if len(page) < self.LIST_PAGE_SIZE:
                break
            offset += self.LIST_PAGE_SIZE

        logger.debug(f"Listed {len(names)} object(s) in bucket {bucket}")
        return names

    def remove_objects(self, bucket: str, keys: List[str]) -> None:
        """Remove objects from a bucket.

        Args:
            bucket: Bucket name
            keys: Object names to remove

        Raises:
            InvalidCredentialsError: If the service key is rejected
            APIUnreachableError: If the API is unreachable
            RemoteOperationError: If the removal fails
        """
        logger.info(f"Removing {len(keys)} object(s) from bucket {bucket}")
        try:
            self._get_client().storage.from_(bucket).remove(keys)
        except Exception as e:
            raise self._translate_error(e, f"remove_objects({bucket}, {keys})") from e

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def upsert_row(self, table: str, record: Dict[str, Any], on_conflict: str) -> None:
        """Insert a row or update the existing row with the same conflict key.

        Args:
            table: Table name
            record: Column values
            on_conflict: Unique column used to detect an existing row

        Raises:
            InvalidCredentialsError: If the service key is rejected
            APIUnreachableError: If the API is unreachable
            RemoteOperationError: If the upsert fails
        """
        logger.info(f"Upserting row into {table} on {on_conflict}={record.get(on_conflict)}")
        try:
            self._get_client().table(table).upsert(record, on_conflict=on_conflict).execute()
        except Exception as e:
            raise self._translate_error(e, f"upsert_row({table})") from e

    def select_rows(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """Select rows matching equality filters.

        Args:
            table: Table name
            columns: Comma-separated column list
            filters: Column -> value equality filters (all must match)

        Returns:
            List of row dicts

        Raises:
            InvalidCredentialsError: If the service key is rejected
            APIUnreachableError: If the API is unreachable
            RemoteOperationError: If the query fails
        """
        try:
            query = self._get_client().table(table).select(columns)
            for column, value in (filters or {}).items():
                query = query.eq(column, value)
            response = query.execute()
        except Exception as e:
            raise self._translate_error(e, f"select_rows({table})") from e

        rows = response.data or []
        logger.debug(f"Selected {len(rows)} row(s) from {table}")
        return rows

    def delete_row(self, table: str, filters: Dict[str, Any]) -> None:
        """Delete rows matching equality filters.

        Args:
            table: Table name
            filters: Column -> value equality filters (all must match)

        Raises:
            ValueError: If no filters are given
            InvalidCredentialsError: If the service key is rejected
            APIUnreachableError: If the API is unreachable
            RemoteOperationError: If the delete fails
        """
        # PostgREST refuses unfiltered deletes; fail early with a clear message
        if not filters:
            raise ValueError("delete_row requires at least one filter")

        logger.info(f"Deleting row(s) from {table} where {filters}")
        try:
            query = self._get_client().table(table).delete()
            for column, value in filters.items():
                query = query.eq(column, value)
            query.execute()
        except Exception as e:
            raise self._translate_error(e, f"delete_row({table})") from e
