"""Unit tests for supabase_client.api_wrapper module."""

from unittest.mock import MagicMock, patch

import httpx
import pytest
from postgrest.exceptions import APIError

from supamarker.supabase_client.api_wrapper import SupabaseWrapper
from supamarker.supabase_client.errors import (
    APIUnreachableError,
    InvalidCredentialsError,
    RemoteOperationError,
)
from tests.fixtures.fake_backend import make_config


class FakeStorageError(Exception):
    """Exception carrying an HTTP status like the storage SDK errors."""

    def __init__(self, message, status):
        super().__init__(message)
        self.message = message
        self.status = status


@pytest.fixture
def client():
    """Mock supabase Client patched into create_client."""
    with patch("supamarker.supabase_client.api_wrapper.create_client") as mock_create:
        mock_client = MagicMock()
        mock_create.return_value = mock_client
        yield mock_client


@pytest.fixture
def wrapper(client):
    return SupabaseWrapper(make_config())


class TestClientCreation:
    """Test cases for lazy client creation."""

    def test_client_not_created_on_init(self):
        """Constructing the wrapper does not create a client."""
        with patch("supamarker.supabase_client.api_wrapper.create_client") as mock_create:
            SupabaseWrapper(make_config())

        mock_create.assert_not_called()

    def test_client_created_once(self):
        """The client is created on first use and reused."""
        with patch("supamarker.supabase_client.api_wrapper.create_client") as mock_create:
            wrapper = SupabaseWrapper(make_config())
            wrapper.remove_objects("blog", ["a.md"])
            wrapper.remove_objects("blog", ["b.md"])

        mock_create.assert_called_once()
        args, kwargs = mock_create.call_args
        assert args == ("https://test-project.supabase.co", "test-service-key")
        assert kwargs["options"].persist_session is False
        assert kwargs["options"].auto_refresh_token is False


class TestStorageOperations:
    """Test cases for bucket operations."""

    def test_upload_object_with_upsert(self, wrapper, client):
        """Uploads send the content type and overwrite flag."""
        wrapper.upload_object("blog", "my-post.md", b"# Hi", "text/markdown")

        client.storage.from_.assert_called_with("blog")
        client.storage.from_.return_value.upload.assert_called_once_with(
            "my-post.md",
            b"# Hi",
            {"content-type": "text/markdown", "upsert": "true"},
        )

    def test_upload_object_without_overwrite(self, wrapper, client):
        """overwrite=False sends upsert false."""
        wrapper.upload_object("blog", "a.md", b"x", "text/markdown", overwrite=False)

        _, _, options = client.storage.from_.return_value.upload.call_args[0]
        assert options["upsert"] == "false"

    def test_list_objects_single_page(self, wrapper, client):
        """Names are extracted from the listing."""
        client.storage.from_.return_value.list.return_value = [
            {"name": "a.md"},
            {"name": "b.md"},
        ]

        assert wrapper.list_objects("blog") == ["a.md", "b.md"]
        client.storage.from_.return_value.list.assert_called_once_with(
            "", {"limit": 100, "offset": 0}
        )

    def test_list_objects_paginates(self, wrapper, client):
        """Full pages trigger another request at the next offset."""
        first = [{"name": f"post-{i}.md"} for i in range(SupabaseWrapper.LIST_PAGE_SIZE)]
        second = [{"name": "last.md"}]
        client.storage.from_.return_value.list.side_effect = [first, second]

        names = wrapper.list_objects("blog")

        assert len(names) == SupabaseWrapper.LIST_PAGE_SIZE + 1
        assert names[-1] == "last.md"
        offsets = [c[0][1]["offset"] for c in client.storage.from_.return_value.list.call_args_list]
        assert offsets == [0, 100]

    def test_list_objects_passes_search(self, wrapper, client):
        """search is forwarded to the listing options."""
        client.storage.from_.return_value.list.return_value = []

        wrapper.list_objects("blog", search="my-post.md")

        options = client.storage.from_.return_value.list.call_args[0][1]
        assert options["search"] == "my-post.md"

    def test_list_objects_skips_nameless_entries(self, wrapper, client):
        """Entries without a name are ignored."""
        client.storage.from_.return_value.list.return_value = [{"name": "a.md"}, {"id": None}]

        assert wrapper.list_objects("blog") == ["a.md"]

    def test_remove_objects(self, wrapper, client):
        """Keys are removed in one call."""
        wrapper.remove_objects("blog", ["my-post.md"])

        client.storage.from_.return_value.remove.assert_called_once_with(["my-post.md"])


class TestTableOperations:
    """Test cases for table operations."""

    def test_upsert_row_on_conflict(self, wrapper, client):
        """Upserts use the given conflict column."""
        record = {"slug": "my-post", "title": "Hi"}

        wrapper.upsert_row("posts", record, on_conflict="slug")

        client.table.assert_called_with("posts")
        client.table.return_value.upsert.assert_called_once_with(record, on_conflict="slug")
        client.table.return_value.upsert.return_value.execute.assert_called_once()

    def test_select_rows_with_filters(self, wrapper, client):
        """Filters are applied as equality conditions."""
        select = client.table.return_value.select
        select.return_value.eq.return_value.execute.return_value = MagicMock(
            data=[{"slug": "my-post"}]
        )

        rows = wrapper.select_rows("posts", columns="slug", filters={"slug": "my-post"})

        assert rows == [{"slug": "my-post"}]
        select.assert_called_once_with("slug")
        select.return_value.eq.assert_called_once_with("slug", "my-post")

    def test_select_rows_empty_data(self, wrapper, client):
        """None data is returned as an empty list."""
        client.table.return_value.select.return_value.execute.return_value = MagicMock(data=None)

        assert wrapper.select_rows("posts", columns="slug") == []

    def test_delete_row(self, wrapper, client):
        """Deletes are filtered by the given columns."""
        wrapper.delete_row("posts", {"slug": "my-post"})

        delete = client.table.return_value.delete
        delete.return_value.eq.assert_called_once_with("slug", "my-post")
        delete.return_value.eq.return_value.execute.assert_called_once()

    def test_delete_row_requires_filter(self, wrapper, client):
        """An unfiltered delete is refused before any request."""
        with pytest.raises(ValueError):
            wrapper.delete_row("posts", {})

        client.table.assert_not_called()


class TestErrorTranslation:
    """Test cases for SDK error translation."""

    def test_transport_error_is_unreachable(self, wrapper, client):
        """Connection failures map to APIUnreachableError."""
        client.storage.from_.return_value.upload.side_effect = httpx.ConnectError("refused")

        with pytest.raises(APIUnreachableError) as exc_info:
            wrapper.upload_object("blog", "a.md", b"x", "text/markdown")

        assert exc_info.value.endpoint == "https://test-project.supabase.co"

    def test_timeout_is_unreachable(self, wrapper, client):
        """Timeouts map to APIUnreachableError."""
        client.table.return_value.upsert.return_value.execute.side_effect = (
            httpx.ReadTimeout("timed out")
        )

        with pytest.raises(APIUnreachableError):
            wrapper.upsert_row("posts", {"slug": "a"}, on_conflict="slug")

    def test_status_401_is_invalid_credentials(self, wrapper, client):
        """A 401 status maps to InvalidCredentialsError."""
        client.storage.from_.return_value.list.side_effect = FakeStorageError("denied", 401)

        with pytest.raises(InvalidCredentialsError):
            wrapper.list_objects("blog")

    def test_status_string_403_is_invalid_credentials(self, wrapper, client):
        """String status codes are understood too."""
        client.storage.from_.return_value.remove.side_effect = FakeStorageError("nope", "403")

        with pytest.raises(InvalidCredentialsError):
            wrapper.remove_objects("blog", ["a.md"])

    def test_invalid_jwt_message_is_invalid_credentials(self, wrapper, client):
        """An 'Invalid JWT' message maps to InvalidCredentialsError."""
        client.table.return_value.select.return_value.execute.side_effect = (
            Exception("Invalid JWT")
        )

        with pytest.raises(InvalidCredentialsError):
            wrapper.select_rows("posts")

    def test_other_errors_are_remote_operation_errors(self, wrapper, client):
        """Other failures carry the operation and remote message."""
        client.storage.from_.return_value.upload.side_effect = FakeStorageError(
            "Bucket not found", 404
        )

        with pytest.raises(RemoteOperationError) as exc_info:
            wrapper.upload_object("missing", "a.md", b"x", "text/markdown")

        assert exc_info.value.operation == "upload_object(missing/a.md)"
        assert exc_info.value.remote_message == "Bucket not found"
        assert isinstance(exc_info.value.__cause__, FakeStorageError)

    def test_service_key_is_redacted(self, wrapper, client):
        """The service key never appears in translated messages."""
        client.table.return_value.delete.return_value.eq.return_value.execute.side_effect = (
            Exception("request with key test-service-key failed")
        )

        with pytest.raises(RemoteOperationError) as exc_info:
            wrapper.delete_row("posts", {"slug": "a"})

        assert "test-service-key" not in str(exc_info.value)
        assert "***REDACTED***" in str(exc_info.value)

    def test_sanitize_bearer_and_jwt(self, wrapper):
        """Bearer tokens and JWT-shaped strings are masked."""
        text = "Authorization: Bearer abc.def token eyJhbGciOi.eyJzdWIi.c2lnbmF0dXJl"

        sanitized = wrapper._sanitize_credentials(text)

        assert "abc.def" not in sanitized
        assert "eyJhbGciOi" not in sanitized


class TestTableErrorTranslation:
    """Test cases for postgrest APIError translation."""

    def _fail_select(self, client, error):
        client.table.return_value.select.return_value.execute.side_effect = error

    def test_gateway_401_is_invalid_credentials(self, wrapper, client):
        """A non-PostgREST 401 body carries the status in code."""
        self._fail_select(client, APIError({
            "message": "JSON could not be generated",
            "code": 401,
            "hint": "Refer to full message for details",
            "details": "b'{\"message\":\"Invalid API key\"}'",
        }))

        with pytest.raises(InvalidCredentialsError):
            wrapper.select_rows("posts")

    def test_jwt_expired_code_is_invalid_credentials(self, wrapper, client):
        """PGRST30x codes are authentication failures."""
        client.table.return_value.upsert.return_value.execute.side_effect = APIError({
            "message": "JWT expired",
            "code": "PGRST301",
            "hint": None,
            "details": None,
        })

        with pytest.raises(InvalidCredentialsError):
            wrapper.upsert_row("posts", {"slug": "a"}, on_conflict="slug")

    def test_placeholder_message_replaced_by_details(self, wrapper, client):
        """The raw body in details is kept when message is a placeholder."""
        self._fail_select(client, APIError({
            "message": "JSON could not be generated",
            "code": 502,
            "hint": "Refer to full message for details",
            "details": "upstream connect error",
        }))

        with pytest.raises(RemoteOperationError) as exc_info:
            wrapper.select_rows("posts")

        assert exc_info.value.remote_message == "upstream connect error"

    def test_sqlstate_code_is_not_a_status(self, wrapper, client):
        """Postgres error codes are not mistaken for HTTP statuses."""
        client.table.return_value.delete.return_value.eq.return_value.execute.side_effect = (
            APIError({
                "message": "permission denied for table posts",
                "code": "42501",
                "hint": None,
                "details": None,
            })
        )

        with pytest.raises(RemoteOperationError) as exc_info:
            wrapper.delete_row("posts", {"slug": "a"})

        assert exc_info.value.remote_message == "permission denied for table posts"
