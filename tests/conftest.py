"""Root pytest configuration for all tests.

Provides the shared fake backend, a resolved config and a quiet output
handler for command handler tests.
"""

import logging

import pytest

from supamarker.cli.output import OutputHandler
from tests.fixtures.fake_backend import FakeSupabaseBackend, make_config

# httpx logs every request at INFO; keep test output readable.
logging.getLogger("httpx").setLevel(logging.WARNING)


@pytest.fixture
def fake_backend():
    """Empty in-memory Supabase backend."""
    return FakeSupabaseBackend()


@pytest.fixture
def resolved_config():
    """ResolvedConfig with default bucket and table."""
    return make_config()


@pytest.fixture
def output():
    """OutputHandler without colors, verbosity 1 so info lines are printed."""
    return OutputHandler(verbosity=1, no_color=True)
