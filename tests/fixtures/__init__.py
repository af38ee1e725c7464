"""Test fixtures for supamarker tests.

This module provides test fixtures for:
- An in-memory Supabase backend for command handler tests
- Sample markdown posts for frontmatter and publish tests
"""

from .fake_backend import FakeSupabaseBackend, make_config
from .sample_posts import (
    SAMPLE_POST,
    SAMPLE_POST_WITH_SLUG,
    SAMPLE_POST_NO_FRONTMATTER,
    SAMPLE_POST_EMPTY_FRONTMATTER,
    SAMPLE_POST_MISSING_TTR,
    SAMPLE_POST_INVALID_YAML,
    SAMPLE_POST_UNCLOSED,
)

__all__ = [
    "FakeSupabaseBackend",
    "make_config",
    "SAMPLE_POST",
    "SAMPLE_POST_WITH_SLUG",
    "SAMPLE_POST_NO_FRONTMATTER",
    "SAMPLE_POST_EMPTY_FRONTMATTER",
    "SAMPLE_POST_MISSING_TTR",
    "SAMPLE_POST_INVALID_YAML",
    "SAMPLE_POST_UNCLOSED",
]
