"""Tests for the blog record schema."""

from datetime import UTC, datetime
from typing import Any

import pytest

from inkwell.schemas import Blog

NOW = datetime(2026, 1, 1, tzinfo=UTC)


def stored_blog(**overrides: Any) -> Blog:
    data: dict[str, Any] = {
        "id": "b1",
        "title": "T",
        "content": "C",
        "authorId": "u1",
        "createdAt": NOW,
        "updatedAt": NOW,
    }
    data.update(overrides)
    return Blog.model_validate(data)


class TestStoredViews:
    """Test cases for reading the view counter from storage."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("7", 7),
            (" 42 ", 42),
            ("12abc", 12),
            ("abc", 0),
            ("", 0),
            ("-3", 0),
            (None, 0),
            (5, 5),
        ],
    )
    def test_counter_is_read_leniently(self, raw: Any, expected: int) -> None:
        """Test that text, null and garbage counters read as a non-negative int."""
        assert stored_blog(views=raw).views == expected

    def test_null_collections_default(self) -> None:
        """Test that null theme and list fields read as their defaults."""
        blog = stored_blog(theme=None, tags=None, mediaUrls=None)

        assert blog.theme == "modern"
        assert blog.tags == []
        assert blog.media_urls == []
