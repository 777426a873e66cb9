"""
Unit tests for the BlogPost model.
"""

from datetime import date

from petfolio.models.post import BlogPost


class TestBlogPost:
    """Test cases for BlogPost."""

    def test_create_new_defaults_to_today(self):
        """Posts are dated today unless a date is given."""
        post = BlogPost.create_new("Title", "Body", "Short")

        assert post.date == date.today().isoformat()
        assert post.id

    def test_create_new_with_date(self):
        """An explicit date is kept."""
        post = BlogPost.create_new("Title", "Body", "Short", post_date="2024-02-29")

        assert post.published_on() == date(2024, 2, 29)

    def test_round_trip(self):
        """Stored posts load back unchanged."""
        post = BlogPost(id="1", title="T", date="2024-01-01", content="a\nb", excerpt="e")

        assert BlogPost.from_dict(post.to_dict()) == post

    def test_validate(self):
        """Title, excerpt, content and a parseable date are required."""
        assert BlogPost(id="1", title="T", date="2024-01-01", content="c", excerpt="e").validate() is True
        assert BlogPost(id="1", title="", date="2024-01-01", content="c", excerpt="e").validate() is False
        assert BlogPost(id="1", title="T", date="yesterday", content="c", excerpt="e").validate() is False

    def test_missing_fields(self):
        """Missing fields are reported by name."""
        post = BlogPost(id="1", title="T", date="2024-01-01", content=" ", excerpt="")

        assert post.missing_fields() == ["excerpt", "content"]

    def test_paragraphs(self):
        """Content is split into paragraphs on newlines."""
        post = BlogPost(id="1", title="T", date="2024-01-01", content="first\nsecond\n\nfourth", excerpt="e")

        assert post.paragraphs() == ["first", "second", "", "fourth"]
