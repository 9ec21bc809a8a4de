"""Behaviour shared by every BlogStorage implementation."""

import pytest

from inkwell.errors import ConflictError, NotFoundError
from inkwell.repositories import BlogStorage
from inkwell.schemas import BlogCreate, BlogUpdate, User, UserCreate


def blog_payload(**overrides: object) -> BlogCreate:
    data: dict[str, object] = {"title": "T", "content": "C"}
    data.update(overrides)
    return BlogCreate.model_validate(data)


class TestUsers:
    """Tests for user creation and lookup."""

    @pytest.mark.asyncio
    async def test_lookups_agree(self, backend: BlogStorage, author: User) -> None:
        """Test that id and e-mail lookups return the same record."""
        by_id = await backend.get_user(author.id)
        by_email = await backend.get_user_by_email("a@x.com")

        assert by_id == by_email == author
        assert author.name == "A"
        assert author.id

    @pytest.mark.asyncio
    async def test_provided_id_is_kept(self, backend: BlogStorage) -> None:
        """Test that a caller-supplied id is stored as given."""
        user = await backend.create_user(UserCreate(id="firebase-uid-1", email="u@x.com", name="U"))

        assert user.id == "firebase-uid-1"
        assert await backend.get_user("firebase-uid-1") == user

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, backend: BlogStorage, author: User) -> None:
        """Test that a second user with the same e-mail conflicts."""
        with pytest.raises(ConflictError):
            await backend.create_user(UserCreate(email="a@x.com", name="Another"))

    @pytest.mark.asyncio
    async def test_duplicate_id_conflicts(self, backend: BlogStorage, author: User) -> None:
        """Test that a second user with the same id conflicts."""
        with pytest.raises(ConflictError):
            await backend.create_user(UserCreate(id=author.id, email="new@x.com", name="New"))

    @pytest.mark.asyncio
    async def test_unknown_user_is_none(self, backend: BlogStorage) -> None:
        """Test that unknown users read as None."""
        assert await backend.get_user("missing") is None
        assert await backend.get_user_by_email("missing@x.com") is None

    @pytest.mark.asyncio
    async def test_mixed_case_email_lookup(self, backend: BlogStorage) -> None:
        """Test that a user is found by the exact address they registered with."""
        user = await backend.create_user(UserCreate(email="Ada@Example.COM", name="Ada"))

        assert await backend.get_user_by_email("Ada@Example.COM") == user
        assert await backend.get_user_by_email("Ada@example.com") == user
        assert await backend.get_user(user.id) == user

    @pytest.mark.asyncio
    async def test_domain_case_does_not_bypass_uniqueness(
        self,
        backend: BlogStorage,
        author: User,
    ) -> None:
        """Test that an address differing only in domain case conflicts."""
        with pytest.raises(ConflictError):
            await backend.create_user(UserCreate(email="a@X.COM", name="Another"))


class TestCreateAndRead:
    """Tests for blog creation and single-blog reads."""

    @pytest.mark.asyncio
    async def test_defaults_filled_in(self, backend: BlogStorage, author: User) -> None:
        """Test that omitted optional fields get their defaults."""
        blog = await backend.create_blog(author.id, blog_payload())
        stored = await backend.get_blog(blog.id)

        assert stored == blog
        assert stored is not None
        assert stored.title == "T"
        assert stored.content == "C"
        assert stored.author_id == author.id
        assert stored.excerpt == "C"
        assert stored.category is None
        assert stored.theme == "modern"
        assert stored.tags == []
        assert stored.is_published is False
        assert stored.views == 0
        assert stored.media_urls == []
        assert stored.created_at == stored.updated_at

    @pytest.mark.asyncio
    async def test_specified_fields_round_trip(self, backend: BlogStorage, author: User) -> None:
        """Test that every supplied field is stored."""
        payload = blog_payload(
            title="Trip notes",
            content="<p>Day one</p>",
            excerpt="Short",
            category="travel",
            theme="creative",
            tags=["b", "a"],
            isPublished=True,
            mediaUrls=["https://cdn.example.com/1.png"],
        )
        blog = await backend.create_blog(author.id, payload)
        stored = await backend.get_blog(blog.id)

        assert stored is not None
        assert stored.title == "Trip notes"
        assert stored.content == "<p>Day one</p>"
        assert stored.excerpt == "Short"
        assert stored.category == "travel"
        assert stored.theme == "creative"
        assert stored.tags == ["b", "a"]
        assert stored.is_published is True
        assert stored.media_urls == ["https://cdn.example.com/1.png"]

    @pytest.mark.asyncio
    async def test_unknown_author_rejected(self, backend: BlogStorage) -> None:
        """Test that a blog for an unknown author raises NotFoundError."""
        with pytest.raises(NotFoundError):
            await backend.create_blog("nobody", blog_payload())

    @pytest.mark.asyncio
    async def test_unknown_blog_is_none(self, backend: BlogStorage) -> None:
        """Test that a missing blog reads as None."""
        assert await backend.get_blog("does-not-exist") is None
        assert await backend.get_blog_with_author("does-not-exist") is None

    @pytest.mark.asyncio
    async def test_blog_with_author(self, backend: BlogStorage, author: User) -> None:
        """Test that the joined read carries the author record."""
        blog = await backend.create_blog(author.id, blog_payload())

        joined = await backend.get_blog_with_author(blog.id)

        assert joined is not None
        assert joined.id == blog.id
        assert joined.author == author


class TestUpdate:
    """Tests for partial updates."""

    @pytest.mark.asyncio
    async def test_merges_only_set_fields(self, backend: BlogStorage, author: User) -> None:
        """Test that only the supplied fields change."""
        blog = await backend.create_blog(author.id, blog_payload(category="food", tags=["x"]))

        updated = await backend.update_blog(blog.id, BlogUpdate(title="New title"))

        assert updated is not None
        assert updated.title == "New title"
        assert updated.content == blog.content
        assert updated.category == "food"
        assert updated.tags == ["x"]
        assert updated.author_id == author.id
        assert updated.views == 0
        assert updated.created_at == blog.created_at
        assert await backend.get_blog(blog.id) == updated

    @pytest.mark.asyncio
    async def test_updated_at_never_decreases(self, backend: BlogStorage, author: User) -> None:
        """Test that updatedAt never moves backwards."""
        blog = await backend.create_blog(author.id, blog_payload())
        previous = blog.updated_at

        for i in range(3):
            updated = await backend.update_blog(blog.id, BlogUpdate(content=f"v{i}"))
            assert updated is not None
            assert updated.created_at <= updated.updated_at
            assert updated.updated_at >= previous
            previous = updated.updated_at

    @pytest.mark.asyncio
    async def test_can_clear_nullable_fields(self, backend: BlogStorage, author: User) -> None:
        """Test that an explicit null clears a nullable field."""
        blog = await backend.create_blog(author.id, blog_payload(category="food"))

        updated = await backend.update_blog(blog.id, BlogUpdate(category=None))

        assert updated is not None
        assert updated.category is None

    @pytest.mark.asyncio
    async def test_unknown_blog_is_none(self, backend: BlogStorage) -> None:
        """Test that updating a missing blog returns None."""
        assert await backend.update_blog("missing", BlogUpdate(title="x")) is None


class TestDelete:
    """Tests for owner-only deletion."""

    @pytest.mark.asyncio
    async def test_non_owner_cannot_delete(
        self,
        backend: BlogStorage,
        author: User,
        other_author: User,
    ) -> None:
        """Test that a non-owner delete leaves the blog in place."""
        blog = await backend.create_blog(author.id, blog_payload())

        assert await backend.delete_blog(blog.id, other_author.id) is False
        assert await backend.get_blog(blog.id) == blog

    @pytest.mark.asyncio
    async def test_owner_deletes(self, backend: BlogStorage, author: User) -> None:
        """Test that the owner can delete a blog."""
        blog = await backend.create_blog(author.id, blog_payload())

        assert await backend.delete_blog(blog.id, author.id) is True
        assert await backend.get_blog(blog.id) is None

    @pytest.mark.asyncio
    async def test_unknown_blog(self, backend: BlogStorage, author: User) -> None:
        """Test that deleting a missing blog returns False."""
        assert await backend.delete_blog("missing", author.id) is False


class TestViews:
    """Tests for the view counter."""

    @pytest.mark.asyncio
    async def test_each_increment_adds_one(self, backend: BlogStorage, author: User) -> None:
        """Test that every increment adds exactly one view."""
        blog = await backend.create_blog(author.id, blog_payload())

        for _ in range(5):
            await backend.increment_blog_views(blog.id)

        stored = await backend.get_blog(blog.id)
        assert stored is not None
        assert stored.views == 5

    @pytest.mark.asyncio
    async def test_unknown_blog_is_noop(self, backend: BlogStorage) -> None:
        """Test that incrementing a missing blog does nothing."""
        await backend.increment_blog_views("missing")
        assert await backend.get_blog("missing") is None


class TestListings:
    """Tests for published and per-author listings."""

    @pytest.mark.asyncio
    async def test_published_only_and_newest_first(
        self,
        backend: BlogStorage,
        author: User,
        other_author: User,
    ) -> None:
        """Test that listings hold published blogs, newest first."""
        for i in range(4):
            await backend.create_blog(author.id, blog_payload(title=f"pub {i}", isPublished=True))
        await backend.create_blog(author.id, blog_payload(title="draft"))
        await backend.create_blog(other_author.id, blog_payload(title="other", isPublished=True))

        blogs = await backend.get_published_blogs()

        assert len(blogs) == 5
        assert all(b.is_published for b in blogs)
        created = [b.created_at for b in blogs]
        assert created == sorted(created, reverse=True)
        assert {b.author.id for b in blogs} == {author.id, other_author.id}

    @pytest.mark.asyncio
    async def test_window_applies_after_filtering(self, backend: BlogStorage, author: User) -> None:
        """Test that limit and offset apply to published blogs only."""
        for i in range(5):
            await backend.create_blog(author.id, blog_payload(title=f"pub {i}", isPublished=True))
            await backend.create_blog(author.id, blog_payload(title=f"draft {i}"))

        everything = await backend.get_published_blogs(limit=100)
        page = await backend.get_published_blogs(limit=2, offset=1)

        assert [b.id for b in page] == [b.id for b in everything[1:3]]
        assert await backend.get_published_blogs(limit=10, offset=5) == []

    @pytest.mark.asyncio
    async def test_author_listing_includes_drafts(
        self,
        backend: BlogStorage,
        author: User,
        other_author: User,
    ) -> None:
        """Test that author listings include drafts, most recently updated first."""
        first = await backend.create_blog(author.id, blog_payload(title="first"))
        second = await backend.create_blog(
            author.id,
            blog_payload(title="second", isPublished=True),
        )
        await backend.create_blog(other_author.id, blog_payload(title="not mine"))
        await backend.update_blog(first.id, BlogUpdate(content="edited"))

        blogs = await backend.get_blogs_by_author(author.id)

        assert [b.id for b in blogs] == [first.id, second.id]
        assert await backend.get_blogs_by_author("nobody") == []


class TestPublishScenario:
    """Tests for the publish lifecycle."""

    @pytest.mark.asyncio
    async def test_lifecycle(self, backend: BlogStorage) -> None:
        """Test the create, publish and delete flow across two users."""
        a = await backend.create_user(UserCreate(email="a@x.com", name="A"))
        c = await backend.create_user(UserCreate(email="c@x.com", name="C"))

        blog = await backend.create_blog(a.id, blog_payload())
        assert blog.is_published is False
        assert blog.views == 0

        published = await backend.update_blog(blog.id, BlogUpdate(is_published=True))
        assert published is not None
        assert published.is_published is True
        assert blog.id in [b.id for b in await backend.get_published_blogs()]

        assert await backend.delete_blog(blog.id, c.id) is False
        assert await backend.delete_blog(blog.id, a.id) is True
        assert await backend.get_blog(blog.id) is None

    @pytest.mark.asyncio
    async def test_ping(self, backend: BlogStorage) -> None:
        """Test that a healthy backend answers ping."""
        assert await backend.ping() is True
