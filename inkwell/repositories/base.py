"""Protocol definitions for blog storage backends."""

from typing import Protocol, runtime_checkable

from inkwell.configs import DEFAULT_PAGE_SIZE
from inkwell.schemas import Blog, BlogCreate, BlogUpdate, BlogWithAuthor, User, UserCreate


@runtime_checkable
class BlogStorage(Protocol):
    """
    Protocol for blog storage implementations.

    ``MemoryStorage``, ``SQLStorage`` and ``FirestoreStorage`` conform to
    this protocol; exactly one of them is selected at startup. Lookups
    return ``None`` on a miss instead of raising.
    """

    async def get_user(self, user_id: str) -> User | None:
        """Get a user by ID."""
        ...

    async def get_user_by_email(self, email: str) -> User | None:
        """Get a user by e-mail address."""
        ...

    async def create_user(self, data: UserCreate) -> User:
        """Create a user, raising ``ConflictError`` on a duplicate e-mail or ID."""
        ...

    async def get_blog(self, blog_id: str) -> Blog | None:
        """Get a blog by ID."""
        ...

    async def get_blog_with_author(self, blog_id: str) -> BlogWithAuthor | None:
        """Get a blog joined with its author; ``None`` if either is missing."""
        ...

    async def get_blogs_by_author(self, author_id: str) -> list[Blog]:
        """List every blog of an author, most recently updated first."""
        ...

    async def get_published_blogs(
        self,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[BlogWithAuthor]:
        """List published blogs, newest first, windowed after filtering."""
        ...

    async def create_blog(self, author_id: str, data: BlogCreate) -> Blog:
        """Create a blog, raising ``NotFoundError`` for an unknown author."""
        ...

    async def update_blog(self, blog_id: str, data: BlogUpdate) -> Blog | None:
        """Merge the explicitly set fields of ``data`` into a blog."""
        ...

    async def delete_blog(self, blog_id: str, requesting_author_id: str) -> bool:
        """Delete a blog owned by the requester; ``False`` otherwise."""
        ...

    async def increment_blog_views(self, blog_id: str) -> None:
        """Atomically add one to the view counter; no-op for unknown IDs."""
        ...

    async def ping(self) -> bool:
        """Check if the backend is reachable."""
        ...

    async def close(self) -> None:
        """Release backend connections."""
        ...
