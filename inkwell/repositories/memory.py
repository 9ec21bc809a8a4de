"""In-memory storage backend for development and tests."""

from asyncio import Lock
from logging import getLogger
from uuid import uuid4

from inkwell.configs import DEFAULT_PAGE_SIZE, file_logger
from inkwell.errors import ConflictError, NotFoundError
from inkwell.schemas import Blog, BlogCreate, BlogUpdate, BlogWithAuthor, User, UserCreate
from inkwell.utils.helpers import normalize_email, utc_now

logger = file_logger(getLogger(__name__))


class MemoryStorage:
    """
    Process-local storage keyed by ID.

    Every operation runs under a single ``asyncio.Lock``, which makes view
    increments and uniqueness checks atomic within the event loop. Records
    are copied on the way in and out so callers cannot mutate stored state.
    """

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._blogs: dict[str, Blog] = {}
        self._lock = Lock()

    async def get_user(self, user_id: str) -> User | None:
        async with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user else None

    async def get_user_by_email(self, email: str) -> User | None:
        async with self._lock:
            user = self._find_user_by_email(normalize_email(email))
            return user.model_copy() if user else None

    async def create_user(self, data: UserCreate) -> User:
        async with self._lock:
            user_id = data.id or str(uuid4())
            if user_id in self._users:
                mssg = "User ID already exists"
                raise ConflictError(mssg)
            if self._find_user_by_email(data.email):
                mssg = "Email already registered"
                raise ConflictError(mssg)

            user = User(id=user_id, email=data.email, name=data.name, created_at=utc_now())
            self._users[user_id] = user
            logger.info(f"User created: {user_id}")
            return user.model_copy()

    async def get_blog(self, blog_id: str) -> Blog | None:
        async with self._lock:
            blog = self._blogs.get(blog_id)
            return blog.model_copy(deep=True) if blog else None

    async def get_blog_with_author(self, blog_id: str) -> BlogWithAuthor | None:
        async with self._lock:
            blog = self._blogs.get(blog_id)
            if blog is None:
                return None
            return self._with_author(blog)

    async def get_blogs_by_author(self, author_id: str) -> list[Blog]:
        async with self._lock:
            blogs = [b for b in self._blogs.values() if b.author_id == author_id]
            blogs.sort(key=lambda b: b.updated_at, reverse=True)
            return [b.model_copy(deep=True) for b in blogs]

    async def get_published_blogs(
        self,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[BlogWithAuthor]:
        async with self._lock:
            published = sorted(
                (b for b in self._blogs.values() if b.is_published),
                key=lambda b: b.created_at,
                reverse=True,
            )
            joined = [j for b in published if (j := self._with_author(b)) is not None]
            return joined[offset : offset + limit]

    async def create_blog(self, author_id: str, data: BlogCreate) -> Blog:
        async with self._lock:
            if author_id not in self._users:
                mssg = "Author not found"
                raise NotFoundError(mssg)

            now = utc_now()
            blog = Blog(
                id=str(uuid4()),
                author_id=author_id,
                views=0,
                created_at=now,
                updated_at=now,
                **data.model_dump(),
            )
            self._blogs[blog.id] = blog
            return blog.model_copy(deep=True)

    async def update_blog(self, blog_id: str, data: BlogUpdate) -> Blog | None:
        async with self._lock:
            blog = self._blogs.get(blog_id)
            if blog is None:
                return None

            updated = blog.model_copy(
                update={**data.changes(), "updated_at": max(utc_now(), blog.updated_at)},
                deep=True,
            )
            self._blogs[blog_id] = updated
            return updated.model_copy(deep=True)

    async def delete_blog(self, blog_id: str, requesting_author_id: str) -> bool:
        async with self._lock:
            blog = self._blogs.get(blog_id)
            if blog is None or blog.author_id != requesting_author_id:
                return False
            del self._blogs[blog_id]
            return True

    async def increment_blog_views(self, blog_id: str) -> None:
        async with self._lock:
            blog = self._blogs.get(blog_id)
            if blog is not None:
                self._blogs[blog_id] = blog.model_copy(update={"views": blog.views + 1})

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        logger.info("Memory storage released")

    def _find_user_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def _with_author(self, blog: Blog) -> BlogWithAuthor | None:
        author = self._users.get(blog.author_id)
        if author is None:
            return None
        return BlogWithAuthor(**blog.model_dump(), author=author.model_copy())
