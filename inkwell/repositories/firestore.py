"""
Document storage backend on Google Cloud Firestore.

Collections
-----------
- ``users``: one document per user, keyed by user ID.
- ``user_emails``: e-mail uniqueness index, keyed by the SHA-256 of the
  address; created in the same batch as the user document.
- ``blogs``: one document per blog, keyed by blog ID.

Documents use the camelCase wire field names. Published listings need the
composite index ``blogs(isPublished ASC, createdAt DESC)`` and author
listings ``blogs(authorId ASC, updatedAt DESC)``.
"""

from contextlib import suppress
from hashlib import sha256
from logging import getLogger
from typing import Any, Self
from uuid import uuid4

from firebase_admin import firestore_async
from google.api_core.exceptions import Conflict, GoogleAPICallError, NotFound
from google.cloud.firestore import (
    AsyncClient,
    AsyncDocumentReference,
    AsyncTransaction,
    Increment,
    Query,
    async_transactional,
)
from google.cloud.firestore_v1.base_query import FieldFilter

from inkwell.configs import DEFAULT_PAGE_SIZE, Settings, file_logger
from inkwell.errors import ConflictError, NotFoundError
from inkwell.schemas import Blog, BlogCreate, BlogUpdate, BlogWithAuthor, User, UserCreate
from inkwell.services.firebase import get_firebase_app
from inkwell.utils.helpers import as_utc, normalize_email, utc_now

logger = file_logger(getLogger(__name__))

USERS_COLLECTION = "users"
USER_EMAILS_COLLECTION = "user_emails"
BLOGS_COLLECTION = "blogs"


def email_key(email: str) -> str:
    return sha256(normalize_email(email).encode("utf-8")).hexdigest()


def user_from_doc(doc_id: str, data: dict[str, Any]) -> User:
    return User.model_validate({**data, "id": doc_id})


def blog_from_doc(doc_id: str, data: dict[str, Any]) -> Blog:
    return Blog.model_validate({**data, "id": doc_id})


class FirestoreStorage:
    """Storage backed by Firestore through the async client."""

    def __init__(self, client: AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, config: Settings) -> Self:
        app = get_firebase_app(config)
        return cls(firestore_async.client(app=app))

    def _users(self):
        return self._client.collection(USERS_COLLECTION)

    def _blogs(self):
        return self._client.collection(BLOGS_COLLECTION)

    async def get_user(self, user_id: str) -> User | None:
        snapshot = await self._users().document(user_id).get()
        if not snapshot.exists:
            return None
        return user_from_doc(snapshot.id, snapshot.to_dict())

    async def get_user_by_email(self, email: str) -> User | None:
        email_filter = FieldFilter("email", "==", normalize_email(email))
        query = self._users().where(filter=email_filter).limit(1)
        async for snapshot in query.stream():
            return user_from_doc(snapshot.id, snapshot.to_dict())
        return None

    async def create_user(self, data: UserCreate) -> User:
        user = User(
            id=data.id or str(uuid4()),
            email=data.email,
            name=data.name,
            created_at=utc_now(),
        )

        batch = self._client.batch()
        batch.create(
            self._client.collection(USER_EMAILS_COLLECTION).document(email_key(user.email)),
            {"userId": user.id},
        )
        batch.create(
            self._users().document(user.id),
            user.model_dump(by_alias=True, exclude={"id"}),
        )
        try:
            await batch.commit()
        except Conflict as e:
            mssg = "Email already registered"
            raise ConflictError(mssg) from e

        logger.info(f"User created: {user.id}")
        return user

    async def get_blog(self, blog_id: str) -> Blog | None:
        snapshot = await self._blogs().document(blog_id).get()
        if not snapshot.exists:
            return None
        return blog_from_doc(snapshot.id, snapshot.to_dict())

    async def get_blog_with_author(self, blog_id: str) -> BlogWithAuthor | None:
        blog = await self.get_blog(blog_id)
        if blog is None:
            return None
        author = await self.get_user(blog.author_id)
        if author is None:
            return None
        return BlogWithAuthor(**blog.model_dump(), author=author)

    async def get_blogs_by_author(self, author_id: str) -> list[Blog]:
        query = self._blogs().where(filter=FieldFilter("authorId", "==", author_id)).order_by(
            "updatedAt",
            direction=Query.DESCENDING,
        )
        return [blog_from_doc(s.id, s.to_dict()) async for s in query.stream()]

    async def get_published_blogs(
        self,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[BlogWithAuthor]:
        query = (
            self._blogs()
            .where(filter=FieldFilter("isPublished", "==", True))
            .order_by("createdAt", direction=Query.DESCENDING)
            .offset(offset)
            .limit(limit)
        )
        blogs = [blog_from_doc(s.id, s.to_dict()) async for s in query.stream()]
        if not blogs:
            return []

        author_refs = [self._users().document(a) for a in {b.author_id for b in blogs}]
        authors = {
            s.id: user_from_doc(s.id, s.to_dict())
            async for s in self._client.get_all(author_refs)
            if s.exists
        }
        return [
            BlogWithAuthor(**b.model_dump(), author=authors[b.author_id])
            for b in blogs
            if b.author_id in authors
        ]

    async def create_blog(self, author_id: str, data: BlogCreate) -> Blog:
        if await self.get_user(author_id) is None:
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
        await self._blogs().document(blog.id).create(blog.model_dump(by_alias=True, exclude={"id"}))
        return blog

    async def update_blog(self, blog_id: str, data: BlogUpdate) -> Blog | None:
        changes = data.changes()

        @async_transactional
        async def _update_transaction(
            transaction: AsyncTransaction,
            doc_ref: AsyncDocumentReference,
        ) -> Blog | None:
            snapshot = await doc_ref.get(transaction=transaction)
            if not snapshot.exists:
                return None

            current = blog_from_doc(snapshot.id, snapshot.to_dict())
            updated_at = max(utc_now(), as_utc(current.updated_at))
            wire = BlogUpdate.model_construct(**changes).model_dump(
                by_alias=True,
                exclude_unset=True,
            )
            wire["updatedAt"] = updated_at
            transaction.update(doc_ref, wire)
            return current.model_copy(update={**changes, "updated_at": updated_at}, deep=True)

        doc_ref = self._blogs().document(blog_id)
        return await _update_transaction(self._client.transaction(), doc_ref)

    async def delete_blog(self, blog_id: str, requesting_author_id: str) -> bool:
        @async_transactional
        async def _delete_transaction(
            transaction: AsyncTransaction,
            doc_ref: AsyncDocumentReference,
        ) -> bool:
            snapshot = await doc_ref.get(transaction=transaction)
            if not snapshot.exists or snapshot.get("authorId") != requesting_author_id:
                return False
            transaction.delete(doc_ref)
            return True

        doc_ref = self._blogs().document(blog_id)
        return await _delete_transaction(self._client.transaction(), doc_ref)

    async def increment_blog_views(self, blog_id: str) -> None:
        with suppress(NotFound):
            await self._blogs().document(blog_id).update({"views": Increment(1)})

    async def ping(self) -> bool:
        try:
            await self._users().limit(1).get()
        except GoogleAPICallError:
            logger.warning("Firestore ping failed", exc_info=True)
            return False
        return True

    async def close(self) -> None:
        # The client is owned by the Firebase app, released with it
        logger.info("Firestore storage released")
