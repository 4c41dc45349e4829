import logging
from typing import List, Union, Dict, Any

from google.api_core.exceptions import NotFound
from google.cloud import firestore
from google.cloud.firestore_v1 import FieldFilter
from pydantic import ValidationError

from models.post import Post, PostUpdate, PageRequest
from services.exceptions import PostNotFound, InvalidPagination

logger = logging.getLogger(__name__)

LIKES = "likes"
DISLIKES = "dislikes"


def likes_score(post_data: Dict[str, Any]) -> int:
    """Score of a stored post: number of likes minus number of dislikes"""
    likes = post_data.get(LIKES) or []
    dislikes = post_data.get(DISLIKES) or []
    return len(likes) - len(dislikes)


class PostStore:
    def __init__(self, collection, client, page_size: int = 20):
        """
        Data access for posts

        Args:
            collection: the Firestore collection holding post documents
            client: the Firestore client the collection belongs to, used to open transactions
            page_size: default page size for list_page
        """
        self.collection = collection
        self.client = client
        self.page_size = page_size

    async def list_page(self, page: Union[int, str] = 1, limit: Union[int, str, None] = None) -> List[Post]:
        """Get one page of posts, oldest first"""
        if limit is None:
            limit = self.page_size
        try:
            request = PageRequest(page=page, limit=limit)
        except ValidationError as e:
            raise InvalidPagination(f"Invalid pagination (page={page!r}, limit={limit!r})") from e

        query = self.collection \
            .order_by("createdAt", direction=firestore.Query.ASCENDING) \
            .offset(request.offset) \
            .limit(request.limit)

        return [Post.from_snapshot(doc) async for doc in query.stream()]

    async def list_by_author(self, author_id: str) -> List[Post]:
        """Get all posts written by a user"""
        query = self.collection.where(filter=FieldFilter("authorId", "==", author_id))
        return [Post.from_snapshot(doc) async for doc in query.stream()]

    async def get_by_id(self, post_id: str) -> Post:
        snapshot = await self.collection.document(post_id).get()
        if not snapshot.exists:
            logger.warning("Post %s not found", post_id)
            raise PostNotFound(post_id)
        return Post.from_snapshot(snapshot)

    async def search(self, query: str) -> List[Post]:
        """
        Find posts whose title or text contains the query (case-insensitive).

        Streams the whole collection and filters in memory, so the cost grows
        with the collection size.
        """
        q_lower = query.lower()

        results = []
        async for doc in self.collection.stream():
            data = doc.to_dict() or {}
            title = data.get("title", "") or ""
            text = data.get("text", "") or ""
            if q_lower in title.lower() or q_lower in text.lower():
                results.append(Post.from_snapshot(doc))

        return results

    async def create(self, post: Post) -> Post:
        """Store a new post and return it with the id Firestore assigned"""
        _, post_ref = await self.collection.add(post.to_document())
        logger.info("Created post %s by %s", post_ref.id, post.authorId)
        return post.model_copy(update={"id": post_ref.id})

    async def update(self, post_id: str, fields: Union[PostUpdate, Dict[str, Any]]) -> None:
        """
        Merge the given fields into an existing post.

        Only title, text and mediaUrl can be changed here. The id, createdAt and
        authorId never change after creation, and likes, dislikes and
        likesScore only change through the vote operations so the score stays
        consistent with the lists.
        """
        if not isinstance(fields, PostUpdate):
            fields = PostUpdate(**fields)
        changes = fields.model_dump(exclude_unset=True)

        if not changes:
            # Nothing to write, but a missing post is still an error
            await self.get_by_id(post_id)
            return

        try:
            await self.collection.document(post_id).update(changes)
        except NotFound as e:
            logger.warning("Post %s not found for update", post_id)
            raise PostNotFound(post_id) from e
        logger.info("Updated post %s: %s", post_id, sorted(changes))

    async def delete(self, post_id: str) -> None:
        """Delete a post; deleting a missing post is not an error"""
        await self.collection.document(post_id).delete()
        logger.info("Deleted post %s", post_id)

    async def recompute_score(self, post_id: str) -> int:
        """Recalculate and store likesScore from the current likes and dislikes"""
        post_ref = self.collection.document(post_id)

        @firestore.async_transactional
        async def update_in_transaction(transaction, post_ref):
            snapshot = await post_ref.get(transaction=transaction)
            if not snapshot.exists:
                raise PostNotFound(post_id)

            score = likes_score(snapshot.to_dict())
            transaction.update(post_ref, {"likesScore": score})
            return score

        return await update_in_transaction(self.client.transaction(), post_ref)

    async def add_like(self, post_id: str, user_id: str) -> int:
        return await self._vote(post_id, LIKES, user_id, add=True)

    async def remove_like(self, post_id: str, user_id: str) -> int:
        return await self._vote(post_id, LIKES, user_id, add=False)

    async def add_dislike(self, post_id: str, user_id: str) -> int:
        return await self._vote(post_id, DISLIKES, user_id, add=True)

    async def remove_dislike(self, post_id: str, user_id: str) -> int:
        return await self._vote(post_id, DISLIKES, user_id, add=False)

    async def _vote(self, post_id: str, field: str, user_id: str, add: bool) -> int:
        """
        Add or remove a user in the likes/dislikes list and store the new score.

        The list change and the score are written in one transaction, so
        concurrent votes on the same post are retried instead of overwriting
        each other. Adding does not deduplicate, and removing drops every
        entry equal to user_id.

        Returns:
            The post's new likesScore
        """
        post_ref = self.collection.document(post_id)

        @firestore.async_transactional
        async def update_in_transaction(transaction, post_ref):
            snapshot = await post_ref.get(transaction=transaction)
            if not snapshot.exists:
                raise PostNotFound(post_id)

            post_data = snapshot.to_dict()
            votes = list(post_data.get(field) or [])
            if add:
                votes.append(user_id)
            else:
                votes = [vote for vote in votes if vote != user_id]

            post_data[field] = votes
            score = likes_score(post_data)
            transaction.update(post_ref, {field: votes, "likesScore": score})
            return score

        try:
            score = await update_in_transaction(self.client.transaction(), post_ref)
        except PostNotFound:
            logger.warning("Cannot change %s of missing post %s", field, post_id)
            raise

        logger.debug("%s %s %s on post %s, score is now %d",
                     "Added" if add else "Removed", field, user_id, post_id, score)
        return score
