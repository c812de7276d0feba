from typing import List, Optional

from services.content.app import store
from services.content.app.exceptions import ValidationError
from services.content.app.repositories.base import CollectionRepository
from shared.schemas.content import Comment


class CommentRepository(CollectionRepository[Comment]):
    collection = store.COMMENTS
    model = Comment

    async def list(self, article_id: Optional[str] = None) -> List[Comment]:
        """Comments newest first, optionally for one article."""
        items = await self._collection()
        if article_id:
            items = [c for c in items if c.article_id == article_id]
        return [self._copy(c) for c in sorted(items, key=lambda c: c.created_at, reverse=True)]

    async def create(self, comment: Comment) -> Comment:
        if not comment.content.strip():
            raise ValidationError("Comment cannot be empty.")
        return await self.add(comment, at_head=True)

    async def delete(self, comment_id: str) -> bool:
        return await self.remove(comment_id)
