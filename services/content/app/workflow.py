"""Editorial workflow for articles.

Status lifecycle::

    draft -> pending -> published -> archived
                    \\-> rejected -> pending | draft

Authors write drafts and submit them; editors publish or reject pending
pieces; published pieces are archived rather than deleted. Every review
outcome notifies the author, and every new submission notifies the editorial
desk.
"""

import uuid
from datetime import datetime, timezone
from typing import Dict, FrozenSet, List, Optional

from services.content.app import permissions
from services.content.app.exceptions import InvalidTransitionError, ValidationError
from services.content.app.metrics import ARTICLE_STATUS_CHANGES
from services.content.app.repositories.access_logs import AccessLogRepository
from services.content.app.repositories.articles import ArticleRepository, slugify
from services.content.app.repositories.notifications import NotificationRepository
from shared.app_logging.logger import get_logger
from shared.schemas.content import Article, ArticleDraft, ArticleReactions, ArticleStatus, User

logger = get_logger(__name__)

TRANSITIONS: Dict[str, FrozenSet[str]] = {
    "draft": frozenset({"pending"}),
    "pending": frozenset({"published", "rejected"}),
    "rejected": frozenset({"pending", "draft"}),
    "published": frozenset({"archived"}),
    "archived": frozenset(),
}

REVIEW_DECISIONS = frozenset({"published", "rejected"})
ARCHIVE_FEEDBACK = "Archived by admin/author"
# Statuses whose arrival is reported back to the author
AUTHOR_NOTICES = frozenset({"published", "rejected", "archived"})

# Author dashboard ordering
SUBMISSION_ORDER = {"draft": 1, "pending": 2, "rejected": 3, "published": 4, "archived": 5}


def check_transition(current: str, target: str) -> None:
    if target not in TRANSITIONS.get(current, frozenset()):
        raise InvalidTransitionError(f"Cannot move an article from {current} to {target}.")


def validate_article_text(title: str, content: str) -> None:
    if not (title or "").strip() or not (content or "").strip():
        raise ValidationError("Title and Content are required.")


class EditorialWorkflow:
    def __init__(
        self,
        articles: ArticleRepository,
        notifications: NotificationRepository,
        access_logs: AccessLogRepository,
        editor_user_id: str = "2",
        default_image_url: str = "",
    ):
        self.articles = articles
        self.notifications = notifications
        self.access_logs = access_logs
        self.editor_user_id = editor_user_id
        self.default_image_url = default_image_url

    async def _authorize(self, actor: Optional[User], allowed: bool, action: str) -> None:
        await permissions.enforce(self.access_logs, actor, allowed, action)

    async def _announce_submission(self, article: Article) -> None:
        await self.notifications.notify(
            self.editor_user_id,
            f"New submission from {article.author_name}: {article.title}",
            "info",
        )

    async def _notify_author(self, article: Article, status: str, feedback: Optional[str]) -> None:
        if status == "published":
            message = f'Your article "{article.title}" has been published!'
            kind = "success"
        else:
            message = f'Your article "{article.title}" was {status}. Feedback: {feedback or "None"}'
            kind = "warning"
        await self.notifications.notify(article.author_id, message, kind)

    async def create_article(self, draft: ArticleDraft, actor: Optional[User] = None) -> Article:
        validate_article_text(draft.title, draft.content)
        await self._authorize(
            actor,
            permissions.can_write(actor) and (actor.id == draft.author_id or permissions.is_editor(actor)),
            "write articles",
        )
        slug = slugify(draft.title)
        if not slug:
            raise ValidationError("Title must contain at least one letter or digit.")

        article = Article(
            id=str(uuid.uuid4()),
            title=draft.title.strip(),
            slug=slug,
            excerpt=draft.excerpt,
            content=draft.content,
            author_id=draft.author_id,
            author_name=draft.author_name,
            category_slug=draft.category_slug,
            image_url=draft.image_url or self.default_image_url,
            video_url=draft.video_url,
            published_at=datetime.now(timezone.utc),
            status=draft.status,
            views=0,
            reactions=ArticleReactions(),
            is_member_only=draft.is_member_only,
            is_featured=draft.is_featured,
        )
        article = await self.articles.insert(article)
        logger.info(f"Created article {article.id} ({article.slug}) as {article.status}")
        await self._announce_submission(article)
        return article

    async def update_article(self, article: Article, actor: Optional[User] = None) -> Optional[Article]:
        """Full replace by id. Returns ``None`` if the article does not exist."""
        validate_article_text(article.title, article.content)
        if not slugify(article.slug) == article.slug or not article.slug:
            raise ValidationError("Slug may only contain lowercase letters, digits and single hyphens.")

        existing = await self.articles.get(article.id)
        if existing is None:
            return None
        await self._authorize(actor, permissions.can_edit_article(actor, existing), "edit this article")

        def check(previous: Article, incoming: Article) -> None:
            if incoming.status != previous.status:
                check_transition(previous.status, incoming.status)

        result = await self.articles.update(article, check)
        if result is None:
            return None
        previous, updated = result
        if updated.status != previous.status:
            ARTICLE_STATUS_CHANGES.labels(status=updated.status).inc()
            logger.info(f"Article {updated.id} is now {updated.status}")
            if updated.status == "pending":
                await self._announce_submission(updated)
            elif updated.status in AUTHOR_NOTICES:
                await self._notify_author(updated, updated.status, updated.feedback)
        return updated

    async def delete_article(self, article_id: str, actor: Optional[User] = None) -> bool:
        existing = await self.articles.get(article_id)
        if existing is None:
            return False
        await self._authorize(actor, permissions.can_delete_article(actor, existing), "delete this article")
        removed = await self.articles.remove(article_id)
        if removed:
            logger.info(f"Deleted article {article_id}")
        return removed

    async def _transition(self, article_id: str, status: ArticleStatus, feedback: Optional[str]) -> Optional[Article]:
        def change(article: Article) -> None:
            check_transition(article.status, status)
            article.status = status
            if feedback:
                article.feedback = feedback
            if status == "pending":
                article.published_at = datetime.now(timezone.utc)

        updated = await self.articles.modify(article_id, change)
        if updated is not None:
            ARTICLE_STATUS_CHANGES.labels(status=status).inc()
            logger.info(f"Article {article_id} is now {status}")
        return updated

    async def _status_gate(self, actor: Optional[User], article_id: str, status: str) -> None:
        if actor is None:
            return
        existing = await self.articles.get(article_id)
        if existing is None:
            return
        is_author = actor.id == existing.author_id
        if status in REVIEW_DECISIONS:
            allowed = permissions.is_editor(actor)
        elif status == "archived":
            allowed = permissions.is_privileged(actor) or is_author
        else:
            allowed = permissions.is_editor(actor) or is_author
        await self._authorize(actor, allowed, f"mark this article as {status}")

    async def set_article_status(
        self,
        article_id: str,
        status: ArticleStatus,
        feedback: Optional[str] = None,
        actor: Optional[User] = None,
    ) -> Optional[Article]:
        """Move an article to ``status`` and tell its author."""
        await self._status_gate(actor, article_id, status)
        article = await self._transition(article_id, status, feedback)
        if article is None:
            return None
        await self._notify_author(article, status, feedback)
        return article

    async def submit_for_review(self, article_id: str, actor: Optional[User] = None) -> Optional[Article]:
        await self._status_gate(actor, article_id, "pending")
        article = await self._transition(article_id, "pending", None)
        if article is not None:
            await self._announce_submission(article)
        return article

    async def review_decision(
        self,
        article_id: str,
        decision: str,
        feedback: Optional[str] = None,
        actor: Optional[User] = None,
    ) -> Optional[Article]:
        if decision not in REVIEW_DECISIONS:
            raise ValidationError(f"Review decision must be one of {sorted(REVIEW_DECISIONS)}.")
        return await self.set_article_status(article_id, decision, feedback, actor)

    async def archive(self, article_id: str, actor: Optional[User] = None) -> Optional[Article]:
        return await self.set_article_status(article_id, "archived", ARCHIVE_FEEDBACK, actor)

    async def toggle_feature(self, article_id: str, actor: Optional[User] = None) -> Optional[Article]:
        await self._authorize(actor, permissions.is_privileged(actor), "feature articles")

        def change(article: Article) -> None:
            if article.status != "published":
                raise InvalidTransitionError("Only published articles can be featured.")
            article.is_featured = not article.is_featured

        return await self.articles.modify(article_id, change)

    async def review_queue(self, actor: Optional[User] = None) -> List[Article]:
        """Pending submissions, oldest first."""
        await self._authorize(actor, permissions.is_editor(actor), "open the review queue")
        pending = await self.articles.list_by_status("pending")
        return sorted(pending, key=lambda a: a.published_at)

    async def my_submissions(self, author_id: str, include_archived: bool = False) -> List[Article]:
        """An author's pieces, drafts first and archived last."""
        articles = await self.articles.list_by_author(author_id, include_archived)
        return sorted(articles, key=lambda a: SUBMISSION_ORDER[a.status])
