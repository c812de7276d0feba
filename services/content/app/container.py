"""Composition root for the content core.

``ContentService`` is built once at startup and handed to whatever presents
the content (the HTTP app, tests, scripts). Every operation is a coroutine;
an optional ``actor`` enables the role gates, and omitting it marks a trusted
internal caller.
"""

import uuid
from datetime import date, datetime, timezone
from typing import List, Optional

from services.content.app import assistant, defaults, permissions
from services.content.app.auth import MockAuthProvider
from services.content.app.exceptions import PermissionDeniedError, ValidationError
from services.content.app.moderation import ModerationDesk
from services.content.app.repositories.access_logs import AccessLogRepository
from services.content.app.repositories.articles import ArticleRepository
from services.content.app.repositories.catalog import CatalogRepository
from services.content.app.repositories.comments import CommentRepository
from services.content.app.repositories.events import EventRepository
from services.content.app.repositories.messages import ContactMessageRepository, SubscriberRepository
from services.content.app.repositories.notifications import NotificationRepository
from services.content.app.repositories.pages import PageRepository
from services.content.app.repositories.polls import PollRepository
from services.content.app.repositories.reports import ReportRepository
from services.content.app.search import SearchIndex
from services.content.app.store import KeyValueStore
from services.content.app.system_config import SystemConfigManager, SystemConfigRepository
from services.content.app.workflow import EditorialWorkflow
from shared.app_logging.logger import get_logger
from shared.config.settings import Settings, get_settings
from shared.schemas.content import (
    AccessAction,
    AccessLog,
    Article,
    ArticleDraft,
    ArticleReactions,
    ArticleReport,
    ArticleStatus,
    Comment,
    ContactMessage,
    GalleryAlbum,
    Notification,
    PageConfig,
    PageUpdate,
    Poll,
    PrintEdition,
    SchoolEvent,
    SearchResult,
    SystemConfig,
    SystemConfigUpdate,
    TeamMember,
    User,
    Video,
)
from shared.utils.redis_client import RedisClient

logger = get_logger(__name__)


class ContentService:
    def __init__(self, redis_client: RedisClient, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        content = self.settings.content

        self.store = KeyValueStore(redis_client, prefix=content.key_prefix)
        self.access_logs = AccessLogRepository(self.store, limit=content.access_log_limit)
        self.articles = ArticleRepository(
            self.store, defaults.default_articles, unique_reactions=content.unique_reactions
        )
        self.pages = PageRepository(self.store, defaults.default_pages)
        self.reports = ReportRepository(self.store)
        self.notifications = NotificationRepository(self.store)
        self.comments = CommentRepository(self.store)
        self.events = EventRepository(self.store, defaults.default_events)
        self.polls = PollRepository(self.store, defaults.default_poll)
        self.messages = ContactMessageRepository(self.store)
        self.subscribers = SubscriberRepository(self.store)
        self.catalog = CatalogRepository()

        self.auth = MockAuthProvider(self.access_logs)
        self.workflow = EditorialWorkflow(
            self.articles,
            self.notifications,
            self.access_logs,
            editor_user_id=content.editor_user_id,
            default_image_url=content.default_image_url,
        )
        self.moderation = ModerationDesk(self.reports, self.articles, self.notifications)
        self.search_index = SearchIndex(self.articles, self.pages)
        self.config = SystemConfigManager(
            SystemConfigRepository(self.store, defaults.default_system_config), self.access_logs
        )
        logger.info(f"Content service ready (key prefix {content.key_prefix!r})")

    async def _require(self, actor: Optional[User], allowed: bool, action: str) -> None:
        await permissions.enforce(self.access_logs, actor, allowed, action)

    # Articles

    async def list_articles(self, category_slug: Optional[str] = None) -> List[Article]:
        """Published articles, newest first."""
        return await self.articles.list_published(category_slug)

    async def list_all_articles(self, actor: Optional[User] = None) -> List[Article]:
        await self._require(actor, permissions.is_editor(actor), "view all articles")
        return await self.articles.list_all()

    async def list_articles_by_author(self, author_id: str, include_archived: bool = False) -> List[Article]:
        return await self.workflow.my_submissions(author_id, include_archived)

    async def list_pending_articles(self, actor: Optional[User] = None) -> List[Article]:
        return await self.workflow.review_queue(actor)

    async def list_featured_articles(self) -> List[Article]:
        return await self.articles.list_featured()

    async def list_related_articles(self, article: Article) -> List[Article]:
        return await self.articles.list_related(
            article.id, article.category_slug, self.settings.content.related_articles_limit
        )

    async def list_bookmarked_articles(self, slugs: List[str]) -> List[Article]:
        return await self.articles.list_by_slugs(slugs)

    async def get_article(self, article_id: str) -> Optional[Article]:
        return await self.articles.get(article_id)

    async def get_article_by_slug(self, slug: str) -> Optional[Article]:
        """Any status; callers decide who may read it."""
        return await self.articles.get_by_slug(slug)

    async def read_article(self, slug: str, viewer: Optional[User] = None) -> Optional[Article]:
        """Article page: the article if ``viewer`` may read it, counting the view."""
        article = await self.articles.get_by_slug(slug)
        if article is None:
            return None
        if not permissions.can_read_article(viewer, article):
            if article.status != "published":
                return None
            raise PermissionDeniedError("Sign in to read member-only articles.")
        views = await self.increment_views(article.id, viewer)
        if views is not None:
            article.views = views
        return article

    async def create_article(self, draft: ArticleDraft, actor: Optional[User] = None) -> Article:
        return await self.workflow.create_article(draft, actor)

    async def update_article(self, article: Article, actor: Optional[User] = None) -> Optional[Article]:
        return await self.workflow.update_article(article, actor)

    async def delete_article(self, article_id: str, actor: Optional[User] = None) -> bool:
        return await self.workflow.delete_article(article_id, actor)

    async def set_article_status(
        self,
        article_id: str,
        status: ArticleStatus,
        feedback: Optional[str] = None,
        actor: Optional[User] = None,
    ) -> Optional[Article]:
        return await self.workflow.set_article_status(article_id, status, feedback, actor)

    async def submit_for_review(self, article_id: str, actor: Optional[User] = None) -> Optional[Article]:
        return await self.workflow.submit_for_review(article_id, actor)

    async def review_decision(
        self, article_id: str, decision: str, feedback: Optional[str] = None, actor: Optional[User] = None
    ) -> Optional[Article]:
        return await self.workflow.review_decision(article_id, decision, feedback, actor)

    async def archive_article(self, article_id: str, actor: Optional[User] = None) -> Optional[Article]:
        return await self.workflow.archive(article_id, actor)

    async def toggle_feature(self, article_id: str, actor: Optional[User] = None) -> Optional[Article]:
        return await self.workflow.toggle_feature(article_id, actor)

    async def increment_views(self, article_id: str, viewer: Optional[User] = None) -> Optional[int]:
        views = await self.articles.increment_views(article_id)
        if views is None:
            return None
        article = await self.articles.get(article_id)
        title = article.title if article else article_id
        if viewer is not None:
            await self.access_logs.record("VIEW_ARTICLE", f"Viewed article: {title}", viewer)
        else:
            await self.access_logs.record("VIEW_ARTICLE", f"Guest viewed article: {title}")
        return views

    async def react(self, article_id: str, reaction: str, identity: Optional[str] = None) -> Optional[ArticleReactions]:
        try:
            return await self.articles.react(article_id, reaction, identity)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    async def knowledge_base(self) -> str:
        return await self.articles.knowledge_base()

    async def ask_assistant(self, message: str) -> str:
        return assistant.reply(message, await self.articles.knowledge_sections())

    # Pages

    async def list_pages(self) -> List[PageConfig]:
        return await self.pages.list()

    async def list_navigation(self, viewer: Optional[User] = None) -> List[PageConfig]:
        return await self.pages.list_navigation(viewer)

    async def get_page_by_slug(self, slug: str) -> Optional[PageConfig]:
        return await self.pages.get_by_slug(slug)

    async def create_page(self, page: PageConfig, actor: Optional[User] = None) -> PageConfig:
        await self._require(actor, permissions.is_privileged(actor), "manage pages")
        return await self.pages.create(page)

    async def update_page(self, page_id: str, updates: PageUpdate, actor: Optional[User] = None) -> Optional[PageConfig]:
        await self._require(actor, permissions.is_privileged(actor), "manage pages")
        return await self.pages.update(page_id, updates)

    async def delete_page(self, page_id: str, actor: Optional[User] = None) -> bool:
        await self._require(actor, permissions.is_privileged(actor), "manage pages")
        return await self.pages.delete(page_id)

    # Moderation

    async def submit_report(
        self,
        article_id: str,
        article_title: str,
        article_slug: str,
        reason: str,
        details: Optional[str] = None,
        reporter_id: Optional[str] = None,
    ) -> ArticleReport:
        return await self.moderation.submit_report(article_id, article_title, article_slug, reason, details, reporter_id)

    async def list_reports(self, actor: Optional[User] = None) -> List[ArticleReport]:
        await self._require(actor, permissions.is_editor(actor), "view reports")
        return await self.moderation.list_reports()

    async def open_report_count(self) -> int:
        return await self.moderation.open_report_count()

    async def dismiss_report(self, report_id: str, actor: Optional[User] = None) -> Optional[ArticleReport]:
        await self._require(actor, permissions.is_editor(actor), "handle reports")
        return await self.moderation.dismiss_report(report_id)

    async def notify_author_of_report(
        self, report_id: str, message: str, actor: Optional[User] = None
    ) -> Optional[ArticleReport]:
        await self._require(actor, permissions.is_editor(actor), "handle reports")
        return await self.moderation.notify_author_of_report(report_id, message)

    # System configuration

    async def get_system_config(self) -> SystemConfig:
        return await self.config.get()

    async def update_system_config(self, updates: SystemConfigUpdate, actor: Optional[User] = None) -> SystemConfig:
        await self._require(actor, permissions.is_privileged(actor), "change system settings")
        return await self.config.update(updates, actor)

    async def update_theme(self, actor: Optional[User] = None, **changes) -> SystemConfig:
        await self._require(actor, permissions.is_privileged(actor), "change system settings")
        return await self.config.update_theme(actor, **changes)

    async def update_breaking_news(self, actor: Optional[User] = None, **changes) -> SystemConfig:
        await self._require(actor, permissions.is_privileged(actor), "change system settings")
        return await self.config.update_breaking_news(actor, **changes)

    # Search

    async def search(self, query: str, enumerate_all: bool = False) -> List[SearchResult]:
        return await self.search_index.search(query, enumerate_all)

    # Access log

    async def get_access_logs(self, actor: Optional[User] = None) -> List[AccessLog]:
        await self._require(actor, permissions.is_admin(actor), "view access logs")
        return await self.access_logs.list()

    async def log_activity(self, action: AccessAction, details: str, actor: Optional[User] = None) -> AccessLog:
        return await self.access_logs.record(action, details, actor)

    # Events

    async def list_events(self) -> List[SchoolEvent]:
        return await self.events.list()

    async def create_event(self, event: SchoolEvent, actor: Optional[User] = None) -> SchoolEvent:
        await self._require(actor, permissions.is_privileged(actor), "manage events")
        return await self.events.create(event)

    async def update_event(self, event: SchoolEvent, actor: Optional[User] = None) -> Optional[SchoolEvent]:
        await self._require(actor, permissions.is_privileged(actor), "manage events")
        return await self.events.update(event)

    async def delete_event(self, event_id: str, actor: Optional[User] = None) -> bool:
        await self._require(actor, permissions.is_privileged(actor), "manage events")
        return await self.events.delete(event_id)

    async def reschedule_event(self, event_id: str, new_date: date, actor: Optional[User] = None) -> Optional[SchoolEvent]:
        await self._require(actor, permissions.is_privileged(actor), "manage events")
        return await self.events.reschedule(event_id, new_date)

    async def cancel_event(self, event_id: str, actor: Optional[User] = None) -> Optional[SchoolEvent]:
        await self._require(actor, permissions.is_privileged(actor), "manage events")
        return await self.events.cancel(event_id)

    # Comments

    async def list_comments(self, article_id: Optional[str] = None) -> List[Comment]:
        return await self.comments.list(article_id)

    async def add_comment(self, article_id: str, content: str, actor: User) -> Comment:
        article = await self.articles.get(article_id)
        comment = Comment(
            id=str(uuid.uuid4()),
            article_id=article_id,
            article_title=article.title if article else None,
            user_id=actor.id,
            user_name=actor.name,
            content=(content or "").strip(),
            created_at=datetime.now(timezone.utc),
        )
        return await self.comments.create(comment)

    async def delete_comment(self, comment_id: str, actor: Optional[User] = None) -> bool:
        if actor is not None:
            comment = await self.comments.get(comment_id)
            if comment is None:
                return False
            await self._require(
                actor, permissions.is_editor(actor) or comment.user_id == actor.id, "delete this comment"
            )
        return await self.comments.delete(comment_id)

    # Polls

    async def get_active_poll(self) -> Poll:
        return await self.polls.get_active()

    async def vote_poll(self, poll_id: str, option_id: str) -> Poll:
        return await self.polls.vote(poll_id, option_id)

    # Contact and newsletter

    async def send_contact_message(self, name: str, email: str, message: str) -> ContactMessage:
        return await self.messages.send(name, email, message)

    async def list_contact_messages(self, actor: Optional[User] = None) -> List[ContactMessage]:
        await self._require(actor, permissions.is_privileged(actor), "read contact messages")
        return await self.messages.list()

    async def mark_message_read(self, message_id: str, actor: Optional[User] = None) -> Optional[ContactMessage]:
        await self._require(actor, permissions.is_privileged(actor), "read contact messages")
        return await self.messages.mark_read(message_id)

    async def subscribe(self, email: str) -> bool:
        return await self.subscribers.subscribe(email)

    async def list_subscribers(self, actor: Optional[User] = None) -> List[str]:
        await self._require(actor, permissions.is_privileged(actor), "view subscribers")
        return await self.subscribers.list()

    # Notifications

    async def list_notifications(self, user_id: str) -> List[Notification]:
        return await self.notifications.list_for_user(user_id)

    async def unread_notification_count(self, user_id: str) -> int:
        return await self.notifications.unread_count(user_id)

    async def mark_notification_read(self, notification_id: str) -> Optional[Notification]:
        return await self.notifications.mark_read(notification_id)

    # Static catalog

    async def list_print_editions(self) -> List[PrintEdition]:
        return await self.catalog.print_editions()

    async def list_team_members(self) -> List[TeamMember]:
        return await self.catalog.team_members()

    async def list_gallery_albums(self) -> List[GalleryAlbum]:
        return await self.catalog.gallery_albums()

    async def list_videos(self) -> List[Video]:
        return await self.catalog.videos()

    # Auth

    async def login(self, email: str, school_id: Optional[str] = None) -> User:
        return await self.auth.login(email, school_id)

    async def logout(self) -> None:
        await self.auth.logout()

    def current_user(self) -> Optional[User]:
        return self.auth.current_user()

    async def get_user(self, user_id: str) -> Optional[User]:
        return await self.auth.get_user(user_id)
