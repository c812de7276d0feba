"""Pydantic models for the content store.

Attributes are snake_case in Python; persisted documents and API payloads use
the camelCase names of the stored data format (``authorId``, ``publishedAt``).
Both spellings are accepted on input.
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ArticleStatus = Literal["draft", "pending", "published", "rejected", "archived"]
ReactionKey = Literal["like", "love", "insightful", "sad"]
ReportStatus = Literal["open", "resolved", "dismissed"]
NotificationType = Literal["info", "success", "warning", "error"]
PageType = Literal["static", "category"]
AccessLevel = Literal["public", "member", "staff"]
EventCategory = Literal["Sports", "Academic", "Arts", "Club", "General"]
EventStatus = Literal["scheduled", "rescheduled", "cancelled"]
AccessAction = Literal["LOGIN", "VIEW_ARTICLE", "SYSTEM_CHANGE", "ACCESS_DENIED"]
TickerSpeed = Literal["slow", "normal", "fast"]


class ContentModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserRole(str, Enum):
    AUDITOR = "AUDITOR"
    EIC = "EIC"
    HEAD = "HEAD"
    JOURNALIST = "JOURNALIST"
    GUEST = "GUEST"


class User(ContentModel):
    id: str
    name: str
    email: str
    role: UserRole
    username: Optional[str] = None
    school_id: Optional[str] = None
    avatar: Optional[str] = None
    bio: Optional[str] = None
    specialization: Optional[str] = None


class ArticleReactions(ContentModel):
    like: int = Field(0, ge=0)
    love: int = Field(0, ge=0)
    insightful: int = Field(0, ge=0)
    sad: int = Field(0, ge=0)


class ArticleDraft(ContentModel):
    """What an author supplies when writing a new article."""

    title: str = Field(..., description="Headline; the slug is derived from it")
    excerpt: str = Field("", description="Teaser shown in listings")
    content: str = Field(..., description="Markdown body")
    author_id: str
    author_name: str
    category_slug: str = "news"
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    status: Literal["draft", "pending"] = "draft"
    is_member_only: bool = False
    is_featured: bool = False


class Article(ContentModel):
    id: str
    title: str
    slug: str = Field(..., description="URL-unique identifier")
    excerpt: str = ""
    content: str
    author_id: str
    author_name: str
    category_slug: str
    image_url: str = ""
    video_url: Optional[str] = None
    published_at: datetime = Field(
        ..., description="Publication time, or submission time before publication"
    )
    status: ArticleStatus = "draft"
    views: int = Field(0, ge=0)
    feedback: Optional[str] = None
    reactions: ArticleReactions = Field(default_factory=ArticleReactions)
    is_member_only: bool = False
    is_featured: bool = False


class ArticleReport(ContentModel):
    id: str
    article_id: str
    article_title: str
    article_slug: str
    reporter_id: Optional[str] = Field(None, description="Absent for anonymous reports")
    reason: str
    details: Optional[str] = None
    timestamp: datetime
    status: ReportStatus = "open"


class Notification(ContentModel):
    id: str
    user_id: str = Field(..., description="Recipient")
    message: str
    type: NotificationType = "info"
    is_read: bool = False
    created_at: datetime


class PageConfig(ContentModel):
    id: str
    title: str
    slug: str
    type: PageType = "static"
    description: Optional[str] = None
    is_system: bool = False
    is_visible: bool = True
    access_level: AccessLevel = "public"
    order_score: int = 0


class PageUpdate(ContentModel):
    """Partial page update; only the fields that were set are applied."""

    title: Optional[str] = None
    slug: Optional[str] = None
    type: Optional[PageType] = None
    description: Optional[str] = None
    is_visible: Optional[bool] = None
    access_level: Optional[AccessLevel] = None
    order_score: Optional[int] = None


class ContactMessage(ContentModel):
    id: str
    name: str
    email: str
    message: str
    created_at: datetime
    is_read: bool = False


class ThemeConfig(ContentModel):
    publication_name: str
    publication_subtext: str
    logo_url: str
    primary_color: str
    accent_color: str


class BreakingNews(ContentModel):
    enabled: bool = False
    text: str = ""
    link: Optional[str] = None
    bg_color: Optional[str] = None
    text_color: Optional[str] = None
    speed: TickerSpeed = "normal"
    linked_article_id: Optional[str] = None


class SystemConfig(ContentModel):
    maintenance_mode: bool = False
    allow_guest_signup: bool = True
    theme: ThemeConfig
    breaking_news: Optional[BreakingNews] = None


class SystemConfigUpdate(ContentModel):
    """Top-level partial update. Nested objects replace the stored ones whole."""

    maintenance_mode: Optional[bool] = None
    allow_guest_signup: Optional[bool] = None
    theme: Optional[ThemeConfig] = None
    breaking_news: Optional[BreakingNews] = None


class Comment(ContentModel):
    id: str
    article_id: str
    article_title: Optional[str] = None
    user_id: str
    user_name: str
    content: str
    created_at: datetime


class PollOption(ContentModel):
    id: str
    text: str
    votes: int = Field(0, ge=0)


class Poll(ContentModel):
    id: str
    question: str
    options: List[PollOption]
    total_votes: int = Field(0, ge=0)


class SubEvent(ContentModel):
    id: str
    time: str = Field(..., description="Display time, e.g. '07:30 AM'")
    title: str
    location: Optional[str] = None


class SchoolEvent(ContentModel):
    id: str
    title: str
    date: date
    location: str
    description: str
    category: EventCategory = "General"
    status: EventStatus = "scheduled"
    image_url: Optional[str] = None
    sub_events: List[SubEvent] = Field(default_factory=list)


class AccessLog(ContentModel):
    id: str
    user_id: Optional[str] = None
    user_name: str = "Guest"
    action: AccessAction
    details: str
    timestamp: datetime


class SearchResult(ContentModel):
    type: Literal["article", "page", "user"]
    title: str
    url: str
    description: str


class PrintEdition(ContentModel):
    id: str
    title: str
    cover_url: str
    pdf_url: str
    publish_date: date
    volume: str


class TeamMember(ContentModel):
    id: str
    name: str
    role: str
    bio: str
    avatar_url: str
    email: Optional[str] = None


class GalleryAlbum(ContentModel):
    id: str
    title: str
    cover_url: str
    image_count: int
    images: List[str] = Field(default_factory=list)


class Video(ContentModel):
    id: str
    title: str
    description: str
    thumbnail_url: str
    video_url: str
    category: str
    published_at: date
