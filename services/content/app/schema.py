from datetime import date
from typing import List, Optional

from pydantic import Field

from shared.schemas.content import AccessAction, ArticleStatus, ContentModel, ReactionKey


class StatusChange(ContentModel):
    status: ArticleStatus
    feedback: Optional[str] = Field(None, description="Shown to the author with the outcome")


class ReactionIn(ContentModel):
    reaction: ReactionKey


class ReportIn(ContentModel):
    article_id: str
    article_title: str
    article_slug: str
    reason: str
    details: Optional[str] = None


class AuthorNotice(ContentModel):
    message: str = Field(..., description="Sent to the author of the reported article")


class CommentIn(ContentModel):
    article_id: str
    content: str


class VoteIn(ContentModel):
    poll_id: str
    option_id: str


class ContactIn(ContentModel):
    name: str
    email: str
    message: str


class SubscribeIn(ContentModel):
    email: str


class LoginIn(ContentModel):
    email: str
    school_id: Optional[str] = None


class ActivityIn(ContentModel):
    action: AccessAction
    details: str


class RescheduleIn(ContentModel):
    date: date


class AssistantIn(ContentModel):
    message: str


class AssistantOut(ContentModel):
    reply: str


class SubscribeOut(ContentModel):
    email: str
    subscribed: bool = Field(..., description="False when the address was already on the list")


class UnreadCount(ContentModel):
    unread: int


class BookmarksIn(ContentModel):
    slugs: List[str] = Field(default_factory=list)
