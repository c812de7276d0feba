"""Role gates for editorial and administrative actions."""

from typing import Optional

from services.content.app.exceptions import PermissionDeniedError
from shared.schemas.content import Article, User, UserRole

EDITOR_ROLES = frozenset({UserRole.AUDITOR, UserRole.EIC, UserRole.HEAD})
PRIVILEGED_ROLES = frozenset({UserRole.AUDITOR, UserRole.EIC})
ADMIN_ROLES = frozenset({UserRole.AUDITOR})

AUTHOR_EDITABLE = frozenset({"draft", "rejected"})


def is_editor(user: Optional[User]) -> bool:
    return user is not None and user.role in EDITOR_ROLES


def is_privileged(user: Optional[User]) -> bool:
    return user is not None and user.role in PRIVILEGED_ROLES


def is_admin(user: Optional[User]) -> bool:
    return user is not None and user.role in ADMIN_ROLES


def can_write(user: Optional[User]) -> bool:
    return user is not None and user.role != UserRole.GUEST


def can_edit_article(user: Optional[User], article: Article) -> bool:
    """Authors edit their own drafts and rejected pieces; editors edit anything."""
    if is_editor(user):
        return True
    return user is not None and user.id == article.author_id and article.status in AUTHOR_EDITABLE


def can_delete_article(user: Optional[User], article: Article) -> bool:
    """Published or archived pieces are only removed by privileged roles."""
    if is_privileged(user):
        return True
    return user is not None and user.id == article.author_id and article.status in AUTHOR_EDITABLE


def can_read_article(user: Optional[User], article: Article) -> bool:
    """Unpublished pieces are visible to their author and editors; paywalled ones need a sign-in."""
    if article.status != "published":
        return is_editor(user) or (user is not None and user.id == article.author_id)
    if article.is_member_only:
        return user is not None
    return True


async def enforce(access_logs, actor: Optional[User], allowed: bool, action: str) -> None:
    """Refuse ``action`` unless ``allowed``; no actor means a trusted internal caller.

    Refusals are written to the access log as ACCESS_DENIED.
    """
    if actor is None or allowed:
        return
    await access_logs.record("ACCESS_DENIED", f"{actor.role.value} tried to {action}.", actor)
    raise PermissionDeniedError(f"You are not allowed to {action}.")
