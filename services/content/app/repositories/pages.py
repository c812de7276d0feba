from typing import List, Optional

from services.content.app import store
from services.content.app.exceptions import ProtectedResourceError, ValidationError
from services.content.app.repositories.base import CollectionRepository
from shared.schemas.content import PageConfig, PageUpdate, User, UserRole


def _may_access(page: PageConfig, viewer: Optional[User]) -> bool:
    if page.access_level == "public":
        return True
    if viewer is None:
        return False
    if page.access_level == "member":
        return True
    return viewer.role != UserRole.GUEST


class PageRepository(CollectionRepository[PageConfig]):
    """Navigation pages, ordered by ``order_score`` ascending."""

    collection = store.PAGES
    model = PageConfig

    async def list(self) -> List[PageConfig]:
        pages = sorted(await self._collection(), key=lambda p: p.order_score)
        return [self._copy(p) for p in pages]

    async def list_navigation(self, viewer: Optional[User] = None) -> List[PageConfig]:
        """Visible pages the viewer may open, in navigation order."""
        return [p for p in await self.list() if p.is_visible and _may_access(p, viewer)]

    async def get_by_slug(self, slug: str) -> Optional[PageConfig]:
        for page in await self._collection():
            if page.slug == slug:
                return self._copy(page)
        return None

    async def create(self, page: PageConfig) -> PageConfig:
        if not page.title.strip() or not page.slug.strip():
            raise ValidationError("Page title and slug are required.")
        async with self.lock:
            items = await self._collection()
            if any(p.slug == page.slug for p in items):
                raise ValidationError(f"A page with slug '{page.slug}' already exists.")
            items.append(page)
            await self._commit()
        return self._copy(page)

    async def update(self, page_id: str, updates: PageUpdate) -> Optional[PageConfig]:
        # Only description may be cleared; other explicit nulls are ignored
        changes = {
            name: getattr(updates, name)
            for name in updates.model_fields_set
            if getattr(updates, name) is not None or name == "description"
        }
        if "title" in changes and not (changes["title"] or "").strip():
            raise ValidationError("Page title is required.")
        if "slug" in changes and not (changes["slug"] or "").strip():
            raise ValidationError("Page slug is required.")

        async with self.lock:
            items = await self._collection()
            for idx, page in enumerate(items):
                if page.id != page_id:
                    continue
                if "slug" in changes and any(p.slug == changes["slug"] and p.id != page_id for p in items):
                    raise ValidationError(f"A page with slug '{changes['slug']}' already exists.")
                items[idx] = page.model_copy(update=changes)
                await self._commit()
                return self._copy(items[idx])
        return None

    async def delete(self, page_id: str) -> bool:
        """Remove a page. System pages are refused."""
        async with self.lock:
            items = await self._collection()
            page = next((p for p in items if p.id == page_id), None)
            if page is None:
                return False
            if page.is_system:
                raise ProtectedResourceError(f"System page '{page.title}' cannot be deleted.")
            self._items = [p for p in items if p.id != page_id]
            await self._commit()
        return True
