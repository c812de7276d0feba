import asyncio
import re
from typing import Callable, Iterable, List, Optional, Set, Tuple

from services.content.app import store
from services.content.app.exceptions import ValidationError
from services.content.app.repositories.base import CollectionRepository
from shared.app_logging.logger import get_logger
from shared.schemas.content import Article, ArticleReactions, ArticleStatus

logger = get_logger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Lowercase the title, collapse non-alphanumeric runs to '-', trim hyphens."""
    return _NON_ALNUM.sub("-", title.lower()).strip("-")


def _newest_first(articles: Iterable[Article]) -> List[Article]:
    return sorted(articles, key=lambda a: a.published_at, reverse=True)


class ArticleRepository(CollectionRepository[Article]):
    collection = store.ARTICLES
    model = Article

    def __init__(self, kv_store, defaults=None, unique_reactions: bool = True):
        super().__init__(kv_store, defaults)
        self.unique_reactions = unique_reactions
        self._ledger: Optional[Set[str]] = None
        self._ledger_lock = asyncio.Lock()

    async def list_published(self, category_slug: Optional[str] = None) -> List[Article]:
        items = [a for a in await self._collection() if a.status == "published"]
        if category_slug:
            items = [a for a in items if a.category_slug == category_slug]
        return [self._copy(a) for a in _newest_first(items)]

    async def list_all(self) -> List[Article]:
        return [self._copy(a) for a in _newest_first(await self._collection())]

    async def list_by_author(self, author_id: str, include_archived: bool = False) -> List[Article]:
        return [
            self._copy(a)
            for a in await self._collection()
            if a.author_id == author_id and (include_archived or a.status != "archived")
        ]

    async def list_by_status(self, status: ArticleStatus) -> List[Article]:
        return [self._copy(a) for a in await self._collection() if a.status == status]

    async def list_featured(self) -> List[Article]:
        items = [a for a in await self._collection() if a.status == "published" and a.is_featured]
        return [self._copy(a) for a in _newest_first(items)]

    async def list_related(self, article_id: str, category_slug: str, limit: int = 4) -> List[Article]:
        related = [
            a
            for a in await self._collection()
            if a.category_slug == category_slug and a.id != article_id and a.status == "published"
        ]
        return [self._copy(a) for a in related[:limit]]

    async def list_by_slugs(self, slugs: Iterable[str]) -> List[Article]:
        wanted = set(slugs)
        return [self._copy(a) for a in await self._collection() if a.slug in wanted]

    async def get_by_slug(self, slug: str) -> Optional[Article]:
        for article in await self._collection():
            if article.slug == slug:
                return self._copy(article)
        return None

    async def insert(self, article: Article) -> Article:
        """Insert at the head of the collection, suffixing the slug until it is unique."""
        async with self.lock:
            items = await self._collection()
            taken = {a.slug for a in items}
            base, n = article.slug, 2
            while article.slug in taken:
                article.slug = f"{base}-{n}"
                n += 1
            items.insert(0, article)
            await self._commit()
        return self._copy(article)

    async def update(
        self, article: Article, check: Optional[Callable[[Article, Article], None]] = None
    ) -> Optional[Tuple[Article, Article]]:
        """Replace the stored article with the same id.

        ``check(previous, incoming)`` may raise to veto the update. Views and
        reactions are owned by the counters and always keep their stored
        values. Returns ``(previous, updated)`` or ``None`` if the id is unknown.
        """
        async with self.lock:
            items = await self._collection()
            for idx, previous in enumerate(items):
                if previous.id != article.id:
                    continue
                if check is not None:
                    check(previous, article)
                if any(a.slug == article.slug and a.id != article.id for a in items):
                    raise ValidationError(f"Another article already uses the slug '{article.slug}'.")
                updated = article.model_copy(
                    update={"views": previous.views, "reactions": previous.reactions.model_copy()},
                    deep=True,
                )
                items[idx] = updated
                await self._commit()
                return self._copy(previous), self._copy(updated)
        return None

    async def increment_views(self, article_id: str) -> Optional[int]:
        async with self.lock:
            article = await self._find(article_id)
            if article is None:
                return None
            article.views += 1
            await self._commit()
            return article.views

    async def _reaction_ledger(self) -> Set[str]:
        if self._ledger is None:
            entries = await self.store.load(store.REACTION_LEDGER, [])
            self._ledger = set(entries) if isinstance(entries, list) else set()
        return self._ledger

    async def react(self, article_id: str, reaction: str, identity: Optional[str] = None) -> Optional[ArticleReactions]:
        """Count one reaction. A known identity counts once per (article, reaction)."""
        if reaction not in ArticleReactions.model_fields:
            raise ValueError(f"Unknown reaction: {reaction}")

        async with self.lock:
            article = await self._find(article_id)
            if article is None:
                return None

            if self.unique_reactions and identity:
                async with self._ledger_lock:
                    ledger = await self._reaction_ledger()
                    entry = f"{article_id}:{identity}:{reaction}"
                    if entry in ledger:
                        logger.debug(f"Repeat reaction ignored: {entry}")
                        return article.reactions.model_copy()
                    ledger.add(entry)
                    await self.store.save(store.REACTION_LEDGER, sorted(ledger))

            setattr(article.reactions, reaction, getattr(article.reactions, reaction) + 1)
            await self._commit()
            return article.reactions.model_copy()

    async def knowledge_sections(self) -> List[str]:
        """One TITLE/AUTHOR/CATEGORY/PUBLISHED/CONTENT block per published article."""
        return [
            f"TITLE: {a.title}\nAUTHOR: {a.author_name}\nCATEGORY: {a.category_slug}\n"
            f"PUBLISHED: {a.published_at.date().isoformat()}\nCONTENT: {a.content}"
            for a in await self._collection()
            if a.status == "published"
        ]

    async def knowledge_base(self) -> str:
        """Published articles as '---' delimited sections."""
        sections = await self.knowledge_sections()
        if not sections:
            return "No articles published yet."
        return "\n".join(f"\n---\n{section}\n---" for section in sections)
