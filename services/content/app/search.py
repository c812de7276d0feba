from typing import List

from services.content.app.repositories.articles import ArticleRepository
from services.content.app.repositories.pages import PageRepository
from shared.schemas.content import Article, PageConfig, SearchResult


def _article_result(article: Article) -> SearchResult:
    return SearchResult(type="article", title=article.title, url=f"/article/{article.slug}", description=article.excerpt)


def _page_result(page: PageConfig) -> SearchResult:
    url = f"/category/{page.slug}" if page.type == "category" else f"/{page.slug}"
    return SearchResult(type="page", title=page.title, url=url, description=page.description or "Page")


class SearchIndex:
    """Substring search over published articles and visible pages."""

    def __init__(self, articles: ArticleRepository, pages: PageRepository):
        self.articles = articles
        self.pages = pages

    async def search(self, query: str, enumerate_all: bool = False) -> List[SearchResult]:
        """Case-insensitive match on article title/content and page title.

        Articles come first in collection order, then pages in navigation
        order. A blank query matches nothing unless ``enumerate_all`` is set,
        in which case every published article and visible page is returned.
        """
        q = (query or "").strip().lower()
        if not q and not enumerate_all:
            return []

        results = [
            _article_result(a)
            for a in await self.articles.list_by_status("published")
            if q in a.title.lower() or q in a.content.lower()
        ]
        results.extend(
            _page_result(p) for p in await self.pages.list() if p.is_visible and q in p.title.lower()
        )
        return results
