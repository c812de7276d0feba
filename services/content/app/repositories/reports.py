from typing import List

from services.content.app import store
from services.content.app.repositories.base import CollectionRepository
from shared.schemas.content import ArticleReport


class ReportRepository(CollectionRepository[ArticleReport]):
    collection = store.REPORTS
    model = ArticleReport

    async def list(self) -> List[ArticleReport]:
        """Open reports first, newest first within each group."""
        by_time = sorted(await self._collection(), key=lambda r: r.timestamp, reverse=True)
        ordered = sorted(by_time, key=lambda r: r.status != "open")
        return [self._copy(r) for r in ordered]

    async def open_count(self) -> int:
        return sum(1 for r in await self._collection() if r.status == "open")
