"""Append-only audit trail of user activity.

Entries are kept most recent first and capped at a fixed size; once the cap
is reached each new entry evicts the oldest one.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from services.content.app import store
from services.content.app.repositories.base import CollectionRepository
from shared.schemas.content import AccessAction, AccessLog, User


class AccessLogRepository(CollectionRepository[AccessLog]):
    collection = store.LOGS
    model = AccessLog

    def __init__(self, kv_store, limit: int = 200):
        super().__init__(kv_store)
        self.limit = limit

    async def record(self, action: AccessAction, details: str, actor: Optional[User] = None) -> AccessLog:
        entry = AccessLog(
            id=str(uuid.uuid4()),
            user_id=actor.id if actor else None,
            user_name=actor.name if actor else "Guest",
            action=action,
            details=details,
            timestamp=datetime.now(timezone.utc),
        )
        async with self.lock:
            items = await self._collection()
            items.insert(0, entry)
            del items[self.limit:]
            await self._commit()
        return self._copy(entry)
