import uuid
from datetime import datetime, timezone
from typing import List, Optional

from services.content.app import store
from services.content.app.repositories.base import CollectionRepository
from shared.app_logging.logger import get_logger
from shared.schemas.content import Notification, NotificationType

logger = get_logger(__name__)


class NotificationRepository(CollectionRepository[Notification]):
    collection = store.NOTIFICATIONS
    model = Notification

    async def notify(self, user_id: str, message: str, type: NotificationType = "info") -> Notification:
        notification = Notification(
            id=str(uuid.uuid4()),
            user_id=user_id,
            message=message,
            type=type,
            is_read=False,
            created_at=datetime.now(timezone.utc),
        )
        logger.info(f"Notifying user {user_id}: {message}")
        return await self.add(notification, at_head=True)

    async def list_for_user(self, user_id: str) -> List[Notification]:
        items = [n for n in await self._collection() if n.user_id == user_id]
        return [self._copy(n) for n in sorted(items, key=lambda n: n.created_at, reverse=True)]

    async def unread_count(self, user_id: str) -> int:
        return sum(1 for n in await self._collection() if n.user_id == user_id and not n.is_read)

    async def mark_read(self, notification_id: str) -> Optional[Notification]:
        def change(notification: Notification) -> None:
            notification.is_read = True

        return await self.modify(notification_id, change)
