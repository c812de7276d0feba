from datetime import date
from typing import List, Optional

from services.content.app import store
from services.content.app.exceptions import ValidationError
from services.content.app.repositories.base import CollectionRepository
from shared.schemas.content import SchoolEvent


class EventRepository(CollectionRepository[SchoolEvent]):
    collection = store.EVENTS
    model = SchoolEvent

    async def list(self) -> List[SchoolEvent]:
        """Events in chronological order."""
        return [self._copy(e) for e in sorted(await self._collection(), key=lambda e: e.date)]

    async def create(self, event: SchoolEvent) -> SchoolEvent:
        if not event.title.strip():
            raise ValidationError("Event title is required.")
        return await self.add(event)

    async def update(self, event: SchoolEvent) -> Optional[SchoolEvent]:
        if not event.title.strip():
            raise ValidationError("Event title is required.")
        return await self.replace(event)

    async def delete(self, event_id: str) -> bool:
        return await self.remove(event_id)

    async def reschedule(self, event_id: str, new_date: date) -> Optional[SchoolEvent]:
        def change(event: SchoolEvent) -> None:
            event.date = new_date
            event.status = "rescheduled"

        return await self.modify(event_id, change)

    async def cancel(self, event_id: str) -> Optional[SchoolEvent]:
        def change(event: SchoolEvent) -> None:
            event.status = "cancelled"

        return await self.modify(event_id, change)
