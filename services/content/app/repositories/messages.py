import asyncio
import re
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from services.content.app import store
from services.content.app.exceptions import ValidationError
from services.content.app.repositories.base import CollectionRepository
from shared.schemas.content import ContactMessage

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_email(email: str) -> str:
    email = (email or "").strip()
    if not EMAIL_RE.match(email):
        raise ValidationError("Please provide a valid email address.")
    return email


class ContactMessageRepository(CollectionRepository[ContactMessage]):
    """Messages sent through the contact form, newest first."""

    collection = store.MESSAGES
    model = ContactMessage

    async def send(self, name: str, email: str, message: str) -> ContactMessage:
        if not name.strip() or not message.strip():
            raise ValidationError("Name and message are required.")
        contact = ContactMessage(
            id=str(uuid.uuid4()),
            name=name.strip(),
            email=validate_email(email),
            message=message,
            created_at=datetime.now(timezone.utc),
            is_read=False,
        )
        return await self.add(contact, at_head=True)

    async def mark_read(self, message_id: str) -> Optional[ContactMessage]:
        def change(contact: ContactMessage) -> None:
            contact.is_read = True

        return await self.modify(message_id, change)


class SubscriberRepository:
    """Newsletter subscribers, kept as a list of unique e-mail addresses."""

    collection = store.SUBSCRIBERS

    def __init__(self, kv_store):
        self.store = kv_store
        self._emails: Optional[List[str]] = None
        self.lock = asyncio.Lock()

    async def _collection(self) -> List[str]:
        if self._emails is None:
            stored = await self.store.load(self.collection, [])
            self._emails = [e for e in stored if isinstance(e, str)] if isinstance(stored, list) else []
        return self._emails

    async def list(self) -> List[str]:
        return list(await self._collection())

    async def subscribe(self, email: str) -> bool:
        """Add ``email``; returns False if it was already subscribed."""
        email = validate_email(email)
        async with self.lock:
            emails = await self._collection()
            if email in emails:
                return False
            emails.append(email)
            await self.store.save(self.collection, emails)
        return True
