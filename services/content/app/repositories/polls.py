from services.content.app import store
from services.content.app.repositories.base import DocumentRepository
from shared.app_logging.logger import get_logger
from shared.schemas.content import Poll

logger = get_logger(__name__)


class PollRepository(DocumentRepository[Poll]):
    """The single active poll."""

    collection = store.POLL
    model = Poll

    async def get_active(self) -> Poll:
        return await self.read()

    async def vote(self, poll_id: str, option_id: str) -> Poll:
        """Count a vote for ``option_id``.

        The option tally and the poll total move together; an unknown poll or
        option leaves both untouched.
        """
        async with self.lock:
            poll = await self._document()
            option = next((o for o in poll.options if o.id == option_id), None)
            if poll.id != poll_id or option is None:
                logger.warning(f"Ignoring vote for unknown poll/option {poll_id}/{option_id}")
                return poll.model_copy(deep=True)
            option.votes += 1
            poll.total_votes += 1
            await self._commit()
            return poll.model_copy(deep=True)
