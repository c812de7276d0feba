"""Site-wide configuration singleton: maintenance flag, theme, breaking news."""

from typing import Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from services.content.app import store
from services.content.app.exceptions import ValidationError
from services.content.app.repositories.access_logs import AccessLogRepository
from services.content.app.repositories.base import DocumentRepository
from shared.app_logging.logger import get_logger
from shared.schemas.content import BreakingNews, SystemConfig, SystemConfigUpdate, ThemeConfig, User

logger = get_logger(__name__)


def _merged(model: Type[BaseModel], current: BaseModel, changes: dict) -> BaseModel:
    unknown = set(changes) - set(model.model_fields)
    if unknown:
        raise ValidationError(f"Unknown {model.__name__} fields: {', '.join(sorted(unknown))}")
    data = current.model_dump()
    data.update(changes)
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid {model.__name__}: {e.error_count()} errors") from e


class SystemConfigRepository(DocumentRepository[SystemConfig]):
    collection = store.SYSTEM
    model = SystemConfig

    async def merge(self, updates: SystemConfigUpdate) -> SystemConfig:
        """Shallow merge: every top-level field present in ``updates`` replaces the stored one."""
        changes = {name: getattr(updates, name) for name in updates.model_fields_set}
        async with self.lock:
            self._doc = _merged(SystemConfig, await self._document(), changes)
            await self._commit()
            return self._doc.model_copy(deep=True)


class SystemConfigManager:
    def __init__(self, repository: SystemConfigRepository, access_logs: AccessLogRepository):
        self.repository = repository
        self.access_logs = access_logs

    async def get(self) -> SystemConfig:
        return await self.repository.read()

    async def update(self, updates: SystemConfigUpdate, actor: Optional[User] = None) -> SystemConfig:
        config = await self.repository.merge(updates)
        await self.access_logs.record("SYSTEM_CHANGE", "Updated system configuration or theme.", actor)
        logger.info(f"System configuration updated: {sorted(updates.model_fields_set)}")
        return config

    async def update_theme(self, actor: Optional[User] = None, **changes) -> SystemConfig:
        """Change individual theme fields, keeping the others."""
        current = await self.get()
        theme = _merged(ThemeConfig, current.theme, changes)
        return await self.update(SystemConfigUpdate(theme=theme), actor)

    async def update_breaking_news(self, actor: Optional[User] = None, **changes) -> SystemConfig:
        """Change individual breaking-news fields, keeping the others."""
        current = await self.get()
        news = _merged(BreakingNews, current.breaking_news or BreakingNews(), changes)
        return await self.update(SystemConfigUpdate(breaking_news=news), actor)
