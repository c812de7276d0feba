import asyncio
from typing import Callable, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter

from services.content.app.store import KeyValueStore
from shared.app_logging.logger import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class CollectionRepository(Generic[ModelT]):
    """One persisted collection of ``model`` items, held in memory.

    The collection is loaded from the store on first use. Every
    read-modify-write runs under ``self.lock`` so writers of the same
    collection never interleave, and the save happens before the lock is
    released. Callers always receive copies; changes go through repository
    methods.
    """

    collection: str
    model: Type[ModelT]

    def __init__(self, store: KeyValueStore, defaults: Optional[Callable[[], List[ModelT]]] = None):
        self.store = store
        self._defaults = defaults or list
        self._adapter = TypeAdapter(List[self.model])
        self._items: Optional[List[ModelT]] = None
        self._load_lock = asyncio.Lock()
        self.lock = asyncio.Lock()

    async def _collection(self) -> List[ModelT]:
        if self._items is None:
            async with self._load_lock:
                if self._items is None:
                    self._items = await self.store.load(self.collection, self._defaults(), self._adapter)
                    logger.debug(f"Loaded {len(self._items)} items into {self.collection}")
        return self._items

    async def _commit(self) -> bool:
        data = self._adapter.dump_python(self._items, mode="json", by_alias=True)
        return await self.store.save(self.collection, data)

    async def _find(self, item_id: str) -> Optional[ModelT]:
        for item in await self._collection():
            if item.id == item_id:
                return item
        return None

    @staticmethod
    def _copy(item: Optional[ModelT]) -> Optional[ModelT]:
        return item.model_copy(deep=True) if item is not None else None

    async def list(self) -> List[ModelT]:
        return [self._copy(item) for item in await self._collection()]

    async def get(self, item_id: str) -> Optional[ModelT]:
        return self._copy(await self._find(item_id))

    async def add(self, item: ModelT, at_head: bool = False) -> ModelT:
        async with self.lock:
            items = await self._collection()
            if at_head:
                items.insert(0, item)
            else:
                items.append(item)
            await self._commit()
        return self._copy(item)

    async def modify(self, item_id: str, change: Callable[[ModelT], None]) -> Optional[ModelT]:
        """Apply ``change`` to the stored item and persist it.

        ``change`` must raise before touching the item if the change is not
        allowed. Returns ``None`` when no item has ``item_id``.
        """
        async with self.lock:
            item = await self._find(item_id)
            if item is None:
                return None
            change(item)
            await self._commit()
            return self._copy(item)

    async def replace(self, item: ModelT) -> Optional[ModelT]:
        async with self.lock:
            items = await self._collection()
            for idx, existing in enumerate(items):
                if existing.id == item.id:
                    items[idx] = item
                    await self._commit()
                    return self._copy(item)
        return None

    async def remove(self, item_id: str) -> bool:
        async with self.lock:
            items = await self._collection()
            kept = [item for item in items if item.id != item_id]
            if len(kept) == len(items):
                return False
            self._items = kept
            await self._commit()
        return True


class DocumentRepository(Generic[ModelT]):
    """A single persisted document, such as the site configuration."""

    collection: str
    model: Type[ModelT]

    def __init__(self, store: KeyValueStore, default: Callable[[], ModelT]):
        self.store = store
        self._default = default
        self._adapter = TypeAdapter(self.model)
        self._doc: Optional[ModelT] = None
        self._load_lock = asyncio.Lock()
        self.lock = asyncio.Lock()

    async def _document(self) -> ModelT:
        if self._doc is None:
            async with self._load_lock:
                if self._doc is None:
                    self._doc = await self.store.load(self.collection, self._default(), self._adapter)
        return self._doc

    async def _commit(self) -> bool:
        data = self._doc.model_dump(mode="json", by_alias=True)
        return await self.store.save(self.collection, data)

    async def read(self) -> ModelT:
        return (await self._document()).model_copy(deep=True)
