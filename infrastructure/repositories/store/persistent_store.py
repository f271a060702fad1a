import json
import logging
from typing import Optional
from app.domain.repositories_interfaces.store_repo import PersistentStoreInterface, StoreRepoInterface
from app.domain.exceptions import StorageUnavailable
from infrastructure.repositories.store.memory_repo import MemoryStoreRepo


logger = logging.getLogger('storage')


class PersistentStore(PersistentStoreInterface):
    """
    JSON key-value store on top of a durable repo.

    The first StorageUnavailable from the durable repo switches the store to memory
    for the rest of the process. Nothing is raised to the caller.
    """

    def __init__(self, durable_repo: Optional[StoreRepoInterface], namespace: str = 'quiz',
                 fallback_repo: Optional[StoreRepoInterface] = None):
        self.durable_repo = durable_repo
        self.fallback_repo = fallback_repo or MemoryStoreRepo()
        self.namespace = namespace
        self._degraded = durable_repo is None

    @property
    def degraded(self) -> bool:
        return self._degraded

    async def connect(self) -> None:
        """Probes the durable repo once so that an unreachable backend is detected at start up."""
        if self._degraded:
            return
        try:
            await self.durable_repo.ping()
            logger.info("Durable store is available")
        except StorageUnavailable as e:
            self._degrade(e)

    async def get(self, key: str, default=None):
        raw = await self._call('get', self._key(key))
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            # Not JSON, hand back what was stored
            return raw

    async def set(self, key: str, value) -> None:
        try:
            raw = json.dumps(value)
        except (TypeError, ValueError) as e:
            logger.error(f"Storage failed for {key}: {e}")
            return
        await self._call('save', self._key(key), raw)

    async def remove(self, key: str) -> None:
        await self._call('delete', self._key(key))

    def _key(self, key: str) -> str:
        return f'{self.namespace}:{key}'

    async def _call(self, method: str, *args):
        if not self._degraded:
            try:
                return await getattr(self.durable_repo, method)(*args)
            except StorageUnavailable as e:
                self._degrade(e)
        return await getattr(self.fallback_repo, method)(*args)

    def _degrade(self, error: Exception) -> None:
        if not self._degraded:
            logger.warning(f"Durable store not available, using memory storage: {error}")
        self._degraded = True
