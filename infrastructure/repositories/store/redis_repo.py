from typing import Optional
from redis.exceptions import RedisError
from infrastructure.redis_config import RedisPool
from app.domain.repositories_interfaces.store_repo import StoreRepoInterface
from app.domain.exceptions import StorageUnavailable


class RedisStoreRepo(StoreRepoInterface):
    def __init__(self, redis_pool: RedisPool):
        self.redis_pool = redis_pool

    async def get(self, key: str) -> Optional[str]:
        try:
            async with await self._connection() as conn:
                return await conn.get(key)
        except (RedisError, OSError) as e:
            raise StorageUnavailable(str(e)) from e

    async def save(self, key: str, value: str) -> None:
        try:
            async with await self._connection() as conn:
                # No expiry, the leaderboard and snapshots must outlive the process
                await conn.set(key, value)
        except (RedisError, OSError) as e:
            raise StorageUnavailable(str(e)) from e

    async def delete(self, key: str) -> None:
        try:
            async with await self._connection() as conn:
                await conn.delete(key)
        except (RedisError, OSError) as e:
            raise StorageUnavailable(str(e)) from e

    async def ping(self) -> None:
        try:
            async with await self._connection() as conn:
                await conn.ping()
        except (RedisError, OSError) as e:
            raise StorageUnavailable(str(e)) from e

    async def _connection(self):
        if self.redis_pool.pool is None:
            raise StorageUnavailable("Redis pool is not created")
        return await self.redis_pool.get_connection()
