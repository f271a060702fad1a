"""
Unit tests for the persistent store adapter and the Redis repo.
"""
import unittest
from unittest.mock import AsyncMock, MagicMock
from redis.exceptions import ConnectionError as RedisConnectionError
from app.domain.exceptions import StorageUnavailable
from infrastructure.repositories.store.memory_repo import MemoryStoreRepo
from infrastructure.repositories.store.persistent_store import PersistentStore
from infrastructure.repositories.store.redis_repo import RedisStoreRepo


class TestPersistentStore(unittest.IsolatedAsyncioTestCase):
    """Test cases for JSON storage, namespacing and the memory fallback."""

    def setUp(self):
        """Set up a store backed by a healthy in-memory durable repo."""
        self.durable = MemoryStoreRepo()
        self.store = PersistentStore(self.durable, namespace='quiz')

    async def test_values_are_stored_as_namespaced_json(self):
        """Test values are JSON encoded under the namespaced key."""
        await self.store.set('leaderboard', [{'score': 1.5}])

        self.assertEqual(self.durable.data['quiz:leaderboard'], '[{"score": 1.5}]')
        self.assertEqual(await self.store.get('leaderboard'), [{'score': 1.5}])

    async def test_missing_key_returns_default(self):
        """Test the default is returned for keys that were never stored."""
        self.assertIsNone(await self.store.get('missing'))
        self.assertEqual(await self.store.get('missing', []), [])

    async def test_raw_value_is_returned_when_not_json(self):
        """Test values that are not valid JSON are handed back as stored."""
        self.durable.data['quiz:42:user'] = 'Alice'
        self.assertEqual(await self.store.get('42:user'), 'Alice')

    async def test_unserializable_value_is_not_stored(self):
        """Test storing a value that can not be encoded does not raise."""
        await self.store.set('broken', object())
        self.assertNotIn('quiz:broken', self.durable.data)

    async def test_remove(self):
        """Test a removed key reads as missing."""
        await self.store.set('42:dark-mode', True)
        await self.store.remove('42:dark-mode')
        self.assertIsNone(await self.store.get('42:dark-mode'))

    async def test_falls_back_to_memory_when_durable_repo_fails(self):
        """Test the store keeps working in memory after a backend failure."""
        durable = MagicMock()
        durable.get = AsyncMock(side_effect=StorageUnavailable("down"))
        durable.save = AsyncMock(side_effect=StorageUnavailable("down"))
        store = PersistentStore(durable)

        await store.set('42:user', 'Bob')
        self.assertTrue(store.degraded)
        self.assertEqual(await store.get('42:user'), 'Bob')
        # After degrading the durable repo is not asked again
        durable.get.assert_not_awaited()
        durable.save.assert_awaited_once()

    async def test_connect_degrades_when_ping_fails(self):
        """Test an unreachable backend is detected at start up."""
        durable = MagicMock()
        durable.ping = AsyncMock(side_effect=StorageUnavailable("down"))
        store = PersistentStore(durable)

        await store.connect()
        self.assertTrue(store.degraded)

    async def test_connect_keeps_healthy_backend(self):
        """Test a reachable backend stays in use."""
        await self.store.connect()
        self.assertFalse(self.store.degraded)

    async def test_store_without_durable_repo_is_memory_only(self):
        """Test a store created without a durable repo starts degraded."""
        store = PersistentStore(None)
        self.assertTrue(store.degraded)
        await store.set('k', {'a': 1})
        self.assertEqual(await store.get('k'), {'a': 1})


class TestRedisStoreRepo(unittest.IsolatedAsyncioTestCase):
    """Test cases for error wrapping of the Redis repo."""

    def _pool_with_connection(self, conn):
        conn.__aenter__.return_value = conn
        conn.__aexit__.return_value = False
        redis_pool = MagicMock()
        redis_pool.pool = object()
        redis_pool.get_connection = AsyncMock(return_value=conn)
        return redis_pool

    async def test_get_and_save(self):
        """Test values are read and written through a pooled connection."""
        conn = AsyncMock()
        conn.get.return_value = '"value"'
        repo = RedisStoreRepo(self._pool_with_connection(conn))

        self.assertEqual(await repo.get('quiz:key'), '"value"')
        await repo.save('quiz:key', '"new"')
        conn.set.assert_awaited_once_with('quiz:key', '"new"')

    async def test_redis_errors_become_storage_unavailable(self):
        """Test Redis failures are raised as StorageUnavailable."""
        conn = AsyncMock()
        conn.get.side_effect = RedisConnectionError("refused")
        conn.delete.side_effect = RedisConnectionError("refused")
        repo = RedisStoreRepo(self._pool_with_connection(conn))

        with self.assertRaises(StorageUnavailable):
            await repo.get('quiz:key')
        with self.assertRaises(StorageUnavailable):
            await repo.delete('quiz:key')

    async def test_missing_pool(self):
        """Test a repo used before the pool is created reports the store as unavailable."""
        redis_pool = MagicMock()
        redis_pool.pool = None
        repo = RedisStoreRepo(redis_pool)

        with self.assertRaises(StorageUnavailable):
            await repo.ping()


if __name__ == '__main__':
    unittest.main()
