from typing import Optional
from redis.asyncio import Redis


class RedisPool:
    def __init__(self, host: str, port: int, db: int, password: Optional[str] = None):
        self.host = host
        self.port = port
        self.db = db
        self.password = password
        self.pool = None

    async def create_pool(self):
        self.pool = await Redis(host=self.host, port=self.port, db=self.db,
                                password=self.password, decode_responses=True)

    async def get_connection(self) -> Redis:
        return self.pool.client()
    
    async def close_pool(self):
        if self.pool is not None:
            await self.pool.aclose()
        self.pool = None
