import asyncio
import logging
import aiohttp.client_exceptions
from app.domain.services_interfaces.aiohttp_service import AiohttpServiceInterface
from app.domain.exceptions import FetchFailed
import aiohttp


logger = logging.getLogger('external_apis')


class AiohttpService(AiohttpServiceInterface):
    def __init__(self, timeout: float = 10):
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.aiohttp_client = None

    def _session(self) -> aiohttp.ClientSession:
        # The session has to be created inside the running event loop
        if self.aiohttp_client is None or self.aiohttp_client.closed:
            self.aiohttp_client = aiohttp.ClientSession(timeout=self.timeout)
        return self.aiohttp_client

    async def get(self, url, headers=None, params=None):
        try:
            async with self._session().get(url, headers=headers, params=params) as response:
                if not response.ok:
                    logger.error(f"GET {url} failed with status {response.status}")
                    raise FetchFailed()
                try:
                    return await response.json()
                except aiohttp.client_exceptions.ContentTypeError as e:
                    logger.error(f"GET {url} returned non JSON content: {e}")
                    raise FetchFailed() from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"GET {url} failed: {e}")
            raise FetchFailed() from e

    async def close(self):
        if self.aiohttp_client is not None:
            await self.aiohttp_client.close()
        self.aiohttp_client = None
