from typing import Optional
from app.domain.repositories_interfaces.store_repo import StoreRepoInterface


class MemoryStoreRepo(StoreRepoInterface):
    def __init__(self):
        self.data: dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def save(self, key: str, value: str) -> None:
        self.data[key] = value

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)
