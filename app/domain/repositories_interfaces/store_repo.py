from abc import ABC, abstractmethod
from typing import Optional


class StoreRepoInterface(ABC):
    """Raw string key-value storage. Implementations raise StorageUnavailable on backend failures."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    async def save(self, key: str, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, key: str) -> None:
        raise NotImplementedError

    async def ping(self) -> None:
        pass


class PersistentStoreInterface(ABC):
    @abstractmethod
    async def get(self, key: str, default=None):
        """
        Reads a value stored under the key.

        :param key: Key without the namespace prefix
        :param default: Returned when nothing is stored under the key
        :return: The JSON decoded value, or the raw string if it is not valid JSON
        """
        raise NotImplementedError

    @abstractmethod
    async def set(self, key: str, value) -> None:
        """
        Serializes the value to JSON and stores it. Never raises.
        """
        raise NotImplementedError

    @abstractmethod
    async def remove(self, key: str) -> None:
        raise NotImplementedError
