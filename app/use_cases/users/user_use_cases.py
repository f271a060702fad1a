from typing import Optional
from app.domain.repositories_interfaces.store_repo import PersistentStoreInterface
from app.domain import storage_keys
from app.domain.storage_keys import player_key


class UserUseCases:
    def __init__(self, store: PersistentStoreInterface):
        self.store = store

    async def save_name(self, player_id: str, name: str) -> str:
        name = (name or '').strip() or f'Player {player_id}'
        await self.store.set(player_key(player_id, storage_keys.USER), name)
        return name

    async def get_name(self, player_id: str) -> Optional[str]:
        name = await self.store.get(player_key(player_id, storage_keys.USER))
        return str(name) if name is not None else None

    async def logout(self, player_id: str) -> None:
        # Forgets the player and the interrupted session, keeps leaderboard and custom questions
        await self.store.remove(player_key(player_id, storage_keys.USER))
        await self.store.remove(player_key(player_id, storage_keys.SESSION_STATE))

    async def is_dark_mode(self, player_id: str) -> bool:
        return bool(await self.store.get(player_key(player_id, storage_keys.DARK_MODE), False))

    async def toggle_dark_mode(self, player_id: str) -> bool:
        dark_mode = not await self.is_dark_mode(player_id)
        await self.store.set(player_key(player_id, storage_keys.DARK_MODE), dark_mode)
        return dark_mode
