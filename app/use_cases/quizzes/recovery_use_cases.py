import logging
from pydantic import ValidationError
from app.domain.repositories_interfaces.store_repo import PersistentStoreInterface
from app.domain.entities.session import SessionState
from app.domain.entities.settings import QuizSettings
from app.domain.exceptions import NothingToResume
from app.domain import storage_keys
from app.domain.storage_keys import player_key


logger = logging.getLogger('use_cases')


class RecoveryUseCases:
    """Finds an interrupted session of a player in the store."""

    def __init__(self, store: PersistentStoreInterface):
        self.store = store

    async def load_snapshot(self, player_id: str) -> SessionState:
        """
        Loads the interrupted session of the player.

        Settings missing on the snapshot are taken from the last saved settings.

        :param player_id: Identifier of the player.
        :return: The validated snapshot.
        :raises NothingToResume: If there is no unfinished snapshot with questions.
        """
        raw = await self.store.get(player_key(player_id, storage_keys.SESSION_STATE))
        if not isinstance(raw, dict) or raw.get('finished') or not raw.get('questions'):
            raise NothingToResume()
        if not raw.get('settings'):
            raw = {**raw, 'settings': await self.last_settings(player_id)}
        try:
            return SessionState.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Stored session can not be resumed: {e}", extra={'user': raw.get('user')})
            raise NothingToResume() from e

    async def has_resumable(self, player_id: str) -> bool:
        try:
            await self.load_snapshot(player_id)
        except NothingToResume:
            return False
        return True

    async def discard(self, player_id: str) -> None:
        await self.store.remove(player_key(player_id, storage_keys.SESSION_STATE))

    async def last_settings(self, player_id: str) -> dict:
        raw = await self.store.get(player_key(player_id, storage_keys.LAST_SETTINGS))
        if isinstance(raw, dict):
            return raw
        return QuizSettings().to_storage()
