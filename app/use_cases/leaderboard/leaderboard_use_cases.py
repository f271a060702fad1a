import asyncio
import logging
from datetime import datetime
from typing import Optional
from pydantic import ValidationError
from app.domain.repositories_interfaces.store_repo import PersistentStoreInterface
from app.domain.entities.leaderboard import LeaderboardEntry
from app.domain.entities.session import SessionState
from app.domain.entities.settings import category_name, MIXED
from app.domain import storage_keys
from app.use_cases.quizzes.scoring import percentage, leaderboard_score


logger = logging.getLogger('use_cases')

LEADERBOARD_CAPACITY = 100


def ranking_key(entry: LeaderboardEntry) -> tuple:
    # Higher score first, faster run first among equal scores
    return (-entry.score, entry.time_taken_seconds)


class LeaderboardUseCases:
    def __init__(self, store: PersistentStoreInterface, capacity: int = LEADERBOARD_CAPACITY):
        self.store = store
        self.capacity = capacity
        # The board is shared by all players, read-modify-write must not interleave
        self._lock = asyncio.Lock()

    async def entries(self) -> list[LeaderboardEntry]:
        """
        Returns the stored entries in storage order, which is already the ranking order.
        Entries that can not be parsed are skipped.
        """
        raw_entries = await self.store.get(storage_keys.LEADERBOARD, [])
        if not isinstance(raw_entries, list):
            return []
        entries = []
        for raw_entry in raw_entries:
            try:
                entries.append(LeaderboardEntry.model_validate(raw_entry))
            except ValidationError as e:
                logger.warning(f"Skipping malformed leaderboard entry: {e}")
        return entries

    async def submit(self, entry: LeaderboardEntry) -> Optional[int]:
        """
        Adds a finished run to the leaderboard.

        The whole board is re-sorted by score (descending) and run time (ascending)
        and cut to the capacity before it is saved.

        :param entry: Entry of the finished session.
        :return: 1-based rank of the entry, or None if it did not make it into the board.
        """
        async with self._lock:
            board = await self.entries()
            board.append(entry)
            board.sort(key=ranking_key)
            board = board[:self.capacity]
            await self.store.set(storage_keys.LEADERBOARD, [item.to_storage() for item in board])
        logger.info(f"Leaderboard entry saved with score {entry.score}", extra={'user': entry.user})
        return self.rank_of(board, entry)

    async def clear(self) -> None:
        async with self._lock:
            await self.store.set(storage_keys.LEADERBOARD, [])
        logger.info("Leaderboard cleared")

    @staticmethod
    def rank_of(board: list[LeaderboardEntry], entry: LeaderboardEntry) -> Optional[int]:
        for i, item in enumerate(board):
            if item is entry:
                return i + 1
        return None

    @staticmethod
    def entry_from_session(state: SessionState, elapsed_seconds: int, completed_at: datetime) -> LeaderboardEntry:
        return LeaderboardEntry(
            user=state.user,
            score=leaderboard_score(state.score),
            correct_count=state.correct_count,
            wrong_count=state.wrong_count,
            total=len(state.questions),
            percentage=percentage(state.correct_count, len(state.questions)),
            time_taken_seconds=elapsed_seconds,
            completed_at=completed_at,
            category=category_name(state.settings.category),
            difficulty=state.settings.difficulty.value if state.settings.difficulty else MIXED
        )
