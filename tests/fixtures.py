"""
Test fixtures and helpers shared by the quiz tests.
"""
import asyncio
from datetime import datetime, timedelta, timezone
from typing import Optional
from app.domain.entities.question import Question, Difficulty
from app.domain.entities.settings import QuizSettings
from app.domain.entities.leaderboard import LeaderboardEntry
from app.use_cases.leaderboard.leaderboard_use_cases import LeaderboardUseCases
from app.use_cases.quizzes.session_use_cases import QuizSessionUseCases
from infrastructure.repositories.store.persistent_store import PersistentStore
from infrastructure.repositories.store.memory_repo import MemoryStoreRepo


START_TIME = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Clock that only moves when the test moves it."""

    def __init__(self, now: datetime = START_TIME):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class YieldingStoreRepo(MemoryStoreRepo):
    """Memory repo that hands control back to the event loop on every call, like a network backend."""

    async def get(self, key):
        await asyncio.sleep(0)
        return await super().get(key)

    async def save(self, key, value):
        await asyncio.sleep(0)
        await super().save(key, value)

    async def delete(self, key):
        await asyncio.sleep(0)
        await super().delete(key)


class ManualTimer:
    """Question timer driven by the test instead of the event loop."""

    def __init__(self):
        self.started = []
        self.cancel_calls = 0
        self.active = False
        self._tick_callback = None
        self._expiry_callback = None

    def start(self, seconds, tick_callback, expiry_callback):
        self.started.append(seconds)
        self.active = True
        self._tick_callback = tick_callback
        self._expiry_callback = expiry_callback

    def cancel(self):
        self.cancel_calls += 1
        self.active = False

    async def tick(self, remaining: int):
        await self._tick_callback(remaining)

    async def expire(self):
        await self._expiry_callback()


class QuizFixtures:
    """Centralized fixtures for all test modules."""

    @staticmethod
    def create_sample_questions(count: int = 5) -> list[Question]:
        return [
            Question(
                text=f'Question {i + 1}?',
                correct_answer=f'Right {i + 1}',
                incorrect_answers=[f'Wrong {i + 1}a', f'Wrong {i + 1}b', f'Wrong {i + 1}c'],
                category='General Knowledge',
                difficulty=Difficulty.EASY
            )
            for i in range(count)
        ]

    @staticmethod
    def create_settings(**overrides) -> QuizSettings:
        values = {'question_count': 5, 'seconds_per_question': 15, 'negative_marking_value': 0}
        values.update(overrides)
        return QuizSettings(**values)

    @staticmethod
    def create_store() -> PersistentStore:
        # No durable repo, everything lives in memory
        return PersistentStore(None)

    @staticmethod
    def create_yielding_store() -> PersistentStore:
        # Every store call suspends, so concurrent tasks interleave at each await
        return PersistentStore(YieldingStoreRepo())

    @staticmethod
    def create_session(store: Optional[PersistentStore] = None, clock: Optional[FakeClock] = None,
                       timer: Optional[ManualTimer] = None, player_id: str = '42') -> QuizSessionUseCases:
        store = store or QuizFixtures.create_store()
        return QuizSessionUseCases(
            player_id=player_id,
            store=store,
            leaderboard_use_cases=LeaderboardUseCases(store),
            timer=timer or ManualTimer(),
            clock=clock or FakeClock()
        )

    @staticmethod
    def create_entry(score: float, time_taken_seconds: int, user: str = 'player') -> LeaderboardEntry:
        return LeaderboardEntry(
            user=user,
            score=score,
            correct_count=int(score),
            wrong_count=0,
            total=10,
            percentage=int(score) * 10,
            time_taken_seconds=time_taken_seconds,
            completed_at=START_TIME
        )
