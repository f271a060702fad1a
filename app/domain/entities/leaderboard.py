from datetime import datetime
from typing import Optional
from pydantic import ConfigDict
from app.domain.entities.base import Entity
from app.domain.entities.answer import AnsweredRecord


"""
LeaderboardEntry Entity:
1. user (str): Display name of the player.
2. score (float): Final score rounded to two decimals.
3. correct_count, wrong_count, total (int): Answer statistics.
4. percentage (int): Share of correct answers, 0..100.
5. time_taken_seconds (int): Whole session duration. Used as the tie-break.
6. completed_at (datetime): When the session was finished.
7. category, difficulty (str): Settings of the run, 'Mixed' when not filtered.
"""
class LeaderboardEntry(Entity):
    model_config = ConfigDict(frozen=True)

    user: str
    score: float
    correct_count: int
    wrong_count: int
    total: int
    percentage: int
    time_taken_seconds: int
    completed_at: datetime
    category: str = 'Mixed'
    difficulty: str = 'Mixed'


class QuizResult(Entity):
    user: str
    score: float
    correct_count: int
    wrong_count: int
    total: int
    percentage: int
    total_elapsed_seconds: int
    review: list[AnsweredRecord]
    entry: LeaderboardEntry
    score_display: str = '0.0'
    rank: Optional[int] = None

    @property
    def elapsed_display(self) -> str:
        minutes, seconds = divmod(self.total_elapsed_seconds, 60)
        return f'{minutes}m {seconds}s'
