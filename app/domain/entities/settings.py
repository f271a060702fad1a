from typing import Optional
from pydantic import Field, field_validator
from app.domain.entities.base import Entity
from app.domain.entities.question import Difficulty


MIN_SECONDS_PER_QUESTION = 5
# Open Trivia DB returns at most 50 questions per request
MAX_QUESTION_COUNT = 50

# Open Trivia DB category ids offered in the settings menu
CATEGORY_NAMES = {
    9: 'General Knowledge',
    11: 'Entertainment: Film',
    12: 'Entertainment: Music',
    17: 'Science & Nature',
    18: 'Computers',
    21: 'Sports',
    22: 'Geography',
    23: 'History',
    24: 'Politics',
}

MIXED = 'Mixed'


def category_name(category_id: Optional[int]) -> str:
    return CATEGORY_NAMES.get(category_id, MIXED)


"""
QuizSettings Entity:
1. category (int, None): Open Trivia DB category id. None means any category.
2. difficulty (Difficulty, None): easy, medium or hard. None means any difficulty.
3. question_count (int): Requested amount of questions, at least 1.
4. seconds_per_question (int): Countdown per question. Values below 5 are raised to 5.
5. negative_marking_value (float): Score delta for a wrong or timed out answer. Zero or negative.
"""
class QuizSettings(Entity):
    category: Optional[int] = None
    difficulty: Optional[Difficulty] = None
    question_count: int = Field(default=10, ge=1)
    seconds_per_question: int = 15
    negative_marking_value: float = Field(default=0.0, le=0)

    @field_validator('seconds_per_question', mode='before')
    @classmethod
    def clamp_seconds(cls, value) -> int:
        try:
            seconds = int(value)
        except TypeError as e:
            # None and other values int() can not take
            raise ValueError(f'seconds per question must be a number, got {value!r}') from e
        return max(MIN_SECONDS_PER_QUESTION, seconds)
