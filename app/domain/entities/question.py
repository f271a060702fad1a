from enum import Enum
from pydantic import ConfigDict, Field
from app.domain.entities.base import Entity


class Difficulty(str, Enum):
    EASY = 'easy'
    MEDIUM = 'medium'
    HARD = 'hard'
    CUSTOM = 'custom'


"""
Question Entity:
1. text (str): The question text, already decoded from HTML entities.
2. correct_answer (str): The only correct option.
3. incorrect_answers (list[str]): Distractors. Contains at least one option.
4. category (str): Human readable category name ('Custom' for user authored questions).
5. difficulty (Difficulty): Provider difficulty or 'custom'.
Questions are immutable once fetched.
"""
class Question(Entity):
    model_config = ConfigDict(frozen=True)

    text: str
    correct_answer: str
    incorrect_answers: list[str] = Field(min_length=1)
    category: str = 'General'
    difficulty: Difficulty = Difficulty.MEDIUM

    @property
    def options(self) -> list[str]:
        return [self.correct_answer, *self.incorrect_answers]
