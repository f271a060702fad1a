from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import Field
from app.domain.entities.base import Entity
from app.domain.entities.question import Question
from app.domain.entities.settings import QuizSettings
from app.domain.entities.answer import AnsweredRecord, OptionState


class SessionStatus(str, Enum):
    IDLE = 'idle'
    CONFIGURING = 'configuring'
    IN_PROGRESS = 'in_progress'
    FINISHED = 'finished'


"""
SessionState Entity (the persisted snapshot of one quiz attempt):
1. user (str): Display name of the player.
2. settings (QuizSettings): Settings the session was started with.
3. questions (list[Question]): Questions in play order.
4. current_index (int): Index of the displayed question.
5. score (float): Running score. Can be fractional and negative.
6. correct_count, wrong_count (int): Answer counters.
7. answer_log (dict[int, AnsweredRecord]): Records by question index.
8. time_left_seconds (int): Countdown value of the current question.
9. started_at (datetime): Start time of the session.
10. finished (bool): True once the session has been finished.
"""
class SessionState(Entity):
    user: str
    settings: QuizSettings
    questions: list[Question]
    current_index: int = 0
    score: float = 0.0
    correct_count: int = 0
    wrong_count: int = 0
    answer_log: dict[int, AnsweredRecord] = Field(default_factory=dict)
    time_left_seconds: int = 0
    started_at: datetime
    finished: bool = False

    @property
    def current_question(self) -> Question:
        return self.questions[self.current_index]

    @property
    def is_last(self) -> bool:
        return self.current_index == len(self.questions) - 1

    def is_answered(self, index: Optional[int] = None) -> bool:
        return (self.current_index if index is None else index) in self.answer_log


class QuestionView(Entity):
    """Everything a front end needs to draw the current question."""
    index: int
    total: int
    text: str
    category: str
    difficulty: str
    options: list[OptionState]
    answered: bool
    is_last: bool
    can_retreat: bool
    time_left_seconds: int
    score_display: str
