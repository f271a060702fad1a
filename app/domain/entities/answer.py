from enum import Enum
from pydantic import ConfigDict, Field
from app.domain.entities.base import Entity


TIMED_OUT = '(timed out)'


"""
AnsweredRecord Entity:
1. question_text (str): Text of the answered question.
2. shown_options (list[str]): Options in the order they were displayed.
3. correct_answer (str): The correct option.
4. selected_answer (str): The chosen option or TIMED_OUT.
5. is_correct (bool): Whether the selected option was the correct one.
6. time_taken_seconds (float): Seconds spent on the question.
7. category (str): Category of the question.
Created exactly once per question index and never changed afterwards.
"""
class AnsweredRecord(Entity):
    model_config = ConfigDict(frozen=True)

    question_text: str
    shown_options: list[str]
    correct_answer: str
    selected_answer: str
    is_correct: bool
    time_taken_seconds: float = Field(ge=0)
    category: str = ''

    @property
    def timed_out(self) -> bool:
        return self.selected_answer == TIMED_OUT


class OptionStyle(str, Enum):
    NEUTRAL = 'neutral'
    CORRECT = 'correct'
    WRONG = 'wrong'


class OptionState(Entity):
    model_config = ConfigDict(frozen=True)

    text: str
    disabled: bool = False
    style: OptionStyle = OptionStyle.NEUTRAL
