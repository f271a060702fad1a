from datetime import datetime
from pydantic import Field
from app.domain.entities.base import Entity


"""
CustomQuestion Entity:
1. question_text (str): Question authored by the player.
2. options (list[str]): Exactly four options.
3. correct_option (str): One of the options.
4. added_at (datetime): When the question was added.
"""
class CustomQuestion(Entity):
    question_text: str
    options: list[str] = Field(min_length=4, max_length=4)
    correct_option: str
    added_at: datetime
