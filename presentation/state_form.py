from aiogram.filters.state import State, StatesGroup


class Form(StatesGroup):
    waiting_for_name = State()
    waiting_for_question_count = State()
    waiting_for_seconds = State()
    waiting_for_custom_question = State()
    waiting_for_custom_options = State()
