from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton
from aiogram.utils.keyboard import InlineKeyboardBuilder
from app.domain.entities.answer import OptionStyle
from app.domain.entities.session import QuestionView
from app.domain.entities.settings import CATEGORY_NAMES


STYLE_MARKS = {
    OptionStyle.NEUTRAL: '',
    OptionStyle.CORRECT: '✅ ',
    OptionStyle.WRONG: '❌ ',
}

NEGATIVE_MARKING_VALUES = [0, -0.25, -0.5, -1]


async def inline_lists(lst, ids, param, menu=True):
    keyboard = InlineKeyboardBuilder()
    for i, inst in enumerate(lst):
        keyboard.button(text=inst, callback_data=f'{ids[i]} {param}')
    if menu:
        keyboard.button(text='Back to menu', callback_data='menu')
    keyboard = keyboard.adjust(*[1]*len(lst))
    return keyboard.as_markup()


def main_menu(can_resume: bool = False) -> InlineKeyboardMarkup:
    rows = [[InlineKeyboardButton(text='Start quiz', callback_data='new_quiz')]]
    if can_resume:
        rows.append([InlineKeyboardButton(text='Resume quiz', callback_data='resume_quiz')])
    rows += [
        [InlineKeyboardButton(text='Leaderboard', callback_data='leaderboard'),
         InlineKeyboardButton(text='Custom questions', callback_data='custom_questions')],
        [InlineKeyboardButton(text='Dark mode', callback_data='dark_mode'),
         InlineKeyboardButton(text='Instruction', callback_data='instruction')],
        [InlineKeyboardButton(text='Logout', callback_data='logout')],
    ]
    return InlineKeyboardMarkup(inline_keyboard=rows, input_field_placeholder='Choose an option')


async def categories():
    names = ['Any category'] + list(CATEGORY_NAMES.values())
    ids = [0] + list(CATEGORY_NAMES.keys())
    return await inline_lists(names, ids, 'quiz_category')


async def difficulties():
    return await inline_lists(['Any difficulty', 'Easy', 'Medium', 'Hard'],
                              ['any', 'easy', 'medium', 'hard'], 'quiz_difficulty')


async def negative_marking():
    names = ['No penalty' if value == 0 else f'{value} points' for value in NEGATIVE_MARKING_VALUES]
    return await inline_lists(names, NEGATIVE_MARKING_VALUES, 'quiz_negative')


def question(view: QuestionView) -> InlineKeyboardMarkup:
    keyboard = InlineKeyboardBuilder()
    for i, option in enumerate(view.options):
        keyboard.button(text=STYLE_MARKS[option.style] + option.text, callback_data=f'{view.index} {i} answer')
    navigation = 0
    if view.can_retreat:
        keyboard.button(text='⬅️ Previous', callback_data='prev_question')
        navigation += 1
    if view.answered:
        keyboard.button(text='Finish quiz 🏁' if view.is_last else 'Next question ➡️', callback_data='next_question')
        navigation += 1
    keyboard.button(text='Quit', callback_data='quit_quiz')
    navigation += 1
    return keyboard.adjust(*[1]*len(view.options), navigation).as_markup()


async def custom_correct_option(options: list[str]):
    return await inline_lists(options, list(range(len(options))), 'custom_correct')


def leaderboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text='Clear leaderboard', callback_data='clear_leaderboard')],
        [InlineKeyboardButton(text='Back to menu', callback_data='menu')],
    ])


async def custom_questions(count: int):
    keyboard = InlineKeyboardBuilder()
    keyboard.button(text='Add question', callback_data='add_custom_question')
    for i in range(count):
        keyboard.button(text=f'Delete Q{i + 1}', callback_data=f'{i} custom_delete')
    keyboard.button(text='Back to menu', callback_data='menu')
    return keyboard.adjust(1).as_markup()
