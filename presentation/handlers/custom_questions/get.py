import logging
from aiogram import F
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery
from infrastructure.services.repo_service import RepoService
from app.use_cases.questions.custom_question_use_cases import CustomQuestionUseCases
from presentation.messages import NO_CUSTOM_QUESTIONS_MSG
from presentation.rendering import render_custom_questions
from presentation.routers import router_custom_questions
from presentation.utils import error_handler, split_message
import presentation.keyboards as kb


logger = logging.getLogger('handlers')


async def send_custom_questions(bot, user_id: str, repo_service: RepoService, header: str = None):
    questions = await CustomQuestionUseCases(store=repo_service.store).get_all(user_id)
    text = render_custom_questions(questions) if questions else NO_CUSTOM_QUESTIONS_MSG
    if header:
        text = f'{header}\n\n{text}'
    chunks = split_message(text)
    for chunk in chunks[:-1]:
        await bot.send_message(user_id, chunk)
    await bot.send_message(user_id, chunks[-1], reply_markup=await kb.custom_questions(len(questions)))


@router_custom_questions.callback_query(F.data == 'custom_questions')
@error_handler
async def get_custom_questions(callback: CallbackQuery, state: FSMContext, repo_service: RepoService, **kwargs):
    user_id = str(callback.from_user.id)
    logger.info("GETTING CUSTOM QUESTIONS", extra={'user': callback.from_user.username})

    await state.clear()
    await send_custom_questions(callback.bot, user_id, repo_service)
