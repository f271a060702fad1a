import logging
from aiogram import F
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message
from infrastructure.services.repo_service import RepoService
from app.use_cases.questions.custom_question_use_cases import CustomQuestionUseCases
from presentation.handlers.custom_questions.get import send_custom_questions
from presentation.messages import (ENTER_CUSTOM_QUESTION_MSG, ENTER_CUSTOM_OPTIONS_MSG,
                                   CHOOSE_CUSTOM_CORRECT_MSG, CUSTOM_ADDED_MSG)
from presentation.routers import router_custom_questions
from presentation.state_form import Form
from presentation.utils import error_handler
import presentation.keyboards as kb


logger = logging.getLogger('handlers')

@router_custom_questions.callback_query(F.data == 'add_custom_question')
@error_handler
async def add_custom_question(callback: CallbackQuery, state: FSMContext, **kwargs):
    user_id = str(callback.from_user.id)
    logger.info("ENTERING CUSTOM QUESTION", extra={'user': callback.from_user.username})

    await state.set_state(Form.waiting_for_custom_question)
    await callback.bot.send_message(user_id, ENTER_CUSTOM_QUESTION_MSG,
                                    reply_markup=await kb.inline_lists([], [], ''))


@router_custom_questions.message(Form.waiting_for_custom_question)
@error_handler
async def custom_question_text(message: Message, state: FSMContext, **kwargs):
    user_id = str(message.from_user.id)
    question_text = (message.text or '').strip()
    if not question_text:
        await message.bot.send_message(user_id, ENTER_CUSTOM_QUESTION_MSG)
        return
    logger.info("ENTERING CUSTOM OPTIONS", extra={'user': message.from_user.username})

    await state.update_data(question_text=question_text)
    await state.set_state(Form.waiting_for_custom_options)
    await message.bot.send_message(user_id, ENTER_CUSTOM_OPTIONS_MSG)


@router_custom_questions.message(Form.waiting_for_custom_options)
@error_handler
async def custom_question_options(message: Message, state: FSMContext, **kwargs):
    user_id = str(message.from_user.id)
    # Invalid options keep the form in this state, the player sends them again
    options = CustomQuestionUseCases.clean_options((message.text or '').split('\n'))
    logger.info("CHOOSING CUSTOM CORRECT OPTION", extra={'user': message.from_user.username})

    await state.update_data(options=options)
    await state.set_state(None)
    await message.bot.send_message(user_id, CHOOSE_CUSTOM_CORRECT_MSG,
                                   reply_markup=await kb.custom_correct_option(options))


@router_custom_questions.callback_query(F.data.endswith('custom_correct'))
@error_handler
async def save_custom_question(callback: CallbackQuery, state: FSMContext, repo_service: RepoService, **kwargs):
    user_id = str(callback.from_user.id)
    correct_idx = int(callback.data.split()[0])
    logger.info("SAVING CUSTOM QUESTION", extra={'user': callback.from_user.username})

    data = await state.get_data()
    options = data.get('options', [])
    correct_option = options[correct_idx] if correct_idx < len(options) else ''
    await CustomQuestionUseCases(store=repo_service.store).add(
        user_id, data.get('question_text', ''), options, correct_option
    )
    await state.clear()
    await send_custom_questions(callback.bot, user_id, repo_service, header=CUSTOM_ADDED_MSG)
