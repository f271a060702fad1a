from aiogram.types import CallbackQuery, Message
from aiogram import F
from aiogram.fsm.context import FSMContext
import logging
from presentation.routers import router_quiz
from infrastructure.services.repo_service import RepoService
from app.domain.entities.question import Difficulty
from app.domain.entities.settings import QuizSettings, MAX_QUESTION_COUNT, MIN_SECONDS_PER_QUESTION
from app.use_cases.questions.custom_question_use_cases import CustomQuestionUseCases
from app.use_cases.questions.question_source_use_cases import QuestionSourceUseCases
from app.use_cases.quizzes.recovery_use_cases import RecoveryUseCases
from app.use_cases.users.user_use_cases import UserUseCases
from presentation.state_form import Form
from presentation.utils import error_handler, send_menu, split_message
from presentation.quiz_messenger import get_messenger, release_messenger
from presentation.rendering import render_result, render_review
from presentation.messages import (CHOOSE_CATEGORY_MSG, CHOOSE_DIFFICULTY_MSG, ENTER_COUNT_MSG, INVALID_COUNT_MSG,
                                   ENTER_SECONDS_MSG, INVALID_SECONDS_MSG, CHOOSE_NEGATIVE_MSG,
                                   LOADING_QUESTIONS_MSG, CORRECT_MSG, WRONG_MSG, QUIT_MSG, NO_ACTIVE_QUIZ_MSG)
import presentation.keyboards as kb


logger = logging.getLogger('handlers')

@router_quiz.callback_query(F.data == 'new_quiz')
@error_handler
async def new_quiz(callback: CallbackQuery, state: FSMContext, repo_service: RepoService, **kwargs):
    user_id = str(callback.from_user.id)
    logger.info("CONFIGURING QUIZ", extra={'user': callback.from_user.username})

    session = repo_service.session_registry.get(user_id)
    settings = await session.begin_configuration()
    # The form is pre-filled with the previous settings
    await state.set_state(None)
    await state.set_data({'settings': settings.to_storage()})
    await callback.bot.send_message(user_id, CHOOSE_CATEGORY_MSG, reply_markup=await kb.categories())


@router_quiz.callback_query(F.data.endswith('quiz_category'))
@error_handler
async def quiz_category(callback: CallbackQuery, state: FSMContext, **kwargs):
    user_id = str(callback.from_user.id)
    category = int(callback.data.split()[0])
    logger.info("CHOOSING DIFFICULTY", extra={'user': callback.from_user.username})

    settings = (await state.get_data()).get('settings', {})
    settings['category'] = category or None
    await state.update_data(settings=settings)
    await callback.bot.send_message(user_id, CHOOSE_DIFFICULTY_MSG, reply_markup=await kb.difficulties())


@router_quiz.callback_query(F.data.endswith('quiz_difficulty'))
@error_handler
async def quiz_difficulty(callback: CallbackQuery, state: FSMContext, **kwargs):
    user_id = str(callback.from_user.id)
    difficulty = callback.data.split()[0]
    logger.info("ENTERING QUESTION COUNT", extra={'user': callback.from_user.username})

    settings = (await state.get_data()).get('settings', {})
    settings['difficulty'] = None if difficulty == 'any' else Difficulty(difficulty).value
    await state.update_data(settings=settings)
    await state.set_state(Form.waiting_for_question_count)
    await callback.bot.send_message(
        user_id,
        ENTER_COUNT_MSG.format(max_count=MAX_QUESTION_COUNT, previous=settings.get('questionCount', 10)),
        reply_markup=await kb.inline_lists([], [], '')
    )


@router_quiz.message(Form.waiting_for_question_count)
@error_handler
async def quiz_question_count(message: Message, state: FSMContext, **kwargs):
    user_id = str(message.from_user.id)
    text = (message.text or '').strip()
    if not text.isdigit() or not 1 <= int(text) <= MAX_QUESTION_COUNT:
        await message.bot.send_message(user_id, INVALID_COUNT_MSG.format(max_count=MAX_QUESTION_COUNT))
        return
    logger.info("ENTERING SECONDS PER QUESTION", extra={'user': message.from_user.username})

    settings = (await state.get_data()).get('settings', {})
    settings['questionCount'] = int(text)
    await state.update_data(settings=settings)
    await state.set_state(Form.waiting_for_seconds)
    await message.bot.send_message(
        user_id,
        ENTER_SECONDS_MSG.format(min_seconds=MIN_SECONDS_PER_QUESTION,
                                 previous=settings.get('secondsPerQuestion', 15)),
        reply_markup=await kb.inline_lists([], [], '')
    )


@router_quiz.message(Form.waiting_for_seconds)
@error_handler
async def quiz_seconds(message: Message, state: FSMContext, **kwargs):
    user_id = str(message.from_user.id)
    text = (message.text or '').strip()
    if not text.isdigit():
        await message.bot.send_message(user_id, INVALID_SECONDS_MSG)
        return
    logger.info("CHOOSING NEGATIVE MARKING", extra={'user': message.from_user.username})

    settings = (await state.get_data()).get('settings', {})
    # Values below the minimum are raised by QuizSettings
    settings['secondsPerQuestion'] = int(text)
    await state.update_data(settings=settings)
    await state.set_state(None)
    await message.bot.send_message(user_id, CHOOSE_NEGATIVE_MSG, reply_markup=await kb.negative_marking())


@router_quiz.callback_query(F.data.endswith('quiz_negative'))
@error_handler
async def start_quiz(callback: CallbackQuery, state: FSMContext, repo_service: RepoService, **kwargs):
    user_id = str(callback.from_user.id)
    username = callback.from_user.username
    logger.info("STARTING QUIZ", extra={'user': username})

    settings = (await state.get_data()).get('settings', {})
    settings['negativeMarkingValue'] = float(callback.data.split()[0])
    settings = QuizSettings.model_validate(settings)

    question_source = QuestionSourceUseCases(
        trivia_service=repo_service.trivia_service,
        custom_question_use_cases=CustomQuestionUseCases(store=repo_service.store)
    )
    name = await UserUseCases(store=repo_service.store).get_name(user_id) or username or user_id

    session = repo_service.session_registry.get(user_id)
    messenger = get_messenger(callback.bot, user_id, session)
    messenger.reset()
    await callback.bot.send_message(user_id, LOADING_QUESTIONS_MSG)
    await session.launch(name, settings, question_source)
    await state.clear()
    await messenger.send_question()


@router_quiz.callback_query(F.data == 'resume_quiz')
@error_handler
async def resume_quiz(callback: CallbackQuery, state: FSMContext, repo_service: RepoService, **kwargs):
    user_id = str(callback.from_user.id)
    logger.info("RESUMING QUIZ", extra={'user': callback.from_user.username})

    session = repo_service.session_registry.get(user_id)
    messenger = get_messenger(callback.bot, user_id, session)
    if not session.in_progress:
        await session.resume_saved(RecoveryUseCases(store=repo_service.store))
    await state.clear()
    messenger.reset()
    await messenger.send_question()


@router_quiz.callback_query(F.data.endswith('answer'))
@error_handler
async def answer_question(callback: CallbackQuery, repo_service: RepoService, **kwargs):
    user_id = str(callback.from_user.id)
    question_idx, option_idx = (int(part) for part in callback.data.split()[:2])

    session = repo_service.session_registry.get(user_id)
    view = session.current_view()
    if view is None:
        await callback.answer(NO_ACTIVE_QUIZ_MSG)
        return
    if view.answered or question_idx != view.index or option_idx >= len(view.options):
        # Buttons of an answered or no longer displayed question are inactive
        await callback.answer()
        return

    logger.info("HANDLING QUIZ ANSWER", extra={'user': callback.from_user.username})
    record = await session.answer(view.options[option_idx].text, index=question_idx)
    if record is None:
        await callback.answer()
        return
    messenger = get_messenger(callback.bot, user_id, session)
    messenger.message_id = callback.message.message_id
    await messenger.refresh()
    await callback.answer(CORRECT_MSG if record.is_correct else WRONG_MSG.format(correct=record.correct_answer))


@router_quiz.callback_query(F.data == 'next_question')
@error_handler
async def next_question(callback: CallbackQuery, repo_service: RepoService, **kwargs):
    user_id = str(callback.from_user.id)
    username = callback.from_user.username

    session = repo_service.session_registry.get(user_id)
    if not session.in_progress:
        await callback.answer(NO_ACTIVE_QUIZ_MSG)
        return

    logger.info("NEXT QUESTION", extra={'user': username})
    result = await session.advance()
    if result is None:
        messenger = get_messenger(callback.bot, user_id, session)
        messenger.message_id = callback.message.message_id
        await messenger.refresh()
        await callback.answer()
        return

    logger.info("QUIZ FINISHED", extra={'user': username})
    await callback.answer()
    await callback.bot.send_message(user_id, render_result(result, result.rank))
    for chunk in split_message(render_review(result)):
        await callback.bot.send_message(user_id, chunk)
    session.close()
    release_messenger(repo_service.session_registry, user_id)
    await send_menu(callback.bot, user_id, repo_service)


@router_quiz.callback_query(F.data == 'prev_question')
@error_handler
async def previous_question(callback: CallbackQuery, repo_service: RepoService, **kwargs):
    user_id = str(callback.from_user.id)

    session = repo_service.session_registry.get(user_id)
    if await session.retreat():
        logger.info("PREVIOUS QUESTION", extra={'user': callback.from_user.username})
        messenger = get_messenger(callback.bot, user_id, session)
        messenger.message_id = callback.message.message_id
        await messenger.refresh()
    await callback.answer()


@router_quiz.callback_query(F.data == 'quit_quiz')
@error_handler
async def quit_quiz(callback: CallbackQuery, repo_service: RepoService, **kwargs):
    user_id = str(callback.from_user.id)
    logger.info("QUITTING QUIZ", extra={'user': callback.from_user.username})

    session = repo_service.session_registry.get(user_id)
    if not session.in_progress:
        await callback.answer(NO_ACTIVE_QUIZ_MSG)
        return
    await session.quit()
    release_messenger(repo_service.session_registry, user_id)
    await callback.answer()
    await send_menu(callback.bot, user_id, repo_service, text=QUIT_MSG)
