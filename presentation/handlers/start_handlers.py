import logging
from aiogram import F
from aiogram.filters import CommandStart
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message
from presentation.messages import START_MSG, ASK_NAME_MSG, LOGGED_OUT_MSG, DARK_MODE_MSG
from presentation.utils import error_handler, send_menu
from presentation.quiz_messenger import release_messenger
from presentation.state_form import Form
from infrastructure.services.repo_service import RepoService
from presentation.routers import main_router
from app.use_cases.users.user_use_cases import UserUseCases


logger = logging.getLogger('handlers')

@main_router.message(CommandStart())
@error_handler
async def start(message: Message, state: FSMContext, repo_service: RepoService, **kwargs):
    # Get user info
    user_id = str(message.from_user.id)
    username = message.from_user.username

    logger.info("START", extra={'user': username})

    user_use_cases = UserUseCases(store=repo_service.store)
    name = await user_use_cases.get_name(user_id)
    if name is None:
        # New player, the display name is asked once and used on the leaderboard
        await state.set_state(Form.waiting_for_name)
        await message.bot.send_message(user_id, text=ASK_NAME_MSG)
        return

    await state.clear()
    await send_menu(message.bot, user_id, repo_service, text=START_MSG.format(name=name))


@main_router.message(Form.waiting_for_name)
@error_handler
async def save_name(message: Message, state: FSMContext, repo_service: RepoService, **kwargs):
    user_id = str(message.from_user.id)
    username = message.from_user.username

    logger.info("SAVING NAME", extra={'user': username})

    user_use_cases = UserUseCases(store=repo_service.store)
    name = await user_use_cases.save_name(user_id, message.text or username)
    await state.clear()
    await send_menu(message.bot, user_id, repo_service, text=START_MSG.format(name=name))


@main_router.callback_query(F.data == 'logout')
@error_handler
async def logout(callback: CallbackQuery, state: FSMContext, repo_service: RepoService, **kwargs):
    user_id = str(callback.from_user.id)
    username = callback.from_user.username

    logger.info("LOGOUT", extra={'user': username})

    session = repo_service.session_registry.get(user_id)
    await session.quit()
    release_messenger(repo_service.session_registry, user_id)
    await UserUseCases(store=repo_service.store).logout(user_id)
    await state.clear()
    await callback.bot.send_message(user_id, text=LOGGED_OUT_MSG)


@main_router.callback_query(F.data == 'dark_mode')
@error_handler
async def dark_mode(callback: CallbackQuery, repo_service: RepoService, **kwargs):
    user_id = str(callback.from_user.id)
    username = callback.from_user.username

    logger.info("TOGGLE DARK MODE", extra={'user': username})

    enabled = await UserUseCases(store=repo_service.store).toggle_dark_mode(user_id)
    await send_menu(callback.bot, user_id, repo_service,
                    text=DARK_MODE_MSG.format(state='on' if enabled else 'off'))
