import logging
from aiogram import F
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery
from infrastructure.services.repo_service import RepoService
from presentation.utils import error_handler, send_menu
from presentation.quiz_messenger import release_messenger
from presentation.routers import main_router


logger = logging.getLogger('handlers')

@main_router.callback_query(F.data == 'menu')
@error_handler
async def menu(callback: CallbackQuery, state: FSMContext, repo_service: RepoService, **kwargs):
    user_id = str(callback.from_user.id)
    username = callback.from_user.username

    logger.info("MENU", extra={'user': username})

    # Leaving any form, a finished quiz goes back to idle
    await state.clear()
    repo_service.session_registry.get(user_id).close()
    release_messenger(repo_service.session_registry, user_id)
    await send_menu(callback.bot, user_id, repo_service)
