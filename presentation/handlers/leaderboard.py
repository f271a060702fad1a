import logging
from aiogram import F
from aiogram.types import CallbackQuery
from infrastructure.services.repo_service import RepoService
from presentation.messages import EMPTY_LEADERBOARD_MSG, LEADERBOARD_CLEARED_MSG
from presentation.rendering import render_leaderboard
from presentation.routers import router_leaderboard
from presentation.utils import error_handler, split_message
import presentation.keyboards as kb


logger = logging.getLogger('handlers')

@router_leaderboard.callback_query(F.data == 'leaderboard')
@error_handler
async def show_leaderboard(callback: CallbackQuery, repo_service: RepoService, **kwargs):
    user_id = str(callback.from_user.id)
    logger.info("LEADERBOARD", extra={'user': callback.from_user.username})

    entries = await repo_service.leaderboard_use_cases.entries()
    if not entries:
        await callback.bot.send_message(user_id, EMPTY_LEADERBOARD_MSG,
                                        reply_markup=await kb.inline_lists([], [], ''))
        return

    chunks = split_message(render_leaderboard(entries))
    for chunk in chunks[:-1]:
        await callback.bot.send_message(user_id, chunk)
    await callback.bot.send_message(user_id, chunks[-1], reply_markup=kb.leaderboard())


@router_leaderboard.callback_query(F.data == 'clear_leaderboard')
@error_handler
async def clear_leaderboard(callback: CallbackQuery, repo_service: RepoService, **kwargs):
    user_id = str(callback.from_user.id)
    logger.info("CLEARING LEADERBOARD", extra={'user': callback.from_user.username})

    await repo_service.leaderboard_use_cases.clear()
    await callback.bot.send_message(user_id, LEADERBOARD_CLEARED_MSG,
                                    reply_markup=await kb.inline_lists([], [], ''))
