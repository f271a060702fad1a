import logging
from aiogram import F
from aiogram.types import CallbackQuery
from infrastructure.services.repo_service import RepoService
from app.use_cases.questions.custom_question_use_cases import CustomQuestionUseCases
from presentation.handlers.custom_questions.get import send_custom_questions
from presentation.messages import CUSTOM_DELETED_MSG
from presentation.routers import router_custom_questions
from presentation.utils import error_handler


logger = logging.getLogger('handlers')

@router_custom_questions.callback_query(F.data.endswith('custom_delete'))
@error_handler
async def delete_custom_question(callback: CallbackQuery, repo_service: RepoService, **kwargs):
    user_id = str(callback.from_user.id)
    question_idx = int(callback.data.split()[0])
    logger.info("DELETING CUSTOM QUESTION", extra={'user': callback.from_user.username})

    deleted = await CustomQuestionUseCases(store=repo_service.store).delete(user_id, question_idx)
    await send_custom_questions(callback.bot, user_id, repo_service,
                                header=CUSTOM_DELETED_MSG if deleted else None)
