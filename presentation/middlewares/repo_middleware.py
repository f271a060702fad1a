import logging
from typing import Any, Awaitable, Callable, Dict
from aiogram import BaseMiddleware
from aiogram.types import TelegramObject
from infrastructure.services.repo_service import RepoService


logger = logging.getLogger('handlers')


class RepoMiddleware(BaseMiddleware):
    """Injects the service container into every handler."""

    def __init__(self, repo_service: RepoService):
        super().__init__()
        self.repo_service = repo_service

    async def __call__(self,
                       handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
                       event: TelegramObject,
                       data: Dict[str, Any]) -> Any:
        data['repo_service'] = self.repo_service
        from_user = getattr(event, 'from_user', None)
        if from_user is not None:
            logger.debug(f"{type(event).__name__} received", extra={'user': from_user.username})
        return await handler(event, data)
