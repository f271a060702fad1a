import asyncio
import logging
from aiogram import Bot, Dispatcher
from config import logging_config # Importing config to apply it
from config.main_config import (TG_TOKEN, REDIS_HOST, REDIS_PORT, REDIS_DB, REDIS_PASSWORD, STORE_NAMESPACE,
                                TRIVIA_API_URL, HTTP_TIMEOUT, LEADERBOARD_CAPACITY)
from infrastructure.redis_config import RedisPool
from infrastructure.repositories.store.redis_repo import RedisStoreRepo
from infrastructure.repositories.store.persistent_store import PersistentStore
from infrastructure.services.aiohttp_service import AiohttpService
from infrastructure.services.trivia_service import OpenTriviaService
from infrastructure.services.repo_service import RepoService
from app.use_cases.leaderboard.leaderboard_use_cases import LeaderboardUseCases
from app.use_cases.quizzes.session_registry import SessionRegistry
from presentation.middlewares.repo_middleware import RepoMiddleware
from presentation.routers import main_router, router_quiz, router_leaderboard, router_custom_questions
# Importing handlers modules to register them in routers
from presentation.handlers import start_handlers, menu_handler, instruction_handler, leaderboard
from presentation.handlers.quizzes import quiz
from presentation.handlers.custom_questions import get, add, delete


logger = logging.getLogger('handlers')

bot = Bot(TG_TOKEN)
dp = Dispatcher()

async def main():
    # Creating repo instances and passing them to service for middleware utilization
    redis_pool = RedisPool(host=REDIS_HOST, port=REDIS_PORT, db=REDIS_DB, password=REDIS_PASSWORD)
    await redis_pool.create_pool()
    store = PersistentStore(RedisStoreRepo(redis_pool), namespace=STORE_NAMESPACE)
    # Falls back to memory when Redis is not reachable
    await store.connect()

    aiohttp_service = AiohttpService(timeout=HTTP_TIMEOUT)
    trivia_service = OpenTriviaService(aiohttp_service, url=TRIVIA_API_URL)
    leaderboard_use_cases = LeaderboardUseCases(store, capacity=LEADERBOARD_CAPACITY)
    session_registry = SessionRegistry(store, leaderboard_use_cases)

    repo_service = RepoService(
        store=store,
        aiohttp_service=aiohttp_service,
        trivia_service=trivia_service,
        session_registry=session_registry,
        leaderboard_use_cases=leaderboard_use_cases
        )

    repo_middleware = RepoMiddleware(repo_service)

    routers = [router_quiz, router_leaderboard, router_custom_questions]
    
    main_router.include_routers(*routers)
    
    dp.message.middleware(repo_middleware)
    dp.callback_query.middleware(repo_middleware)
    dp.include_routers(main_router)
    try:
        logger.info("Bot started")
        await dp.start_polling(bot)
    finally:
        await session_registry.close_all()
        await aiohttp_service.close()
        await redis_pool.close_pool()
        await bot.session.close()

if __name__ == '__main__':
    asyncio.run(main())
