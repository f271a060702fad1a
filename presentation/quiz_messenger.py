import logging
from aiogram import Bot
from aiogram.exceptions import TelegramBadRequest
import presentation.keyboards as kb
from app.domain.entities.answer import AnsweredRecord
from app.use_cases.quizzes.session_use_cases import QuizSessionUseCases
from app.use_cases.quizzes.session_registry import SessionRegistry
from presentation.messages import TIME_UP_MSG
from presentation.rendering import render_question


logger = logging.getLogger('handlers')

# Editing the question on every tick would hit the Telegram rate limits
REFRESH_EVERY_SECONDS = 5
FINAL_SECONDS = 3


class QuizMessenger:
    """Keeps the question message of a player in sync with the quiz session."""

    def __init__(self, bot: Bot, user_id: str, session: QuizSessionUseCases):
        self.bot = bot
        self.user_id = user_id
        self.session = session
        self.message_id = None

    def reset(self) -> None:
        # A new question message is sent for a new or resumed quiz
        self.message_id = None

    def bind(self) -> None:
        self.session.bind(on_tick=self.on_tick, on_timeout=self.on_timeout)

    async def send_question(self) -> None:
        view = self.session.current_view()
        if view is None:
            return
        message = await self.bot.send_message(self.user_id, text=render_question(view), reply_markup=kb.question(view))
        self.message_id = message.message_id

    async def refresh(self) -> None:
        view = self.session.current_view()
        if view is None or self.message_id is None:
            return
        try:
            await self.bot.edit_message_text(
                text=render_question(view),
                chat_id=self.user_id,
                message_id=self.message_id,
                reply_markup=kb.question(view)
            )
        except TelegramBadRequest as e:
            # "message is not modified" and deleted messages
            logger.debug(f"Question message not refreshed: {e}", extra={'user': self.user_id})

    async def on_tick(self, remaining: int) -> None:
        if remaining % REFRESH_EVERY_SECONDS == 0 or remaining <= FINAL_SECONDS:
            await self.refresh()

    async def on_timeout(self, record: AnsweredRecord) -> None:
        await self.refresh()
        await self.bot.send_message(self.user_id, TIME_UP_MSG.format(correct=record.correct_answer))


_messengers: dict[str, QuizMessenger] = {}


def get_messenger(bot: Bot, user_id: str, session: QuizSessionUseCases) -> QuizMessenger:
    messenger = _messengers.get(user_id)
    if messenger is None or messenger.session is not session:
        messenger = QuizMessenger(bot, user_id, session)
        _messengers[user_id] = messenger
    messenger.bind()
    return messenger


def release_messenger(registry: SessionRegistry, user_id: str) -> None:
    """Drops the session and the messenger of a player whose quiz is over or saved."""
    if registry.release(user_id):
        _messengers.pop(user_id, None)
