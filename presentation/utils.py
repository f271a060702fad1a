import aiofiles
import logging
from pathlib import Path
import presentation.keyboards as kb
from app.domain.exceptions import QuizError
from app.use_cases.quizzes.recovery_use_cases import RecoveryUseCases
from presentation.messages import ERROR_MSG, MENU_MSG, RESUME_AVAILABLE_MSG


logger = logging.getLogger('utils')

INSTRUCTION_PATH = Path(__file__).parent / 'instruction.txt'
TELEGRAM_MESSAGE_LIMIT = 4096


async def get_instruction():
    """
    Asynchronously retrieves the instruction text from a .txt file.

    Reads the content of 'presentation/instruction.txt' and concatenates 
    all lines into a single string.

    :return: A string containing the instructions.
    """
    instruction = ""
    async with aiofiles.open(INSTRUCTION_PATH, 'r', encoding='utf-8') as f:
        lines = await f.readlines()
        for line in lines:
            instruction += line
    return instruction


def error_handler(func):
    """
    A decorator that wraps asynchronous handlers to handle exceptions.

    Quiz errors (no questions, fetch failures, nothing to resume, invalid custom
    question) are shown to the user with their own message. Any other exception
    is logged and the user gets a generic message.

    :param func: The asynchronous function to be wrapped.
    :return: The wrapped function with error handling.
    """
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except QuizError as e:
            obj = args[0]
            logger.warning(f"{func.__name__}: {e.user_message}", extra={'user': obj.from_user.username})
            await obj.bot.send_message(obj.from_user.id,
                                       text=e.user_message,
                                       reply_markup=await kb.inline_lists([], [], ''))
        except Exception as e:
            obj = args[0]
            logger.error(f"Error in {func.__name__}: {e}", exc_info=True, extra={'user': obj.from_user.username})
            await obj.bot.send_message(obj.from_user.id,
                                       text=ERROR_MSG,
                                       reply_markup=await kb.inline_lists([], [], ''))
    return wrapper


def split_message(text: str, limit: int = TELEGRAM_MESSAGE_LIMIT) -> list[str]:
    """Splits text on line breaks into chunks that fit into one Telegram message."""
    chunks = []
    current = ''
    for line in text.split('\n'):
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ''
            chunks.append(line[:limit])
            line = line[limit:]
        candidate = f'{current}\n{line}' if current else line
        if len(candidate) > limit:
            chunks.append(current)
            current = line
        else:
            current = candidate
    if current:
        chunks.append(current)
    return chunks


async def can_resume(repo_service, user_id: str) -> bool:
    session = repo_service.session_registry.get(user_id)
    if session.in_progress:
        return True
    return await RecoveryUseCases(store=repo_service.store).has_resumable(user_id)


async def send_menu(bot, user_id: str, repo_service, text: str = MENU_MSG):
    resumable = await can_resume(repo_service, user_id)
    if resumable:
        text += '\n\n' + RESUME_AVAILABLE_MSG
    await bot.send_message(user_id, text=text, reply_markup=kb.main_menu(resumable))
