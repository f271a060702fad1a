import logging
from datetime import datetime, timezone
from pydantic import ValidationError
from app.domain.repositories_interfaces.store_repo import PersistentStoreInterface
from app.domain.entities.custom_question import CustomQuestion
from app.domain.exceptions import InvalidCustomQuestion
from app.domain import storage_keys
from app.domain.storage_keys import player_key


logger = logging.getLogger('use_cases')

OPTIONS_PER_QUESTION = 4


class CustomQuestionUseCases:
    def __init__(self, store: PersistentStoreInterface):
        self.store = store

    async def get_all(self, player_id: str) -> list[CustomQuestion]:
        raw_questions = await self.store.get(player_key(player_id, storage_keys.CUSTOM_QUESTIONS), [])
        if not isinstance(raw_questions, list):
            return []
        questions = []
        for raw_question in raw_questions:
            try:
                questions.append(CustomQuestion.model_validate(raw_question))
            except ValidationError as e:
                logger.warning(f"Skipping malformed custom question: {e}", extra={'user': player_id})
        return questions

    async def add(self, player_id: str, question_text: str, options: list[str], correct_option: str) -> CustomQuestion:
        """
        Validates and appends a question authored by the player.

        :param player_id: Identifier of the player.
        :param question_text: The question.
        :param options: Exactly four options.
        :param correct_option: The option that answers the question.
        :return: The stored CustomQuestion.
        :raises InvalidCustomQuestion: If a field is empty or the correct option is not one of the options.
        """
        question_text = (question_text or '').strip()
        correct_option = (correct_option or '').strip()
        if not question_text:
            raise InvalidCustomQuestion()
        options = self.clean_options(options)
        if correct_option not in options:
            raise InvalidCustomQuestion("The correct option must be one of the four options.")

        question = CustomQuestion(
            question_text=question_text,
            options=options,
            correct_option=correct_option,
            added_at=datetime.now(timezone.utc)
        )
        questions = await self.get_all(player_id)
        questions.append(question)
        await self._save(player_id, questions)
        logger.info("Custom question added", extra={'user': player_id})
        return question

    @staticmethod
    def clean_options(options: list[str]) -> list[str]:
        """
        Trims the options of a custom question.

        :raises InvalidCustomQuestion: If there are not exactly four non-empty, different options.
        """
        options = [(option or '').strip() for option in options]
        if len(options) != OPTIONS_PER_QUESTION or not all(options):
            raise InvalidCustomQuestion()
        if len(set(options)) != OPTIONS_PER_QUESTION:
            raise InvalidCustomQuestion("The four options must be different.")
        return options

    async def delete(self, player_id: str, index: int) -> bool:
        questions = await self.get_all(player_id)
        if not 0 <= index < len(questions):
            return False
        del questions[index]
        await self._save(player_id, questions)
        logger.info("Custom question deleted", extra={'user': player_id})
        return True

    async def _save(self, player_id: str, questions: list[CustomQuestion]) -> None:
        await self.store.set(player_key(player_id, storage_keys.CUSTOM_QUESTIONS),
                             [question.to_storage() for question in questions])
