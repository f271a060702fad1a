import logging
import random
from app.domain.services_interfaces.trivia_service import TriviaServiceInterface
from app.domain.entities.question import Question, Difficulty
from app.domain.entities.settings import QuizSettings
from app.domain.entities.custom_question import CustomQuestion
from app.domain.exceptions import NoQuestionsAvailable
from app.use_cases.questions.custom_question_use_cases import CustomQuestionUseCases


logger = logging.getLogger('use_cases')

CUSTOM_CATEGORY = 'Custom'


class QuestionSourceUseCases:
    def __init__(self, trivia_service: TriviaServiceInterface, custom_question_use_cases: CustomQuestionUseCases):
        self.trivia_service = trivia_service
        self.custom_question_use_cases = custom_question_use_cases

    async def fetch_remote(self, settings: QuizSettings) -> list[Question]:
        # FetchFailed and NoResults go straight to the caller, there is no retry
        return await self.trivia_service.fetch(settings)

    async def use_custom(self, player_id: str, count: int) -> list[Question]:
        """
        Draws count random questions from the custom list of the player.

        :raises NoQuestionsAvailable: If the list holds fewer than count questions.
        """
        custom_questions = await self.custom_question_use_cases.get_all(player_id)
        if len(custom_questions) < count:
            raise NoQuestionsAvailable(f"You have only {len(custom_questions)} custom questions, {count} are needed.")
        questions = [self.to_question(custom) for custom in custom_questions]
        random.shuffle(questions)
        return questions[:count]

    async def resolve(self, player_id: str, settings: QuizSettings) -> list[Question]:
        """
        Picks the questions for a new session.

        Custom questions are used when no category is selected and the player has
        enough of them, otherwise the remote provider is asked.
        """
        if settings.category is None:
            custom_questions = await self.custom_question_use_cases.get_all(player_id)
            if len(custom_questions) >= settings.question_count:
                logger.info("Using custom questions", extra={'user': player_id})
                return await self.use_custom(player_id, settings.question_count)
        logger.info("Using remote questions", extra={'user': player_id})
        return await self.fetch_remote(settings)

    @staticmethod
    def to_question(custom: CustomQuestion) -> Question:
        return Question(
            text=custom.question_text,
            correct_answer=custom.correct_option,
            incorrect_answers=[option for option in custom.options if option != custom.correct_option],
            category=CUSTOM_CATEGORY,
            difficulty=Difficulty.CUSTOM
        )
