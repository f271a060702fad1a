import logging
from bs4 import BeautifulSoup
from app.domain.services_interfaces.aiohttp_service import AiohttpServiceInterface
from app.domain.services_interfaces.trivia_service import TriviaServiceInterface
from app.domain.entities.question import Question, Difficulty
from app.domain.entities.settings import QuizSettings
from app.domain.exceptions import FetchFailed, NoResults


logger = logging.getLogger('external_apis')

OPEN_TRIVIA_URL = 'https://opentdb.com/api.php'
# Open Trivia DB response codes
NO_RESULTS = 1
RATE_LIMITED = 5


def decode_html(text: str) -> str:
    # Provider text is HTML entity encoded (&quot;, &#039;, ...)
    return BeautifulSoup(text, 'html.parser').get_text()


class OpenTriviaService(TriviaServiceInterface):
    def __init__(self, aiohttp_service: AiohttpServiceInterface, url: str = OPEN_TRIVIA_URL):
        self.aiohttp_service = aiohttp_service
        self.url = url

    @staticmethod
    def build_params(settings: QuizSettings) -> dict:
        params = {'amount': settings.question_count, 'type': 'multiple'}
        if settings.category:
            params['category'] = settings.category
        if settings.difficulty:
            params['difficulty'] = settings.difficulty.value
        return params

    async def fetch(self, settings: QuizSettings) -> list[Question]:
        params = self.build_params(settings)
        logger.info(f"Fetching questions with {params}")
        response = await self.aiohttp_service.get(self.url, params=params)
        if not isinstance(response, dict):
            raise FetchFailed()
        if response.get('response_code') == RATE_LIMITED:
            raise FetchFailed("Too many requests to the question server. Please wait a few seconds and retry.")
        results = response.get('results') or []
        if response.get('response_code') == NO_RESULTS or not results:
            raise NoResults()
        return [self.parse_question(item) for item in results]

    @staticmethod
    def parse_question(item: dict) -> Question:
        return Question(
            text=decode_html(item['question']),
            correct_answer=decode_html(item['correct_answer']),
            incorrect_answers=[decode_html(answer) for answer in item['incorrect_answers']],
            category=decode_html(item.get('category', 'General')),
            difficulty=Difficulty(item.get('difficulty', Difficulty.MEDIUM.value))
        )
