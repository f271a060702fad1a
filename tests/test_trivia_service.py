"""
Unit tests for the Open Trivia DB client.
"""
import unittest
from unittest.mock import AsyncMock
from app.domain.entities.question import Difficulty
from app.domain.exceptions import FetchFailed, NoResults, NoQuestionsAvailable
from infrastructure.services.trivia_service import OpenTriviaService, decode_html, OPEN_TRIVIA_URL
from tests.fixtures import QuizFixtures


SAMPLE_RESPONSE = {
    'response_code': 0,
    'results': [
        {
            'type': 'multiple',
            'difficulty': 'hard',
            'category': 'Science &amp; Nature',
            'question': 'What is the chemical symbol for &quot;gold&quot;?',
            'correct_answer': 'Au',
            'incorrect_answers': ['Ag', 'Gd', 'Go&#039;'],
        }
    ]
}


class TestOpenTriviaService(unittest.IsolatedAsyncioTestCase):
    """Test cases for request parameters and response handling."""

    def setUp(self):
        """Set up the service with a mocked HTTP client."""
        self.aiohttp_service = AsyncMock()
        self.service = OpenTriviaService(self.aiohttp_service)

    def test_params_without_filters(self):
        """Test only amount and type are sent for a mixed quiz."""
        params = OpenTriviaService.build_params(QuizFixtures.create_settings(question_count=7))
        self.assertEqual(params, {'amount': 7, 'type': 'multiple'})

    def test_params_with_filters(self):
        """Test category and difficulty are sent when selected."""
        settings = QuizFixtures.create_settings(question_count=3, category=18, difficulty=Difficulty.HARD)
        params = OpenTriviaService.build_params(settings)
        self.assertEqual(params, {'amount': 3, 'type': 'multiple', 'category': 18, 'difficulty': 'hard'})

    def test_decode_html(self):
        """Test HTML entities are decoded."""
        self.assertEqual(decode_html('Tom &amp; Jerry&#039;s &quot;show&quot;'), 'Tom & Jerry\'s "show"')

    async def test_fetch_decodes_questions(self):
        """Test provider results become decoded questions."""
        self.aiohttp_service.get.return_value = SAMPLE_RESPONSE

        questions = await self.service.fetch(QuizFixtures.create_settings(question_count=1))

        self.aiohttp_service.get.assert_awaited_once_with(OPEN_TRIVIA_URL, params={'amount': 1, 'type': 'multiple'})
        self.assertEqual(len(questions), 1)
        question = questions[0]
        self.assertEqual(question.text, 'What is the chemical symbol for "gold"?')
        self.assertEqual(question.correct_answer, 'Au')
        self.assertEqual(question.incorrect_answers, ['Ag', 'Gd', "Go'"])
        self.assertEqual(question.category, 'Science & Nature')
        self.assertEqual(question.difficulty, Difficulty.HARD)

    async def test_no_results(self):
        """Test an empty result set raises NoResults."""
        self.aiohttp_service.get.return_value = {'response_code': 1, 'results': []}

        with self.assertRaises(NoResults) as context:
            await self.service.fetch(QuizFixtures.create_settings())
        self.assertIsInstance(context.exception, NoQuestionsAvailable)

    async def test_rate_limited(self):
        """Test the rate limit response code raises FetchFailed."""
        self.aiohttp_service.get.return_value = {'response_code': 5, 'results': []}

        with self.assertRaises(FetchFailed):
            await self.service.fetch(QuizFixtures.create_settings())

    async def test_http_failure_is_propagated(self):
        """Test transport failures reach the caller without retry."""
        self.aiohttp_service.get.side_effect = FetchFailed()

        with self.assertRaises(FetchFailed):
            await self.service.fetch(QuizFixtures.create_settings())
        self.assertEqual(self.aiohttp_service.get.await_count, 1)

    async def test_unexpected_payload(self):
        """Test a response that is not a JSON object raises FetchFailed."""
        self.aiohttp_service.get.return_value = ['not', 'an', 'object']

        with self.assertRaises(FetchFailed):
            await self.service.fetch(QuizFixtures.create_settings())


if __name__ == '__main__':
    unittest.main()
