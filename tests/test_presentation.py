"""
Unit tests for the Telegram presentation helpers.
"""
import unittest
from unittest.mock import AsyncMock, MagicMock
from aiogram.exceptions import TelegramBadRequest
from app.domain.exceptions import NothingToResume
import presentation.keyboards as kb
from app.use_cases.leaderboard.leaderboard_use_cases import LeaderboardUseCases
from app.use_cases.quizzes.session_registry import SessionRegistry
from presentation.handlers.quizzes.quiz import answer_question
from presentation.messages import ERROR_MSG, TIME_UP_MSG, CORRECT_MSG, NO_ACTIVE_QUIZ_MSG
import presentation.quiz_messenger as quiz_messenger
from presentation.quiz_messenger import QuizMessenger, get_messenger, release_messenger
from presentation.rendering import render_question, render_result, render_leaderboard
from presentation.utils import error_handler, split_message
from tests.fixtures import QuizFixtures, ManualTimer


class TestRendering(unittest.TestCase):
    """Test cases for message texts."""

    def test_split_message(self):
        """Test long texts are split on line breaks within the limit."""
        text = '\n'.join(['x' * 40] * 10)
        chunks = split_message(text, limit=100)

        self.assertTrue(all(len(chunk) <= 100 for chunk in chunks))
        self.assertEqual('\n'.join(chunks), text)

    def test_split_message_short_text(self):
        """Test a short text stays one message."""
        self.assertEqual(split_message('hello'), ['hello'])

    def test_render_leaderboard(self):
        """Test entries are numbered in ranking order."""
        text = render_leaderboard([QuizFixtures.create_entry(5, 10, user='Alice'),
                                   QuizFixtures.create_entry(3, 20, user='Bob')])
        self.assertIn('1. Alice', text)
        self.assertIn('2. Bob', text)


class TestQuestionKeyboard(unittest.IsolatedAsyncioTestCase):
    """Test cases for the in-quiz keyboard."""

    async def asyncSetUp(self):
        self.session = QuizFixtures.create_session()
        await self.session.start('Alice', QuizFixtures.create_settings(), QuizFixtures.create_sample_questions(2))

    def _callbacks(self):
        markup = kb.question(self.session.current_view())
        return [button.callback_data for row in markup.inline_keyboard for button in row]

    async def test_unanswered_question(self):
        """Test an unanswered question offers its options and quit."""
        self.assertEqual(self._callbacks(), ['0 0 answer', '0 1 answer', '0 2 answer', '0 3 answer', 'quit_quiz'])
        self.assertIn('Question 1 of 2', render_question(self.session.current_view()))

    async def test_answered_question(self):
        """Test an answered question offers next and marks the options."""
        await self.session.answer(self.session.state.current_question.correct_answer)
        self.assertIn('next_question', self._callbacks())
        markup = kb.question(self.session.current_view())
        texts = [button.text for row in markup.inline_keyboard for button in row]
        self.assertTrue(any(text.startswith('✅') for text in texts))

    async def test_option_buttons_name_their_question(self):
        """Test option buttons of the second question carry its index."""
        await self.session.answer(self.session.state.current_question.correct_answer)
        await self.session.advance()
        self.assertEqual(self._callbacks()[:4], ['1 0 answer', '1 1 answer', '1 2 answer', '1 3 answer'])

    async def test_result_text(self):
        """Test the result shows the final score and rank."""
        await self.session.answer(self.session.state.current_question.correct_answer)
        await self.session.advance()
        await self.session.answer(self.session.state.current_question.incorrect_answers[0])
        result = await self.session.advance()

        text = render_result(result, result.rank)
        self.assertIn('Final: 1.0 / 2 (50%)', text)
        self.assertIn('Leaderboard rank: 1', text)


class TestQuizMessenger(unittest.IsolatedAsyncioTestCase):
    """Test cases for keeping the question message up to date."""

    async def asyncSetUp(self):
        self.timer = ManualTimer()
        self.session = QuizFixtures.create_session(timer=self.timer)
        self.bot = AsyncMock()
        self.bot.send_message.return_value = MagicMock(message_id=7)
        self.messenger = get_messenger(self.bot, '42', self.session)
        await self.session.start('Alice', QuizFixtures.create_settings(), QuizFixtures.create_sample_questions(2))

    async def test_send_question_remembers_message(self):
        """Test the sent question message is the one refreshed later."""
        await self.messenger.send_question()
        self.assertEqual(self.messenger.message_id, 7)

        await self.messenger.refresh()
        self.assertEqual(self.bot.edit_message_text.await_args.kwargs['message_id'], 7)

    async def test_ticks_refresh_sparingly(self):
        """Test the message is edited every five seconds and in the last seconds."""
        await self.messenger.send_question()
        for remaining in (14, 13, 12, 11, 10):
            await self.timer.tick(remaining)
        self.assertEqual(self.bot.edit_message_text.await_count, 1)

        await self.timer.tick(3)
        self.assertEqual(self.bot.edit_message_text.await_count, 2)

    async def test_timeout_is_announced(self):
        """Test a timed out question shows the correct answer."""
        await self.messenger.send_question()
        correct = self.session.state.current_question.correct_answer
        await self.timer.expire()

        self.bot.send_message.assert_awaited_with('42', TIME_UP_MSG.format(correct=correct))

    async def test_not_modified_message_is_ignored(self):
        """Test Telegram refusing an unchanged message is not an error."""
        self.bot.edit_message_text.side_effect = TelegramBadRequest(method=MagicMock(),
                                                                    message='message is not modified')
        await self.messenger.send_question()
        await self.messenger.refresh()

    async def test_refresh_without_message(self):
        """Test nothing is edited before the question was sent."""
        messenger = QuizMessenger(self.bot, '43', self.session)
        await messenger.refresh()
        self.bot.edit_message_text.assert_not_awaited()


class TestAnswerHandler(unittest.IsolatedAsyncioTestCase):
    """Test cases for taps on the option buttons."""

    async def asyncSetUp(self):
        self.session = QuizFixtures.create_session(player_id='77')
        await self.session.start('Alice', QuizFixtures.create_settings(), QuizFixtures.create_sample_questions(2))
        self.repo_service = MagicMock()
        self.repo_service.session_registry.get.return_value = self.session
        self.callback = MagicMock()
        self.callback.from_user.id = 77
        self.callback.message.message_id = 5
        self.callback.answer = AsyncMock()
        self.callback.bot = AsyncMock()

    def _option_index(self, text):
        return [option.text for option in self.session.current_view().options].index(text)

    async def test_displayed_question_is_answered(self):
        """Test a tap on an option of the displayed question is scored."""
        correct = self.session.state.current_question.correct_answer
        self.callback.data = f'0 {self._option_index(correct)} answer'

        await answer_question(self.callback, repo_service=self.repo_service)

        self.assertTrue(self.session.state.answer_log[0].is_correct)
        self.callback.answer.assert_awaited_once_with(CORRECT_MSG)

    async def test_button_of_earlier_question_is_ignored(self):
        """Test an old message's option does not answer the displayed question."""
        await self.session.answer(self.session.state.current_question.correct_answer)
        await self.session.advance()
        self.callback.data = '0 0 answer'

        await answer_question(self.callback, repo_service=self.repo_service)

        self.assertNotIn(1, self.session.state.answer_log)
        self.assertEqual(self.session.state.score, 1.0)
        self.callback.answer.assert_awaited_once_with()

    async def test_tap_without_running_quiz(self):
        """Test a tap after the quiz was quit only reports that no quiz runs."""
        await self.session.quit()
        self.callback.data = '0 0 answer'

        await answer_question(self.callback, repo_service=self.repo_service)

        self.callback.answer.assert_awaited_once_with(NO_ACTIVE_QUIZ_MSG)


class TestReleaseMessenger(unittest.IsolatedAsyncioTestCase):
    """Test cases for forgetting the messenger of a player without a quiz."""

    async def asyncSetUp(self):
        self.store = QuizFixtures.create_store()
        self.registry = SessionRegistry(self.store, LeaderboardUseCases(self.store))
        self.bot = AsyncMock()

    async def test_idle_player_is_forgotten(self):
        """Test the messenger is dropped together with an idle session."""
        get_messenger(self.bot, '99', self.registry.get('99'))

        release_messenger(self.registry, '99')

        self.assertNotIn('99', quiz_messenger._messengers)

    async def test_running_quiz_keeps_its_messenger(self):
        """Test the messenger of a running quiz survives a release."""
        session = self.registry.get('98')
        messenger = get_messenger(self.bot, '98', session)
        await session.start('Alice', QuizFixtures.create_settings(), QuizFixtures.create_sample_questions(2))

        release_messenger(self.registry, '98')

        self.assertIs(quiz_messenger._messengers['98'], messenger)
        await session.quit()
        release_messenger(self.registry, '98')
        self.assertNotIn('98', quiz_messenger._messengers)


class TestErrorHandler(unittest.IsolatedAsyncioTestCase):
    """Test cases for the handler error decorator."""

    def setUp(self):
        self.callback = MagicMock()
        self.callback.from_user.id = 42
        self.callback.from_user.username = 'alice'
        self.callback.bot.send_message = AsyncMock()

    async def test_quiz_error_shows_its_message(self):
        """Test quiz errors are shown with their own message."""
        @error_handler
        async def handler(callback, **kwargs):
            raise NothingToResume()

        await handler(self.callback)
        self.assertEqual(self.callback.bot.send_message.await_args.kwargs['text'], NothingToResume.user_message)

    async def test_unexpected_error_shows_generic_message(self):
        """Test other errors are logged and reported generically."""
        @error_handler
        async def handler(callback, **kwargs):
            raise KeyError('settings')

        await handler(self.callback)
        self.assertEqual(self.callback.bot.send_message.await_args.kwargs['text'], ERROR_MSG)

    async def test_result_is_passed_through(self):
        """Test a successful handler is not affected."""
        @error_handler
        async def handler(callback, **kwargs):
            return 'done'

        self.assertEqual(await handler(self.callback), 'done')
        self.callback.bot.send_message.assert_not_awaited()


if __name__ == '__main__':
    unittest.main()
