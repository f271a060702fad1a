import logging
import random
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional
from pydantic import ValidationError
from app.domain.repositories_interfaces.store_repo import PersistentStoreInterface
from app.domain.entities.question import Question
from app.domain.entities.settings import QuizSettings
from app.domain.entities.answer import AnsweredRecord, OptionState, OptionStyle, TIMED_OUT
from app.domain.entities.session import SessionState, SessionStatus, QuestionView
from app.domain.entities.leaderboard import QuizResult
from app.domain.exceptions import NoQuestionsAvailable, NothingToResume, StartInProgress
from app.domain import storage_keys
from app.domain.storage_keys import player_key
from app.use_cases.leaderboard.leaderboard_use_cases import LeaderboardUseCases
from app.use_cases.quizzes.recovery_use_cases import RecoveryUseCases
from app.use_cases.quizzes.timer import QuestionTimer
from app.use_cases.quizzes.scoring import (score_delta, time_taken, percentage,
                                           format_score, round_half_up)


logger = logging.getLogger('use_cases')

TickListener = Callable[[int], Awaitable[Any]]
TimeoutListener = Callable[[AnsweredRecord], Awaitable[Any]]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def option_states(question: Question, record: AnsweredRecord) -> list[OptionState]:
    """
    Rebuilds the read-only options of an answered question.

    All options are disabled, the selected one is marked correct or wrong and the
    correct one is highlighted when the selection was wrong. Timed out answers only
    highlight the correct option.
    """
    states = []
    for option in record.shown_options or question.options:
        style = OptionStyle.NEUTRAL
        if option == record.selected_answer:
            style = OptionStyle.CORRECT if record.is_correct else OptionStyle.WRONG
        elif option == record.correct_answer and not record.is_correct:
            style = OptionStyle.CORRECT
        states.append(OptionState(text=option, disabled=True, style=style))
    return states


class QuizSessionUseCases:
    """
    State machine of the quiz of one player.

    idle -> configuring -> in_progress -> finished -> idle. Inside in_progress every
    question index goes from unanswered to answered once. The snapshot is saved after
    every answer and navigation and removed when the session is finished.
    Commands that do not fit the current state are ignored.
    """

    def __init__(self, player_id: str, store: PersistentStoreInterface,
                 leaderboard_use_cases: LeaderboardUseCases,
                 timer: Optional[QuestionTimer] = None,
                 clock: Callable[[], datetime] = utc_now):
        self.player_id = player_id
        self.store = store
        self.leaderboard_use_cases = leaderboard_use_cases
        self.timer = timer or QuestionTimer()
        self.clock = clock
        self.state: Optional[SessionState] = None
        self.status = SessionStatus.IDLE
        self.last_result: Optional[QuizResult] = None
        self._shown_options: list[str] = []
        self._launching = False
        self._tick_listener: Optional[TickListener] = None
        self._timeout_listener: Optional[TimeoutListener] = None

    def bind(self, on_tick: Optional[TickListener] = None, on_timeout: Optional[TimeoutListener] = None) -> None:
        """Registers the front end callbacks for countdown ticks and timeouts."""
        self._tick_listener = on_tick
        self._timeout_listener = on_timeout

    @property
    def in_progress(self) -> bool:
        return self.status == SessionStatus.IN_PROGRESS and self.state is not None

    @property
    def launching(self) -> bool:
        return self._launching

    async def begin_configuration(self) -> QuizSettings:
        """
        Moves an idle or finished session to configuring.

        :return: The last saved settings, or the defaults, to pre-fill the form.
        """
        if self.in_progress:
            return self.state.settings
        self.status = SessionStatus.CONFIGURING
        raw = await self.store.get(player_key(self.player_id, storage_keys.LAST_SETTINGS))
        if isinstance(raw, dict):
            try:
                return QuizSettings.model_validate(raw)
            except ValidationError as e:
                logger.warning(f"Ignoring stored settings: {e}", extra={'user': self.player_id})
        return QuizSettings()

    async def launch(self, user: str, settings: QuizSettings, question_source) -> SessionState:
        """
        Resolves questions from the question source and starts the session.

        Only one launch per player can be in flight, a second call raises StartInProgress.
        """
        if self._launching:
            raise StartInProgress()
        self._launching = True
        try:
            questions = await question_source.resolve(self.player_id, settings)
            return await self.start(user, settings, questions)
        finally:
            self._launching = False

    async def start(self, user: str, settings: QuizSettings, questions: list[Question]) -> SessionState:
        """
        Starts a new session with the given questions.

        More questions than requested are cut, fewer are played as they are.

        :raises NoQuestionsAvailable: If questions is empty.
        """
        if not questions:
            raise NoQuestionsAvailable()
        self.timer.cancel()
        self.state = SessionState(
            user=user,
            settings=settings,
            questions=list(questions)[:settings.question_count],
            time_left_seconds=settings.seconds_per_question,
            started_at=self.clock()
        )
        self.status = SessionStatus.IN_PROGRESS
        self.last_result = None
        await self.store.set(player_key(self.player_id, storage_keys.LAST_SETTINGS), settings.to_storage())
        self._enter_question()
        await self._persist()
        logger.info(f"Quiz started with {len(self.state.questions)} questions", extra={'user': user})
        return self.state

    async def resume(self, snapshot: Optional[SessionState]) -> SessionState:
        """
        Restores an interrupted session verbatim and shows its current question again.

        :raises NothingToResume: If the snapshot is missing, finished, empty or points past its questions.
        """
        if (snapshot is None or snapshot.finished or not snapshot.questions
                or not 0 <= snapshot.current_index < len(snapshot.questions)):
            raise NothingToResume()
        self.timer.cancel()
        self.state = snapshot.model_copy(deep=True)
        self.status = SessionStatus.IN_PROGRESS
        self.last_result = None
        self._enter_question()
        logger.info(f"Quiz resumed at question {self.state.current_index + 1}", extra={'user': self.state.user})
        return self.state

    async def resume_saved(self, recovery_use_cases: RecoveryUseCases) -> SessionState:
        snapshot = await recovery_use_cases.load_snapshot(self.player_id)
        return await self.resume(snapshot)

    async def answer(self, selected: str, index: Optional[int] = None) -> Optional[AnsweredRecord]:
        """
        Scores the selected option for the current question.

        :param selected: Text of the chosen option.
        :param index: Question the option was shown for. A tap on another question than
                      the displayed one is ignored.
        :return: The new record. For an already answered question the existing record
                 is returned and nothing is scored again. None when no session runs, the
                 index is stale or the selection is not an option of the question.
        """
        if not self.in_progress:
            return None
        current = self.state.current_index
        if index is not None and index != current:
            return None
        if current in self.state.answer_log:
            return self.state.answer_log[current]
        question = self.state.current_question
        if selected not in question.options:
            return None
        self.timer.cancel()
        return await self._record(
            current,
            selected,
            selected == question.correct_answer,
            time_taken(self.state.settings, self.state.time_left_seconds)
        )

    async def timeout(self, index: Optional[int] = None) -> Optional[AnsweredRecord]:
        """Records the current question as timed out. Ignored for stale or answered indexes."""
        if not self.in_progress:
            return None
        if index is None:
            index = self.state.current_index
        if index != self.state.current_index or index in self.state.answer_log:
            return None
        self.timer.cancel()
        record = await self._record(index, TIMED_OUT, False, self.state.settings.seconds_per_question)
        logger.info(f"Question {index + 1} timed out", extra={'user': self.state.user})
        if self._timeout_listener:
            await self._timeout_listener(record)
        return record

    async def advance(self) -> Optional[QuizResult]:
        """
        Moves to the next question, or finishes the session on the last one.

        :return: The result when the session was finished, otherwise None.
        """
        if not self.in_progress or not self.state.is_answered():
            return None
        if self.state.is_last:
            return await self.finish()
        self.state.current_index += 1
        self._enter_question()
        await self._persist()
        return None

    async def retreat(self) -> bool:
        if not self.in_progress or self.state.current_index == 0:
            return False
        self.state.current_index -= 1
        self._enter_question()
        await self._persist()
        return True

    async def quit(self) -> None:
        """Saves the snapshot without finishing so the session can be resumed later."""
        if not self.in_progress:
            return
        self.timer.cancel()
        await self._persist()
        logger.info(f"Quiz quit at question {self.state.current_index + 1}", extra={'user': self.state.user})
        self.state = None
        self.status = SessionStatus.IDLE

    async def finish(self) -> Optional[QuizResult]:
        if not self.in_progress:
            return None
        self.timer.cancel()
        state = self.state
        # Leaving in_progress before the first await turns a second finish into a no-op
        state.finished = True
        self.status = SessionStatus.FINISHED
        now = self.clock()
        elapsed = max(0, round_half_up((now - state.started_at).total_seconds()))
        entry = self.leaderboard_use_cases.entry_from_session(state, elapsed, now)
        result = QuizResult(
            user=state.user,
            score=state.score,
            correct_count=state.correct_count,
            wrong_count=state.wrong_count,
            total=len(state.questions),
            percentage=percentage(state.correct_count, len(state.questions)),
            total_elapsed_seconds=elapsed,
            review=[state.answer_log[i] for i in sorted(state.answer_log)],
            entry=entry,
            score_display=format_score(state.score)
        )
        result.rank = await self.leaderboard_use_cases.submit(entry)
        await self.store.remove(player_key(self.player_id, storage_keys.SESSION_STATE))
        self.last_result = result
        logger.info(f"Quiz finished with score {format_score(state.score)} ({result.percentage}%)",
                    extra={'user': state.user})
        return result

    def close(self) -> None:
        """Returns a finished session to idle."""
        if self.in_progress:
            return
        self.state = None
        self.status = SessionStatus.IDLE

    def current_view(self) -> Optional[QuestionView]:
        if not self.in_progress:
            return None
        state = self.state
        question = state.current_question
        record = state.answer_log.get(state.current_index)
        if record:
            options = option_states(question, record)
        else:
            options = [OptionState(text=option) for option in self._shown_options]
        return QuestionView(
            index=state.current_index,
            total=len(state.questions),
            text=question.text,
            category=question.category or 'General',
            difficulty=question.difficulty.value,
            options=options,
            answered=record is not None,
            is_last=state.is_last,
            can_retreat=state.current_index > 0,
            time_left_seconds=state.time_left_seconds,
            score_display=format_score(state.score)
        )

    def _enter_question(self) -> None:
        # Every change of the displayed question stops the old countdown first
        self.timer.cancel()
        state = self.state
        index = state.current_index
        question = state.current_question
        state.time_left_seconds = state.settings.seconds_per_question
        record = state.answer_log.get(index)
        if record:
            self._shown_options = list(record.shown_options)
            return
        options = question.options
        random.shuffle(options)
        self._shown_options = options

        async def on_tick(remaining: int) -> None:
            if self.in_progress and self.state.current_index == index:
                self.state.time_left_seconds = remaining
                if self._tick_listener:
                    await self._tick_listener(remaining)

        async def on_expire() -> None:
            await self.timeout(index)

        self.timer.start(state.settings.seconds_per_question, on_tick, on_expire)

    async def _record(self, index: int, selected: str, is_correct: bool, taken: float) -> AnsweredRecord:
        state = self.state
        question = state.questions[index]
        record = AnsweredRecord(
            question_text=question.text,
            shown_options=list(self._shown_options) or question.options,
            correct_answer=question.correct_answer,
            selected_answer=selected,
            is_correct=is_correct,
            time_taken_seconds=taken,
            category=question.category or ''
        )
        state.score += score_delta(is_correct, state.settings)
        if is_correct:
            state.correct_count += 1
        else:
            state.wrong_count += 1
        state.answer_log[index] = record
        await self._persist()
        return record

    async def _persist(self) -> None:
        await self.store.set(player_key(self.player_id, storage_keys.SESSION_STATE), self.state.to_storage())
