import logging
from app.domain.repositories_interfaces.store_repo import PersistentStoreInterface
from app.use_cases.leaderboard.leaderboard_use_cases import LeaderboardUseCases
from app.use_cases.quizzes.session_use_cases import QuizSessionUseCases
from app.use_cases.quizzes.timer import QuestionTimer


logger = logging.getLogger('use_cases')


class SessionRegistry:
    """Holds the quiz session of every player. A player never has more than one."""

    def __init__(self, store: PersistentStoreInterface, leaderboard_use_cases: LeaderboardUseCases,
                 timer_interval: float = 1.0):
        self.store = store
        self.leaderboard_use_cases = leaderboard_use_cases
        self.timer_interval = timer_interval
        self._sessions: dict[str, QuizSessionUseCases] = {}

    def get(self, player_id: str) -> QuizSessionUseCases:
        session = self._sessions.get(player_id)
        if session is None:
            session = QuizSessionUseCases(
                player_id=player_id,
                store=self.store,
                leaderboard_use_cases=self.leaderboard_use_cases,
                timer=QuestionTimer(self.timer_interval)
            )
            self._sessions[player_id] = session
        return session

    def release(self, player_id: str) -> bool:
        """
        Forgets the session of a player once it is idle. Running or launching sessions are kept.

        :return: True when the session was dropped.
        """
        session = self._sessions.get(player_id)
        if session is None or session.in_progress or session.launching:
            return False
        del self._sessions[player_id]
        return True

    async def close_all(self) -> None:
        # Saves every running session on shutdown so that it can be resumed
        for player_id, session in self._sessions.items():
            if session.in_progress:
                logger.info("Saving running quiz on shutdown", extra={'user': player_id})
                await session.quit()
        self._sessions.clear()
