from abc import ABC, abstractmethod
from app.domain.entities.question import Question
from app.domain.entities.settings import QuizSettings


class TriviaServiceInterface(ABC):
    @abstractmethod
    async def fetch(self, settings: QuizSettings) -> list[Question]:
        """
        Fetches multiple choice questions matching the category and difficulty of the settings.

        :param settings: Settings with question_count and the optional filters
        :return: Decoded questions, at most settings.question_count of them
        :raises FetchFailed: On transport errors or unsuccessful responses
        :raises NoResults: When the provider has no questions for the filters
        """
        raise NotImplementedError
