class QuizError(Exception):
    """Base class for errors that are shown to the player."""
    user_message = "Something went wrong. Please try again later."

    def __init__(self, message: str = None):
        super().__init__(message or self.user_message)
        if message:
            self.user_message = message


class NoQuestionsAvailable(QuizError):
    user_message = "No questions are available for your selection. Please adjust the settings."


class NoResults(NoQuestionsAvailable):
    user_message = "No questions found for your selection. Please try different settings."


class FetchFailed(QuizError):
    user_message = "Failed to fetch questions from server. Please try again."


class NothingToResume(QuizError):
    user_message = "No valid quiz state found to resume."


class InvalidCustomQuestion(QuizError):
    user_message = "Please fill in the question and all four options."


class StartInProgress(QuizError):
    user_message = "Your quiz is already being prepared. Please wait."


class StorageUnavailable(QuizError):
    # Never reaches the player, the store adapter degrades to memory instead
    user_message = "Storage is not available."
