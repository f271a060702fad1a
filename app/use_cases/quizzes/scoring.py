import math
from decimal import Decimal, ROUND_HALF_UP
from app.domain.entities.settings import QuizSettings


CORRECT_ANSWER_POINTS = 1


def score_delta(is_correct: bool, settings: QuizSettings) -> float:
    """
    Returns the score change for an answer.

    A correct answer is worth one point. A wrong or timed out answer applies the
    negative marking value, which is zero or negative.
    """
    if is_correct:
        return CORRECT_ANSWER_POINTS
    return settings.negative_marking_value


def time_taken(settings: QuizSettings, time_left_seconds: int) -> int:
    return max(0, settings.seconds_per_question - time_left_seconds)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def percentage(correct_count: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(100 * correct_count / total)


def format_score(score: float) -> str:
    # One decimal, halves rounded away from zero (-0.25 is shown as -0.3)
    value = Decimal(str(score)).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)
    if value == 0:
        value = abs(value)
    return str(value)


def leaderboard_score(score: float) -> float:
    return round(score, 2)
