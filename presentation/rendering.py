from typing import Optional
from app.domain.entities.session import QuestionView
from app.domain.entities.leaderboard import LeaderboardEntry, QuizResult
from app.domain.entities.custom_question import CustomQuestion
from app.use_cases.quizzes.scoring import round_half_up


DIFFICULTY_BADGES = {
    'easy': '🟢',
    'medium': '🟡',
    'hard': '🔴',
    'custom': '🔵',
}


def shorten(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + '...'


def render_question(view: QuestionView) -> str:
    progress = round_half_up((view.index + 1) / view.total * 100)
    badge = DIFFICULTY_BADGES.get(view.difficulty, '🟡')
    lines = [
        f'Question {view.index + 1} of {view.total} ({progress}%)',
        f'{view.category} {badge} {view.difficulty.upper()}',
        '',
        view.text,
        '',
        f'Score: {view.score_display}',
    ]
    if not view.answered:
        lines.append(f'⏱ {view.time_left_seconds}s left')
    return '\n'.join(lines)


def render_result(result: QuizResult, rank: Optional[int] = None) -> str:
    lines = [
        f'🏁 Quiz finished, {result.user}!',
        f'Score: {result.entry.score} / {result.total}',
        f'Correct: {result.correct_count}',
        f'Wrong: {result.wrong_count}',
        f'Total time: {result.elapsed_display}',
        f'Final: {result.score_display} / {result.total} ({result.percentage}%)',
    ]
    if rank is not None:
        lines.append(f'🏆 Leaderboard rank: {rank}')
    return '\n'.join(lines)


def render_review(result: QuizResult) -> str:
    lines = ['Review:']
    for i, record in enumerate(result.review):
        icon = '✅' if record.is_correct else '❌'
        lines += [
            '',
            f'{icon} Q{i + 1}: {shorten(record.question_text, 60)}',
            f'Correct answer: {record.correct_answer}',
            f'Your answer: {record.selected_answer}',
            f'Time taken: {round_half_up(record.time_taken_seconds)}s, category: {record.category}',
        ]
    return '\n'.join(lines)


def render_leaderboard(entries: list[LeaderboardEntry]) -> str:
    lines = ['🏆 Leaderboard']
    for i, entry in enumerate(entries):
        lines.append(f'{i + 1}. {entry.user} - {entry.score} pts ({entry.correct_count}/{entry.total} Qs, '
                     f'{entry.time_taken_seconds}s, {entry.category}, {entry.difficulty})')
    return '\n'.join(lines)


def render_custom_questions(questions: list[CustomQuestion]) -> str:
    lines = ['Your custom questions:']
    for i, question in enumerate(questions):
        lines.append(f'Q{i + 1}: {shorten(question.question_text, 80)}')
        lines.append(f'Correct: {question.correct_option}')
    return '\n'.join(lines)
