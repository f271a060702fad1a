START_MSG = '''Hello {name}! It's a trivia quiz bot. Answer before the timer runs out and climb the leaderboard!'''
ASK_NAME_MSG = '''Welcome! Please send the name to show on the leaderboard:'''
MENU_MSG = '''Choose an option: '''
RESUME_AVAILABLE_MSG = '''You have an unfinished quiz. Press "Resume quiz" to continue where you left off.'''
CHOOSE_CATEGORY_MSG = '''Choose a category:'''
CHOOSE_DIFFICULTY_MSG = '''Choose a difficulty:'''
ENTER_COUNT_MSG = '''Enter the amount of questions (1-{max_count}), last time it was {previous}:'''
INVALID_COUNT_MSG = '''Please enter a whole number between 1 and {max_count}:'''
ENTER_SECONDS_MSG = '''Enter seconds per question (at least {min_seconds}), last time it was {previous}:'''
INVALID_SECONDS_MSG = '''Please enter a whole number of seconds:'''
CHOOSE_NEGATIVE_MSG = '''Choose the penalty for a wrong or timed out answer:'''
LOADING_QUESTIONS_MSG = '''Loading questions...'''
TIME_UP_MSG = '''Time is up! The correct answer was: {correct}'''
CORRECT_MSG = '''Correct! 🎉'''
WRONG_MSG = '''Wrong! The correct answer was {correct}.'''
QUIT_MSG = '''Quiz saved. You can resume it later from the menu.'''
NO_ACTIVE_QUIZ_MSG = '''You have no running quiz.'''
EMPTY_LEADERBOARD_MSG = '''🏆 No scores yet. Complete a quiz to see your results here!'''
LEADERBOARD_CLEARED_MSG = '''Leaderboard cleared.'''
NO_CUSTOM_QUESTIONS_MSG = '''No custom questions added yet.'''
ENTER_CUSTOM_QUESTION_MSG = '''Send the question text:'''
ENTER_CUSTOM_OPTIONS_MSG = '''Send the four options, one per line:'''
CHOOSE_CUSTOM_CORRECT_MSG = '''Which option is correct?'''
CUSTOM_ADDED_MSG = '''Custom question added.'''
CUSTOM_DELETED_MSG = '''Custom question deleted.'''
LOGGED_OUT_MSG = '''You are logged out. Send /start to play again.'''
DARK_MODE_MSG = '''Dark mode is {state}.'''
ERROR_MSG = '''Something went wrong. Please try again later.'''
