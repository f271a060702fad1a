# Keys of the key-value store. The store adds its namespace prefix itself.
USER = 'user'
SESSION_STATE = 'session-state'
LEADERBOARD = 'leaderboard'
DARK_MODE = 'dark-mode'
CUSTOM_QUESTIONS = 'custom-questions'
LAST_SETTINGS = 'last-settings'


def player_key(player_id: str, key: str) -> str:
    return f'{player_id}:{key}'
