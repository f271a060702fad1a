# Service container with the store, external services and the live quiz sessions.
class RepoService:
    def __init__(self, store, aiohttp_service, trivia_service, session_registry, leaderboard_use_cases):
        self.store = store
        self.aiohttp_service = aiohttp_service
        self.trivia_service = trivia_service
        self.session_registry = session_registry
        self.leaderboard_use_cases = leaderboard_use_cases
