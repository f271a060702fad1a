import os
from dotenv import load_dotenv


load_dotenv()

TG_TOKEN = os.getenv('TG_TOKEN')

REDIS_HOST = os.getenv('REDIS_HOST', 'localhost')
REDIS_PORT = int(os.getenv('REDIS_PORT', '6379'))
REDIS_DB = int(os.getenv('REDIS_DB', '0'))
REDIS_PASSWORD = os.getenv('REDIS_PASSWORD') or None
STORE_NAMESPACE = os.getenv('STORE_NAMESPACE', 'quiz')

TRIVIA_API_URL = os.getenv('TRIVIA_API_URL', 'https://opentdb.com/api.php')
HTTP_TIMEOUT = float(os.getenv('HTTP_TIMEOUT', '10'))

LEADERBOARD_CAPACITY = int(os.getenv('LEADERBOARD_CAPACITY', '100'))

LOG_FILE = os.getenv('LOG_FILE', 'app.log')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
