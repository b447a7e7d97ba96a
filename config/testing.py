SECRET_KEY = "test-secret"

SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = True
AUTO_SEED_DB = True

TYPING_STORE = "memory"
REDIS_URL = None
TYPING_TTL_SECONDS = 5

# never call the title AI from tests
PERPLEXITY_API_KEY = ""
TITLE_AI_TIMEOUT = 1
