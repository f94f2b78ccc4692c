import os

SECRET_KEY = "test-secret"
ACCESS_TOKEN_SECRET = "test-access-token-secret-32-bytes-min"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "cse_motors_test"),
}

AUTH_MODE = os.getenv("AUTH_MODE", "token")
CREDENTIAL_TTL_SECONDS = 3600
COOKIE_SECURE = False

DEBUG = False
TESTING = True
# Let the 500 handler render instead of re-raising into the test client.
PROPAGATE_EXCEPTIONS = False
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
