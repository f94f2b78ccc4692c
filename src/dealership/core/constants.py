"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

CREDENTIAL_TTL_SECONDS = 60 * 60
BCRYPT_ROUNDS = 10
TOKEN_ALGORITHM = "HS256"

TOKEN_COOKIE_NAME = "jwt"
SESSION_COOKIE_NAME = "sid"

PASSWORD_MIN_LENGTH = 10
MIN_INVENTORY_YEAR = 1900

# Shown in the navigation bar when the classification table cannot be read.
FALLBACK_CLASSIFICATIONS = ("Custom", "Sedan", "SUV", "Truck")

# bcrypt only hashes the first 72 bytes; newer releases refuse anything longer.
PASSWORD_MAX_BYTES = 72

# Column limits from database/schema.sql.
NAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 255
COLOR_MAX_LENGTH = 30
IMAGE_PATH_MAX_LENGTH = 255
MAX_PRICE = 99_999_999.99
MAX_MILES = 2_147_483_647
