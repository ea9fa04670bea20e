"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

AUTH_HEADER = "Authorization"
BEARER_PREFIX = "Bearer "

DEFAULT_DB_PORT = 3306
DEFAULT_LOG_LEVEL = "INFO"

WRONG_CREDENTIALS_MESSAGE = "Username or password are wrong"
INVALID_TOKEN_MESSAGE = "Invalid token"
