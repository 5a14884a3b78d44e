"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

COMPLIMENTARY_CAP = 3
DEFAULT_MAX_PLAYERS = 20
DEFAULT_TOKEN_MAX_AGE_SECONDS = 24 * 60 * 60
CONFLICT_RETRIES = 1
TOKEN_SALT = "coach-auth"
