from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Short link lifetime (12 hours in seconds)
    TWELVE_HOURS = 43_200  # 60 * 60 * 12


class DefaultTimeout:
    """Default timeouts in seconds."""

    SHUTDOWN = 5.0  # Bounded wait for outstanding expiry checks on shutdown


class Shortcode:
    """Shortcode generation parameters."""

    LENGTH = 8
    MAX_PERTURBATION = 999  # Upper bound of the random term added to the hash per character
    SEED_OWNER_PREFIX = 8  # Owner id characters mixed into every seed


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'
        CONFIG_PATH = 'TEMPSHORTENER_CONFIG'

    class Registry(StrEnum):
        LINK_LIFETIME_SECONDS = 'LINK_LIFETIME_SECONDS'
        SHUTDOWN_TIMEOUT_SECONDS = 'SHUTDOWN_TIMEOUT_SECONDS'
        OWNER_ID_FILE = 'OWNER_ID_FILE'


# Default file holding the owner identity of the interactive shell
DEFAULT_OWNER_ID_FILE = 'user_id.txt'

# Log event codes
LINK_CREATED = 'LINK_CREATED'
LINK_CONSUMED = 'LINK_CONSUMED'
LINK_QUOTA_REACHED = 'LINK_QUOTA_REACHED'
LINK_EXPIRED = 'LINK_EXPIRED'
LINK_NOT_FOUND = 'LINK_NOT_FOUND'
NOTIFIER_FAILURE = 'NOTIFIER_FAILURE'
