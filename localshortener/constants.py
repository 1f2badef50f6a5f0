from enum import StrEnum


class TTL:
    """Time spans used by short URL records and the navigation layer."""

    # Maximum validity period of a short URL (30 days in minutes)
    MAX_VALIDITY_MINUTES = 43_200  # 60 * 24 * 30
    # Validity period applied when the client leaves it blank
    DEFAULT_VALIDITY_MINUTES = 30


class Delay:
    """Artificial pauses in seconds."""

    LOGIN = 0.5
    REGISTER = 0.8
    REDIRECT = 1.5  # deferred hand-off to the navigation layer


class Limits:
    """Size limits."""

    SHORTCODE_LENGTH = 6  # generated shortcodes
    SHORTCODE_MIN_LENGTH = 4  # custom shortcodes
    SHORTCODE_MAX_LENGTH = 10  # custom shortcodes
    MAX_BATCH_SIZE = 5  # URLs per submission
    MAX_LOG_EVENTS = 1_000  # ring buffer capacity of the event log


class LogEventType(StrEnum):
    URL_CREATED = 'URL_CREATED'
    URL_CLICKED = 'URL_CLICKED'
    ERROR = 'ERROR'
    VALIDATION_ERROR = 'VALIDATION_ERROR'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        LOG_LEVEL = 'LOG_LEVEL'
        CONFIG_PATH = 'CONFIG_PATH'

    class Redis(StrEnum):
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105


# Owner namespace for records created without a logged in user
GUEST_OWNER = 'guest'

# Path segments served by routes, unusable as shortcodes
RESERVED_SHORTCODES = frozenset({'login', 'register', 'logout', 'stats'})

# Referrer recorded for clicks without a Referer header
DIRECT_REFERRER = 'Direct'

# Mocked click locations
MOCK_LOCATIONS = (
    'New York, USA',
    'London, UK',
    'Tokyo, Japan',
    'Mumbai, India',
    'Sydney, Australia',
    'Berlin, Germany',
    'São Paulo, Brazil',
    'Toronto, Canada',
    'Singapore',
    'Dubai, UAE',
)

# Accounts seeded on first start (email, password, id, name)
DEMO_ACCOUNTS = (
    ('demo@example.com', 'demo123', 'demo-user-1', 'Demo User'),
    ('admin@example.com', 'admin123', 'admin-user-1', 'Admin User'),
)

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
