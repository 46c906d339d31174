from enum import StrEnum


class Shortcode:
    """Alias generation and validation parameters."""

    LENGTH = 7  # 62**7 ~ 3.5 trillion generated aliases
    MAX_GENERATION_ATTEMPTS = 5  # Regenerate this many times on collision before giving up
    CUSTOM_PATTERN = r'[A-Za-z0-9_-]{1,64}'  # Custom aliases must be a single URL path segment


# Only secure targets can be shortened
REQUIRED_URL_SCHEME = 'https://'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


class Backend(StrEnum):
    """Supported short URL data stores (AppConfig `active_backend`)."""

    REDIS = 'redis'
    MEMORY = 'memory'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
