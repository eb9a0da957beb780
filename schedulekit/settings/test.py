"""
Test settings for Schedule Kit.

These settings override the base settings for test environments.
"""

from .base import *  # noqa: F401,F403

SECRET_KEY = "django-insecure-test-key"

# Tests pin the local zone so naive fixtures read the same everywhere
TIME_ZONE = "Asia/Tokyo"
SCHEDULE_DEFAULT_TIMEZONE = "Asia/Tokyo"
SCHEDULE_TIME_SLOT_HEIGHT = 60
SCHEDULE_SLOT_INTERVAL = 30
SCHEDULE_START_HOUR = 8
SCHEDULE_END_HOUR = 20
SCHEDULE_WEEK_STARTS_ON = 1

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Disable logging during tests to speed them up
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "null": {
            "class": "logging.NullHandler",
        },
    },
    "loggers": {
        "": {
            "handlers": ["null"],
            "level": "CRITICAL",
        },
    },
}
