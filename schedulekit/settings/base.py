# schedulekit/settings/base.py
"""
Schedule Kit – shared Django settings (development, test).

Environment-specific values **must** come from the environment (.env or real env
vars). Do not hard-code credentials or hostnames in this file.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from decouple import config  # Use python-decouple for env vars
from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Paths & dotenv
# ---------------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent.parent

load_dotenv(BASE_DIR / ".env")  # Load development .env if exists


# ---------------------------------------------------------------------------
# Tiny helper – read env with "required" flag
# ---------------------------------------------------------------------------
def env(key: str, default: Optional[str] = None, *, required: bool = False) -> str:
    val = os.getenv(key, default)
    if required and (val is None or val == ""):
        raise RuntimeError(f"The environment variable {key} is required but not set.")
    return val


# ---------------------------------------------------------------------------
# Core toggles
# ---------------------------------------------------------------------------
SECRET_KEY = config("SECRET_KEY", default="django-insecure-fallback-key-change-me-in-env")
DEBUG = config("DEBUG", default=False, cast=bool)
ALLOWED_HOSTS = config(
    "ALLOWED_HOSTS", default="127.0.0.1,localhost", cast=lambda v: [s.strip() for s in v.split(",")]
)

# The schedule core keeps no tables of its own; SQLite only satisfies Django.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.path.join(BASE_DIR, "db.sqlite3"),
    }
}

# ---------------------------------------------------------------------------
# Application definition
# ---------------------------------------------------------------------------
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "core.apps.CoreConfig",
    "algorithms",
    "apps.scheduleapp.apps.ScheduleAppConfig",
]

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ---------------------------------------------------------------------------
# Internationalisation & time
# ---------------------------------------------------------------------------
# TIME_ZONE is the "local" zone: naive instants are read in it and an unknown
# calendar timezone falls back to it.
TIME_ZONE = env("TIME_ZONE", "Asia/Tokyo")
USE_I18N = False
USE_TZ = True

# ---------------------------------------------------------------------------
# Caches – availability caches are per session, see core.cache
# ---------------------------------------------------------------------------
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "schedulekit-default",
    }
}

# ---------------------------------------------------------------------------
# Schedule engine settings
# ---------------------------------------------------------------------------
SCHEDULE_TIME_SLOT_HEIGHT = config("SCHEDULE_TIME_SLOT_HEIGHT", default=60, cast=int)  # px per slot
SCHEDULE_DEFAULT_TIMEZONE = config("SCHEDULE_DEFAULT_TIMEZONE", default=TIME_ZONE)
SCHEDULE_SLOT_INTERVAL = config("SCHEDULE_SLOT_INTERVAL", default=30, cast=int)  # minutes
SCHEDULE_START_HOUR = config("SCHEDULE_START_HOUR", default=8, cast=int)
SCHEDULE_END_HOUR = config("SCHEDULE_END_HOUR", default=20, cast=int)
SCHEDULE_WEEK_STARTS_ON = config("SCHEDULE_WEEK_STARTS_ON", default=1, cast=int)  # 0=Sunday, 1=Monday

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_DIR = BASE_DIR / "logs"
LOG_DIR.mkdir(exist_ok=True)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {process:d} {thread:d} {message}",
            "style": "{",
        },
        "simple": {"format": "{levelname} {message}", "style": "{"},
    },
    "filters": {
        "require_debug_true": {"()": "django.utils.log.RequireDebugTrue"},
    },
    "handlers": {
        "console": {
            "level": "DEBUG" if DEBUG else "INFO",
            "filters": ["require_debug_true"],
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
        "file": {
            "level": "INFO",
            "class": "logging.FileHandler",
            "filename": LOG_DIR / "schedulekit.log",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "django": {
            "handlers": ["console", "file"],
            "level": "INFO",
            "propagate": True,
        },
        "algorithms": {
            "handlers": ["console", "file"],
            "level": "INFO",
            "propagate": False,
        },
        "apps": {
            "handlers": ["console", "file"],
            "level": "INFO",
            "propagate": False,
        },
        "core": {
            "handlers": ["console", "file"],
            "level": "INFO",
            "propagate": False,
        },
    },
}
