"""
Development settings for Schedule Kit.

These settings override the base settings for local development environments.
"""

from .base import *  # noqa: F401,F403

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = env("SECRET_KEY", "django-insecure-development-key-not-for-production")  # noqa: F405

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = env("DEBUG", "True") == "True"  # noqa: F405

ALLOWED_HOSTS = ["*"]

LOGGING["loggers"]["algorithms"]["level"] = "DEBUG"  # noqa: F405
LOGGING["loggers"]["apps"]["level"] = "DEBUG"  # noqa: F405
