"""
Django settings for the swisstour project.

Values that differ between deployments are read from the environment.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("SWISSTOUR_SECRET_KEY", "swisstour-development-key")

DEBUG = os.environ.get("SWISSTOUR_DEBUG", "1") == "1"

ALLOWED_HOSTS = []

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "reversion",
    "swisstour.tournament_core",
    "swisstour.tournament",
]

MIDDLEWARE = []

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("SWISSTOUR_DB_PATH", str(BASE_DIR / "swisstour.sqlite3")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

USE_TZ = True
TIME_ZONE = "UTC"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "swisstour": {
            "handlers": ["console"],
            "level": os.environ.get("SWISSTOUR_LOG_LEVEL", "INFO"),
        },
    },
}

# Overrides for swisstour.tournament_core.scoring.ScoringSystem, e.g. {"bye_points": 3}
SWISSTOUR_SCORING = {}

# Seed for the pairing random source; None pairs with fresh randomness
SWISSTOUR_RANDOM_SEED = None
