import os
from pathlib import Path

import environ

BASE_DIR = Path(__file__).resolve().parent.parent

env = environ.Env(
    DEBUG=(bool, False),
    CINEMA_LOG_LEVEL=(str, "INFO"),
    CINEMA_LOG_JSON=(bool, False),
    CINEMA_CURRENCY_PLACES=(int, 2),
)
environ.Env.read_env(os.path.join(BASE_DIR, ".env"))

SECRET_KEY = env("SECRET_KEY", default="insecure-dev-key-change-me")

DEBUG = env("DEBUG")

ALLOWED_HOSTS: list[str] = []

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "cinema",
]

DATABASES = {
    "default": env.db("DATABASE_URL", default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
}

LANGUAGE_CODE = "en-us"

TIME_ZONE = env("TIME_ZONE", default="UTC")

USE_I18N = False

USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Cinema core
CINEMA_LOG_LEVEL = env("CINEMA_LOG_LEVEL")
CINEMA_LOG_JSON = env("CINEMA_LOG_JSON")
# decimal places of the currency's smallest unit, at most 2 (cinema.models.PRICE_PLACES)
CINEMA_CURRENCY_PLACES = env("CINEMA_CURRENCY_PLACES")
