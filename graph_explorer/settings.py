"""Django settings for the graph explorer."""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent


def _env_flag(name: str, default: bool = False) -> bool:
    raw_value = os.environ.get(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


SECRET_KEY = os.environ.get("GRAPH_EXPLORER_SECRET_KEY", "graph-explorer-dev-key")
DEBUG = _env_flag("GRAPH_EXPLORER_DEBUG", default=False)
ALLOWED_HOSTS = ["localhost", "127.0.0.1", "testserver"]

# Seed file used by the "seed" endpoint; empty means the bundled seed data
GRAPH_EXPLORER_SEED_PATH = os.environ.get("GRAPH_EXPLORER_SEED_PATH", "")
GRAPH_EXPLORER_MAX_RANDOM_NODES = int(os.environ.get("GRAPH_EXPLORER_MAX_RANDOM_NODES", "500"))
# Oldest workspaces are dropped once more than this many are open
GRAPH_EXPLORER_MAX_WORKSPACES = int(os.environ.get("GRAPH_EXPLORER_MAX_WORKSPACES", "100"))

INSTALLED_APPS = [
    "graph_explorer.explorer",
]

MIDDLEWARE = [
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "graph_explorer.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {},
    },
]

WSGI_APPLICATION = "graph_explorer.wsgi.application"

DATABASES = {}

USE_TZ = True

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
        "graph_explorer": {"handlers": ["console"], "level": "INFO"},
        "core": {"handlers": ["console"], "level": "INFO"},
        "api": {"handlers": ["console"], "level": "WARNING"},
    },
}
