import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("LIVECAST_SECRET_KEY", "livecast-insecure-dev-key")
DEBUG = os.environ.get("LIVECAST_ENV", "prod") == "dev"
ALLOWED_HOSTS = [h.strip() for h in os.environ.get("LIVECAST_ALLOWED_HOSTS", "*").split(",") if h.strip()]

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_yasg",
    "core",
    "apps.overlays",
    "apps.proxy.hls_output",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "livecast.urls"
WSGI_APPLICATION = "livecast.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

DATA_DIR = Path(os.environ.get("LIVECAST_DATA_DIR", BASE_DIR / "data"))
os.makedirs(DATA_DIR, exist_ok=True)

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("LIVECAST_DB_PATH", str(DATA_DIR / "livecast.sqlite3")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_TZ = True

STATIC_URL = "/static/"

REST_FRAMEWORK = {
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
}

SWAGGER_SETTINGS = {
    "USE_SESSION_AUTH": False,
}

# HLS output (see apps.proxy.hls_output.config for defaults)
HLS_OUTPUT = {
    "ffmpeg_path": os.environ.get("LIVECAST_FFMPEG_PATH", "ffmpeg"),
    "hls_segment_path": os.environ.get("LIVECAST_HLS_DIR", str(BASE_DIR / "hls")),
    "public_base_url": os.environ.get("LIVECAST_PUBLIC_BASE_URL", ""),
}


def _log_level(env_name, default):
    level = os.environ.get(env_name, "").strip().upper() or default
    # TRACE (5) is registered by core.apps, after logging is configured
    return 5 if level == "TRACE" else level


LOG_LEVEL = _log_level("LIVECAST_LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
        # ffmpeg chatter is only interesting when debugging a source
        "apps.proxy.hls_output.process_handler": {
            "level": _log_level("LIVECAST_FFMPEG_LOG_LEVEL", LOG_LEVEL),
        },
    },
}
