"""
Django settings for campus project.

Deployment values are read from the environment (or a .env file) through
python-decouple.
"""

from pathlib import Path
from decouple import config, Csv

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = config("SECRET_KEY", default="django-insecure-campus-dev-key")

DEBUG = config("DEBUG", default=False, cast=bool)

ALLOWED_HOSTS = config("ALLOWED_HOSTS", default="localhost,127.0.0.1", cast=Csv())

DEMO_MODE = config("DEMO_MODE", default=False, cast=bool)


INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "django_browser_reload",
    "base",
    "students",
    "faculty",
    "attendance",
    "academics",
    "dashboard",
    "administration",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "django_browser_reload.middleware.BrowserReloadMiddleware",
    "dashboard.middleware.DemoSeedResetMiddleware",
]

ROOT_URLCONF = "campus.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
                "base.context_processors.user_role",
                "base.context_processors.college_group",
            ],
        },
    },
]

WSGI_APPLICATION = "campus.wsgi.application"


DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / config("DB_NAME", default="db.sqlite3"),
    }
}


AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
        "OPTIONS": {"min_length": 6},
    },
]

LOGIN_URL = "/login/"

LANGUAGE_CODE = "en-us"
TIME_ZONE = config("TIME_ZONE", default="Asia/Kolkata")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

MEDIA_URL = "/media/"
MEDIA_ROOT = BASE_DIR / config("MEDIA_DIR", default="media")

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# Campus configuration

COLLEGE_GROUP_NAME = config("COLLEGE_GROUP_NAME", default="EduManage College Group")

# Reference date for semester bucketing and the default dashboard day.
LATEST_ATTENDANCE_DATE = config("LATEST_ATTENDANCE_DATE", default="2025-09-15")

ROOM_LATITUDE = config("ROOM_LATITUDE", default=17.329173, cast=float)
ROOM_LONGITUDE = config("ROOM_LONGITUDE", default=78.602754, cast=float)
LOCATION_RADIUS_METERS = config("LOCATION_RADIUS_METERS", default=100, cast=float)

WKHTMLTOPDF_PATH = config("WKHTMLTOPDF_PATH", default="")


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name}: {message}",
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
        "level": "WARNING",
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": config("DJANGO_LOG_LEVEL", default="INFO"),
            "propagate": False,
        },
        **{
            app: {
                "handlers": ["console"],
                "level": config("LOG_LEVEL", default="INFO"),
                "propagate": False,
            }
            for app in (
                "base",
                "students",
                "faculty",
                "attendance",
                "academics",
                "dashboard",
                "administration",
            )
        },
    },
}
