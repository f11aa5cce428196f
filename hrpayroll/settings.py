"""
Django settings for hrpayroll project.
"""

import sys
from pathlib import Path

import dj_database_url  # pip install dj-database-url
from decouple import config  # pip install python-decouple

from .redis_settings import get_cache_config

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# Check if we're running tests
TESTING = "test" in sys.argv or "pytest" in sys.modules

# SECURITY SETTINGS
SECRET_KEY = config(
    "SECRET_KEY", default="insecure-test-key-not-for-production" if TESTING else ""
)
if not SECRET_KEY:
    raise ValueError("SECRET_KEY environment variable must be set")

DEBUG = config("DEBUG", default=False, cast=bool)

ALLOWED_HOSTS = config(
    "ALLOWED_HOSTS",
    default="localhost,127.0.0.1" + (",*" if DEBUG else ""),
).split(",")

# Application definition
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Third party
    "rest_framework",
    "rest_framework.authtoken",
    "django_filters",
    "corsheaders",
    # Local apps
    "core",
    "users",
    "worktime",
    "leaves",
    "payroll",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",  # Must be first
]

# Add security middleware only if not testing
if not TESTING:
    MIDDLEWARE.append("django.middleware.security.SecurityMiddleware")

MIDDLEWARE += [
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    # Custom API middleware
    "core.middleware.APIVersionMiddleware",
    "core.middleware.APILoggingMiddleware",
    "core.middleware.APIResponseMiddleware",
]

ROOT_URLCONF = "hrpayroll.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "hrpayroll.wsgi.application"

# Database settings
# Priority: DATABASE_URL > individual DB settings > SQLite fallback
DATABASE_URL = config("DATABASE_URL", default="")

if DATABASE_URL:
    DATABASES = {"default": dj_database_url.parse(DATABASE_URL)}
else:
    db_engine = config("DB_ENGINE", default="django.db.backends.sqlite3")

    if db_engine == "django.db.backends.postgresql":
        DATABASES = {
            "default": {
                "ENGINE": "django.db.backends.postgresql",
                "NAME": config("DB_NAME", default="hrpayroll_db"),
                "USER": config("DB_USER", default="hrpayroll_user"),
                "PASSWORD": config("DB_PASSWORD", default=""),
                "HOST": config("DB_HOST", default="localhost"),
                "PORT": config("DB_PORT", default="5432"),
                "OPTIONS": {
                    "connect_timeout": 60,
                },
            }
        }
    else:
        # SQLite fallback for development
        DATABASES = {
            "default": {
                "ENGINE": "django.db.backends.sqlite3",
                "NAME": BASE_DIR / "db.sqlite3",
            }
        }

# Cache (Redis when REDIS_URL is set, LocMem otherwise)
CACHES = get_cache_config(testing=TESTING)

SESSION_ENGINE = "django.contrib.sessions.backends.db"
SESSION_COOKIE_NAME = "hrpayroll_session"
SESSION_COOKIE_AGE = 86400  # 1 day

# Production security settings
if not DEBUG and not TESTING:
    SECURE_CONTENT_TYPE_NOSNIFF = True
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_SECONDS = 31536000  # 1 year
    SECURE_SSL_REDIRECT = config("SECURE_SSL_REDIRECT", default=True, cast=bool)
    SESSION_COOKIE_SECURE = config("SESSION_COOKIE_SECURE", default=True, cast=bool)
    CSRF_COOKIE_SECURE = config("CSRF_COOKIE_SECURE", default=True, cast=bool)
    SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

# CORS settings
CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in config(
        "CORS_ALLOWED_ORIGINS",
        default="http://localhost:3000,http://127.0.0.1:3000",
    ).split(",")
    if origin.strip()
]
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_ALL_ORIGINS = DEBUG

CSRF_TRUSTED_ORIGINS = [
    origin.strip()
    for origin in config("CSRF_TRUSTED_ORIGINS", default="", cast=str).split(",")
    if origin.strip()
]

# REST Framework settings
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.TokenAuthentication",
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "users.permissions.IsEmployeeOrAbove",
    ],
    "DEFAULT_PAGINATION_CLASS": "core.pagination.StandardResultsSetPagination",
    "PAGE_SIZE": 20,
    "DEFAULT_FILTER_BACKENDS": [
        "django_filters.rest_framework.DjangoFilterBackend",
        "rest_framework.filters.OrderingFilter",
        "rest_framework.filters.SearchFilter",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "EXCEPTION_HANDLER": "core.exceptions.custom_exception_handler",
    "COERCE_DECIMAL_TO_STRING": True,
}

# Payroll engine settings
PAYROLL = {
    "BULK_TIMEOUT_SECONDS": config("PAYROLL_BULK_TIMEOUT_SECONDS", default=120, cast=int),
    "BULK_MAX_WORKERS": config("PAYROLL_BULK_MAX_WORKERS", default=4, cast=int),
    "PAYROLL_NUMBER_PREFIX": config("PAYROLL_NUMBER_PREFIX", default="PAY"),
    "DEFAULT_LEAVE_ALLOWANCES": {
        "casual": 12,
        "sick": 10,
        "annual": 20,
        "maternity": 90,
    },
}

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
        "OPTIONS": {
            "min_length": 8,
        },
    },
    {
        "NAME": "django.contrib.auth.password_validation.CommonPasswordValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.NumericPasswordValidator",
    },
]

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = config("TIME_ZONE", default="UTC")
USE_I18N = True
USE_TZ = True

# Static files
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LOG_DIR = Path(config("LOG_DIR", default=str(BASE_DIR / "logs")))
if not TESTING:
    LOG_DIR.mkdir(exist_ok=True)

# Logging configuration with rotation and PII redaction
_app_handlers = ["console"] if (DEBUG or TESTING) else ["app_file", "console"]

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,

    "filters": {
        "pii_redactor": {"()": "hrpayroll.logging_filters.PIIRedactorFilter"},
    },

    "formatters": {
        "verbose": {"format": "{levelname} {asctime} {name} {process:d} {thread:d} {message}", "style": "{"},
        "simple":  {"format": "{levelname} {asctime} {name} {message}", "style": "{"},
        "minimal": {"format": "{levelname} {message}", "style": "{"},
    },

    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "minimal",
            "level": "DEBUG" if DEBUG else "INFO",
            "filters": ["pii_redactor"],
        },
    },

    "loggers": {
        "django":   {"handlers": ["console"], "level": "WARNING", "propagate": False},
        "core":     {"handlers": _app_handlers, "level": "INFO", "propagate": False},
        "users":    {"handlers": _app_handlers, "level": "INFO", "propagate": False},
        "worktime": {"handlers": _app_handlers, "level": "INFO", "propagate": False},
        "leaves":   {"handlers": _app_handlers, "level": "INFO", "propagate": False},
        "payroll":  {"handlers": _app_handlers, "level": "INFO", "propagate": False},

        # root
        "": {"handlers": ["console"], "level": "WARNING"},
    },
}

if not (DEBUG or TESTING):
    LOGGING["handlers"]["app_file"] = {
        "class": "logging.handlers.RotatingFileHandler",
        "filename": LOG_DIR / "hrpayroll.log",
        "maxBytes": 5 * 1024 * 1024,
        "backupCount": 3,
        "formatter": "simple",
        "level": "INFO",
        "encoding": "utf-8",
        "filters": ["pii_redactor"],
    }
