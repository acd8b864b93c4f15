"""Django settings for the Wave wallet simulator.


This project runs a single simulated wallet:
- One balance in francs CFA, persisted under the "solde" key
- A newest-first operation history, persisted under the "historique" key
- A QR payload describing the balance, refreshed periodically


Authentication, real payments and multi-user state are intentionally omitted.
"""

import os
from pathlib import Path
from decimal import Decimal


def env_bool(name, default=""):
    v = os.getenv(name, default)
    return v.lower() in ("1", "true", "yes", "on")

BASE_DIR = Path(__file__).resolve().parent.parent
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-only-insecure-key")
DEBUG = env_bool("DEBUG", "1")
ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "*").split(",")
CSRF_TRUSTED_ORIGINS = os.getenv("CSRF_TRUSTED_ORIGINS", "").split(",") if os.getenv("CSRF_TRUSTED_ORIGINS") else []

#######################
# Wallet rules. Fee rate and page size default to the values the UI was built around.
WALLET_FEE_RATE = Decimal(os.getenv("WALLET_FEE_RATE", "0.01"))
WALLET_PAGE_SIZE = int(os.getenv("WALLET_PAGE_SIZE", "3"))
WALLET_DEFAULT_BALANCE = Decimal(os.getenv("WALLET_DEFAULT_BALANCE", "120000"))
WALLET_USER_ID = os.getenv("WALLET_USER_ID", "USER123")

# Seconds between two QR payload regenerations
WALLET_QR_REFRESH_SECONDS = int(os.getenv("WALLET_QR_REFRESH_SECONDS", "30"))

# Key-value backend: "database" | "cache" | "memory"
WALLET_STORAGE_BACKEND = os.getenv("WALLET_STORAGE_BACKEND", "database")
WALLET_CACHE_ALIAS = os.getenv("WALLET_CACHE_ALIAS", "default")
#######################


INSTALLED_APPS = [
	"django.contrib.admin",
	"django.contrib.auth",
	"django.contrib.contenttypes",
	"django.contrib.sessions",
	"django.contrib.messages",
	"django.contrib.staticfiles",
	# local apps
	"core",
	"api",
]


MIDDLEWARE = [
	"django.middleware.security.SecurityMiddleware",
	"django.contrib.sessions.middleware.SessionMiddleware",
	"django.middleware.common.CommonMiddleware",
	"django.middleware.csrf.CsrfViewMiddleware",
	"django.contrib.auth.middleware.AuthenticationMiddleware",
	"django.contrib.messages.middleware.MessageMiddleware",
]


ROOT_URLCONF = "wave_wallet.urls"
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


WSGI_APPLICATION = "wave_wallet.wsgi.application"


DB_ENGINE = os.getenv("DB_ENGINE", "sqlite")
if DB_ENGINE == "postgres":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.getenv("POSTGRES_DB", "wave_wallet"),
            "USER": os.getenv("POSTGRES_USER", "wave_wallet"),
            "PASSWORD": os.getenv("POSTGRES_PASSWORD", "wave_wallet"),
            "HOST": os.getenv("POSTGRES_HOST", "localhost"),
            "PORT": os.getenv("POSTGRES_PORT", "5432"),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }


CACHES = {
	"default": {
		"BACKEND": "django.core.cache.backends.locmem.LocMemCache",
		"LOCATION": "wave-wallet",
	}
}


# Masking flag and history cursor live in the session; no server-side session table needed.
SESSION_ENGINE = "django.contrib.sessions.backends.signed_cookies"


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
		"core": {"handlers": ["console"], "level": os.getenv("WALLET_LOG_LEVEL", "INFO"), "propagate": True},
		"api": {"handlers": ["console"], "level": os.getenv("WALLET_LOG_LEVEL", "INFO"), "propagate": True},
	},
}


AUTH_PASSWORD_VALIDATORS = []


LANGUAGE_CODE = "fr-fr"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True


STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
