from __future__ import annotations


"""
Django settings for gradeaccess.
"""

# Do not change this file. All these settings can be overridden in
# local_settings.py.

import os
from importlib.util import module_from_spec, spec_from_file_location
from os.path import join


BASE_DIR = os.path.dirname(os.path.dirname(__file__))

_local_settings_file = join(BASE_DIR, "local_settings.py")

if os.environ.get("GRADEACCESS_LOCAL_SETTINGS", None):
    _local_settings_file = os.environ["GRADEACCESS_LOCAL_SETTINGS"]

local_settings: dict = {}
if os.path.isfile(_local_settings_file):
    _spec = spec_from_file_location("local_settings", _local_settings_file)
    assert _spec is not None and _spec.loader is not None
    _local_settings_module = module_from_spec(_spec)
    _spec.loader.exec_module(_local_settings_module)
    local_settings = _local_settings_module.__dict__

# {{{ django: apps

INSTALLED_APPS = (
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",

    "grading.apps.GradingConfig",
)

# }}}

# {{{ django: middleware

MIDDLEWARE = (
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
)

# }}}

# {{{ database and site

SECRET_KEY = "<CHANGE ME TO SOME RANDOM STRING ONCE IN PRODUCTION>"

DEBUG = False

ALLOWED_HOSTS: list[str] = []

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": join(BASE_DIR, "db.sqlite3"),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

USE_I18N = True
USE_TZ = True
TIME_ZONE = "America/Chicago"
LANGUAGE_CODE = "en-us"

# }}}

# {{{ logging

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "grading": {
            "handlers": ["console"],
            "level": "INFO",
        },
    },
}

# }}}

# {{{ gradeaccess

# Dotted path to a zero-argument callable returning the object that answers
# peer assignment and grading section lookups.
GRADEACCESS_QUERIES = "grading.records.InMemoryGradingQueries"

# Dotted path to a callable mapping a request to a grading role.
# GRADEACCESS_ROLE_RESOLVER = "grading.utils.default_role_resolver"

# YAML file with site-specific action rules.
# GRADEACCESS_EXTRA_RULES_FILE = "/path/to/rules.yml"

# }}}

for name, val in local_settings.items():
    if not name.startswith("_") and name.isupper():
        globals()[name] = val

# vim: foldmethod=marker
