# See https://docs.djangoproject.com/en/dev/howto/deployment/checklist/

# {{{ database and site

SECRET_KEY = '<CHANGE ME TO SOME RANDOM STRING ONCE IN PRODUCTION>'

ALLOWED_HOSTS = [
        "grading.example.com",
        ]

# Uncomment this to use a real database. If left commented out, a local SQLite3
# database will be used, which is not recommended for production use.
#
# DATABASES = {
#     'default': {
#         'ENGINE': 'django.db.backends.postgresql',
#         'NAME': 'gradeaccess',
#         'USER': 'gradeaccess',
#         'PASSWORD': '<PASSWORD>',
#         'HOST': '127.0.0.1',
#         'PORT': '5432',
#     }
# }

TIME_ZONE = "America/Chicago"

# }}}

# {{{ access policy

# A zero-argument callable returning the object that answers peer
# assignment and grading section lookups. It needs two methods:
#
#   get_peer_assignment(gradeable_id, grader_id) -> set of user ids
#   get_grading_sections_for_user(gradeable_id, user_id) -> sections
#
# The in-memory default knows no assignments or sections at all, so every
# peer and section check fails with it.
GRADEACCESS_QUERIES = "grading.records.InMemoryGradingQueries"

# Maps a request to a grading role. The default treats superusers as
# instructors, reads a 'grading_role' attribute off other logged-in users,
# and falls back to 'student'.
#
# GRADEACCESS_ROLE_RESOLVER = "grading.utils.default_role_resolver"

# Site-specific actions, in YAML:
#
#   rules:
#   - action: grading.export_grades
#     min_role: full_access_grader
#     checks: [check_csrf]
#   - action: grading.public_stats
#     allow: [none, student]
#
# Actions may not redefine the built-in ones. Run
#
#   python manage.py show_access_rules
#
# to see the merged table.
#
# GRADEACCESS_EXTRA_RULES_FILE = "/etc/gradeaccess/rules.yml"

# }}}

# {{{ logging

# Denials are logged to the 'grading.access' logger at DEBUG level.
#
# LOGGING = {
#     "version": 1,
#     "disable_existing_loggers": False,
#     "handlers": {
#         "console": {"class": "logging.StreamHandler"},
#     },
#     "loggers": {
#         "grading": {"handlers": ["console"], "level": "DEBUG"},
#     },
# }

# }}}

# vim: foldmethod=marker
