from __future__ import annotations


__copyright__ = "Copyright (C) 2026 gradeaccess contributors"

__license__ = """
Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
THE SOFTWARE.
"""

import os

from django.conf import settings
from django.core.checks import Critical, register
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string


REQUIRED_CONF_ERROR_PATTERN = (
    "You must configure %(location)s for gradeaccess to run properly.")
INSTANCE_ERROR_PATTERN = "%(location)s must be an instance of %(types)s."
GENERIC_ERROR_PATTERN = "Error in '%(location)s': %(error_type)s: %(error_str)s"

GRADEACCESS_QUERIES = "GRADEACCESS_QUERIES"
GRADEACCESS_ROLE_RESOLVER = "GRADEACCESS_ROLE_RESOLVER"
GRADEACCESS_EXTRA_RULES_FILE = "GRADEACCESS_EXTRA_RULES_FILE"

GRADEACCESS_STARTUP_CHECKS_TAG = "start_up_check"


class GradeAccessCriticalCheckMessage(Critical):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.obj = self.obj or ImproperlyConfigured.__name__


def _check_dotted_path(location, value, id_prefix, first_id):
    """Check that *value* is a dotted path that imports. Error IDs are
    numbered from *first_id*.
    """
    if not isinstance(value, str):
        return [GradeAccessCriticalCheckMessage(
            msg=(INSTANCE_ERROR_PATTERN
                 % {"location": location, "types": "str"}),
            id=f"{id_prefix}.E{first_id:03d}"
        )]

    try:
        import_string(value)
    except ImportError as e:
        return [GradeAccessCriticalCheckMessage(
            msg=(
                GENERIC_ERROR_PATTERN
                % {
                    "location": location,
                    "error_type": type(e).__name__,
                    "error_str": str(e)
                }),
            id=f"{id_prefix}.E{first_id + 1:03d}"
        )]

    return []


def check_gradeaccess_settings(app_configs, **kwargs):
    errors = []

    # {{{ check GRADEACCESS_QUERIES

    queries = getattr(settings, GRADEACCESS_QUERIES, None)
    if queries is None:
        errors.append(GradeAccessCriticalCheckMessage(
            msg=REQUIRED_CONF_ERROR_PATTERN % {"location": GRADEACCESS_QUERIES},
            id="gradeaccess_queries.E001"
        ))
    else:
        errors.extend(_check_dotted_path(
            GRADEACCESS_QUERIES, queries, "gradeaccess_queries", 2))

    # }}}

    # {{{ check GRADEACCESS_ROLE_RESOLVER

    role_resolver = getattr(settings, GRADEACCESS_ROLE_RESOLVER, None)
    if role_resolver is not None:
        errors.extend(_check_dotted_path(
            GRADEACCESS_ROLE_RESOLVER, role_resolver,
            "gradeaccess_role_resolver", 1))

    # }}}

    # {{{ check GRADEACCESS_EXTRA_RULES_FILE

    extra_rules_file = getattr(settings, GRADEACCESS_EXTRA_RULES_FILE, None)
    if extra_rules_file is not None:
        if not isinstance(extra_rules_file, str):
            errors.append(GradeAccessCriticalCheckMessage(
                msg=(INSTANCE_ERROR_PATTERN
                     % {"location": GRADEACCESS_EXTRA_RULES_FILE,
                        "types": "str"}),
                id="gradeaccess_extra_rules_file.E001"
            ))
        elif not os.path.isfile(extra_rules_file):
            errors.append(GradeAccessCriticalCheckMessage(
                msg=(
                    f"{GRADEACCESS_EXTRA_RULES_FILE}: "
                    f"'{extra_rules_file}' is not a file"),
                id="gradeaccess_extra_rules_file.E002"
            ))

    # }}}

    return errors


# {{{ startup

def register_startup_checks():
    register(check_gradeaccess_settings, GRADEACCESS_STARTUP_CHECKS_TAG)


def validate_rule_table():
    """
    Build the effective rule table once so that duplicate actions and
    malformed site rule files stop the process at startup. This has to raise,
    as registered checks only run after AppConfig.ready() is done.
    """
    from grading.rules import get_default_rule_table, load_rules_from_file

    rules = get_default_rule_table()

    extra_rules_file = getattr(settings, GRADEACCESS_EXTRA_RULES_FILE, None)
    if isinstance(extra_rules_file, str) and os.path.isfile(extra_rules_file):
        rules = rules.merged_with(load_rules_from_file(extra_rules_file))

    return rules

# }}}

# vim: foldmethod=marker
