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

import logging
from functools import cache
from typing import TYPE_CHECKING, Any, Concatenate, ParamSpec

from django.conf import settings
from django.core.exceptions import (
    ImproperlyConfigured,
    PermissionDenied,
    SuspiciousOperation,
)
from django.utils.module_loading import import_string
from django.utils.timezone import now
from django.utils.translation import gettext as _

from gradeaccess.checks import (
    GRADEACCESS_EXTRA_RULES_FILE,
    GRADEACCESS_QUERIES,
    GRADEACCESS_ROLE_RESOLVER,
    REQUIRED_CONF_ERROR_PATTERN,
)
from grading.access import ActorContext, MissingArgument, PolicyEngine
from grading.constants import Role
from grading.rules import UnknownAction, get_default_rule_table, load_rules_from_file


if TYPE_CHECKING:
    from collections.abc import Callable

    from django import http


P = ParamSpec("P")

logger = logging.getLogger(__name__)


# {{{ actor context

def default_role_resolver(request: http.HttpRequest) -> Role:
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return Role.NONE

    if user.is_superuser:
        return Role.INSTRUCTOR

    role = getattr(user, "grading_role", None)
    if role is None:
        return Role.STUDENT
    elif isinstance(role, str):
        return Role.from_identifier(role)
    else:
        return Role(role)


def get_role_resolver() -> Callable[[http.HttpRequest], Role]:
    resolver = getattr(settings, GRADEACCESS_ROLE_RESOLVER, None)
    if resolver is None:
        return default_role_resolver

    return import_string(resolver)


def is_csrf_token_valid(request: http.HttpRequest) -> bool:
    """Return *True* only for a POST carrying a token, in the form data or
    the CSRF header, that matches the CSRF cookie.
    """
    from django.middleware.csrf import CsrfViewMiddleware

    if request.method != "POST":
        return False

    if (not request.POST.get("csrfmiddlewaretoken")
            and not request.META.get(settings.CSRF_HEADER_NAME)):
        return False

    # process_view returns None when it accepts the request, and a failure
    # response otherwise.
    middleware = CsrfViewMiddleware(lambda request: None)
    return middleware.process_view(request, None, (), {}) is None


def get_actor_context(request: http.HttpRequest) -> ActorContext:
    role = get_role_resolver()(request)

    actor_id = None
    if role is not Role.NONE:
        actor_id = request.user.get_username()

    return ActorContext(
            role=role,
            actor_id=actor_id,
            csrf_valid=is_csrf_token_valid(request),
            now=now())

# }}}


# {{{ policy engine

@cache
def get_policy_engine() -> PolicyEngine:
    """Return the engine described by the settings, building it on first
    use. The cache is dropped whenever a ``GRADEACCESS_*`` setting changes,
    see :mod:`grading.receivers`.
    """
    queries_factory = getattr(settings, GRADEACCESS_QUERIES, None)
    if queries_factory is None:
        raise ImproperlyConfigured(
                REQUIRED_CONF_ERROR_PATTERN % {"location": GRADEACCESS_QUERIES})

    rules = get_default_rule_table()

    extra_rules_file = getattr(settings, GRADEACCESS_EXTRA_RULES_FILE, None)
    if extra_rules_file is not None:
        rules = rules.merged_with(load_rules_from_file(extra_rules_file))
        logger.info("merged site rules from '%s'", extra_rules_file)

    return PolicyEngine(import_string(queries_factory)(), rules)


def can_i(request: http.HttpRequest, action: str, **args: Any) -> bool:
    return get_policy_engine().can_i(request, action, **args)


def check_action(request: http.HttpRequest, action: str, **args: Any) -> None:
    """Like :func:`can_i`, but raise instead of returning *False*.

    :raises PermissionDenied: if the action is denied or unknown.
    :raises SuspiciousOperation: if an argument required by the action's
        rule is missing.
    """
    try:
        allowed = can_i(request, action, **args)
    except MissingArgument as e:
        logger.error("%s", e)
        raise SuspiciousOperation(str(e)) from e
    except UnknownAction as e:
        logger.error("%s", e)
        raise PermissionDenied(_("may not perform this action")) from e

    if not allowed:
        raise PermissionDenied(_("may not perform this action"))


def action_required(
        action: str,
        **arg_getters: Callable[..., Any],
        ) -> Callable[
            [Callable[Concatenate[http.HttpRequest, P], http.HttpResponse]],
            Callable[Concatenate[http.HttpRequest, P], http.HttpResponse]]:
    """View decorator. Each keyword in *arg_getters* names an access argument
    and maps to a callable receiving the view's arguments and returning the
    value, e.g.::

        @action_required("grading.grade",
                gradeable=lambda request, gradeable_id, submitter_id:
                    get_graded_gradeable(gradeable_id, submitter_id))
        def grade(request, gradeable_id, submitter_id):
            ...
    """
    def decorator(
            view: Callable[Concatenate[http.HttpRequest, P], http.HttpResponse]
            ) -> Callable[Concatenate[http.HttpRequest, P], http.HttpResponse]:
        def wrapper(
                request: http.HttpRequest,
                *args: P.args,
                **kwargs: P.kwargs) -> http.HttpResponse:
            access_args = {
                    name: getter(request, *args, **kwargs)
                    for name, getter in arg_getters.items()}
            check_action(request, action, **access_args)

            return view(request, *args, **kwargs)

        from functools import update_wrapper
        update_wrapper(wrapper, view)

        return wrapper

    return decorator


class ActionPermissionWrapper:
    """Lets templates ask ``can["grading.status.full"]`` for actions that
    need no arguments.
    """

    request: http.HttpRequest

    def __init__(self, request: http.HttpRequest) -> None:
        self.request = request

    def __getitem__(self, action: str) -> bool:
        return can_i(self.request, action)

    def __iter__(self):
        raise TypeError("ActionPermissionWrapper is not iterable.")

# }}}

# vim: foldmethod=marker
