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

import datetime
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeAlias

from django.utils.timezone import now

from grading.constants import ROLE_ALLOWANCE_FLAGS, AccessFlag, Role
from grading.predicates import (
    component_allows_peer,
    grading_has_started,
    has_active_submission,
    is_peer_assigned,
    passes_min_group,
    section_contains_submitter,
)
from grading.rules import (  # noqa: F401
    AccessError,
    Rule,
    RuleTable,
    UnknownAction,
    get_default_rule_table,
)


if TYPE_CHECKING:
    from collections.abc import Mapping

    from django import http

    from grading.records import Component, GradedGradeable, GradingQueries


__doc__ = """
.. autoclass:: ActorContext
.. autoclass:: PolicyEngine

.. autoexception:: AccessError
.. autoexception:: UnknownAction
.. autoexception:: MissingArgument
"""

logger = logging.getLogger(__name__)

AccessArgs: TypeAlias = "Mapping[str, Any]"


class MissingArgument(AccessError, KeyError):  # noqa: N818
    def __init__(self, action: str, argument: str) -> None:
        super().__init__(f"Missing argument '{argument}' for action '{action}'")
        self.action = action
        self.argument = argument

    def __str__(self) -> str:
        return str(self.args[0])


@dataclass(frozen=True, kw_only=True)
class ActorContext:
    """Who is asking, built fresh for each check.

    .. attribute:: role
    .. attribute:: actor_id

        *None* for logged-out actors.

    .. attribute:: csrf_valid

        Whether the request carried a valid CSRF token.

    .. attribute:: now
    """

    role: Role
    actor_id: str | None = None
    csrf_valid: bool = False
    now: datetime.datetime = field(default_factory=now)


def _require_arg(action: str, args: AccessArgs, name: str) -> Any:
    try:
        return args[name]
    except KeyError:
        raise MissingArgument(action, name) from None


class PolicyEngine:
    """Decides whether an actor may perform a named action.

    Holds only the rule table and the query collaborator, neither of which
    it modifies, so one instance may serve any number of concurrent checks.

    .. automethod:: is_allowed
    .. automethod:: is_allowed_for
    .. automethod:: can_i
    """

    def __init__(self,
            queries: GradingQueries,
            rules: RuleTable | None = None) -> None:
        if rules is None:
            rules = get_default_rule_table()

        self.queries = queries
        self.rules = rules

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.rules!r})"

    def is_allowed(self,
            action: str,
            role: Role,
            actor_id: str | None,
            csrf_valid: bool,
            args: AccessArgs | None = None,
            now_datetime: datetime.datetime | None = None,
            ) -> bool:
        if now_datetime is None:
            now_datetime = now()

        return self.is_allowed_for(
                ActorContext(
                    role=role,
                    actor_id=actor_id,
                    csrf_valid=csrf_valid,
                    now=now_datetime),
                action, args)

    def is_allowed_for(self,
            ctx: ActorContext,
            action: str,
            args: AccessArgs | None = None,
            ) -> bool:
        """
        :raises UnknownAction: if *action* is not in the rule table.
        :raises MissingArgument: if the rule for *action* needs a
            ``gradeable`` or ``component`` that *args* does not have.
        """
        rule = self.rules.rule_for(action)

        denial = self._get_denial(rule, ctx, args if args is not None else {})
        if denial is not None:
            logger.debug("denied '%s' to %s (actor '%s'): %s",
                    action, ctx.role.identifier, ctx.actor_id, denial)
            return False

        return True

    def can_i(self, request: http.HttpRequest, action: str, **args: Any) -> bool:
        from grading.utils import get_actor_context
        return self.is_allowed_for(get_actor_context(request), action, args)

    # {{{ evaluation

    def _get_denial(self,
            rule: Rule, ctx: ActorContext, args: AccessArgs) -> str | None:
        """Return a description of the first failing check, or *None* if
        every check passes.
        """
        role = ctx.role

        if not rule.has(ROLE_ALLOWANCE_FLAGS[role]):
            return "role not allowed"

        if rule.has(AccessFlag.check_csrf) and not ctx.csrf_valid:
            return "invalid CSRF token"

        if rule.requires_gradeable:
            graded_gradeable = _require_arg(rule.action, args, "gradeable")
            if graded_gradeable is None:
                return "no gradeable"

            denial = self._get_gradeable_denial(rule, ctx, graded_gradeable)
            if denial is not None:
                return denial

        if rule.requires_component:
            component = _require_arg(rule.action, args, "component")
            if component is None:
                return "no component"

            denial = self._get_component_denial(rule, ctx, component)
            if denial is not None:
                return denial

        return None

    def _get_gradeable_denial(self,
            rule: Rule,
            ctx: ActorContext,
            graded_gradeable: GradedGradeable,
            ) -> str | None:
        role = ctx.role
        gradeable = graded_gradeable.gradeable
        actor_id = ctx.actor_id

        if (rule.has(AccessFlag.check_min_group)
                and not passes_min_group(role, gradeable)):
            return "below minimum grading group"

        if (rule.has(AccessFlag.check_has_submission)
                and not has_active_submission(graded_gradeable)):
            return "no active submission"

        if (rule.has(AccessFlag.check_grading_section)
                and role is Role.LIMITED_ACCESS_GRADER):
            if actor_id is None:
                return "no actor"

            if not grading_has_started(gradeable, ctx.now):
                return "grading has not started"

            if not section_contains_submitter(
                    self.queries, actor_id, graded_gradeable):
                return "submitter not in grading sections"

        if (rule.has(AccessFlag.check_peer_assignment)
                and role is Role.STUDENT):
            if actor_id is None:
                return "no actor"

            submitter_id = graded_gradeable.submitter.user_id
            is_self = (
                    rule.has(AccessFlag.allow_self_gradeable)
                    and submitter_id is not None
                    and submitter_id == actor_id)

            if not is_self:
                if not gradeable.peer_grading:
                    return "gradeable is not peer graded"

                if not is_peer_assigned(
                        self.queries, gradeable, actor_id, submitter_id):
                    return "submitter not in peer assignment"

        return None

    def _get_component_denial(self,
            rule: Rule,
            ctx: ActorContext,
            component: Component,
            ) -> str | None:
        if (rule.has(AccessFlag.check_component_peer)
                and ctx.role is Role.STUDENT
                and not component_allows_peer(component)):
            return "component does not allow peer grading"

        return None

    # }}}

# vim: foldmethod=marker
