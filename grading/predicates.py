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

from typing import TYPE_CHECKING

from grading.constants import Role


if TYPE_CHECKING:
    import datetime

    from grading.records import (
        Component,
        Gradeable,
        GradedGradeable,
        GradingQueries,
    )


# {{{ role privilege

def has_at_least(role: Role, minimum: Role) -> bool:
    # Ranks decrease as privilege increases, hence "<=". This relies on
    # the ranks in Role being contiguous.
    return role <= minimum


def passes_min_group(role: Role, gradeable: Gradeable) -> bool:
    if has_at_least(role, gradeable.min_grading_role):
        return True

    # full access graders may view submissions without manual grading
    if role is Role.FULL_ACCESS_GRADER and not gradeable.ta_grading:
        return True

    # students may view peer graded submissions
    if role is Role.STUDENT and gradeable.peer_grading:
        return True

    return False

# }}}


# {{{ gradeable predicates

def has_active_submission(graded_gradeable: GradedGradeable) -> bool:
    return graded_gradeable.active_version > 0


def grading_has_started(
        gradeable: Gradeable, now_datetime: datetime.datetime) -> bool:
    return gradeable.grade_start_date <= now_datetime


def section_contains_submitter(
        queries: GradingQueries,
        actor_id: str,
        graded_gradeable: GradedGradeable,
        ) -> bool:
    sections = queries.get_grading_sections_for_user(
            graded_gradeable.gradeable.id, actor_id)
    submitter = graded_gradeable.submitter

    # team gradeables are sectioned by team, others by user
    if graded_gradeable.gradeable.team_assignment:
        return any(section.contains_team(submitter.team) for section in sections)
    else:
        return any(
                section.contains_user(submitter.user_id) for section in sections)


def is_peer_assigned(
        queries: GradingQueries,
        gradeable: Gradeable,
        grader_id: str,
        grantee_id: str | None,
        ) -> bool:
    if grantee_id is None:
        return False

    return grantee_id in queries.get_peer_assignment(gradeable.id, grader_id)

# }}}


def component_allows_peer(component: Component) -> bool:
    return component.is_peer

# vim: foldmethod=marker
