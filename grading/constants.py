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

from enum import IntEnum, StrEnum

from django.utils.translation import pgettext_lazy


# {{{ roles

class Role(IntEnum):
    """
    The value of each member is its rank. Privilege increases as the rank
    decreases, so :attr:`INSTRUCTOR` has the lowest value. The ranks must
    stay contiguous for :func:`grading.predicates.has_at_least` to hold.
    """

    INSTRUCTOR = 1
    FULL_ACCESS_GRADER = 2
    LIMITED_ACCESS_GRADER = 3
    STUDENT = 4
    NONE = 5

    @classmethod
    def from_identifier(cls, identifier: str) -> Role:
        try:
            return cls[identifier.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown role '{identifier}'") from None

    @property
    def identifier(self) -> str:
        return self.name.lower()


ROLE_CHOICES = (
        (Role.INSTRUCTOR, pgettext_lazy("Grading role", "Instructor")),
        (Role.FULL_ACCESS_GRADER,
            pgettext_lazy("Grading role", "Full access grader")),
        (Role.LIMITED_ACCESS_GRADER,
            pgettext_lazy("Grading role", "Limited access grader")),
        (Role.STUDENT, pgettext_lazy("Grading role", "Student")),
        (Role.NONE, pgettext_lazy("Grading role", "Not logged in")),
        )

# }}}


# {{{ access flags

class AccessFlag(StrEnum):
    # role allowances
    allow_instructor = "allow_instructor"
    allow_full_access_grader = "allow_full_access_grader"
    allow_limited_access_grader = "allow_limited_access_grader"
    allow_student = "allow_student"
    allow_logged_out = "allow_logged_out"

    # contextual checks
    check_min_group = "check_min_group"
    """The actor must be at or above the gradeable's minimum grading role.
    Full access graders pass on gradeables without TA grading, students
    pass on peer graded ones."""

    check_grading_section = "check_grading_section"
    """Limited access graders only: the submitter must be in one of the
    grader's sections, and grading must have started."""

    check_peer_assignment = "check_peer_assignment"
    """Students only: the submitter must be in the student's peer grading
    assignment."""

    check_has_submission = "check_has_submission"
    check_csrf = "check_csrf"

    allow_self_gradeable = "allow_self_gradeable"
    """Students may always reach their own submission, even when the peer
    assignment is checked."""

    check_component_peer = "check_component_peer"
    """Students only: the component must allow peer grading."""

    # argument requirements, derived from the checks above
    requires_gradeable = "requires_gradeable"
    requires_component = "requires_component"


ROLE_ALLOWANCE_FLAGS = {
        Role.INSTRUCTOR: AccessFlag.allow_instructor,
        Role.FULL_ACCESS_GRADER: AccessFlag.allow_full_access_grader,
        Role.LIMITED_ACCESS_GRADER: AccessFlag.allow_limited_access_grader,
        Role.STUDENT: AccessFlag.allow_student,
        Role.NONE: AccessFlag.allow_logged_out,
        }

GRADEABLE_CHECK_FLAGS = frozenset([
        AccessFlag.check_min_group,
        AccessFlag.check_grading_section,
        AccessFlag.check_peer_assignment,
        AccessFlag.check_has_submission,
        AccessFlag.allow_self_gradeable,
        ])

COMPONENT_CHECK_FLAGS = frozenset([
        AccessFlag.check_component_peer,
        ])

DERIVED_FLAGS = frozenset([
        AccessFlag.requires_gradeable,
        AccessFlag.requires_component,
        ])


def min_role_flags(minimum: Role) -> frozenset[AccessFlag]:
    """Return the role allowances of every logged-in role at or above
    *minimum*.
    """
    if minimum is Role.NONE:
        raise ValueError("use AccessFlag.allow_logged_out for logged-out access")

    return frozenset(
            flag for role, flag in ROLE_ALLOWANCE_FLAGS.items()
            if role is not Role.NONE and role <= minimum)

# }}}


# {{{ actions

class GradingAction(StrEnum):
    status = "grading.status"
    status_full = "grading.status.full"
    details = "grading.details"
    details_show_all = "grading.details.show_all"
    details_show_all_no_sections = "grading.details.show_all_no_sections"
    details_show_empty_teams = "grading.details.show_empty_teams"
    grade = "grading.grade"
    grade_if_no_sections_exist = "grading.grade.if_no_sections_exist"
    save_one_component = "grading.save_one_component"
    save_general_comment = "grading.save_general_comment"
    get_mark_data = "grading.get_mark_data"
    get_gradeable_comment = "grading.get_gradeable_comment"
    add_one_new_mark = "grading.add_one_new_mark"
    delete_one_mark = "grading.delete_one_mark"
    get_marked_users = "grading.get_marked_users"
    get_marked_users_full_stats = "grading.get_marked_users.full_stats"
    show_edit_teams = "grading.show_edit_teams"
    import_teams = "grading.import_teams"
    export_teams = "grading.export_teams"
    submit_team_form = "grading.submit_team_form"
    verify_grader = "grading.verify_grader"
    verify_all = "grading.verify_all"

    autograding_load_checks = "autograding.load_checks"
    autograding_show_hidden_cases = "autograding.show_hidden_cases"

# }}}

# vim: foldmethod=marker
