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

import unittest
from datetime import timedelta

from django.utils.timezone import now

from grading import predicates
from grading.constants import Role
from grading.records import InMemoryGradingQueries, Submitter
from tests import factories
from tests.utils import mock


LOGGED_IN_ROLES = [
    Role.INSTRUCTOR,
    Role.FULL_ACCESS_GRADER,
    Role.LIMITED_ACCESS_GRADER,
    Role.STUDENT,
]


class HasAtLeastTest(unittest.TestCase):
    # test grading.predicates.has_at_least
    def test_matches_rank_order(self):
        for r1 in Role:
            for r2 in Role:
                with self.subTest(role=r1, minimum=r2):
                    self.assertEqual(
                        predicates.has_at_least(r1, r2), r1.value <= r2.value)

    def test_instructor_has_every_role(self):
        for role in Role:
            self.assertTrue(predicates.has_at_least(Role.INSTRUCTOR, role))

    def test_student_has_only_student(self):
        for role in LOGGED_IN_ROLES:
            self.assertEqual(
                predicates.has_at_least(Role.STUDENT, role),
                role is Role.STUDENT)

    def test_logged_out_has_nothing(self):
        for role in LOGGED_IN_ROLES:
            self.assertFalse(predicates.has_at_least(Role.NONE, role))


class PassesMinGroupTest(unittest.TestCase):
    # test grading.predicates.passes_min_group
    def test_limited_access_grader(self):
        for min_role, expected in [
                (Role.STUDENT, True),
                (Role.LIMITED_ACCESS_GRADER, True),
                (Role.FULL_ACCESS_GRADER, False),
                (Role.INSTRUCTOR, False)]:
            gradeable = factories.GradeableFactory(min_grading_role=min_role)
            with self.subTest(min_role=min_role):
                self.assertEqual(
                    predicates.passes_min_group(
                        Role.LIMITED_ACCESS_GRADER, gradeable),
                    expected)

    def test_full_access_grader_without_ta_grading(self):
        gradeable = factories.GradeableFactory(
            min_grading_role=Role.INSTRUCTOR, ta_grading=True)
        self.assertFalse(
            predicates.passes_min_group(Role.FULL_ACCESS_GRADER, gradeable))

        gradeable = factories.GradeableFactory(
            min_grading_role=Role.INSTRUCTOR, ta_grading=False)
        self.assertTrue(
            predicates.passes_min_group(Role.FULL_ACCESS_GRADER, gradeable))

    def test_no_ta_grading_exception_for_limited_access_grader(self):
        gradeable = factories.GradeableFactory(
            min_grading_role=Role.FULL_ACCESS_GRADER, ta_grading=False)
        self.assertFalse(
            predicates.passes_min_group(Role.LIMITED_ACCESS_GRADER, gradeable))

    def test_student_with_peer_grading(self):
        gradeable = factories.GradeableFactory(
            min_grading_role=Role.LIMITED_ACCESS_GRADER, peer_grading=False)
        self.assertFalse(predicates.passes_min_group(Role.STUDENT, gradeable))

        gradeable = factories.GradeableFactory(
            min_grading_role=Role.LIMITED_ACCESS_GRADER, peer_grading=True)
        self.assertTrue(predicates.passes_min_group(Role.STUDENT, gradeable))

    def test_peer_grading_exception_is_for_students_only(self):
        gradeable = factories.GradeableFactory(
            min_grading_role=Role.INSTRUCTOR, peer_grading=True)
        self.assertFalse(
            predicates.passes_min_group(Role.LIMITED_ACCESS_GRADER, gradeable))


class GradeablePredicatesTest(unittest.TestCase):
    def test_has_active_submission(self):
        for version, expected in [(-1, False), (0, False), (1, True), (7, True)]:
            gg = factories.GradedGradeableFactory(active_version=version)
            with self.subTest(version=version):
                self.assertEqual(
                    predicates.has_active_submission(gg), expected)

    def test_grading_has_started(self):
        now_datetime = now()
        gradeable = factories.GradeableFactory(grade_start_date=now_datetime)

        self.assertTrue(predicates.grading_has_started(gradeable, now_datetime))
        self.assertTrue(predicates.grading_has_started(
            gradeable, now_datetime + timedelta(seconds=1)))
        self.assertFalse(predicates.grading_has_started(
            gradeable, now_datetime - timedelta(seconds=1)))

    def test_component_allows_peer(self):
        self.assertTrue(predicates.component_allows_peer(
            factories.ComponentFactory(is_peer=True)))
        self.assertFalse(predicates.component_allows_peer(
            factories.ComponentFactory(is_peer=False)))


class SectionContainsSubmitterTest(unittest.TestCase):
    # test grading.predicates.section_contains_submitter
    def setUp(self):
        self.gradeable = factories.GradeableFactory(id="hw1")

    def test_user_in_section(self):
        gg = factories.GradedGradeableFactory(
            gradeable=self.gradeable, submitter=Submitter(user_id="alice"))
        queries = InMemoryGradingQueries.from_mappings(grading_sections={
            ("hw1", "ta"): [
                factories.GradingSectionFactory(user_ids=frozenset(["bob"])),
                factories.GradingSectionFactory(user_ids=frozenset(["alice"])),
            ]})

        self.assertTrue(predicates.section_contains_submitter(queries, "ta", gg))

    def test_user_not_in_section(self):
        gg = factories.GradedGradeableFactory(
            gradeable=self.gradeable, submitter=Submitter(user_id="alice"))
        queries = InMemoryGradingQueries.from_mappings(grading_sections={
            ("hw1", "ta"): [
                factories.GradingSectionFactory(user_ids=frozenset(["bob"]))],
            ("hw1", "other_ta"): [
                factories.GradingSectionFactory(user_ids=frozenset(["alice"]))],
            })

        self.assertFalse(
            predicates.section_contains_submitter(queries, "ta", gg))

    def test_no_sections(self):
        gg = factories.GradedGradeableFactory(gradeable=self.gradeable)
        self.assertFalse(predicates.section_contains_submitter(
            InMemoryGradingQueries(), "ta", gg))

    def test_team_matched_by_team(self):
        team = factories.TeamFactory(id="t1", member_ids=frozenset(["alice"]))
        gg = factories.team_graded_gradeable(team)
        gradeable_id = gg.gradeable.id

        by_team = InMemoryGradingQueries.from_mappings(grading_sections={
            (gradeable_id, "ta"): [
                factories.GradingSectionFactory(team_ids=frozenset(["t1"]))]})
        self.assertTrue(predicates.section_contains_submitter(by_team, "ta", gg))

        # a section holding a team member, but not the team, does not match
        by_member = InMemoryGradingQueries.from_mappings(grading_sections={
            (gradeable_id, "ta"): [
                factories.GradingSectionFactory(user_ids=frozenset(["alice"]))]})
        self.assertFalse(
            predicates.section_contains_submitter(by_member, "ta", gg))

    def test_matching_follows_gradeable(self):
        team = factories.TeamFactory(id="t1")
        queries = InMemoryGradingQueries.from_mappings(grading_sections={
            ("hw1", "ta"): [factories.GradingSectionFactory(
                user_ids=frozenset(["alice"]), team_ids=frozenset(["t1"]))]})

        team_gradeable = factories.GradeableFactory(
            id="hw1", team_assignment=True)
        self.assertFalse(predicates.section_contains_submitter(
            queries, "ta", factories.GradedGradeableFactory(
                gradeable=team_gradeable,
                submitter=Submitter(user_id="alice"))))

        self.assertFalse(predicates.section_contains_submitter(
            queries, "ta", factories.team_graded_gradeable(
                team, gradeable=self.gradeable)))

    def test_queries_called_with_gradeable_and_grader(self):
        queries = mock.MagicMock()
        queries.get_grading_sections_for_user.return_value = []
        gg = factories.GradedGradeableFactory(gradeable=self.gradeable)

        predicates.section_contains_submitter(queries, "ta", gg)
        queries.get_grading_sections_for_user.assert_called_once_with("hw1", "ta")


class IsPeerAssignedTest(unittest.TestCase):
    # test grading.predicates.is_peer_assigned
    def setUp(self):
        self.gradeable = factories.GradeableFactory(id="hw1", peer_grading=True)
        self.queries = InMemoryGradingQueries.from_mappings(peer_assignments={
            ("hw1", "alice"): ["bob", "carol"]})

    def test_assigned(self):
        self.assertTrue(predicates.is_peer_assigned(
            self.queries, self.gradeable, "alice", "bob"))

    def test_not_assigned(self):
        self.assertFalse(predicates.is_peer_assigned(
            self.queries, self.gradeable, "alice", "dave"))

    def test_assignment_is_directional(self):
        self.assertFalse(predicates.is_peer_assigned(
            self.queries, self.gradeable, "bob", "alice"))

    def test_no_grantee(self):
        self.assertFalse(predicates.is_peer_assigned(
            self.queries, self.gradeable, "alice", None))

    def test_other_gradeable(self):
        other = factories.GradeableFactory(id="hw2", peer_grading=True)
        self.assertFalse(predicates.is_peer_assigned(
            self.queries, other, "alice", "bob"))
