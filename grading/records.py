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

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from grading.constants import Role


if TYPE_CHECKING:
    import datetime
    from collections.abc import Collection, Iterable, Mapping, Sequence


__doc__ = """
Read-only records the access policy is evaluated against. Storage of these
records lives elsewhere; the policy only reads them.

.. autoclass:: Gradeable
.. autoclass:: Team
.. autoclass:: Submitter
.. autoclass:: GradedGradeable
.. autoclass:: Component
.. autoclass:: GradingSection
.. autoclass:: GradingQueries
.. autoclass:: InMemoryGradingQueries
"""


# {{{ gradeables

@dataclass(frozen=True, kw_only=True)
class Gradeable:
    id: str
    min_grading_role: Role
    grade_start_date: datetime.datetime
    title: str = ""
    peer_grading: bool = False
    ta_grading: bool = True
    team_assignment: bool = False


@dataclass(frozen=True)
class Team:
    id: str
    member_ids: frozenset[str] = frozenset()


@dataclass(frozen=True)
class Submitter:
    """Either a single user or a team. Exactly one of *user_id* and *team*
    is set.
    """

    user_id: str | None = None
    team: Team | None = None

    def __post_init__(self) -> None:
        if (self.user_id is None) == (self.team is None):
            raise ValueError("exactly one of 'user_id' and 'team' is required")


@dataclass(frozen=True, kw_only=True)
class GradedGradeable:
    gradeable: Gradeable
    submitter: Submitter
    active_version: int = 0


@dataclass(frozen=True, kw_only=True)
class Component:
    id: str
    title: str = ""
    is_peer: bool = False

# }}}


# {{{ grading sections

@dataclass(frozen=True)
class GradingSection:
    name: str
    user_ids: frozenset[str] = frozenset()
    team_ids: frozenset[str] = frozenset()

    def contains_user(self, user_id: str | None) -> bool:
        return user_id is not None and user_id in self.user_ids

    def contains_team(self, team: Team | None) -> bool:
        return team is not None and team.id in self.team_ids

# }}}


# {{{ queries

class GradingQueries(Protocol):
    """Read-only lookups needed by the access policy. Both methods return an
    empty collection rather than failing when nothing is assigned.
    """

    def get_peer_assignment(
            self, gradeable_id: str, grader_id: str) -> Collection[str]:
        ...

    def get_grading_sections_for_user(
            self, gradeable_id: str, user_id: str) -> Sequence[GradingSection]:
        ...


@dataclass
class InMemoryGradingQueries:
    """
    .. attribute:: peer_assignments

        Maps ``(gradeable_id, grader_id)`` to the user ids that grader must
        peer-grade.

    .. attribute:: grading_sections

        Maps ``(gradeable_id, user_id)`` to the sections assigned to that
        grader.
    """

    peer_assignments: dict[tuple[str, str], frozenset[str]] = field(
            default_factory=dict)
    grading_sections: dict[tuple[str, str], tuple[GradingSection, ...]] = field(
            default_factory=dict)

    @classmethod
    def from_mappings(cls,
            peer_assignments: Mapping[tuple[str, str], Iterable[str]] | None = None,
            grading_sections: Mapping[
                tuple[str, str], Iterable[GradingSection]] | None = None,
            ) -> InMemoryGradingQueries:
        return cls(
                peer_assignments={
                    key: frozenset(user_ids)
                    for key, user_ids in (peer_assignments or {}).items()},
                grading_sections={
                    key: tuple(sections)
                    for key, sections in (grading_sections or {}).items()})

    def get_peer_assignment(
            self, gradeable_id: str, grader_id: str) -> frozenset[str]:
        return self.peer_assignments.get((gradeable_id, grader_id), frozenset())

    def get_grading_sections_for_user(
            self, gradeable_id: str, user_id: str) -> tuple[GradingSection, ...]:
        return self.grading_sections.get((gradeable_id, user_id), ())

# }}}

# vim: foldmethod=marker
