from __future__ import annotations

from dataclasses import dataclass
from unittest import mock  # noqa


@dataclass
class FakeUser:
    """Just enough of a Django user for role resolution."""

    username: str = "someone"
    is_authenticated: bool = True
    is_superuser: bool = False
    grading_role: object = None

    def get_username(self) -> str:
        return self.username


class FailingQueries:
    """A collaborator whose lookups always fail."""

    def get_peer_assignment(self, gradeable_id, grader_id):
        raise RuntimeError("peer assignment lookup failed")

    def get_grading_sections_for_user(self, gradeable_id, user_id):
        raise RuntimeError("grading section lookup failed")
