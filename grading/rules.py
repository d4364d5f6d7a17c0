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

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Annotated, Self, TypeAlias

from django.core.exceptions import ImproperlyConfigured
from pydantic import (
    AfterValidator,
    BeforeValidator,
    ConfigDict,
    TypeAdapter,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.dataclasses import dataclass as pydantic_dataclass

from grading.constants import (
    COMPONENT_CHECK_FLAGS,
    DERIVED_FLAGS,
    GRADEABLE_CHECK_FLAGS,
    ROLE_ALLOWANCE_FLAGS,
    AccessFlag,
    GradingAction as GA,
    Role,
    min_role_flags,
)


if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping


RuleEntry: TypeAlias = "tuple[str, Iterable[AccessFlag]]"


# {{{ exceptions

class AccessError(Exception):
    """Base class for misuse of the access policy, as opposed to a denial."""


class UnknownAction(AccessError, KeyError):  # noqa: N818
    def __init__(self, action: str) -> None:
        super().__init__(f"Unknown action '{action}'")
        self.action = action

    def __str__(self) -> str:
        return str(self.args[0])


class DuplicateAction(ImproperlyConfigured):  # noqa: N818
    def __init__(self, action: str) -> None:
        super().__init__(f"Action '{action}' is registered more than once")
        self.action = action


class RuleFileError(ImproperlyConfigured):
    pass

# }}}


# {{{ rules

@dataclass(frozen=True)
class Rule:
    """The flags governing one action. Build with :meth:`build`, which adds
    :attr:`~grading.constants.AccessFlag.requires_gradeable` and
    :attr:`~grading.constants.AccessFlag.requires_component` as implied by
    the contextual checks present.
    """

    action: str
    flags: frozenset[AccessFlag]

    @classmethod
    def build(cls, action: str, flags: Iterable[AccessFlag]) -> Rule:
        flags = frozenset(AccessFlag(f) for f in flags)

        derived = flags & DERIVED_FLAGS
        if derived:
            raise ValueError(
                    f"rule for '{action}': "
                    f"{', '.join(sorted(derived))} may not be given explicitly")

        if flags & GRADEABLE_CHECK_FLAGS:
            flags = flags | {AccessFlag.requires_gradeable}
        if flags & COMPONENT_CHECK_FLAGS:
            flags = flags | {AccessFlag.requires_component}

        return cls(action=action, flags=flags)

    def has(self, flag: AccessFlag) -> bool:
        return flag in self.flags

    @property
    def requires_gradeable(self) -> bool:
        return AccessFlag.requires_gradeable in self.flags

    @property
    def requires_component(self) -> bool:
        return AccessFlag.requires_component in self.flags

    @property
    def allowed_roles(self) -> tuple[Role, ...]:
        return tuple(
                role for role, flag in ROLE_ALLOWANCE_FLAGS.items()
                if flag in self.flags)

    @property
    def checks(self) -> tuple[AccessFlag, ...]:
        allowances = frozenset(ROLE_ALLOWANCE_FLAGS.values())
        return tuple(sorted(self.flags - allowances - DERIVED_FLAGS))


class RuleTable:
    """An immutable mapping from action name to :class:`Rule`.

    .. automethod:: rule_for
    .. automethod:: merged_with
    """

    def __init__(self, entries: Iterable[RuleEntry]) -> None:
        rules: dict[str, Rule] = {}
        for action, flags in entries:
            action = str(action)
            if action in rules:
                raise DuplicateAction(action)
            rules[action] = Rule.build(action, flags)

        self._rules: Mapping[str, Rule] = MappingProxyType(rules)

    def rule_for(self, action: str) -> Rule:
        try:
            return self._rules[action]
        except KeyError:
            raise UnknownAction(action) from None

    def merged_with(self, entries: Iterable[RuleEntry]) -> RuleTable:
        return RuleTable([
            *((action, rule.flags - DERIVED_FLAGS)
                for action, rule in self._rules.items()),
            *entries])

    def __contains__(self, action: object) -> bool:
        return action in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._rules))

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} actions)"

# }}}


# {{{ default rules

_MIN_STUDENT = min_role_flags(Role.STUDENT)
_MIN_LIMITED_ACCESS_GRADER = min_role_flags(Role.LIMITED_ACCESS_GRADER)
_MIN_FULL_ACCESS_GRADER = min_role_flags(Role.FULL_ACCESS_GRADER)
_MIN_INSTRUCTOR = min_role_flags(Role.INSTRUCTOR)

_GRADER_CHECKS = frozenset([
    AccessFlag.check_min_group,
    AccessFlag.check_grading_section,
    AccessFlag.check_peer_assignment,
    ])

DEFAULT_RULES: tuple[RuleEntry, ...] = (
    (GA.status, _MIN_STUDENT | {AccessFlag.check_min_group}),
    (GA.status_full, _MIN_FULL_ACCESS_GRADER),
    (GA.details, _MIN_STUDENT | {AccessFlag.check_min_group}),
    (GA.details_show_all, _MIN_FULL_ACCESS_GRADER),
    (GA.details_show_all_no_sections, _MIN_FULL_ACCESS_GRADER),
    (GA.details_show_empty_teams, _MIN_INSTRUCTOR),
    (GA.grade, _MIN_STUDENT | _GRADER_CHECKS),
    (GA.grade_if_no_sections_exist, _MIN_INSTRUCTOR),
    (GA.save_one_component, _MIN_STUDENT | _GRADER_CHECKS | {
        AccessFlag.check_has_submission,
        AccessFlag.check_component_peer}),
    (GA.save_general_comment, _MIN_STUDENT | _GRADER_CHECKS | {
        AccessFlag.check_has_submission}),
    (GA.get_mark_data, _MIN_STUDENT | _GRADER_CHECKS | {
        AccessFlag.check_component_peer}),
    (GA.get_gradeable_comment, _MIN_STUDENT | _GRADER_CHECKS),
    (GA.add_one_new_mark, _MIN_LIMITED_ACCESS_GRADER | {
        AccessFlag.check_min_group,
        AccessFlag.check_grading_section}),
    (GA.delete_one_mark, _MIN_LIMITED_ACCESS_GRADER | {
        AccessFlag.check_min_group,
        AccessFlag.check_grading_section}),
    (GA.get_marked_users, _MIN_LIMITED_ACCESS_GRADER | {
        AccessFlag.check_min_group}),
    (GA.get_marked_users_full_stats, _MIN_FULL_ACCESS_GRADER),
    (GA.show_edit_teams, _MIN_INSTRUCTOR),
    (GA.import_teams, _MIN_INSTRUCTOR | {AccessFlag.check_csrf}),
    (GA.export_teams, _MIN_INSTRUCTOR),
    (GA.submit_team_form, _MIN_INSTRUCTOR),
    (GA.verify_grader, _MIN_FULL_ACCESS_GRADER),
    (GA.verify_all, _MIN_FULL_ACCESS_GRADER),

    (GA.autograding_load_checks, _MIN_STUDENT | {
        AccessFlag.check_grading_section,
        AccessFlag.check_peer_assignment,
        AccessFlag.allow_self_gradeable}),
    (GA.autograding_show_hidden_cases, _MIN_LIMITED_ACCESS_GRADER | {
        AccessFlag.check_min_group,
        AccessFlag.check_grading_section}),
    )


def get_default_rule_table() -> RuleTable:
    return RuleTable(DEFAULT_RULES)

# }}}


# {{{ site rule files

def _parse_role(value: object) -> object:
    if isinstance(value, str):
        return Role.from_identifier(value)
    return value


def _validate_check(flag: AccessFlag) -> AccessFlag:
    if flag in DERIVED_FLAGS or flag in ROLE_ALLOWANCE_FLAGS.values():
        raise ValueError(f"'{flag}' is not a contextual check")
    return flag


RoleName = Annotated[Role, BeforeValidator(_parse_role)]
CheckName = Annotated[AccessFlag, AfterValidator(_validate_check)]


@pydantic_dataclass(frozen=True, kw_only=True,
        config=ConfigDict(extra="forbid"))
class RuleDesc:
    """One entry of a site rule file.

    .. attribute:: action
    .. attribute:: min_role

        Allow this role and every more privileged one.

    .. attribute:: allow

        An explicit list of roles, which may include ``none`` for
        logged-out access. Exactly one of *min_role* and *allow* is given.

    .. attribute:: checks
    """

    action: str
    min_role: RoleName | None = None
    allow: list[RoleName] | None = None
    checks: list[CheckName] | None = None

    @model_validator(mode="after")
    def check_roles(self) -> Self:
        if not self.action.strip():
            raise ValueError("action may not be empty")
        if (self.min_role is None) == (self.allow is None):
            raise ValueError(
                    f"rule for '{self.action}': exactly one of "
                    "'min_role' and 'allow' is required")
        if self.min_role is Role.NONE:
            raise ValueError(
                    f"rule for '{self.action}': use 'allow: [none]' "
                    "for logged-out access")

        return self

    def to_entry(self) -> RuleEntry:
        if self.min_role is not None:
            flags = set(min_role_flags(self.min_role))
        else:
            assert self.allow is not None
            flags = {ROLE_ALLOWANCE_FLAGS[role] for role in self.allow}

        flags.update(self.checks or [])
        return (self.action, frozenset(flags))


@pydantic_dataclass(frozen=True, kw_only=True,
        config=ConfigDict(extra="forbid"))
class RuleFileDesc:
    rules: list[RuleDesc]


_rule_file_adapter = TypeAdapter(RuleFileDesc)


def load_rules_from_yaml(source: str | bytes) -> list[RuleEntry]:
    """Parse a site rule file, e.g.

    .. code-block:: yaml

        rules:
        - action: grading.export_grades
          min_role: full_access_grader
          checks: [check_csrf]
        - action: grading.public_stats
          allow: [none, student]
    """
    from yaml import YAMLError, safe_load as load_yaml

    try:
        data = load_yaml(source)
    except YAMLError as e:
        raise RuleFileError(f"invalid YAML: {e}") from e

    try:
        desc = _rule_file_adapter.validate_python(data)
    except PydanticValidationError as e:
        raise RuleFileError(f"invalid rule file: {e}") from e

    return [rule_desc.to_entry() for rule_desc in desc.rules]


def load_rules_from_file(path: str) -> list[RuleEntry]:
    with open(path, "rb") as inf:
        return load_rules_from_yaml(inf.read())

# }}}

# vim: foldmethod=marker
