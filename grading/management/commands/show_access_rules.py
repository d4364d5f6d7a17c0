from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from grading.constants import Role


def format_rule(rule):
    roles = ", ".join(role.identifier for role in rule.allowed_roles) or "-"
    checks = ", ".join(str(check) for check in rule.checks) or "-"
    return f"{rule.action}\n    roles:  {roles}\n    checks: {checks}"


class Command(BaseCommand):
    help = (
            "Lists the effective access rules, including those merged in from "
            "GRADEACCESS_EXTRA_RULES_FILE.")

    def add_arguments(self, parser):
        parser.add_argument(
                "--action", dest="action",
                help="Only show the rule for this action.")
        parser.add_argument(
                "--role", dest="role",
                help="Only show actions whose role gate admits this role, "
                "e.g. 'student' or 'none'.")

    def handle(self, *args, **options):
        from grading.utils import get_policy_engine
        rules = get_policy_engine().rules

        role = None
        if options["role"] is not None:
            try:
                role = Role.from_identifier(options["role"])
            except ValueError as e:
                raise CommandError(str(e)) from e

        if options["action"] is not None:
            if options["action"] not in rules:
                raise CommandError(f"unknown action '{options['action']}'")
            actions = [options["action"]]
        else:
            actions = list(rules)

        count = 0
        for action in actions:
            rule = rules.rule_for(action)
            if role is not None and role not in rule.allowed_roles:
                continue

            self.stdout.write(format_rule(rule))
            count += 1

        self.stderr.write(self.style.SUCCESS(f"{count} action(s)"))
