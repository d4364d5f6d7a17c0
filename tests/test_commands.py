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

from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase

from grading.rules import get_default_rule_table


class ShowAccessRulesTest(SimpleTestCase):
    def call(self, *args):
        stdout = StringIO()
        stderr = StringIO()
        call_command("show_access_rules", *args, stdout=stdout, stderr=stderr)
        return stdout.getvalue(), stderr.getvalue()

    def test_all(self):
        stdout, stderr = self.call()
        self.assertIn("grading.status\n", stdout)
        self.assertIn("autograding.load_checks\n", stdout)
        self.assertIn(f"{len(get_default_rule_table())} action(s)", stderr)

    def test_action(self):
        stdout, stderr = self.call("--action", "grading.import_teams")
        self.assertEqual(
            stdout,
            "grading.import_teams\n"
            "    roles:  instructor\n"
            "    checks: check_csrf\n")
        self.assertIn("1 action(s)", stderr)

    def test_action_without_checks(self):
        stdout, _ = self.call("--action", "grading.verify_all")
        self.assertIn("roles:  instructor, full_access_grader\n", stdout)
        self.assertIn("checks: -\n", stdout)

    def test_unknown_action(self):
        with self.assertRaises(CommandError):
            self.call("--action", "grading.nope")

    def test_role(self):
        stdout, _ = self.call("--role", "student")
        self.assertIn("grading.grade\n", stdout)
        self.assertNotIn("grading.show_edit_teams\n", stdout)

    def test_role_none(self):
        stdout, stderr = self.call("--role", "none")
        self.assertEqual(stdout, "")
        self.assertIn("0 action(s)", stderr)

    def test_unknown_role(self):
        with self.assertRaises(CommandError):
            self.call("--role", "dean")
