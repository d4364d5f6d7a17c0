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

from typing import Any

from django.core.signals import setting_changed
from django.dispatch import receiver

from gradeaccess.checks import (
    GRADEACCESS_EXTRA_RULES_FILE,
    GRADEACCESS_QUERIES,
)


# {{{ rebuild the policy engine when its settings change

@receiver(setting_changed)
def reset_policy_engine(
        sender: Any,
        setting: str,
        **kwargs: Any) -> None:
    if setting not in (
            GRADEACCESS_QUERIES,
            GRADEACCESS_EXTRA_RULES_FILE):
        return

    from grading.utils import get_policy_engine
    get_policy_engine.cache_clear()

# }}}

# vim: foldmethod=marker
