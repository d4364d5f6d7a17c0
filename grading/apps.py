from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _

from gradeaccess.checks import register_startup_checks, validate_rule_table


class GradingConfig(AppConfig):
    name = "grading"
    verbose_name = _("Grading access")

    def ready(self):
        import grading.receivers  # noqa

        # register all checks
        register_startup_checks()

        validate_rule_table()
