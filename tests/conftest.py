import os

import django


os.environ.setdefault("DJANGO_SETTINGS_MODULE", "gradeaccess.settings")
django.setup()
