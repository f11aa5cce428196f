"""
WSGI config for hrpayroll project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "hrpayroll.settings")

application = get_wsgi_application()
