"""
WSGI config for the ProjectHub project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'projecthub.settings')

application = get_wsgi_application()
