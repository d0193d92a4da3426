"""
WSGI config for the Joalheria project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'joalheria.settings')

application = get_wsgi_application()
