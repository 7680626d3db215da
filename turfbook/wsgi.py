"""
WSGI config for the Turfbook booking engine.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'turfbook.settings.production')

application = get_wsgi_application()
