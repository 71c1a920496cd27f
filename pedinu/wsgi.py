"""
WSGI config for the pedinu project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'pedinu.settings')

application = get_wsgi_application()
