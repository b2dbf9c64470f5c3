"""
WSGI config for Portal Cresci e Perdi.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'portal_central.settings')

application = get_wsgi_application()
