"""
WSGI config for rent_a_car project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'rent_a_car.settings')

application = get_wsgi_application()
