"""
URL configuration for rent_a_car project.
"""

from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    # Home, about, contact
    path('', include('apps.core.urls')),

    # Authentication & profile
    path('', include('apps.users.urls')),

    # Vehicle list, details and booking
    path('vehicle-list/', include('apps.cars.urls')),
    path('vehicle-list/', include('apps.bookings.urls')),
]

handler404 = 'apps.core.views.page_not_found'

# Serve static files in development
if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)

    # Debug toolbar
    import debug_toolbar
    urlpatterns = [
        path('__debug__/', include(debug_toolbar.urls)),
    ] + urlpatterns
