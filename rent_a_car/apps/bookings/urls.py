"""
URL configuration for bookings app.
"""

from django.urls import path
from . import views

app_name = 'bookings'

urlpatterns = [
    path('<int:pk>/book/', views.BookingWizardView.as_view(), name='booking'),
    path('<int:pk>/book/quote/', views.BookingQuoteView.as_view(), name='booking_quote'),
]
