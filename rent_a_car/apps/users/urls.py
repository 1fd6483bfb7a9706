"""
URL configuration for users app.
"""

from django.urls import path
from . import views

urlpatterns = [
    # Authentication
    path('login/', views.login_view, name='login'),
    path('register/', views.register_view, name='register'),
    path('logout/', views.logout_view, name='logout'),

    # Profile
    path('user/', views.ProfileView.as_view(), name='user'),
    path('user/reservations/<str:reservation_id>/delete/', views.delete_reservation_view,
         name='delete_reservation'),
]
