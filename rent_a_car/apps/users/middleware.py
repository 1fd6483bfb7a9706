"""
Attach the mock auth session to every request.
"""

from django.utils.functional import SimpleLazyObject

from .session import AuthSession


class AuthSessionMiddleware:
    """Sets request.auth_session; must run after SessionMiddleware."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.auth_session = SimpleLazyObject(lambda: AuthSession(request.session))
        return self.get_response(request)
