def auth_session(request):
    """Expose the signed-in mock user as current_user."""
    session = getattr(request, 'auth_session', None)
    return {'current_user': session.user if session is not None else None}
