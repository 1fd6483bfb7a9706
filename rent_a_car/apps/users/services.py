"""
Login against the configured identity provider.
"""

from typing import Optional, Tuple
import logging

from django.conf import settings

from apps.core.api import ApiClient, ApiResult, ApiStatus
from .serializers import AuthLoginResponseSerializer, UserRecordSerializer
from .session import SessionUser

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = 'Invalid credentials'
NOT_FOUND_SENTINEL = 'not found'


def _is_not_found_sentinel(payload) -> bool:
    if isinstance(payload, str):
        return payload.strip().lower() == NOT_FOUND_SENTINEL
    if isinstance(payload, dict):
        return str(payload.get('message', '')).strip().lower() == NOT_FOUND_SENTINEL
    return False


class AuthService:
    """
    Resolve credentials to a SessionUser.

    Two strategies are supported: "auth_login" posts to a DummyJSON style
    /auth/login endpoint, "user_lookup" queries the mock API's users
    collection by email and password.
    """

    def __init__(self, strategy: str = None, auth_base: str = None, api_base: str = None):
        config = settings.RENT_A_CAR
        self.strategy = strategy or config['AUTH_STRATEGY']
        self.auth_client = ApiClient(auth_base or config['AUTH_BASE'])
        self.api_client = ApiClient(api_base or config['API_BASE_URL'])

    def login(self, identifier: str, password: str) -> ApiResult:
        """
        Returns an ApiResult whose data is (user, token) on success.
        """
        if self.strategy == 'user_lookup':
            return self._user_lookup(identifier, password)
        return self._auth_login(identifier, password)

    def _auth_login(self, identifier: str, password: str) -> ApiResult:
        result = self.auth_client.request(
            'POST', '/auth/login', json={'username': identifier, 'password': password}
        )
        if not result.ok:
            logger.info(f"Login rejected for {identifier}: {result.error}")
            return ApiResult.failure(result.error or 'Login failed')

        serializer = AuthLoginResponseSerializer(data=result.data or {})
        if not serializer.is_valid():
            logger.warning(f"Unexpected login response: {serializer.errors}")
            return ApiResult.malformed('Login failed')

        data = serializer.validated_data
        full_name = ' '.join(part for part in (data['firstName'], data['lastName']) if part)
        user = SessionUser(
            id=data['id'],
            email=data['email'],
            name=full_name or data['username'] or None,
            username=data['username'] or None,
        )
        return ApiResult.success((user, data.get('accessToken')))

    def _user_lookup(self, email: str, password: str) -> ApiResult:
        result = self.api_client.request('GET', '/users', params={'email': email, 'password': password})
        if result.status == ApiStatus.NOT_FOUND:
            return ApiResult.failure(INVALID_CREDENTIALS)
        if not result.ok:
            return result

        payload = result.data
        if _is_not_found_sentinel(payload):
            return ApiResult.failure(INVALID_CREDENTIALS)
        if isinstance(payload, dict):
            payload = [payload]
        if not isinstance(payload, list) or not payload:
            return ApiResult.failure(INVALID_CREDENTIALS)

        serializer = UserRecordSerializer(data=payload[0])
        if not serializer.is_valid():
            logger.warning(f"Unexpected user record: {serializer.errors}")
            return ApiResult.malformed('Login failed')

        data = serializer.validated_data
        user = SessionUser(
            id=data['id'],
            email=data['email'],
            name=data.get('name'),
            username=data.get('username'),
            phone=data.get('phone'),
        )
        return ApiResult.success((user, None))


def authenticate(identifier: str, password: str) -> Tuple[Optional[SessionUser], Optional[str], str]:
    """
    Returns: (user, token, error). user is None on failure.
    """
    result = AuthService().login(identifier, password)
    if not result.ok:
        return None, None, result.error
    user, token = result.data
    return user, token, ''
