"""
Shared plumbing for the external JSON APIs (cars source, reservations, users).

Every call returns an ApiResult instead of raising, so views can turn failures
into messages or inline error panels.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional
import logging

from django.conf import settings
import httpx

logger = logging.getLogger(__name__)


class ApiStatus(str, Enum):
    OK = 'OK'
    NOT_FOUND = 'NOT_FOUND'
    MALFORMED = 'MALFORMED'
    ERROR = 'ERROR'


@dataclass
class ApiResult:
    """Outcome of a call to an external API."""
    status: ApiStatus
    data: Any = None
    error: str = ''

    @property
    def ok(self) -> bool:
        return self.status == ApiStatus.OK

    @classmethod
    def success(cls, data: Any = None) -> 'ApiResult':
        return cls(ApiStatus.OK, data=data)

    @classmethod
    def not_found(cls, error: str = 'Not found') -> 'ApiResult':
        return cls(ApiStatus.NOT_FOUND, error=error)

    @classmethod
    def malformed(cls, error: str) -> 'ApiResult':
        return cls(ApiStatus.MALFORMED, error=error)

    @classmethod
    def failure(cls, error: str) -> 'ApiResult':
        return cls(ApiStatus.ERROR, error=error)


def build_http_client(timeout: float) -> httpx.Client:
    return httpx.Client(timeout=timeout)


def _error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get('message'):
        return str(payload['message'])
    return response.text.strip() or f"HTTP {response.status_code}"


class ApiClient:
    """Base class for the HTTP JSON clients."""

    def __init__(self, base_url: str, timeout: Optional[float] = None):
        self.base_url = base_url.rstrip('/')
        if timeout is None:
            timeout = settings.RENT_A_CAR['HTTP_TIMEOUT']
        self.timeout = timeout

    def request(self, method: str, path: str = '', **kwargs) -> ApiResult:
        url = f"{self.base_url}{path}"
        try:
            with build_http_client(self.timeout) as client:
                response = client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            return ApiResult.failure(str(e) or e.__class__.__name__)

        if response.status_code == 404:
            return ApiResult.not_found(_error_detail(response))

        if not response.is_success:
            detail = _error_detail(response)
            logger.warning(f"{method} {url} returned {response.status_code}: {detail}")
            return ApiResult.failure(detail)

        if not response.content:
            return ApiResult.success(None)

        try:
            return ApiResult.success(response.json())
        except ValueError:
            logger.warning(f"{method} {url} returned a non-JSON body")
            return ApiResult.malformed('Response is not valid JSON')
