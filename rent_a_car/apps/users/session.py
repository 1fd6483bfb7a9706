"""
Mock authentication state kept in the browser session.

There is no account model: the signed-in user is whatever identity the login
endpoint returned, stored under the same keys the rest of the site reads.
"""

from dataclasses import asdict, dataclass
from typing import Callable, List, MutableMapping, Optional
import logging

logger = logging.getLogger(__name__)

USER_KEY = 'rac_user'
TOKEN_KEY = 'rac_token'


@dataclass
class SessionUser:
    id: str
    email: str = ''
    name: Optional[str] = None
    username: Optional[str] = None
    phone: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or self.username or self.email

    @classmethod
    def from_dict(cls, data) -> Optional['SessionUser']:
        if not isinstance(data, dict) or data.get('id') in (None, ''):
            return None
        return cls(
            id=str(data['id']),
            email=data.get('email') or '',
            name=data.get('name'),
            username=data.get('username'),
            phone=data.get('phone'),
        )

    def to_dict(self) -> dict:
        return asdict(self)


class AuthSession:
    """
    Current user over a persistence port.

    The storage is any mutable mapping: a Django session in requests, a
    plain dict in tests. Reads are cached in memory after the first load.
    Subscribers are called with the new user (or None) on every change.
    """

    def __init__(self, storage: MutableMapping):
        self.storage = storage
        self._user = None
        self._loaded = False
        self._subscribers: List[Callable] = []

    @property
    def user(self) -> Optional[SessionUser]:
        if not self._loaded:
            self._user = SessionUser.from_dict(self.storage.get(USER_KEY))
            self._loaded = True
        return self._user

    @property
    def token(self) -> Optional[str]:
        return self.storage.get(TOKEN_KEY)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def subscribe(self, callback: Callable[[Optional[SessionUser]], None]) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _set_user(self, user: Optional[SessionUser]):
        self._user = user
        self._loaded = True
        for callback in list(self._subscribers):
            callback(user)

    def login(self, user: SessionUser, token: str = None):
        self.storage[USER_KEY] = user.to_dict()
        if token:
            self.storage[TOKEN_KEY] = token
        else:
            self.storage.pop(TOKEN_KEY, None)
        logger.info(f"User {user.id} signed in")
        self._set_user(user)

    def logout(self):
        user = self.user
        self.storage.pop(USER_KEY, None)
        self.storage.pop(TOKEN_KEY, None)
        if user is not None:
            logger.info(f"User {user.id} signed out")
        self._set_user(None)

    def set_user_from_external(self, id, email: str, name: str = None, username: str = None) -> SessionUser:
        """Adopt an identity obtained elsewhere; any stored token is kept."""
        user = SessionUser(id=str(id), email=email, name=name, username=username)
        self.storage[USER_KEY] = user.to_dict()
        self._set_user(user)
        return user
