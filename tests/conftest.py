import json

import httpx
import pytest
from django.core.cache import cache

from apps.core import api
from apps.users.session import USER_KEY


def make_car(id, make='Toyota', model='Corolla', price='$50.00', availability=True,
             year=2015, color='Red', **extra):
    record = {
        'id': id,
        'car': f"{make} {model}",
        'car_make': make,
        'car_model': model,
        'car_color': color,
        'car_model_year': year,
        'car_vin': f"VIN{id:05d}",
        'price': price,
        'availability': availability,
    }
    record.update(extra)
    return record


class FakeApi:
    """In-memory stand-in for the cars source, the mock CRUD API and the auth provider."""

    def __init__(self):
        self.cars = [make_car(i) for i in range(1, 13)]
        self.reservations = []
        self.users = [{
            'id': 7,
            'email': 'ana@example.com',
            'password': 'secret123',
            'name': 'Ana Horvat',
            'username': 'ana',
            'phone': '0912345678',
        }]
        self.requests = []
        self.failures = {}

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        method = request.method

        if (method, path) in self.failures:
            status, body = self.failures[(method, path)]
            return httpx.Response(status, json=body)

        if path == '/api/cars':
            return httpx.Response(200, json={'cars': self.cars})

        if path == '/auth/login' and method == 'POST':
            body = json.loads(request.content)
            if body == {'username': 'emilys', 'password': 'emilyspass'}:
                return httpx.Response(200, json={
                    'id': 1, 'username': 'emilys', 'email': 'emily@example.com',
                    'firstName': 'Emily', 'lastName': 'Johnson', 'accessToken': 'token-1',
                })
            return httpx.Response(400, json={'message': 'Invalid credentials'})

        if path == '/users':
            email = request.url.params.get('email')
            password = request.url.params.get('password')
            matches = [u for u in self.users if u['email'] == email and u['password'] == password]
            return httpx.Response(200, json=matches)

        if path == '/reservations' and method == 'POST':
            record = json.loads(request.content)
            record['id'] = str(len(self.reservations) + 1)
            self.reservations.append(record)
            return httpx.Response(201, json=record)

        if path == '/reservations' and method == 'GET':
            # Loose matching: every record comes back regardless of userId
            return httpx.Response(200, json=self.reservations)

        if path.startswith('/reservations/') and method == 'DELETE':
            reservation_id = path.rsplit('/', 1)[-1]
            before = len(self.reservations)
            self.reservations = [r for r in self.reservations if r['id'] != reservation_id]
            if len(self.reservations) == before:
                return httpx.Response(404, json={})
            return httpx.Response(200, json={})

        return httpx.Response(404, json={'message': 'not found'})

    def calls(self, method, path):
        return [r for r in self.requests if r.method == method and r.url.path == path]


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def fake_api(monkeypatch):
    fake = FakeApi()
    monkeypatch.setattr(
        api, 'build_http_client',
        lambda timeout: httpx.Client(transport=httpx.MockTransport(fake.handle), timeout=timeout)
    )
    return fake


@pytest.fixture
def session_user():
    return {
        'id': '7',
        'email': 'ana@example.com',
        'name': 'Ana Horvat',
        'username': 'ana',
        'phone': '0912345678',
    }


@pytest.fixture
def signed_in_client(client, session_user):
    session = client.session
    session[USER_KEY] = session_user
    session.save()
    return client
