from decimal import Decimal
from importlib import import_module
from urllib.parse import parse_qs, urlsplit

from django.conf import settings

from apps.bookings.wizard import Step, WizardStore
from apps.users.session import USER_KEY

from .conftest import make_car
from .test_forms import VALID_CARD, VALID_PERSONAL
from .test_wizard import VALID_DATES


class TestPages:

    def test_static_pages(self, client):
        for url in ('/', '/about/', '/contact/'):
            assert client.get(url).status_code == 200

    def test_home_search_redirects_to_list(self, client):
        response = client.post('/?fuel=Diesel', {
            'pickup_location': 'Split, Croatia',
            'return_location': 'Split, Croatia',
            'pickup_date': '2099-06-10',
            'pickup_time': '10:00',
            'dropoff_date': '2099-06-12',
            'dropoff_time': '10:00',
        })
        assert response.status_code == 302
        query = parse_qs(urlsplit(response.url).query)
        assert urlsplit(response.url).path == '/vehicle-list/'
        assert query['fuel'] == ['Diesel']
        assert query['dropoff_date'] == ['2099-06-12']

    def test_home_search_errors_rendered(self, client):
        response = client.post('/', {})
        assert response.status_code == 200
        assert 'Pick up location is required' in response.content.decode()


class TestVehicleList:

    def test_first_page(self, client):
        response = client.get('/vehicle-list/')
        assert response.status_code == 200
        assert len(response.context['vehicles']) == 9
        assert 'next_url' in response.context
        assert 'Page 1 of 2' in response.content.decode()

    def test_page_links_keep_filters(self, client):
        response = client.get('/vehicle-list/?availability=true&min_price=10&page=2&pickup_location=Split')
        assert parse_qs(response.context['prev_url'][1:]) == {
            'availability': ['true'], 'min_price': ['10'], 'page': ['1'], 'pickup_location': ['Split'],
        }
        # Only odd ids are Diesel: 6 vehicles, one page, so page 2 clamps to 1
        assert 'prev_url' not in client.get('/vehicle-list/?fuel=Diesel&page=2').context

    def test_filter_form_carries_search_params(self, client):
        response = client.get('/vehicle-list/?pickup_location=Split&make=Toyota')
        assert response.context['search_params'] == {'pickup_location': 'Split'}
        assert 'name="pickup_location" value="Split"' in response.content.decode()

    def test_empty_result(self, client):
        response = client.get('/vehicle-list/?make=Lada')
        assert list(response.context['vehicles']) == []
        assert 'Page 1 of 1' in response.content.decode()

    def test_invalid_filter_values_ignored(self, client):
        response = client.get('/vehicle-list/?doors=many&page=abc')
        assert response.context['total'] == 12

    def test_source_error_panel(self, client, fake_api):
        fake_api.failures[('GET', '/api/cars')] = (500, {'message': 'upstream down'})
        response = client.get('/vehicle-list/')
        assert response.status_code == 200
        assert 'upstream down' in response.content.decode()


class TestVehicleDetail:

    def test_detail_links_keep_query(self, client):
        response = client.get('/vehicle-list/3/?page=2&fuel=Diesel')
        assert response.status_code == 200
        assert response.context['back_url'] == '/vehicle-list/?page=2&fuel=Diesel'
        assert response.context['book_url'] == '/vehicle-list/3/book/?page=2&fuel=Diesel'

    def test_signed_out_sees_login_prompt(self, client):
        content = client.get('/vehicle-list/3/').content.decode()
        assert '/login/?redirect=%2Fvehicle-list%2F3%2F' in content

    def test_unknown_vehicle(self, client):
        response = client.get('/vehicle-list/999/')
        assert response.status_code == 404
        assert 'Vehicle Not Found' in response.content.decode()


def book(client, pk=2, **data):
    return client.post(f'/vehicle-list/{pk}/book/', data)


def walk_to_payment(client, pk=2):
    client.get(f'/vehicle-list/{pk}/book/')
    book(client, pk, action='next', **VALID_PERSONAL)
    book(client, pk, action='next', **VALID_DATES)
    book(client, pk, action='next')


class TestBookingWizard:

    def test_dates_seeded_from_query(self, client):
        response = client.get('/vehicle-list/2/book/?pickup_date=2025-06-01&pickup_time=10:00')
        draft = response.context['draft']
        assert draft.dates['pickup_date'] == '2025-06-01'
        assert draft.dates['pickup_time'] == '10:00'
        assert response.context['step'] == Step.PERSONAL_INFO

    def test_profile_prefill(self, signed_in_client):
        draft = signed_in_client.get('/vehicle-list/2/book/').context['draft']
        assert draft.personal['first_name'] == 'Ana'
        assert draft.personal['phone'] == '0912345678'

    def test_unavailable_vehicle(self, client, fake_api):
        fake_api.cars = [make_car(2, availability=False)]
        response = client.get('/vehicle-list/2/book/')
        assert 'Vehicle Unavailable' in response.content.decode()
        assert 'draft' not in response.context

    def test_unknown_vehicle(self, client):
        response = client.get('/vehicle-list/999/book/')
        assert response.status_code == 404

    def test_validation_errors_shown(self, client):
        client.get('/vehicle-list/2/book/')
        response = book(client, action='next', first_name='A')
        assert response.status_code == 302
        page = client.get('/vehicle-list/2/book/')
        assert page.context['step'] == Step.PERSONAL_INFO
        assert 'First name must be at least 2 characters' in page.content.decode()

    def test_full_booking(self, signed_in_client, fake_api):
        client = signed_in_client
        walk_to_payment(client)
        response = book(client, action='confirm', **VALID_CARD)
        assert response.status_code == 302

        assert len(fake_api.reservations) == 1
        assert fake_api.reservations[0]['userId'] == '7'

        confirmation = client.get('/vehicle-list/2/book/')
        content = confirmation.content.decode()
        assert 'Booking confirmed successfully!' in content
        assert 'content="3;url=/user/"' in content
        assert confirmation.context['total_days'] == 3
        assert confirmation.context['total_cost'] == Decimal('150.00')
        assert 'Your Toyota Corolla is reserved.' in content
        assert '2025-06-01 10:00' in content
        assert '2025-06-04 10:00' in content
        assert '3 days, &euro;150,00' in content
        assert WizardStore(client.session).load(2) is None

    def test_confirm_in_flight_is_stored(self, signed_in_client, fake_api, monkeypatch):
        client = signed_in_client
        walk_to_payment(client)
        session_key = client.cookies[settings.SESSION_COOKIE_NAME].value
        engine = import_module(settings.SESSION_ENGINE)
        seen = []
        handle = fake_api.handle

        def record_stored_draft(request):
            if request.method == 'POST' and request.url.path == '/reservations':
                stored = engine.SessionStore(session_key)
                seen.append(stored[WizardStore.SESSION_KEY]['submitting'])
            return handle(request)

        monkeypatch.setattr(fake_api, 'handle', record_stored_draft)
        book(client, action='confirm', **VALID_CARD)

        assert seen == [True]
        stored = engine.SessionStore(session_key)[WizardStore.SESSION_KEY]
        assert stored['submitting'] is False
        assert stored['confirmed'] is True

    def test_second_confirm_while_submitting_is_refused(self, signed_in_client, fake_api):
        client = signed_in_client
        walk_to_payment(client)
        session = client.session
        data = session[WizardStore.SESSION_KEY]
        data['submitting'] = True
        session[WizardStore.SESSION_KEY] = data
        session.save()

        book(client, action='confirm', **VALID_CARD)

        assert fake_api.reservations == []
        assert client.session[WizardStore.SESSION_KEY]['submitting'] is True
        content = client.get('/vehicle-list/2/book/').content.decode()
        assert 'Your booking is already being submitted.' in content
        assert 'Confirm booking' not in content

    def test_confirm_requires_login(self, client, fake_api):
        client.get('/vehicle-list/2/book/')
        book(client, action='next', **VALID_PERSONAL)
        book(client, action='next', **VALID_DATES)
        book(client, action='next')
        book(client, action='confirm', **VALID_CARD)

        page = client.get('/vehicle-list/2/book/')
        assert page.context['step'] == Step.PAYMENT
        assert 'Please log in to complete your booking' in page.content.decode()
        assert fake_api.reservations == []

    def test_opening_another_vehicle_replaces_draft(self, client):
        client.get('/vehicle-list/2/book/')
        book(client, pk=2, action='next', **VALID_PERSONAL)
        client.get('/vehicle-list/4/book/')
        assert WizardStore(client.session).load(2) is None
        assert client.get('/vehicle-list/2/book/').context['step'] == Step.PERSONAL_INFO

    def test_quote(self, client):
        response = client.get('/vehicle-list/2/book/quote/?pickup_date=2025-06-01&dropoff_date=2025-06-04')
        assert response.json() == {'total_days': 3, 'daily_rate': 50.0, 'total_cost': 150.0}

    def test_quote_invalid_dates(self, client):
        response = client.get('/vehicle-list/2/book/quote/?pickup_date=soon')
        assert response.status_code == 400


class TestAuthViews:

    def test_login_and_redirect(self, client):
        response = client.post('/login/?redirect=/vehicle-list/2/', {
            'identifier': 'emilys', 'password': 'emilyspass',
        })
        assert response.status_code == 302
        assert response.url == '/vehicle-list/2/'
        assert client.session[USER_KEY]['name'] == 'Emily Johnson'

    def test_login_ignores_external_redirect(self, client):
        response = client.post('/login/?redirect=https://evil.example/', {
            'identifier': 'emilys', 'password': 'emilyspass',
        })
        assert response.url == '/'

    def test_login_failure(self, client):
        response = client.post('/login/', {'identifier': 'emilys', 'password': 'wrongpass'})
        assert response.status_code == 200
        assert 'Invalid credentials' in response.content.decode()

    def test_register_is_mock_success(self, client):
        response = client.post('/register/', {
            'first_name': 'Ana', 'last_name': 'Horvat', 'email': 'ana@example.com',
            'password': 'secret123', 'confirm_password': 'secret123',
        })
        assert response.status_code == 302
        assert response.url == '/login/'

    def test_logout(self, signed_in_client):
        response = signed_in_client.get('/logout/')
        assert response.url == '/'
        assert USER_KEY not in signed_in_client.session


class TestProfile:

    def test_lists_own_reservations(self, signed_in_client, fake_api):
        from .test_services import reservation
        fake_api.reservations = [reservation('1'), reservation('2', user_id='8')]
        response = signed_in_client.get('/user/')
        assert [r['id'] for r in response.context['reservations']] == ['1']

    def test_signed_out(self, client):
        response = client.get('/user/')
        assert 'You are not signed in.' in response.content.decode()

    def test_delete_own_reservation(self, signed_in_client, fake_api):
        from .test_services import reservation
        fake_api.reservations = [reservation('1')]
        response = signed_in_client.post('/user/reservations/1/delete/')
        assert response.url == '/user/'
        assert fake_api.reservations == []

    def test_cannot_delete_foreign_reservation(self, signed_in_client, fake_api):
        from .test_services import reservation
        fake_api.reservations = [reservation('1', user_id='8')]
        signed_in_client.post('/user/reservations/1/delete/')
        assert len(fake_api.reservations) == 1
        assert fake_api.calls('DELETE', '/reservations/1') == []
