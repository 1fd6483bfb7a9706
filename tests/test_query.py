from decimal import Decimal
from urllib.parse import parse_qs, urlsplit

from django.http import QueryDict

from apps.cars.query import (
    FilterCriteria, VehicleSearchService, filter_options, filter_vehicles, paginate,
    parse_page, query_string, vehicle_list_url,
)
from apps.cars.services import Vehicle

from .conftest import make_car


def vehicles_from(*records):
    return [Vehicle.from_record(record) for record in records]


def test_derived_attributes_follow_id_parity():
    even, odd = vehicles_from(make_car(2), make_car(3))
    assert (even.seats, even.doors, even.fuel) == (4, 3, 'Petrol')
    assert (odd.seats, odd.doors, odd.fuel) == (5, 4, 'Diesel')


def test_supplied_attributes_win():
    vehicle, = vehicles_from(make_car(2, seats=7, doors=5, fuel='Electric'))
    assert (vehicle.seats, vehicle.doors, vehicle.fuel) == (7, 5, 'Electric')


def test_filters_are_and_combined():
    vehicles = vehicles_from(
        make_car(1, make='Audi', price='$30'),
        make_car(2, make='Audi', price='$80'),
        make_car(3, make='BMW', price='$40'),
        make_car(5, make='Audi', price='$60', availability=False),
    )
    criteria = FilterCriteria(make='Audi', fuel='Diesel', max_price=Decimal('60'))
    assert [v.id for v in filter_vehicles(vehicles, criteria)] == [1, 5]

    criteria.availability = True
    assert [v.id for v in filter_vehicles(vehicles, criteria)] == [1]


def test_price_range_is_inclusive():
    vehicles = vehicles_from(make_car(1, price='$40'), make_car(2, price='$60'))
    criteria = FilterCriteria(min_price=Decimal('40'), max_price=Decimal('60'))
    assert len(filter_vehicles(vehicles, criteria)) == 2


def test_filter_options():
    vehicles = vehicles_from(
        make_car(2, make='Opel', model='Astra', color='Blue', year=2019),
        make_car(1, make='Audi', model='A4', color='Red', year=2010),
        make_car(4, make='Audi', model='A6', color='Red', year=2015),
    )
    options = filter_options(vehicles)
    assert options['fuel'] == ['Petrol', 'Diesel']
    assert options['doors'] == [3, 4]
    assert options['make'] == ['Audi', 'Opel']
    assert options['model'] == ['A4', 'A6', 'Astra']
    assert options['color'] == ['Blue', 'Red']
    assert options['year'] == [2010, 2015, 2019]


def test_criteria_round_trip_through_query():
    criteria = FilterCriteria(fuel='Diesel', doors=4, availability=False, min_price=Decimal('20'))
    assert criteria.to_query() == {
        'fuel': 'Diesel', 'doors': '4', 'availability': 'false', 'min_price': '20',
    }
    assert FilterCriteria.from_query(criteria.to_query()) == criteria


def test_paginate_clamps_page():
    items = list(range(20))
    assert paginate(items, 99, per_page=9).number == 3
    assert paginate(items, 0, per_page=9).number == 1
    assert list(paginate(items, 3, per_page=9)) == [18, 19]


def test_empty_result_is_page_one_of_one():
    page = paginate([], 4, per_page=9)
    assert (page.number, page.paginator.num_pages) == (1, 1)
    assert list(page) == []


def test_parse_page():
    assert parse_page('3') == 3
    assert parse_page('-2') == 1
    assert parse_page('abc') == 1
    assert parse_page(None) == 1


def test_query_string_changes_only_given_keys():
    params = QueryDict('fuel=Diesel&min_price=20&page=2&pickup_location=Split%2C+Croatia')
    encoded = query_string(params, page=1)
    assert parse_qs(encoded) == {
        'fuel': ['Diesel'], 'min_price': ['20'], 'page': ['1'], 'pickup_location': ['Split, Croatia'],
    }
    assert 'fuel' not in parse_qs(query_string(params, fuel=None))


def test_vehicle_list_url():
    assert vehicle_list_url() == '/vehicle-list/'
    url = vehicle_list_url({'make': 'Audi'}, page=2)
    assert urlsplit(url).path == '/vehicle-list/'
    assert parse_qs(urlsplit(url).query) == {'make': ['Audi'], 'page': ['2']}


def test_search_service(fake_api):
    fake_api.cars = [make_car(i, make='Audi' if i % 3 == 0 else 'Opel') for i in range(1, 31)]
    results = VehicleSearchService().search(QueryDict('make=Opel&page=9'))
    assert results['total'] == 20
    assert results['page'].number == 3
    assert len(results['page'].object_list) == 2
    assert results['options']['make'] == ['Audi', 'Opel']
    assert results['error'] == ''


def test_search_service_reports_source_error(fake_api):
    fake_api.failures[('GET', '/api/cars')] = (503, {'message': 'unavailable'})
    results = VehicleSearchService().search(QueryDict(''))
    assert results['error'] == 'unavailable'
    assert results['total'] == 0
    assert results['page'].paginator.num_pages == 1
