"""
Search, filter and pagination contract for the vehicle list.

All state lives in the query string, so every link the list renders is built
here from the current parameters with only the changed keys replaced.
"""

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional
import logging

from django.conf import settings
from django.core.paginator import Paginator
from django.http import QueryDict
from django.urls import reverse

logger = logging.getLogger(__name__)

SEARCH_PARAMS = (
    'pickup_location', 'return_location',
    'pickup_date', 'pickup_time',
    'dropoff_date', 'dropoff_time',
)
FILTER_PARAMS = (
    'fuel', 'doors', 'make', 'model', 'color', 'year',
    'availability', 'min_price', 'max_price',
)
PAGE_PARAM = 'page'


@dataclass
class FilterCriteria:
    """Optional vehicle constraints; None means unconstrained."""
    fuel: Optional[str] = None
    doors: Optional[int] = None
    make: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None
    year: Optional[int] = None
    availability: Optional[bool] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None

    @classmethod
    def from_query(cls, params: Mapping) -> 'FilterCriteria':
        """Parse filters leniently: values that do not validate are dropped."""
        from .forms import VehicleFilterForm

        return VehicleFilterForm(params).criteria()

    def matches(self, vehicle) -> bool:
        if self.fuel is not None and vehicle.fuel != self.fuel:
            return False
        if self.doors is not None and vehicle.doors != self.doors:
            return False
        if self.make is not None and vehicle.make != self.make:
            return False
        if self.model is not None and vehicle.model != self.model:
            return False
        if self.color is not None and vehicle.color != self.color:
            return False
        if self.year is not None and vehicle.year != self.year:
            return False
        if self.availability is not None and vehicle.availability != self.availability:
            return False
        if self.min_price is not None and vehicle.price < self.min_price:
            return False
        if self.max_price is not None and vehicle.price > self.max_price:
            return False
        return True

    def to_query(self) -> Dict[str, str]:
        query = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, bool):
                value = 'true' if value else 'false'
            query[f.name] = str(value)
        return query


def parse_page(value) -> int:
    try:
        return max(1, int(value))
    except (TypeError, ValueError):
        return 1


def query_string(params: Mapping, **changes) -> str:
    """
    Re-encode params with some keys replaced.

    A change of None or '' removes the key.
    """
    if isinstance(params, QueryDict):
        query = params.copy()
    else:
        query = QueryDict(mutable=True)
        for key, value in (params or {}).items():
            query[key] = value

    for key, value in changes.items():
        if value is None or value == '':
            query.pop(key, None)
        else:
            query[key] = str(value)
    return query.urlencode()


def vehicle_list_url(params: Mapping = None, **changes) -> str:
    url = reverse('cars:vehicle_list')
    encoded = query_string(params or {}, **changes)
    return f"{url}?{encoded}" if encoded else url


def search_params(params: Mapping) -> Dict[str, str]:
    """The search parameters present in params, in canonical order."""
    return {name: params[name] for name in SEARCH_PARAMS if params.get(name)}


def filter_vehicles(vehicles: Iterable, criteria: FilterCriteria) -> List:
    return [vehicle for vehicle in vehicles if criteria.matches(vehicle)]


def filter_options(vehicles: Iterable) -> Dict[str, list]:
    """Option lists for the filter selects, taken from the unfiltered collection."""
    vehicles = list(vehicles)
    fuels = []
    for vehicle in vehicles:
        if vehicle.fuel and vehicle.fuel not in fuels:
            fuels.append(vehicle.fuel)
    return {
        'fuel': fuels,
        'doors': sorted({v.doors for v in vehicles if v.doors is not None}),
        'make': sorted({v.make for v in vehicles if v.make}),
        'model': sorted({v.model for v in vehicles if v.model}),
        'color': sorted({v.color for v in vehicles if v.color}),
        'year': sorted({v.year for v in vehicles if v.year is not None}),
    }


def paginate(items, page: int, per_page: int = None):
    """Page object for a clamped page number; an empty list still has page 1 of 1."""
    per_page = per_page or settings.RENT_A_CAR['VEHICLES_PAGE_SIZE']
    paginator = Paginator(items, per_page, allow_empty_first_page=True)
    return paginator.get_page(max(1, page))


class VehicleSearchService:
    """Filter and page the catalogue for one vehicle-list request."""

    def __init__(self, vehicle_service=None):
        if vehicle_service is None:
            from .services import VehicleService
            vehicle_service = VehicleService()
        self.vehicle_service = vehicle_service

    def search(self, params: Mapping, per_page: int = None) -> Dict:
        """
        Run the list query for the given request parameters.

        Returns a dict with the page object, option lists, the parsed
        criteria and an error message (empty on success).
        """
        criteria = FilterCriteria.from_query(params)
        result = self.vehicle_service.fetch_all()
        if not result.ok:
            logger.error(f"Vehicle search failed: {result.error}")
            vehicles = []
            error = result.error or 'Failed to load cars'
        else:
            vehicles = result.data
            error = ''

        matches = filter_vehicles(vehicles, criteria)
        page_obj = paginate(matches, parse_page(params.get(PAGE_PARAM)), per_page)
        return {
            'page': page_obj,
            'options': filter_options(vehicles),
            'criteria': criteria,
            'total': len(matches),
            'error': error,
        }
