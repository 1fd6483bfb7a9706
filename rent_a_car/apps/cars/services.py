"""
Vehicle catalogue backed by the external cars source.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Mapping, Optional
import logging
import re

from django.conf import settings
from django.core.cache import cache

from apps.core.api import ApiClient, ApiResult, ApiStatus
from .serializers import VehicleRecordSerializer

logger = logging.getLogger(__name__)

DEFAULT_DAILY_RATE = Decimal('45')
CATALOGUE_CACHE_KEY = 'cars:catalogue'


def parse_price(raw) -> Decimal:
    """Turn a currency-formatted string such as "$1,234.50" into a daily rate."""
    digits = re.sub(r'[^0-9.]', '', str(raw or ''))
    try:
        value = Decimal(digits)
    except InvalidOperation:
        return DEFAULT_DAILY_RATE
    return value if value else DEFAULT_DAILY_RATE


@dataclass(frozen=True)
class Vehicle:
    """Read-only view of a car offered for rent."""
    id: int
    name: str
    make: str
    model: str
    color: str
    year: Optional[int]
    vin: str
    price: Decimal
    availability: bool
    seats: int
    doors: int
    fuel: str

    @classmethod
    def from_record(cls, data: Mapping) -> 'Vehicle':
        vehicle_id = data['id']
        return cls(
            id=vehicle_id,
            name=data.get('car', ''),
            make=data.get('car_make', ''),
            model=data.get('car_model', ''),
            color=data.get('car_color', ''),
            year=data.get('car_model_year'),
            vin=data.get('car_vin', ''),
            price=parse_price(data.get('price')),
            availability=bool(data.get('availability')),
            seats=data.get('seats') or 4 + vehicle_id % 2,
            doors=data.get('doors') or 3 + vehicle_id % 2,
            fuel=data.get('fuel') or ('Petrol' if vehicle_id % 2 == 0 else 'Diesel'),
        )

    @property
    def descriptor(self) -> str:
        """Vehicle description stored on reservations."""
        return f"{self.model} {self.name}".strip()

    @property
    def image_url(self) -> str:
        keyword = (self.model or self.name or 'car').lower().replace(' ', '')
        return f"https://loremflickr.com/800/400/car,{keyword}/all?lock={self.id}"


class VehicleService(ApiClient):
    """Fetch and cache the full vehicle collection."""

    def __init__(self, source_url: str = None, cache_timeout: int = None, **kwargs):
        config = settings.RENT_A_CAR
        super().__init__(source_url or config['CARS_SOURCE_URL'], **kwargs)
        if cache_timeout is None:
            cache_timeout = config['CARS_CACHE_TIMEOUT']
        self.cache_timeout = cache_timeout

    def fetch_all(self) -> ApiResult:
        vehicles = cache.get(CATALOGUE_CACHE_KEY)
        if vehicles is not None:
            return ApiResult.success(vehicles)

        result = self.request('GET')
        if not result.ok:
            logger.error(f"Failed to load cars: {result.error}")
            if result.status == ApiStatus.NOT_FOUND:
                # A missing collection is a source failure, not a missing vehicle
                return ApiResult.failure(result.error or 'Failed to load cars')
            return result

        records = result.data
        if isinstance(records, dict):
            records = records.get('cars')
        if not isinstance(records, list):
            logger.error("Cars payload missing or not a list")
            return ApiResult.malformed('Cars payload missing')

        vehicles = self.parse_records(records)
        cache.set(CATALOGUE_CACHE_KEY, vehicles, self.cache_timeout)
        logger.info(f"Loaded {len(vehicles)} vehicles from the cars source")
        return ApiResult.success(vehicles)

    @staticmethod
    def parse_records(records: List[Dict]) -> List[Vehicle]:
        vehicles = []
        for record in records:
            serializer = VehicleRecordSerializer(data=record)
            if not serializer.is_valid():
                logger.warning(f"Skipping malformed vehicle record: {serializer.errors}")
                continue
            vehicles.append(Vehicle.from_record(serializer.validated_data))
        return vehicles

    def get(self, vehicle_id) -> ApiResult:
        result = self.fetch_all()
        if not result.ok:
            return result

        for vehicle in result.data:
            if vehicle.id == int(vehicle_id):
                return ApiResult.success(vehicle)
        return ApiResult.not_found(f"Vehicle {vehicle_id} not found")
