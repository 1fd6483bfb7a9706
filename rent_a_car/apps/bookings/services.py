"""
Client for the external reservations API.
"""

from typing import Dict
import logging

from django.conf import settings

from apps.core.api import ApiClient, ApiResult
from apps.payments.utils import mask_card_number
from .serializers import ReservationRecordSerializer
from .utils import calculate_rental_cost

logger = logging.getLogger(__name__)


class ReservationService(ApiClient):
    """Create, list and delete reservations."""

    def __init__(self, base_url: str = None, **kwargs):
        super().__init__(base_url or settings.RENT_A_CAR['API_BASE_URL'], **kwargs)

    def create(self, payload: Dict) -> ApiResult:
        result = self.request('POST', '/reservations', json=payload)
        if not result.ok:
            logger.error(f"Error creating reservation for user {payload.get('userId')}: {result.error}")
            return result

        record = result.data if isinstance(result.data, dict) else {}
        if 'id' not in record:
            logger.warning("Reservation created without a server-assigned id")
        logger.info(f"Reservation created: {record.get('id')} for user {payload.get('userId')}")
        return ApiResult.success(record)

    def list_for_user(self, user_id) -> ApiResult:
        """
        Reservations belonging to a user, soonest pickup first.

        The API may match userId loosely, so records are re-filtered on an
        exact match and malformed ones are dropped.
        """
        result = self.request('GET', '/reservations', params={'userId': user_id})
        if not result.ok:
            return result
        if not isinstance(result.data, list):
            return ApiResult.malformed('Reservations payload is not a list')

        reservations = []
        for record in result.data:
            if not isinstance(record, dict) or str(record.get('userId')) != str(user_id):
                continue
            serializer = ReservationRecordSerializer(data=record)
            if not serializer.is_valid():
                logger.warning(f"Skipping malformed reservation {record.get('id')}: {serializer.errors}")
                continue
            reservations.append(self._summarize(serializer.validated_data))

        reservations.sort(key=lambda r: r['pickup'])
        return ApiResult.success(reservations)

    @staticmethod
    def _summarize(data: Dict) -> Dict:
        total_days, total_cost = calculate_rental_cost(
            data['pickup'], data['return'], data['dailyRate']
        )
        return {
            'id': data['id'],
            'vehicle': data['vehicle'],
            'year': data.get('year'),
            'color': data.get('color', ''),
            'daily_rate': data['dailyRate'],
            'pickup': data['pickup'],
            'dropoff': data['return'],
            'created_at': data.get('createdAt'),
            'card': mask_card_number(data.get('cardNumber', '')),
            'total_days': total_days,
            'total_cost': total_cost,
        }

    def delete(self, reservation_id) -> ApiResult:
        result = self.request('DELETE', f"/reservations/{reservation_id}")
        if result.ok:
            logger.info(f"Reservation deleted: {reservation_id}")
        return result
