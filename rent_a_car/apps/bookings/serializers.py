"""
Serializers for reservation records and the live price quote.
"""

from django.utils.translation import gettext_lazy as _
from rest_framework import serializers


class ReservationRecordSerializer(serializers.Serializer):
    """A reservation as stored by the external reservations API."""
    id = serializers.CharField()
    createdAt = serializers.DateTimeField(required=False, allow_null=True)
    vehicle = serializers.CharField(allow_blank=True)
    year = serializers.IntegerField(required=False, allow_null=True)
    color = serializers.CharField(required=False, allow_blank=True, default='')
    dailyRate = serializers.DecimalField(max_digits=12, decimal_places=2)
    pickup = serializers.DateTimeField()
    cardNumber = serializers.CharField(required=False, allow_blank=True, default='')
    userId = serializers.CharField()

    def get_fields(self):
        fields = super().get_fields()
        # "return" is a keyword, so it cannot be declared as a class attribute
        fields['return'] = serializers.DateTimeField()
        return fields

    def validate(self, attrs):
        if attrs['return'] <= attrs['pickup']:
            raise serializers.ValidationError(_('Return must be after pickup.'))
        return attrs


class QuoteRequestSerializer(serializers.Serializer):
    pickup_date = serializers.DateField(required=False, allow_null=True)
    dropoff_date = serializers.DateField(required=False, allow_null=True)
