"""
Serializers validating vehicle records coming from the cars source.
"""

from rest_framework import serializers


class VehicleRecordSerializer(serializers.Serializer):
    """One record of the external cars payload."""
    id = serializers.IntegerField()
    car = serializers.CharField(default='', allow_blank=True)
    car_make = serializers.CharField(default='', allow_blank=True)
    car_model = serializers.CharField(default='', allow_blank=True)
    car_color = serializers.CharField(default='', allow_blank=True)
    car_model_year = serializers.IntegerField(default=None, allow_null=True)
    car_vin = serializers.CharField(default='', allow_blank=True)
    price = serializers.CharField(default='', allow_blank=True)
    availability = serializers.BooleanField(default=False)

    # Optional attributes some sources provide directly
    seats = serializers.IntegerField(required=False, min_value=1)
    doors = serializers.IntegerField(required=False, min_value=1)
    fuel = serializers.CharField(required=False, allow_blank=False)
